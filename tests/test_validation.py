import pytest

from models import (
    Choice,
    MCQQuestion,
    Section,
    TableColumn,
    TableQuestion,
    TextQuestion,
)
from registry import FormDocument
from validation import is_question_valid, validate_form


@pytest.mark.parametrize(
    ("answer", "expected"),
    [("", False), ("ab", False), ("abc", True), ("abcde", True), ("abcdef", False)],
)
def test_text_length_bounds_are_inclusive(answer: str, expected: bool) -> None:
    question = TextQuestion(id="t", min_length=3, max_length=5)
    assert is_question_valid(question, answer) is expected


def test_text_requires_a_string() -> None:
    question = TextQuestion(id="t")
    assert is_question_valid(question, "x")
    assert not is_question_valid(question, None)
    assert not is_question_valid(question, 3)


def test_mcq_requires_selected_choice() -> None:
    question = MCQQuestion(id="m", choices=[Choice("yes"), Choice("no")])
    assert is_question_valid(question, 0)
    assert is_question_valid(question, 1)
    assert not is_question_valid(question, None)
    assert not is_question_valid(question, 2)
    assert not is_question_valid(question, True)
    assert not is_question_valid(question, "yes")


def test_table_requires_every_cell() -> None:
    question = TableQuestion(
        id="tbl",
        columns=[
            TableColumn(id="name", kind="text", header="Name"),
            TableColumn(id="size", kind="mcq", header="Size", choices=["S", "M"]),
        ],
    )
    assert is_question_valid(question, {"name": "Ann", "size": 1})
    assert not is_question_valid(question, {"name": "", "size": 1})
    assert not is_question_valid(question, {"name": "Ann"})
    assert not is_question_valid(question, {"name": "Ann", "size": 5})
    assert not is_question_valid(question, None)


def test_validate_form_collects_problems() -> None:
    document = FormDocument()
    document.add_question(MCQQuestion(id="m", choices=[Choice("a", "ghost")]))
    document.add_question(MCQQuestion(id="empty"))
    document.add_question(TextQuestion(id="t", min_length=5, max_length=2))
    document.add_section(
        Section(
            id="s1",
            content=[TableQuestion(id="tbl", columns=[TableColumn(id="c", kind="mcq")])],
        )
    )
    problems = validate_form(document, "  ")
    assert problems == [
        "Form title is required",
        "Question 1: choice 1 branches to a missing question",
        "Question 2: at least one choice is required",
        "Question 3: minimum length exceeds maximum length",
        "Question 4: column c has no choices",
    ]


def test_validate_form_accepts_complete_form() -> None:
    document = FormDocument()
    document.add_question(MCQQuestion(id="m", choices=[Choice("a", "t")]))
    document.add_question(TextQuestion(id="t"))
    assert validate_form(document, "Survey") == []
    assert validate_form(FormDocument(), "Survey") == ["Form has no questions"]

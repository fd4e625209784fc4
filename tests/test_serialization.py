import pytest

from models import (
    ROOT_CONTAINER_ID,
    Choice,
    MCQQuestion,
    Section,
    TableColumn,
    TableQuestion,
    TextQuestion,
)
from registry import FormDocument
from serialization import parse_form, serialize_answers, serialize_form


def _document() -> FormDocument:
    document = FormDocument()
    document.add_question(
        MCQQuestion(
            id="A",
            prompt="Do you drive?",
            choices=[Choice("yes", "C"), Choice("no", "gone")],
        )
    )
    document.add_section(
        Section(
            id="s1",
            header="Details",
            content=[
                TextQuestion(id="B", prompt="Name", min_length=1, max_length=20),
                TableQuestion(
                    id="T",
                    prompt="Cars",
                    columns=[
                        TableColumn(id="make", kind="text", header="Make"),
                        TableColumn(id="fuel", kind="mcq", header="Fuel", choices=["Petrol", "Electric"]),
                    ],
                ),
            ],
        )
    )
    document.add_question(TextQuestion(id="C", prompt="Comments"))
    return document


def test_serialize_form_shape() -> None:
    payload = serialize_form(_document(), "Survey")
    assert payload["formName"] == "Survey"
    assert payload["branching"] is True
    assert [record["clientId"] for record in payload["questions"]] == ["A", "B", "T", "C"]

    mcq = payload["questions"][0]
    assert mcq == {
        "clientId": "A",
        "questionType": "mcq",
        "questionText": "Do you drive?",
        "choices": [
            {"text": "yes", "nextQuestionId": "C"},
            {"text": "no", "nextQuestionId": None},
        ],
    }
    assert payload["questions"][1]["minLength"] == 1
    assert payload["questions"][2]["columns"] == [
        {"clientId": "make", "header": "Make", "type": "text"},
        {"clientId": "fuel", "header": "Fuel", "type": "mcq", "choices": ["Petrol", "Electric"]},
    ]
    assert payload["sections"] == [
        {"clientId": "s1", "header": "Details", "index": 1, "questionIds": ["B", "T"]}
    ]


def test_parse_form_restores_layout() -> None:
    payload = serialize_form(_document(), "Survey")
    document = parse_form(payload)
    assert [entry.id for entry in document.container(ROOT_CONTAINER_ID)] == ["A", "s1", "C"]
    assert [entry.id for entry in document.container("s1")] == ["B", "T"]
    assert document.get_question("A").choices[0] == Choice("yes", "C")
    assert document.get_question("T").columns[1].choices == ["Petrol", "Electric"]


def test_parse_form_rejects_unknown_type() -> None:
    with pytest.raises(ValueError):
        parse_form({"questions": [{"clientId": "x", "questionType": "essay"}]})


def test_serialize_answers_by_kind() -> None:
    questions = _document().questions()
    answers = {
        "A": 0,
        "B": "Ann",
        "T": {"make": "Volvo", "fuel": 1},
        "C": 99,
    }
    assert serialize_answers(questions, answers) == [
        {"questionId": "A", "choiceText": "yes"},
        {"questionId": "B", "text": "Ann"},
        {"questionId": "T", "tableData": {"make": "Volvo", "fuel": "Electric"}},
    ]


def test_serialize_answers_skips_boolean_choices() -> None:
    questions = _document().questions()
    answers = {"A": True, "T": {"make": "Saab", "fuel": True}}
    assert serialize_answers(questions, answers) == [
        {"questionId": "T", "tableData": {"make": "Saab"}},
    ]

"""Answer checks per question kind, plus pre-submission checks of a form."""
from __future__ import annotations

from typing import Callable

from models import (
    Answer,
    MCQQuestion,
    Question,
    TableColumn,
    TableQuestion,
    TextQuestion,
)
from registry import FormDocument


def is_choice_index(value: object, choice_count: int) -> bool:
    # bool is an int subclass; True is not a selection
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value < choice_count
    )


def validate_text_question(question: TextQuestion, answer: Answer | None) -> bool:
    if not isinstance(answer, str) or not answer:
        return False
    if question.min_length is not None and len(answer) < question.min_length:
        return False
    if question.max_length is not None and len(answer) > question.max_length:
        return False
    return True


def validate_mcq_question(question: MCQQuestion, answer: Answer | None) -> bool:
    return is_choice_index(answer, len(question.choices))


def _validate_cell(column: TableColumn, cell: object) -> bool:
    if column.kind == "mcq":
        return is_choice_index(cell, len(column.choices))
    return isinstance(cell, str) and bool(cell)


def validate_table_question(question: TableQuestion, answer: Answer | None) -> bool:
    if not isinstance(answer, dict):
        return False
    return all(
        _validate_cell(column, answer.get(column.id)) for column in question.columns
    )


_VALIDATORS: dict[str, Callable[..., bool]] = {
    "text": validate_text_question,
    "mcq": validate_mcq_question,
    "table": validate_table_question,
}


def is_question_valid(question: Question, answer: Answer | None) -> bool:
    """True when `answer` is an acceptable answer to `question`."""
    validator = _VALIDATORS.get(question.kind)
    if validator is None:
        return False
    return validator(question, answer)


def validate_form(document: FormDocument, title: str) -> list[str]:
    """
    Collect authoring problems that block submitting the form.

    An empty list means the form can be submitted.
    """
    problems: list[str] = []
    if not title or not title.strip():
        problems.append("Form title is required")

    questions = document.questions()
    if not questions:
        problems.append("Form has no questions")

    for position, question in enumerate(questions, start=1):
        label = f"Question {position}"
        if isinstance(question, TextQuestion):
            if (
                question.min_length is not None
                and question.max_length is not None
                and question.min_length > question.max_length
            ):
                problems.append(f"{label}: minimum length exceeds maximum length")
        elif isinstance(question, MCQQuestion):
            if not question.choices:
                problems.append(f"{label}: at least one choice is required")
            for choice_index, choice in enumerate(question.choices, start=1):
                if choice.target_id is None:
                    continue
                if document.get_question(choice.target_id) is None:
                    problems.append(
                        f"{label}: choice {choice_index} branches to a missing question"
                    )
                elif choice.target_id == question.id:
                    problems.append(
                        f"{label}: choice {choice_index} branches to its own question"
                    )
        elif isinstance(question, TableQuestion):
            if not question.columns:
                problems.append(f"{label}: at least one column is required")
            for column in question.columns:
                if column.kind == "mcq" and not column.choices:
                    header = column.header or column.id
                    problems.append(f"{label}: column {header} has no choices")
    return problems

from __future__ import annotations

from typing import Any, Iterable, Mapping

from models import (
    Answer,
    Choice,
    MCQQuestion,
    Question,
    QUESTION_KINDS,
    Section,
    TableColumn,
    TableQuestion,
    TextQuestion,
)
from registry import FormDocument
from validation import is_choice_index


def _serialize_choices(
    question: MCQQuestion, known_ids: set[str]
) -> list[dict[str, Any]]:
    return [
        {
            "text": choice.text,
            "nextQuestionId": (
                choice.target_id
                if choice.target_id in known_ids and choice.target_id != question.id
                else None
            ),
        }
        for choice in question.choices
    ]


def _serialize_columns(question: TableQuestion) -> list[dict[str, Any]]:
    columns = []
    for column in question.columns:
        record: dict[str, Any] = {
            "clientId": column.id,
            "header": column.header,
            "type": column.kind,
        }
        if column.kind == "mcq":
            record["choices"] = list(column.choices)
        columns.append(record)
    return columns


def serialize_question(question: Question, known_ids: set[str]) -> dict[str, Any]:
    record: dict[str, Any] = {
        "clientId": question.id,
        "questionType": question.kind,
        "questionText": question.prompt,
    }
    if isinstance(question, TextQuestion):
        record["minLength"] = question.min_length
        record["maxLength"] = question.max_length
    elif isinstance(question, MCQQuestion):
        record["choices"] = _serialize_choices(question, known_ids)
    elif isinstance(question, TableQuestion):
        record["columns"] = _serialize_columns(question)
    return record


def serialize_form(document: FormDocument, title: str) -> dict[str, Any]:
    questions = document.questions()
    known_ids = {question.id for question in questions}
    records = [serialize_question(question, known_ids) for question in questions]
    branching = any(
        choice.get("nextQuestionId")
        for record in records
        for choice in record.get("choices", [])
    )
    sections = [
        {
            "clientId": section.id,
            "header": section.header,
            "index": document.locate(section.id).index,
            "questionIds": [question.id for question in section.content],
        }
        for section in document.sections()
    ]
    return {
        "formName": title,
        "branching": branching,
        "questions": records,
        "sections": sections,
    }


def _parse_question(record: Mapping[str, Any]) -> Question:
    kind = record.get("questionType")
    if kind not in QUESTION_KINDS:
        raise ValueError(f"Unknown question type: {kind!r}")
    question_id = str(record.get("clientId") or "")
    prompt = str(record.get("questionText") or "")
    if kind == "text":
        return TextQuestion(
            id=question_id,
            prompt=prompt,
            min_length=record.get("minLength"),
            max_length=record.get("maxLength"),
        )
    if kind == "mcq":
        return MCQQuestion(
            id=question_id,
            prompt=prompt,
            choices=[
                Choice(str(choice.get("text", "")), choice.get("nextQuestionId"))
                for choice in record.get("choices") or []
            ],
        )
    return TableQuestion(
        id=question_id,
        prompt=prompt,
        columns=[
            TableColumn(
                id=str(column.get("clientId") or f"column-{position}"),
                kind=column.get("type", "text"),
                header=str(column.get("header", "")),
                choices=[str(choice) for choice in column.get("choices") or []],
            )
            for position, column in enumerate(record.get("columns") or [], start=1)
        ],
    )


def parse_form(payload: Mapping[str, Any]) -> FormDocument:
    """Rebuild a document from the shape produced by `serialize_form`."""
    document = FormDocument()
    sections_payload = payload.get("sections") or []
    owner: dict[str, str] = {}
    sections: list[tuple[int, Section]] = []
    for position, record in enumerate(sections_payload):
        section = Section(id=str(record.get("clientId") or ""), header=str(record.get("header", "")))
        sections.append((int(record.get("index", position)), section))
        for question_id in record.get("questionIds") or []:
            owner[str(question_id)] = section.id

    by_section: dict[str, list[Question]] = {}
    root_questions: list[Question] = []
    for record in payload.get("questions") or []:
        question = _parse_question(record)
        if question.id in owner:
            by_section.setdefault(owner[question.id], []).append(question)
        else:
            root_questions.append(question)

    for question in root_questions:
        document.add_question(question)
    for index, section in sorted(sections, key=lambda item: item[0]):
        section.content = by_section.get(section.id, [])
        document.add_section(section, index)
    return document


def _answer_record(question: Question, answer: Answer) -> dict[str, Any] | None:
    if isinstance(question, TextQuestion):
        if not isinstance(answer, str):
            return None
        return {"questionId": question.id, "text": answer}
    if isinstance(question, MCQQuestion):
        if not is_choice_index(answer, len(question.choices)):
            return None
        return {"questionId": question.id, "choiceText": question.choices[answer].text}
    if isinstance(question, TableQuestion):
        if not isinstance(answer, dict):
            return None
        table_data: dict[str, str] = {}
        for column in question.columns:
            cell = answer.get(column.id)
            if column.kind == "mcq":
                if is_choice_index(cell, len(column.choices)):
                    table_data[column.id] = column.choices[cell]
            elif isinstance(cell, str):
                table_data[column.id] = cell
        return {"questionId": question.id, "tableData": table_data}
    return None


def serialize_answers(
    questions: Iterable[Question],
    answers: Mapping[str, Answer],
) -> list[dict[str, Any]]:
    """Answer records for `questions`, skipping unanswered ones."""
    records = []
    for question in questions:
        if question.id not in answers:
            continue
        record = _answer_record(question, answers[question.id])
        if record is not None:
            records.append(record)
    return records

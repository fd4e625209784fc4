"""Pydantic models for authored forms and collected answers."""
from typing import Literal

from pydantic import BaseModel, Field


class ChoiceRecord(BaseModel):
    """One choice of a multiple choice question."""

    text: str = ""
    nextQuestionId: str | None = None


class ColumnRecord(BaseModel):
    """One column of a table question."""

    clientId: str | None = None
    header: str = ""
    type: Literal["text", "mcq"] = "text"
    choices: list[str] | None = None


class QuestionRecord(BaseModel):
    """Question as sent by the form builder."""

    clientId: str = Field(..., min_length=1)
    questionType: Literal["text", "mcq", "table"]
    questionText: str = ""
    minLength: int | None = Field(default=None, ge=0)
    maxLength: int | None = Field(default=None, ge=0)
    choices: list[ChoiceRecord] | None = None
    columns: list[ColumnRecord] | None = None


class SectionRecord(BaseModel):
    """Grouping of questions inside the form."""

    clientId: str = Field(..., min_length=1)
    header: str = ""
    index: int = Field(default=0, ge=0)
    questionIds: list[str] = Field(default_factory=list)


class FormPayload(BaseModel):
    """Model for submitting an authored form."""

    formName: str
    branching: bool = False
    questions: list[QuestionRecord]
    sections: list[SectionRecord] = Field(default_factory=list)


class FormSavedResponse(BaseModel):
    """Response after a form was stored."""

    message: str
    formId: str


class AnswerRecord(BaseModel):
    """Answer to one question; exactly one value field is set."""

    questionId: str = Field(..., min_length=1)
    text: str | None = None
    choiceText: str | None = None
    tableData: dict[str, str] | None = None


class ResponseSubmission(BaseModel):
    """Model for submitting a respondent's answers."""

    answers: list[AnswerRecord]


class ResponseSavedResponse(BaseModel):
    """Response after answers were stored."""

    message: str
    formId: str
    responseId: str

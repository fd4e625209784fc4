"""Pydantic models."""
from api.models.builders import (
    AnswerInput,
    AnswersSubmit,
    BranchUpdate,
    BuilderCreate,
    BuilderTitle,
    DragStart,
    DragTarget,
    QuestionCreate,
    QuestionEdit,
    SectionCreate,
    SectionEdit,
)
from api.models.forms import (
    AnswerRecord,
    ChoiceRecord,
    ColumnRecord,
    FormPayload,
    FormSavedResponse,
    QuestionRecord,
    ResponseSavedResponse,
    ResponseSubmission,
    SectionRecord,
)

__all__ = [
    "AnswerInput",
    "AnswerRecord",
    "AnswersSubmit",
    "BranchUpdate",
    "BuilderCreate",
    "BuilderTitle",
    "ChoiceRecord",
    "ColumnRecord",
    "DragStart",
    "DragTarget",
    "FormPayload",
    "FormSavedResponse",
    "QuestionCreate",
    "QuestionEdit",
    "QuestionRecord",
    "ResponseSavedResponse",
    "ResponseSubmission",
    "SectionCreate",
    "SectionEdit",
    "SectionRecord",
]

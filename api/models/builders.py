"""Pydantic models for in-memory builder sessions."""
from typing import Literal

from pydantic import BaseModel, Field

from api.models.forms import ChoiceRecord, ColumnRecord, FormPayload
from models import ROOT_CONTAINER_ID


class BuilderCreate(BaseModel):
    """Start a builder, optionally from an existing form."""

    title: str = ""
    form: FormPayload | None = None


class BuilderTitle(BaseModel):
    """Rename the form."""

    title: str


class QuestionCreate(BaseModel):
    """Explicitly add a question without dragging."""

    kind: Literal["text", "mcq", "table"]
    containerId: str = ROOT_CONTAINER_ID
    index: int | None = Field(default=None, ge=0)


class QuestionEdit(BaseModel):
    """Authoring edits to a question; unset fields are left alone."""

    questionText: str | None = None
    minLength: int | None = Field(default=None, ge=0)
    maxLength: int | None = Field(default=None, ge=0)
    choices: list[ChoiceRecord] | None = None
    columns: list[ColumnRecord] | None = None


class SectionCreate(BaseModel):
    """Explicitly add a section."""

    header: str = ""
    index: int | None = Field(default=None, ge=0)


class SectionEdit(BaseModel):
    """Rename a section."""

    header: str


class BranchUpdate(BaseModel):
    """Point a choice at a question, or clear it with targetId null."""

    choiceIndex: int = Field(..., ge=0)
    targetId: str | None = None


class DragStart(BaseModel):
    """Drag start event."""

    activeId: str = Field(..., min_length=1)


class DragTarget(BaseModel):
    """Drag over / drag end event."""

    overId: str | None = None


class AnswerInput(BaseModel):
    """Answer typed or selected in preview mode."""

    questionId: str = Field(..., min_length=1)
    value: int | str | dict[str, int | str]


class AnswersSubmit(BaseModel):
    """Send the preview answers to a stored form."""

    formId: str = Field(..., min_length=1)

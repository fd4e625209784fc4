"""In-memory registry of builder sessions."""
import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import HTTPException

from api.config import MAX_BUILDERS, OPTIMISTIC_REORDER
from builder import FormBuilder
from errors import FormBuilderError, FormValidationError
from models import Choice, TableColumn
from navigation import PreviewSession
from registry import FormDocument
from serialization import serialize_question

logger = logging.getLogger(__name__)


class BuilderStore:
    """
    Keeps live FormBuilder instances by id.

    Each builder has its own lock so handlers for one form never overlap.
    """

    def __init__(self, max_builders: int = MAX_BUILDERS) -> None:
        self.max_builders = max_builders
        self._lock = threading.Lock()
        self._builders: dict[str, tuple[FormBuilder, threading.Lock]] = {}

    def __len__(self) -> int:
        return len(self._builders)

    def create(self, builder: FormBuilder) -> str:
        builder_id = uuid.uuid4().hex
        with self._lock:
            while len(self._builders) >= max(self.max_builders, 1):
                evicted = next(iter(self._builders))
                del self._builders[evicted]
                logger.info(f"Evicted builder {evicted}")
            self._builders[builder_id] = (builder, threading.Lock())
        return builder_id

    def delete(self, builder_id: str) -> None:
        with self._lock:
            if self._builders.pop(builder_id, None) is None:
                raise HTTPException(status_code=404, detail="Builder not found")

    @contextmanager
    def open(self, builder_id: str) -> Iterator[FormBuilder]:
        """Yield the builder under its lock, mapping core errors to HTTP errors."""
        with self._lock:
            entry = self._builders.get(builder_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="Builder not found")
        builder, lock = entry
        with lock:
            try:
                yield builder
            except FormValidationError as exc:
                raise HTTPException(
                    status_code=exc.status_code,
                    detail={"error": exc.message, "problems": exc.problems},
                ) from exc
            except FormBuilderError as exc:
                raise HTTPException(status_code=exc.status_code, detail=exc.message) from exc
            except ValueError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc


store = BuilderStore()


def new_builder(title: str = "", document: FormDocument | None = None) -> FormBuilder:
    return FormBuilder(document, title=title, optimistic=OPTIMISTIC_REORDER)


def question_changes(edit: dict[str, Any]) -> dict[str, object]:
    """Translate a QuestionEdit body into FormDocument.edit_question fields."""
    changes: dict[str, object] = {}
    if "questionText" in edit:
        changes["prompt"] = edit["questionText"] or ""
    if "minLength" in edit:
        changes["min_length"] = edit["minLength"]
    if "maxLength" in edit:
        changes["max_length"] = edit["maxLength"]
    if edit.get("choices") is not None:
        changes["choices"] = [
            Choice(choice.get("text", ""), choice.get("nextQuestionId"))
            for choice in edit["choices"]
        ]
    if edit.get("columns") is not None:
        changes["columns"] = [
            TableColumn(
                id=column.get("clientId") or f"column-{position}",
                kind=column.get("type", "text"),
                header=column.get("header", ""),
                choices=list(column.get("choices") or []),
            )
            for position, column in enumerate(edit["columns"], start=1)
        ]
    return changes


def builder_state(builder: FormBuilder) -> dict[str, Any]:
    return {
        "mode": builder.mode.value,
        "form": builder.form_payload(),
        "problems": builder.problems(),
        "preview": preview_state(builder.preview) if builder.preview else None,
    }


def preview_state(preview: PreviewSession) -> dict[str, Any]:
    question = preview.current_question
    known_ids = {item.id for item in preview.questions}
    return {
        "currentIndex": preview.current_index,
        "currentQuestion": serialize_question(question, known_ids) if question else None,
        "history": preview.history,
        "pendingNextId": preview.state.pending_next_id,
        "canAdvance": preview.can_advance,
        "canRetreat": preview.can_retreat,
        "canSubmit": preview.can_submit,
        "questionCount": len(preview.questions),
    }

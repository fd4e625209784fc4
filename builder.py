"""Editing/previewing facade over one form document."""
from __future__ import annotations

import enum
import logging
from typing import Any, Protocol

from branching import BranchingGraph
from drag_session import NOOP, DragController, DropResult
from errors import FormBuilderError, FormValidationError, PreviewModeError
from models import ROOT_CONTAINER_ID, Answer, Entry, Placement, Question, Section
from navigation import PreviewSession
from palette import Palette
from registry import FormDocument
from serialization import serialize_answers, serialize_form
from validation import validate_form

log = logging.getLogger(__name__)


class BuilderMode(str, enum.Enum):
    EDITING = "editing"
    PREVIEWING = "previewing"


class FormSink(Protocol):
    """Destination for submitted forms and collected answers."""

    def submit_form(self, payload: dict[str, Any]) -> str: ...

    def submit_answers(self, form_id: str, answers: list[dict[str, Any]]) -> str: ...


class FormBuilder:
    """
    One author's form: the document, its palette and drag controller,
    and the preview session while previewing.
    """

    def __init__(
        self,
        document: FormDocument | None = None,
        title: str = "",
        palette: Palette | None = None,
        optimistic: bool = False,
    ) -> None:
        self.document = document if document is not None else FormDocument()
        self.title = title
        self.palette = palette if palette is not None else Palette()
        self.drag = DragController(self.document, self.palette, optimistic=optimistic)
        self.preview: PreviewSession | None = None

    @property
    def mode(self) -> BuilderMode:
        if self.preview is None:
            return BuilderMode.EDITING
        return BuilderMode.PREVIEWING

    # -- authoring ---------------------------------------------------------

    def _require_editing(self) -> None:
        if self.preview is not None:
            raise PreviewModeError("Form is in preview mode")

    def add_question(
        self,
        kind: str,
        container_id: str = ROOT_CONTAINER_ID,
        index: int | None = None,
    ) -> Question:
        self._require_editing()
        template = self.palette.get(f"{self.palette.id}-{kind}")
        prototype = template.prototype if template is not None else None
        return self.document.create_question(kind, container_id, index, prototype)

    def add_section(self, index: int | None = None, header: str = "") -> Section:
        self._require_editing()
        return self.document.create_section(index, header)

    def edit_question(self, question_id: str, **changes: object) -> Question:
        self._require_editing()
        return self.document.edit_question(question_id, **changes)

    def rename_section(self, section_id: str, header: str) -> Section:
        self._require_editing()
        return self.document.rename_section(section_id, header)

    def remove(self, item_id: str) -> Entry | None:
        self._require_editing()
        return self.document.remove(item_id)

    def graph(self) -> BranchingGraph:
        return BranchingGraph(self.document.questions())

    def set_branch(self, question_id: str, choice_index: int, target_id: str | None) -> None:
        self._require_editing()
        graph = self.graph()
        if target_id is None:
            graph.clear_edge(question_id, choice_index)
        else:
            graph.set_edge(question_id, choice_index, target_id)

    # -- drag gestures -----------------------------------------------------

    def drag_start(self, dragged_id: str) -> bool:
        if self.preview is not None:
            return False
        return self.drag.start(dragged_id) is not None

    def drag_over(self, hover_id: str | None) -> Placement | None:
        if self.preview is not None:
            return None
        return self.drag.over(hover_id)

    def drag_end(self, over_id: str | None) -> DropResult:
        if self.preview is not None:
            self.drag.cancel()
            return NOOP
        return self.drag.end(over_id)

    # -- preview -----------------------------------------------------------

    def enter_preview(self) -> PreviewSession:
        self.drag.cancel()
        self.preview = PreviewSession(self.document.questions())
        log.debug("Preview started with %d questions", len(self.preview.questions))
        return self.preview

    def exit_preview(self) -> None:
        self.preview = None

    def toggle_preview(self) -> BuilderMode:
        if self.preview is None:
            self.enter_preview()
        else:
            self.exit_preview()
        return self.mode

    def require_preview(self) -> PreviewSession:
        if self.preview is None:
            raise FormBuilderError("Form is not in preview mode")
        return self.preview

    def answer(self, question_id: str, value: Answer) -> bool:
        return self.require_preview().answer(question_id, value)

    def next(self) -> bool:
        return self.require_preview().next()

    def previous(self) -> bool:
        return self.require_preview().previous()

    # -- submission --------------------------------------------------------

    def problems(self) -> list[str]:
        return validate_form(self.document, self.title)

    def form_payload(self) -> dict[str, Any]:
        return serialize_form(self.document, self.title)

    def answers_payload(self) -> list[dict[str, Any]]:
        preview = self.require_preview()
        return serialize_answers(preview.visited_path(), preview.answers)

    def submit(self, sink: FormSink) -> str:
        problems = self.problems()
        if problems:
            raise FormValidationError(problems)
        form_id = sink.submit_form(self.form_payload())
        log.info("Submitted form %s", form_id)
        return form_id

    def submit_answers(self, sink: FormSink, form_id: str) -> str:
        preview = self.require_preview()
        if not preview.can_submit:
            raise FormBuilderError("Preview is not at a submittable question")
        return sink.submit_answers(form_id, self.answers_payload())

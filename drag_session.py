"""Drag gesture lifecycle: start, hover updates, drop."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from models import SECTION_KIND, DragKind, DragSession, Placement
from palette import Palette
from placement import PlacementResolver
from registry import FormDocument

log = logging.getLogger(__name__)


class DropAction(str, enum.Enum):
    INSERTED = "inserted"
    MOVED = "moved"
    DELETED = "deleted"
    NOOP = "noop"


@dataclass(frozen=True)
class DropResult:
    action: DropAction
    item_id: str | None = None

    @property
    def changed(self) -> bool:
        return self.action is not DropAction.NOOP


NOOP = DropResult(DropAction.NOOP)


class DragController:
    """
    Owns at most one drag session and turns its drop into one mutation.

    Hover updates only record feedback (unless `optimistic` is set and
    the pointer stays inside the dragged entry's own container); the drop
    target is always resolved again from the end event.
    """

    def __init__(
        self,
        document: FormDocument,
        palette: Palette,
        optimistic: bool = False,
    ) -> None:
        self.document = document
        self.palette = palette
        self.resolver = PlacementResolver(document, palette)
        self.optimistic = optimistic
        self.session: DragSession | None = None

    @property
    def active(self) -> bool:
        return self.session is not None

    def start(self, dragged_id: str) -> DragSession | None:
        if self.session is not None:
            log.warning(
                "Drag of %s started while %s was still active",
                dragged_id, self.session.dragged_id,
            )
            self.session = None

        if self.document.is_section(dragged_id):
            kind = DragKind.SECTION
        elif dragged_id in self.document:
            kind = DragKind.ITEM
        elif self.palette.get(dragged_id) is not None:
            kind = DragKind.TEMPLATE
        else:
            log.debug("Ignoring drag of unknown id %s", dragged_id)
            return None

        self.session = DragSession(
            dragged_id=dragged_id,
            dragged_kind=kind,
            source=self.document.locate(dragged_id),
        )
        return self.session

    def over(self, hover_id: str | None) -> Placement | None:
        session = self.session
        if session is None:
            return None
        placement = self._target(session, hover_id)
        session.hover = placement
        if placement is not None and self.optimistic:
            self._reorder_in_place(session, placement)
        return placement

    def end(self, over_id: str | None) -> DropResult:
        session = self.session
        if session is None:
            return NOOP
        try:
            result = self._drop(session, self._target(session, over_id))
        finally:
            self.session = None
        log.debug("Drop of %s: %s", session.dragged_id, result.action.value)
        return result

    def cancel(self) -> None:
        self.session = None

    def _target(self, session: DragSession, hover_id: str | None) -> Placement | None:
        placement = self.resolver.resolve(hover_id)
        if placement is None:
            return None
        if session.dragged_kind is DragKind.SECTION or self._is_section_template(session):
            return self.resolver.anchor_to_root(placement)
        return placement

    def _is_section_template(self, session: DragSession) -> bool:
        if session.dragged_kind is not DragKind.TEMPLATE:
            return False
        template = self.palette.get(session.dragged_id)
        return template is not None and template.kind == SECTION_KIND

    def _reorder_in_place(self, session: DragSession, placement: Placement) -> None:
        if session.dragged_kind is DragKind.TEMPLATE or placement.is_delete:
            return
        current = self.document.locate(session.dragged_id)
        if current is None or current.container_id != placement.container_id:
            return
        self.document.move(session.dragged_id, placement.container_id, placement.index)

    def _drop(self, session: DragSession, placement: Placement | None) -> DropResult:
        if placement is None:
            return self._hover_outcome(session)

        if session.dragged_kind is DragKind.TEMPLATE:
            template = self.palette.get(session.dragged_id)
            if template is None or placement.is_delete:
                return NOOP
            if template.kind == SECTION_KIND:
                section = self.document.create_section(placement.index)
                return DropResult(DropAction.INSERTED, section.id)
            question = self.document.create_question(
                template.kind,
                placement.container_id,
                placement.index,
                prototype=template.prototype,
            )
            return DropResult(DropAction.INSERTED, question.id)

        if session.dragged_id not in self.document:
            return NOOP
        if placement.is_delete:
            self.document.remove(session.dragged_id)
            return DropResult(DropAction.DELETED, session.dragged_id)
        if self.document.move(session.dragged_id, placement.container_id, placement.index):
            return DropResult(DropAction.MOVED, session.dragged_id)
        return self._hover_outcome(session)

    def _hover_outcome(self, session: DragSession) -> DropResult:
        """Report a reorder already applied during hover, if any."""
        if session.dragged_kind is DragKind.TEMPLATE:
            return NOOP
        current = self.document.locate(session.dragged_id)
        if current is not None and session.source is not None and current != session.source:
            return DropResult(DropAction.MOVED, session.dragged_id)
        return NOOP

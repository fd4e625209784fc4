"""Turns a hovered id into a destination container and index."""
from __future__ import annotations

from models import (
    DELETE_PLACEMENT,
    END_SUFFIX,
    ROOT_CONTAINER_ID,
    START_SUFFIX,
    Placement,
)
from palette import Palette
from registry import FormDocument


class PlacementResolver:
    """
    Resolve drop targets against the current document.

    Hover ids share one namespace with container sentinels, so the
    checks run in a fixed order: question ids, then `<container>-start`
    and `<container>-end` sentinels, then section ids at top level, and
    finally the palette, which means delete.
    """

    def __init__(self, document: FormDocument, palette: Palette) -> None:
        self.document = document
        self.palette = palette

    def resolve(self, hover_id: str | None) -> Placement | None:
        if not hover_id:
            return None

        location = self.document.locate(hover_id)
        if location is not None and not self.document.is_section(hover_id):
            return Placement(location.container_id, location.index)

        boundary = self._resolve_boundary(hover_id)
        if boundary is not None:
            return boundary

        if location is not None:
            # a section, always a root entry
            return Placement(ROOT_CONTAINER_ID, location.index)

        if self.palette.is_drop_zone(hover_id):
            return DELETE_PLACEMENT
        return None

    def anchor_to_root(self, placement: Placement) -> Placement:
        """Map a placement inside a section to that section's root position."""
        if placement.is_delete or placement.container_id == ROOT_CONTAINER_ID:
            return placement
        location = self.document.locate(placement.container_id)
        if location is None:
            return placement
        return Placement(ROOT_CONTAINER_ID, location.index)

    def _resolve_boundary(self, hover_id: str) -> Placement | None:
        for suffix in (START_SUFFIX, END_SUFFIX):
            if not hover_id.endswith(suffix):
                continue
            container_id = hover_id[: -len(suffix)]
            if not self.document.is_container(container_id):
                continue
            if suffix == START_SUFFIX:
                return Placement(container_id, 0)
            return Placement(container_id, len(self.document.container(container_id)))
        return None

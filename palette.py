"""Templates offered as drag sources for new questions and sections."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from models import (
    PALETTE_ID,
    SECTION_KIND,
    Choice,
    MCQQuestion,
    Question,
    TableColumn,
    TableQuestion,
    TextQuestion,
    end_sentinel,
    start_sentinel,
)


@dataclass(frozen=True)
class PaletteTemplate:
    id: str
    kind: str
    label: str
    prototype: Question | None = None


def _default_templates(palette_id: str) -> list[PaletteTemplate]:
    return [
        PaletteTemplate(f"{palette_id}-{SECTION_KIND}", SECTION_KIND, "Section"),
        PaletteTemplate(
            f"{palette_id}-text",
            "text",
            "Text question",
            TextQuestion(id=f"{palette_id}-text"),
        ),
        PaletteTemplate(
            f"{palette_id}-mcq",
            "mcq",
            "Multiple choice",
            MCQQuestion(
                id=f"{palette_id}-mcq",
                choices=[Choice("Option 1"), Choice("Option 2")],
            ),
        ),
        PaletteTemplate(
            f"{palette_id}-table",
            "table",
            "Table",
            TableQuestion(
                id=f"{palette_id}-table",
                columns=[TableColumn(id="column-1", kind="text", header="Column 1")],
            ),
        ),
    ]


class Palette:
    """The 'New items' panel: a fixed set of templates and a delete zone."""

    def __init__(
        self,
        templates: Iterable[PaletteTemplate] | None = None,
        palette_id: str = PALETTE_ID,
    ) -> None:
        self.id = palette_id
        items = list(templates) if templates is not None else _default_templates(palette_id)
        self._templates = {template.id: template for template in items}

    def __iter__(self):
        return iter(self._templates.values())

    def get(self, template_id: str) -> PaletteTemplate | None:
        return self._templates.get(template_id)

    def is_drop_zone(self, hover_id: str) -> bool:
        return (
            hover_id == self.id
            or hover_id in (start_sentinel(self.id), end_sentinel(self.id))
            or hover_id in self._templates
        )

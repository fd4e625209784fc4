"""Ordered form document with an id index over every container."""
from __future__ import annotations

import copy
import dataclasses
import logging
import uuid
from typing import Iterator

from errors import (
    DuplicateItemError,
    UnknownContainerError,
    UnknownItemError,
)
from models import (
    MCQQuestion,
    QUESTION_TYPES,
    ROOT_CONTAINER_ID,
    Choice,
    Entry,
    Location,
    Question,
    Section,
    is_question,
)

log = logging.getLogger(__name__)

_EDITABLE_FIELDS = {
    "text": {"prompt", "min_length", "max_length"},
    "mcq": {"prompt", "choices"},
    "table": {"prompt", "columns"},
}


class FormDocument:
    """
    The authored form: a root container holding questions and sections,
    each section holding questions.

    Every structural change goes through this class so the id index
    (id -> Location) stays in step with the containers.
    """

    def __init__(self) -> None:
        self._root: list[Entry] = []
        self._sections: dict[str, Section] = {}
        self._index: dict[str, Location] = {}

    # -- lookups -----------------------------------------------------------

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._index

    def __len__(self) -> int:
        """Number of questions, sections excluded."""
        return sum(1 for _ in self.iter_questions())

    def locate(self, item_id: str) -> Location | None:
        return self._index.get(item_id)

    def get(self, item_id: str) -> Entry | None:
        location = self._index.get(item_id)
        if location is None:
            return None
        return self._content(location.container_id)[location.index]

    def get_question(self, item_id: str) -> Question | None:
        entry = self.get(item_id)
        return entry if is_question(entry) else None

    def is_section(self, item_id: str) -> bool:
        return item_id in self._sections

    def is_container(self, container_id: str) -> bool:
        return container_id == ROOT_CONTAINER_ID or container_id in self._sections

    def container(self, container_id: str) -> tuple[Entry, ...]:
        return tuple(self._content(container_id))

    def container_ids(self) -> list[str]:
        return [ROOT_CONTAINER_ID] + [
            entry.id for entry in self._root if isinstance(entry, Section)
        ]

    def sections(self) -> list[Section]:
        return [entry for entry in self._root if isinstance(entry, Section)]

    def iter_questions(self) -> Iterator[Question]:
        for entry in self._root:
            if isinstance(entry, Section):
                yield from entry.content
            else:
                yield entry

    def questions(self) -> list[Question]:
        """Questions in the order a respondent sees them."""
        return list(self.iter_questions())

    def question_index(self, question_id: str) -> int | None:
        for index, question in enumerate(self.iter_questions()):
            if question.id == question_id:
                return index
        return None

    def new_id(self, prefix: str = "item") -> str:
        while True:
            candidate = f"{prefix}-{uuid.uuid4().hex[:12]}"
            if candidate not in self._index:
                return candidate

    # -- structural mutations ----------------------------------------------

    def add_question(
        self,
        question: Question,
        container_id: str = ROOT_CONTAINER_ID,
        index: int | None = None,
    ) -> Location:
        if not is_question(question):
            raise TypeError(f"Not a question: {question!r}")
        self._check_new_id(question.id)
        content = self._content(container_id)
        position = self._clamp(index, len(content))
        self._insert(container_id, position, question)
        log.debug("Added %s question %s at %s[%d]", question.kind, question.id, container_id, position)
        return self._index[question.id]

    def add_section(self, section: Section, index: int | None = None) -> Location:
        self._check_new_id(section.id)
        for question in section.content:
            self._check_new_id(question.id)
        ids = [section.id] + [question.id for question in section.content]
        if len(set(ids)) != len(ids):
            raise DuplicateItemError("Duplicate question id inside section")
        position = self._clamp(index, len(self._root))
        self._sections[section.id] = section
        self._insert(ROOT_CONTAINER_ID, position, section)
        self._reindex(section.id, 0)
        log.debug("Added section %s at %d", section.id, position)
        return self._index[section.id]

    def create_question(
        self,
        kind: str,
        container_id: str = ROOT_CONTAINER_ID,
        index: int | None = None,
        prototype: Question | None = None,
    ) -> Question:
        """Create a freshly identified question, copied from prototype if given."""
        if kind not in QUESTION_TYPES:
            raise ValueError(f"Unknown question kind: {kind}")
        if prototype is not None:
            question = dataclasses.replace(copy.deepcopy(prototype), id=self.new_id(kind))
        else:
            question = QUESTION_TYPES[kind](id=self.new_id(kind))
        self.add_question(question, container_id, index)
        return question

    def create_section(self, index: int | None = None, header: str = "") -> Section:
        section = Section(id=self.new_id("section"), header=header)
        self.add_section(section, index)
        return section

    def remove(self, item_id: str) -> Entry | None:
        """
        Remove a question or a whole section.

        Returns the removed entry, or None when the id is unknown.
        Branches pointing at any removed question are cleared.
        """
        location = self._index.get(item_id)
        if location is None:
            return None
        entry = self._pop(location)
        removed_ids = {entry.id}
        if isinstance(entry, Section):
            del self._sections[entry.id]
            for question in entry.content:
                self._index.pop(question.id, None)
                removed_ids.add(question.id)
        self._prune_targets(removed_ids)
        log.debug("Removed %s %s from %s", entry.kind, entry.id, location.container_id)
        return entry

    def move(self, item_id: str, container_id: str, index: int) -> bool:
        """
        Move an entry so it ends up at `index` of `container_id`.

        Returns False when nothing changed: unknown id or container,
        a section aimed at a section, or the entry already in place.
        """
        source = self._index.get(item_id)
        if source is None or not self.is_container(container_id):
            return False
        if item_id in self._sections and container_id != ROOT_CONTAINER_ID:
            return False

        destination = self._content(container_id)
        if source.container_id == container_id:
            target = self._clamp(index, len(destination) - 1)
        else:
            target = self._clamp(index, len(destination))
        if source.container_id == container_id and source.index == target:
            return False

        entry = self._pop(source)
        self._insert(container_id, target, entry)
        log.debug(
            "Moved %s from %s[%d] to %s[%d]",
            item_id, source.container_id, source.index, container_id, target,
        )
        return True

    # -- authoring edits ---------------------------------------------------

    def edit_question(self, question_id: str, **changes: object) -> Question:
        location = self._index.get(question_id)
        question = self.get_question(question_id)
        if location is None or question is None:
            raise UnknownItemError(f"Question not found: {question_id}")
        unknown = set(changes) - _EDITABLE_FIELDS[question.kind]
        if unknown:
            raise ValueError(
                f"Cannot edit {', '.join(sorted(unknown))} on a {question.kind} question"
            )
        updated = dataclasses.replace(question, **changes)
        self._content(location.container_id)[location.index] = updated
        return updated

    def rename_section(self, section_id: str, header: str) -> Section:
        section = self._sections.get(section_id)
        if section is None:
            raise UnknownItemError(f"Section not found: {section_id}")
        section.header = header
        return section

    # -- internals ---------------------------------------------------------

    def _content(self, container_id: str) -> list:
        if container_id == ROOT_CONTAINER_ID:
            return self._root
        section = self._sections.get(container_id)
        if section is None:
            raise UnknownContainerError(f"Container not found: {container_id}")
        return section.content

    def _check_new_id(self, item_id: str) -> None:
        if not item_id:
            raise ValueError("Item id is required")
        if item_id in self._index or item_id == ROOT_CONTAINER_ID:
            raise DuplicateItemError(f"Duplicate id: {item_id}")

    @staticmethod
    def _clamp(index: int | None, upper: int) -> int:
        if index is None or index > upper:
            return max(upper, 0)
        return max(index, 0)

    def _insert(self, container_id: str, position: int, entry: Entry) -> None:
        self._content(container_id).insert(position, entry)
        self._reindex(container_id, position)

    def _pop(self, location: Location) -> Entry:
        entry = self._content(location.container_id).pop(location.index)
        del self._index[entry.id]
        self._reindex(location.container_id, location.index)
        return entry

    def _reindex(self, container_id: str, start: int) -> None:
        content = self._content(container_id)
        for position in range(start, len(content)):
            self._index[content[position].id] = Location(container_id, position)

    def _prune_targets(self, removed_ids: set[str]) -> None:
        for question in self.iter_questions():
            if not isinstance(question, MCQQuestion):
                continue
            if any(choice.target_id in removed_ids for choice in question.choices):
                question.choices = [
                    Choice(choice.text, None)
                    if choice.target_id in removed_ids
                    else choice
                    for choice in question.choices
                ]

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


ROOT_CONTAINER_ID = "form"
PALETTE_ID = "palette"

START_SUFFIX = "-start"
END_SUFFIX = "-end"

QUESTION_KINDS = ("text", "mcq", "table")
COLUMN_KINDS = ("text", "mcq")
SECTION_KIND = "section"


@dataclass
class Choice:
    text: str = ""
    target_id: Optional[str] = None


@dataclass
class TableColumn:
    id: str
    kind: str = "text"  # "text" | "mcq"
    header: str = ""
    choices: List[str] = field(default_factory=list)


@dataclass
class TextQuestion:
    id: str
    prompt: str = ""
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    kind: str = field(default="text", init=False)


@dataclass
class MCQQuestion:
    id: str
    prompt: str = ""
    choices: List[Choice] = field(default_factory=list)
    kind: str = field(default="mcq", init=False)


@dataclass
class TableQuestion:
    id: str
    prompt: str = ""
    columns: List[TableColumn] = field(default_factory=list)
    kind: str = field(default="table", init=False)


Question = Union[TextQuestion, MCQQuestion, TableQuestion]

QUESTION_TYPES: Dict[str, type] = {
    "text": TextQuestion,
    "mcq": MCQQuestion,
    "table": TableQuestion,
}


@dataclass
class Section:
    id: str
    header: str = ""
    content: List[Question] = field(default_factory=list)
    kind: str = field(default=SECTION_KIND, init=False)


Entry = Union[Question, Section]


@dataclass(frozen=True)
class Location:
    container_id: str
    index: int


class DragKind(str, enum.Enum):
    """What the pointer picked up when a gesture started."""

    SECTION = "section"
    ITEM = "item"
    TEMPLATE = "template"


@dataclass(frozen=True)
class Placement:
    container_id: str
    index: int
    is_delete: bool = False


DELETE_PLACEMENT = Placement(PALETTE_ID, -1, is_delete=True)


@dataclass
class DragSession:
    dragged_id: str
    dragged_kind: DragKind
    source: Optional[Location] = None
    hover: Optional[Placement] = None


# text -> str, mcq -> choice index, table -> {column_id: str | choice index}
Answer = Union[str, int, Dict[str, Union[str, int]]]


@dataclass
class NavigationState:
    current_index: int = 0
    history: List[int] = field(default_factory=list)
    pending_next_id: Optional[str] = None
    answers: Dict[str, Answer] = field(default_factory=dict)


def is_question(entry: object) -> bool:
    return isinstance(entry, (TextQuestion, MCQQuestion, TableQuestion))


def start_sentinel(container_id: str) -> str:
    return f"{container_id}{START_SUFFIX}"


def end_sentinel(container_id: str) -> str:
    return f"{container_id}{END_SUFFIX}"

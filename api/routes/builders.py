"""Builder session endpoints: authoring and drag gestures."""
from fastapi import APIRouter, HTTPException

from api.models import (
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
from api.routes.forms import sink
from api.services.builder_service import (
    builder_state,
    new_builder,
    question_changes,
    store,
)
from errors import FormBuilderError
from palette import Palette
from serialization import parse_form

router = APIRouter(prefix="/api/builders", tags=["builders"])


@router.post("", status_code=201)
def create_builder(payload: BuilderCreate) -> dict[str, object]:
    """Start a new builder session."""
    document = None
    title = payload.title
    if payload.form is not None:
        try:
            document = parse_form(payload.form.model_dump())
        except (FormBuilderError, ValueError) as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        title = title or payload.form.formName
    builder = new_builder(title, document)
    builder_id = store.create(builder)
    return {"builderId": builder_id, **builder_state(builder)}


@router.get("/palette")
def get_palette() -> list[dict[str, object]]:
    """List the templates offered as drag sources."""
    return [
        {"id": template.id, "kind": template.kind, "label": template.label}
        for template in Palette()
    ]


@router.get("/{builder_id}")
def get_builder(builder_id: str) -> dict[str, object]:
    """Get the current form and mode."""
    with store.open(builder_id) as builder:
        return builder_state(builder)


@router.delete("/{builder_id}")
def delete_builder(builder_id: str) -> dict[str, str]:
    """Drop a builder session."""
    store.delete(builder_id)
    return {"status": "deleted"}


@router.put("/{builder_id}/title")
def set_title(builder_id: str, payload: BuilderTitle) -> dict[str, object]:
    """Rename the form."""
    with store.open(builder_id) as builder:
        builder.title = payload.title
        return builder_state(builder)


@router.post("/{builder_id}/questions", status_code=201)
def add_question(builder_id: str, payload: QuestionCreate) -> dict[str, object]:
    """Add a question at an explicit position."""
    with store.open(builder_id) as builder:
        question = builder.add_question(payload.kind, payload.containerId, payload.index)
        return {"questionId": question.id, **builder_state(builder)}


@router.patch("/{builder_id}/questions/{question_id}")
def edit_question(
    builder_id: str, question_id: str, payload: QuestionEdit
) -> dict[str, object]:
    """Apply authoring edits to a question."""
    with store.open(builder_id) as builder:
        builder.edit_question(
            question_id, **question_changes(payload.model_dump(exclude_unset=True))
        )
        return builder_state(builder)


@router.put("/{builder_id}/questions/{question_id}/branches")
def set_branch(
    builder_id: str, question_id: str, payload: BranchUpdate
) -> dict[str, object]:
    """Point one choice at a target question, or clear it."""
    with store.open(builder_id) as builder:
        builder.set_branch(question_id, payload.choiceIndex, payload.targetId)
        return builder_state(builder)


@router.post("/{builder_id}/sections", status_code=201)
def add_section(builder_id: str, payload: SectionCreate) -> dict[str, object]:
    """Add a section at an explicit position."""
    with store.open(builder_id) as builder:
        section = builder.add_section(payload.index, payload.header)
        return {"sectionId": section.id, **builder_state(builder)}


@router.patch("/{builder_id}/sections/{section_id}")
def rename_section(
    builder_id: str, section_id: str, payload: SectionEdit
) -> dict[str, object]:
    """Rename a section."""
    with store.open(builder_id) as builder:
        builder.rename_section(section_id, payload.header)
        return builder_state(builder)


@router.delete("/{builder_id}/items/{item_id}")
def remove_item(builder_id: str, item_id: str) -> dict[str, object]:
    """Remove a question or a section with its questions."""
    with store.open(builder_id) as builder:
        if builder.remove(item_id) is None:
            raise HTTPException(status_code=404, detail="Item not found")
        return builder_state(builder)


@router.post("/{builder_id}/drag/start")
def drag_start(builder_id: str, payload: DragStart) -> dict[str, object]:
    """Begin a drag gesture."""
    with store.open(builder_id) as builder:
        active = builder.drag_start(payload.activeId)
        session = builder.drag.session
        return {
            "active": active,
            "kind": session.dragged_kind.value if session else None,
        }


@router.post("/{builder_id}/drag/over")
def drag_over(builder_id: str, payload: DragTarget) -> dict[str, object]:
    """Update the hovered drop target."""
    with store.open(builder_id) as builder:
        placement = builder.drag_over(payload.overId)
        return {
            "placement": (
                {
                    "containerId": placement.container_id,
                    "index": placement.index,
                    "delete": placement.is_delete,
                }
                if placement
                else None
            ),
            "form": builder.form_payload(),
        }


@router.post("/{builder_id}/drag/end")
def drag_end(builder_id: str, payload: DragTarget) -> dict[str, object]:
    """Drop: apply the gesture's single structural change."""
    with store.open(builder_id) as builder:
        result = builder.drag_end(payload.overId)
        return {
            "action": result.action.value,
            "itemId": result.item_id,
            **builder_state(builder),
        }


@router.post("/{builder_id}/submit", status_code=201)
def submit_form(builder_id: str) -> dict[str, object]:
    """Store the authored form."""
    with store.open(builder_id) as builder:
        form_id = builder.submit(sink)
        return {"message": "Form saved successfully", "formId": form_id}

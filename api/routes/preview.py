"""Preview mode endpoints: stepping through the form as a respondent."""
from fastapi import APIRouter

from api.models import AnswerInput, AnswersSubmit
from api.routes.forms import sink
from api.services.builder_service import builder_state, preview_state, store

router = APIRouter(prefix="/api/builders/{builder_id}/preview", tags=["preview"])


@router.post("")
def enter_preview(builder_id: str) -> dict[str, object]:
    """Enter preview mode at the first question."""
    with store.open(builder_id) as builder:
        builder.enter_preview()
        return builder_state(builder)


@router.delete("")
def exit_preview(builder_id: str) -> dict[str, object]:
    """Return to editing."""
    with store.open(builder_id) as builder:
        builder.exit_preview()
        return builder_state(builder)


@router.get("")
def get_preview(builder_id: str) -> dict[str, object]:
    """Get the current preview position."""
    with store.open(builder_id) as builder:
        return preview_state(builder.require_preview())


@router.post("/answers")
def answer(builder_id: str, payload: AnswerInput) -> dict[str, object]:
    """Record an answer for a question."""
    with store.open(builder_id) as builder:
        accepted = builder.answer(payload.questionId, payload.value)
        return {"accepted": accepted, **preview_state(builder.preview)}


@router.post("/next")
def next_question(builder_id: str) -> dict[str, object]:
    """Advance, following a branch when the answer selects one."""
    with store.open(builder_id) as builder:
        moved = builder.next()
        return {"moved": moved, **preview_state(builder.preview)}


@router.post("/previous")
def previous_question(builder_id: str) -> dict[str, object]:
    """Go back to the previously visited question."""
    with store.open(builder_id) as builder:
        moved = builder.previous()
        return {"moved": moved, **preview_state(builder.preview)}


@router.post("/submit", status_code=201)
def submit_answers(builder_id: str, payload: AnswersSubmit) -> dict[str, object]:
    """Send the answers along the visited path to a stored form."""
    with store.open(builder_id) as builder:
        response_id = builder.submit_answers(sink, payload.formId)
        return {
            "message": "Response saved successfully",
            "formId": payload.formId,
            "responseId": response_id,
        }

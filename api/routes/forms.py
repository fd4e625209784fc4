"""Form submission endpoints."""
from fastapi import APIRouter, HTTPException

from api.models import (
    FormPayload,
    FormSavedResponse,
    ResponseSavedResponse,
    ResponseSubmission,
)
from api.services.form_service import JsonFileSink, list_responses, load_form_payload
from errors import FormBuilderError
from serialization import parse_form
from validation import validate_form

router = APIRouter(prefix="/api/forms", tags=["forms"])

sink = JsonFileSink()


@router.post("", status_code=201, response_model=FormSavedResponse)
def save_form(payload: FormPayload) -> dict[str, object]:
    """Store an authored form."""
    data = payload.model_dump()
    try:
        document = parse_form(data)
    except (FormBuilderError, ValueError) as exc:
        raise HTTPException(
            status_code=400,
            detail={"error": "Invalid form data", "problems": [str(exc)]},
        ) from exc

    problems = validate_form(document, payload.formName)
    if problems:
        raise HTTPException(
            status_code=400,
            detail={"error": "Invalid form data", "problems": problems},
        )

    form_id = sink.submit_form(data)
    return {"message": "Form saved successfully", "formId": form_id}


@router.get("/{form_id}")
def get_form(form_id: str) -> dict[str, object]:
    """Get a stored form."""
    return load_form_payload(form_id)


@router.post(
    "/{form_id}/responses", status_code=201, response_model=ResponseSavedResponse
)
def save_response(form_id: str, payload: ResponseSubmission) -> dict[str, object]:
    """Store a respondent's answers."""
    answers = [answer.model_dump(exclude_none=True) for answer in payload.answers]
    response_id = sink.submit_answers(form_id, answers)
    return {
        "message": "Response saved successfully",
        "formId": form_id,
        "responseId": response_id,
    }


@router.get("/{form_id}/responses")
def get_responses(form_id: str) -> list[dict[str, object]]:
    """List stored responses of a form."""
    return list_responses(form_id)

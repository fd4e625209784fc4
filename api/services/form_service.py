"""Service layer for stored forms and responses."""
import logging
import uuid
from typing import Any

from fastapi import HTTPException

from api.utils import (
    form_path,
    json_load,
    read_json_file,
    response_path,
    responses_dir,
    utc_now,
    validate_form_exists,
    validate_id,
    write_json_file,
)

logger = logging.getLogger(__name__)


def load_form_payload(form_id: str) -> dict[str, Any]:
    """Load a stored form from file."""
    form_id = validate_id("formId", form_id)
    path = form_path(form_id)
    if not path.exists():
        raise HTTPException(status_code=404, detail="Form not found")
    return json_load(path.read_text(encoding="utf-8"))


def list_responses(form_id: str) -> list[dict[str, Any]]:
    """Load every stored response of a form, oldest first."""
    form_id = validate_id("formId", form_id)
    validate_form_exists(form_id)
    directory = responses_dir(form_id)
    if not directory.exists():
        return []
    responses = [read_json_file(path, {}) for path in directory.glob("*.json")]
    return sorted(responses, key=lambda item: item.get("submittedAt", ""))


def unknown_answer_ids(form_payload: dict[str, Any], answers: list[dict[str, Any]]) -> list[str]:
    """Question ids in `answers` that the stored form does not contain."""
    known = {
        question.get("clientId")
        for question in form_payload.get("questions", [])
        if isinstance(question, dict)
    }
    return [answer["questionId"] for answer in answers if answer.get("questionId") not in known]


class JsonFileSink:
    """Stores submitted forms and answers as JSON files under FORMS_DIR."""

    def submit_form(self, payload: dict[str, Any]) -> str:
        form_id = uuid.uuid4().hex
        stored = {"id": form_id, "savedAt": utc_now(), **payload}
        write_json_file(form_path(form_id), stored)
        logger.info(f"Saved form {form_id} with {len(payload.get('questions', []))} questions")
        return form_id

    def submit_answers(self, form_id: str, answers: list[dict[str, Any]]) -> str:
        form_payload = load_form_payload(form_id)
        unknown = unknown_answer_ids(form_payload, answers)
        if unknown:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown questions: {', '.join(unknown)}",
            )
        response_id = uuid.uuid4().hex
        write_json_file(
            response_path(form_payload["id"], response_id),
            {
                "id": response_id,
                "formId": form_payload["id"],
                "submittedAt": utc_now(),
                "answers": answers,
            },
        )
        logger.info(f"Saved response {response_id} for form {form_payload['id']}")
        return response_id

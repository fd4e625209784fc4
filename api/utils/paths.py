"""Path utilities for submitted forms and their responses."""
from pathlib import Path

from api.config import FORMS_DIR


def form_dir(form_id: str) -> Path:
    """Get directory for a submitted form."""
    return FORMS_DIR / form_id


def form_path(form_id: str) -> Path:
    """Get path to the form document JSON."""
    return form_dir(form_id) / "form.json"


def responses_dir(form_id: str) -> Path:
    """Get directory holding the form's responses."""
    return form_dir(form_id) / "responses"


def response_path(form_id: str, response_id: str) -> Path:
    """Get path to one response JSON."""
    return responses_dir(form_id) / f"{response_id}.json"

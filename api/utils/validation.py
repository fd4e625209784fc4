"""Validation utilities."""
from pathlib import Path

from fastapi import HTTPException

from api.utils.paths import form_path


def validate_id(name: str, value: str) -> str:
    """Validate ID string (no path traversal)."""
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{name} is required")
    cleaned = value.strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"{name} is required")
    if cleaned in {".", ".."} or Path(cleaned).name != cleaned or "/" in cleaned or "\\" in cleaned:
        raise HTTPException(status_code=400, detail=f"Invalid {name}")
    return cleaned


def validate_form_exists(form_id: str) -> None:
    """Validate that a submitted form exists."""
    if not form_path(form_id).exists():
        raise HTTPException(status_code=404, detail="Form not found")

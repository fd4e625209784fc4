from pathlib import Path

import pytest
from fastapi import HTTPException

from api.utils import json_utils, paths, time_utils, validation


def test_json_round_trip(tmp_path: Path) -> None:
    payload = {"message": "привет", "count": 2}
    dumped = json_utils.json_dump(payload)
    assert "привет" in dumped
    assert json_utils.json_load(dumped) == payload

    path = tmp_path / "nested" / "payload.json"
    json_utils.write_json_file(path, payload)
    assert json_utils.read_json_file(path, {}) == payload
    assert not list(path.parent.glob(".*.tmp"))
    assert json_utils.read_json_file(tmp_path / "missing.json", {"fallback": True}) == {"fallback": True}


def test_utc_now_is_iso() -> None:
    assert "T" in time_utils.utc_now()
    assert time_utils.utc_now().endswith("+00:00")


def test_paths_helpers(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "FORMS_DIR", tmp_path)
    assert paths.form_dir("abc") == tmp_path / "abc"
    assert paths.form_path("abc") == tmp_path / "abc" / "form.json"
    assert paths.response_path("abc", "r1") == tmp_path / "abc" / "responses" / "r1.json"


def test_validate_id() -> None:
    assert validation.validate_id("formId", " abc ") == "abc"
    with pytest.raises(HTTPException):
        validation.validate_id("formId", "")
    with pytest.raises(HTTPException):
        validation.validate_id("formId", "../bad")
    for dots in (".", "..", " .. "):
        with pytest.raises(HTTPException):
            validation.validate_id("formId", dots)


def test_validate_form_exists(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(paths, "FORMS_DIR", tmp_path)
    with pytest.raises(HTTPException):
        validation.validate_form_exists("missing")

    path = paths.form_path("exists")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{}", encoding="utf-8")
    validation.validate_form_exists("exists")

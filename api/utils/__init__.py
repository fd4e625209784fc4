"""Utility modules."""
from api.utils.json_utils import (
    json_dump,
    json_load,
    read_json_file,
    write_json_file,
)
from api.utils.paths import form_dir, form_path, response_path, responses_dir
from api.utils.time_utils import utc_now
from api.utils.validation import validate_form_exists, validate_id

__all__ = [
    "json_dump",
    "json_load",
    "read_json_file",
    "write_json_file",
    "form_dir",
    "form_path",
    "response_path",
    "responses_dir",
    "utc_now",
    "validate_form_exists",
    "validate_id",
]

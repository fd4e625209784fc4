"""Application configuration and constants."""
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_bool_env(name: str, default: bool) -> bool:
    """Parse boolean flag from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# Directories
FORMS_DIR = Path(os.environ.get("FORMS_DIR", Path.cwd() / "data" / "forms"))
FORMS_DIR.mkdir(parents=True, exist_ok=True)

# Builder sessions
MAX_BUILDERS = _parse_int_env("MAX_BUILDERS", 100)
OPTIMISTIC_REORDER = _parse_bool_env("OPTIMISTIC_REORDER", False)

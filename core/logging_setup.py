from __future__ import annotations
import logging
import os


def _level_from_env(default: int) -> int:
    raw = os.environ.get("FORM_BUILDER_LOG_LEVEL")
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


def setup_console_logging(level: int | None = None) -> None:
    """
    Call once at app start. Prints form builder logs to console.

    Without an explicit level, FORM_BUILDER_LOG_LEVEL decides (INFO by default).
    """
    if level is None:
        level = _level_from_env(logging.INFO)
    root = logging.getLogger()
    if root.handlers:
        # already configured (avoid duplicates)
        root.setLevel(level)
        return

    root.setLevel(level)
    h = logging.StreamHandler()
    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    h.setFormatter(fmt)
    root.addHandler(h)

"""Time utilities."""
from datetime import datetime, timezone


def utc_now() -> str:
    """Get current UTC timestamp as ISO string."""
    return datetime.now(timezone.utc).isoformat()

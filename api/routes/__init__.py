"""API route modules."""
from api.routes import builders, forms, preview

__all__ = ["builders", "forms", "preview"]

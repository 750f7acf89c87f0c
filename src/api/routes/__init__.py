"""API route modules."""

from .audits import router as audits_router
from .health import router as health_router

__all__ = ["health_router", "audits_router"]

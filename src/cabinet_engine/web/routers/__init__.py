"""API routers for the REST API."""

from cabinet_engine.web.routers.derive import router as derive_router
from cabinet_engine.web.routers.evaluate import router as evaluate_router
from cabinet_engine.web.routers.optimize import router as optimize_router
from cabinet_engine.web.routers.validate import router as validate_router

__all__ = [
    "derive_router",
    "evaluate_router",
    "optimize_router",
    "validate_router",
]

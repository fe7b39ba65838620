"""FastAPI application for the cabinet engine REST API.

Serve with any ASGI server, e.g. ``uvicorn cabinet_engine.web.app:app``.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cabinet_engine.application.factory import ServiceFactory
from cabinet_engine.web.dependencies import get_service_factory
from cabinet_engine.web.exceptions import register_exception_handlers
from cabinet_engine.web.routers import (
    derive_router,
    evaluate_router,
    optimize_router,
    validate_router,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
API_VERSION = "1.0.0"


def create_app(
    factory: ServiceFactory | None = None,
    allow_origins: list[str] | None = None,
) -> FastAPI:
    """Build the API application.

    Args:
        factory: Factory for the optimisation endpoints. Defaults to the
            process-wide factory.
        allow_origins: CORS origins; every origin is allowed when omitted.
    """
    app = FastAPI(
        title="Cabinet Engine API",
        description="Cabinet part derivation, pricing and cutting-stock optimisation",
        version=API_VERSION,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (derive_router, optimize_router, evaluate_router, validate_router):
        app.include_router(router, prefix=API_PREFIX)

    if factory is not None:
        app.dependency_overrides[get_service_factory] = lambda: factory

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    logger.debug("Created API application with %d routes", len(app.routes))
    return app


app = create_app()

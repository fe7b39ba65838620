"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cabinet_engine.application.config import ConfigError
from cabinet_engine.domain.exceptions import (
    CabinetDerivationError,
    FormulaError,
    MaterialNotFoundError,
    ModelNotFoundError,
)


class UnsupportedFormatError(Exception):
    """Raised when requested export format is not supported."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        self.format_name = format_name
        self.available = available
        super().__init__(
            f"Unsupported format: {format_name}. Available: {', '.join(available)}"
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ModelNotFoundError)
    async def model_not_found_handler(
        request: Request, exc: ModelNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "model_not_found",
                "details": {"model": str(exc.model_ref)},
            },
        )

    @app.exception_handler(MaterialNotFoundError)
    async def material_not_found_handler(
        request: Request, exc: MaterialNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={
                "error": str(exc),
                "error_type": "material_not_found",
                "details": {"material": str(exc.material_ref)},
            },
        )

    @app.exception_handler(CabinetDerivationError)
    async def derivation_error_handler(
        request: Request, exc: CabinetDerivationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Cabinet derivation failed",
                "error_type": "derivation",
                "details": [{"message": e} for e in exc.errors],
            },
        )

    @app.exception_handler(FormulaError)
    async def formula_error_handler(request: Request, exc: FormulaError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "formula",
                "details": {"formula": exc.formula, "reason": exc.reason},
            },
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        # Validation details may carry arbitrary input values
        details = [
            {k: v for k, v in detail.items() if k != "value"} for detail in exc.details
        ]
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": details,
            },
        )

    @app.exception_handler(UnsupportedFormatError)
    async def unsupported_format_handler(
        request: Request, exc: UnsupportedFormatError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={
                "error": str(exc),
                "error_type": "unsupported_format",
                "details": {"format": exc.format_name, "available": exc.available},
            },
        )

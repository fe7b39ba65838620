"""Pydantic schemas for the REST API."""

from cabinet_engine.web.schemas.common import (
    DimensionsSchema,
    GeneratedPartSchema,
    SheetDimensionsSchema,
)
from cabinet_engine.web.schemas.requests import (
    CatalogValidateRequest,
    DeriveRequestSchema,
    EvaluateRequestSchema,
    OptimizeRequestSchema,
)
from cabinet_engine.web.schemas.responses import (
    DeriveResponseSchema,
    ErrorResponseSchema,
    EvaluateResponseSchema,
    ExportFormatsSchema,
    FormulaIssueSchema,
    MaterialLayoutSchema,
    OptimizeResponseSchema,
    PlacementSchema,
    SheetSchema,
    ValidationResultSchema,
)

__all__ = [
    # Common
    "DimensionsSchema",
    "GeneratedPartSchema",
    "SheetDimensionsSchema",
    # Requests
    "CatalogValidateRequest",
    "DeriveRequestSchema",
    "EvaluateRequestSchema",
    "OptimizeRequestSchema",
    # Responses
    "DeriveResponseSchema",
    "ErrorResponseSchema",
    "EvaluateResponseSchema",
    "ExportFormatsSchema",
    "FormulaIssueSchema",
    "MaterialLayoutSchema",
    "OptimizeResponseSchema",
    "PlacementSchema",
    "SheetSchema",
    "ValidationResultSchema",
]

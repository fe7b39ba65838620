"""Catalog validation endpoints."""

from fastapi import APIRouter

from cabinet_engine.application.config import load_catalog_from_dict, validate_catalog
from cabinet_engine.web.schemas.requests import CatalogValidateRequest
from cabinet_engine.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_catalog_endpoint(
    request: CatalogValidateRequest,
) -> ValidationResultSchema:
    """Validate a catalog without deriving anything.

    Schema errors are reported by the ConfigError handler (422); reference,
    formula and advisory checks are returned in the body.
    """
    config = load_catalog_from_dict(request.catalog)
    result = validate_catalog(config)
    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[{"message": w.message, "path": w.path} for w in result.warnings],
    )

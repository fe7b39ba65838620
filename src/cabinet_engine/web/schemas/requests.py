"""Pydantic request schemas for the REST API."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from cabinet_engine.application.config.schema import (
    HardwareOverridesConfig,
    MaterialSelectionConfig,
)
from cabinet_engine.web.schemas.common import (
    DimensionsSchema,
    GeneratedPartSchema,
    SheetDimensionsSchema,
)


class DeriveRequestSchema(BaseModel):
    """Request for deriving the parts of one cabinet.

    The catalog is sent in the same JSON shape as a catalog file.
    """

    catalog: dict[str, Any] = Field(..., description="Catalog JSON")
    model: str = Field(..., description="Model id or name")
    dimensions: DimensionsSchema | None = Field(
        default=None, description="Chosen dimensions, model defaults when omitted"
    )
    materials: MaterialSelectionConfig = Field(
        default_factory=MaterialSelectionConfig, description="Selected material ids"
    )
    hardware: HardwareOverridesConfig = Field(
        default_factory=HardwareOverridesConfig, description="Hardware overrides"
    )


class OptimizeRequestSchema(BaseModel):
    """Request for packing panel parts onto stock sheets."""

    parts: list[GeneratedPartSchema] = Field(..., description="Parts to cut")
    material_sheet_dims: dict[str, SheetDimensionsSchema] = Field(
        default_factory=dict, description="Sheet size per material id"
    )
    material_names: dict[str, str] = Field(
        default_factory=dict, description="Display name per material id"
    )
    strategy: Literal["single_row", "shelf"] | None = Field(
        default=None, description="Packing strategy, server default when omitted"
    )


class EvaluateRequestSchema(BaseModel):
    """Request for evaluating one formula."""

    formula: str = Field(..., description="Formula text")
    variables: dict[str, float] = Field(
        default_factory=dict, description="Variable values by name"
    )


class CatalogValidateRequest(BaseModel):
    """Request for validating a catalog."""

    catalog: dict[str, Any] = Field(..., description="Catalog JSON")

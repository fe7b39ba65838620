"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from cabinet_engine.web.schemas.common import GeneratedPartSchema


class FormulaIssueSchema(BaseModel):
    """A formula that failed and was evaluated as 0."""

    label: str
    formula: str
    message: str


class DeriveResponseSchema(BaseModel):
    """Response for cabinet derivation."""

    model_config = ConfigDict(protected_namespaces=())

    model_id: str = Field(..., description="Derived model id")
    template: str | None = Field(
        default=None, description="Category template used when the model declares no parts"
    )
    parts: list[GeneratedPartSchema] = Field(default_factory=list)
    total_cost: float = Field(..., description="Sum of all part costs")
    formula_errors: list[FormulaIssueSchema] = Field(default_factory=list)


class PlacementSchema(BaseModel):
    """A part placed on a sheet."""

    name: str
    part_type: str
    width: float
    height: float
    x: float
    y: float
    oversized: bool = False


class SheetSchema(BaseModel):
    """One stock sheet and its placements."""

    width: float
    height: float
    remaining_width: float
    parts: list[PlacementSchema] = Field(default_factory=list)


class MaterialLayoutSchema(BaseModel):
    """Sheets used for one material."""

    material_name: str
    sheet_width: float
    sheet_height: float
    sheets_count: int
    waste_percentage: float
    sheets: list[SheetSchema] = Field(default_factory=list)


class OptimizeResponseSchema(BaseModel):
    """Response for cutting optimisation."""

    strategy: str
    materials_count: int
    total_parts: int
    sheets_count: int
    waste_percentage: float
    optimization: dict[str, MaterialLayoutSchema] = Field(
        default_factory=dict, description="Layout per material id"
    )


class EvaluateResponseSchema(BaseModel):
    """Response for formula evaluation."""

    formula: str
    ok: bool
    value: float | None = Field(default=None, description="Result, null on failure")
    error: str | None = None


class ValidationResultSchema(BaseModel):
    """Response for catalog validation."""

    is_valid: bool = Field(..., description="Whether the catalog is valid")
    errors: list[dict[str, Any]] = Field(default_factory=list, description="Validation errors")
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ExportFormatsSchema(BaseModel):
    """Response for available export formats."""

    formats: list[str] = Field(..., description="Available format names")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )

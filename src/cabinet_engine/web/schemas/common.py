"""Common Pydantic schemas shared across requests and responses."""

from pydantic import BaseModel, Field

from cabinet_engine.domain.value_objects import GrainDirection


class DimensionsSchema(BaseModel):
    """Cabinet dimensions in millimetres."""

    width: float = Field(..., gt=0, description="Width in mm")
    height: float = Field(..., gt=0, description="Height in mm")
    depth: float = Field(..., gt=0, description="Depth in mm")


class SheetDimensionsSchema(BaseModel):
    """Stock sheet size in millimetres."""

    width: float = Field(..., gt=0, description="Sheet width in mm")
    height: float = Field(..., gt=0, description="Sheet height in mm")


class GeneratedPartSchema(BaseModel):
    """A derived part or hardware line."""

    name: str = Field(..., description="Part name")
    part_type: str = Field(..., description="Part type tag, 'hardware' for hardware lines")
    material_id: str | None = Field(default=None, description="Material id")
    width: float = Field(..., ge=0, description="Width in mm")
    height: float = Field(..., ge=0, description="Height in mm")
    thickness: float = Field(default=0.0, ge=0, description="Thickness in mm")
    quantity: int = Field(default=1, ge=1, description="Number of pieces")
    edge_banding_top: bool = False
    edge_banding_bottom: bool = False
    edge_banding_left: bool = False
    edge_banding_right: bool = False
    edge_material_id: str | None = Field(default=None, description="Edge banding material id")
    grain_direction: GrainDirection = GrainDirection.NO_GRAIN
    notes: str = ""
    unit_cost: float = Field(default=0.0, ge=0, description="Cost of one piece")
    total_cost: float = Field(default=0.0, ge=0, description="unit_cost * quantity")

"""Pydantic schema models for catalog files and engine settings.

A catalog file is a JSON document listing materials, part types,
accessories and cabinet models, plus optional projects and an optional
``settings`` block with engine settings. It uses Pydantic v2 for
validation and serialization.

The domain enums are reused so that the catalog and the engine agree on
material, accessory and grain values.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from cabinet_engine.domain.value_objects import AccessoryType, GrainDirection, MaterialType

# Supported catalog schema versions
# Version 1.0: Materials, part types, accessories, models and projects
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class EngineSettings(BaseModel):
    """Engine settings.

    Attributes:
        strict_formulas: Raise on the first failing formula instead of
            evaluating it as 0.
        packing_strategy: Placement heuristic of the cutting-stock packer.
        default_sheet_width: Sheet width (mm) for materials without one.
        default_sheet_height: Sheet height (mm) for materials without one.
        packable_types: Material types whose parts are sent to the packer.
        hardware_costs: Reference unit cost overrides per accessory type.
        default_panel_thickness: Panel thickness (mm) when no panel
            material is selected.
        default_back_thickness: Back thickness (mm) when no back material
            is selected.
        drawer_side_thickness: Value of the ``drawer_side_thickness``
            formula variable.
    """

    model_config = ConfigDict(extra="forbid")

    strict_formulas: bool = False
    packing_strategy: Literal["single_row", "shelf"] = "single_row"
    default_sheet_width: float = Field(default=2440.0, gt=0)
    default_sheet_height: float = Field(default=1220.0, gt=0)
    packable_types: list[MaterialType] = Field(default_factory=lambda: [MaterialType.PANEL])
    hardware_costs: dict[AccessoryType, float] = Field(default_factory=dict)
    default_panel_thickness: float = Field(default=18.0, gt=0)
    default_back_thickness: float = Field(default=6.0, gt=0)
    drawer_side_thickness: float = Field(default=15.0, gt=0)

    @field_validator("hardware_costs")
    @classmethod
    def validate_costs(cls, v: dict[AccessoryType, float]) -> dict[AccessoryType, float]:
        negative = sorted(k.value for k, cost in v.items() if cost < 0)
        if negative:
            raise ValueError(f"Hardware costs must be non-negative: {negative}")
        return v


class EdgeBandingConfig(BaseModel):
    """Banded edges of a part."""

    model_config = ConfigDict(extra="forbid")

    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False


class MaterialConfig(BaseModel):
    """Catalog material.

    Attributes:
        id: Unique material identifier.
        name: Display name.
        type: Material category.
        cost_per_unit: Cost per square metre (sheet goods) or per metre
            (edge banding).
        thickness: Thickness in mm.
        sheet_width: Stock sheet width in mm.
        sheet_height: Stock sheet height in mm.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    type: MaterialType
    cost_per_unit: float = Field(default=0.0, ge=0)
    thickness: float | None = Field(default=None, gt=0)
    sheet_width: float | None = Field(default=None, gt=0)
    sheet_height: float | None = Field(default=None, gt=0)


class PartTypeConfig(BaseModel):
    """Reusable part definition with default dimension formulas."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    width_formula: str = Field(..., min_length=1)
    height_formula: str = Field(..., min_length=1)
    default_thickness: float = Field(default=18.0, gt=0)
    material_type: MaterialType = MaterialType.PANEL
    grain_direction: GrainDirection | None = None
    description: str = ""

    @field_validator("material_type")
    @classmethod
    def validate_material_type(cls, v: MaterialType) -> MaterialType:
        if v not in (MaterialType.PANEL, MaterialType.BACK_PANEL):
            raise ValueError("Part type material must be 'panel' or 'back_panel'")
        return v


class PartAssociationConfig(BaseModel):
    """Binding of a part type to a model.

    Attributes:
        part_type: Name of a part type in the catalog.
        quantity_formula: Quantity formula.
        width_formula: Overrides the part type's width formula.
        height_formula: Overrides the part type's height formula.
        edge_banding: Banded edges of the generated parts.
        sort_order: Position of the part in the derived list.
    """

    model_config = ConfigDict(extra="forbid")

    part_type: str
    quantity_formula: str = "1"
    width_formula: str | None = None
    height_formula: str | None = None
    edge_banding: EdgeBandingConfig = Field(default_factory=EdgeBandingConfig)
    sort_order: int = 0


class AccessoryConfig(BaseModel):
    """Catalog accessory."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    type: AccessoryType = AccessoryType.OTHER
    unit_cost: float = Field(default=0.0, ge=0)
    default_quantity_formula: str = "1"
    description: str = ""


class AccessoryAssociationConfig(BaseModel):
    """Binding of an accessory to a model."""

    model_config = ConfigDict(extra="forbid")

    accessory: str
    quantity_formula: str | None = None
    required: bool = True


class ModelConfig(BaseModel):
    """Cabinet model.

    Dimension bounds are optional; when given, the default dimension must
    lie within them.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    category: str = ""
    default_width: float = Field(..., gt=0)
    default_height: float = Field(..., gt=0)
    default_depth: float = Field(..., gt=0)
    min_width: float | None = Field(default=None, gt=0)
    max_width: float | None = Field(default=None, gt=0)
    min_height: float | None = Field(default=None, gt=0)
    max_height: float | None = Field(default=None, gt=0)
    min_depth: float | None = Field(default=None, gt=0)
    max_depth: float | None = Field(default=None, gt=0)
    parts: list[PartAssociationConfig] = Field(default_factory=list)
    accessories: list[AccessoryAssociationConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_bounds(self) -> "ModelConfig":
        for dim in ("width", "height", "depth"):
            default = getattr(self, f"default_{dim}")
            low = getattr(self, f"min_{dim}")
            high = getattr(self, f"max_{dim}")
            if low is not None and high is not None and low > high:
                raise ValueError(f"min_{dim} ({low}) exceeds max_{dim} ({high})")
            if low is not None and default < low:
                raise ValueError(f"default_{dim} ({default}) is below min_{dim} ({low})")
            if high is not None and default > high:
                raise ValueError(f"default_{dim} ({default}) exceeds max_{dim} ({high})")
        return self


class MaterialSelectionConfig(BaseModel):
    """Material ids selected for a cabinet."""

    model_config = ConfigDict(extra="forbid")

    panel: str | None = None
    edge: str | None = None
    back: str | None = None
    door: str | None = None


class HardwareOverridesConfig(BaseModel):
    """Hardware count and count-variable overrides for a cabinet."""

    model_config = ConfigDict(extra="forbid")

    hinges: int | None = Field(default=None, ge=0)
    handles: int | None = Field(default=None, ge=0)
    shelf_pins: int | None = Field(default=None, ge=0)
    drawer_slides: int | None = Field(default=None, ge=0)
    door_count: int | None = Field(default=None, ge=0)
    drawer_count: int | None = Field(default=None, ge=0)
    shelf_count: int | None = Field(default=None, ge=0)


class ProjectItemConfig(BaseModel):
    """One cabinet in a project.

    Dimensions default to the model's default dimensions.
    """

    model_config = ConfigDict(extra="forbid")

    model: str
    name: str | None = None
    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    depth: float | None = Field(default=None, gt=0)
    quantity: int = Field(default=1, ge=1)
    materials: MaterialSelectionConfig = Field(default_factory=MaterialSelectionConfig)
    hardware: HardwareOverridesConfig = Field(default_factory=HardwareOverridesConfig)


class ProjectConfig(BaseModel):
    """A named set of cabinets priced and optimised together."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    description: str = ""
    items: list[ProjectItemConfig] = Field(default_factory=list)


class CatalogConfiguration(BaseModel):
    """Root model of a catalog file.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0").
        settings: Engine settings.
        materials: Catalog materials.
        part_types: Reusable part definitions.
        accessories: Catalog accessories.
        models: Cabinet models.
        projects: Optional projects.

    Example:
        >>> catalog = CatalogConfiguration(
        ...     schema_version="1.0",
        ...     models=[ModelConfig(id="b600", name="Base 600", category="Base Cabinets",
        ...                         default_width=600, default_height=720, default_depth=560)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    settings: EngineSettings = Field(default_factory=EngineSettings)
    materials: list[MaterialConfig] = Field(default_factory=list)
    part_types: list[PartTypeConfig] = Field(default_factory=list)
    accessories: list[AccessoryConfig] = Field(default_factory=list)
    models: list[ModelConfig] = Field(default_factory=list)
    projects: list[ProjectConfig] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minor versions of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v
        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v
        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def validate_unique_keys(self) -> "CatalogConfiguration":
        checks = (
            ("materials", [m.id for m in self.materials]),
            ("part_types", [p.name for p in self.part_types]),
            ("accessories", [a.name for a in self.accessories]),
            ("models", [m.id for m in self.models]),
            ("projects", [p.name for p in self.projects]),
        )
        for section, keys in checks:
            seen: set[str] = set()
            duplicates = sorted({k for k in keys if k in seen or seen.add(k)})
            if duplicates:
                raise ValueError(f"Duplicate {section} entries: {duplicates}")
        return self

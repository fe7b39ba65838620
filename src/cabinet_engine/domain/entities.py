"""Domain entities: catalog records consumed by the engine and the parts it emits."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .value_objects import (
    AccessoryType,
    CabinetDimensions,
    EdgeBanding,
    GrainDirection,
    MaterialType,
    PartKind,
    SheetSize,
)


@dataclass(frozen=True)
class Material:
    """A catalog material.

    ``cost_per_unit`` is charged per square metre of part area for panel
    and back panel materials, and per metre of banded edge for edge
    banding. Panel-type materials also record the stock sheet size.

    Attributes:
        id: Catalog identifier.
        name: Display name.
        material_type: Material category.
        cost_per_unit: Unit cost (see above).
        thickness: Thickness in mm, if known.
        sheet_width: Stock sheet width in mm (panel/back panel only).
        sheet_height: Stock sheet height in mm (panel/back panel only).
    """

    id: str
    name: str
    material_type: MaterialType
    cost_per_unit: float = 0.0
    thickness: float | None = None
    sheet_width: float | None = None
    sheet_height: float | None = None

    def __post_init__(self) -> None:
        if self.cost_per_unit < 0:
            raise ValueError("Material cost must be non-negative")
        if self.thickness is not None and self.thickness <= 0:
            raise ValueError("Material thickness must be positive")

    @property
    def sheet_size(self) -> SheetSize | None:
        """Stock sheet size, or None when the material has no sheet dimensions."""
        if self.sheet_width and self.sheet_height:
            return SheetSize(width=self.sheet_width, height=self.sheet_height)
        return None


@dataclass(frozen=True)
class PartType:
    """A reusable cabinet component definition with default formulas."""

    name: str
    width_formula: str
    height_formula: str
    default_thickness: float = 18.0
    material_type: MaterialType = MaterialType.PANEL
    grain_direction: GrainDirection | None = None
    description: str = ""

    @property
    def tag(self) -> str:
        """Part type tag used on generated parts ("Side Panel" -> "side_panel")."""
        return "_".join(self.name.lower().split())


@dataclass(frozen=True)
class PartTypeAssociation:
    """Binding of a part type to a cabinet model with model-specific overrides."""

    part_type: PartType
    quantity_formula: str = "1"
    custom_width_formula: str | None = None
    custom_height_formula: str | None = None
    edge_banding: EdgeBanding = field(default_factory=EdgeBanding)
    sort_order: int = 0

    @property
    def width_formula(self) -> str:
        return self.custom_width_formula or self.part_type.width_formula

    @property
    def height_formula(self) -> str:
        return self.custom_height_formula or self.part_type.height_formula


@dataclass(frozen=True)
class Accessory:
    """A catalog accessory (hinge, handle, slide, ...)."""

    name: str
    accessory_type: AccessoryType
    unit_cost: float
    default_quantity_formula: str = "1"
    description: str = ""

    def __post_init__(self) -> None:
        if self.unit_cost < 0:
            raise ValueError("Accessory unit cost must be non-negative")


@dataclass(frozen=True)
class AccessoryAssociation:
    """Binding of an accessory to a cabinet model."""

    accessory: Accessory
    quantity_formula: str | None = None
    required: bool = True

    @property
    def effective_formula(self) -> str:
        return self.quantity_formula or self.accessory.default_quantity_formula


@dataclass(frozen=True)
class CabinetModel:
    """A cabinet model descriptor from the catalog.

    A model with part associations is derived declaratively; a model
    without them falls back to the template chosen by its category.
    """

    id: str
    name: str
    category: str
    default_width: float
    default_height: float
    default_depth: float
    min_width: float = 0.0
    max_width: float = float("inf")
    min_height: float = 0.0
    max_height: float = float("inf")
    min_depth: float = 0.0
    max_depth: float = float("inf")
    part_associations: tuple[PartTypeAssociation, ...] = ()
    accessory_associations: tuple[AccessoryAssociation, ...] = ()

    @property
    def default_dimensions(self) -> CabinetDimensions:
        return CabinetDimensions(
            width=self.default_width,
            height=self.default_height,
            depth=self.default_depth,
        )

    @property
    def is_declarative(self) -> bool:
        return bool(self.part_associations)

    def validate_dimensions(self, dimensions: CabinetDimensions) -> list[str]:
        """Check chosen dimensions against the model bounds.

        Returns:
            List of error messages, empty when every dimension is in range.
        """
        errors: list[str] = []
        checks = (
            ("Width", dimensions.width, self.min_width, self.max_width),
            ("Height", dimensions.height, self.min_height, self.max_height),
            ("Depth", dimensions.depth, self.min_depth, self.max_depth),
        )
        for label, value, low, high in checks:
            if value < low or value > high:
                errors.append(f"{label} must be between {low:g}mm and {high:g}mm")
        return errors


@dataclass(frozen=True)
class GeneratedPart:
    """A concrete part (or hardware line) produced for one cabinet.

    Hardware lines have zero width, height and thickness and no material.

    Attributes:
        name: Display name, e.g. "Left Side" or "Shelf 2".
        part_type: Part type tag, e.g. "side_panel" or "hardware".
        material_id: Material used, None for hardware or unselected material.
        width: Width in mm.
        height: Height in mm.
        thickness: Thickness in mm.
        quantity: Number of identical pieces.
        edge_banding: Banded edges.
        edge_material_id: Edge banding material, if any.
        grain_direction: Grain orientation.
        notes: Free text description.
        unit_cost: Cost of one piece.
        total_cost: unit_cost * quantity.
    """

    name: str
    part_type: str
    material_id: str | None
    width: float
    height: float
    thickness: float
    quantity: int = 1
    edge_banding: EdgeBanding = field(default_factory=EdgeBanding)
    edge_material_id: str | None = None
    grain_direction: GrainDirection = GrainDirection.NO_GRAIN
    notes: str = ""
    unit_cost: float = 0.0
    total_cost: float = 0.0

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")

    @property
    def is_hardware(self) -> bool:
        return self.part_type == PartKind.HARDWARE.value

    @property
    def area_m2(self) -> float:
        """Area of one piece in square metres."""
        return (self.width * self.height) / 1_000_000

    def with_costs(self, unit_cost: float, total_cost: float) -> "GeneratedPart":
        return replace(self, unit_cost=unit_cost, total_cost=total_cost)


@dataclass(frozen=True)
class MaterialSelection:
    """Materials chosen for one cabinet. Any of them may be unselected."""

    panel: Material | None = None
    edge: Material | None = None
    back: Material | None = None
    door: Material | None = None

    @property
    def panel_thickness(self) -> float | None:
        return self.panel.thickness if self.panel is not None else None

    @property
    def back_thickness(self) -> float | None:
        return self.back.thickness if self.back is not None else None

    @property
    def back_or_panel(self) -> Material | None:
        """Back material, falling back to the panel material."""
        return self.back if self.back is not None else self.panel

    @property
    def door_or_panel(self) -> Material | None:
        """Door material, falling back to the panel material."""
        return self.door if self.door is not None else self.panel

    def by_id(self) -> dict[str, Material]:
        """Selected materials keyed by id."""
        selected = (self.panel, self.edge, self.back, self.door)
        return {m.id: m for m in selected if m is not None}

"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cabinet_engine.domain import (
    CabinetDimensions,
    CabinetModel,
    DerivationRequest,
    GeneratedPart,
    HardwareOverrides,
    Material,
    MaterialSelection,
)

if TYPE_CHECKING:
    from cabinet_engine.domain import CabinetTemplate, DerivationResult
    from cabinet_engine.domain.formula import FormulaIssue
    from cabinet_engine.domain.value_objects import SheetSize
    from cabinet_engine.infrastructure.bin_packing import CuttingLayout, MaterialLayout


@dataclass
class DeriveRequest:
    """Input DTO for deriving one cabinet."""

    model: CabinetModel | None
    width: float
    height: float
    depth: float
    panel_material: Material | None = None
    edge_material: Material | None = None
    back_material: Material | None = None
    door_material: Material | None = None
    hardware_overrides: HardwareOverrides = field(default_factory=HardwareOverrides)

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.width <= 0:
            errors.append("Width must be positive")
        if self.height <= 0:
            errors.append("Height must be positive")
        if self.depth <= 0:
            errors.append("Depth must be positive")
        if errors or self.model is None:
            return errors
        return self.model.validate_dimensions(self.dimensions)

    @property
    def dimensions(self) -> CabinetDimensions:
        return CabinetDimensions(width=self.width, height=self.height, depth=self.depth)

    def to_derivation_request(self) -> DerivationRequest:
        return DerivationRequest(
            model=self.model,
            dimensions=self.dimensions,
            materials=MaterialSelection(
                panel=self.panel_material,
                edge=self.edge_material,
                back=self.back_material,
                door=self.door_material,
            ),
            overrides=self.hardware_overrides,
        )


@dataclass
class DeriveResponse:
    """Output DTO with the derived parts of one cabinet.

    Attributes:
        parts: Physical parts followed by hardware lines.
        total_cost: Sum of every part's total cost.
        formula_errors: Formulas that failed and were evaluated as 0.
        template: Category template used when the model declares no parts.
        errors: Validation errors; when present nothing was derived.
    """

    parts: list[GeneratedPart] = field(default_factory=list)
    total_cost: float = 0.0
    formula_errors: list["FormulaIssue"] = field(default_factory=list)
    template: "CabinetTemplate | None" = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @classmethod
    def from_result(cls, result: "DerivationResult") -> "DeriveResponse":
        return cls(
            parts=list(result.parts),
            total_cost=result.total_cost,
            formula_errors=list(result.formula_errors),
            template=result.template,
        )


@dataclass
class ProjectItemResult:
    """Derivation of one project item.

    Attributes:
        name: Item display name.
        model_id: Id of the derived model.
        quantity: Number of identical cabinets.
        response: Derived parts of a single cabinet.
    """

    name: str
    model_id: str
    quantity: int
    response: DeriveResponse

    @property
    def total_cost(self) -> float:
        return self.response.total_cost * self.quantity


@dataclass
class ProjectResult:
    """Output DTO of pricing a project.

    Items are kept in project order. Items that failed validation are not
    in ``items``; their messages are in ``errors``.
    """

    name: str
    items: list[ProjectItemResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def total_cost(self) -> float:
        return sum(item.total_cost for item in self.items)


@dataclass
class PackRequest:
    """Input DTO for cutting optimisation.

    Attributes:
        parts: Parts to cut, already filtered to packable materials.
        material_sheet_dims: Stock sheet size per material id.
        material_names: Display name per material id.
        strategy: Packing strategy, None for the configured default.
    """

    parts: list[GeneratedPart]
    material_sheet_dims: dict[str, "SheetSize"] = field(default_factory=dict)
    material_names: dict[str, str] = field(default_factory=dict)
    strategy: str | None = None


@dataclass
class PackResponse:
    """Output DTO of cutting optimisation."""

    layout: "CuttingLayout | None" = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def materials_count(self) -> int:
        return self.layout.materials_count if self.layout else 0

    @property
    def total_parts(self) -> int:
        return self.layout.total_parts if self.layout else 0

    @property
    def per_material(self) -> dict[str | None, "MaterialLayout"]:
        return self.layout.by_material() if self.layout else {}

"""Part derivation: from a cabinet model and chosen dimensions to a priced bill of parts.

Models that declare part type associations are derived by evaluating
their formulas. Models without them fall back to the template chosen by
their category name. Hardware lines are appended in both cases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping

from ..entities import MaterialSelection
from ..exceptions import ModelNotFoundError
from ..formula import (
    DEFAULT_BACK_THICKNESS,
    DEFAULT_DRAWER_SIDE_THICKNESS,
    DEFAULT_PANEL_THICKNESS,
    FormulaIssue,
    FormulaScope,
    build_context,
)
from ..value_objects import (
    AccessoryType,
    CabinetDimensions,
    CabinetTemplate,
    HardwareOverrides,
    MaterialType,
)
from .hardware import HardwareCostingService
from .part_factory import PartFactory
from .pricing import PricingService
from .templates import TemplatePartGenerator

if TYPE_CHECKING:
    from ..entities import CabinetModel, GeneratedPart, Material, PartTypeAssociation

logger = logging.getLogger(__name__)

__all__ = ["DerivationRequest", "DerivationResult", "PartDerivationService"]


@dataclass(frozen=True)
class DerivationRequest:
    """Everything needed to derive the parts of one cabinet.

    Attributes:
        model: Cabinet model, None when the caller could not resolve it.
        dimensions: Chosen width, height and depth.
        materials: Selected panel, edge, back and door materials.
        overrides: Hardware count and count-variable overrides.
    """

    model: "CabinetModel | None"
    dimensions: CabinetDimensions
    materials: MaterialSelection = field(default_factory=MaterialSelection)
    overrides: HardwareOverrides = field(default_factory=HardwareOverrides)


@dataclass(frozen=True)
class DerivationResult:
    """Derived parts of one cabinet and their total cost.

    Attributes:
        parts: Physical parts followed by hardware lines.
        total_cost: Sum of every part's total cost.
        formula_errors: Formulas that failed and were evaluated as 0.
        template: Template used when the model had no declared parts.
        context: Variable context the formulas were evaluated against.
    """

    parts: tuple["GeneratedPart", ...]
    total_cost: float
    formula_errors: tuple[FormulaIssue, ...] = ()
    template: CabinetTemplate | None = None
    context: Mapping[str, float] = field(default_factory=dict)

    @property
    def physical_parts(self) -> tuple["GeneratedPart", ...]:
        return tuple(p for p in self.parts if not p.is_hardware)

    @property
    def hardware_parts(self) -> tuple["GeneratedPart", ...]:
        return tuple(p for p in self.parts if p.is_hardware)


class PartDerivationService:
    """Derives and prices the parts of a cabinet.

    Args:
        strict_formulas: Raise FormulaError on the first failing formula
            instead of evaluating it as 0.
        hardware_costs: Reference hardware unit costs by accessory type.
        default_panel_thickness: Panel thickness when no panel material
            is selected.
        default_back_thickness: Back thickness when no back material is
            selected.
        drawer_side_thickness: Value of the ``drawer_side_thickness``
            formula variable.
    """

    def __init__(
        self,
        strict_formulas: bool = False,
        hardware_costs: Mapping[AccessoryType, float] | None = None,
        default_panel_thickness: float = DEFAULT_PANEL_THICKNESS,
        default_back_thickness: float = DEFAULT_BACK_THICKNESS,
        drawer_side_thickness: float = DEFAULT_DRAWER_SIDE_THICKNESS,
        pricing: PricingService | None = None,
    ) -> None:
        self.strict_formulas = strict_formulas
        self.hardware_costs = hardware_costs
        self.default_panel_thickness = default_panel_thickness
        self.default_back_thickness = default_back_thickness
        self.drawer_side_thickness = drawer_side_thickness
        self.pricing = pricing or PricingService()

    def build_context(self, request: DerivationRequest) -> dict[str, float]:
        """Variable context for ``request`` with material thicknesses and overrides applied."""
        overrides = request.overrides
        return build_context(
            request.dimensions,
            panel_thickness=self._panel_thickness(request.materials),
            back_thickness=self._back_thickness(request.materials),
            door_count=overrides.door_count,
            drawer_count=overrides.drawer_count if overrides.drawer_count is not None else 0,
            shelf_count=overrides.shelf_count if overrides.shelf_count is not None else 1,
            drawer_side_thickness=self.drawer_side_thickness,
        )

    def derive(self, request: DerivationRequest) -> DerivationResult:
        """Derive the parts and total cost for one cabinet.

        Raises:
            ModelNotFoundError: If ``request.model`` is None.
            FormulaError: If strict formulas are enabled and a formula fails.
        """
        model = request.model
        if model is None:
            raise ModelNotFoundError("<none>")

        context = self.build_context(request)
        scope = FormulaScope(context, strict=self.strict_formulas)
        factory = PartFactory(edge_material=request.materials.edge)
        hardware = HardwareCostingService(self.hardware_costs, factory)
        category_template = CabinetTemplate.from_category(model.category)

        parts: list["GeneratedPart"]
        if model.is_declarative:
            template = None
            parts = self._derive_declarative(
                model.part_associations, request.materials, scope, factory
            )
            hardware.add_hardware(
                parts,
                model.accessory_associations,
                request.overrides,
                scope,
                is_tall=category_template == CabinetTemplate.TALL,
            )
        else:
            template = category_template
            generated = TemplatePartGenerator(factory).generate(
                template,
                request.dimensions,
                request.materials,
                context["panel_thickness"],
                context["back_thickness"],
            )
            parts = list(generated.parts)
            hardware.add_hardware(
                parts,
                model.accessory_associations,
                request.overrides,
                scope,
                door_count=generated.door_count,
                is_tall=generated.is_tall,
            )

        total_cost = self.pricing.total(parts)
        logger.info(
            "Derived %d parts for model %s (%s), total %.2f",
            len(parts),
            model.name,
            "declarative" if template is None else f"{template.value} template",
            total_cost,
        )
        return DerivationResult(
            parts=tuple(parts),
            total_cost=total_cost,
            formula_errors=tuple(scope.issues),
            template=template,
            context=context,
        )

    def _derive_declarative(
        self,
        associations: tuple["PartTypeAssociation", ...],
        materials: MaterialSelection,
        scope: FormulaScope,
        factory: PartFactory,
    ) -> list["GeneratedPart"]:
        parts: list["GeneratedPart"] = []
        ordered = sorted(associations, key=lambda a: (a.sort_order, a.part_type.name))
        for association in ordered:
            part_type = association.part_type
            material = self._resolve_material(association, materials)
            if material is not None and material.thickness:
                thickness = material.thickness
            else:
                thickness = part_type.default_thickness

            quantity = scope.quantity(association.quantity_formula, f"{part_type.name} quantity")
            for index in range(1, quantity + 1):
                name = f"{part_type.name} {index}"
                width = scope.value(association.width_formula, f"{name} width")
                height = scope.value(association.height_formula, f"{name} height")
                parts.append(
                    factory.panel(
                        name,
                        part_type.tag,
                        material,
                        width,
                        height,
                        thickness,
                        association.edge_banding,
                        part_type.description,
                        grain=part_type.grain_direction,
                    )
                )
        return parts

    @staticmethod
    def _resolve_material(
        association: "PartTypeAssociation",
        materials: MaterialSelection,
    ) -> "Material | None":
        part_type = association.part_type
        if part_type.material_type == MaterialType.BACK_PANEL:
            return materials.back_or_panel
        if "door" in part_type.name.lower():
            return materials.door_or_panel
        return materials.panel

    def _panel_thickness(self, materials: MaterialSelection) -> float:
        return materials.panel_thickness or self.default_panel_thickness

    def _back_thickness(self, materials: MaterialSelection) -> float:
        return materials.back_thickness or self.default_back_thickness

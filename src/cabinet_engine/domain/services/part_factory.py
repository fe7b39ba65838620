"""Construction of priced GeneratedPart records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..entities import GeneratedPart
from ..value_objects import EdgeBanding, GrainDirection, PartKind
from .grain import GrainAdvisor
from .pricing import part_costs

if TYPE_CHECKING:
    from ..entities import Material

__all__ = ["PartFactory"]


class PartFactory:
    """Creates generated parts priced against a cabinet's edge material.

    Shared by the declarative derivation path, the category templates and
    hardware costing so that every line is priced the same way.
    """

    def __init__(
        self,
        edge_material: "Material | None" = None,
        grain_advisor: GrainAdvisor | None = None,
    ) -> None:
        self.edge_material = edge_material
        self.grain_advisor = grain_advisor or GrainAdvisor()

    def panel(
        self,
        name: str,
        part_type: str,
        material: "Material | None",
        width: float,
        height: float,
        thickness: float,
        edge_banding: EdgeBanding | None = None,
        notes: str = "",
        quantity: int = 1,
        grain: GrainDirection | None = None,
    ) -> GeneratedPart:
        """Create a physical part priced by area and banded edge length.

        An unselected material or edge material prices at zero; the part is
        still emitted with its full dimensions.
        """
        banding = edge_banding or EdgeBanding.none()
        edge_material = self.edge_material if banding.any else None
        unit_cost, total_cost = part_costs(
            width,
            height,
            quantity,
            banding,
            material.cost_per_unit if material is not None else 0.0,
            edge_material.cost_per_unit if edge_material is not None else 0.0,
        )
        material_type = material.material_type if material is not None else None
        return GeneratedPart(
            name=name,
            part_type=part_type,
            material_id=material.id if material is not None else None,
            width=width,
            height=height,
            thickness=thickness,
            quantity=quantity,
            edge_banding=banding,
            edge_material_id=edge_material.id if edge_material is not None else None,
            grain_direction=self.grain_advisor.recommend(part_type, material_type, grain),
            notes=notes,
            unit_cost=unit_cost,
            total_cost=total_cost,
        )

    def hardware(
        self,
        name: str,
        quantity: int,
        unit_cost: float,
        notes: str = "",
    ) -> GeneratedPart:
        """Create a zero-dimension hardware line."""
        return GeneratedPart(
            name=name,
            part_type=PartKind.HARDWARE.value,
            material_id=None,
            width=0.0,
            height=0.0,
            thickness=0.0,
            quantity=quantity,
            grain_direction=GrainDirection.NO_GRAIN,
            notes=notes,
            unit_cost=unit_cost,
            total_cost=unit_cost * quantity,
        )

"""Part and cabinet pricing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from ..entities import GeneratedPart, Material
    from ..value_objects import EdgeBanding

__all__ = ["PricingService", "part_costs"]


def part_costs(
    width: float,
    height: float,
    quantity: int,
    edge_banding: "EdgeBanding",
    material_cost: float,
    edge_cost: float,
) -> tuple[float, float]:
    """Compute ``(unit_cost, total_cost)`` for a physical part.

    ``unit_cost = area_m2 * material_cost + edge_length_m * edge_cost`` with
    the area in square metres and the banded edge length in metres.
    """
    area_m2 = (width * height) / 1_000_000
    edge_length_m = edge_banding.length_m(width, height)
    unit_cost = area_m2 * material_cost + edge_length_m * edge_cost
    return unit_cost, unit_cost * quantity


class PricingService:
    """Prices generated parts and aggregates cabinet and project totals."""

    def price_part(
        self,
        part: "GeneratedPart",
        material: "Material | None" = None,
        edge_material: "Material | None" = None,
        hardware_unit_cost: float | None = None,
    ) -> tuple[float, float]:
        """Return ``(unit_cost, total_cost)`` for ``part``.

        Hardware lines skip the area term and use ``hardware_unit_cost``
        (or the cost already on the part). A missing material or edge
        material prices at zero.
        """
        if part.is_hardware:
            unit_cost = part.unit_cost if hardware_unit_cost is None else hardware_unit_cost
            return unit_cost, unit_cost * part.quantity

        return part_costs(
            part.width,
            part.height,
            part.quantity,
            part.edge_banding,
            material.cost_per_unit if material is not None else 0.0,
            edge_material.cost_per_unit if edge_material is not None else 0.0,
        )

    def total(self, parts: Iterable["GeneratedPart"]) -> float:
        """Sum of ``total_cost`` over a cabinet's parts."""
        return sum(part.total_cost for part in parts)

    def project_total(self, cabinet_totals: Iterable[tuple[float, int]]) -> float:
        """Project total from ``(cabinet unit cost, cabinet quantity)`` pairs."""
        return sum(unit_cost * quantity for unit_cost, quantity in cabinet_totals)

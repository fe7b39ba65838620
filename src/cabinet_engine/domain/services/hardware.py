"""Accessory and hardware costing.

Appends zero-dimension hardware lines to a cabinet's part list, either
from the model's declared accessory associations or, when the model has
none, from per-door and per-shelf heuristics.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping, Sequence

from ..value_objects import AccessoryType, HardwareOverrides, PartKind
from .constants import (
    DEFAULT_HARDWARE_COSTS,
    HANDLES_PER_DOOR,
    HINGES_PER_DOOR,
    LEGACY_HARDWARE_LINES,
    SHELF_PINS_PER_SHELF,
)
from .part_factory import PartFactory

if TYPE_CHECKING:
    from ..entities import AccessoryAssociation, GeneratedPart
    from ..formula import FormulaScope

logger = logging.getLogger(__name__)

__all__ = ["HardwareCostingService"]


class HardwareCostingService:
    """Derives hardware lines and folds them into a part list.

    Args:
        hardware_costs: Reference unit cost per accessory type. Used for
            every legacy line and for declared accessories whose unit cost
            is zero. Missing types fall back to DEFAULT_HARDWARE_COSTS.
        factory: Part factory used to build the hardware lines.
    """

    def __init__(
        self,
        hardware_costs: Mapping[AccessoryType, float] | None = None,
        factory: PartFactory | None = None,
    ) -> None:
        costs = dict(DEFAULT_HARDWARE_COSTS)
        if hardware_costs:
            costs.update(hardware_costs)
        self.hardware_costs = costs
        self.factory = factory or PartFactory()

    def reference_cost(self, accessory_type: AccessoryType) -> float:
        return self.hardware_costs.get(accessory_type, 0.0)

    def add_hardware(
        self,
        parts: list["GeneratedPart"],
        accessory_associations: Sequence["AccessoryAssociation"],
        overrides: HardwareOverrides | None,
        scope: "FormulaScope",
        door_count: int | None = None,
        is_tall: bool = False,
    ) -> None:
        """Append hardware lines to ``parts`` in place.

        Args:
            parts: Part list of one cabinet; extended in place.
            accessory_associations: Accessories declared on the model. When
                empty, the legacy heuristics are used instead.
            overrides: Caller overrides for the legacy counts.
            scope: Formula scope holding the cabinet's variable context.
            door_count: Nominal door count for the legacy path; taken from
                the context when None.
            is_tall: True for Tall templates, whose doors come in upper and
                lower rows.
        """
        if accessory_associations:
            added = self._declared(parts, accessory_associations, scope)
        else:
            if door_count is None:
                door_count = int(scope.context.get("door_count", 0))
            added = self._legacy(parts, overrides or HardwareOverrides(), door_count, is_tall)
        logger.debug("Added %d hardware lines", added)

    def _declared(
        self,
        parts: list["GeneratedPart"],
        associations: Sequence["AccessoryAssociation"],
        scope: "FormulaScope",
    ) -> int:
        for association in associations:
            accessory = association.accessory
            quantity = scope.quantity(association.effective_formula, accessory.name)
            unit_cost = accessory.unit_cost or self.reference_cost(accessory.accessory_type)
            notes = accessory.description or accessory.accessory_type.value
            if not association.required:
                notes = f"{notes} (optional)"
            parts.append(self.factory.hardware(accessory.name, quantity, unit_cost, notes))
        return len(associations)

    def _legacy(
        self,
        parts: list["GeneratedPart"],
        overrides: HardwareOverrides,
        door_count: int,
        is_tall: bool,
    ) -> int:
        effective_doors = door_count * 2 if is_tall else door_count
        shelves = sum(1 for p in parts if p.part_type == PartKind.SHELF.value)

        counts = {
            AccessoryType.HINGE: _pick(overrides.hinges, effective_doors * HINGES_PER_DOOR),
            AccessoryType.HANDLE: _pick(overrides.handles, effective_doors * HANDLES_PER_DOOR),
            AccessoryType.SHELF_PIN: _pick(overrides.shelf_pins, shelves * SHELF_PINS_PER_SHELF),
            AccessoryType.DRAWER_SLIDE: _pick(overrides.drawer_slides, 0),
        }

        added = 0
        for line in LEGACY_HARDWARE_LINES:
            count = counts[line.accessory_type]
            if count <= 0:
                continue
            parts.append(
                self.factory.hardware(
                    line.name,
                    count,
                    self.reference_cost(line.accessory_type),
                    line.notes,
                )
            )
            added += 1
        return added


def _pick(override: int | None, default: int) -> int:
    return default if override is None else override

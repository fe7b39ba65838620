"""Grain direction defaults for generated parts."""

from __future__ import annotations

from ..value_objects import GrainDirection, MaterialType, PartKind

__all__ = ["GrainAdvisor"]


class GrainAdvisor:
    """Assigns a grain direction to parts that do not declare one.

    Rules applied in order:
    1. Hardware and back-panel material parts: no grain.
    2. Visible part types (sides, doors, tops/bottoms, shelves): with grain.
    3. Anything else: no grain.
    """

    VISIBLE_PART_TYPES: frozenset[str] = frozenset(
        {
            PartKind.SIDE_PANEL.value,
            PartKind.HORIZONTAL_PANEL.value,
            PartKind.SHELF.value,
            PartKind.DOOR.value,
            "top_panel",
            "bottom_panel",
            "drawer_front",
            "upright",
            "horizontal_divider",
        }
    )

    def recommend(
        self,
        part_type: str,
        material_type: MaterialType | None = None,
        declared: GrainDirection | None = None,
    ) -> GrainDirection:
        """Return the grain direction for a part.

        Args:
            part_type: Part type tag.
            material_type: Material hint for the part, if known.
            declared: Grain declared in the catalog; wins when present.
        """
        if declared is not None:
            return declared
        if part_type == PartKind.HARDWARE.value or part_type == PartKind.BACK_PANEL.value:
            return GrainDirection.NO_GRAIN
        if material_type == MaterialType.BACK_PANEL:
            return GrainDirection.NO_GRAIN
        if part_type in self.VISIBLE_PART_TYPES or "door" in part_type:
            return GrainDirection.WITH_GRAIN
        return GrainDirection.NO_GRAIN

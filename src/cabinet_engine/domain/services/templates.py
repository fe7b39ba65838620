"""Category template fallback for models without declarative parts.

Each template is a fixed sequence of parts computed from the cabinet
width, height and depth and the selected panel and back thicknesses:

- every template: Left Side, Right Side, Top, Bottom, Back
- Tall only: Middle Divider
- shelves: 1 (Base, Generic), 2 (Wall) or 5 (Tall)
- doors: one or a pair depending on the width; Tall cabinets get upper
  and lower doors
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..value_objects import CabinetTemplate, EdgeBanding, PartKind
from .constants import (
    DOOR_GAP,
    DOUBLE_DOOR_GAP,
    SHELF_SETBACK,
    SHELVES_PER_TEMPLATE,
    TWO_DOOR_THRESHOLDS,
)

if TYPE_CHECKING:
    from ..entities import GeneratedPart, MaterialSelection
    from ..value_objects import CabinetDimensions
    from .part_factory import PartFactory

logger = logging.getLogger(__name__)

__all__ = ["TemplatePartGenerator", "TemplateResult"]

# Banding patterns shared by the templates.
LEFT_SIDE_BANDING = EdgeBanding(top=True, bottom=True, right=True)
RIGHT_SIDE_BANDING = EdgeBanding(top=True, bottom=True, left=True)
FRONT_EDGE_BANDING = EdgeBanding(right=True)


@dataclass(frozen=True)
class TemplateResult:
    """Parts generated by a template plus the facts hardware costing needs.

    Attributes:
        template: Template that produced the parts.
        parts: Generated physical parts in emission order.
        door_count: Nominal doors across the width (1 or 2).
        is_tall: True when doors are split into upper and lower rows.
    """

    template: CabinetTemplate
    parts: tuple["GeneratedPart", ...]
    door_count: int
    is_tall: bool

    @property
    def shelf_count(self) -> int:
        return sum(1 for p in self.parts if p.part_type == PartKind.SHELF.value)


class TemplatePartGenerator:
    """Generates the fixed part sequence for a cabinet template."""

    def __init__(self, factory: "PartFactory") -> None:
        self.factory = factory

    def generate(
        self,
        template: CabinetTemplate,
        dimensions: "CabinetDimensions",
        materials: "MaterialSelection",
        panel_thickness: float,
        back_thickness: float,
    ) -> TemplateResult:
        """Generate the parts for ``template``.

        Args:
            template: Template resolved from the model category.
            dimensions: Cabinet width, height and depth.
            materials: Selected materials (any may be None).
            panel_thickness: Carcass thickness used for the inner widths.
            back_thickness: Thickness recorded on the back panel.

        Returns:
            TemplateResult with the parts and door information.
        """
        two_doors = dimensions.width >= TWO_DOOR_THRESHOLDS[template.value]
        parts = self._carcass(dimensions, materials, panel_thickness, back_thickness)

        match template:
            case CabinetTemplate.TALL:
                parts.insert(4, self._middle_divider(dimensions, materials, panel_thickness))
                parts.extend(self._shelves(template, dimensions, materials, panel_thickness))
                parts.extend(
                    self._tall_doors(two_doors, dimensions, materials, panel_thickness)
                )
            case CabinetTemplate.BASE | CabinetTemplate.WALL | CabinetTemplate.GENERIC:
                parts.extend(self._shelves(template, dimensions, materials, panel_thickness))
                parts.extend(self._doors(two_doors, dimensions, materials, panel_thickness))

        logger.debug(
            "Template %s produced %d parts (%s doors)",
            template.value,
            len(parts),
            2 if two_doors else 1,
        )
        return TemplateResult(
            template=template,
            parts=tuple(parts),
            door_count=2 if two_doors else 1,
            is_tall=template == CabinetTemplate.TALL,
        )

    def _carcass(
        self,
        dimensions: "CabinetDimensions",
        materials: "MaterialSelection",
        t: float,
        back_thickness: float,
    ) -> list["GeneratedPart"]:
        width, height, depth = dimensions.width, dimensions.height, dimensions.depth
        inner_width = width - 2 * t
        panel = materials.panel
        make = self.factory.panel
        return [
            make("Left Side", PartKind.SIDE_PANEL.value, panel, depth, height, t,
                 LEFT_SIDE_BANDING, "Left side panel"),
            make("Right Side", PartKind.SIDE_PANEL.value, panel, depth, height, t,
                 RIGHT_SIDE_BANDING, "Right side panel"),
            make("Top", PartKind.HORIZONTAL_PANEL.value, panel, inner_width, depth, t,
                 FRONT_EDGE_BANDING, "Top panel"),
            make("Bottom", PartKind.HORIZONTAL_PANEL.value, panel, inner_width, depth, t,
                 FRONT_EDGE_BANDING, "Bottom panel"),
            make("Back", PartKind.BACK_PANEL.value, materials.back, inner_width,
                 height - 2 * t, back_thickness, None, "Back panel"),
        ]

    def _middle_divider(
        self,
        dimensions: "CabinetDimensions",
        materials: "MaterialSelection",
        t: float,
    ) -> "GeneratedPart":
        return self.factory.panel(
            "Middle Divider",
            PartKind.HORIZONTAL_PANEL.value,
            materials.panel,
            dimensions.width - 2 * t,
            dimensions.depth,
            t,
            FRONT_EDGE_BANDING,
            "Middle divider panel",
        )

    def _shelves(
        self,
        template: CabinetTemplate,
        dimensions: "CabinetDimensions",
        materials: "MaterialSelection",
        t: float,
    ) -> list["GeneratedPart"]:
        count = SHELVES_PER_TEMPLATE[template.value]
        shelf_width = dimensions.width - 2 * t
        shelf_depth = dimensions.depth - SHELF_SETBACK
        shelves = []
        for index in range(1, count + 1):
            name = "Shelf" if count == 1 else f"Shelf {index}"
            notes = "Adjustable shelf" if count < 5 else f"Adjustable shelf {index}"
            shelves.append(
                self.factory.panel(
                    name,
                    PartKind.SHELF.value,
                    materials.panel,
                    shelf_width,
                    shelf_depth,
                    t,
                    FRONT_EDGE_BANDING,
                    notes,
                )
            )
        return shelves

    def _door_width(self, two_doors: bool, width: float) -> float:
        if two_doors:
            return width / 2 - DOUBLE_DOOR_GAP
        return width - DOOR_GAP

    def _doors(
        self,
        two_doors: bool,
        dimensions: "CabinetDimensions",
        materials: "MaterialSelection",
        t: float,
    ) -> list["GeneratedPart"]:
        door_width = self._door_width(two_doors, dimensions.width)
        door_height = dimensions.height - DOOR_GAP
        if two_doors:
            labels = [("Left Door", "Left cabinet door"), ("Right Door", "Right cabinet door")]
        else:
            labels = [("Door", "Cabinet door")]
        return [
            self.factory.panel(
                name,
                PartKind.DOOR.value,
                materials.door_or_panel,
                door_width,
                door_height,
                t,
                EdgeBanding.all_edges(),
                notes,
            )
            for name, notes in labels
        ]

    def _tall_doors(
        self,
        two_doors: bool,
        dimensions: "CabinetDimensions",
        materials: "MaterialSelection",
        t: float,
    ) -> list["GeneratedPart"]:
        door_width = self._door_width(two_doors, dimensions.width)
        door_height = dimensions.height / 2 - DOOR_GAP
        if two_doors:
            labels = [
                ("Upper Left Door", "Upper left cabinet door"),
                ("Upper Right Door", "Upper right cabinet door"),
                ("Lower Left Door", "Lower left cabinet door"),
                ("Lower Right Door", "Lower right cabinet door"),
            ]
        else:
            labels = [
                ("Upper Door", "Upper cabinet door"),
                ("Lower Door", "Lower cabinet door"),
            ]
        return [
            self.factory.panel(
                name,
                PartKind.DOOR.value,
                materials.door_or_panel,
                door_width,
                door_height,
                t,
                EdgeBanding.all_edges(),
                notes,
            )
            for name, notes in labels
        ]

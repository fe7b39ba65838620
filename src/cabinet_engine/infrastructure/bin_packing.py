"""Cutting-stock packing of panel parts onto stock sheets.

This module provides data structures for sheet layouts and unit
placements, and a greedy packer with two strategies:

- ``single_row``: every sheet is one row at y=0. A unit goes on the first
  sheet whose remaining width and full height admit it, otherwise on a
  new sheet at (0, 0). Units larger than the sheet are still placed and
  flagged ``oversized``.
- ``shelf``: sheets are divided into horizontal rows stacked with a
  running y offset. A unit goes on the first row with enough remaining
  width and row height, else on a new row of the first sheet with enough
  remaining height, else on a new sheet. Oversized units get a sheet of
  their own and are flagged.

Both strategies are deterministic for a given input order, place every
unit exactly once and always terminate.

All result dataclasses are frozen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Mapping, Sequence

from cabinet_engine.domain.value_objects import SheetSize

if TYPE_CHECKING:
    from cabinet_engine.domain.entities import GeneratedPart

logger = logging.getLogger(__name__)

__all__ = [
    "CuttingLayout",
    "CuttingStockPacker",
    "MaterialLayout",
    "PackingStrategy",
    "PlacedUnit",
    "PlacementUnit",
    "SheetLayout",
]


class PackingStrategy(str, Enum):
    """Placement heuristic used by the packer."""

    SINGLE_ROW = "single_row"
    SHELF = "shelf"


@dataclass(frozen=True)
class PlacementUnit:
    """One physical piece to cut; a part with quantity N yields N units.

    Attributes:
        name: Name of the source part.
        width: Width in mm.
        height: Height in mm.
        part_type: Part type tag of the source part.
        part_index: Index of the source part in the packer input.
        material_id: Material the piece is cut from.
    """

    name: str
    width: float
    height: float
    part_type: str
    part_index: int
    material_id: str | None = None

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class PlacedUnit:
    """A unit placed at an offset on a sheet.

    Attributes:
        unit: The placed unit.
        x: Offset from the left edge of the sheet in mm.
        y: Offset from the bottom edge of the sheet in mm.
        oversized: True when the unit does not fit the sheet at all.
    """

    unit: PlacementUnit
    x: float
    y: float
    oversized: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def right_edge(self) -> float:
        return self.x + self.unit.width

    @property
    def top_edge(self) -> float:
        return self.y + self.unit.height


@dataclass(frozen=True)
class SheetLayout:
    """Placements on one stock sheet.

    Attributes:
        sheet_index: Zero-based index within the material's sheets.
        sheet_size: Stock sheet dimensions.
        placements: Placed units in placement order.
        remaining_width: Width left unused on the sheet's first row.
    """

    sheet_index: int
    sheet_size: SheetSize
    placements: tuple[PlacedUnit, ...]
    remaining_width: float = 0.0

    @property
    def piece_count(self) -> int:
        return len(self.placements)

    @property
    def used_area(self) -> float:
        """Area covered by placed units, clipped to the sheet."""
        total = 0.0
        for p in self.placements:
            width = max(0.0, min(p.right_edge, self.sheet_size.width) - p.x)
            height = max(0.0, min(p.top_edge, self.sheet_size.height) - p.y)
            total += width * height
        return total

    @property
    def waste_percentage(self) -> float:
        """Percentage of the sheet area not covered by placed units."""
        area = self.sheet_size.area
        if area == 0:
            return 0.0
        return max(0.0, (1 - self.used_area / area) * 100)

    @property
    def has_oversized(self) -> bool:
        return any(p.oversized for p in self.placements)


@dataclass(frozen=True)
class MaterialLayout:
    """Sheets used for one material.

    Attributes:
        material_id: Material identifier.
        material_name: Display name of the material.
        sheet_size: Stock sheet size used for this material.
        sheets: Sheet layouts in creation order.
        part_count: Number of input parts (before quantity expansion).
    """

    material_id: str | None
    material_name: str
    sheet_size: SheetSize
    sheets: tuple[SheetLayout, ...]
    part_count: int = 0

    @property
    def sheets_count(self) -> int:
        return len(self.sheets)

    @property
    def units_count(self) -> int:
        return sum(sheet.piece_count for sheet in self.sheets)

    @property
    def used_area(self) -> float:
        return sum(sheet.used_area for sheet in self.sheets)

    @property
    def waste_percentage(self) -> float:
        total = self.sheet_size.area * len(self.sheets)
        if total == 0:
            return 0.0
        return max(0.0, (1 - self.used_area / total) * 100)


@dataclass(frozen=True)
class CuttingLayout:
    """Complete packing result across all materials.

    Attributes:
        materials: One layout per material, in first-seen order.
        strategy: Strategy that produced the layout.
    """

    materials: tuple[MaterialLayout, ...] = ()
    strategy: PackingStrategy = PackingStrategy.SINGLE_ROW

    @property
    def materials_count(self) -> int:
        return len(self.materials)

    @property
    def total_parts(self) -> int:
        """Number of input parts packed, counting each part record once."""
        return sum(m.part_count for m in self.materials)

    @property
    def total_units(self) -> int:
        """Number of individual pieces placed."""
        return sum(m.units_count for m in self.materials)

    @property
    def sheets_count(self) -> int:
        return sum(m.sheets_count for m in self.materials)

    @property
    def waste_percentage(self) -> float:
        total = sum(m.sheet_size.area * m.sheets_count for m in self.materials)
        if total == 0:
            return 0.0
        used = sum(m.used_area for m in self.materials)
        return max(0.0, (1 - used / total) * 100)

    @property
    def utilisation_percentage(self) -> float:
        if not self.materials:
            return 0.0
        return 100.0 - self.waste_percentage

    @property
    def oversized_units(self) -> list[PlacedUnit]:
        return [
            p
            for m in self.materials
            for sheet in m.sheets
            for p in sheet.placements
            if p.oversized
        ]

    def by_material(self) -> dict[str | None, MaterialLayout]:
        return {m.material_id: m for m in self.materials}


@dataclass
class _Row:
    """A horizontal band of a sheet where units are placed left to right.

    Attributes:
        y: Bottom offset of the row.
        height: Row height, set by the first unit placed on it.
        remaining_width: Width still free on the row.
    """

    y: float
    height: float
    remaining_width: float


@dataclass
class _SheetState:
    """Mutable state of a sheet while packing."""

    index: int
    sheet_size: SheetSize
    remaining_width: float
    rows: list[_Row] = field(default_factory=list)
    current_y: float = 0.0
    placements: list[PlacedUnit] = field(default_factory=list)
    closed: bool = False

    @property
    def available_height(self) -> float:
        return self.sheet_size.height - self.current_y

    def to_layout(self, index: int) -> SheetLayout:
        return SheetLayout(
            sheet_index=index,
            sheet_size=self.sheet_size,
            placements=tuple(self.placements),
            remaining_width=max(0.0, self.remaining_width),
        )


class CuttingStockPacker:
    """Greedy packer for panel parts grouped by material.

    Attributes:
        strategy: Placement strategy.
        default_sheet_size: Sheet size for materials with none given.
    """

    def __init__(
        self,
        strategy: PackingStrategy | str = PackingStrategy.SINGLE_ROW,
        default_sheet_size: SheetSize | None = None,
    ) -> None:
        self.strategy = PackingStrategy(strategy)
        self.default_sheet_size = default_sheet_size or SheetSize()

    def pack(
        self,
        parts: Sequence["GeneratedPart"],
        sheet_sizes: Mapping[str, SheetSize] | None = None,
        material_names: Mapping[str, str] | None = None,
    ) -> CuttingLayout:
        """Pack parts onto sheets, one group of sheets per material.

        Args:
            parts: Panel parts to cut. Hardware lines should be filtered
                out by the caller.
            sheet_sizes: Stock sheet size per material id.
            material_names: Display name per material id.

        Returns:
            CuttingLayout with one MaterialLayout per material in the
            order materials are first seen in ``parts``.
        """
        sheet_sizes = sheet_sizes or {}
        material_names = material_names or {}
        groups = self._group_by_material(parts)

        logger.info(
            "Packing %d parts across %d materials (%s)",
            len(parts),
            len(groups),
            self.strategy.value,
        )

        materials: list[MaterialLayout] = []
        for material_id, indexed_parts in groups.items():
            sheet_size = sheet_sizes.get(material_id) if material_id is not None else None
            if sheet_size is None:
                logger.warning(
                    "No sheet size for material %s, using %gx%g",
                    material_id,
                    self.default_sheet_size.width,
                    self.default_sheet_size.height,
                )
                sheet_size = self.default_sheet_size

            units = self._sort_by_height(self._expand(indexed_parts, material_id))
            sheets = self.pack_units(units, sheet_size)
            layout = MaterialLayout(
                material_id=material_id,
                material_name=material_names.get(material_id or "", material_id or ""),
                sheet_size=sheet_size,
                sheets=sheets,
                part_count=len(indexed_parts),
            )
            logger.debug(
                "Material %s: %d units -> %d sheets, %.1f%% waste",
                material_id,
                len(units),
                layout.sheets_count,
                layout.waste_percentage,
            )
            materials.append(layout)

        return CuttingLayout(materials=tuple(materials), strategy=self.strategy)

    def pack_units(
        self,
        units: Sequence[PlacementUnit],
        sheet_size: SheetSize,
    ) -> tuple[SheetLayout, ...]:
        """Place already expanded and ordered units onto sheets of one size."""
        if self.strategy == PackingStrategy.SHELF:
            states = self._pack_shelf(units, sheet_size)
        else:
            states = self._pack_single_row(units, sheet_size)
        used = [state for state in states if state.placements]
        return tuple(state.to_layout(index) for index, state in enumerate(used))

    def _group_by_material(
        self,
        parts: Sequence["GeneratedPart"],
    ) -> dict[str | None, list[tuple[int, "GeneratedPart"]]]:
        groups: dict[str | None, list[tuple[int, "GeneratedPart"]]] = {}
        for index, part in enumerate(parts):
            groups.setdefault(part.material_id, []).append((index, part))
        return groups

    def _expand(
        self,
        indexed_parts: Sequence[tuple[int, "GeneratedPart"]],
        material_id: str | None,
    ) -> list[PlacementUnit]:
        units: list[PlacementUnit] = []
        for index, part in indexed_parts:
            for _ in range(part.quantity):
                units.append(
                    PlacementUnit(
                        name=part.name,
                        width=max(0.0, part.width),
                        height=max(0.0, part.height),
                        part_type=part.part_type,
                        part_index=index,
                        material_id=material_id,
                    )
                )
        return units

    def _sort_by_height(self, units: list[PlacementUnit]) -> list[PlacementUnit]:
        """Tallest first; ties keep their input order."""
        return sorted(units, key=lambda u: u.height, reverse=True)

    def _is_oversized(self, unit: PlacementUnit, sheet_size: SheetSize) -> bool:
        oversized = unit.width > sheet_size.width or unit.height > sheet_size.height
        if oversized:
            logger.warning(
                "Part '%s' (%gx%g) does not fit a %gx%g sheet",
                unit.name,
                unit.width,
                unit.height,
                sheet_size.width,
                sheet_size.height,
            )
        return oversized

    def _pack_single_row(
        self,
        units: Sequence[PlacementUnit],
        sheet_size: SheetSize,
    ) -> list[_SheetState]:
        sheets = [_SheetState(index=0, sheet_size=sheet_size, remaining_width=sheet_size.width)]

        for unit in units:
            oversized = self._is_oversized(unit, sheet_size)
            target = None
            for sheet in sheets:
                if unit.width <= sheet.remaining_width and unit.height <= sheet_size.height:
                    target = sheet
                    break

            if target is None:
                target = _SheetState(
                    index=len(sheets),
                    sheet_size=sheet_size,
                    remaining_width=sheet_size.width,
                )
                sheets.append(target)

            x = sheet_size.width - target.remaining_width
            target.placements.append(PlacedUnit(unit=unit, x=x, y=0.0, oversized=oversized))
            target.remaining_width -= unit.width

        return sheets

    def _pack_shelf(
        self,
        units: Sequence[PlacementUnit],
        sheet_size: SheetSize,
    ) -> list[_SheetState]:
        sheets: list[_SheetState] = []

        for unit in units:
            if self._is_oversized(unit, sheet_size):
                dedicated = _SheetState(
                    index=len(sheets),
                    sheet_size=sheet_size,
                    remaining_width=0.0,
                    closed=True,
                )
                dedicated.placements.append(PlacedUnit(unit=unit, x=0.0, y=0.0, oversized=True))
                sheets.append(dedicated)
                continue

            if self._place_on_existing_row(unit, sheets):
                continue
            if self._place_on_new_row(unit, sheets):
                continue

            sheet = _SheetState(
                index=len(sheets),
                sheet_size=sheet_size,
                remaining_width=sheet_size.width,
            )
            sheets.append(sheet)
            self._open_row(unit, sheet)

        return sheets

    def _place_on_existing_row(
        self,
        unit: PlacementUnit,
        sheets: list[_SheetState],
    ) -> bool:
        for sheet in sheets:
            if sheet.closed:
                continue
            for row in sheet.rows:
                if unit.width <= row.remaining_width and unit.height <= row.height:
                    x = sheet.sheet_size.width - row.remaining_width
                    sheet.placements.append(PlacedUnit(unit=unit, x=x, y=row.y))
                    row.remaining_width -= unit.width
                    if row is sheet.rows[0]:
                        sheet.remaining_width = row.remaining_width
                    return True
        return False

    def _place_on_new_row(
        self,
        unit: PlacementUnit,
        sheets: list[_SheetState],
    ) -> bool:
        for sheet in sheets:
            if sheet.closed:
                continue
            if unit.height <= sheet.available_height:
                self._open_row(unit, sheet)
                return True
        return False

    def _open_row(self, unit: PlacementUnit, sheet: _SheetState) -> None:
        row = _Row(
            y=sheet.current_y,
            height=unit.height,
            remaining_width=sheet.sheet_size.width - unit.width,
        )
        sheet.placements.append(PlacedUnit(unit=unit, x=0.0, y=row.y))
        if not sheet.rows:
            sheet.remaining_width = row.remaining_width
        sheet.rows.append(row)
        sheet.current_y += unit.height

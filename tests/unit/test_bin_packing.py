"""Unit tests for the cutting-stock packer.

Tests cover:
- Single-row first-fit placement and sheet opening
- Height-descending stable ordering and quantity expansion
- Oversized pieces: flagged, placed and warned about, never dropped
- Empty sheets are dropped and the remaining sheets re-indexed
- Shelf strategy rows and dedicated sheets for oversized pieces
- Per-material grouping, sheet sizes and layout statistics
"""

import logging

import pytest

from cabinet_engine.domain import GeneratedPart, SheetSize
from cabinet_engine.infrastructure import (
    CuttingLayout,
    CuttingStockPacker,
    PackingStrategy,
    PlacedUnit,
    PlacementUnit,
)


# =============================================================================
# Fixtures
# =============================================================================


SMALL_SHEET = SheetSize(width=1000, height=1000)


def part(
    name: str,
    width: float,
    height: float,
    quantity: int = 1,
    material_id: str | None = "oak",
) -> GeneratedPart:
    return GeneratedPart(
        name=name,
        part_type="shelf",
        material_id=material_id,
        width=width,
        height=height,
        thickness=18,
        quantity=quantity,
    )


@pytest.fixture
def packer() -> CuttingStockPacker:
    return CuttingStockPacker(default_sheet_size=SMALL_SHEET)


@pytest.fixture
def shelf_packer() -> CuttingStockPacker:
    return CuttingStockPacker(strategy="shelf", default_sheet_size=SMALL_SHEET)


def placements(layout: CuttingLayout) -> list[PlacedUnit]:
    return [p for m in layout.materials for s in m.sheets for p in s.placements]


# =============================================================================
# Single-row strategy
# =============================================================================


class TestSingleRowPacking:
    """Tests for the default single-row strategy."""

    def test_pieces_that_do_not_fit_together_use_two_sheets(
        self, packer: CuttingStockPacker
    ) -> None:
        layout = packer.pack([part("A", 600, 100), part("B", 500, 100)])
        material = layout.materials[0]
        assert material.sheets_count == 2
        assert [p.x for s in material.sheets for p in s.placements] == [0, 0]

    def test_pieces_are_placed_left_to_right(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("A", 300, 100, quantity=3)])
        sheet = layout.materials[0].sheets[0]
        assert [p.x for p in sheet.placements] == [0, 300, 600]
        assert all(p.y == 0 for p in sheet.placements)
        assert sheet.remaining_width == 100

    def test_first_fit_fills_earlier_sheet(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("A", 600, 300), part("B", 600, 200), part("C", 300, 100)])
        sheets = layout.materials[0].sheets
        assert [p.unit.name for p in sheets[0].placements] == ["A", "C"]
        assert sheets[0].placements[1].x == 600
        assert [p.unit.name for p in sheets[1].placements] == ["B"]

    def test_sorted_by_height_descending(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("Low", 100, 100), part("High", 100, 300), part("Mid", 100, 200)])
        assert [p.unit.name for p in placements(layout)] == ["High", "Mid", "Low"]

    def test_equal_heights_keep_input_order(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("First", 100, 200), part("Second", 100, 200)])
        assert [p.unit.name for p in placements(layout)] == ["First", "Second"]

    def test_quantity_expansion(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("Shelf", 200, 300, quantity=4)])
        assert layout.total_parts == 1
        assert layout.total_units == 4
        units = [p.unit for p in placements(layout)]
        assert all(u.part_index == 0 for u in units)

    def test_negative_dimensions_are_clamped(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("Broken", -50, 100)])
        assert placements(layout)[0].unit.width == 0


# =============================================================================
# Oversized pieces
# =============================================================================


class TestOversizedPieces:
    """Tests for pieces larger than their sheet."""

    def test_oversized_piece_is_placed_and_flagged(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("Wide", 1200, 100), part("A", 300, 100), part("B", 300, 100)])
        assert layout.total_units == 3
        oversized = layout.oversized_units
        assert [p.unit.name for p in oversized] == ["Wide"]
        assert layout.materials[0].sheets_count == 2

    def test_oversized_warning_is_logged(
        self, packer: CuttingStockPacker, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            packer.pack([part("Wide", 1200, 100)])
        assert "does not fit" in caplog.text

    def test_empty_initial_sheet_is_dropped(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("Tall", 100, 1500)])
        sheets = layout.materials[0].sheets
        assert len(sheets) == 1
        assert sheets[0].sheet_index == 0
        assert sheets[0].placements[0].oversized
        assert sheets[0].has_oversized

    def test_every_unit_is_placed_exactly_once(self, packer: CuttingStockPacker) -> None:
        parts = [
            part("A", 400, 900, quantity=3),
            part("B", 1100, 200),
            part("C", 250, 1200, quantity=2),
            part("D", 700, 50, quantity=5),
        ]
        layout = packer.pack(parts)
        assert layout.total_units == 11
        counts: dict[str, int] = {}
        for placed in placements(layout):
            counts[placed.unit.name] = counts.get(placed.unit.name, 0) + 1
        assert counts == {"A": 3, "B": 1, "C": 2, "D": 5}


# =============================================================================
# Shelf strategy
# =============================================================================


class TestShelfPacking:
    """Tests for the shelf (row-based) strategy."""

    def test_rows_stack_on_one_sheet(self, shelf_packer: CuttingStockPacker) -> None:
        layout = shelf_packer.pack([part("A", 600, 400), part("B", 600, 400), part("C", 300, 300)])
        assert layout.strategy == PackingStrategy.SHELF
        sheets = layout.materials[0].sheets
        assert len(sheets) == 1
        positions = {p.unit.name: (p.x, p.y) for p in sheets[0].placements}
        assert positions == {"A": (0, 0), "B": (0, 400), "C": (600, 0)}

    def test_single_row_needs_more_sheets_for_same_parts(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("A", 600, 400), part("B", 600, 400), part("C", 300, 300)])
        assert layout.materials[0].sheets_count == 2

    def test_new_sheet_when_height_is_used_up(self, shelf_packer: CuttingStockPacker) -> None:
        layout = shelf_packer.pack([part("A", 800, 600, quantity=2)])
        assert layout.materials[0].sheets_count == 2

    def test_oversized_piece_gets_dedicated_sheet(self, shelf_packer: CuttingStockPacker) -> None:
        layout = shelf_packer.pack([part("Huge", 1200, 1200), part("Small", 100, 100)])
        sheets = layout.materials[0].sheets
        assert len(sheets) == 2
        assert [p.unit.name for p in sheets[0].placements] == ["Huge"]
        assert [p.unit.name for p in sheets[1].placements] == ["Small"]

    def test_unknown_strategy_rejected(self) -> None:
        with pytest.raises(ValueError):
            CuttingStockPacker(strategy="guillotine")


# =============================================================================
# Materials and statistics
# =============================================================================


class TestMaterialsAndStatistics:
    """Tests for per-material grouping and layout statistics."""

    def test_grouped_in_first_seen_order(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack(
            [part("A", 100, 100, material_id="mdf"), part("B", 100, 100, material_id="oak")],
            material_names={"oak": "Oak", "mdf": "MDF"},
        )
        assert [m.material_id for m in layout.materials] == ["mdf", "oak"]
        assert [m.material_name for m in layout.materials] == ["MDF", "Oak"]
        assert layout.materials_count == 2

    def test_material_sheet_size(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack(
            [part("A", 100, 100)], sheet_sizes={"oak": SheetSize(width=2440, height=1220)}
        )
        assert layout.materials[0].sheet_size == SheetSize(2440, 1220)

    def test_default_sheet_size_without_entry(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("A", 100, 100, material_id=None)])
        material = layout.materials[0]
        assert material.material_id is None
        assert material.material_name == ""
        assert material.sheet_size == SMALL_SHEET

    def test_waste_percentage(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("Half", 500, 1000)])
        assert layout.materials[0].sheets[0].waste_percentage == pytest.approx(50.0)
        assert layout.waste_percentage == pytest.approx(50.0)
        assert layout.utilisation_percentage == pytest.approx(50.0)

    def test_empty_input(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([])
        assert layout.materials_count == 0
        assert layout.sheets_count == 0
        assert layout.waste_percentage == 0.0

    def test_by_material(self, packer: CuttingStockPacker) -> None:
        layout = packer.pack([part("A", 100, 100)])
        assert list(layout.by_material()) == ["oak"]


class TestPlacementValueObjects:
    """Tests for placement value objects."""

    def test_placed_unit_rejects_negative_offsets(self) -> None:
        unit = PlacementUnit(name="A", width=1, height=1, part_type="shelf", part_index=0)
        with pytest.raises(ValueError):
            PlacedUnit(unit=unit, x=-1, y=0)

    def test_edges(self) -> None:
        unit = PlacementUnit(name="A", width=100, height=50, part_type="shelf", part_index=0)
        placed = PlacedUnit(unit=unit, x=10, y=20)
        assert placed.right_edge == 110
        assert placed.top_edge == 70
        assert unit.area == 5000

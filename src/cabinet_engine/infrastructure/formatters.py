"""Text and JSON formatters for derived parts and cutting layouts."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Protocol, Sequence

if TYPE_CHECKING:
    from cabinet_engine.domain.entities import GeneratedPart
    from cabinet_engine.domain.formula import FormulaIssue
    from cabinet_engine.domain.value_objects import CabinetTemplate
    from cabinet_engine.infrastructure.bin_packing import (
        CuttingLayout,
        MaterialLayout,
        PlacedUnit,
    )

# Layout key for parts packed without a material.
UNASSIGNED_MATERIAL = "unassigned"


class DerivedParts(Protocol):
    """Anything carrying a cabinet's derived parts, such as a DerivationResult."""

    @property
    def parts(self) -> Sequence["GeneratedPart"]: ...

    @property
    def total_cost(self) -> float: ...

    @property
    def formula_errors(self) -> Sequence["FormulaIssue"]: ...

    @property
    def template(self) -> "CabinetTemplate | None": ...


def _edges(part: "GeneratedPart") -> str:
    banding = part.edge_banding
    flags = (
        ("T", banding.top),
        ("B", banding.bottom),
        ("L", banding.left),
        ("R", banding.right),
    )
    return "".join(code for code, on in flags if on) or "-"


class PartListFormatter:
    """Formats a cabinet's generated parts as a table.

    Physical parts are listed first with dimensions and banded edges,
    followed by hardware lines and the total cost.
    """

    def format(self, parts: Sequence["GeneratedPart"], total_cost: float | None = None) -> str:
        if not parts:
            return "No parts generated."

        physical = [p for p in parts if not p.is_hardware]
        hardware = [p for p in parts if p.is_hardware]

        lines = [
            "PART LIST",
            "=" * 92,
            f"{'Part':<22} {'Width':>8} {'Height':>8} {'Thk':>5} {'Qty':>4} "
            f"{'Edges':<6} {'Grain':<14} {'Unit':>9} {'Total':>9}",
            "-" * 92,
        ]
        for part in physical:
            lines.append(
                f"{part.name:<22} {part.width:>8.1f} {part.height:>8.1f} "
                f"{part.thickness:>5g} {part.quantity:>4} {_edges(part):<6} "
                f"{part.grain_direction.value:<14} {part.unit_cost:>9.2f} "
                f"{part.total_cost:>9.2f}"
            )

        if hardware:
            lines.append("")
            lines.append("HARDWARE")
            for part in hardware:
                lines.append(
                    f"  {part.name:<40} {part.quantity:>6} x {part.unit_cost:>7.2f} "
                    f"= {part.total_cost:>9.2f}"
                )

        if total_cost is None:
            total_cost = sum(p.total_cost for p in parts)
        lines.append("-" * 92)
        lines.append(f"{'TOTAL':<80} {total_cost:>11.2f}")
        return "\n".join(lines)

    def format_result(self, result: DerivedParts) -> str:
        """Format a derivation result, listing any failed formulas."""
        text = self.format(result.parts, result.total_cost)
        if result.formula_errors:
            lines = [text, "", "Formula errors (evaluated as 0):"]
            lines.extend(f"  {issue}" for issue in result.formula_errors)
            text = "\n".join(lines)
        return text


class CuttingLayoutFormatter:
    """Formats a cutting layout as a per-material sheet summary."""

    def format(self, layout: "CuttingLayout") -> str:
        lines = [
            "CUTTING LAYOUT",
            "=" * 60,
            f"Strategy:    {layout.strategy.value}",
            f"Materials:   {layout.materials_count}",
            f"Parts:       {layout.total_parts} ({layout.total_units} pieces)",
            f"Sheets:      {layout.sheets_count}",
            f"Waste:       {layout.waste_percentage:.1f}%",
        ]

        for material in layout.materials:
            size = material.sheet_size
            lines.append("")
            lines.append(
                f"{material.material_name} ({size.width:g} x {size.height:g}): "
                f"{material.sheets_count} sheet{'s' if material.sheets_count != 1 else ''}"
            )
            for sheet in material.sheets:
                lines.append(
                    f"  Sheet {sheet.sheet_index + 1}: {sheet.piece_count} "
                    f"piece{'s' if sheet.piece_count != 1 else ''}, "
                    f"{sheet.waste_percentage:.1f}% waste"
                )
                for placement in sheet.placements:
                    unit = placement.unit
                    flag = "  OVERSIZED" if placement.oversized else ""
                    lines.append(
                        f"    {unit.name:<24} {unit.width:>7.1f} x {unit.height:<7.1f} "
                        f"@ ({placement.x:g}, {placement.y:g}){flag}"
                    )

        oversized = layout.oversized_units
        if oversized:
            lines.append("")
            lines.append(f"WARNING: {len(oversized)} piece(s) larger than their sheet")
        return "\n".join(lines)


class JsonExporter:
    """Serialises derivation results and cutting layouts to JSON."""

    def part_to_dict(self, part: "GeneratedPart") -> dict[str, Any]:
        banding = part.edge_banding
        return {
            "name": part.name,
            "part_type": part.part_type,
            "material_id": part.material_id,
            "width": part.width,
            "height": part.height,
            "thickness": part.thickness,
            "quantity": part.quantity,
            "edge_banding_top": banding.top,
            "edge_banding_bottom": banding.bottom,
            "edge_banding_left": banding.left,
            "edge_banding_right": banding.right,
            "edge_material_id": part.edge_material_id,
            "grain_direction": part.grain_direction.value,
            "notes": part.notes,
            "unit_cost": round(part.unit_cost, 4),
            "total_cost": round(part.total_cost, 4),
        }

    def derivation_to_dict(self, result: DerivedParts) -> dict[str, Any]:
        return {
            "parts": [self.part_to_dict(p) for p in result.parts],
            "total_cost": round(result.total_cost, 4),
            "template": result.template.value if result.template else None,
            "formula_errors": [
                {"label": i.label, "formula": i.formula, "message": i.message}
                for i in result.formula_errors
            ],
        }

    def _placement_to_dict(self, placement: "PlacedUnit") -> dict[str, Any]:
        unit = placement.unit
        return {
            "name": unit.name,
            "part_type": unit.part_type,
            "width": unit.width,
            "height": unit.height,
            "x": placement.x,
            "y": placement.y,
            "oversized": placement.oversized,
        }

    def material_layout_to_dict(self, material: "MaterialLayout") -> dict[str, Any]:
        return {
            "material_name": material.material_name,
            "sheet_width": material.sheet_size.width,
            "sheet_height": material.sheet_size.height,
            "sheets_count": material.sheets_count,
            "waste_percentage": round(material.waste_percentage, 2),
            "sheets": [
                {
                    "width": sheet.sheet_size.width,
                    "height": sheet.sheet_size.height,
                    "remaining_width": sheet.remaining_width,
                    "parts": [self._placement_to_dict(p) for p in sheet.placements],
                }
                for sheet in material.sheets
            ],
        }

    def layout_to_dict(self, layout: "CuttingLayout") -> dict[str, Any]:
        return {
            "strategy": layout.strategy.value,
            "materials_count": layout.materials_count,
            "total_parts": layout.total_parts,
            "sheets_count": layout.sheets_count,
            "waste_percentage": round(layout.waste_percentage, 2),
            "optimization": {
                m.material_id or UNASSIGNED_MATERIAL: self.material_layout_to_dict(m)
                for m in layout.materials
            },
        }

    def export_derivation(self, result: DerivedParts) -> str:
        return json.dumps(self.derivation_to_dict(result), indent=2)

    def export_layout(self, layout: "CuttingLayout") -> str:
        return json.dumps(self.layout_to_dict(layout), indent=2)

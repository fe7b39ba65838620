"""Cut diagram rendering for cutting layouts.

This module provides SVG and ASCII rendering of sheet layouts showing unit
placements, dimensions, oversized units and the unused strip of each sheet.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from cabinet_engine.infrastructure.bin_packing import (
    CuttingLayout,
    MaterialLayout,
    PlacedUnit,
    SheetLayout,
)

# Colour per part type tag
PART_TYPE_COLORS: dict[str, str] = {
    "side_panel": "#90EE90",  # Light green
    "horizontal_panel": "#DDA0DD",  # Plum
    "top_panel": "#DDA0DD",
    "bottom_panel": "#DDA0DD",
    "back_panel": "#D3D3D3",  # Light gray
    "shelf": "#87CEEB",  # Sky blue
    "door": "#FFB6C1",  # Light pink
    "drawer_front": "#FFA07A",  # Light salmon
    "drawer_side": "#FFD700",  # Gold
    "drawer_back": "#FFD700",
    "drawer_bottom": "#DEB887",  # Burlywood
    "upright": "#F0E68C",  # Khaki
    "horizontal_divider": "#F0E68C",
}

OVERSIZED_STROKE = "#CC0000"


class CutDiagramRenderer:
    """Renders cut diagrams in SVG and ASCII form.

    Attributes:
        scale: Pixels per millimetre for SVG rendering.
        piece_fill: Fill for part types without a dedicated colour.
        piece_stroke: Stroke colour for piece outlines.
        waste_fill: Fill colour for the unused strip.
        text_color: Colour for labels and dimensions.
        show_dimensions: Whether to show piece dimensions.
        use_type_colors: Whether to colour pieces by part type.
    """

    def __init__(
        self,
        scale: float = 0.25,
        piece_fill: str = "#ADD8E6",  # Light blue
        piece_stroke: str = "#000000",
        waste_fill: str = "#D3D3D3",
        text_color: str = "#000000",
        show_dimensions: bool = True,
        use_type_colors: bool = True,
    ) -> None:
        self.scale = scale
        self.piece_fill = piece_fill
        self.piece_stroke = piece_stroke
        self.waste_fill = waste_fill
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.use_type_colors = use_type_colors

    def render_svg(
        self,
        sheet: SheetLayout,
        material: MaterialLayout,
        total_sheets: int = 1,
    ) -> str:
        """Generate the SVG cut diagram for one sheet.

        Args:
            sheet: Sheet layout with placed units.
            material: Material the sheet belongs to.
            total_sheets: Number of sheets for this material (header text).

        Returns:
            SVG document as a string.
        """
        header_height = 30
        size = sheet.sheet_size
        svg_width = size.width * self.scale
        svg_height = size.height * self.scale + header_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" fill="white"/>',
            self._render_header(sheet, material, total_sheets, svg_width, header_height),
            "  <!-- Sheet outline -->",
            f'  <rect x="0" y="{header_height}" width="{svg_width}" '
            f'height="{size.height * self.scale}" fill="#f5deb3" '
            f'stroke="{self.piece_stroke}" stroke-width="2"/>',
        ]

        waste = self._render_waste_strip(sheet, header_height)
        if waste:
            parts.append("  <!-- Unused strip -->")
            parts.append(waste)

        parts.append("  <!-- Placed parts -->")
        for placement in sheet.placements:
            parts.append(self._render_piece(placement, sheet, header_height))

        parts.append("</svg>")
        return "\n".join(parts)

    def render_all_svg(self, layout: CuttingLayout) -> list[str]:
        """SVG documents for every sheet of every material, in order."""
        documents: list[str] = []
        for material in layout.materials:
            for sheet in material.sheets:
                documents.append(self.render_svg(sheet, material, material.sheets_count))
        return documents

    def render_combined_svg(self, layout: CuttingLayout) -> str:
        """Single SVG document with every sheet stacked vertically."""
        if not layout.sheets_count:
            return (
                '<svg width="200" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No sheets to display</text></svg>'
            )

        header_height = 30
        spacing = 20
        sheets = [(m, s) for m in layout.materials for s in m.sheets]
        svg_width = max(s.sheet_size.width for _, s in sheets) * self.scale
        svg_height = sum(
            s.sheet_size.height * self.scale + header_height + spacing for _, s in sheets
        )

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
        ]
        y_offset = 0.0
        for material, sheet in sheets:
            document = self.render_svg(sheet, material, material.sheets_count)
            inner = document[document.find(">") + 1 : document.rfind("</svg>")]
            parts.append(f'  <g transform="translate(0, {y_offset})">')
            parts.extend(f"  {line}" for line in inner.strip().split("\n") if line.strip())
            parts.append("  </g>")
            y_offset += sheet.sheet_size.height * self.scale + header_height + spacing
        parts.append("</svg>")
        return "\n".join(parts)

    def _render_header(
        self,
        sheet: SheetLayout,
        material: MaterialLayout,
        total_sheets: int,
        svg_width: float,
        header_height: float,
    ) -> str:
        header_text = escape(
            f"{material.material_name} - Sheet {sheet.sheet_index + 1} of {total_sheets} - "
            f"{sheet.waste_percentage:.1f}% waste"
        )
        return (
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{header_text}</text>'
        )

    def _render_piece(
        self,
        placement: PlacedUnit,
        sheet: SheetLayout,
        header_height: float,
    ) -> str:
        unit = placement.unit
        x = placement.x * self.scale
        # SVG y grows downwards; sheet offsets are measured from the bottom edge.
        y = header_height + (sheet.sheet_size.height - placement.top_edge) * self.scale
        y = max(y, header_height)
        w = unit.width * self.scale
        h = unit.height * self.scale

        if self.use_type_colors:
            fill = PART_TYPE_COLORS.get(unit.part_type, self.piece_fill)
        else:
            fill = self.piece_fill
        stroke = OVERSIZED_STROKE if placement.oversized else self.piece_stroke

        font_size = min(12, min(w, h) / 4)
        rect = (
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{fill}" stroke="{stroke}"/>'
        )
        if font_size < 5:
            return f"  <g>\n{rect}\n  </g>"

        label = escape(unit.name + (" (oversized)" if placement.oversized else ""))
        lines = [
            "  <g>",
            rect,
            f'    <text x="{x + w / 2}" y="{y + h / 2}" text-anchor="middle" '
            f'font-family="Arial, sans-serif" font-size="{font_size}" '
            f'fill="{self.text_color}">{label}</text>',
        ]
        if self.show_dimensions:
            lines.append(
                f'    <text x="{x + w / 2}" y="{y + h / 2 + font_size + 2}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size * 0.8}" fill="{self.text_color}">'
                f"{unit.width:g} x {unit.height:g}</text>"
            )
        lines.append("  </g>")
        return "\n".join(lines)

    def _render_waste_strip(self, sheet: SheetLayout, header_height: float) -> str:
        """Unused area to the right of the rightmost placement."""
        if not sheet.placements:
            return ""
        size = sheet.sheet_size
        max_x = max(p.right_edge for p in sheet.placements)
        waste_width = size.width - max_x
        if waste_width <= 1:
            return ""
        return (
            f'  <rect x="{max_x * self.scale}" y="{header_height}" '
            f'width="{waste_width * self.scale}" height="{size.height * self.scale}" '
            f'fill="{self.waste_fill}" stroke="none"/>'
        )

    def render_ascii(
        self,
        sheet: SheetLayout,
        material: MaterialLayout,
        width: int = 80,
        total_sheets: int = 1,
    ) -> str:
        """Generate an ASCII cut diagram for one sheet.

        Args:
            sheet: Sheet layout with placed units.
            material: Material the sheet belongs to.
            width: Terminal width in characters.
            total_sheets: Number of sheets for this material (header text).

        Returns:
            Multi-line string.
        """
        size = sheet.sheet_size
        usable_width = width - 2
        scale_x = usable_width / size.width
        grid_height = max(int(usable_width * (size.height / size.width) * 0.5), 10)
        scale_y = grid_height / size.height

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]
        # Row 0 of the grid is the top edge of the sheet.
        for placement in sheet.placements:
            self._draw_piece_ascii(grid, placement, size.height, scale_x, scale_y)

        lines = [
            f"{material.material_name} - Sheet {sheet.sheet_index + 1} of {total_sheets} - "
            f"{sheet.waste_percentage:.1f}% waste",
            "+" + "-" * usable_width + "+",
        ]
        lines.extend("|" + "".join(row) + "|" for row in grid)
        lines.append("+" + "-" * usable_width + "+")

        oversized = [p.unit.name for p in sheet.placements if p.oversized]
        if oversized:
            lines.append(f"! Oversized: {', '.join(oversized)}")
        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: PlacedUnit,
        sheet_height: float,
        scale_x: float,
        scale_y: float,
    ) -> None:
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        x1 = int(placement.x * scale_x)
        x2 = int(placement.right_edge * scale_x)
        y1 = int((sheet_height - placement.top_edge) * scale_y)
        y2 = int((sheet_height - placement.y) * scale_y)

        x1 = max(0, min(x1, grid_width - 1))
        x2 = max(0, min(x2, grid_width - 1))
        y1 = max(0, min(y1, grid_height - 1))
        y2 = max(0, min(y2, grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"
        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"
        for y, x in ((y1, x1), (y1, x2), (y2, x1), (y2, x2)):
            grid[y][x] = "+"

        unit = placement.unit
        room = x2 - x1 - 1
        for row, text in ((y1 + 1, unit.name), (y1 + 2, f"{unit.width:.0f}x{unit.height:.0f}")):
            if row >= y2 or room <= 0:
                break
            for i, char in enumerate(text[:room]):
                grid[row][x1 + 1 + i] = char

    def render_all_ascii(self, layout: CuttingLayout, width: int = 80) -> str:
        """ASCII diagrams for all sheets followed by a summary."""
        if not layout.materials:
            return "No sheets to display."

        parts: list[str] = []
        for material in layout.materials:
            for sheet in material.sheets:
                parts.append(self.render_ascii(sheet, material, width, material.sheets_count))
                parts.append("")

        total = layout.sheets_count
        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {total} sheet{'s' if total != 1 else ''}, "
            f"{layout.waste_percentage:.1f}% total waste"
        )
        for material in layout.materials:
            count = material.sheets_count
            parts.append(
                f"  {material.material_name}: {count} sheet{'s' if count != 1 else ''}"
            )
        return "\n".join(parts)

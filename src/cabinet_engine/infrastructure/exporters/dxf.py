"""DXF export of cutting layouts.

Generates one 2D DXF document (R2010) with every stock sheet laid out
left to right, grouped by material, and each placed part drawn as a
rectangle with a label. Coordinates are millimetres.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import ezdxf
from ezdxf import units

from cabinet_engine.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from cabinet_engine.infrastructure.bin_packing import (
        CuttingLayout,
        MaterialLayout,
        PlacedUnit,
        SheetLayout,
    )


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "SHEETS": {"color": 7},  # White - stock sheet outlines
    "PARTS": {"color": 3},  # Green - placed part outlines
    "OVERSIZED": {"color": 1},  # Red - parts larger than their sheet
    "LABELS": {"color": 5},  # Blue - text labels
}


@ExporterRegistry.register("dxf")
class LayoutDxfExporter:
    """Exports cutting layouts to DXF for CNC or panel saw planning.

    Attributes:
        sheet_spacing: Gap between sheets in mm.
        material_spacing: Extra vertical gap between material rows in mm.
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"
    media_type: ClassVar[str] = "application/dxf"

    def __init__(self, sheet_spacing: float = 100.0, material_spacing: float = 300.0) -> None:
        self.sheet_spacing = sheet_spacing
        self.material_spacing = material_spacing

    def export(self, layout: "CuttingLayout", path: Path) -> None:
        """Write the layout to a DXF file at ``path``."""
        doc = self.build_document(layout)
        doc.saveas(path)
        logger.info("Exported DXF cutting layout to %s", path)

    def export_string(self, layout: "CuttingLayout") -> str:
        """DXF content as a string."""
        doc = self.build_document(layout)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def build_document(self, layout: "CuttingLayout") -> "Drawing":
        """Create a DXF document containing every sheet of ``layout``."""
        doc = ezdxf.new("R2010")
        doc.units = units.MM
        for name, props in LAYERS.items():
            doc.layers.add(name, color=props["color"])

        msp = doc.modelspace()
        row_top = 0.0
        for material in layout.materials:
            row_height = self._draw_material(msp, material, row_top)
            row_top -= row_height + self.material_spacing

        if not layout.materials:
            logger.warning("No sheets to export")
        return doc

    def _draw_material(self, msp: "Modelspace", material: "MaterialLayout", top: float) -> float:
        size = material.sheet_size
        bottom = top - size.height
        x = 0.0
        for sheet in material.sheets:
            self._draw_sheet(msp, material, sheet, x, bottom)
            x += size.width + self.sheet_spacing
        return size.height

    def _draw_sheet(
        self,
        msp: "Modelspace",
        material: "MaterialLayout",
        sheet: "SheetLayout",
        offset_x: float,
        offset_y: float,
    ) -> None:
        size = sheet.sheet_size
        self._draw_rect(msp, offset_x, offset_y, size.width, size.height, "SHEETS")
        msp.add_mtext(
            f"{material.material_name} - sheet {sheet.sheet_index + 1}",
            dxfattribs={
                "layer": "LABELS",
                "char_height": 30.0,
                "insert": (offset_x, offset_y + size.height + 50.0),
                "attachment_point": 7,  # BOTTOM_LEFT
            },
        )
        for placement in sheet.placements:
            self._draw_placement(msp, placement, offset_x, offset_y)

    def _draw_placement(
        self,
        msp: "Modelspace",
        placement: "PlacedUnit",
        offset_x: float,
        offset_y: float,
    ) -> None:
        unit = placement.unit
        x = offset_x + placement.x
        y = offset_y + placement.y
        layer = "OVERSIZED" if placement.oversized else "PARTS"
        self._draw_rect(msp, x, y, unit.width, unit.height, layer)

        text_height = max(8.0, min(40.0, min(unit.width, unit.height) * 0.08))
        msp.add_mtext(
            f"{unit.name}\n{unit.width:g} x {unit.height:g}",
            dxfattribs={
                "layer": "LABELS",
                "char_height": text_height,
                "insert": (x + unit.width / 2, y + unit.height / 2),
                "attachment_point": 5,  # MIDDLE_CENTER
            },
        )

    def _draw_rect(
        self,
        msp: "Modelspace",
        x: float,
        y: float,
        width: float,
        height: float,
        layer: str,
    ) -> None:
        points = [
            (x, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height),
            (x, y),
        ]
        msp.add_lwpolyline(points, dxfattribs={"layer": layer})


__all__ = ["LAYERS", "LayoutDxfExporter"]

"""Infrastructure layer - packing, rendering, formatters and exporters."""

from .bin_packing import (
    CuttingLayout,
    CuttingStockPacker,
    MaterialLayout,
    PackingStrategy,
    PlacedUnit,
    PlacementUnit,
    SheetLayout,
)
from .cut_diagram_renderer import CutDiagramRenderer
from .exporters import (
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonLayoutExporter,
    LayoutDxfExporter,
    SvgExporter,
)
from .formatters import CuttingLayoutFormatter, JsonExporter, PartListFormatter

__all__ = [
    "CutDiagramRenderer",
    "CuttingLayout",
    "CuttingLayoutFormatter",
    "CuttingStockPacker",
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "JsonExporter",
    "JsonLayoutExporter",
    "LayoutDxfExporter",
    "MaterialLayout",
    "PackingStrategy",
    "PartListFormatter",
    "PlacedUnit",
    "PlacementUnit",
    "SheetLayout",
    "SvgExporter",
]

"""Exporter framework for cutting layouts.

Registered exporters:
- dxf: DXF drawing of every sheet with placed parts (ezdxf)
- json: per-material optimisation result
- svg: SVG cut diagrams

Usage:
    from cabinet_engine.infrastructure.exporters import ExporterRegistry

    exporter = ExporterRegistry.get("dxf")()
    exporter.export(layout, Path("layout.dxf"))
"""

from cabinet_engine.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)
from cabinet_engine.infrastructure.exporters.dxf import LayoutDxfExporter
from cabinet_engine.infrastructure.exporters.json_layout import JsonLayoutExporter
from cabinet_engine.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "JsonLayoutExporter",
    "LayoutDxfExporter",
    "SvgExporter",
]

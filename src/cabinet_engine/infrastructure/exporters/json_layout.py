"""JSON exporter for cutting layouts."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cabinet_engine.infrastructure.exporters.base import ExporterRegistry
from cabinet_engine.infrastructure.formatters import JsonExporter

if TYPE_CHECKING:
    from cabinet_engine.infrastructure.bin_packing import CuttingLayout


@ExporterRegistry.register("json")
class JsonLayoutExporter:
    """Writes the per-material optimisation result as JSON."""

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"
    media_type: ClassVar[str] = "application/json"

    def __init__(self) -> None:
        self.serializer = JsonExporter()

    def export(self, layout: "CuttingLayout", path: Path) -> None:
        path.write_text(self.export_string(layout))

    def export_string(self, layout: "CuttingLayout") -> str:
        return self.serializer.export_layout(layout)

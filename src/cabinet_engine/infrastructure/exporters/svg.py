"""SVG cut diagram export."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cabinet_engine.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cabinet_engine.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cabinet_engine.infrastructure.bin_packing import CuttingLayout


@ExporterRegistry.register("svg")
class SvgExporter:
    """Writes cut diagrams of every sheet as SVG.

    ``export`` produces one document with the sheets stacked top to
    bottom; ``export_individual_sheets`` writes one file per sheet.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"
    media_type: ClassVar[str] = "image/svg+xml"

    def __init__(self, renderer: CutDiagramRenderer | None = None) -> None:
        self.renderer = renderer or CutDiagramRenderer()

    def export(self, layout: "CuttingLayout", path: Path) -> None:
        path.write_text(self.export_string(layout), encoding="utf-8")

    def export_string(self, layout: "CuttingLayout") -> str:
        return self.renderer.render_combined_svg(layout)

    def export_individual_sheets(self, layout: "CuttingLayout", base_path: Path) -> list[Path]:
        """Write sheet ``n`` of the layout to ``{stem}_{n}{suffix}``.

        A layout with a single sheet is written to ``base_path`` itself.
        """
        documents = self.renderer.render_all_svg(layout)
        if len(documents) == 1:
            targets = [base_path]
        else:
            suffix = base_path.suffix or ".svg"
            targets = [
                base_path.with_name(f"{base_path.stem}_{n}{suffix}")
                for n in range(1, len(documents) + 1)
            ]
        for target, document in zip(targets, documents):
            target.write_text(document, encoding="utf-8")
        return targets

"""Unit tests for the cutting layout exporter framework and exporters.

Tests cover:
- ExporterRegistry registration and lookup
- ExportManager writing several formats at once
- DXF export built with ezdxf (sheet and part polylines, layers)
- SVG and JSON exporters
"""

import json
from io import StringIO
from pathlib import Path

import ezdxf
import pytest

from cabinet_engine.domain import GeneratedPart, SheetSize
from cabinet_engine.infrastructure import (
    CuttingLayout,
    CuttingStockPacker,
    ExporterRegistry,
    ExportManager,
    JsonLayoutExporter,
    LayoutDxfExporter,
    SvgExporter,
)


# =============================================================================
# Fixtures
# =============================================================================


def panel(name: str, width: float, height: float, material_id: str = "oak") -> GeneratedPart:
    return GeneratedPart(
        name=name,
        part_type="side_panel",
        material_id=material_id,
        width=width,
        height=height,
        thickness=18,
    )


@pytest.fixture
def layout() -> CuttingLayout:
    """One oak sheet with two sides and one oversized piece on its own sheet."""
    packer = CuttingStockPacker(default_sheet_size=SheetSize(width=1000, height=1000))
    return packer.pack(
        [panel("Left Side", 400, 700), panel("Right Side", 400, 700), panel("Worktop", 1500, 40)],
        material_names={"oak": "Oak Veneer"},
    )


# =============================================================================
# Registry and manager
# =============================================================================


class TestExporterRegistry:
    """Tests for ExporterRegistry."""

    def test_builtin_formats_registered(self) -> None:
        assert ExporterRegistry.available_formats() == ["dxf", "json", "svg"]

    def test_get_returns_class(self) -> None:
        assert ExporterRegistry.get("dxf") is LayoutDxfExporter
        assert ExporterRegistry.get("svg") is SvgExporter
        assert ExporterRegistry.get("json") is JsonLayoutExporter

    def test_unknown_format(self) -> None:
        with pytest.raises(KeyError, match="Available formats"):
            ExporterRegistry.get("pdf")
        assert not ExporterRegistry.is_registered("pdf")


class TestExportManager:
    """Tests for ExportManager."""

    def test_export_all(self, layout: CuttingLayout, tmp_path: Path) -> None:
        manager = ExportManager(tmp_path / "out")
        written = manager.export_all(["json", "svg", "dxf"], layout, project_name="kitchen")

        assert set(written) == {"json", "svg", "dxf"}
        assert written["json"] == tmp_path / "out" / "kitchen.json"
        assert all(path.exists() for path in written.values())

    def test_unknown_format_raises(self, layout: CuttingLayout, tmp_path: Path) -> None:
        with pytest.raises(KeyError):
            ExportManager(tmp_path).export_all(["pdf"], layout)


# =============================================================================
# DXF
# =============================================================================


class TestLayoutDxfExporter:
    """Tests for the ezdxf based DXF exporter."""

    def test_export_string_is_dxf(self, layout: CuttingLayout) -> None:
        content = LayoutDxfExporter().export_string(layout)
        assert "LWPOLYLINE" in content
        assert "SECTION" in content

    def test_one_polyline_per_sheet_and_part(self, layout: CuttingLayout) -> None:
        doc = ezdxf.read(StringIO(LayoutDxfExporter().export_string(layout)))
        polylines = doc.modelspace().query("LWPOLYLINE")
        # 2 sheets + 3 parts
        assert len(polylines) == 5

    def test_layers(self, layout: CuttingLayout) -> None:
        doc = LayoutDxfExporter().build_document(layout)
        msp = doc.modelspace()
        layers = [e.dxf.layer for e in msp.query("LWPOLYLINE")]
        assert layers.count("SHEETS") == 2
        assert layers.count("PARTS") == 2
        assert layers.count("OVERSIZED") == 1

    def test_labels(self, layout: CuttingLayout) -> None:
        doc = LayoutDxfExporter().build_document(layout)
        texts = [e.text for e in doc.modelspace().query("MTEXT")]
        assert "Oak Veneer - sheet 1" in texts
        assert any(text.startswith("Left Side") for text in texts)

    def test_export_file(self, layout: CuttingLayout, tmp_path: Path) -> None:
        path = tmp_path / "layout.dxf"
        LayoutDxfExporter().export(layout, path)
        assert path.exists()
        assert len(ezdxf.readfile(path).modelspace().query("LWPOLYLINE")) == 5

    def test_empty_layout(self) -> None:
        doc = ezdxf.read(StringIO(LayoutDxfExporter().export_string(CuttingLayout())))
        assert len(doc.modelspace().query("LWPOLYLINE")) == 0


# =============================================================================
# SVG and JSON
# =============================================================================


class TestSvgExporter:
    """Tests for the SVG exporter."""

    def test_export_string(self, layout: CuttingLayout) -> None:
        content = SvgExporter().export_string(layout)
        assert content.startswith("<svg")
        assert "Left Side" in content
        assert content.count('<g transform="translate') == 2

    def test_export_individual_sheets(self, layout: CuttingLayout, tmp_path: Path) -> None:
        paths = SvgExporter().export_individual_sheets(layout, tmp_path / "sheet.svg")
        assert [p.name for p in paths] == ["sheet_1.svg", "sheet_2.svg"]
        assert all(p.read_text().startswith("<svg") for p in paths)


class TestJsonLayoutExporter:
    """Tests for the JSON layout exporter."""

    def test_export_string(self, layout: CuttingLayout) -> None:
        data = json.loads(JsonLayoutExporter().export_string(layout))
        assert data["strategy"] == "single_row"
        assert data["materials_count"] == 1
        assert data["total_parts"] == 3
        assert data["sheets_count"] == 2
        oak = data["optimization"]["oak"]
        assert oak["material_name"] == "Oak Veneer"
        assert oak["sheet_width"] == 1000
        assert len(oak["sheets"]) == 2

    def test_export_file(self, layout: CuttingLayout, tmp_path: Path) -> None:
        path = tmp_path / "layout.json"
        JsonLayoutExporter().export(layout, path)
        assert json.loads(path.read_text())["sheets_count"] == 2

"""Integration tests for the REST API.

These tests verify the endpoints end-to-end through FastAPI's TestClient,
including:
- Derivation with catalog models, materials and overrides
- Error mapping for unknown models, unknown materials and bad catalogs
- Cutting optimisation and layout export formats
- Formula evaluation and catalog validation
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from cabinet_engine.application import ServiceFactory
from cabinet_engine.application.config import EngineSettings
from cabinet_engine.web.app import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def parts() -> list[dict[str, Any]]:
    """Two oak panels, one of them larger than its sheet, and a hardware line."""
    return [
        {
            "name": "Side",
            "part_type": "side_panel",
            "material_id": "oak-18",
            "width": 560,
            "height": 720,
            "thickness": 18,
            "quantity": 2,
        },
        {
            "name": "Worktop",
            "part_type": "worktop",
            "material_id": "oak-18",
            "width": 3000,
            "height": 600,
            "thickness": 38,
        },
        {
            "name": "Hinge",
            "part_type": "hardware",
            "width": 0,
            "height": 0,
            "quantity": 4,
        },
    ]


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


# =============================================================================
# Derive
# =============================================================================


class TestDeriveEndpoint:
    """Tests for POST /api/v1/derive."""

    def test_declarative_model(
        self, client: TestClient, valid_catalog_data: dict[str, Any]
    ) -> None:
        response = client.post(
            "/api/v1/derive",
            json={
                "catalog": valid_catalog_data,
                "model": "base-600",
                "materials": {"panel": "oak-18", "back": "mdf-6"},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["model_id"] == "base-600"
        assert data["template"] is None
        assert data["parts"][0]["name"] == "Side Panel 1"
        assert len(data["parts"]) == 10
        assert data["total_cost"] == pytest.approx(
            sum(p["total_cost"] for p in data["parts"]), abs=0.01
        )

    def test_template_model_with_dimensions(
        self, client: TestClient, valid_catalog_data: dict[str, Any]
    ) -> None:
        response = client.post(
            "/api/v1/derive",
            json={
                "catalog": valid_catalog_data,
                "model": "wall-500",
                "dimensions": {"width": 400, "height": 720, "depth": 320},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["template"] == "wall"
        doors = [p for p in data["parts"] if p["name"] == "Door"]
        assert doors[0]["width"] == 390

    def test_hardware_overrides(
        self, client: TestClient, valid_catalog_data: dict[str, Any]
    ) -> None:
        response = client.post(
            "/api/v1/derive",
            json={
                "catalog": valid_catalog_data,
                "model": "base-600",
                "hardware": {"shelf_count": 3},
            },
        )
        assert response.status_code == 200
        pins = next(p for p in response.json()["parts"] if p["name"] == "Shelf Pin")
        assert pins["quantity"] == 12

    def test_model_not_found(
        self, client: TestClient, valid_catalog_data: dict[str, Any]
    ) -> None:
        response = client.post(
            "/api/v1/derive", json={"catalog": valid_catalog_data, "model": "corner-900"}
        )
        assert response.status_code == 404
        assert response.json()["error_type"] == "model_not_found"
        assert response.json()["details"] == {"model": "corner-900"}

    def test_material_not_found(
        self, client: TestClient, valid_catalog_data: dict[str, Any]
    ) -> None:
        response = client.post(
            "/api/v1/derive",
            json={
                "catalog": valid_catalog_data,
                "model": "base-600",
                "materials": {"panel": "walnut-18"},
            },
        )
        assert response.status_code == 404
        assert response.json()["error_type"] == "material_not_found"

    def test_dimensions_out_of_range(
        self, client: TestClient, valid_catalog_data: dict[str, Any]
    ) -> None:
        response = client.post(
            "/api/v1/derive",
            json={
                "catalog": valid_catalog_data,
                "model": "base-600",
                "dimensions": {"width": 1300, "height": 720, "depth": 560},
            },
        )
        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "derivation"
        assert data["details"] == [{"message": "Width must be between 300mm and 1200mm"}]

    def test_invalid_catalog(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/derive",
            json={"catalog": {"schema_version": "1.0", "colour": "oak"}, "model": "x"},
        )
        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "validation"
        assert data["details"][0]["path"] == "colour"

    def test_strict_formulas(
        self, client: TestClient, valid_catalog_data: dict[str, Any]
    ) -> None:
        valid_catalog_data["settings"] = {"strict_formulas": True}
        valid_catalog_data["part_types"][3]["width_formula"] = "cabinet_width - plinth"
        response = client.post(
            "/api/v1/derive", json={"catalog": valid_catalog_data, "model": "base-600"}
        )
        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "formula"
        assert data["details"]["formula"] == "cabinet_width - plinth"


# =============================================================================
# Optimize
# =============================================================================


class TestOptimizeEndpoint:
    """Tests for the /api/v1/optimize endpoints."""

    def test_optimize(self, client: TestClient, parts: list[dict[str, Any]]) -> None:
        response = client.post(
            "/api/v1/optimize",
            json={
                "parts": parts,
                "material_sheet_dims": {"oak-18": {"width": 2440, "height": 1220}},
                "material_names": {"oak-18": "Oak Veneer 18mm"},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["strategy"] == "single_row"
        assert data["materials_count"] == 1
        assert data["total_parts"] == 2
        oak = data["optimization"]["oak-18"]
        assert oak["material_name"] == "Oak Veneer 18mm"
        placed = [p for sheet in oak["sheets"] for p in sheet["parts"]]
        assert len(placed) == 3
        assert [p["name"] for p in placed if p["oversized"]] == ["Worktop"]

    def test_shelf_strategy(self, client: TestClient, parts: list[dict[str, Any]]) -> None:
        response = client.post("/api/v1/optimize", json={"parts": parts, "strategy": "shelf"})
        assert response.status_code == 200
        assert response.json()["strategy"] == "shelf"

    def test_factory_strategy(self, parts: list[dict[str, Any]]) -> None:
        factory = ServiceFactory(settings=EngineSettings(packing_strategy="shelf"))
        client = TestClient(create_app(factory=factory))
        response = client.post("/api/v1/optimize", json={"parts": parts})
        assert response.status_code == 200
        assert response.json()["strategy"] == "shelf"

    def test_unknown_strategy_rejected(
        self, client: TestClient, parts: list[dict[str, Any]]
    ) -> None:
        response = client.post(
            "/api/v1/optimize", json={"parts": parts, "strategy": "guillotine"}
        )
        assert response.status_code == 422

    def test_formats(self, client: TestClient) -> None:
        response = client.get("/api/v1/optimize/formats")
        assert response.status_code == 200
        assert response.json()["formats"] == ["dxf", "json", "svg"]

    @pytest.mark.parametrize(
        ("format_name", "media_type", "marker"),
        [
            ("svg", "image/svg+xml", "<svg"),
            ("json", "application/json", '"optimization"'),
            ("dxf", "application/dxf", "SECTION"),
        ],
    )
    def test_export(
        self,
        client: TestClient,
        parts: list[dict[str, Any]],
        format_name: str,
        media_type: str,
        marker: str,
    ) -> None:
        response = client.post(f"/api/v1/optimize/export/{format_name}", json={"parts": parts})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(media_type)
        assert f"cutting_layout.{format_name}" in response.headers["content-disposition"]
        assert marker in response.text

    def test_export_unknown_format(
        self, client: TestClient, parts: list[dict[str, Any]]
    ) -> None:
        response = client.post("/api/v1/optimize/export/pdf", json={"parts": parts})
        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "unsupported_format"
        assert data["details"]["available"] == ["dxf", "json", "svg"]


# =============================================================================
# Evaluate and validate
# =============================================================================


class TestEvaluateEndpoint:
    """Tests for POST /api/v1/evaluate."""

    def test_ok(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/evaluate",
            json={"formula": "cabinet_width / door_count - 3", "variables": {
                "cabinet_width": 600, "door_count": 2,
            }},
        )
        assert response.status_code == 200
        assert response.json() == {
            "formula": "cabinet_width / door_count - 3",
            "ok": True,
            "value": 297.0,
            "error": None,
        }

    def test_failure_is_not_http_error(self, client: TestClient) -> None:
        response = client.post("/api/v1/evaluate", json={"formula": "shelf_count * 4"})
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is False
        assert data["value"] is None
        assert "unknown identifier" in data["error"]

    def test_deeply_nested_formula(self, client: TestClient) -> None:
        formula = "(" * 400 + "1" + ")" * 400
        response = client.post("/api/v1/evaluate", json={"formula": formula})
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is False
        assert data["error"] == "formula nested too deeply"


class TestValidateEndpoint:
    """Tests for POST /api/v1/validate."""

    def test_valid(self, client: TestClient, valid_catalog_data: dict[str, Any]) -> None:
        response = client.post("/api/v1/validate", json={"catalog": valid_catalog_data})
        assert response.status_code == 200
        assert response.json() == {"is_valid": True, "errors": [], "warnings": []}

    def test_reference_errors(
        self, client: TestClient, valid_catalog_data: dict[str, Any]
    ) -> None:
        valid_catalog_data["projects"][0]["items"][0]["model"] = "base-900"
        response = client.post("/api/v1/validate", json={"catalog": valid_catalog_data})
        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is False
        assert data["errors"] == [
            {"message": "unknown model 'base-900'", "path": "projects[0].items[0].model"}
        ]

    def test_schema_error(self, client: TestClient) -> None:
        response = client.post("/api/v1/validate", json={"catalog": {"models": []}})
        assert response.status_code == 422
        assert response.json()["error_type"] == "validation"

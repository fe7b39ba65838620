"""Unit tests for catalog loading and error reporting."""

import json
from pathlib import Path
from typing import Any

import pytest

from cabinet_engine.application.config import (
    CatalogConfiguration,
    ConfigError,
    load_catalog,
    load_catalog_from_dict,
)
from cabinet_engine.application.config.loader import _format_json_path


class TestLoadCatalog:
    """Tests for load_catalog."""

    def test_valid_file(self, valid_catalog_path: Path) -> None:
        catalog = load_catalog(valid_catalog_path)
        assert isinstance(catalog, CatalogConfiguration)
        assert len(catalog.models) == 3

    def test_file_not_found(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.json"
        with pytest.raises(ConfigError) as exc_info:
            load_catalog(path)
        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == path
        assert "Catalog file not found" in str(exc_info.value)

    def test_invalid_json(self, catalogs_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_catalog(catalogs_path / "invalid_json.json")
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] >= 1
        assert "column" in error.details[0]

    def test_unknown_field(self, catalogs_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_catalog(catalogs_path / "unknown_field.json")
        error = exc_info.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "colour"
        assert error.message.startswith("Catalog validation failed:")

    def test_nested_error_path(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        data: dict[str, Any] = {
            "schema_version": "1.0",
            "models": [
                {
                    "id": "b",
                    "name": "B",
                    "default_width": -1,
                    "default_height": 720,
                    "default_depth": 560,
                }
            ],
        }
        path.write_text(json.dumps(data))
        with pytest.raises(ConfigError) as exc_info:
            load_catalog(path)
        detail = exc_info.value.details[0]
        assert detail["path"] == "models[0].default_width"
        assert detail["value"] == -1
        assert "(got: -1)" in exc_info.value.message


class TestLoadCatalogFromDict:
    """Tests for load_catalog_from_dict."""

    def test_valid(self, valid_catalog_data: dict[str, Any]) -> None:
        assert load_catalog_from_dict(valid_catalog_data).projects[0].name == "Kitchen"

    def test_invalid(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_catalog_from_dict({"models": []})
        assert exc_info.value.error_type == "validation"
        assert exc_info.value.path is None
        assert exc_info.value.details[0]["path"] == "schema_version"


class TestFormatJsonPath:
    """Tests for JSON path formatting."""

    @pytest.mark.parametrize(
        ("loc", "expected"),
        [
            (("models", 0, "default_width"), "models[0].default_width"),
            (("settings", "packing_strategy"), "settings.packing_strategy"),
            (("models", 1, "parts", 2, "part_type"), "models[1].parts[2].part_type"),
            ((0,), "[0]"),
        ],
    )
    def test_format(self, loc: tuple[str | int, ...], expected: str) -> None:
        assert _format_json_path(loc) == expected

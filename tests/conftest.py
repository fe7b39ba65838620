"""Pytest configuration and shared fixtures for cabinet engine tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from cabinet_engine.application.config import Catalog


CATALOGS_PATH = Path(__file__).parent / "fixtures" / "catalogs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Catalog fixtures
# =============================================================================


@pytest.fixture
def catalogs_path() -> Path:
    """Directory holding the JSON catalog fixtures."""
    return CATALOGS_PATH


@pytest.fixture
def valid_catalog_path() -> Path:
    return CATALOGS_PATH / "valid_catalog.json"


@pytest.fixture
def valid_catalog_data(valid_catalog_path: Path) -> dict[str, Any]:
    """Raw JSON of the valid catalog, for API requests and schema tests."""
    return json.loads(valid_catalog_path.read_text(encoding="utf-8"))


@pytest.fixture
def catalog(valid_catalog_path: Path) -> "Catalog":
    """The valid catalog resolved into domain entities."""
    from cabinet_engine.application.config import build_catalog, load_catalog

    return build_catalog(load_catalog(valid_catalog_path))


# =============================================================================
# Factory isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_default_factory():
    """Make sure no test leaks a custom default ServiceFactory."""
    from cabinet_engine.application.factory import reset_factory

    yield
    reset_factory()

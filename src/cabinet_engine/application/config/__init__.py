"""Catalog schema, loading and validation.

This package provides JSON-based catalog loading and validation. It
includes Pydantic models for the catalog schema, a loader with error
handling, an adapter to domain entities, and catalog checks.

Public API:
    - CatalogConfiguration: Root catalog model
    - EngineSettings: Engine settings block
    - load_catalog: Load a catalog from a JSON file
    - load_catalog_from_dict: Load a catalog from a dictionary
    - ConfigError: Exception for catalog errors
    - build_catalog: Resolve a catalog into domain entities
    - Catalog: Resolved catalog index
    - ValidationResult: Container for validation results
    - validate_catalog: Perform full catalog validation

Example:
    >>> from pathlib import Path
    >>> from cabinet_engine.application.config import build_catalog, load_catalog, ConfigError
    >>>
    >>> try:
    ...     catalog = build_catalog(load_catalog(Path("catalog.json")))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cabinet_engine.application.config.adapter import (
    Catalog,
    build_catalog,
    to_dimensions,
    to_edge_banding,
    to_overrides,
)
from cabinet_engine.application.config.loader import (
    ConfigError,
    load_catalog,
    load_catalog_from_dict,
)
from cabinet_engine.application.config.schema import (
    SUPPORTED_VERSIONS,
    AccessoryAssociationConfig,
    AccessoryConfig,
    CatalogConfiguration,
    EdgeBandingConfig,
    EngineSettings,
    HardwareOverridesConfig,
    MaterialConfig,
    MaterialSelectionConfig,
    ModelConfig,
    PartAssociationConfig,
    PartTypeConfig,
    ProjectConfig,
    ProjectItemConfig,
)
from cabinet_engine.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_catalog,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "AccessoryAssociationConfig",
    "AccessoryConfig",
    "Catalog",
    "CatalogConfiguration",
    "ConfigError",
    "EdgeBandingConfig",
    "EngineSettings",
    "HardwareOverridesConfig",
    "MaterialConfig",
    "MaterialSelectionConfig",
    "ModelConfig",
    "PartAssociationConfig",
    "PartTypeConfig",
    "ProjectConfig",
    "ProjectItemConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "build_catalog",
    "load_catalog",
    "load_catalog_from_dict",
    "to_dimensions",
    "to_edge_banding",
    "to_overrides",
    "validate_catalog",
]

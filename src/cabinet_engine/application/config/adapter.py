"""Adapter from CatalogConfiguration to domain entities.

This module turns the Pydantic catalog models into the immutable domain
entities used by the derivation service, resolving every name reference
(part types, accessories, materials, models) along the way. Unresolved
references are collected and reported together as one ConfigError with
error_type "reference".
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from cabinet_engine.application.config.loader import ConfigError
from cabinet_engine.application.config.schema import (
    AccessoryConfig,
    CatalogConfiguration,
    EdgeBandingConfig,
    EngineSettings,
    HardwareOverridesConfig,
    MaterialConfig,
    MaterialSelectionConfig,
    ModelConfig,
    PartTypeConfig,
    ProjectConfig,
    ProjectItemConfig,
)
from cabinet_engine.domain.entities import (
    Accessory,
    AccessoryAssociation,
    CabinetModel,
    Material,
    MaterialSelection,
    PartType,
    PartTypeAssociation,
)
from cabinet_engine.domain.exceptions import MaterialNotFoundError, ModelNotFoundError
from cabinet_engine.domain.value_objects import (
    CabinetDimensions,
    EdgeBanding,
    HardwareOverrides,
    MaterialType,
    SheetSize,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Catalog:
    """Resolved catalog: domain entities indexed by their keys.

    Attributes:
        materials: Materials by id.
        models: Cabinet models by id.
        projects: Project definitions by name.
        settings: Engine settings from the catalog file.
    """

    materials: dict[str, Material] = field(default_factory=dict)
    models: dict[str, CabinetModel] = field(default_factory=dict)
    projects: dict[str, ProjectConfig] = field(default_factory=dict)
    settings: EngineSettings = field(default_factory=EngineSettings)

    def find_model(self, ref: str) -> CabinetModel:
        """Look up a model by id, then by exact name.

        Raises:
            ModelNotFoundError: If no model matches.
        """
        model = self.models.get(ref)
        if model is not None:
            return model
        for candidate in self.models.values():
            if candidate.name == ref:
                return candidate
        raise ModelNotFoundError(ref)

    def find_material(self, ref: str) -> Material:
        """Look up a material by id.

        Raises:
            MaterialNotFoundError: If no material matches.
        """
        try:
            return self.materials[ref]
        except KeyError:
            raise MaterialNotFoundError(ref) from None

    def find_project(self, name: str) -> ProjectConfig:
        try:
            return self.projects[name]
        except KeyError:
            raise ConfigError(
                message=f"Project not found: {name}",
                error_type="reference",
                details=[{"path": "projects", "message": f"unknown project '{name}'"}],
            ) from None

    def resolve_materials(self, selection: MaterialSelectionConfig) -> MaterialSelection:
        """Materials for a selection of ids; unset ids stay unselected.

        Raises:
            MaterialNotFoundError: If a selected id is not in the catalog.
        """

        def pick(ref: str | None) -> Material | None:
            return self.find_material(ref) if ref is not None else None

        return MaterialSelection(
            panel=pick(selection.panel),
            edge=pick(selection.edge),
            back=pick(selection.back),
            door=pick(selection.door),
        )

    def sheet_sizes(self) -> dict[str, SheetSize]:
        """Stock sheet size per material id, for materials that record one."""
        return {
            material.id: material.sheet_size
            for material in self.materials.values()
            if material.sheet_size is not None
        }

    def material_names(self) -> dict[str, str]:
        return {material.id: material.name for material in self.materials.values()}


def to_edge_banding(config: EdgeBandingConfig) -> EdgeBanding:
    return EdgeBanding(
        top=config.top,
        bottom=config.bottom,
        left=config.left,
        right=config.right,
    )


def to_overrides(config: HardwareOverridesConfig) -> HardwareOverrides:
    return HardwareOverrides(**config.model_dump())


def to_dimensions(item: ProjectItemConfig, model: CabinetModel) -> CabinetDimensions:
    """Item dimensions, each defaulting to the model's default."""
    return CabinetDimensions(
        width=item.width if item.width is not None else model.default_width,
        height=item.height if item.height is not None else model.default_height,
        depth=item.depth if item.depth is not None else model.default_depth,
    )


def _to_material(config: MaterialConfig) -> Material:
    sheet_width = config.sheet_width
    sheet_height = config.sheet_height
    if config.type == MaterialType.EDGE_BANDING:
        sheet_width = sheet_height = None
    return Material(
        id=config.id,
        name=config.name,
        material_type=config.type,
        cost_per_unit=config.cost_per_unit,
        thickness=config.thickness,
        sheet_width=sheet_width,
        sheet_height=sheet_height,
    )


def _to_part_type(config: PartTypeConfig) -> PartType:
    return PartType(
        name=config.name,
        width_formula=config.width_formula,
        height_formula=config.height_formula,
        default_thickness=config.default_thickness,
        material_type=config.material_type,
        grain_direction=config.grain_direction,
        description=config.description,
    )


def _to_accessory(config: AccessoryConfig) -> Accessory:
    return Accessory(
        name=config.name,
        accessory_type=config.type,
        unit_cost=config.unit_cost,
        default_quantity_formula=config.default_quantity_formula,
        description=config.description,
    )


def _bound(value: float | None, default: float) -> float:
    return value if value is not None else default


def _to_model(
    index: int,
    config: ModelConfig,
    part_types: dict[str, PartType],
    accessories: dict[str, Accessory],
    errors: list[dict[str, Any]],
) -> CabinetModel:
    part_associations: list[PartTypeAssociation] = []
    for i, assoc in enumerate(config.parts):
        part_type = part_types.get(assoc.part_type)
        if part_type is None:
            errors.append(
                {
                    "path": f"models[{index}].parts[{i}].part_type",
                    "message": f"unknown part type '{assoc.part_type}'",
                }
            )
            continue
        part_associations.append(
            PartTypeAssociation(
                part_type=part_type,
                quantity_formula=assoc.quantity_formula,
                custom_width_formula=assoc.width_formula,
                custom_height_formula=assoc.height_formula,
                edge_banding=to_edge_banding(assoc.edge_banding),
                sort_order=assoc.sort_order,
            )
        )

    accessory_associations: list[AccessoryAssociation] = []
    for i, assoc in enumerate(config.accessories):
        accessory = accessories.get(assoc.accessory)
        if accessory is None:
            errors.append(
                {
                    "path": f"models[{index}].accessories[{i}].accessory",
                    "message": f"unknown accessory '{assoc.accessory}'",
                }
            )
            continue
        accessory_associations.append(
            AccessoryAssociation(
                accessory=accessory,
                quantity_formula=assoc.quantity_formula,
                required=assoc.required,
            )
        )

    return CabinetModel(
        id=config.id,
        name=config.name,
        category=config.category,
        default_width=config.default_width,
        default_height=config.default_height,
        default_depth=config.default_depth,
        min_width=_bound(config.min_width, 0.0),
        max_width=_bound(config.max_width, float("inf")),
        min_height=_bound(config.min_height, 0.0),
        max_height=_bound(config.max_height, float("inf")),
        min_depth=_bound(config.min_depth, 0.0),
        max_depth=_bound(config.max_depth, float("inf")),
        part_associations=tuple(part_associations),
        accessory_associations=tuple(accessory_associations),
    )


def _check_projects(
    config: CatalogConfiguration,
    models: dict[str, CabinetModel],
    materials: dict[str, Material],
    errors: list[dict[str, Any]],
) -> None:
    model_names = {m.name for m in models.values()}
    for p, project in enumerate(config.projects):
        for i, item in enumerate(project.items):
            path = f"projects[{p}].items[{i}]"
            if item.model not in models and item.model not in model_names:
                errors.append(
                    {"path": f"{path}.model", "message": f"unknown model '{item.model}'"}
                )
            for role, ref in item.materials.model_dump().items():
                if ref is not None and ref not in materials:
                    errors.append(
                        {
                            "path": f"{path}.materials.{role}",
                            "message": f"unknown material '{ref}'",
                        }
                    )


def build_catalog(config: CatalogConfiguration) -> Catalog:
    """Convert a validated catalog configuration into a resolved Catalog.

    Args:
        config: A validated CatalogConfiguration instance

    Returns:
        Catalog with domain entities indexed by key

    Raises:
        ConfigError: With error_type "reference" if any part type,
            accessory, model or material reference cannot be resolved.

    Example:
        >>> catalog = build_catalog(load_catalog(Path("catalog.json")))
        >>> model = catalog.find_model("base-600")
    """
    errors: list[dict[str, Any]] = []

    materials = {m.id: _to_material(m) for m in config.materials}
    part_types = {p.name: _to_part_type(p) for p in config.part_types}
    accessories = {a.name: _to_accessory(a) for a in config.accessories}
    models = {
        m.id: _to_model(i, m, part_types, accessories, errors)
        for i, m in enumerate(config.models)
    }
    _check_projects(config, models, materials, errors)

    if errors:
        lines = ["Catalog references could not be resolved:"]
        lines.extend(f"  - {e['path']}: {e['message']}" for e in errors)
        raise ConfigError(
            message="\n".join(lines),
            error_type="reference",
            details=errors,
        )

    logger.debug(
        "Built catalog: %d materials, %d part types, %d accessories, %d models",
        len(materials),
        len(part_types),
        len(accessories),
        len(models),
    )
    return Catalog(
        materials=materials,
        models=models,
        projects={p.name: p for p in config.projects},
        settings=config.settings,
    )

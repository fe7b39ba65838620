"""Validation structures and catalog checks.

This module provides validation result structures and the checks run by
``cabinet-engine validate``: reference resolution, formula evaluation
against each model's default dimensions, and advisory warnings about
materials and models that will derive or pack with fallbacks.
"""

from dataclasses import dataclass, field
from typing import Any

from cabinet_engine.application.config.adapter import build_catalog
from cabinet_engine.application.config.loader import ConfigError
from cabinet_engine.application.config.schema import CatalogConfiguration, ModelConfig
from cabinet_engine.domain.formula import build_context, evaluate_formula
from cabinet_engine.domain.value_objects import CabinetDimensions, CabinetTemplate, MaterialType


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "models[0].parts[1].quantity_formula")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_references(config: CatalogConfiguration) -> ValidationResult:
    """Report every unresolved part type, accessory, model or material name."""
    result = ValidationResult()
    try:
        build_catalog(config)
    except ConfigError as e:
        for detail in e.details:
            result.add_error(detail["path"], detail["message"])
    return result


def check_model_formulas(config: CatalogConfiguration) -> ValidationResult:
    """Evaluate every formula of every model at the model's default dimensions.

    Formulas that fail to evaluate are errors: at derivation time they
    would silently become 0. Dimension formulas that evaluate to zero or
    less are warnings.
    """
    result = ValidationResult()
    part_types = {p.name: p for p in config.part_types}
    accessories = {a.name: a for a in config.accessories}

    for m, model in enumerate(config.models):
        context = _default_context(model)
        for i, assoc in enumerate(model.parts):
            path = f"models[{m}].parts[{i}]"
            part_type = part_types.get(assoc.part_type)
            width_formula = assoc.width_formula or (part_type.width_formula if part_type else None)
            height_formula = assoc.height_formula or (
                part_type.height_formula if part_type else None
            )
            checks = (
                ("quantity_formula", assoc.quantity_formula, False),
                ("width_formula", width_formula, True),
                ("height_formula", height_formula, True),
            )
            for key, formula, is_dimension in checks:
                if formula is None:
                    continue
                evaluated = evaluate_formula(formula, context)
                if not evaluated.ok:
                    result.add_error(f"{path}.{key}", evaluated.error or "invalid formula", formula)
                elif is_dimension and evaluated.value <= 0:
                    result.add_warning(
                        f"{path}.{key}",
                        f"'{formula}' evaluates to {evaluated.value:g} at default dimensions",
                        "Check the formula or the model's default dimensions",
                    )

        for i, assoc in enumerate(model.accessories):
            accessory = accessories.get(assoc.accessory)
            formula = assoc.quantity_formula or (
                accessory.default_quantity_formula if accessory else None
            )
            if formula is None:
                continue
            evaluated = evaluate_formula(formula, context)
            if not evaluated.ok:
                result.add_error(
                    f"models[{m}].accessories[{i}].quantity_formula",
                    evaluated.error or "invalid formula",
                    formula,
                )
    return result


def check_catalog_advisories(config: CatalogConfiguration) -> ValidationResult:
    """Warn about catalog entries that derive or pack using fallbacks."""
    result = ValidationResult()

    for i, material in enumerate(config.materials):
        if material.type in (MaterialType.PANEL, MaterialType.BACK_PANEL):
            if material.sheet_width is None or material.sheet_height is None:
                result.add_warning(
                    f"materials[{i}]",
                    f"Material '{material.id}' has no sheet size",
                    "The default sheet size will be used for cutting optimisation",
                )
            if material.thickness is None:
                result.add_warning(
                    f"materials[{i}].thickness",
                    f"Material '{material.id}' has no thickness",
                    "Default panel and back thicknesses will be used",
                )

    for i, model in enumerate(config.models):
        if not model.parts and CabinetTemplate.from_category(model.category) == CabinetTemplate.GENERIC:
            result.add_warning(
                f"models[{i}].category",
                f"Model '{model.id}' declares no parts and category '{model.category}' "
                "matches no template",
                "Declare parts or use a Base, Wall or Tall category",
            )
    return result


def validate_catalog(config: CatalogConfiguration) -> ValidationResult:
    """Run every catalog check and merge the results."""
    result = ValidationResult()
    result.merge(check_references(config))
    result.merge(check_model_formulas(config))
    result.merge(check_catalog_advisories(config))
    return result


def _default_context(model: ModelConfig) -> dict[str, float]:
    dimensions = CabinetDimensions(
        width=model.default_width,
        height=model.default_height,
        depth=model.default_depth,
    )
    return build_context(dimensions)

"""Domain exceptions for the cabinet engine."""

from __future__ import annotations


class CabinetEngineError(Exception):
    """Base class for all cabinet engine errors."""


class ModelNotFoundError(CabinetEngineError):
    """Raised when parts are requested for a cabinet model that does not exist."""

    def __init__(self, model_ref: object) -> None:
        self.model_ref = model_ref
        super().__init__(f"Cabinet model not found: {model_ref}")


class MaterialNotFoundError(CabinetEngineError):
    """Raised when a material reference cannot be resolved."""

    def __init__(self, material_ref: object) -> None:
        self.material_ref = material_ref
        super().__init__(f"Material not found: {material_ref}")


class FormulaError(CabinetEngineError):
    """Raised when a formula cannot be evaluated and the caller asked for it.

    Attributes:
        formula: The formula text as authored in the catalog.
        reason: Human-readable description of the failure.
    """

    def __init__(self, formula: str, reason: str) -> None:
        self.formula = formula
        self.reason = reason
        super().__init__(f"Cannot evaluate formula {formula!r}: {reason}")


class CabinetDerivationError(CabinetEngineError):
    """Raised when a cabinet request is rejected before derivation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Derivation failed: {errors}")

"""Domain layer - formulas, catalog entities and part derivation."""

from .entities import (
    Accessory,
    AccessoryAssociation,
    CabinetModel,
    GeneratedPart,
    Material,
    MaterialSelection,
    PartType,
    PartTypeAssociation,
)
from .exceptions import (
    CabinetDerivationError,
    CabinetEngineError,
    FormulaError,
    MaterialNotFoundError,
    ModelNotFoundError,
)
from .formula import FormulaResult, evaluate, evaluate_formula
from .services import (
    DerivationRequest,
    DerivationResult,
    HardwareCostingService,
    PartDerivationService,
    PricingService,
)
from .value_objects import (
    AccessoryType,
    CabinetDimensions,
    CabinetTemplate,
    EdgeBanding,
    GrainDirection,
    HardwareOverrides,
    MaterialType,
    PartKind,
    SheetSize,
)

__all__ = [
    "Accessory",
    "AccessoryAssociation",
    "AccessoryType",
    "CabinetDerivationError",
    "CabinetDimensions",
    "CabinetEngineError",
    "CabinetModel",
    "CabinetTemplate",
    "DerivationRequest",
    "DerivationResult",
    "EdgeBanding",
    "FormulaError",
    "FormulaResult",
    "GeneratedPart",
    "GrainDirection",
    "HardwareCostingService",
    "HardwareOverrides",
    "Material",
    "MaterialNotFoundError",
    "MaterialSelection",
    "MaterialType",
    "ModelNotFoundError",
    "PartDerivationService",
    "PartKind",
    "PartType",
    "PartTypeAssociation",
    "PricingService",
    "SheetSize",
    "evaluate",
    "evaluate_formula",
]

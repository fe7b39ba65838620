"""Domain services for part derivation, hardware costing and pricing."""

from .constants import DEFAULT_HARDWARE_COSTS
from .grain import GrainAdvisor
from .hardware import HardwareCostingService
from .part_derivation import DerivationRequest, DerivationResult, PartDerivationService
from .part_factory import PartFactory
from .pricing import PricingService, part_costs
from .templates import TemplatePartGenerator, TemplateResult

__all__ = [
    "DEFAULT_HARDWARE_COSTS",
    "DerivationRequest",
    "DerivationResult",
    "GrainAdvisor",
    "HardwareCostingService",
    "PartDerivationService",
    "PartFactory",
    "PricingService",
    "TemplatePartGenerator",
    "TemplateResult",
    "part_costs",
]

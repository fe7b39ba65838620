"""Application layer - use cases and orchestration."""

from .commands import DeriveCabinetCommand, OptimizeCuttingCommand, PriceProjectCommand
from .dtos import (
    DeriveRequest,
    DeriveResponse,
    PackRequest,
    PackResponse,
    ProjectItemResult,
    ProjectResult,
)
from .factory import ServiceFactory, get_factory, reset_factory, set_factory

__all__ = [
    "DeriveCabinetCommand",
    "DeriveRequest",
    "DeriveResponse",
    "OptimizeCuttingCommand",
    "PackRequest",
    "PackResponse",
    "PriceProjectCommand",
    "ProjectItemResult",
    "ProjectResult",
    "ServiceFactory",
    "get_factory",
    "reset_factory",
    "set_factory",
]

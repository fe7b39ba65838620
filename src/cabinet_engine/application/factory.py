"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cabinet_engine.application.config.schema import EngineSettings

if TYPE_CHECKING:
    from cabinet_engine.application.commands import (
        DeriveCabinetCommand,
        OptimizeCuttingCommand,
        PriceProjectCommand,
    )
    from cabinet_engine.domain import PartDerivationService, PricingService
    from cabinet_engine.infrastructure import (
        CutDiagramRenderer,
        CuttingLayoutFormatter,
        CuttingStockPacker,
        JsonExporter,
        PartListFormatter,
    )


@dataclass
class ServiceFactory:
    """Factory for creating service instances configured from EngineSettings.

    Centralizes service instantiation to support:
    - Dependency injection for testing
    - Settings-based service configuration
    - Reuse of stateless services across requests

    Example:
        ```python
        factory = ServiceFactory(settings=catalog.settings)
        response = factory.create_derive_command().execute(request)
        ```
    """

    settings: EngineSettings = field(default_factory=EngineSettings)

    _derivation_service: "PartDerivationService | None" = field(
        default=None, init=False, repr=False
    )
    _pricing_service: "PricingService | None" = field(default=None, init=False, repr=False)
    _packer: "CuttingStockPacker | None" = field(default=None, init=False, repr=False)

    def get_pricing_service(self) -> "PricingService":
        """Get or create pricing service instance."""
        if self._pricing_service is None:
            from cabinet_engine.domain import PricingService

            self._pricing_service = PricingService()
        return self._pricing_service

    def get_derivation_service(self) -> "PartDerivationService":
        """Get or create part derivation service instance."""
        if self._derivation_service is None:
            from cabinet_engine.domain import PartDerivationService

            settings = self.settings
            self._derivation_service = PartDerivationService(
                strict_formulas=settings.strict_formulas,
                hardware_costs=dict(settings.hardware_costs),
                default_panel_thickness=settings.default_panel_thickness,
                default_back_thickness=settings.default_back_thickness,
                drawer_side_thickness=settings.drawer_side_thickness,
                pricing=self.get_pricing_service(),
            )
        return self._derivation_service

    def get_packer(self) -> "CuttingStockPacker":
        """Get or create the packer for the configured strategy."""
        if self._packer is None:
            from cabinet_engine.domain import SheetSize
            from cabinet_engine.infrastructure import CuttingStockPacker

            self._packer = CuttingStockPacker(
                strategy=self.settings.packing_strategy,
                default_sheet_size=SheetSize(
                    width=self.settings.default_sheet_width,
                    height=self.settings.default_sheet_height,
                ),
            )
        return self._packer

    def get_part_list_formatter(self) -> "PartListFormatter":
        from cabinet_engine.infrastructure import PartListFormatter

        return PartListFormatter()

    def get_layout_formatter(self) -> "CuttingLayoutFormatter":
        from cabinet_engine.infrastructure import CuttingLayoutFormatter

        return CuttingLayoutFormatter()

    def get_diagram_renderer(self) -> "CutDiagramRenderer":
        from cabinet_engine.infrastructure import CutDiagramRenderer

        return CutDiagramRenderer()

    def get_json_exporter(self) -> "JsonExporter":
        from cabinet_engine.infrastructure import JsonExporter

        return JsonExporter()

    def create_derive_command(self) -> "DeriveCabinetCommand":
        from cabinet_engine.application.commands import DeriveCabinetCommand

        return DeriveCabinetCommand(derivation_service=self.get_derivation_service())

    def create_price_project_command(self) -> "PriceProjectCommand":
        from cabinet_engine.application.commands import PriceProjectCommand

        return PriceProjectCommand(derive_command=self.create_derive_command())

    def create_optimize_command(self) -> "OptimizeCuttingCommand":
        from cabinet_engine.application.commands import OptimizeCuttingCommand

        packer = self.get_packer()
        return OptimizeCuttingCommand(
            packer=packer,
            packable_types=self.settings.packable_types,
            default_sheet_size=packer.default_sheet_size,
        )


# Default factory instance
_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None

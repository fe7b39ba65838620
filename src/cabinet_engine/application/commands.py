"""Application commands (use cases) for cabinet derivation and cutting optimisation."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Iterable, Mapping

from cabinet_engine.domain import MaterialType, PartDerivationService
from cabinet_engine.infrastructure.bin_packing import CuttingStockPacker

from .config.adapter import to_dimensions, to_overrides
from .dtos import (
    DeriveRequest,
    DeriveResponse,
    PackRequest,
    PackResponse,
    ProjectItemResult,
    ProjectResult,
)

if TYPE_CHECKING:
    from cabinet_engine.domain import GeneratedPart, Material, SheetSize

    from .config.adapter import Catalog
    from .config.schema import ProjectConfig

logger = logging.getLogger(__name__)


class DeriveCabinetCommand:
    """Command to derive the priced parts of one cabinet."""

    def __init__(self, derivation_service: PartDerivationService | None = None) -> None:
        self.derivation_service = derivation_service or PartDerivationService()

    def execute(self, request: DeriveRequest) -> DeriveResponse:
        """Validate the request and derive the cabinet.

        Returns:
            DeriveResponse with the parts, or with ``errors`` set when the
            dimensions are invalid for the model.

        Raises:
            ModelNotFoundError: If the request has no model.
            FormulaError: If strict formulas are enabled and a formula fails.
        """
        errors = request.validate()
        if errors:
            logger.info("Rejected derive request: %s", "; ".join(errors))
            return DeriveResponse(errors=errors)

        result = self.derivation_service.derive(request.to_derivation_request())
        return DeriveResponse.from_result(result)


class PriceProjectCommand:
    """Command to derive and price every cabinet of a project.

    Items are derived independently and reported in project order.
    """

    def __init__(self, derive_command: DeriveCabinetCommand | None = None) -> None:
        self.derive_command = derive_command or DeriveCabinetCommand()

    def execute(self, project: "ProjectConfig", catalog: "Catalog") -> ProjectResult:
        """Price ``project`` against ``catalog``.

        Raises:
            ModelNotFoundError: If an item names an unknown model.
            MaterialNotFoundError: If an item selects an unknown material.
        """
        result = ProjectResult(name=project.name)
        for index, item in enumerate(project.items):
            model = catalog.find_model(item.model)
            materials = catalog.resolve_materials(item.materials)
            dimensions = to_dimensions(item, model)
            request = DeriveRequest(
                model=model,
                width=dimensions.width,
                height=dimensions.height,
                depth=dimensions.depth,
                panel_material=materials.panel,
                edge_material=materials.edge,
                back_material=materials.back,
                door_material=materials.door,
                hardware_overrides=to_overrides(item.hardware),
            )
            name = item.name or f"{model.name} #{index + 1}"
            response = self.derive_command.execute(request)
            if not response.is_valid:
                result.errors.extend(f"{name}: {error}" for error in response.errors)
                continue
            result.items.append(
                ProjectItemResult(
                    name=name,
                    model_id=model.id,
                    quantity=item.quantity,
                    response=response,
                )
            )

        logger.info(
            "Priced project %s: %d items, total %.2f",
            project.name,
            len(result.items),
            result.total_cost,
        )
        return result


class OptimizeCuttingCommand:
    """Command to pack panel parts onto stock sheets.

    Args:
        packer: Packer used when a request does not name a strategy.
        packable_types: Material types whose parts are cut from sheets.
        default_sheet_size: Sheet size for materials without one.
    """

    def __init__(
        self,
        packer: CuttingStockPacker | None = None,
        packable_types: Iterable[MaterialType] = (MaterialType.PANEL,),
        default_sheet_size: "SheetSize | None" = None,
    ) -> None:
        self.packer = packer or CuttingStockPacker(default_sheet_size=default_sheet_size)
        self.packable_types = frozenset(packable_types)
        self.default_sheet_size = default_sheet_size or self.packer.default_sheet_size

    def execute(
        self,
        project_result: ProjectResult,
        materials: Mapping[str, "Material"],
        strategy: str | None = None,
    ) -> PackResponse:
        """Pack the physical parts of a priced project.

        Each part's quantity is multiplied by its item quantity. Parts
        whose material is unknown or not packable are left out.
        """
        parts: list["GeneratedPart"] = []
        for item in project_result.items:
            for part in item.response.parts:
                if not self._is_packable(part, materials):
                    continue
                if item.quantity > 1:
                    part = replace(part, quantity=part.quantity * item.quantity)
                parts.append(part)

        request = PackRequest(
            parts=parts,
            material_sheet_dims={
                material_id: material.sheet_size
                for material_id, material in materials.items()
                if material.sheet_size is not None
            },
            material_names={material_id: m.name for material_id, m in materials.items()},
            strategy=strategy,
        )
        return self.pack(request)

    def pack(self, request: PackRequest) -> PackResponse:
        """Pack an explicit list of parts. Hardware lines are ignored."""
        try:
            packer = self._packer_for(request.strategy)
        except ValueError as e:
            return PackResponse(errors=[str(e)])

        parts = [p for p in request.parts if not p.is_hardware]
        layout = packer.pack(parts, request.material_sheet_dims, request.material_names)
        return PackResponse(layout=layout)

    def _packer_for(self, strategy: str | None) -> CuttingStockPacker:
        if strategy is None or strategy == self.packer.strategy.value:
            return self.packer
        return CuttingStockPacker(strategy=strategy, default_sheet_size=self.default_sheet_size)

    def _is_packable(self, part: "GeneratedPart", materials: Mapping[str, "Material"]) -> bool:
        if part.is_hardware or part.material_id is None:
            return False
        material = materials.get(part.material_id)
        if material is None:
            logger.debug("Skipping %s: unknown material %s", part.name, part.material_id)
            return False
        return material.material_type in self.packable_types

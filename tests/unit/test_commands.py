"""Unit tests for application commands and the service factory.

These tests verify:
- DeriveCabinetCommand rejects invalid dimensions before deriving
- PriceProjectCommand derives every project item in order
- OptimizeCuttingCommand packs only packable parts, multiplied by item quantity
- ServiceFactory caches services and applies engine settings
"""

import pytest

from cabinet_engine.application import (
    DeriveCabinetCommand,
    DeriveRequest,
    OptimizeCuttingCommand,
    PackRequest,
    PriceProjectCommand,
    ServiceFactory,
    get_factory,
    reset_factory,
    set_factory,
)
from cabinet_engine.application.config import Catalog, EngineSettings
from cabinet_engine.domain import GeneratedPart, MaterialType, ModelNotFoundError
from cabinet_engine.infrastructure.bin_packing import PackingStrategy


# =============================================================================
# Derive
# =============================================================================


class TestDeriveCabinetCommand:
    """Tests for DeriveCabinetCommand."""

    def test_derives_declarative_model(self, catalog: Catalog) -> None:
        request = DeriveRequest(
            model=catalog.find_model("base-600"),
            width=600,
            height=720,
            depth=560,
            panel_material=catalog.find_material("oak-18"),
        )
        response = DeriveCabinetCommand().execute(request)
        assert response.is_valid
        assert response.template is None
        assert response.parts[0].name == "Side Panel 1"
        assert response.total_cost == pytest.approx(sum(p.total_cost for p in response.parts))

    def test_non_positive_dimensions(self, catalog: Catalog) -> None:
        request = DeriveRequest(
            model=catalog.find_model("base-600"), width=0, height=720, depth=-1
        )
        response = DeriveCabinetCommand().execute(request)
        assert response.errors == ["Width must be positive", "Depth must be positive"]
        assert response.parts == []

    def test_out_of_bounds(self, catalog: Catalog) -> None:
        request = DeriveRequest(
            model=catalog.find_model("base-600"), width=1300, height=720, depth=560
        )
        response = DeriveCabinetCommand().execute(request)
        assert response.errors == ["Width must be between 300mm and 1200mm"]

    def test_missing_model(self) -> None:
        request = DeriveRequest(model=None, width=600, height=720, depth=560)
        with pytest.raises(ModelNotFoundError):
            DeriveCabinetCommand().execute(request)


# =============================================================================
# Price
# =============================================================================


class TestPriceProjectCommand:
    """Tests for PriceProjectCommand."""

    def test_items_in_project_order(self, catalog: Catalog) -> None:
        result = PriceProjectCommand().execute(catalog.find_project("Kitchen"), catalog)
        assert result.is_valid
        assert [item.name for item in result.items] == ["Base 600 #1", "Over sink"]
        assert [item.model_id for item in result.items] == ["base-600", "wall-500"]

    def test_total_counts_item_quantity(self, catalog: Catalog) -> None:
        result = PriceProjectCommand().execute(catalog.find_project("Kitchen"), catalog)
        base, wall = result.items
        assert base.quantity == 2
        assert base.total_cost == pytest.approx(base.response.total_cost * 2)
        assert result.total_cost == pytest.approx(base.total_cost + wall.total_cost)

    def test_item_materials_applied(self, catalog: Catalog) -> None:
        result = PriceProjectCommand().execute(catalog.find_project("Kitchen"), catalog)
        back = next(p for p in result.items[0].response.parts if p.name == "Back Panel 1")
        assert back.material_id == "mdf-6"
        assert back.thickness == 6

    def test_invalid_item_reported(self, catalog: Catalog) -> None:
        project = catalog.find_project("Kitchen").model_copy(deep=True)
        project.items[0].width = 1300
        result = PriceProjectCommand().execute(project, catalog)
        assert not result.is_valid
        assert result.errors == ["Base 600 #1: Width must be between 300mm and 1200mm"]
        assert [item.name for item in result.items] == ["Over sink"]


# =============================================================================
# Optimize
# =============================================================================


class TestOptimizeCuttingCommand:
    """Tests for OptimizeCuttingCommand."""

    def test_packs_panel_parts_only(self, catalog: Catalog) -> None:
        project = PriceProjectCommand().execute(catalog.find_project("Kitchen"), catalog)
        response = OptimizeCuttingCommand().execute(project, catalog.materials)
        assert response.is_valid
        assert response.materials_count == 1
        assert list(response.per_material) == ["oak-18"]

    def test_quantities_multiplied(self, catalog: Catalog) -> None:
        project = PriceProjectCommand().execute(catalog.find_project("Kitchen"), catalog)
        response = OptimizeCuttingCommand().execute(project, catalog.materials)
        layout = response.per_material["oak-18"]
        names = [p.unit.name for sheet in layout.sheets for p in sheet.placements]
        # Two base cabinets, one record per side
        assert names.count("Side Panel 1") == 2
        assert sum(n.startswith("Side Panel") for n in names) == 4
        assert "Back Panel 1" not in names
        assert "Soft-Close Hinge" not in names

    def test_back_panels_when_packable(self, catalog: Catalog) -> None:
        project = PriceProjectCommand().execute(catalog.find_project("Kitchen"), catalog)
        command = OptimizeCuttingCommand(
            packable_types=[MaterialType.PANEL, MaterialType.BACK_PANEL]
        )
        response = command.execute(project, catalog.materials)
        assert set(response.per_material) == {"oak-18", "mdf-6"}

    def test_unknown_strategy(self) -> None:
        response = OptimizeCuttingCommand().pack(PackRequest(parts=[], strategy="guillotine"))
        assert not response.is_valid
        assert response.layout is None
        assert "guillotine" in response.errors[0]

    def test_strategy_per_request(self) -> None:
        parts = [
            GeneratedPart(
                name="Shelf", part_type="shelf", material_id="oak",
                width=400, height=300, thickness=18,
            )
        ]
        response = OptimizeCuttingCommand().pack(PackRequest(parts=parts, strategy="shelf"))
        assert response.layout.strategy == PackingStrategy.SHELF
        assert response.total_parts == 1

    def test_hardware_ignored(self) -> None:
        hinge = GeneratedPart(
            name="Hinge", part_type="hardware", material_id=None,
            width=0, height=0, thickness=0, quantity=4,
        )
        response = OptimizeCuttingCommand().pack(PackRequest(parts=[hinge]))
        assert response.materials_count == 0


# =============================================================================
# Service factory
# =============================================================================


class TestServiceFactory:
    """Tests for ServiceFactory."""

    def test_services_are_cached(self) -> None:
        factory = ServiceFactory()
        assert factory.get_derivation_service() is factory.get_derivation_service()
        assert factory.get_packer() is factory.get_packer()
        assert factory.get_derivation_service().pricing is factory.get_pricing_service()

    def test_settings_applied(self) -> None:
        settings = EngineSettings(
            strict_formulas=True,
            packing_strategy="shelf",
            default_sheet_width=2800,
            default_sheet_height=2070,
            default_panel_thickness=19,
        )
        factory = ServiceFactory(settings=settings)
        service = factory.get_derivation_service()
        assert service.strict_formulas is True
        assert service.default_panel_thickness == 19
        packer = factory.get_packer()
        assert packer.strategy == PackingStrategy.SHELF
        assert (packer.default_sheet_size.width, packer.default_sheet_size.height) == (2800, 2070)

    def test_commands_share_services(self) -> None:
        factory = ServiceFactory()
        command = factory.create_price_project_command()
        assert command.derive_command.derivation_service is factory.get_derivation_service()
        assert factory.create_optimize_command().packer is factory.get_packer()


class TestDefaultFactory:
    """Tests for the module-level factory accessors."""

    def test_get_factory_is_singleton(self) -> None:
        assert get_factory() is get_factory()

    def test_set_and_reset(self) -> None:
        custom = ServiceFactory(settings=EngineSettings(strict_formulas=True))
        set_factory(custom)
        assert get_factory() is custom
        reset_factory()
        assert get_factory() is not custom

"""Cabinet derivation endpoints."""

from fastapi import APIRouter

from cabinet_engine.application.config import build_catalog, load_catalog_from_dict, to_overrides
from cabinet_engine.application.dtos import DeriveRequest
from cabinet_engine.application.factory import ServiceFactory
from cabinet_engine.domain.exceptions import CabinetDerivationError
from cabinet_engine.infrastructure.formatters import JsonExporter
from cabinet_engine.web.schemas.common import GeneratedPartSchema
from cabinet_engine.web.schemas.requests import DeriveRequestSchema
from cabinet_engine.web.schemas.responses import DeriveResponseSchema, FormulaIssueSchema

router = APIRouter(prefix="/derive", tags=["derive"])


@router.post("", response_model=DeriveResponseSchema)
async def derive_cabinet(request: DeriveRequestSchema) -> DeriveResponseSchema:
    """Derive the priced parts of one cabinet from a catalog model.

    The catalog's ``settings`` block configures the engine for this
    request.

    Raises:
        ConfigError: If the catalog is invalid (422).
        ModelNotFoundError: If the model is not in the catalog (404).
        MaterialNotFoundError: If a selected material is not in the catalog (404).
        CabinetDerivationError: If the dimensions are out of range (422).
    """
    catalog = build_catalog(load_catalog_from_dict(request.catalog))
    model = catalog.find_model(request.model)
    materials = catalog.resolve_materials(request.materials)
    dimensions = request.dimensions
    if dimensions is None:
        width, height, depth = model.default_width, model.default_height, model.default_depth
    else:
        width, height, depth = dimensions.width, dimensions.height, dimensions.depth

    command = ServiceFactory(settings=catalog.settings).create_derive_command()
    response = command.execute(
        DeriveRequest(
            model=model,
            width=width,
            height=height,
            depth=depth,
            panel_material=materials.panel,
            edge_material=materials.edge,
            back_material=materials.back,
            door_material=materials.door,
            hardware_overrides=to_overrides(request.hardware),
        )
    )
    if not response.is_valid:
        raise CabinetDerivationError(response.errors)

    exporter = JsonExporter()
    return DeriveResponseSchema(
        model_id=model.id,
        template=response.template.value if response.template else None,
        parts=[GeneratedPartSchema(**exporter.part_to_dict(p)) for p in response.parts],
        total_cost=round(response.total_cost, 4),
        formula_errors=[
            FormulaIssueSchema(label=i.label, formula=i.formula, message=i.message)
            for i in response.formula_errors
        ],
    )

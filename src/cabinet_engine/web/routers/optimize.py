"""Cutting optimisation endpoints."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from cabinet_engine.application.dtos import PackRequest, PackResponse
from cabinet_engine.domain import EdgeBanding, GeneratedPart, SheetSize
from cabinet_engine.infrastructure.exporters import ExporterRegistry
from cabinet_engine.web.dependencies import JsonExporterDep, OptimizeCommandDep
from cabinet_engine.web.exceptions import UnsupportedFormatError
from cabinet_engine.web.schemas.common import GeneratedPartSchema
from cabinet_engine.web.schemas.requests import OptimizeRequestSchema
from cabinet_engine.web.schemas.responses import ExportFormatsSchema, OptimizeResponseSchema

router = APIRouter(prefix="/optimize", tags=["optimize"])


def _to_part(schema: GeneratedPartSchema) -> GeneratedPart:
    return GeneratedPart(
        name=schema.name,
        part_type=schema.part_type,
        material_id=schema.material_id,
        width=schema.width,
        height=schema.height,
        thickness=schema.thickness,
        quantity=schema.quantity,
        edge_banding=EdgeBanding(
            top=schema.edge_banding_top,
            bottom=schema.edge_banding_bottom,
            left=schema.edge_banding_left,
            right=schema.edge_banding_right,
        ),
        edge_material_id=schema.edge_material_id,
        grain_direction=schema.grain_direction,
        notes=schema.notes,
        unit_cost=schema.unit_cost,
        total_cost=schema.total_cost,
    )


def _pack(request: OptimizeRequestSchema, command: OptimizeCommandDep) -> PackResponse:
    response = command.pack(
        PackRequest(
            parts=[_to_part(p) for p in request.parts],
            material_sheet_dims={
                material_id: SheetSize(width=dims.width, height=dims.height)
                for material_id, dims in request.material_sheet_dims.items()
            },
            material_names=dict(request.material_names),
            strategy=request.strategy,
        )
    )
    if not response.is_valid or response.layout is None:
        raise HTTPException(status_code=422, detail={"errors": response.errors})
    return response


@router.post("", response_model=OptimizeResponseSchema)
async def optimize_cutting(
    request: OptimizeRequestSchema,
    command: OptimizeCommandDep,
    exporter: JsonExporterDep,
) -> OptimizeResponseSchema:
    """Pack panel parts onto stock sheets, grouped by material."""
    response = _pack(request, command)
    return OptimizeResponseSchema.model_validate(exporter.layout_to_dict(response.layout))


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List the formats a cutting layout can be exported to."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/export/{format_name}")
async def export_layout(
    format_name: str,
    request: OptimizeRequestSchema,
    command: OptimizeCommandDep,
) -> Response:
    """Pack the parts and return the layout in ``format_name``.

    Raises:
        UnsupportedFormatError: If no exporter is registered for the format (400).
    """
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    response = _pack(request, command)
    exporter = ExporterRegistry.create(format_name)
    content = exporter.export_string(response.layout)
    filename = f"cutting_layout.{exporter.file_extension}"
    return Response(
        content=content,
        media_type=exporter.media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )

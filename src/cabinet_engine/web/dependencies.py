"""FastAPI dependencies for the optimisation endpoints.

Derivation endpoints build their own ServiceFactory from the settings of
the catalog in the request body. Optimisation requests carry no catalog,
so they use the process-wide factory, which tests can swap with
``set_factory``.
"""

from typing import Annotated

from fastapi import Depends

from cabinet_engine.application.commands import OptimizeCuttingCommand
from cabinet_engine.application.factory import ServiceFactory, get_factory
from cabinet_engine.infrastructure.formatters import JsonExporter


def get_service_factory() -> ServiceFactory:
    return get_factory()


def get_optimize_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> OptimizeCuttingCommand:
    return factory.create_optimize_command()


def get_json_exporter(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> JsonExporter:
    return factory.get_json_exporter()


OptimizeCommandDep = Annotated[OptimizeCuttingCommand, Depends(get_optimize_command)]
JsonExporterDep = Annotated[JsonExporter, Depends(get_json_exporter)]

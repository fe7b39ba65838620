"""Typer CLI for cabinet part derivation and cutting optimisation."""

import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from cabinet_engine.application import (
    DeriveRequest,
    ProjectResult,
    ServiceFactory,
)
from cabinet_engine.application.config import (
    Catalog,
    ConfigError,
    MaterialSelectionConfig,
    build_catalog,
    load_catalog,
)
from cabinet_engine.cli.commands import display_load_error, validate_command
from cabinet_engine.domain import CabinetEngineError, HardwareOverrides
from cabinet_engine.domain.formula import build_context, evaluate_formula
from cabinet_engine.domain.value_objects import CabinetDimensions
from cabinet_engine.infrastructure.exporters import ExporterRegistry

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="cabinet-engine",
    help="Derive, price and optimise cabinet parts from a catalog.",
)

app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log progress and degraded results"),
    ] = False,
) -> None:
    """Derive, price and optimise cabinet parts from a catalog."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(catalog_file: Path) -> Catalog:
    try:
        catalog = build_catalog(load_catalog(catalog_file))
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    logger.debug("Loaded catalog %s: %d models", catalog_file, len(catalog.models))
    return catalog


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _write_or_echo(content: str, output_file: Path | None) -> None:
    if output_file is None:
        typer.echo(content)
        return
    output_file.write_text(content, encoding="utf-8")
    typer.echo(f"Wrote {output_file}")


def _price_project(
    catalog: Catalog, project_name: str, strict: bool
) -> tuple[ServiceFactory, ProjectResult]:
    try:
        project = catalog.find_project(project_name)
    except ConfigError as e:
        _fail(e.message)

    settings = catalog.settings
    if strict:
        settings = settings.model_copy(update={"strict_formulas": True})
    factory = ServiceFactory(settings=settings)
    try:
        result = factory.create_price_project_command().execute(project, catalog)
    except CabinetEngineError as e:
        _fail(str(e))
    for error in result.errors:
        typer.echo(f"Error: {error}", err=True)
    return factory, result


@app.command()
def derive(
    catalog_file: Annotated[Path, typer.Argument(help="Path to the JSON catalog file")],
    model: Annotated[str, typer.Option("--model", "-m", help="Model id or name")],
    width: Annotated[
        float | None, typer.Option("--width", "-w", help="Width in mm (model default)")
    ] = None,
    height: Annotated[
        float | None, typer.Option("--height", "-h", help="Height in mm (model default)")
    ] = None,
    depth: Annotated[
        float | None, typer.Option("--depth", "-d", help="Depth in mm (model default)")
    ] = None,
    panel: Annotated[str | None, typer.Option("--panel", help="Panel material id")] = None,
    edge: Annotated[str | None, typer.Option("--edge", help="Edge banding material id")] = None,
    back: Annotated[str | None, typer.Option("--back", help="Back panel material id")] = None,
    door: Annotated[str | None, typer.Option("--door", help="Door material id")] = None,
    hinges: Annotated[int | None, typer.Option("--hinges", min=0)] = None,
    handles: Annotated[int | None, typer.Option("--handles", min=0)] = None,
    shelf_pins: Annotated[int | None, typer.Option("--shelf-pins", min=0)] = None,
    drawer_slides: Annotated[int | None, typer.Option("--drawer-slides", min=0)] = None,
    doors: Annotated[
        int | None, typer.Option("--doors", min=0, help="door_count formula variable")
    ] = None,
    drawers: Annotated[
        int | None, typer.Option("--drawers", min=0, help="drawer_count formula variable")
    ] = None,
    shelves: Annotated[
        int | None, typer.Option("--shelves", min=0, help="shelf_count formula variable")
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail on the first formula that does not evaluate")
    ] = False,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: table, json")
    ] = "table",
) -> None:
    """Derive the priced parts of one cabinet."""
    if output_format not in ("table", "json"):
        _fail(f"Unknown format '{output_format}'. Use table or json.")

    catalog = _load(catalog_file)
    settings = catalog.settings
    if strict:
        settings = settings.model_copy(update={"strict_formulas": True})
    factory = ServiceFactory(settings=settings)

    try:
        cabinet_model = catalog.find_model(model)
        materials = catalog.resolve_materials(
            MaterialSelectionConfig(panel=panel, edge=edge, back=back, door=door)
        )
        request = DeriveRequest(
            model=cabinet_model,
            width=width if width is not None else cabinet_model.default_width,
            height=height if height is not None else cabinet_model.default_height,
            depth=depth if depth is not None else cabinet_model.default_depth,
            panel_material=materials.panel,
            edge_material=materials.edge,
            back_material=materials.back,
            door_material=materials.door,
            hardware_overrides=HardwareOverrides(
                hinges=hinges,
                handles=handles,
                shelf_pins=shelf_pins,
                drawer_slides=drawer_slides,
                door_count=doors,
                drawer_count=drawers,
                shelf_count=shelves,
            ),
        )
        response = factory.create_derive_command().execute(request)
    except CabinetEngineError as e:
        _fail(str(e))

    if not response.is_valid:
        for error in response.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        typer.echo(factory.get_json_exporter().export_derivation(response))
    else:
        typer.echo(
            f"{cabinet_model.name} "
            f"({request.width:g} x {request.height:g} x {request.depth:g})"
        )
        if response.template is not None:
            typer.echo(f"Template: {response.template.value}")
        typer.echo()
        typer.echo(factory.get_part_list_formatter().format_result(response))


@app.command()
def price(
    catalog_file: Annotated[Path, typer.Argument(help="Path to the JSON catalog file")],
    project: Annotated[str, typer.Option("--project", "-p", help="Project name")],
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail on the first formula that does not evaluate")
    ] = False,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: table, json")
    ] = "table",
) -> None:
    """Price every cabinet of a project."""
    if output_format not in ("table", "json"):
        _fail(f"Unknown format '{output_format}'. Use table or json.")

    catalog = _load(catalog_file)
    factory, result = _price_project(catalog, project, strict)

    if output_format == "json":
        exporter = factory.get_json_exporter()
        data = {
            "project": result.name,
            "items": [
                {
                    "name": item.name,
                    "model_id": item.model_id,
                    "quantity": item.quantity,
                    "unit_cost": round(item.response.total_cost, 4),
                    "total_cost": round(item.total_cost, 4),
                    "derivation": exporter.derivation_to_dict(item.response),
                }
                for item in result.items
            ],
            "errors": result.errors,
            "total_cost": round(result.total_cost, 4),
        }
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(f"PROJECT: {result.name}")
        typer.echo("=" * 72)
        for item in result.items:
            typer.echo(
                f"{item.name:<40} {item.quantity:>4} x {item.response.total_cost:>10.2f} "
                f"= {item.total_cost:>10.2f}"
            )
        typer.echo("-" * 72)
        typer.echo(f"{'TOTAL':<60} {result.total_cost:>11.2f}")

    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def optimize(
    catalog_file: Annotated[Path, typer.Argument(help="Path to the JSON catalog file")],
    project: Annotated[str, typer.Option("--project", "-p", help="Project name")],
    strategy: Annotated[
        str | None,
        typer.Option("--strategy", "-s", help="Packing strategy: single_row, shelf"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: summary, ascii, svg, dxf, json"),
    ] = "summary",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (required for dxf)"),
    ] = None,
) -> None:
    """Price a project and pack its panel parts onto stock sheets."""
    if output_format not in ("summary", "ascii", "svg", "dxf", "json"):
        _fail(f"Unknown format '{output_format}'. Use summary, ascii, svg, dxf or json.")
    if output_format == "dxf" and output_file is None:
        _fail("--output is required for dxf format")

    catalog = _load(catalog_file)
    factory, result = _price_project(catalog, project, strict=False)
    response = factory.create_optimize_command().execute(
        result, catalog.materials, strategy=strategy
    )
    if not response.is_valid or response.layout is None:
        for error in response.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    layout = response.layout
    match output_format:
        case "summary":
            _write_or_echo(factory.get_layout_formatter().format(layout), output_file)
        case "ascii":
            _write_or_echo(factory.get_diagram_renderer().render_all_ascii(layout), output_file)
        case "svg":
            _write_or_echo(factory.get_diagram_renderer().render_combined_svg(layout), output_file)
        case _:
            exporter = ExporterRegistry.create(output_format)
            if output_file is None:
                typer.echo(exporter.export_string(layout))
            else:
                exporter.export(layout, output_file)
                typer.echo(f"Wrote {output_file}")

    if layout.oversized_units:
        typer.echo(
            f"Warning: {len(layout.oversized_units)} piece(s) larger than their sheet",
            err=True,
        )


@app.command()
def evaluate(
    formula: Annotated[str, typer.Argument(help="Formula to evaluate")],
    variables: Annotated[
        list[str] | None,
        typer.Option("--var", help="Variable as name=value, repeatable"),
    ] = None,
    width: Annotated[
        float | None,
        typer.Option("--width", "-w", help="Start from a full cabinet context of this width"),
    ] = None,
    height: Annotated[float, typer.Option("--height", "-h", help="Context height in mm")] = 720.0,
    depth: Annotated[float, typer.Option("--depth", "-d", help="Context depth in mm")] = 560.0,
) -> None:
    """Evaluate a formula and print its value."""
    context: dict[str, float] = {}
    if width is not None:
        try:
            context.update(build_context(CabinetDimensions(width=width, height=height, depth=depth)))
        except ValueError as e:
            _fail(str(e))

    for item in variables or []:
        name, sep, raw = item.partition("=")
        if not sep or not name.strip():
            _fail(f"Invalid --var '{item}'. Use name=value.")
        try:
            context[name.strip()] = float(raw)
        except ValueError:
            _fail(f"Invalid value for '{name.strip()}': {raw!r}")

    result = evaluate_formula(formula, context)
    if not result.ok:
        _fail(f"{result.error} (formula: {result.formula!r})")
    typer.echo(f"{result.value:g}")


if __name__ == "__main__":
    app()

from __future__ import annotations

import pathlib
import warnings
from typing import Callable, TypeVar

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from polygeo._config import GeometrySettings, get_settings
from polygeo.io.geometry_json import load_geometry
from polygeo.io.text import format_polyline, save_polyline
from polygeo.points import PointStore
from polygeo.polyline import Polyline, close_polyline, construct_polyline_from_segments
from polygeo.validation import ValidationError

console = Console(stderr=True)
app = typer.Typer(help="Inspect, merge and close index-based polylines.")

T = TypeVar("T")


def _load(geometry: pathlib.Path) -> tuple[PointStore, list[Polyline]]:
    if not geometry.exists():
        raise typer.BadParameter(f"Geometry file {geometry} does not exist.")
    try:
        return load_geometry(geometry)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _report_warnings(func: Callable[[], T]) -> T:
    """Run ``func`` and surface any geometry warnings on the console."""

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        result = func()
    for warning in caught:
        console.print(f"[yellow]{warning.message}[/yellow]")
    return result


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    n = 1
    while True:
        candidate = path.parent / f"{path.stem} ({n}){path.suffix}"
        if not candidate.exists():
            return candidate
        n += 1


def _settings() -> GeometrySettings:
    settings = get_settings()
    console.print(f"[magenta]Units: {settings.units} ({settings.label}).[/magenta]")
    return settings


@app.command()
def info(
    geometry: pathlib.Path = typer.Argument(..., help="JSON file with 'points' and 'polylines'."),
) -> None:
    """
    Show the number of points, length and closure of every polyline.
    """

    store, polylines = _load(geometry)
    settings = _settings()

    table = Table(title=f"{geometry.name}: {len(store)} points, {len(polylines)} polylines")
    table.add_column("#", justify="right")
    table.add_column("points", justify="right")
    table.add_column(f"length [{settings.label}]", justify="right")
    table.add_column("closed")
    for idx, ply in enumerate(polylines):
        table.add_row(str(idx), str(ply.number_of_points), f"{ply.total_length:.6g}", "yes" if ply.is_closed() else "no")
    console.print(table)


@app.command()
def merge(
    geometry: pathlib.Path = typer.Argument(..., help="JSON file with the fragments to merge."),
    prox: float | None = typer.Option(
        None, "--prox", min=0.0, help="Endpoint proximity tolerance (defaults to polygeo.cfg)."
    ),
    output: pathlib.Path | None = typer.Option(
        None, "--output", "-o", help="Write the x/y text here instead of stdout."
    ),
    close: bool = typer.Option(False, "--close", help="Close the merged chain into a polygon boundary."),
    vtk: pathlib.Path | None = typer.Option(None, "--vtk", help="Also save the merged chain as a VTK file."),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing output file."),
) -> None:
    """
    Chain all polylines of a geometry file into one polyline.
    """

    _, polylines = _load(geometry)
    if not polylines:
        raise typer.BadParameter(f"{geometry} contains no polylines.")
    settings = _settings()
    tolerance = settings.proximity if prox is None else prox

    try:
        merged = _report_warnings(lambda: construct_polyline_from_segments(polylines, tolerance))
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if close:
        closed = _report_warnings(lambda: close_polyline(merged))
        if closed is None:
            raise typer.BadParameter("Merged chain has fewer than three points and cannot be closed.")
        merged = closed

    if output is None:
        typer.echo(format_polyline(merged), nl=False)
    else:
        final_output = output
        if output.exists() and not overwrite:
            final_output = _next_available_path(output)
            console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")
        final_output.parent.mkdir(parents=True, exist_ok=True)
        save_polyline(merged, final_output)
        console.print(f"Wrote chain to [green]{final_output}[/green]")

    if vtk is not None:
        from polygeo.io.vtk import save_vtk

        save_vtk(merged, vtk)
        console.print(f"Wrote VTK to [green]{vtk}[/green]")

    console.print(
        Panel(
            f"{merged.number_of_points} points, length {merged.total_length:.6g} {settings.label}, "
            f"{'closed' if merged.is_closed() else 'open'}.",
            title="Merge complete",
            border_style="green",
        )
    )


@app.command()
def locate(
    geometry: pathlib.Path = typer.Argument(..., help="JSON file with 'points' and 'polylines'."),
    x: float = typer.Argument(..., help="Query point x."),
    y: float = typer.Argument(..., help="Query point y."),
    polyline: int = typer.Option(0, "--polyline", "-p", min=0, help="Index of the polyline to test."),
) -> None:
    """
    Classify a point against every segment of a polyline.
    """

    _, polylines = _load(geometry)
    if polyline >= len(polylines):
        raise typer.BadParameter(f"Polyline index {polyline} out of range ({len(polylines)} polylines).")
    ply = polylines[polyline]
    if ply.number_of_points < 2:
        raise typer.BadParameter(f"Polyline {polyline} has no segments.")

    for k, (id0, id1) in enumerate(ply.segments()):
        location = ply.get_location_of_point(k, (x, y))
        typer.echo(f"{k} {id0} {id1} {location.name}")


if __name__ == "__main__":  # pragma: no cover
    app()

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer

from garmentsearch.config.settings import Settings, default_sample_size
from garmentsearch.index.catalog import CatalogFormatError, build_sample_catalog, dump_catalog, resolve_catalog
from garmentsearch.index.engine import SearchEngine, SearchOptions, SearchResults
from garmentsearch.index.facets import Color, Size, UnknownFacetValueError

app = typer.Typer(help="GarmentSearch CLI")


def _setup_logging(settings: Settings, verbose: bool = False) -> None:
    level = "DEBUG" if verbose else settings.resolved_log_level()
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _load_items(settings: Settings, catalog: Optional[Path], sample: Optional[int], seed: Optional[int]):
    try:
        return resolve_catalog(settings, catalog, sample=sample, seed=seed)
    except (OSError, CatalogFormatError, UnknownFacetValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--catalog") from exc


def _remember_catalog(settings: Settings, catalog: Optional[Path]) -> None:
    if catalog is None:
        raise typer.BadParameter("--remember needs --catalog", param_hint="--remember")
    settings.catalog_path = str(catalog.expanduser().resolve())
    settings.save()
    typer.echo(f"Default catalog set to {settings.catalog_path}", err=True)


def _print_results(results: SearchResults, options: SearchOptions) -> None:
    suffix = " (no filters)" if options.is_empty() else ""
    typer.echo(f"{len(results.items)} items{suffix}")
    for item in results.items:
        typer.echo(f"  {item.name:<20} {item.size.label:<8} {item.color.label:<8} {item.id}")
    typer.echo("Sizes:")
    for fc in results.size_counts:
        typer.echo(f"  {fc.value.label:<8} {fc.count}")
    typer.echo("Colors:")
    for fc in results.color_counts:
        typer.echo(f"  {fc.value.label:<8} {fc.count}")


@app.command()
def search(
    size: List[str] = typer.Option([], "--size", "-s", help="Allowed size; repeat for several."),
    color: List[str] = typer.Option([], "--color", "-c", help="Allowed color; repeat for several."),
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Catalog JSON file."),
    sample: Optional[int] = typer.Option(None, "--sample", min=0, help="Search a random catalog of this size."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for --sample."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
    remember: bool = typer.Option(False, "--remember", help="Save --catalog as the default catalog."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Filter the catalog by size and color and print facet counts."""
    settings = Settings.load()
    _setup_logging(settings, verbose)
    try:
        options = SearchOptions(
            sizes=[Size.parse(s) for s in size],
            colors=[Color.parse(c) for c in color],
        )
    except UnknownFacetValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    engine = SearchEngine(_load_items(settings, catalog, sample, seed))
    if remember:
        _remember_catalog(settings, catalog)
    results = engine.search(options)
    if as_json:
        typer.echo(json.dumps(results.to_dict(), indent=2))
    else:
        _print_results(results, options)


@app.command("sample")
def sample_cmd(
    output: Path = typer.Argument(..., help="Where to write the catalog JSON."),
    count: Optional[int] = typer.Option(None, "--count", "-n", min=0, help="Defaults to sample_size from defaults.toml."),
    seed: Optional[int] = typer.Option(None, "--seed"),
) -> None:
    """Write a random catalog file."""
    items = build_sample_catalog(default_sample_size() if count is None else count, seed)
    dump_catalog(items, output)
    typer.echo(f"Wrote {len(items)} items to {output}")


@app.command()
def gui(
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Catalog JSON file."),
    remember: bool = typer.Option(False, "--remember", help="Save --catalog as the default catalog."),
) -> None:
    """Launch the facet browser."""
    if remember:
        _remember_catalog(Settings.load(), catalog)
    from garmentsearch.gui.app import run_gui

    run_gui(catalog)


if __name__ == "__main__":
    sys.exit(app())

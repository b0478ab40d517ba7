"""CLI for wire-beautify."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click

from wire_beautify import __version__
from wire_beautify.circuit import CircuitModel, dump_model, load_model
from wire_beautify.layout import LayoutConfig, LayoutError, layout
from wire_beautify.layout.spikes import find_spike
from wire_beautify.render import render_svg
from wire_beautify.themes import THEMES


def _read_model(input_file: Path) -> CircuitModel:
    try:
        return load_model(input_file.read_text())
    except ValueError as e:
        raise click.ClickException(f"Parse error: {e}") from None


def _run_layout(model: CircuitModel, config: LayoutConfig) -> CircuitModel:
    try:
        return layout(list(model.wires), model, config)
    except LayoutError as e:
        raise click.ClickException(f"Layout failed: {e}") from None


def _config(max_separation: float | None, max_corner_size: float | None) -> LayoutConfig:
    config = LayoutConfig()
    if max_separation is not None:
        config = replace(config, max_segment_separation=max_separation)
    if max_corner_size is not None:
        config = replace(config, max_corner_size=max_corner_size)
    return config


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log layout trace events.")
def cli(verbose: bool) -> None:
    """wire-beautify: Separate and tidy orthogonal wires in schematic sheets."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output JSON file path. Defaults to <input>_tidy.json")
@click.option("--max-separation", type=float, default=None,
              help="Target gap between separated segments")
@click.option("--max-corner-size", type=float, default=None,
              help="Longest segment a removed corner may contain")
def tidy(
    input_file: Path,
    output: Path | None,
    max_separation: float | None,
    max_corner_size: float | None,
) -> None:
    """Run the beautify pipeline on a JSON circuit description."""
    model = _read_model(input_file)
    result = _run_layout(model, _config(max_separation, max_corner_size))

    if output is None:
        output = input_file.with_name(input_file.stem + "_tidy.json")
    output.write_text(dump_model(result))

    before = sum(len(w.segments) for w in model.wires.values())
    after = sum(len(w.segments) for w in result.wires.values())
    click.echo(f"Tidied {len(result.wires)} wires "
               f"({before} -> {after} segments) -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output SVG file path. Defaults to <input>.svg")
@click.option("--theme", type=click.Choice(list(THEMES.keys())), default="light",
              help="Visual theme (default: light)")
@click.option("--tidy/--no-tidy", "run_tidy", default=False,
              help="Run the beautify pipeline before rendering")
def render(input_file: Path, output: Path | None, theme: str, run_tidy: bool) -> None:
    """Render a JSON circuit description to SVG."""
    model = _read_model(input_file)
    if run_tidy:
        model = _run_layout(model, LayoutConfig())

    if output is None:
        output = input_file.with_suffix(".svg")
    output.write_text(render_svg(model, THEMES[theme]))
    click.echo(f"Rendered {len(model.symbols)} symbols, "
               f"{len(model.wires)} wires -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show information about a JSON circuit description."""
    model = _read_model(input_file)
    segments = [seg for wire in model.wires.values() for seg in wire.segments]
    nets = {wire.output_port for wire in model.wires.values()}
    spiked = [wid for wid, wire in model.wires.items()
              if find_spike(wire.segments) is not None]

    click.echo(f"Symbols: {len(model.symbols)}")
    click.echo(f"Wires: {len(model.wires)}")
    click.echo(f"Nets: {len(nets)}")
    click.echo(f"Segments: {len(segments)}")
    click.echo(f"Manual segments: {sum(seg.is_manual for seg in segments)}")
    click.echo(f"Wires with spikes: {len(spiked)}")
    for wid in spiked:
        click.echo(f"  - {wid}")

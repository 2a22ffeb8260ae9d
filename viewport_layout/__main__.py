"""
vplayout: viewport layout diagnostic CLI

Usage:
    vplayout classify 1920x1080 [--json]
    vplayout simulate 1920x1080 800x1200 1920x1080 [--split down] [--snapshots] [--json]
"""

import json
import re
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console

from . import __version__
from .config import load_settings
from .core.classifier import classify as classify_screen
from .core.ids import SequentialIdGenerator
from .core.workspace import Workspace
from .displays import context_display, viewport_display
from .errors import LayoutError
from .logging_config import setup_logging
from .models.geometry import ScreenRect, SplitDirection

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*[xX]\s*(\d+(?:\.\d+)?)\s*$")


def parse_surface(value: str) -> ScreenRect:
    """Parse ``WIDTHxHEIGHT`` into a ScreenRect at the origin."""
    match = _SIZE_PATTERN.match(value)
    if not match:
        raise click.BadParameter(f"expected WIDTHxHEIGHT (e.g. 1920x1080), got {value!r}")
    width, height = (float(group) for group in match.groups())
    return ScreenRect(width=width, height=height)


def _surface_callback(ctx, param, value):
    if isinstance(value, tuple):
        return tuple(parse_surface(v) for v in value)
    return parse_surface(value)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable INFO logging')
@click.option('--debug', is_flag=True, help='Enable DEBUG logging')
@click.version_option(version=__version__, prog_name='vplayout')
def cli(verbose: bool, debug: bool):
    """Viewport layout diagnostics: classify surfaces and simulate context switches."""
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.argument('surface', callback=_surface_callback)
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
def classify(surface: ScreenRect, output_json: bool):
    """
    Classify a surface size.

    Shows orientation, aspect ratio, breakpoint, size category, device type
    and the context key.

    SURFACE: WIDTHxHEIGHT, e.g. 1920x1080
    """
    console = Console()
    context = classify_screen(surface)

    if output_json:
        click.echo(context_display.format_context_json(context))
    else:
        context_display.display_context(context, console)


@cli.command()
@click.argument('surfaces', nargs=-1, required=True, callback=_surface_callback)
@click.option('--split', 'split_direction', type=click.Choice([d.value for d in SplitDirection]),
              help='Split the default viewport of the first surface')
@click.option('--config', 'config_file', type=click.Path(path_type=Path), help='Settings file')
@click.option('--snapshots', 'show_snapshots', is_flag=True, help='Also show the stored snapshots of every context')
@click.option('--json', 'output_json', is_flag=True, help='Output JSON instead of formatted tables')
def simulate(surfaces: Tuple[ScreenRect, ...], split_direction: Optional[str], config_file: Optional[Path],
             show_snapshots: bool, output_json: bool):
    """
    Apply surfaces in order to a fresh workspace.

    Prints the live viewports after each surface change, which shows how
    arrangements are saved and restored per context.

    SURFACES: one or more WIDTHxHEIGHT values
    """
    console = Console()

    try:
        settings = load_settings(config_file)
        workspace = Workspace(SequentialIdGenerator(settings.id_prefix), settings=settings)
        steps = []

        for index, surface in enumerate(surfaces):
            context = workspace.set_surface(surface)
            if index == 0 and split_direction:
                first = workspace.get_viewports()[0]
                workspace.split_viewport(first, split_direction)
            step = {
                "step": index + 1,
                "context": context.key,
                "viewports": [viewport_display.viewport_to_dict(v) for v in workspace.get_viewports()],
            }
            if show_snapshots:
                step["snapshots"] = {
                    other.id: [
                        s.model_dump(mode="json", by_alias=True)
                        for s in workspace.get_snapshots_for_context(other.id)
                    ]
                    for other in workspace.contexts()
                }
            steps.append(step)

            if not output_json:
                viewport_display.display_viewports(
                    workspace.get_viewports(),
                    console,
                    title=f"Step {index + 1}: {context.key}",
                )
                if show_snapshots:
                    for other in workspace.contexts():
                        viewport_display.display_snapshots(
                            workspace.get_snapshots_for_context(other.id),
                            console,
                            title=f"Stored snapshots: {other.key}",
                        )

        if output_json:
            click.echo(json.dumps(steps, indent=2))

    except LayoutError as e:
        if output_json:
            click.echo(json.dumps(e.to_dict(), indent=2))
        else:
            console.print(f"[red]Error: {e}[/red]")
            if e.suggestion:
                console.print(f"[dim]{e.suggestion}[/dim]")
        sys.exit(1)


if __name__ == '__main__':
    cli()

"""
Viewport Display Module

Rich-formatted tables of live viewports and stored snapshots.
"""

from typing import Any, Dict, List, Sequence

from rich.console import Console
from rich.table import Table

from ..core.viewport import ViewportView
from ..models.viewport import ViewportSnapshot


def viewport_to_dict(viewport: ViewportView) -> Dict[str, Any]:
    return {
        "id": viewport.id,
        "fractionalRect": viewport.fractional_rect.model_dump(),
        "absoluteRect": viewport.absolute_rect.model_dump(),
        "isDefault": viewport.is_default,
        "isMinimized": viewport.is_minimized,
        "isMaximized": viewport.is_maximized,
        "isRequired": viewport.is_required,
    }


def _format_rect(values: Sequence[float]) -> str:
    return " ".join(f"{v:.4g}" for v in values)


def _flags(is_default: bool, is_minimized: bool, is_maximized: bool, is_required: bool) -> str:
    flags = []
    if is_default:
        flags.append("[dim]default[/dim]")
    if is_minimized:
        flags.append("[yellow]minimized[/yellow]")
    if is_maximized:
        flags.append("[cyan]maximized[/cyan]")
    if is_required:
        flags.append("[magenta]required[/magenta]")
    return ", ".join(flags)


def display_viewports(viewports: List[ViewportView], console: Console = None, title: str = "Viewports") -> None:
    """
    Display live viewports with fractional and absolute geometry.

    Args:
        viewports: Live viewport views
        console: Rich console (optional, creates new if not provided)
        title: Table title
    """
    if console is None:
        console = Console()

    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Fraction (x y w h)")
    table.add_column("Absolute (x y w h)")
    table.add_column("Flags")

    for viewport in viewports:
        table.add_row(
            viewport.id,
            _format_rect(viewport.fractional_rect.as_tuple()),
            _format_rect(viewport.absolute_rect.as_tuple()),
            _flags(viewport.is_default, viewport.is_minimized, viewport.is_maximized, viewport.is_required),
        )

    if not viewports:
        console.print(f"[yellow]{title}: none[/yellow]")
    else:
        console.print(table)


def display_snapshots(snapshots: List[ViewportSnapshot], console: Console = None, title: str = "Snapshots") -> None:
    """Display stored snapshots of one context."""
    if console is None:
        console = Console()

    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Fraction (x y w h)")
    table.add_column("Flags")

    for snapshot in snapshots:
        rect = _format_rect(snapshot.fractional_rect.as_tuple()) if snapshot.fractional_rect else "[dim](none)[/dim]"
        table.add_row(
            snapshot.id,
            rect,
            _flags(snapshot.is_default, snapshot.is_minimized, snapshot.is_maximized, snapshot.is_required),
        )

    console.print(table)

"""
Context Display Module

Rich-formatted display of context classification results.
"""

import json
import math
from typing import Any, Dict

from rich.console import Console
from rich.table import Table

from ..models.context import LayoutContext


def context_to_dict(context: LayoutContext) -> Dict[str, Any]:
    """Plain-data view of a context descriptor (camelCase keys, like the persisted document)."""
    return {
        "key": context.key,
        "orientation": context.orientation.value,
        "aspectRatio": context.aspect_ratio if math.isfinite(context.aspect_ratio) else None,
        "breakpoint": context.breakpoint.value,
        "sizeCategory": context.size_category.value,
        "deviceType": context.device_type.value,
        "screenRect": context.screen_rect.model_dump(),
    }


def display_context(context: LayoutContext, console: Console = None) -> None:
    """
    Display a context descriptor as a property table.

    Args:
        context: Classified context
        console: Rich console (optional, creates new if not provided)
    """
    if console is None:
        console = Console()

    rect = context.screen_rect
    table = Table(title=f"Context {context.key}", show_header=False)
    table.add_column("Property", style="dim")
    table.add_column("Value")

    table.add_row("Key", f"[bold cyan]{context.key}[/bold cyan]")
    table.add_row("Screen", f"{rect.width:g}x{rect.height:g} at ({rect.x:g}, {rect.y:g})")
    table.add_row("Orientation", context.orientation.value)
    table.add_row("Aspect ratio", f"{context.aspect_ratio:.3f}")
    table.add_row("Breakpoint", context.breakpoint.value)
    table.add_row("Size category", context.size_category.value)
    table.add_row("Device type", f"[green]{context.device_type.value}[/green]")

    console.print(table)


def format_context_json(context: LayoutContext) -> str:
    """
    Format a context descriptor as JSON string.

    Args:
        context: Classified context

    Returns:
        JSON string
    """
    return json.dumps(context_to_dict(context), indent=2)

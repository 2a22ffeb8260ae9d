# Data models for contexts, geometry, viewport snapshots and documents

from .geometry import FractionalRect, ScreenRect, SplitDirection
from .viewport import ViewportSnapshot
from .context import (
    Breakpoint,
    DeviceType,
    LayoutContext,
    Orientation,
    SizeCategory,
    WorkspaceContext,
    format_context_key,
)
from .document import WorkspaceContextDocument, WorkspaceDocument
from .events import LayoutEventType

__all__ = [
    "FractionalRect",
    "ScreenRect",
    "SplitDirection",
    "ViewportSnapshot",
    "Breakpoint",
    "DeviceType",
    "LayoutContext",
    "Orientation",
    "SizeCategory",
    "WorkspaceContext",
    "format_context_key",
    "WorkspaceContextDocument",
    "WorkspaceDocument",
    "LayoutEventType",
]

"""viewport-layout - Breakpoint-aware viewport layouts for resizable surfaces.

This package provides:
- Classification of screen rectangles into layout contexts
- Proportional geometry (fractional <-> absolute rectangles, splits)
- Per-context viewport snapshots with area-based visibility migration
- A workspace orchestrator that saves and restores arrangements on resize
"""

__version__ = "0.1.0"
__author__ = "viewport-layout contributors"
__license__ = "MIT"

from .core import SequentialIdGenerator, UuidIdGenerator, Workspace, WorkspaceFactory, classify, generate_key
from .errors import LayoutError

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "SequentialIdGenerator",
    "UuidIdGenerator",
    "Workspace",
    "WorkspaceFactory",
    "classify",
    "generate_key",
    "LayoutError",
]

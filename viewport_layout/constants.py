"""Centralized constants and configuration paths for viewport-layout.

Breakpoint bands and device thresholds live here so the classifier and the
tests agree on a single source of truth.
"""

import os
from pathlib import Path
from typing import Final


# Breakpoint bands: lower bound inclusive, upper bound exclusive (width only)
BREAKPOINT_MD_MIN_WIDTH: Final[int] = 1024
BREAKPOINT_LG_MIN_WIDTH: Final[int] = 1600
BREAKPOINT_XL_MIN_WIDTH: Final[int] = 2560

# Default fractional rectangle for the first viewport of a workspace
FULL_SURFACE: Final[tuple[float, float, float, float]] = (0.0, 0.0, 1.0, 1.0)

# Default split ratio (share of the split axis kept by the original viewport)
DEFAULT_SPLIT_RATIO: Final[float] = 0.5

# Minimum viewport size recorded on newly registered contexts (absolute units)
DEFAULT_MINIMUM_VIEWPORT_WIDTH: Final[int] = 100
DEFAULT_MINIMUM_VIEWPORT_HEIGHT: Final[int] = 100

# Id used for the default viewport template carried by a context descriptor
DEFAULT_TEMPLATE_VIEWPORT_ID: Final[str] = "viewport-1"

# Environment variable pointing at a settings file
CONFIG_ENV_VAR: Final[str] = "VIEWPORT_LAYOUT_CONFIG"


class ConfigPaths:
    """Centralized configuration paths.

    All paths are computed once at import time based on the user's home
    directory (or ``XDG_CONFIG_HOME`` when set).
    """

    HOME: Final[Path] = Path.home()
    CONFIG_DIR: Final[Path] = (
        Path(os.environ["XDG_CONFIG_HOME"]) if os.environ.get("XDG_CONFIG_HOME")
        else HOME / ".config"
    ) / "viewport-layout"
    SETTINGS_FILE: Final[Path] = CONFIG_DIR / "settings.json"

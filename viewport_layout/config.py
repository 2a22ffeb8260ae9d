"""Settings loader for viewport-layout.

Settings are read from a JSON file. The file is looked up, in order, at the
explicit path passed to ``load_settings``, the path named by the
``VIEWPORT_LAYOUT_CONFIG`` environment variable, and ``ConfigPaths.SETTINGS_FILE``.
A missing file yields the defaults.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .constants import (
    CONFIG_ENV_VAR,
    DEFAULT_MINIMUM_VIEWPORT_HEIGHT,
    DEFAULT_MINIMUM_VIEWPORT_WIDTH,
    DEFAULT_SPLIT_RATIO,
    ConfigPaths,
)
from .errors import ErrorCode, LayoutError

logger = logging.getLogger(__name__)


class LayoutSettings(BaseModel):
    """Tunable defaults for workspaces built by ``WorkspaceFactory``."""

    minimum_viewport_width: float = Field(default=DEFAULT_MINIMUM_VIEWPORT_WIDTH, ge=0)
    minimum_viewport_height: float = Field(default=DEFAULT_MINIMUM_VIEWPORT_HEIGHT, ge=0)
    default_split_ratio: float = Field(default=DEFAULT_SPLIT_RATIO, gt=0, lt=1)
    id_prefix: str = Field(default="viewport", min_length=1)
    # Reject splits producing viewports below the context minimum size
    enforce_minimum_viewport_size: bool = False

    model_config = {"extra": "forbid"}


def resolve_settings_path(config_file: Optional[Path] = None) -> Path:
    """Pick the settings file to read (explicit path, env var, default)."""
    if config_file is not None:
        return Path(config_file)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return ConfigPaths.SETTINGS_FILE


def load_settings(config_file: Optional[Path] = None) -> LayoutSettings:
    """Load settings from JSON.

    Args:
        config_file: Explicit settings file (optional)

    Returns:
        LayoutSettings (defaults when the file does not exist)

    Raises:
        LayoutError: CONFIG_INVALID if the file is not valid JSON or fails validation
    """
    path = resolve_settings_path(config_file)

    if not path.exists():
        logger.debug(f"Settings file not found, using defaults: {path}")
        return LayoutSettings()

    try:
        with open(path) as f:
            data = json.load(f)
        settings = LayoutSettings.model_validate(data)
    except json.JSONDecodeError as e:
        raise LayoutError(
            code=ErrorCode.CONFIG_INVALID,
            message=f"Settings file is not valid JSON: {path}: {e}",
            suggestion="Fix the JSON syntax or delete the file to use defaults",
            context={"path": str(path)},
        ) from e
    except ValidationError as e:
        raise LayoutError(
            code=ErrorCode.CONFIG_INVALID,
            message=f"Invalid settings in {path}: {e.error_count()} validation error(s)",
            suggestion="Check field names and value ranges",
            context={"path": str(path), "errors": [err["msg"] for err in e.errors()]},
        ) from e

    logger.info(f"Loaded settings from {path}")
    return settings

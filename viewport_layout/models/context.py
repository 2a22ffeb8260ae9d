"""Context descriptor models.

``LayoutContext`` is the pure classification of a screen rectangle.
``WorkspaceContext`` is a context registered with a workspace: it adds an
id, a display name and minimum viewport sizes on top of the descriptor.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from ..constants import DEFAULT_MINIMUM_VIEWPORT_HEIGHT, DEFAULT_MINIMUM_VIEWPORT_WIDTH
from .geometry import ScreenRect
from .viewport import ViewportSnapshot


class Orientation(str, Enum):
    """Surface orientation (a square surface is landscape)"""
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"


class Breakpoint(str, Enum):
    """Width breakpoint bands"""
    SM = "sm"
    MD = "md"
    LG = "lg"
    XL = "xl"


class SizeCategory(str, Enum):
    """Size category, one per breakpoint"""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extra-large"


class DeviceType(str, Enum):
    """Closed set of device labels.

    ``TABLET`` and ``LAPTOP`` are generic labels accepted in persisted
    documents; the classifier never produces them.
    """
    PHONE = "phone"
    PHABLET = "phablet"
    FOLDABLE = "foldable"
    TABLET = "tablet"
    SMALL_TABLET = "small-tablet"
    LARGE_TABLET = "large-tablet"
    LAPTOP = "laptop"
    COMPACT_LAPTOP = "compact-laptop"
    STANDARD_LAPTOP = "standard-laptop"
    LARGE_LAPTOP = "large-laptop"
    DESKTOP = "desktop"
    ULTRAWIDE = "ultrawide"
    TV = "tv"
    WALL_DISPLAY = "wall-display"


def format_dimension(value: float) -> str:
    """Render a dimension for a context key (integral values without '.0')."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_context_key(orientation: Orientation, breakpoint: Breakpoint, width: float, height: float) -> str:
    """Build the stable context key ``{orientation}-{breakpoint}-{width}x{height}``."""
    return (
        f"{Orientation(orientation).value}-{Breakpoint(breakpoint).value}-"
        f"{format_dimension(width)}x{format_dimension(height)}"
    )


class LayoutContext(BaseModel):
    """Classification of a screen rectangle.

    ``viewports`` is the default arrangement template for the context: a
    single viewport covering the whole surface.
    """

    orientation: Orientation
    aspect_ratio: float
    breakpoint: Breakpoint
    size_category: SizeCategory
    device_type: DeviceType
    screen_rect: ScreenRect
    viewports: list[ViewportSnapshot] = Field(default_factory=list)

    @property
    def key(self) -> str:
        return format_context_key(
            self.orientation, self.breakpoint, self.screen_rect.width, self.screen_rect.height
        )

    @property
    def area(self) -> float:
        return self.screen_rect.area


class WorkspaceContext(BaseModel):
    """A context registered with a workspace.

    The id defaults to the context key, the name to the id.
    """

    id: Optional[str] = Field(default=None, description="Context identifier")
    name: Optional[str] = Field(default=None, description="Human-readable name")
    layout: LayoutContext
    minimum_viewport_width: float = Field(default=DEFAULT_MINIMUM_VIEWPORT_WIDTH, ge=0)
    minimum_viewport_height: float = Field(default=DEFAULT_MINIMUM_VIEWPORT_HEIGHT, ge=0)

    @model_validator(mode="after")
    def default_identity(self):
        """Fill id and name from the context key when not given."""
        if not self.id:
            self.id = self.layout.key
        if not self.name:
            self.name = self.id
        return self

    @property
    def key(self) -> str:
        return self.layout.key

    @property
    def area(self) -> float:
        return self.layout.area

    @property
    def screen_rect(self) -> ScreenRect:
        return self.layout.screen_rect

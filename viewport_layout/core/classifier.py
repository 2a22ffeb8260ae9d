"""Context classification for screen rectangles.

Classifies a screen rectangle into a ``LayoutContext`` (orientation, aspect
ratio, breakpoint, size category, device type) and computes its stable key.
Classification is pure: identical input always yields identical output,
which the context registry relies on for caching.
"""

import logging
import math

from ..constants import (
    BREAKPOINT_LG_MIN_WIDTH,
    BREAKPOINT_MD_MIN_WIDTH,
    BREAKPOINT_XL_MIN_WIDTH,
    DEFAULT_TEMPLATE_VIEWPORT_ID,
)
from ..models.context import (
    Breakpoint,
    DeviceType,
    LayoutContext,
    Orientation,
    SizeCategory,
    format_context_key,
)
from ..models.geometry import FractionalRect, ScreenRect
from ..models.viewport import ViewportSnapshot

logger = logging.getLogger(__name__)


_SIZE_CATEGORIES = {
    Breakpoint.SM: SizeCategory.SMALL,
    Breakpoint.MD: SizeCategory.MEDIUM,
    Breakpoint.LG: SizeCategory.LARGE,
    Breakpoint.XL: SizeCategory.EXTRA_LARGE,
}


def get_orientation(width: float, height: float) -> Orientation:
    """Landscape when at least as wide as tall (squares are landscape)."""
    return Orientation.LANDSCAPE if width >= height else Orientation.PORTRAIT


def get_aspect_ratio(width: float, height: float) -> float:
    """Width over height; infinite for zero height, NaN for a 0x0 surface."""
    if height == 0:
        return math.nan if width == 0 else math.inf
    return width / height


def get_breakpoint(width: float) -> Breakpoint:
    """Width band, lower bound inclusive."""
    if width < BREAKPOINT_MD_MIN_WIDTH:
        return Breakpoint.SM
    if width < BREAKPOINT_LG_MIN_WIDTH:
        return Breakpoint.MD
    if width < BREAKPOINT_XL_MIN_WIDTH:
        return Breakpoint.LG
    return Breakpoint.XL


def get_size_category(breakpoint: Breakpoint) -> SizeCategory:
    return _SIZE_CATEGORIES[Breakpoint(breakpoint)]


def get_device_type(width: float, aspect_ratio: float) -> DeviceType:
    """Classify a device from width and aspect ratio.

    Rules are evaluated top to bottom and the first match wins, so a screen
    that is both ultrawide and wall-sized is ultrawide. A NaN ratio fails
    every ratio comparison and ends up as desktop.
    """
    ar = aspect_ratio

    # 21:9 and 32:9 monitors
    if ar > 2.2:
        return DeviceType.ULTRAWIDE

    # Signage, conference room displays
    if width > 3000:
        return DeviceType.WALL_DISPLAY

    # Consumer 16:9 displays used as monitors
    if 2000 < width <= 3000 and 1.7 <= ar <= 1.9:
        return DeviceType.TV

    # Unfolded foldables are very wide for their width
    if 600 <= width < 1200 and 1.8 < ar <= 2.1:
        return DeviceType.FOLDABLE

    if width > 2000 and 1.3 <= ar <= 1.8:
        return DeviceType.DESKTOP

    if width < 500 and ar < 0.6:
        return DeviceType.PHONE

    if 500 <= width < 700 and (ar < 0.7 or ar > 1.4):
        return DeviceType.PHABLET

    if 600 <= width < 900 and 0.7 <= ar <= 1.6:
        return DeviceType.SMALL_TABLET

    if 900 <= width < 1200 and 0.7 <= ar <= 1.6:
        return DeviceType.LARGE_TABLET

    if 1200 <= width < 1400 and 1.3 <= ar <= 1.8:
        return DeviceType.COMPACT_LAPTOP

    if 1400 <= width < 1800 and 1.3 <= ar <= 1.8:
        return DeviceType.STANDARD_LAPTOP

    if 1800 <= width <= 2000 and 1.3 <= ar <= 1.8:
        return DeviceType.LARGE_LAPTOP

    return DeviceType.DESKTOP


def default_viewports() -> list[ViewportSnapshot]:
    """Default arrangement template: one viewport covering the whole surface."""
    return [
        ViewportSnapshot(
            id=DEFAULT_TEMPLATE_VIEWPORT_ID,
            fractional_rect=FractionalRect(x=0.0, y=0.0, width=1.0, height=1.0),
            is_default=True,
            timestamp=0.0,
        )
    ]


def classify(screen: ScreenRect) -> LayoutContext:
    """Classify a screen rectangle.

    Args:
        screen: Surface rectangle in absolute units

    Returns:
        LayoutContext describing the surface
    """
    width, height = screen.width, screen.height
    aspect_ratio = get_aspect_ratio(width, height)
    breakpoint = get_breakpoint(width)

    context = LayoutContext(
        orientation=get_orientation(width, height),
        aspect_ratio=aspect_ratio,
        breakpoint=breakpoint,
        size_category=get_size_category(breakpoint),
        device_type=get_device_type(width, aspect_ratio),
        screen_rect=screen,
        viewports=default_viewports(),
    )
    logger.debug(
        f"Classified {width}x{height}: {context.orientation.value}/{context.breakpoint.value}/"
        f"{context.device_type.value} (ratio {aspect_ratio:.3f})"
    )
    return context


def generate_key(context: LayoutContext) -> str:
    """Stable key ``{orientation}-{breakpoint}-{width}x{height}``.

    Width and height are embedded verbatim, so two sizes in the same band
    still produce distinct keys.
    """
    return format_context_key(
        context.orientation,
        context.breakpoint,
        context.screen_rect.width,
        context.screen_rect.height,
    )

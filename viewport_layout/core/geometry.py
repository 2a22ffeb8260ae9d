"""Proportional geometry engine.

Pure functions converting between resolution-independent fractional
rectangles and absolute screen rectangles, plus axis-aligned splits.
Nothing here rounds or clamps: callers that need pixel-quantized output round
at their own boundary.
"""

import logging
import math
from typing import Any, Optional, Union

from pydantic import ValidationError

from ..constants import DEFAULT_SPLIT_RATIO
from ..errors import ErrorCode, InvalidArgumentError
from ..models.geometry import FractionalRect, ScreenRect, SplitDirection

logger = logging.getLogger(__name__)

Rect = Union[ScreenRect, FractionalRect]


def to_absolute(screen: ScreenRect, frac: FractionalRect) -> ScreenRect:
    """Place a fractional rectangle on a screen rectangle.

    Args:
        screen: Surface in absolute units
        frac: Rectangle relative to ``screen``

    Returns:
        Absolute rectangle (unrounded)

    Raises:
        InvalidArgumentError: If ``frac`` has a negative extent
    """
    try:
        return ScreenRect(
            x=screen.x + screen.width * frac.x,
            y=screen.y + screen.height * frac.y,
            width=screen.width * frac.width,
            height=screen.height * frac.height,
        )
    except ValidationError as e:
        raise InvalidArgumentError(
            f"Fractional rectangle {frac.as_tuple()} has no absolute placement on "
            f"{screen.width}x{screen.height}",
            code=ErrorCode.INVALID_RECT,
            context={"fractional_rect": frac.model_dump()},
        ) from e


def to_fractional(screen: ScreenRect, rect: ScreenRect) -> FractionalRect:
    """Inverse of ``to_absolute`` for the same screen.

    Raises:
        InvalidArgumentError: If the screen has zero width or height
    """
    if screen.width == 0 or screen.height == 0:
        raise InvalidArgumentError(
            f"Cannot express a rectangle relative to a degenerate surface "
            f"({screen.width}x{screen.height})",
            code=ErrorCode.INVALID_RECT,
            context={"screen": screen.model_dump()},
        )
    return FractionalRect(
        x=(rect.x - screen.x) / screen.width,
        y=(rect.y - screen.y) / screen.height,
        width=rect.width / screen.width,
        height=rect.height / screen.height,
    )


def coerce_direction(direction: Any) -> SplitDirection:
    """Accept a ``SplitDirection`` or its string value."""
    try:
        return SplitDirection(direction)
    except ValueError:
        raise InvalidArgumentError(
            f"Unsupported split direction: {direction!r} "
            f"(expected one of {', '.join(d.value for d in SplitDirection)})",
            code=ErrorCode.INVALID_DIRECTION,
            context={"direction": repr(direction)},
        ) from None


def coerce_fractional_rect(value: Any) -> FractionalRect:
    """Build a ``FractionalRect`` from a model, a mapping or an (x, y, w, h) sequence.

    Raises:
        InvalidArgumentError: If the value cannot be read as a finite rectangle
    """
    if isinstance(value, FractionalRect):
        return value
    try:
        if isinstance(value, dict):
            return FractionalRect.model_validate(value)
        if isinstance(value, (tuple, list)) and len(value) == 4:
            x, y, width, height = value
            return FractionalRect(x=x, y=y, width=width, height=height)
    except ValidationError as e:
        raise InvalidArgumentError(
            f"Malformed fractional rectangle {value!r}: {e.error_count()} validation error(s)",
            code=ErrorCode.INVALID_RECT,
            context={"value": repr(value)},
        ) from e
    raise InvalidArgumentError(
        f"Malformed fractional rectangle: {value!r}",
        code=ErrorCode.INVALID_RECT,
        context={"value": repr(value)},
    )


def coerce_screen_rect(value: Any) -> ScreenRect:
    """Build a ``ScreenRect`` from a model, a mapping or an (x, y, w, h) sequence."""
    if isinstance(value, ScreenRect):
        return value
    try:
        if isinstance(value, dict):
            return ScreenRect.model_validate(value)
        if isinstance(value, (tuple, list)) and len(value) == 4:
            x, y, width, height = value
            return ScreenRect(x=x, y=y, width=width, height=height)
    except ValidationError as e:
        raise InvalidArgumentError(
            f"Malformed screen rectangle {value!r}: {e.error_count()} validation error(s)",
            code=ErrorCode.INVALID_RECT,
            context={"value": repr(value)},
        ) from e
    raise InvalidArgumentError(
        f"Malformed screen rectangle: {value!r}",
        code=ErrorCode.INVALID_RECT,
        context={"value": repr(value)},
    )


def split(
    frac: FractionalRect,
    direction: Union[SplitDirection, str],
    ratio: float = DEFAULT_SPLIT_RATIO,
) -> tuple[FractionalRect, FractionalRect]:
    """Bisect a rectangle along the axis implied by ``direction``.

    The direction names where the new rectangle goes:

    - ``down``: keep the top part, new part below
    - ``up``: keep the bottom part, new part on top
    - ``right``: keep the left part, new part on the right
    - ``left``: keep the right part, new part on the left

    The kept part receives ``ratio`` of the split axis and the new part the
    remainder. The shared edge is computed once so both parts tile the input
    exactly.

    Args:
        frac: Rectangle to split
        direction: Split direction
        ratio: Share of the split axis kept by the original, in (0, 1)

    Returns:
        Tuple ``(keep, new)``

    Raises:
        InvalidArgumentError: Unsupported direction or ratio outside (0, 1)
    """
    direction = coerce_direction(direction)
    if not (isinstance(ratio, (int, float)) and math.isfinite(ratio) and 0 < ratio < 1):
        raise InvalidArgumentError(
            f"Split ratio must be strictly between 0 and 1, got {ratio!r}",
            code=ErrorCode.INVALID_RATIO,
            context={"ratio": repr(ratio)},
        )

    x, y, width, height = frac.as_tuple()

    if direction in (SplitDirection.DOWN, SplitDirection.UP):
        kept = height * ratio
        top_height = kept if direction is SplitDirection.DOWN else height - kept
        top = FractionalRect(x=x, y=y, width=width, height=top_height)
        bottom = FractionalRect(x=x, y=y + top_height, width=width, height=height - top_height)
        keep, new = (top, bottom) if direction is SplitDirection.DOWN else (bottom, top)
    else:
        kept = width * ratio
        left_width = kept if direction is SplitDirection.RIGHT else width - kept
        left = FractionalRect(x=x, y=y, width=left_width, height=height)
        right = FractionalRect(x=x + left_width, y=y, width=width - left_width, height=height)
        keep, new = (left, right) if direction is SplitDirection.RIGHT else (right, left)

    logger.debug(f"split {frac.as_tuple()} {direction.value} ratio={ratio} -> keep={keep.as_tuple()} new={new.as_tuple()}")
    return keep, new


# Bounds helpers


def area(rect: Rect) -> float:
    return rect.width * rect.height


def contains_point(rect: Rect, x: float, y: float) -> bool:
    """Check if a point lies within ``rect`` (edges inclusive)."""
    return rect.x <= x <= rect.x + rect.width and rect.y <= y <= rect.y + rect.height


def intersects(a: Rect, b: Rect) -> bool:
    """Check if two rectangles touch or overlap."""
    return not (
        a.x + a.width < b.x
        or b.x + b.width < a.x
        or a.y + a.height < b.y
        or b.y + b.height < a.y
    )


def intersection(a: Rect, b: Rect) -> Optional[Rect]:
    """Intersection of two rectangles of the same kind, or None when disjoint."""
    if not intersects(a, b):
        return None
    x = max(a.x, b.x)
    y = max(a.y, b.y)
    width = min(a.x + a.width, b.x + b.width) - x
    height = min(a.y + a.height, b.y + b.height) - y
    return type(a)(x=x, y=y, width=width, height=height)


def union(a: Rect, b: Rect) -> Rect:
    """Smallest rectangle enclosing both rectangles."""
    x = min(a.x, b.x)
    y = min(a.y, b.y)
    width = max(a.x + a.width, b.x + b.width) - x
    height = max(a.y + a.height, b.y + b.height) - y
    return type(a)(x=x, y=y, width=width, height=height)


def scale(rect: Rect, factor: float) -> Rect:
    return type(rect)(
        x=rect.x * factor,
        y=rect.y * factor,
        width=rect.width * factor,
        height=rect.height * factor,
    )


def translate(rect: Rect, dx: float, dy: float) -> Rect:
    return rect.model_copy(update={"x": rect.x + dx, "y": rect.y + dy})


def normalize(rect: FractionalRect) -> FractionalRect:
    """Flip negative extents so width and height are non-negative."""
    return FractionalRect(
        x=rect.x + rect.width if rect.width < 0 else rect.x,
        y=rect.y + rect.height if rect.height < 0 else rect.y,
        width=abs(rect.width),
        height=abs(rect.height),
    )


def is_valid(rect: Rect) -> bool:
    """Check for strictly positive extents."""
    return rect.width > 0 and rect.height > 0


def meets_minimum_size(rect: Rect, min_width: float, min_height: float) -> bool:
    return rect.width >= min_width and rect.height >= min_height


def clamp_dimensions(
    width: float,
    height: float,
    min_width: float,
    min_height: float,
    max_width: Optional[float] = None,
    max_height: Optional[float] = None,
) -> tuple[float, float]:
    """Clamp a size to minimum and optional maximum constraints."""
    width = max(width, min_width)
    height = max(height, min_height)
    if max_width is not None:
        width = min(width, max_width)
    if max_height is not None:
        height = min(height, max_height)
    return width, height

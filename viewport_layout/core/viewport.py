"""Live viewport entity and its read-only projection.

A ``MutableViewport`` is owned and mutated by exactly one
``ViewportRegistry``. Everything outside the registry receives a
``ViewportView``, which exposes the same state through properties only.
"""

from datetime import datetime
from typing import Optional

from ..models.geometry import FractionalRect, ScreenRect
from ..models.viewport import ViewportSnapshot
from . import geometry


class MutableViewport:
    """Live viewport with derived absolute geometry.

    The fractional rectangle is the source of truth; ``absolute_rect`` is
    recomputed from it whenever the surface or the fraction changes.
    """

    __slots__ = (
        "id",
        "fractional_rect",
        "absolute_rect",
        "is_default",
        "is_minimized",
        "is_maximized",
        "is_required",
    )

    def __init__(
        self,
        viewport_id: str,
        fractional_rect: FractionalRect,
        surface: ScreenRect,
        is_default: bool = False,
        is_minimized: bool = False,
        is_maximized: bool = False,
        is_required: bool = False,
    ):
        self.id = viewport_id
        self.fractional_rect = fractional_rect
        self.absolute_rect = geometry.to_absolute(surface, fractional_rect)
        self.is_default = is_default
        self.is_minimized = is_minimized
        self.is_maximized = is_maximized
        self.is_required = is_required

    @classmethod
    def from_snapshot(cls, snapshot: ViewportSnapshot, surface: ScreenRect) -> "MutableViewport":
        """Materialize a visible snapshot on ``surface``."""
        return cls(
            snapshot.id,
            snapshot.fractional_rect or FractionalRect(),
            surface,
            is_default=snapshot.is_default,
            is_minimized=snapshot.is_minimized,
            is_maximized=snapshot.is_maximized,
            is_required=snapshot.is_required,
        )

    def set_fractional_rect(self, frac: FractionalRect, surface: ScreenRect) -> None:
        self.fractional_rect = frac
        self.absolute_rect = geometry.to_absolute(surface, frac)

    def recompute(self, surface: ScreenRect) -> None:
        self.absolute_rect = geometry.to_absolute(surface, self.fractional_rect)

    def set_minimized(self, minimized: bool = True) -> None:
        # Minimizing cancels a maximize
        self.is_minimized = minimized
        if minimized:
            self.is_maximized = False

    def set_maximized(self, maximized: bool = True) -> None:
        self.is_maximized = maximized
        if maximized:
            self.is_minimized = False

    def restore(self) -> None:
        """Return to the normal (neither minimized nor maximized) state."""
        self.is_minimized = False
        self.is_maximized = False

    def to_snapshot(self, context_id: Optional[str] = None) -> ViewportSnapshot:
        return ViewportSnapshot(
            id=self.id,
            fractional_rect=self.fractional_rect,
            is_default=self.is_default,
            is_minimized=self.is_minimized,
            is_maximized=self.is_maximized,
            is_required=self.is_required,
            context_id=context_id,
            timestamp=datetime.now().timestamp(),
        )

    def copy(self) -> "MutableViewport":
        clone = MutableViewport.__new__(MutableViewport)
        for name in self.__slots__:
            setattr(clone, name, getattr(self, name))
        return clone

    def __repr__(self) -> str:
        return f"MutableViewport(id={self.id!r}, fractional_rect={self.fractional_rect.as_tuple()})"


class ViewportView:
    """Read-only projection of a live viewport.

    Views compare equal when they refer to the same viewport id. A view
    reflects later changes made by the owning registry.
    """

    __slots__ = ("_viewport",)

    def __init__(self, viewport: MutableViewport):
        self._viewport = viewport

    @property
    def id(self) -> str:
        return self._viewport.id

    @property
    def fractional_rect(self) -> FractionalRect:
        return self._viewport.fractional_rect

    @property
    def absolute_rect(self) -> ScreenRect:
        return self._viewport.absolute_rect

    @property
    def is_default(self) -> bool:
        return self._viewport.is_default

    @property
    def is_minimized(self) -> bool:
        return self._viewport.is_minimized

    @property
    def is_maximized(self) -> bool:
        return self._viewport.is_maximized

    @property
    def is_required(self) -> bool:
        return self._viewport.is_required

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ViewportView):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"ViewportView(id={self.id!r}, absolute_rect={self.absolute_rect.as_tuple()})"

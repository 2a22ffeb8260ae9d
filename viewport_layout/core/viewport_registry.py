"""Viewport registry.

Owns the live viewports of one workspace. Callers receive ``ViewportView``
projections; every mutation goes through a registry method. Composite
operations (split, surface change, bulk replace) compute their complete
result before touching registry state, so a failure leaves the registry
unchanged.
"""

import logging
from typing import Any, Iterable, List, Optional, Union

from ..constants import DEFAULT_SPLIT_RATIO, FULL_SURFACE
from ..errors import (
    ErrorCode,
    InvalidArgumentError,
    NotFoundError,
    PreconditionViolationError,
    UnsupportedOperationError,
)
from ..models.geometry import FractionalRect, ScreenRect, SplitDirection
from ..models.viewport import ViewportSnapshot
from . import geometry
from .ids import IdGenerator
from .viewport import MutableViewport, ViewportView

logger = logging.getLogger(__name__)

ViewportRef = Union[ViewportView, MutableViewport, str]


class ViewportRegistry:
    """Set of live viewports laid out on one surface."""

    def __init__(self, id_generator: IdGenerator, surface: Optional[ScreenRect] = None):
        self._id_generator = id_generator
        self._surface = surface
        # Insertion ordered: list() returns viewports in creation order
        self._viewports: dict[str, MutableViewport] = {}

    @property
    def surface(self) -> Optional[ScreenRect]:
        return self._surface

    def _require_surface(self) -> ScreenRect:
        if self._surface is None:
            raise PreconditionViolationError("No surface has been set for this viewport registry")
        return self._surface

    def _lookup(self, viewport: ViewportRef) -> Optional[MutableViewport]:
        """Find the owned entity behind a view, entity or id.

        A view or entity only matches when it refers to the very object this
        registry owns, so a view from another registry is not a member even
        if the ids coincide.
        """
        if isinstance(viewport, str):
            return self._viewports.get(viewport)
        if isinstance(viewport, ViewportView):
            entity = viewport._viewport
        elif isinstance(viewport, MutableViewport):
            entity = viewport
        else:
            return None
        owned = self._viewports.get(entity.id)
        return owned if owned is entity else None

    def _require(self, viewport: ViewportRef) -> MutableViewport:
        entity = self._lookup(viewport)
        if entity is None:
            identifier = viewport if isinstance(viewport, str) else getattr(viewport, "id", repr(viewport))
            raise NotFoundError("viewport", identifier)
        return entity

    def _next_id(self) -> str:
        viewport_id = self._id_generator.generate()
        if viewport_id in self._viewports:
            raise InvalidArgumentError(
                f"Id generator produced a duplicate viewport id: {viewport_id}",
                context={"id": viewport_id},
            )
        return viewport_id

    # Creation and removal

    def create(
        self,
        fractional_rect: Optional[Any] = None,
        viewport_id: Optional[str] = None,
        **flags: bool,
    ) -> ViewportView:
        """Create a viewport.

        Args:
            fractional_rect: Placement; defaults to the full surface when the
                registry is empty
            viewport_id: Explicit id (generated when omitted)
            **flags: ``is_default``, ``is_minimized``, ``is_maximized``, ``is_required``

        Returns:
            View of the new viewport

        Raises:
            PreconditionViolationError: No surface set
            UnsupportedOperationError: Viewports exist and no rect was given
            InvalidArgumentError: Malformed rect or duplicate id
        """
        surface = self._require_surface()

        if fractional_rect is None:
            if self._viewports:
                raise UnsupportedOperationError(
                    "Automatic placement is not supported when viewports already exist",
                    suggestion="Pass an explicit fractional rectangle or split an existing viewport",
                )
            frac = FractionalRect(x=FULL_SURFACE[0], y=FULL_SURFACE[1], width=FULL_SURFACE[2], height=FULL_SURFACE[3])
        else:
            frac = geometry.coerce_fractional_rect(fractional_rect)

        if viewport_id is None:
            viewport_id = self._next_id()
        elif viewport_id in self._viewports:
            raise InvalidArgumentError(
                f"Viewport id already exists: {viewport_id}",
                context={"id": viewport_id},
            )

        entity = MutableViewport(viewport_id, frac, surface, **flags)
        self._viewports[viewport_id] = entity
        logger.debug(f"Created viewport {viewport_id} at {frac.as_tuple()}")
        return ViewportView(entity)

    def split(
        self,
        viewport: ViewportRef,
        direction: Union[SplitDirection, str],
        ratio: float = DEFAULT_SPLIT_RATIO,
        minimum_size: Optional[tuple[float, float]] = None,
    ) -> ViewportView:
        """Split a viewport; the original keeps one part and a new viewport gets the other.

        Args:
            viewport: Viewport to split (must belong to this registry)
            direction: Side on which the new viewport appears
            ratio: Share of the split axis kept by the original
            minimum_size: Optional (width, height) both parts must meet in
                absolute units

        Returns:
            View of the new viewport

        Raises:
            NotFoundError: Viewport is not a member of this registry
            InvalidArgumentError: Bad direction or ratio, or a part below ``minimum_size``
        """
        surface = self._require_surface()
        source = self._require(viewport)

        # Stage: both halves and the new entity exist before anything is mutated
        keep, new = geometry.split(source.fractional_rect, direction, ratio)
        if minimum_size is not None:
            min_width, min_height = minimum_size
            for part in (keep, new):
                absolute = geometry.to_absolute(surface, part)
                if not geometry.meets_minimum_size(absolute, min_width, min_height):
                    raise InvalidArgumentError(
                        f"Split would create a viewport of {absolute.width:g}x{absolute.height:g}, "
                        f"below the minimum {min_width:g}x{min_height:g}",
                        code=ErrorCode.VIEWPORT_TOO_SMALL,
                        context={"id": source.id, "direction": str(direction)},
                    )
        new_entity = MutableViewport(self._next_id(), new, surface)

        # Swap in
        source.set_fractional_rect(keep, surface)
        self._viewports[new_entity.id] = new_entity
        logger.debug(f"Split viewport {source.id} -> kept {keep.as_tuple()}, new {new_entity.id} at {new.as_tuple()}")
        return ViewportView(new_entity)

    def remove(self, viewport: ViewportRef) -> bool:
        """Remove a viewport; False when it is not a member."""
        entity = self._lookup(viewport)
        if entity is None:
            return False
        del self._viewports[entity.id]
        logger.debug(f"Removed viewport {entity.id}")
        return True

    # Queries

    def find(self, viewport_id: str) -> Optional[ViewportView]:
        entity = self._viewports.get(viewport_id)
        return ViewportView(entity) if entity is not None else None

    def has(self, viewport_id: str) -> bool:
        return viewport_id in self._viewports

    def count(self) -> int:
        return len(self._viewports)

    def list(self) -> List[ViewportView]:
        return [ViewportView(entity) for entity in self._viewports.values()]

    def ids(self) -> List[str]:
        return list(self._viewports)

    def __len__(self) -> int:
        return len(self._viewports)

    def __contains__(self, viewport: object) -> bool:
        if isinstance(viewport, (str, ViewportView, MutableViewport)):
            return self._lookup(viewport) is not None
        return False

    # Surface

    def on_surface_change(self, screen: ScreenRect) -> None:
        """Adopt a new surface and recompute every absolute rectangle."""
        # Compute first: to_absolute can fail validation on out-of-range fractions
        recomputed = {
            viewport_id: geometry.to_absolute(screen, entity.fractional_rect)
            for viewport_id, entity in self._viewports.items()
        }
        self._surface = screen
        for viewport_id, absolute in recomputed.items():
            self._viewports[viewport_id].absolute_rect = absolute
        logger.debug(f"Surface changed to {screen.as_tuple()}, recomputed {len(recomputed)} viewport(s)")

    # State flags

    def minimize(self, viewport: ViewportRef) -> bool:
        entity = self._lookup(viewport)
        if entity is None:
            return False
        entity.set_minimized(True)
        return True

    def maximize(self, viewport: ViewportRef) -> bool:
        entity = self._lookup(viewport)
        if entity is None:
            return False
        entity.set_maximized(True)
        return True

    def restore(self, viewport: ViewportRef) -> bool:
        entity = self._lookup(viewport)
        if entity is None:
            return False
        entity.restore()
        return True

    def swap(self, first: ViewportRef, second: ViewportRef) -> bool:
        """Exchange the placements of two viewports."""
        a = self._lookup(first)
        b = self._lookup(second)
        if a is None or b is None:
            return False
        surface = self._require_surface()
        a_frac, b_frac = a.fractional_rect, b.fractional_rect
        a.set_fractional_rect(b_frac, surface)
        b.set_fractional_rect(a_frac, surface)
        return True

    # Bulk operations used by the workspace during context switches

    def snapshot_all(self, context_id: Optional[str] = None) -> List[ViewportSnapshot]:
        """Snapshot every live viewport, in creation order."""
        return [entity.to_snapshot(context_id) for entity in self._viewports.values()]

    def replace_all(self, viewports: Iterable[MutableViewport], surface: Optional[ScreenRect] = None) -> None:
        """Replace the live set (and optionally the surface) in one step.

        Raises:
            InvalidArgumentError: Duplicate ids in ``viewports``
        """
        target = surface if surface is not None else self._surface
        staged: dict[str, MutableViewport] = {}
        for entity in viewports:
            if entity.id in staged:
                raise InvalidArgumentError(
                    f"Duplicate viewport id in replacement set: {entity.id}",
                    context={"id": entity.id},
                )
            staged[entity.id] = entity
        if target is not None:
            for entity in staged.values():
                entity.recompute(target)

        self._surface = target
        self._viewports = staged

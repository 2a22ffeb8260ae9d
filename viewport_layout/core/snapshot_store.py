"""Per-context viewport snapshot storage.

Every registered context owns an insertion-ordered ``SnapshotCollection``.
When a viewport is added while some context is current, it is recorded in
every registered context; contexts with strictly less screen area than the
current one receive it minimized and without geometry.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Optional

from ..errors import ErrorCode, PreconditionViolationError
from ..models.events import LayoutEventType
from ..models.viewport import ViewportSnapshot
from . import geometry
from .context_registry import ContextRegistry
from .ids import IdGenerator

logger = logging.getLogger(__name__)


class SnapshotCollection:
    """Insertion-ordered snapshots of one context, keyed by viewport id."""

    def __init__(self, snapshots: Optional[Iterable[ViewportSnapshot]] = None):
        self._snapshots: Dict[str, ViewportSnapshot] = {}
        for snapshot in snapshots or ():
            self.add(snapshot)

    def add(self, snapshot: ViewportSnapshot) -> None:
        """Add a snapshot; an existing id is replaced in place, keeping its position."""
        self._snapshots[snapshot.id] = snapshot

    def find_by_id(self, viewport_id: str) -> Optional[ViewportSnapshot]:
        return self._snapshots.get(viewport_id)

    def update(self, viewport_id: str, **fields: Any) -> bool:
        """Replace fields of a snapshot; False when the id is unknown.

        The updated snapshot is validated as a whole before it replaces the
        stored one.
        """
        current = self._snapshots.get(viewport_id)
        if current is None:
            return False
        data = current.model_dump()
        data["timestamp"] = datetime.now().timestamp()
        data.update(fields)
        self._snapshots[viewport_id] = ViewportSnapshot.model_validate(data)
        return True

    def remove(self, viewport_id: str) -> bool:
        return self._snapshots.pop(viewport_id, None) is not None

    def get_all(self) -> List[ViewportSnapshot]:
        return list(self._snapshots.values())

    def replace_all(self, snapshots: Iterable[ViewportSnapshot]) -> None:
        self._snapshots = {snapshot.id: snapshot for snapshot in snapshots}

    def ids(self) -> List[str]:
        return list(self._snapshots)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[ViewportSnapshot]:
        return iter(list(self._snapshots.values()))

    def __contains__(self, viewport_id: object) -> bool:
        return viewport_id in self._snapshots


class SnapshotStore:
    """Viewport snapshots for every context of a context registry."""

    def __init__(self, context_registry: ContextRegistry, id_generator: IdGenerator):
        self.context_registry = context_registry
        self.id_generator = id_generator
        self._collections: Dict[str, SnapshotCollection] = {}
        context_registry.on(LayoutEventType.CONTEXT_REMOVED, self._on_context_removed)

    def _on_context_removed(self, payload: Dict[str, Any]) -> None:
        # A shared sink also delivers removals from other registries
        context_id = payload["context"].id
        if self.context_registry.find_by_id(context_id) is None and self.drop_context(context_id):
            logger.debug(f"Dropped snapshots of removed context {context_id}")

    def collection(self, context_id: str) -> SnapshotCollection:
        """Collection for ``context_id``, created empty on first access."""
        collection = self._collections.get(context_id)
        if collection is None:
            collection = SnapshotCollection()
            self._collections[context_id] = collection
        return collection

    def contains_viewport(self, viewport_id: str) -> bool:
        """True when any context holds a snapshot of ``viewport_id``."""
        return any(viewport_id in collection for collection in self._collections.values())

    def get_snapshots_for_context(self, context_id: str) -> List[ViewportSnapshot]:
        """Snapshots of ``context_id`` in insertion order (empty when unknown)."""
        collection = self._collections.get(context_id)
        return collection.get_all() if collection is not None else []

    def add_viewport(
        self,
        fractional_rect: Any,
        viewport_id: Optional[str] = None,
        **flags: bool,
    ) -> str:
        """Record a new viewport in every registered context.

        The current context keeps the viewport visible with its rectangle.
        Every other context keeps it visible too unless its screen area is
        strictly smaller than the current context's, in which case the
        viewport is recorded minimized and without a rectangle.

        Args:
            fractional_rect: Placement in the current context
            viewport_id: Id to record (generated when omitted)
            **flags: ``is_default``, ``is_maximized``, ``is_required``

        Returns:
            The viewport id

        Raises:
            PreconditionViolationError: No current context
        """
        current = self.context_registry.current()
        if current is None:
            raise PreconditionViolationError(
                "Cannot add a viewport snapshot without a current context",
                code=ErrorCode.NO_CURRENT_CONTEXT,
            )
        frac = geometry.coerce_fractional_rect(fractional_rect)
        if viewport_id is None:
            viewport_id = self.id_generator.generate()
        flags.pop("is_minimized", None)

        # Stage every snapshot before writing any of them
        current_area = current.area
        timestamp = datetime.now().timestamp()
        staged = []
        for context in self.context_registry.contexts():
            minimized = context.key != current.key and context.area < current_area
            snapshot = ViewportSnapshot(
                id=viewport_id,
                fractional_rect=None if minimized else frac,
                is_minimized=minimized,
                context_id=context.id,
                timestamp=timestamp,
                **flags,
            )
            staged.append((context.id, snapshot))
            if minimized:
                logger.debug(f"Viewport {viewport_id} minimized in smaller context {context.key}")

        for context_id, snapshot in staged:
            self.collection(context_id).add(snapshot)
        return viewport_id

    def import_snapshot(self, context_id: str, snapshot: ViewportSnapshot) -> ViewportSnapshot:
        """Store a copy of ``snapshot`` under ``context_id`` (used by document restore)."""
        stored = snapshot.model_copy(deep=True, update={"context_id": context_id})
        self.collection(context_id).add(stored)
        return stored

    def merge(self, context_id: str, live_snapshots: Iterable[ViewportSnapshot]) -> List[ViewportSnapshot]:
        """Compute what ``save_context`` would store, without storing it.

        Live viewports come first, in live order, replacing their stored
        snapshots. Stored snapshots that are minimized but not live follow in
        their stored order. Every other stored snapshot is dropped because
        its viewport no longer exists in this context.
        """
        merged = [
            snapshot.model_copy(update={"context_id": context_id})
            for snapshot in live_snapshots
        ]
        live_ids = {snapshot.id for snapshot in merged}
        merged.extend(
            stored
            for stored in self.get_snapshots_for_context(context_id)
            if stored.id not in live_ids and stored.is_minimized
        )
        return merged

    def save_context(self, context_id: str, live_snapshots: Iterable[ViewportSnapshot]) -> None:
        """Persist the live arrangement of an outgoing context (see ``merge``)."""
        merged = self.merge(context_id, live_snapshots)
        self.collection(context_id).replace_all(merged)
        logger.debug(f"Saved {len(merged)} snapshot(s) for context {context_id}")

    def update_viewport(self, viewport_id: str, context_id: Optional[str] = None, **fields: Any) -> bool:
        """Update a viewport's snapshot in one context, or in every context.

        Returns:
            True if at least one snapshot was updated
        """
        if context_id is not None:
            collection = self._collections.get(context_id)
            return collection is not None and collection.update(viewport_id, **fields)
        updated = False
        for collection in self._collections.values():
            updated = collection.update(viewport_id, **fields) or updated
        return updated

    def minimize_viewport(self, viewport_id: str, context_id: Optional[str] = None) -> bool:
        return self.update_viewport(viewport_id, context_id, is_minimized=True, is_maximized=False)

    def maximize_viewport(self, viewport_id: str, context_id: Optional[str] = None) -> bool:
        return self.update_viewport(viewport_id, context_id, is_maximized=True, is_minimized=False)

    def restore_viewport(self, viewport_id: str, context_id: Optional[str] = None) -> bool:
        return self.update_viewport(viewport_id, context_id, is_minimized=False, is_maximized=False)

    def remove_viewport(self, viewport_id: str) -> bool:
        """Remove a viewport's snapshot from every context."""
        removed = False
        for collection in self._collections.values():
            removed = collection.remove(viewport_id) or removed
        return removed

    def drop_context(self, context_id: str) -> bool:
        return self._collections.pop(context_id, None) is not None

"""Workspace orchestrator.

A ``Workspace`` ties the registries together. Setting a surface classifies
it, saves the outgoing context's live viewports as snapshots, and restores
the incoming context's arrangement (or synthesizes a single full-surface
viewport for a context seen for the first time).

State machine::

    UNINITIALIZED --set_surface()--> ACTIVE --set_surface()--> ACTIVE
"""

import logging
import math
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from ..config import LayoutSettings
from ..errors import ErrorCode, InvalidArgumentError, PreconditionViolationError, UnsupportedOperationError
from ..logging_config import log_performance, log_timing
from ..models.context import WorkspaceContext
from ..models.document import WorkspaceContextDocument, WorkspaceDocument
from ..models.events import LayoutEventType
from ..models.geometry import FractionalRect, ScreenRect, SplitDirection
from ..models.viewport import ViewportSnapshot
from . import geometry
from .classifier import classify
from .context_registry import ContextRegistry
from .events import EventEmitter, EventHandler, NotificationSink
from .ids import IdGenerator, UniqueIdGenerator, UuidIdGenerator
from .snapshot_store import SnapshotStore
from .viewport import MutableViewport, ViewportView
from .viewport_registry import ViewportRef, ViewportRegistry

logger = logging.getLogger(__name__)


class WorkspaceState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


class Workspace:
    """Viewport layout of one resizable surface, remembered per context."""

    def __init__(
        self,
        id_generator: IdGenerator,
        emitter: Optional[NotificationSink] = None,
        settings: Optional[LayoutSettings] = None,
        workspace_id: Optional[str] = None,
        name: Optional[str] = None,
    ):
        self.settings = settings if settings is not None else LayoutSettings()
        self.emitter = emitter if emitter is not None else EventEmitter()
        self.id = workspace_id or UuidIdGenerator("workspace").generate()
        self.name = name or self.id
        # Ids stay unique across the live registry and every context's snapshots
        self._id_generator = UniqueIdGenerator(id_generator, self._viewport_id_in_use)

        self.context_registry = ContextRegistry(
            self.emitter,
            minimum_viewport_width=self.settings.minimum_viewport_width,
            minimum_viewport_height=self.settings.minimum_viewport_height,
        )
        self.snapshot_store = SnapshotStore(self.context_registry, self._id_generator)
        self.viewport_registry = ViewportRegistry(self._id_generator)
        self._state = WorkspaceState.UNINITIALIZED

    def _viewport_id_in_use(self, viewport_id: str) -> bool:
        return self.viewport_registry.has(viewport_id) or self.snapshot_store.contains_viewport(viewport_id)

    @property
    def state(self) -> WorkspaceState:
        return self._state

    @property
    def surface(self) -> Optional[ScreenRect]:
        return self.viewport_registry.surface

    def _require_active(self) -> WorkspaceContext:
        context = self.context_registry.current()
        if self._state is not WorkspaceState.ACTIVE or context is None:
            raise PreconditionViolationError(
                f"Workspace {self.id} has no surface; call set_surface() first"
            )
        return context

    # Surface transitions

    def set_surface(self, rect: Any) -> WorkspaceContext:
        """Apply a surface rectangle and switch context if its key changed.

        Args:
            rect: ``ScreenRect``, mapping or (x, y, width, height)

        Returns:
            The now current context
        """
        screen = geometry.coerce_screen_rect(rect)
        previous = self.context_registry.current()
        target_key = classify(screen).key

        if previous is not None and previous.key == target_key:
            self.viewport_registry.on_surface_change(screen)
            return previous

        with log_timing(f"Switch to context {target_key}", logger):
            # Stage: outgoing snapshots and incoming viewports
            outgoing = self.viewport_registry.snapshot_all(previous.id) if previous is not None else None
            existing = self.context_registry.peek(screen)
            stored = self.snapshot_store.get_snapshots_for_context(existing.id) if existing is not None else []
            restored = [snapshot for snapshot in stored if snapshot.is_visible]
            if restored:
                incoming = [MutableViewport.from_snapshot(snapshot, screen) for snapshot in restored]
            else:
                incoming = [
                    MutableViewport(self._id_generator.generate(), FractionalRect(), screen, is_default=True)
                ]

            # Swap in
            if previous is not None:
                self.snapshot_store.save_context(previous.id, outgoing)
            context = self.context_registry.resolve(screen)
            self.viewport_registry.replace_all(incoming, screen)
            self._state = WorkspaceState.ACTIVE

        if restored:
            logger.info(f"Restored {len(restored)} viewport(s) in context {context.key}")
            for snapshot in restored:
                self.emitter.emit(LayoutEventType.SNAPSHOT_RESTORED, {"snapshot": snapshot})
        else:
            logger.info(f"Created default viewport {incoming[0].id} in context {context.key}")
        return context

    # Viewport operations

    def create_viewport(self, fractional_rect: Any = None, **flags: bool) -> ViewportView:
        """Create a viewport in the current context and record it in every context.

        Raises:
            PreconditionViolationError: No surface set
            UnsupportedOperationError: Viewports exist and no rect was given
        """
        self._require_active()
        view = self.viewport_registry.create(fractional_rect, **flags)
        self.snapshot_store.add_viewport(view.fractional_rect, viewport_id=view.id, **flags)
        return view

    def split_viewport(
        self,
        viewport: ViewportRef,
        direction: Union[SplitDirection, str],
        ratio: Optional[float] = None,
    ) -> ViewportView:
        """Split a live viewport; returns the new viewport.

        The new viewport is recorded in every context. Contexts at least as
        large as the current one whose snapshot of the source viewport still
        has the pre-split placement get the source narrowed the same way.
        """
        context = self._require_active()
        ratio = self.settings.default_split_ratio if ratio is None else ratio
        minimum_size = None
        if self.settings.enforce_minimum_viewport_size:
            minimum_size = (context.minimum_viewport_width, context.minimum_viewport_height)

        source_id = viewport if isinstance(viewport, str) else viewport.id
        source = self.viewport_registry.find(source_id)
        before = source.fractional_rect if source is not None else None

        new_view = self.viewport_registry.split(viewport, direction, ratio, minimum_size)
        kept = self.viewport_registry.find(source_id).fractional_rect

        self.snapshot_store.add_viewport(new_view.fractional_rect, viewport_id=new_view.id)
        for other in self.context_registry.contexts():
            if other.key == context.key or other.area < context.area:
                continue
            snapshot = self.snapshot_store.collection(other.id).find_by_id(source_id)
            if snapshot is not None and not snapshot.is_minimized and snapshot.fractional_rect == before:
                self.snapshot_store.update_viewport(source_id, other.id, fractional_rect=kept)
        return new_view

    def remove_viewport(self, viewport: ViewportRef) -> bool:
        """Remove a viewport live and from every context's snapshots."""
        self._require_active()
        removed = self.viewport_registry.remove(viewport)
        if removed or isinstance(viewport, str):
            viewport_id = viewport if isinstance(viewport, str) else viewport.id
            removed = self.snapshot_store.remove_viewport(viewport_id) or removed
        return removed

    def has_viewport(self, viewport_id: str) -> bool:
        self._require_active()
        return self.viewport_registry.has(viewport_id)

    def find_viewport(self, viewport_id: str) -> Optional[ViewportView]:
        self._require_active()
        return self.viewport_registry.find(viewport_id)

    def get_viewports(self) -> List[ViewportView]:
        self._require_active()
        return self.viewport_registry.list()

    def minimize_viewport(self, viewport: ViewportRef) -> bool:
        self._require_active()
        return self.viewport_registry.minimize(viewport)

    def maximize_viewport(self, viewport: ViewportRef) -> bool:
        self._require_active()
        return self.viewport_registry.maximize(viewport)

    def restore_viewport(self, viewport: ViewportRef) -> bool:
        """Restore a live viewport, or bring back one stored minimized in this context.

        Raises:
            UnsupportedOperationError: The stored viewport has no placement in
                this context (it was minimized for lack of room)
        """
        context = self._require_active()
        if self.viewport_registry.restore(viewport):
            return True
        if not isinstance(viewport, str):
            return False

        snapshot = self.snapshot_store.collection(context.id).find_by_id(viewport)
        if snapshot is None:
            return False
        if snapshot.fractional_rect is None:
            raise UnsupportedOperationError(
                f"Viewport {viewport} has no placement in context {context.key}",
                suggestion="Create it again with an explicit fractional rectangle",
            )
        self.viewport_registry.create(
            snapshot.fractional_rect,
            viewport_id=snapshot.id,
            is_default=snapshot.is_default,
            is_required=snapshot.is_required,
        )
        self.snapshot_store.restore_viewport(viewport, context.id)
        return True

    def swap_viewports(self, first: ViewportRef, second: ViewportRef) -> bool:
        self._require_active()
        return self.viewport_registry.swap(first, second)

    # Contexts and snapshots

    def current_context(self) -> Optional[WorkspaceContext]:
        return self.context_registry.current()

    def contexts(self) -> List[WorkspaceContext]:
        return self.context_registry.contexts()

    def get_snapshots_for_context(self, context_id: Optional[str] = None) -> List[ViewportSnapshot]:
        """Stored snapshots of a context (the current one by default).

        For the current context these are the snapshots as last saved; the
        live arrangement is written when the context is left.
        """
        if context_id is None:
            context_id = self._require_active().id
        return self.snapshot_store.get_snapshots_for_context(context_id)

    def on(self, event_type: LayoutEventType, handler: EventHandler) -> None:
        self.emitter.on(event_type, handler)

    def off(self, event_type: LayoutEventType, handler: EventHandler) -> None:
        self.emitter.off(event_type, handler)

    # Documents

    def to_document(self, name: Optional[str] = None) -> WorkspaceDocument:
        """Serializable record of every context, including the live arrangement."""
        current = self.context_registry.current()
        entries = []
        for context in self.context_registry.contexts():
            if current is not None and context.key == current.key:
                snapshots = self.snapshot_store.merge(
                    context.id, self.viewport_registry.snapshot_all(context.id)
                )
            else:
                snapshots = self.snapshot_store.get_snapshots_for_context(context.id)
            layout = context.layout
            entries.append(
                WorkspaceContextDocument(
                    id=context.id,
                    name=context.name,
                    max_screen_rect=layout.screen_rect,
                    orientation=layout.orientation,
                    aspect_ratio=layout.aspect_ratio if math.isfinite(layout.aspect_ratio) else None,
                    breakpoint=layout.breakpoint,
                    size_category=layout.size_category,
                    device_type=layout.device_type,
                    minimum_viewport_width=context.minimum_viewport_width,
                    minimum_viewport_height=context.minimum_viewport_height,
                    viewport_snapshots=[s.model_copy(deep=True) for s in snapshots],
                )
            )
        return WorkspaceDocument(id=self.id, name=name or self.name, workspace_contexts=entries)

    @classmethod
    @log_performance
    def from_document(
        cls,
        document: Union[WorkspaceDocument, dict, str, bytes],
        id_generator: IdGenerator,
        emitter: Optional[NotificationSink] = None,
        settings: Optional[LayoutSettings] = None,
        surface: Any = None,
    ) -> "Workspace":
        """Rebuild a workspace from a persisted document.

        Every context and its snapshots are registered before any surface is
        applied. Descriptor fields are recomputed from ``maxScreenRect``;
        stored values that disagree are logged and ignored.

        Raises:
            InvalidArgumentError: INVALID_DOCUMENT if the document fails
                validation or two contexts classify to the same key
        """
        document = _coerce_document(document)
        workspace = cls(id_generator, emitter, settings, workspace_id=document.id, name=document.name)

        staged = []
        seen_keys = {}
        for entry in document.workspace_contexts:
            layout = classify(entry.max_screen_rect)
            if layout.key in seen_keys:
                raise InvalidArgumentError(
                    f"Contexts {seen_keys[layout.key]} and {entry.id} share the context key {layout.key}",
                    code=ErrorCode.INVALID_DOCUMENT,
                    context={"key": layout.key, "ids": [seen_keys[layout.key], entry.id]},
                )
            seen_keys[layout.key] = entry.id
            for field in ("orientation", "breakpoint", "size_category", "device_type"):
                stored = getattr(entry, field)
                if stored is not None and stored != getattr(layout, field):
                    logger.warning(
                        f"Context {entry.id}: stored {field} {stored.value!r} differs from "
                        f"classified {getattr(layout, field).value!r}, using classified value"
                    )
            context = WorkspaceContext(
                id=entry.id,
                name=entry.name,
                layout=layout,
                minimum_viewport_width=entry.minimum_viewport_width,
                minimum_viewport_height=entry.minimum_viewport_height,
            )
            staged.append((context, entry.viewport_snapshots))

        for context, snapshots in staged:
            workspace.context_registry.register(context)
            for snapshot in snapshots:
                workspace.snapshot_store.import_snapshot(context.id, snapshot)
        logger.info(f"Restored workspace {workspace.id} with {len(staged)} context(s)")

        if surface is not None:
            workspace.set_surface(surface)
        return workspace


def _coerce_document(document: Union[WorkspaceDocument, dict, str, bytes]) -> WorkspaceDocument:
    if isinstance(document, WorkspaceDocument):
        return document
    try:
        if isinstance(document, (str, bytes)):
            return WorkspaceDocument.from_json(document)
        return WorkspaceDocument.model_validate(document)
    except ValidationError as e:
        raise InvalidArgumentError(
            f"Invalid workspace document: {e.error_count()} validation error(s)",
            code=ErrorCode.INVALID_DOCUMENT,
            context={"errors": [err["msg"] for err in e.errors()]},
        ) from e

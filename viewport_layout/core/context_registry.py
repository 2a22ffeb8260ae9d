"""Context registry.

Caches ``WorkspaceContext`` instances by context key, tracks the current
context and notifies listeners about lifecycle changes through an injected
notification sink.
"""

import logging
from typing import Dict, List, Optional

from ..constants import DEFAULT_MINIMUM_VIEWPORT_HEIGHT, DEFAULT_MINIMUM_VIEWPORT_WIDTH
from ..models.context import WorkspaceContext
from ..models.events import LayoutEventType
from ..models.geometry import ScreenRect
from .classifier import classify
from .events import EventEmitter, EventHandler, NotificationSink

logger = logging.getLogger(__name__)


class ContextRegistry:
    """Registry of workspace contexts keyed by context key.

    Contexts are created lazily on first observation of a screen size and
    persist until removed explicitly.
    """

    def __init__(
        self,
        emitter: Optional[NotificationSink] = None,
        minimum_viewport_width: float = DEFAULT_MINIMUM_VIEWPORT_WIDTH,
        minimum_viewport_height: float = DEFAULT_MINIMUM_VIEWPORT_HEIGHT,
    ):
        self.emitter = emitter if emitter is not None else EventEmitter()
        self.minimum_viewport_width = minimum_viewport_width
        self.minimum_viewport_height = minimum_viewport_height
        self._contexts: Dict[str, WorkspaceContext] = {}
        self._current_key: Optional[str] = None

    def _build(self, screen: ScreenRect) -> WorkspaceContext:
        return WorkspaceContext(
            layout=classify(screen),
            minimum_viewport_width=self.minimum_viewport_width,
            minimum_viewport_height=self.minimum_viewport_height,
        )

    def resolve(self, screen: ScreenRect) -> WorkspaceContext:
        """Return the context for ``screen``, creating it on first sight, and make it current."""
        candidate = self._build(screen)
        context = self._contexts.get(candidate.key)
        if context is None:
            context = candidate
            self._contexts[context.key] = context
            logger.info(f"Created context {context.key} ({context.layout.device_type.value})")
            self.emitter.emit(LayoutEventType.CONTEXT_CREATED, {"context": context})
        self._current_key = context.key
        return context

    def peek(self, screen: ScreenRect) -> Optional[WorkspaceContext]:
        """Look up the context for ``screen`` without creating it or changing the current one."""
        return self._contexts.get(classify(screen).key)

    def has(self, screen: ScreenRect) -> bool:
        return self.peek(screen) is not None

    def get(self, key: str) -> Optional[WorkspaceContext]:
        return self._contexts.get(key)

    def find_by_id(self, context_id: str) -> Optional[WorkspaceContext]:
        context = self._contexts.get(context_id)
        if context is not None and context.id == context_id:
            return context
        return next((c for c in self._contexts.values() if c.id == context_id), None)

    def contexts(self) -> List[WorkspaceContext]:
        """Registered contexts in creation order."""
        return list(self._contexts.values())

    def __len__(self) -> int:
        return len(self._contexts)

    def current(self) -> Optional[WorkspaceContext]:
        if self._current_key is None:
            return None
        return self._contexts.get(self._current_key)

    @property
    def current_key(self) -> Optional[str]:
        return self._current_key

    def remove(self, screen: ScreenRect) -> bool:
        """Remove the context for ``screen``; False when it was not registered."""
        key = classify(screen).key
        context = self._contexts.pop(key, None)
        if context is None:
            return False
        if self._current_key == key:
            self._current_key = None
        logger.info(f"Removed context {key}")
        self.emitter.emit(LayoutEventType.CONTEXT_REMOVED, {"context": context})
        return True

    def register(self, context: WorkspaceContext) -> WorkspaceContext:
        """Install an externally built context under its key.

        Emits ``contextCreated`` for a new key and ``contextUpdated`` when an
        existing context is replaced.
        """
        replaced = context.key in self._contexts
        self._contexts[context.key] = context
        if replaced:
            logger.info(f"Replaced context {context.key}")
            self.emitter.emit(LayoutEventType.CONTEXT_UPDATED, {"context": context})
        else:
            logger.info(f"Registered context {context.key}")
            self.emitter.emit(LayoutEventType.CONTEXT_CREATED, {"context": context})
        return context

    # Whole-context snapshots (deep copies of the descriptor itself)

    def create_snapshot(self, context: WorkspaceContext) -> WorkspaceContext:
        """Return a structurally independent deep copy of ``context``."""
        snapshot = context.model_copy(deep=True)
        self.emitter.emit(LayoutEventType.SNAPSHOT_CREATED, {"snapshot": snapshot})
        return snapshot

    def restore_from_snapshot(self, snapshot: WorkspaceContext) -> WorkspaceContext:
        """Install a deep copy of ``snapshot`` under its recomputed key and return it."""
        restored = snapshot.model_copy(deep=True)
        key = classify(restored.screen_rect).key
        self._contexts[key] = restored
        logger.debug(f"Restored context {key} from snapshot")
        self.emitter.emit(LayoutEventType.SNAPSHOT_RESTORED, {"snapshot": restored})
        return restored

    # Listener passthrough

    def on(self, event_type: LayoutEventType, handler: EventHandler) -> None:
        self.emitter.on(event_type, handler)

    def off(self, event_type: LayoutEventType, handler: EventHandler) -> None:
        self.emitter.off(event_type, handler)

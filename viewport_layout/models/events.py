"""Event types emitted by the context registry and the workspace."""

from enum import Enum


class LayoutEventType(str, Enum):
    """Lifecycle notifications.

    Payloads are dicts: ``{"context": WorkspaceContext}`` for context events
    and ``{"snapshot": ...}`` for snapshot events.
    """
    CONTEXT_CREATED = "contextCreated"
    CONTEXT_UPDATED = "contextUpdated"
    CONTEXT_REMOVED = "contextRemoved"
    SNAPSHOT_CREATED = "snapshotCreated"
    SNAPSHOT_RESTORED = "snapshotRestored"

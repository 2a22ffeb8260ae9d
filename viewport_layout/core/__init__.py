# Layout engine: geometry, classification, registries and the workspace orchestrator

from .classifier import classify, generate_key
from .context_registry import ContextRegistry
from .events import EventEmitter, NotificationSink
from .factory import WorkspaceFactory
from .ids import IdGenerator, SequentialIdGenerator, UuidIdGenerator
from .snapshot_store import SnapshotCollection, SnapshotStore
from .viewport import MutableViewport, ViewportView
from .viewport_registry import ViewportRegistry
from .workspace import Workspace, WorkspaceState

__all__ = [
    "classify",
    "generate_key",
    "ContextRegistry",
    "EventEmitter",
    "NotificationSink",
    "WorkspaceFactory",
    "IdGenerator",
    "SequentialIdGenerator",
    "UuidIdGenerator",
    "SnapshotCollection",
    "SnapshotStore",
    "MutableViewport",
    "ViewportView",
    "ViewportRegistry",
    "Workspace",
    "WorkspaceState",
]

"""Pytest configuration and shared fixtures for viewport-layout tests."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

# Add the repository root to the path BEFORE test collection
package_root = Path(__file__).parent.parent
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from viewport_layout.core.events import EventEmitter  # noqa: E402
from viewport_layout.core.ids import SequentialIdGenerator  # noqa: E402
from viewport_layout.models import LayoutEventType, ScreenRect  # noqa: E402


class RecordingEmitter(EventEmitter):
    """EventEmitter that also records every emitted event."""

    def __init__(self) -> None:
        super().__init__()
        self.events: List[Tuple[LayoutEventType, Dict[str, Any]]] = []

    def emit(self, event_type, payload):
        self.events.append((LayoutEventType(event_type), payload))
        super().emit(event_type, payload)

    def of_type(self, event_type: LayoutEventType) -> List[Dict[str, Any]]:
        return [payload for recorded, payload in self.events if recorded == event_type]


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    """Deterministic ids: test-id-1, test-id-2, ..."""
    return SequentialIdGenerator("test-id")


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def desktop_surface() -> ScreenRect:
    """1920x1080 landscape surface (landscape-lg-1920x1080)."""
    return ScreenRect(x=0, y=0, width=1920, height=1080)


@pytest.fixture
def tablet_surface() -> ScreenRect:
    """800x1200 portrait surface (smaller area than the desktop)."""
    return ScreenRect(x=0, y=0, width=800, height=1200)


@pytest.fixture
def large_surface() -> ScreenRect:
    return ScreenRect(width=100, height=100)


@pytest.fixture
def small_surface() -> ScreenRect:
    return ScreenRect(width=10, height=10)

"""Workspace construction helpers."""

import logging
from typing import Any, Optional

from ..config import LayoutSettings
from ..models.document import WorkspaceDocument
from .events import EventEmitter, NotificationSink
from .ids import IdGenerator, UuidIdGenerator
from .workspace import Workspace

logger = logging.getLogger(__name__)


class WorkspaceFactory:
    """Builds workspaces sharing one id generator, event sink and settings."""

    def __init__(
        self,
        id_generator: Optional[IdGenerator] = None,
        emitter: Optional[NotificationSink] = None,
        settings: Optional[LayoutSettings] = None,
    ):
        self.settings = settings if settings is not None else LayoutSettings()
        self.id_generator = id_generator if id_generator is not None else UuidIdGenerator(self.settings.id_prefix)
        self.emitter = emitter if emitter is not None else EventEmitter()

    def create(self, surface: Any = None, name: Optional[str] = None) -> Workspace:
        """New workspace, activated on ``surface`` when given."""
        workspace = Workspace(self.id_generator, self.emitter, self.settings, name=name)
        if surface is not None:
            workspace.set_surface(surface)
        return workspace

    def create_with_viewport(self, surface: Any, name: Optional[str] = None) -> Workspace:
        """New active workspace holding its default full-surface viewport."""
        return self.create(surface, name=name)

    def from_document(self, document: WorkspaceDocument, surface: Any = None) -> Workspace:
        return Workspace.from_document(
            document,
            self.id_generator,
            emitter=self.emitter,
            settings=self.settings,
            surface=surface,
        )

"""Persisted workspace document.

The document is consumed and produced at the workspace boundary. JSON keys
are camelCase (``workspaceContexts``, ``maxScreenRect``...); Python code uses
the snake_case field names. Reading and writing the document to storage is
left to the caller.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..constants import DEFAULT_MINIMUM_VIEWPORT_HEIGHT, DEFAULT_MINIMUM_VIEWPORT_WIDTH
from .context import Breakpoint, DeviceType, Orientation, SizeCategory
from .geometry import ScreenRect
from .viewport import ViewportSnapshot


class WorkspaceContextDocument(BaseModel):
    """One registered context and its viewport snapshots."""

    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    max_screen_rect: ScreenRect
    orientation: Optional[Orientation] = None
    # None when the ratio was not finite (zero-height surface)
    aspect_ratio: Optional[float] = None
    breakpoint: Optional[Breakpoint] = None
    size_category: Optional[SizeCategory] = None
    device_type: Optional[DeviceType] = None
    minimum_viewport_width: float = Field(default=DEFAULT_MINIMUM_VIEWPORT_WIDTH, ge=0)
    minimum_viewport_height: float = Field(default=DEFAULT_MINIMUM_VIEWPORT_HEIGHT, ge=0)
    viewport_snapshots: list[ViewportSnapshot] = Field(default_factory=list)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class WorkspaceDocument(BaseModel):
    """Serializable record of a workspace and all of its contexts."""

    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    workspace_contexts: list[WorkspaceContextDocument] = Field(default_factory=list)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize with camelCase keys."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, data: str | bytes) -> "WorkspaceDocument":
        """Parse a JSON document (camelCase or snake_case keys)."""
        return cls.model_validate_json(data)

    def find_context(self, context_id: str) -> Optional[WorkspaceContextDocument]:
        """Return the context entry with ``context_id`` if present."""
        return next((c for c in self.workspace_contexts if c.id == context_id), None)

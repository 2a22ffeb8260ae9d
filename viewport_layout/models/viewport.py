"""Viewport snapshot model.

A ``ViewportSnapshot`` is the durable, serializable record of one viewport's
state within one context. It is decoupled from any live viewport object.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .geometry import FractionalRect


class ViewportSnapshot(BaseModel):
    """State of one viewport inside one workspace context.

    ``fractional_rect`` is ``None`` when the viewport was minimized because
    the context has less room than the context it was created in; geometry
    is meaningless there until the viewport is placed again.
    """

    id: str = Field(..., min_length=1, description="Viewport identifier")
    fractional_rect: Optional[FractionalRect] = Field(
        default=None, description="Proportional placement (absent when minimized)"
    )
    is_default: bool = Field(default=False, description="Synthesized default viewport")
    is_minimized: bool = Field(default=False, description="Hidden in this context")
    is_maximized: bool = Field(default=False, description="Fills the surface in this context")
    is_required: bool = Field(default=False, description="Must stay present in this context")
    context_id: Optional[str] = Field(default=None, description="Owning context id")
    timestamp: float = Field(
        default_factory=lambda: datetime.now().timestamp(),
        description="Unix timestamp of the last write",
    )

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "validate_assignment": True,
    }

    @property
    def is_visible(self) -> bool:
        """Snapshot materializes as a live viewport when its context is entered."""
        return not self.is_minimized and self.fractional_rect is not None

"""Geometry value models.

``ScreenRect`` is expressed in absolute device units, ``FractionalRect`` in
fractions of an enclosing ``ScreenRect``. Both are frozen so they can be
shared between live viewports and snapshots without aliasing surprises.
"""

from enum import Enum

from pydantic import BaseModel, Field


class SplitDirection(str, Enum):
    """Direction in which a viewport is split.

    The direction names the side on which the *new* viewport appears.
    """
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ScreenRect(BaseModel):
    """Rectangle in absolute device units."""

    x: float = Field(0.0, description="Horizontal position")
    y: float = Field(0.0, description="Vertical position")
    width: float = Field(..., ge=0, description="Width in device units")
    height: float = Field(..., ge=0, description="Height in device units")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @property
    def area(self) -> float:
        return self.width * self.height

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


class FractionalRect(BaseModel):
    """Rectangle expressed as fractions of an enclosing ``ScreenRect``.

    Values are nominally within [0, 1] but are neither clamped nor range
    checked; only non-finite numbers are rejected.
    """

    x: float = Field(0.0, description="Left edge as a fraction of surface width")
    y: float = Field(0.0, description="Top edge as a fraction of surface height")
    width: float = Field(1.0, description="Width as a fraction of surface width")
    height: float = Field(1.0, description="Height as a fraction of surface height")

    model_config = {"frozen": True, "allow_inf_nan": False}

    @property
    def area(self) -> float:
        return self.width * self.height

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

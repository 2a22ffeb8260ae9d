"""
Error handling for the viewport layout engine.

Every error raised by the engine is a ``LayoutError`` carrying a structured
code, a human-readable message, an optional recovery suggestion and a context
dict for diagnostics. Errors are raised synchronously and never retried: all
operations are in-memory computations with nothing transient to retry.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for the viewport layout engine.

    Code ranges:
    - 1000-1099: Lookup errors (unknown viewport or context)
    - 1100-1199: Argument errors (bad rectangles, directions, ratios)
    - 1200-1299: Unsupported operations
    - 1300-1399: Sequencing errors (workspace used before a surface is set)
    - 1400-1499: Configuration errors
    """

    # Lookup errors (1000-1099)
    VIEWPORT_NOT_FOUND = 1000
    CONTEXT_NOT_FOUND = 1001

    # Argument errors (1100-1199)
    INVALID_ARGUMENT = 1100
    INVALID_DIRECTION = 1101
    INVALID_RATIO = 1102
    INVALID_RECT = 1103
    VIEWPORT_TOO_SMALL = 1104
    INVALID_DOCUMENT = 1105

    # Unsupported operations (1200-1299)
    AUTO_PLACEMENT_UNSUPPORTED = 1200

    # Sequencing errors (1300-1399)
    SURFACE_NOT_SET = 1300
    NO_CURRENT_CONTEXT = 1301

    # Configuration errors (1400-1499)
    CONFIG_INVALID = 1400


class LayoutError(Exception):
    """Base exception for layout engine errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize layout error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to a dictionary for display or JSON output.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "error": self.code.name,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class NotFoundError(LayoutError, KeyError):
    """Operation referenced a viewport or context id that does not exist."""

    def __init__(self, kind: str, identifier: str, code: ErrorCode = ErrorCode.VIEWPORT_NOT_FOUND):
        """
        Initialize lookup error.

        Args:
            kind: Kind of entity that was looked up ("viewport", "context")
            identifier: The id that was not found
            code: Specific error code
        """
        super().__init__(
            code=code,
            message=f"{kind.capitalize()} not found: {identifier}",
            suggestion=f"The {kind} may have been removed or belong to another workspace",
            context={"kind": kind, "id": identifier}
        )


class InvalidArgumentError(LayoutError, ValueError):
    """Unsupported split direction, bad ratio, or malformed rectangle."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code=code, message=message, context=context)


class UnsupportedOperationError(LayoutError):
    """Operation deliberately not supported (e.g. automatic placement)."""

    def __init__(self, message: str, suggestion: Optional[str] = None):
        super().__init__(
            code=ErrorCode.AUTO_PLACEMENT_UNSUPPORTED,
            message=message,
            suggestion=suggestion,
        )


class PreconditionViolationError(LayoutError):
    """Caller-side sequencing bug, such as using a workspace before set_surface()."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.SURFACE_NOT_SET):
        super().__init__(
            code=code,
            message=message,
            suggestion="Call set_surface() with the workspace screen rectangle first",
        )

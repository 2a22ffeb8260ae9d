"""Identifier generation for viewports and workspaces."""

from typing import Callable, Protocol
from uuid import uuid4

from ..errors import InvalidArgumentError


class IdGenerator(Protocol):
    """Capability producing unique string identifiers."""

    def generate(self) -> str: ...


class UuidIdGenerator:
    """Random ids of the form ``{prefix}-{8 hex chars}``."""

    def __init__(self, prefix: str = "viewport"):
        self.prefix = prefix

    def generate(self) -> str:
        return f"{self.prefix}-{uuid4().hex[:8]}"


class SequentialIdGenerator:
    """Predictable ids of the form ``{prefix}-{counter}``.

    Used by tests and by the diagnostic CLI where reproducible output matters.
    """

    def __init__(self, prefix: str = "test-id"):
        self.prefix = prefix
        self._counter = 0

    def generate(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter}"

    def reset(self) -> None:
        """Restart numbering from 1."""
        self._counter = 0


class UniqueIdGenerator:
    """Wraps a generator and skips ids that ``in_use`` reports as taken.

    A restored workspace already holds ids that a fresh sequential generator
    will produce again; those are passed over instead of reused.
    """

    def __init__(self, generator: IdGenerator, in_use: Callable[[str], bool], max_attempts: int = 10000):
        self.generator = generator
        self._in_use = in_use
        self.max_attempts = max_attempts

    def generate(self) -> str:
        for _ in range(self.max_attempts):
            candidate = self.generator.generate()
            if not self._in_use(candidate):
                return candidate
        raise InvalidArgumentError(
            f"Id generator produced no unused id in {self.max_attempts} attempts",
            context={"last": candidate},
        )

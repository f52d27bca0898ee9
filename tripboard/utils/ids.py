"""Identifier generation for days, activities, accommodations and trash items."""

import uuid
from collections import defaultdict
from typing import Protocol


class IdGenerator(Protocol):
    """Source of unique string identifiers."""

    def new_id(self, prefix: str) -> str:
        """Return a new identifier such as ``day-<suffix>``."""
        ...


class UuidIdGenerator:
    """Collision-resistant ids: ``<prefix>-<uuid4 hex>``."""

    def new_id(self, prefix: str) -> str:
        return f"{prefix}-{uuid.uuid4().hex}"


class SequentialIdGenerator:
    """Monotonic counter per prefix (deterministic, for tests and fixtures)."""

    def __init__(self) -> None:
        self._counters: defaultdict[str, int] = defaultdict(int)

    def new_id(self, prefix: str) -> str:
        self._counters[prefix] += 1
        return f"{prefix}-{self._counters[prefix]}"

"""Monotone status tracker threaded through a merge."""

from __future__ import annotations

from typing import TypeVar

from abstract_validation_core.results import Status, SyncResult, from_status

__all__ = ["StatusTracker"]

T = TypeVar("T")


class StatusTracker:
    """Tri-state flag that only moves forward along ``VALID < DIRTY < ABORTED``.

    The status is read-only from outside; the two mark methods are the only
    transitions, and both go through ``Status.advance`` so the status can
    never regress.

    Example:
        tracker = StatusTracker()
        tracker.mark_dirty()
        tracker.mark_aborted()
        tracker.mark_dirty()
        assert tracker.value is Status.ABORTED
    """

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value = Status.VALID

    @property
    def value(self) -> Status:
        """Current status."""
        return self._value

    @property
    def is_aborted(self) -> bool:
        return self._value is Status.ABORTED

    def mark_dirty(self) -> None:
        """Move ``VALID`` to ``DIRTY``; no-op when already dirty or aborted."""
        self._value = self._value.advance(Status.DIRTY)

    def mark_aborted(self) -> None:
        """Move to ``ABORTED`` from any status. Idempotent."""
        self._value = self._value.advance(Status.ABORTED)

    def result(self, value: T) -> SyncResult[T]:
        """Wrap ``value`` in the result matching the current status."""
        return from_status(self._value, value)

    def __repr__(self) -> str:
        return f"StatusTracker({self._value.value!r})"

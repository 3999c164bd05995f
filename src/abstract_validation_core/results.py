"""Result algebra for tri-state validation outcomes.

A resolved result is one of ``Ok`` (status valid), ``Partial`` (status
dirty, the value is a best-effort reconstruction) or ``Failed`` (status
aborted, no value). ``Pending`` wraps a computation that will produce a
resolved result once awaited.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Generator
from dataclasses import dataclass
from enum import Enum, auto
from functools import total_ordering
from typing import Any, ClassVar, Generic, TypeVar, Union

from abstract_validation_core.errors import AsyncResultError

__all__ = [
    "ABSENT",
    "Absent",
    "FAILED",
    "Failed",
    "Ok",
    "Partial",
    "Pending",
    "Result",
    "Status",
    "SyncResult",
    "ensure_sync",
    "from_status",
    "is_deferred",
    "is_failed",
    "is_ok",
    "is_partial",
    "is_succeeded",
    "ok",
    "partial",
    "pending",
    "resolve",
]

T = TypeVar("T")


@total_ordering
class Status(Enum):
    """Outcome classification, ordered ``VALID < DIRTY < ABORTED``."""

    VALID = "valid"
    DIRTY = "dirty"
    ABORTED = "aborted"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self.rank < other.rank

    def advance(self, other: Status) -> Status:
        """Return the later of the two statuses; never moves backwards."""
        return other if self < other else self


_STATUS_RANK = {Status.VALID: 0, Status.DIRTY: 1, Status.ABORTED: 2}


class Absent(Enum):
    """Sentinel for "no value produced", distinct from ``None``."""

    ABSENT = auto()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = Absent.ABSENT


@dataclass(frozen=True)
class Ok(Generic[T]):
    """A successful result with no recorded issues."""

    value: T
    status: ClassVar[Status] = Status.VALID


@dataclass(frozen=True)
class Partial(Generic[T]):
    """A recoverable result: usable value, but issues were recorded."""

    value: T
    status: ClassVar[Status] = Status.DIRTY


@dataclass(frozen=True)
class Failed:
    """An unrecoverable result. Carries no value; use the ``FAILED`` singleton."""

    status: ClassVar[Status] = Status.ABORTED

    def __repr__(self) -> str:
        return "FAILED"


FAILED = Failed()


class Pending(Generic[T]):
    """A deferred computation that resolves to an ``Ok``, ``Partial`` or ``Failed``.

    The wrapped awaitable runs once, on the first await. Its outcome is kept,
    so every later await of the same ``Pending`` gets the same result.
    """

    __slots__ = ("_awaitable", "_future", "_resolved")

    def __init__(self, awaitable: Awaitable[SyncResult[T]]) -> None:
        self._awaitable = awaitable
        self._future: asyncio.Future[Any] | None = None
        self._resolved: SyncResult[T] | None = None

    @property
    def done(self) -> bool:
        return self._resolved is not None

    async def resolve(self) -> SyncResult[T]:
        if self._resolved is not None:
            return self._resolved
        if self._future is None:
            self._future = asyncio.ensure_future(self._awaitable)
        resolved = await self._future
        if isinstance(resolved, Pending):
            resolved = await resolved.resolve()
        self._resolved = resolved
        return resolved

    def close(self) -> None:
        """Discard a computation that will never be awaited.

        Closes the wrapped coroutine if it has not started yet.
        """
        if self._future is None and inspect.iscoroutine(self._awaitable):
            self._awaitable.close()

    def __await__(self) -> Generator[Any, None, SyncResult[T]]:
        return self.resolve().__await__()

    def __repr__(self) -> str:
        return f"Pending({self._awaitable!r})"


SyncResult = Union[Ok[T], Partial[T], Failed]
Result = Union[Ok[T], Partial[T], Failed, Pending[T]]


def ok(value: T) -> Ok[T]:
    return Ok(value)


def partial(value: T) -> Partial[T]:
    return Partial(value)


def pending(awaitable: Awaitable[SyncResult[T]]) -> Pending[T]:
    return Pending(awaitable)


def from_status(status: Status, value: T) -> SyncResult[T]:
    """Build the resolved result matching ``status``.

    ``ABORTED`` always yields ``FAILED`` and drops ``value``.
    """
    if status is Status.VALID:
        return Ok(value)
    if status is Status.DIRTY:
        return Partial(value)
    return FAILED


def is_ok(result: Result[Any]) -> bool:
    """True only for ``Ok``."""
    return isinstance(result, Ok)


def is_partial(result: Result[Any]) -> bool:
    return isinstance(result, Partial)


def is_failed(result: Result[Any]) -> bool:
    return isinstance(result, Failed)


def is_succeeded(result: Result[Any]) -> bool:
    """True for ``Ok`` and ``Partial``, i.e. the result has a usable value."""
    return isinstance(result, (Ok, Partial))


def is_deferred(result: Result[Any]) -> bool:
    """True when ``result`` is a ``Pending`` computation, not a resolved value."""
    return isinstance(result, Pending)


def ensure_sync(result: Result[T], consumer: str = "synchronous consumer") -> SyncResult[T]:
    """Return ``result`` unchanged, or raise if it is still pending.

    A rejected ``Pending`` is closed so its coroutine is not left un-awaited.

    Raises:
        AsyncResultError: If ``result`` is a ``Pending``.
    """
    if isinstance(result, Pending):
        result.close()
        raise AsyncResultError(consumer)
    return result


async def resolve(result: Result[T]) -> SyncResult[T]:
    """Await ``result`` if it is pending, otherwise return it as-is."""
    if isinstance(result, Pending):
        return await result.resolve()
    return result

"""Merging child results into array- and object-shaped results.

Every merge folds its children's statuses through the ``StatusTracker`` it
is given. Children are processed strictly in order; a failed child ends an
object merge immediately, and ends an array merge unless stripping applies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from abstract_validation_core.errors import UnhashableKeyError
from abstract_validation_core.results import (
    ABSENT,
    FAILED,
    Failed,
    Partial,
    Result,
    SyncResult,
    ensure_sync,
    resolve,
)
from abstract_validation_core.status import StatusTracker

__all__ = [
    "ObjectPair",
    "PROTECTED_KEY",
    "merge_array",
    "merge_array_async",
    "merge_object_async",
    "merge_object_sync",
]

logger = logging.getLogger(__name__)

PROTECTED_KEY = "__proto__"


@dataclass(frozen=True)
class ObjectPair:
    """Key and value results for one field of an object merge.

    Attributes:
        key: Result of validating the key.
        value: Result of validating the value.
        always_set: Write the key even when the value is ``ABSENT``.
    """

    key: Result[Any]
    value: Result[Any]
    always_set: bool = False


def merge_array(
    tracker: StatusTracker,
    results: Sequence[Result[Any]],
    strip_invalid_from: int | None = None,
    min_length: int | None = None,
) -> SyncResult[list[Any]]:
    """Merge element results into a list result.

    Args:
        tracker: Status tracker for this merge.
        results: Element results in index order. Must all be resolved.
        strip_invalid_from: When set, failed elements at this index or later
            are dropped (marking the merge dirty) instead of failing it.
        min_length: When elements were dropped, the merge fails if fewer
            than this many elements remain.

    Returns:
        ``FAILED``, or the assembled list wrapped for the tracker's status.

    Raises:
        AsyncResultError: If any element result is pending.
    """
    values: list[Any] = []
    stripped = False
    for index, element in enumerate(results):
        element = ensure_sync(element, "merge_array")
        if isinstance(element, Failed):
            if strip_invalid_from is None or index < strip_invalid_from:
                logger.debug("Array merge aborted by element %d", index)
                return FAILED
            logger.debug("Stripped invalid element %d", index)
            tracker.mark_dirty()
            stripped = True
            continue
        if isinstance(element, Partial):
            tracker.mark_dirty()
        values.append(element.value)

    if stripped and min_length is not None and len(values) < min_length:
        logger.debug(
            "Array merge aborted: %d element(s) left after stripping, %d required",
            len(values),
            min_length,
        )
        return FAILED

    return tracker.result(values)


async def merge_array_async(
    tracker: StatusTracker,
    results: Iterable[Result[Any]],
    strip_invalid_from: int | None = None,
    min_length: int | None = None,
) -> SyncResult[list[Any]]:
    """Resolve element results one at a time in index order, then ``merge_array``."""
    resolved = [await resolve(element) for element in results]
    return merge_array(tracker, resolved, strip_invalid_from, min_length)


def merge_object_sync(
    tracker: StatusTracker,
    pairs: Iterable[ObjectPair],
) -> SyncResult[dict[Any, Any]]:
    """Merge key/value results into a dict result.

    The first pair with a failed key or value fails the merge. A key equal
    to ``"__proto__"`` is never written. A key whose value is ``ABSENT`` is
    written only when the pair sets ``always_set``. Key values must be hashable.

    Raises:
        AsyncResultError: If any key or value result is pending.
        UnhashableKeyError: If a key value that would be written is unhashable.
    """
    output: dict[Any, Any] = {}
    for pair in pairs:
        key = ensure_sync(pair.key, "merge_object_sync")
        value = ensure_sync(pair.value, "merge_object_sync")
        if isinstance(key, Failed) or isinstance(value, Failed):
            logger.debug("Object merge aborted by a failed key or value")
            return FAILED
        if isinstance(key, Partial) or isinstance(value, Partial):
            tracker.mark_dirty()

        if key.value == PROTECTED_KEY:
            logger.debug("Dropped protected key %r", PROTECTED_KEY)
            continue
        if value.value is not ABSENT or pair.always_set:
            try:
                output[key.value] = value.value
            except TypeError as e:
                raise UnhashableKeyError(key.value) from e

    return tracker.result(output)


async def merge_object_async(
    tracker: StatusTracker,
    pairs: Iterable[ObjectPair],
) -> SyncResult[dict[Any, Any]]:
    """Resolve each pair's key then value, pair by pair in order, then merge.

    Resolution is sequential so that issues recorded by nested validators
    land in the diagnostics list in field-declaration order.
    """
    resolved: list[ObjectPair] = []
    for pair in pairs:
        key = await resolve(pair.key)
        value = await resolve(pair.value)
        resolved.append(ObjectPair(key=key, value=value, always_set=pair.always_set))
    return merge_object_sync(tracker, resolved)

"""Shared fixtures, Hypothesis strategies and sample validators for tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest
from hypothesis import strategies as st

from abstract_validation_core import (
    ABSENT,
    FAILED,
    ObjectPair,
    Ok,
    Partial,
    Result,
    StatusTracker,
    SyncResult,
    ValidationContext,
    ValidationEvent,
    ValidationEventType,
    merge_array,
    merge_array_async,
    merge_object_async,
    merge_object_sync,
    ok,
    pending,
    record_issue,
    reset_error_map,
)
from abstract_validation_core.error_maps import ErrorMap

# -----------------------------------------------------------------------------
# Hypothesis Strategies
# -----------------------------------------------------------------------------

ok_results = st.builds(Ok, st.integers())
partial_results = st.builds(Partial, st.integers())
successful_results = st.one_of(ok_results, partial_results)
sync_results = st.one_of(ok_results, partial_results, st.just(FAILED))

# Letters and digits only, so never the protected "__proto__" key
object_keys = st.text(
    min_size=1,
    max_size=20,
    alphabet=st.characters(whitelist_categories=("L", "N")),
)

# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def later(result: SyncResult[Any], delay: float = 0.0, on_resolve: Callable[[], None] | None = None):
    """Pending result that sleeps for ``delay`` seconds, then runs ``on_resolve``."""

    async def compute() -> SyncResult[Any]:
        await asyncio.sleep(delay)
        if on_resolve is not None:
            on_resolve()
        return result

    return pending(compute())


class RecordingObserver:
    """Observer that records all events for testing."""

    def __init__(self) -> None:
        self.events: list[ValidationEvent] = []

    def on_event(self, event: ValidationEvent) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> list[ValidationEventType]:
        return [e.event_type for e in self.events]


def tagging_map(tag: str) -> ErrorMap:
    """Error map that appends ``>tag`` to the message it receives."""

    def error_map(issue, ctx):
        return f"{ctx.default_error}>{tag}"

    return error_map


# -----------------------------------------------------------------------------
# Sample Validators
# -----------------------------------------------------------------------------


def string_validator(ctx: ValidationContext) -> Result[str]:
    """Accepts str values; records an invalid_type issue otherwise."""
    if isinstance(ctx.data, str):
        return ok(ctx.data)
    record_issue(ctx, {"code": "invalid_type", "expected": "string", "received": ctx.parsed_type})
    return FAILED


def trimmed_string_validator(ctx: ValidationContext) -> Result[str]:
    """Accepts str values, trimming them with a recorded issue when needed."""
    if not isinstance(ctx.data, str):
        return string_validator(ctx)
    if ctx.data != ctx.data.strip():
        record_issue(ctx, {"code": "custom", "message": "Surrounding whitespace"})
        return Partial(ctx.data.strip())
    return ok(ctx.data)


def async_string_validator(delay: float = 0.0):
    """String validator that answers through a pending result."""

    def validate(ctx: ValidationContext) -> Result[str]:
        async def compute() -> SyncResult[str]:
            await asyncio.sleep(delay)
            return string_validator(ctx)  # type: ignore[return-value]

        return pending(compute())

    return validate


def object_validator(
    shape: dict[str, Callable[[ValidationContext], Result[Any]]],
    error_map: ErrorMap | None = None,
):
    """Validator for dicts whose declared keys are checked by ``shape``."""

    def validate(ctx: ValidationContext) -> Result[dict[str, Any]]:
        ctx = ctx.with_schema_error_map(error_map)
        if not isinstance(ctx.data, dict):
            record_issue(ctx, {"code": "invalid_type", "expected": "dict", "received": ctx.parsed_type})
            return FAILED
        pairs = [
            ObjectPair(ok(key), field(ctx.child(key, ctx.data.get(key, ABSENT))))
            for key, field in shape.items()
        ]
        if ctx.async_mode:
            return pending(merge_object_async(StatusTracker(), pairs))
        return merge_object_sync(StatusTracker(), pairs)

    return validate


def list_validator(item: Callable[[ValidationContext], Result[Any]]):
    """Validator for lists whose elements are all checked by ``item``."""

    def validate(ctx: ValidationContext) -> Result[list[Any]]:
        if not isinstance(ctx.data, list):
            record_issue(ctx, {"code": "invalid_type", "expected": "list", "received": ctx.parsed_type})
            return FAILED
        results = [item(ctx.child(index, value)) for index, value in enumerate(ctx.data)]
        if ctx.async_mode:
            return pending(merge_array_async(StatusTracker(), results))
        return merge_array(StatusTracker(), results)

    return validate


# -----------------------------------------------------------------------------
# Pytest Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_process_error_map():
    """Keep the process-wide override map from leaking between tests."""
    reset_error_map()
    yield
    reset_error_map()


@pytest.fixture
def tracker() -> StatusTracker:
    """Create a fresh StatusTracker."""
    return StatusTracker()


@pytest.fixture
def root_ctx() -> ValidationContext:
    """Create a root context validating an empty dict."""
    return ValidationContext.root({})


@pytest.fixture
def recording_observer() -> RecordingObserver:
    return RecordingObserver()

"""Top-level validation runs.

``ValidationRunner`` wraps a validator callable ``(ValidationContext) ->
Result``, builds a fresh root context for each run and turns the root result
plus the recorded issues into a ``ParseOutcome``.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from abstract_validation_core.context import ParseParams, ValidationContext
from abstract_validation_core.errors import IssuesError, MissingIssuesError
from abstract_validation_core.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
)
from abstract_validation_core.issues import Issue
from abstract_validation_core.results import (
    Ok,
    Result,
    Status,
    SyncResult,
    ensure_sync,
    resolve,
)

__all__ = ["ParseOutcome", "ValidationRunner", "Validator"]

T = TypeVar("T")

Validator = Callable[[ValidationContext], Result[Any]]


@dataclass
class ParseOutcome(Generic[T]):
    """Outcome of one validation run.

    Attributes:
        success: True only when the root result is ``Ok``.
        status: Status of the root result.
        data: The validated value when ``success`` is True, else None.
        issues: Issues recorded during the run, in recording order.

    Example:
        outcome = runner.safe_parse(payload)
        if outcome.success:
            save(outcome.data)
        else:
            for issue in outcome.issues:
                print(issue.path, issue.message)
    """

    success: bool
    status: Status
    data: T | None = None
    issues: list[Issue] = field(default_factory=list)

    @property
    def error(self) -> IssuesError | None:
        """An ``IssuesError`` for a failed run, None for a successful one."""
        if self.success:
            return None
        return IssuesError(self.issues)


class ValidationRunner(ObservableMixin, Generic[T]):
    """Runs a validator against input data.

    Observers added to the runner receive ``VALIDATION_STARTED`` and
    ``VALIDATION_COMPLETED`` events, and every ``ISSUE_RECORDED`` event of
    the runs it starts.

    Example:
        def positive(ctx: ValidationContext) -> Result[int]:
            if ctx.data > 0:
                return ok(ctx.data)
            record_issue(ctx, {"code": "too_small", "type": "number", "minimum": 1})
            return FAILED

        runner = ValidationRunner(positive, name="positive")
        runner.parse(3)  # 3
        runner.safe_parse(-1).success  # False
    """

    def __init__(
        self,
        validator: Validator,
        *,
        name: str = "validator",
        params: ParseParams | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            validator: Callable producing the root result from the root context.
            name: Name used in events.
            params: Default parse params for every run.
        """
        self._validator = validator
        self._name = name
        self._params = params or ParseParams()

    @property
    def name(self) -> str:
        return self._name

    @property
    def params(self) -> ParseParams:
        return self._params

    def _start(self, data: Any, params: ParseParams | None, async_mode: bool) -> ValidationContext:
        run_params = (params or self._params).model_copy(update={"async_mode": async_mode})
        ctx = ValidationContext.root(data, run_params)
        for observer in self.observers:
            ctx.common.add_observer(observer)

        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.VALIDATION_STARTED,
                source=self,
                data={"data": data, "validator_name": self._name, "async_mode": async_mode},
            )
        )
        return ctx

    def _finish(
        self,
        ctx: ValidationContext,
        result: SyncResult[T],
        start_time: float,
    ) -> ParseOutcome[T]:
        issues = list(ctx.issues)
        success = isinstance(result, Ok)
        missing_issues = not success and not issues

        duration_ms = (time.perf_counter() - start_time) * 1000
        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.VALIDATION_COMPLETED,
                source=self,
                data={
                    "validator_name": self._name,
                    "status": result.status,
                    "success": success,
                    "issue_count": len(issues),
                    "duration_ms": duration_ms,
                    "missing_issues": missing_issues,
                },
            )
        )

        if isinstance(result, Ok):
            return ParseOutcome(
                success=True, status=result.status, data=result.value, issues=issues
            )
        if missing_issues:
            raise MissingIssuesError()
        return ParseOutcome(success=False, status=result.status, issues=issues)

    def safe_parse(self, data: Any, *, params: ParseParams | None = None) -> ParseOutcome[T]:
        """Validate ``data`` synchronously.

        Raises:
            AsyncResultError: If the validator returns a pending result.
            MissingIssuesError: If the run did not succeed but recorded no issue.
        """
        start_time = time.perf_counter()
        ctx = self._start(data, params, async_mode=False)
        result = ensure_sync(self._validator(ctx), f"{self._name}.safe_parse")
        return self._finish(ctx, result, start_time)

    async def safe_parse_async(
        self, data: Any, *, params: ParseParams | None = None
    ) -> ParseOutcome[T]:
        """Validate ``data``, awaiting the root result if it is pending."""
        start_time = time.perf_counter()
        ctx = self._start(data, params, async_mode=True)
        result = await resolve(self._validator(ctx))
        return self._finish(ctx, result, start_time)

    def parse(self, data: Any, *, params: ParseParams | None = None) -> T:
        """Validate ``data`` and return the value.

        Raises:
            IssuesError: If the run did not succeed.
        """
        outcome = self.safe_parse(data, params=params)
        if not outcome.success:
            raise IssuesError(outcome.issues)
        return outcome.data  # type: ignore[return-value]

    async def parse_async(self, data: Any, *, params: ParseParams | None = None) -> T:
        """Async counterpart of ``parse``."""
        outcome = await self.safe_parse_async(data, params=params)
        if not outcome.success:
            raise IssuesError(outcome.issues)
        return outcome.data  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"ValidationRunner(name={self._name!r})"

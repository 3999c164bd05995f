"""Exception types.

Validation outcomes travel as Result values. The exceptions here cover
programmer errors and the opt-in raising entry points of the runner.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from abstract_validation_core.issues import Issue, PathSegment

__all__ = [
    "AsyncResultError",
    "FlattenedIssues",
    "IssuesError",
    "MissingIssuesError",
    "UnhashableKeyError",
    "ValidationCoreError",
]


class ValidationCoreError(Exception):
    """Base class for errors raised by abstract_validation_core."""


class AsyncResultError(ValidationCoreError, TypeError):
    """A pending result reached a consumer that only accepts resolved results."""

    def __init__(self, consumer: str) -> None:
        super().__init__(
            f"{consumer} received a pending result; use the async variant instead"
        )
        self.consumer = consumer


class UnhashableKeyError(ValidationCoreError, TypeError):
    """An object merge produced a key that cannot be used as a dict key."""

    def __init__(self, key: object) -> None:
        super().__init__(f"Object keys must be hashable, got {type(key).__name__}: {key!r}")
        self.key = key


class MissingIssuesError(ValidationCoreError):
    """A run did not succeed but recorded no issue explaining why."""

    def __init__(self) -> None:
        super().__init__("Validation failed but no issues were recorded")


@dataclass
class FlattenedIssues:
    """Issue messages grouped by the first path segment.

    Attributes:
        form_errors: Messages of issues recorded at the root path.
        field_errors: Messages keyed by the first path segment.
    """

    form_errors: list[str] = field(default_factory=list)
    field_errors: dict[PathSegment, list[str]] = field(default_factory=dict)


class IssuesError(ValidationCoreError, ValueError):
    """Raised by the runner's parse methods when a run does not succeed.

    Attributes:
        issues: The issues recorded during the run, in recording order.
    """

    def __init__(self, issues: Sequence[Issue]) -> None:
        self.issues: list[Issue] = list(issues)
        super().__init__(self._format())

    def _format(self) -> str:
        count = len(self.issues)
        lines = [f"{count} validation issue{'s' if count != 1 else ''}"]
        for issue in self.issues:
            location = ".".join(str(segment) for segment in issue.path) or "<root>"
            lines.append(f"  {location}: {issue.message} [{issue.code}]")
        return "\n".join(lines)

    def flatten(self) -> FlattenedIssues:
        """Group issue messages into root-level and per-field lists."""
        flattened = FlattenedIssues()
        for issue in self.issues:
            if issue.path:
                flattened.field_errors.setdefault(issue.path[0], []).append(issue.message)
            else:
                flattened.form_errors.append(issue.message)
        return flattened

"""Validation context and per-run shared state.

A ``ValidationContext`` is an immutable node mirroring the position of the
value under validation. Children are built with ``child()``; there is no
parent pointer. The path is an accumulated tuple and all contexts of one run
share a single ``ParseCommon`` handle holding the diagnostics list.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel, ConfigDict

from abstract_validation_core.error_maps import ErrorMap
from abstract_validation_core.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
)
from abstract_validation_core.issues import Issue, PathSegment
from abstract_validation_core.parsed_type import ParsedType, get_parsed_type

__all__ = ["ParseCommon", "ParseParams", "ValidationContext"]

logger = logging.getLogger(__name__)


class ParseParams(BaseModel):
    """Options for a single top-level validation run.

    Attributes:
        path: Path prefix for every issue recorded in the run.
        error_map: Contextual error map, highest priority in message resolution.
        async_mode: Whether the run resolves pending results.
        strict: Strict-mode flag exposed to validators.
    """

    model_config = ConfigDict(frozen=True)

    path: tuple[PathSegment, ...] = ()
    error_map: ErrorMap | None = None
    async_mode: bool = False
    strict: bool = False


class ParseCommon(ObservableMixin):
    """State shared by every context of one validation run.

    The diagnostics list is append-only: ``issues`` returns a snapshot and
    ``append`` is the only write. Observers receive an ``ISSUE_RECORDED``
    event per appended issue.
    """

    def __init__(
        self,
        *,
        contextual_error_map: ErrorMap | None = None,
        async_mode: bool = False,
        strict: bool = False,
    ) -> None:
        self._issues: list[Issue] = []
        self.contextual_error_map = contextual_error_map
        self.async_mode = async_mode
        self.strict = strict

    @classmethod
    def from_params(cls, params: ParseParams) -> ParseCommon:
        return cls(
            contextual_error_map=params.error_map,
            async_mode=params.async_mode,
            strict=params.strict,
        )

    @property
    def issues(self) -> tuple[Issue, ...]:
        """Snapshot of the recorded issues, in recording order."""
        return tuple(self._issues)

    @property
    def issue_count(self) -> int:
        return len(self._issues)

    def append(self, issue: Issue) -> None:
        """Append ``issue`` to the diagnostics list and notify observers."""
        self._issues.append(issue)
        logger.debug("Recorded %s issue at %s: %s", issue.code, list(issue.path), issue.message)
        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.ISSUE_RECORDED,
                source=self,
                data={"issue": issue, "index": len(self._issues) - 1},
            )
        )

    def __repr__(self) -> str:
        return (
            f"ParseCommon(issues={len(self._issues)}, "
            f"async_mode={self.async_mode}, strict={self.strict})"
        )


@dataclass(frozen=True)
class ValidationContext:
    """Position of a value within one validation run.

    Attributes:
        common: Shared run state, the same instance for every context of a run.
        path: Segments from the root to this node.
        data: The value being validated at this node.
        parsed_type: Coarse type tag of ``data``; inferred when not given.
        schema_error_map: Error map of the validator currently using this context.
    """

    common: ParseCommon
    path: tuple[PathSegment, ...] = ()
    data: Any = None
    parsed_type: ParsedType | None = None
    schema_error_map: ErrorMap | None = None

    def __post_init__(self) -> None:
        if self.parsed_type is None:
            object.__setattr__(self, "parsed_type", get_parsed_type(self.data))

    @classmethod
    def root(cls, data: Any, params: ParseParams | None = None) -> ValidationContext:
        """Build the root context of a new run with a fresh diagnostics list."""
        params = params or ParseParams()
        return cls(common=ParseCommon.from_params(params), path=params.path, data=data)

    def child(self, segment: PathSegment | Sequence[PathSegment], data: Any) -> ValidationContext:
        """Context for a nested value, sharing this run's state.

        The schema error map is not inherited; the nested validator attaches
        its own with ``with_schema_error_map``.
        """
        suffix = tuple(segment) if isinstance(segment, (list, tuple)) else (segment,)
        return ValidationContext(common=self.common, path=self.path + suffix, data=data)

    def with_schema_error_map(self, error_map: ErrorMap | None) -> ValidationContext:
        return replace(self, schema_error_map=error_map)

    @property
    def issues(self) -> tuple[Issue, ...]:
        return self.common.issues

    @property
    def async_mode(self) -> bool:
        return self.common.async_mode

    @property
    def strict(self) -> bool:
        return self.common.strict

"""Diagnostic records.

``IssueData`` is what a validator reports; ``Issue`` is the finalized,
immutable record appended to a run's diagnostics list. Both accept extra
keyword fields for kind-specific metadata (``expected``, ``received``,
``minimum``, ``keys``, ...).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

__all__ = ["Issue", "IssueCode", "IssueData", "PathSegment"]

PathSegment = Union[str, int]


class IssueCode(str, Enum):
    """Machine-readable issue kinds."""

    INVALID_TYPE = "invalid_type"
    INVALID_LITERAL = "invalid_literal"
    CUSTOM = "custom"
    INVALID_UNION = "invalid_union"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    UNRECOGNIZED_KEYS = "unrecognized_keys"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    NOT_MULTIPLE_OF = "not_multiple_of"
    NOT_FINITE = "not_finite"
    INVALID_DATE = "invalid_date"
    INVALID_STRING = "invalid_string"

    def __str__(self) -> str:
        return self.value


class IssueData(BaseModel):
    """Raw issue data reported by a validator.

    Attributes:
        code: Kind of the issue.
        path: Path suffix appended to the reporting context's path.
        message: Explicit message. When set it is used verbatim and no
            error map is consulted.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    code: IssueCode
    path: tuple[PathSegment, ...] = ()
    message: str | None = None

    @property
    def params(self) -> dict[str, Any]:
        """Kind-specific metadata carried as extra fields."""
        return dict(self.model_extra or {})


class Issue(BaseModel):
    """A finalized diagnostic: code, full path, message and metadata."""

    model_config = ConfigDict(frozen=True, extra="allow")

    code: IssueCode
    path: tuple[PathSegment, ...]
    message: str

    @property
    def params(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

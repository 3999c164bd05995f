"""Error maps: policies that turn issue data into a human-readable message.

An error map is called as ``error_map(issue, ErrorMapContext(data,
default_error))`` and returns the message. Maps exist at four scopes, highest
priority first: contextual (per run), schema-local, process-wide override and
the built-in default. Resolution folds the installed maps lowest priority
first, feeding each map the message produced so far as ``default_error``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import reduce
from typing import Any

from abstract_validation_core.issues import IssueCode, IssueData
from abstract_validation_core.parsed_type import ParsedType

__all__ = [
    "ErrorMap",
    "ErrorMapChain",
    "ErrorMapContext",
    "default_error_map",
    "fold_error_maps",
    "get_error_map",
    "reset_error_map",
    "set_error_map",
]


@dataclass(frozen=True)
class ErrorMapContext:
    """Second argument of an error map.

    Attributes:
        data: The value being validated where the issue was reported.
        default_error: Message produced by the lower-priority maps so far.
    """

    data: Any
    default_error: str


ErrorMap = Callable[[IssueData, ErrorMapContext], str]
"""Signature of an error map.

A map returns the message string itself, not a record wrapping it: a
policy written as ``lambda issue, ctx: {"message": ...}`` becomes
``lambda issue, ctx: ...``.
"""


def _join_values(values: Sequence[Any], separator: str = " | ") -> str:
    return separator.join(repr(value) if isinstance(value, str) else str(value) for value in values)


def _size_message(issue: IssueData, lower_bound: bool) -> str | None:
    params = issue.params
    kind = params.get("type")
    exact = params.get("exact", False)
    inclusive = params.get("inclusive", True)
    bound = params.get("minimum" if lower_bound else "maximum")

    if kind in ("list", "array", "set", "tuple"):
        noun = "Set" if kind == "set" else "Array"
        qualifier = "exactly" if exact else ("at least" if lower_bound else "at most")
        if not exact and not inclusive:
            qualifier = "more than" if lower_bound else "less than"
        return f"{noun} must contain {qualifier} {bound} element(s)"
    if kind == "string":
        qualifier = "exactly" if exact else ("at least" if lower_bound else "at most")
        if not exact and not inclusive:
            qualifier = "over" if lower_bound else "under"
        return f"String must contain {qualifier} {bound} character(s)"
    if kind in ("number", "integer", "float"):
        if exact:
            return f"Number must be exactly {bound}"
        if lower_bound:
            qualifier = "greater than or equal to" if inclusive else "greater than"
        else:
            qualifier = "less than or equal to" if inclusive else "less than"
        return f"Number must be {qualifier} {bound}"
    if kind in ("date", "datetime"):
        if exact:
            return f"Date must be exactly {bound}"
        if lower_bound:
            qualifier = "greater than or equal to" if inclusive else "greater than"
        else:
            qualifier = "smaller than or equal to" if inclusive else "smaller than"
        return f"Date must be {qualifier} {bound}"
    return None


def default_error_map(issue: IssueData, ctx: ErrorMapContext) -> str:
    """Built-in English messages for the standard issue codes."""
    params = issue.params
    code = issue.code

    if code is IssueCode.INVALID_TYPE:
        received = params.get("received")
        if received == ParsedType.ABSENT:
            return "Required"
        return f"Expected {params.get('expected')}, received {received}"
    if code is IssueCode.INVALID_LITERAL:
        return f"Invalid literal value, expected {params.get('expected')!r}"
    if code is IssueCode.UNRECOGNIZED_KEYS:
        return f"Unrecognized key(s) in object: {_join_values(params.get('keys', ()), ', ')}"
    if code is IssueCode.INVALID_UNION:
        return "Invalid input"
    if code is IssueCode.INVALID_ENUM_VALUE:
        options = _join_values(params.get("options", ()))
        return f"Invalid enum value. Expected {options}, received {params.get('received')!r}"
    if code is IssueCode.INVALID_DATE:
        return "Invalid date"
    if code is IssueCode.INVALID_STRING:
        validation = params.get("validation")
        return f"Invalid {validation}" if validation else "Invalid"
    if code is IssueCode.TOO_SMALL:
        return _size_message(issue, lower_bound=True) or "Invalid input"
    if code is IssueCode.TOO_BIG:
        return _size_message(issue, lower_bound=False) or "Invalid input"
    if code is IssueCode.NOT_MULTIPLE_OF:
        return f"Number must be a multiple of {params.get('multiple_of')}"
    if code is IssueCode.NOT_FINITE:
        return "Number must be finite"
    if code is IssueCode.CUSTOM:
        return "Invalid input"
    return ctx.default_error or "Invalid input"


_override_map: ErrorMap | None = None


def set_error_map(error_map: ErrorMap) -> None:
    """Install a process-wide override error map."""
    global _override_map
    _override_map = error_map


def get_error_map() -> ErrorMap:
    """Return the process-wide override, or the built-in default when unset."""
    return _override_map if _override_map is not None else default_error_map


def reset_error_map() -> None:
    """Remove the process-wide override."""
    global _override_map
    _override_map = None


def fold_error_maps(
    issue: IssueData,
    data: Any,
    error_maps: Sequence[ErrorMap | None],
) -> str:
    """Resolve a message from ``error_maps``, given highest priority first.

    Unset entries are skipped. The remaining maps run lowest priority first,
    each receiving the previous map's message as ``default_error``; the first
    map to run receives an empty string.
    """
    lowest_first = [error_map for error_map in reversed(error_maps) if error_map is not None]
    return reduce(
        lambda message, error_map: error_map(issue, ErrorMapContext(data, message)),
        lowest_first,
        "",
    )


@dataclass(frozen=True)
class ErrorMapChain:
    """The four error-map scopes consulted for one issue.

    Attributes:
        contextual: Map supplied for the whole validation run.
        schema: Map attached to the validator that raised the issue.
        override: Process-wide override map.
        default: Process-wide default map.
    """

    contextual: ErrorMap | None = None
    schema: ErrorMap | None = None
    override: ErrorMap | None = None
    default: ErrorMap | None = None

    @classmethod
    def for_scopes(
        cls,
        contextual: ErrorMap | None = None,
        schema: ErrorMap | None = None,
    ) -> ErrorMapChain:
        """Build a chain with the current process-wide maps.

        The built-in default joins only when it is not already the override.
        """
        override = get_error_map()
        default = None if override is default_error_map else default_error_map
        return cls(contextual=contextual, schema=schema, override=override, default=default)

    def by_priority(self) -> list[ErrorMap | None]:
        """All four scopes, highest priority first."""
        return [self.contextual, self.schema, self.override, self.default]

    def resolve(self, issue: IssueData, data: Any) -> str:
        return fold_error_maps(issue, data, self.by_priority())

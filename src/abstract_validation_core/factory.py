"""Issue factory: builds issues and records them into a run's diagnostics."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from abstract_validation_core.context import ValidationContext
from abstract_validation_core.error_maps import ErrorMap, ErrorMapChain, fold_error_maps
from abstract_validation_core.issues import Issue, IssueData, PathSegment

__all__ = ["build_issue", "make_issue", "record_issue"]


def _as_issue_data(issue_data: IssueData | Mapping[str, Any]) -> IssueData:
    if isinstance(issue_data, IssueData):
        return issue_data
    return IssueData.model_validate(dict(issue_data))


def make_issue(
    data: Any,
    path: Sequence[PathSegment],
    error_maps: Sequence[ErrorMap | None],
    issue_data: IssueData | Mapping[str, Any],
) -> Issue:
    """Finalize ``issue_data`` into an ``Issue``.

    Args:
        data: Value being validated where the issue was reported.
        path: Path of the reporting context; the issue's own path is appended.
        error_maps: Error maps, highest priority first. ``None`` entries are skipped.
        issue_data: Raw issue data.

    Returns:
        The finalized issue. An explicit message is kept verbatim; otherwise
        the message comes from folding ``error_maps``.
    """
    issue_data = _as_issue_data(issue_data)
    full_path = tuple(path) + issue_data.path
    fields = {"code": issue_data.code, **issue_data.params}

    if issue_data.message is not None:
        return Issue(**fields, path=full_path, message=issue_data.message)

    full_issue = issue_data.model_copy(update={"path": full_path})
    message = fold_error_maps(full_issue, data, error_maps)
    return Issue(**fields, path=full_path, message=message)


def build_issue(ctx: ValidationContext, issue_data: IssueData | Mapping[str, Any]) -> Issue:
    """Build an issue at ``ctx``, resolving its message through the error-map chain."""
    chain = ErrorMapChain.for_scopes(
        contextual=ctx.common.contextual_error_map,
        schema=ctx.schema_error_map,
    )
    return make_issue(ctx.data, ctx.path, chain.by_priority(), issue_data)


def record_issue(ctx: ValidationContext, issue_data: IssueData | Mapping[str, Any]) -> None:
    """Build an issue at ``ctx`` and append it to the run's diagnostics list."""
    ctx.common.append(build_issue(ctx, issue_data))

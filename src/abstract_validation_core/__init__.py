"""Result aggregation and diagnostics for structural data validation."""

from abstract_validation_core.context import ParseCommon, ParseParams, ValidationContext
from abstract_validation_core.error_maps import (
    ErrorMap,
    ErrorMapChain,
    ErrorMapContext,
    default_error_map,
    get_error_map,
    reset_error_map,
    set_error_map,
)
from abstract_validation_core.errors import (
    AsyncResultError,
    FlattenedIssues,
    IssuesError,
    MissingIssuesError,
    UnhashableKeyError,
    ValidationCoreError,
)
from abstract_validation_core.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)
from abstract_validation_core.factory import build_issue, make_issue, record_issue
from abstract_validation_core.issues import Issue, IssueCode, IssueData, PathSegment
from abstract_validation_core.merge import (
    ObjectPair,
    merge_array,
    merge_array_async,
    merge_object_async,
    merge_object_sync,
)
from abstract_validation_core.parsed_type import ParsedType, get_parsed_type
from abstract_validation_core.results import (
    ABSENT,
    FAILED,
    Failed,
    Ok,
    Partial,
    Pending,
    Result,
    Status,
    SyncResult,
    ensure_sync,
    is_deferred,
    is_failed,
    is_ok,
    is_partial,
    is_succeeded,
    ok,
    partial,
    pending,
    resolve,
)
from abstract_validation_core.rich_observers import RichIssueObserver, render_issues
from abstract_validation_core.runner import ParseOutcome, ValidationRunner, Validator
from abstract_validation_core.status import StatusTracker

__all__ = [
    # Result algebra
    "ABSENT",
    "FAILED",
    "Failed",
    "Ok",
    "Partial",
    "Pending",
    "Result",
    "Status",
    "SyncResult",
    "ensure_sync",
    "is_deferred",
    "is_failed",
    "is_ok",
    "is_partial",
    "is_succeeded",
    "ok",
    "partial",
    "pending",
    "resolve",
    # Status tracking
    "StatusTracker",
    # Issues and error maps
    "ErrorMap",
    "ErrorMapChain",
    "ErrorMapContext",
    "Issue",
    "IssueCode",
    "IssueData",
    "PathSegment",
    "build_issue",
    "default_error_map",
    "get_error_map",
    "make_issue",
    "record_issue",
    "reset_error_map",
    "set_error_map",
    # Context
    "ParseCommon",
    "ParseParams",
    "ParsedType",
    "ValidationContext",
    "get_parsed_type",
    # Merging
    "ObjectPair",
    "merge_array",
    "merge_array_async",
    "merge_object_async",
    "merge_object_sync",
    # Runner
    "ParseOutcome",
    "ValidationRunner",
    "Validator",
    # Errors
    "AsyncResultError",
    "FlattenedIssues",
    "IssuesError",
    "MissingIssuesError",
    "UnhashableKeyError",
    "ValidationCoreError",
    # Observer pattern
    "ObservableMixin",
    "ValidationEvent",
    "ValidationEventType",
    "ValidationObserver",
    # Rich rendering
    "RichIssueObserver",
    "render_issues",
]

__version__ = "0.1.0"

"""Tests for ValidationContext, ParseCommon, ParseParams and parsed types."""

from __future__ import annotations

import math
from datetime import date, datetime

import pytest
from pydantic import ValidationError

from abstract_validation_core import (
    ABSENT,
    ParseCommon,
    ParsedType,
    ParseParams,
    ValidationContext,
    get_parsed_type,
    record_issue,
)

from .conftest import tagging_map


async def _coroutine() -> None:
    return None


class TestGetParsedType:
    """Tests for get_parsed_type()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (ABSENT, ParsedType.ABSENT),
            (None, ParsedType.NONE),
            ("text", ParsedType.STRING),
            (True, ParsedType.BOOLEAN),
            (3, ParsedType.INTEGER),
            (3.5, ParsedType.FLOAT),
            (math.nan, ParsedType.NAN),
            (b"raw", ParsedType.BYTES),
            ([1], ParsedType.LIST),
            ((1,), ParsedType.TUPLE),
            ({"a": 1}, ParsedType.DICT),
            ({1}, ParsedType.SET),
            (frozenset(), ParsedType.SET),
            (date(2024, 1, 1), ParsedType.DATE),
            (datetime(2024, 1, 1, 12), ParsedType.DATETIME),
            (len, ParsedType.CALLABLE),
            (object(), ParsedType.OBJECT),
        ],
    )
    def test_classification(self, value, expected: ParsedType) -> None:
        assert get_parsed_type(value) is expected

    def test_awaitable(self) -> None:
        coroutine = _coroutine()
        try:
            assert get_parsed_type(coroutine) is ParsedType.AWAITABLE
        finally:
            coroutine.close()


class TestParseParams:
    """Tests for ParseParams."""

    def test_defaults(self) -> None:
        params = ParseParams()

        assert params.path == ()
        assert params.error_map is None
        assert params.async_mode is False
        assert params.strict is False

    def test_path_coerced_to_tuple(self) -> None:
        assert ParseParams(path=["body", 0]).path == ("body", 0)

    def test_frozen(self) -> None:
        params = ParseParams()

        with pytest.raises(ValidationError):
            params.strict = True  # type: ignore[misc]

    def test_error_map_must_be_callable(self) -> None:
        with pytest.raises(ValidationError):
            ParseParams(error_map="not callable")  # type: ignore[arg-type]


class TestValidationContext:
    """Tests for ValidationContext construction and derivation."""

    def test_root_defaults(self) -> None:
        ctx = ValidationContext.root([1, 2])

        assert ctx.path == ()
        assert ctx.data == [1, 2]
        assert ctx.parsed_type is ParsedType.LIST
        assert ctx.schema_error_map is None
        assert ctx.async_mode is False
        assert ctx.strict is False

    def test_root_from_params(self) -> None:
        contextual = tagging_map("ctx")
        ctx = ValidationContext.root(
            None, ParseParams(path=("a",), error_map=contextual, async_mode=True, strict=True)
        )

        assert ctx.path == ("a",)
        assert ctx.common.contextual_error_map is contextual
        assert ctx.async_mode is True
        assert ctx.strict is True

    def test_child_extends_path_and_shares_state(self) -> None:
        root = ValidationContext.root({"items": ["x"]})

        child = root.child("items", ["x"]).child(0, "x")

        assert child.path == ("items", 0)
        assert child.data == "x"
        assert child.parsed_type is ParsedType.STRING
        assert child.common is root.common

    def test_child_with_sequence_segment(self) -> None:
        root = ValidationContext.root(None)

        assert root.child(["a", 1], None).path == ("a", 1)

    def test_child_does_not_inherit_schema_map(self) -> None:
        root = ValidationContext.root(None).with_schema_error_map(tagging_map("schema"))

        assert root.schema_error_map is not None
        assert root.child("a", None).schema_error_map is None

    def test_with_schema_error_map_returns_new_context(self) -> None:
        root = ValidationContext.root(None)
        schema_map = tagging_map("schema")

        derived = root.with_schema_error_map(schema_map)

        assert derived is not root
        assert derived.schema_error_map is schema_map
        assert root.schema_error_map is None
        assert derived.common is root.common

    def test_context_is_immutable(self) -> None:
        ctx = ValidationContext.root(None)

        with pytest.raises(AttributeError):
            ctx.path = ("x",)  # type: ignore[misc]

    def test_explicit_parsed_type_is_kept(self) -> None:
        ctx = ValidationContext(common=ParseCommon(), data="1", parsed_type=ParsedType.INTEGER)

        assert ctx.parsed_type is ParsedType.INTEGER


class TestParseCommon:
    """Tests for the shared, append-only diagnostics state."""

    def test_issues_snapshot_is_immutable(self) -> None:
        ctx = ValidationContext.root(None)
        record_issue(ctx, {"code": "custom"})

        snapshot = ctx.common.issues

        assert isinstance(snapshot, tuple)
        record_issue(ctx, {"code": "custom"})
        assert len(snapshot) == 1
        assert ctx.common.issue_count == 2

    def test_repr(self) -> None:
        assert repr(ParseCommon(strict=True)) == "ParseCommon(issues=0, async_mode=False, strict=True)"

"""Coarse type tags for values under validation."""

from __future__ import annotations

import inspect
import math
from datetime import date, datetime
from enum import Enum
from typing import Any

from abstract_validation_core.results import Absent

__all__ = ["ParsedType", "get_parsed_type"]


class ParsedType(str, Enum):
    """Coarse classification of a value, used in messages and by validators."""

    ABSENT = "absent"
    NONE = "none"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    NAN = "nan"
    BOOLEAN = "boolean"
    BYTES = "bytes"
    LIST = "list"
    TUPLE = "tuple"
    DICT = "dict"
    SET = "set"
    DATE = "date"
    DATETIME = "datetime"
    CALLABLE = "callable"
    AWAITABLE = "awaitable"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


def get_parsed_type(value: Any) -> ParsedType:
    """Classify ``value``.

    ``bool`` is checked before ``int`` and ``datetime`` before ``date``
    since each is a subclass of the latter.
    """
    if isinstance(value, Absent):
        return ParsedType.ABSENT
    if value is None:
        return ParsedType.NONE
    if isinstance(value, str):
        return ParsedType.STRING
    if isinstance(value, bool):
        return ParsedType.BOOLEAN
    if isinstance(value, int):
        return ParsedType.INTEGER
    if isinstance(value, float):
        return ParsedType.NAN if math.isnan(value) else ParsedType.FLOAT
    if isinstance(value, (bytes, bytearray)):
        return ParsedType.BYTES
    if isinstance(value, list):
        return ParsedType.LIST
    if isinstance(value, tuple):
        return ParsedType.TUPLE
    if isinstance(value, dict):
        return ParsedType.DICT
    if isinstance(value, (set, frozenset)):
        return ParsedType.SET
    if isinstance(value, datetime):
        return ParsedType.DATETIME
    if isinstance(value, date):
        return ParsedType.DATE
    if inspect.isawaitable(value):
        return ParsedType.AWAITABLE
    if callable(value):
        return ParsedType.CALLABLE
    return ParsedType.OBJECT

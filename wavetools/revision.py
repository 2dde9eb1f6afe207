"""wavetools - Dotted version numbers.

A VersionNumber is an immutable, non-empty sequence of non-negative integers
parsed from text like "1.12.3". Ordering is numeric per component, most
significant first, and a strict prefix sorts before the longer sequence:

    1.2.3 < 1.2.3.5 < 1.12.3

Accepted sources are classified once into a tagged form:
- TextForm: a dotted string
- NumericForm: an int, float or Decimal, rendered in positional notation
  (never exponent form) and parsed as text
- CopyForm: another VersionNumber
- SequenceForm: a list or tuple of integers

Parse modes (WAVETOOLS_VERSION_PARSE_MODE):
- lenient (default): a segment yields its leading digits, or 0 without any,
  so "1.x.3" parses as 1.0.3
- strict: every segment must be plain digits, otherwise MalformedSegmentError

Error codes:
- UNSUPPORTED_SOURCE: the source is not one of the accepted shapes
- EMPTY_VERSION: no segments remain after splitting
- MALFORMED_SEGMENT: strict mode met a non-numeric segment, or a segment has
  too many digits to convert
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any

import numpy as np
from pydantic_core import core_schema

from wavetools import config
from wavetools.utils.parsing import is_digits, lenient_int

logger = logging.getLogger(__name__)

# Longest rendering of a bad value kept in error messages
_MAX_DETAIL_CHARS = 40


def _describe(value: Any) -> str:
    try:
        text = repr(value)
    except ValueError:
        # int too large for decimal conversion
        return f"<{type(value).__name__} too large to render>"
    if len(text) > _MAX_DETAIL_CHARS:
        return text[: _MAX_DETAIL_CHARS - 3] + "..."
    return text


# --- Error Codes ---


class RevisionErrorCode(StrEnum):
    """Error codes for version construction."""

    UNSUPPORTED_SOURCE = "UNSUPPORTED_SOURCE"
    EMPTY_VERSION = "EMPTY_VERSION"
    MALFORMED_SEGMENT = "MALFORMED_SEGMENT"


class InvalidInput(ValueError):
    """Base exception for values that cannot become a VersionNumber."""

    def __init__(self, error_code: str, message: str):
        self.error_code = error_code
        self.message = message
        super().__init__(f"{error_code}: {message}")


class UnsupportedSourceError(InvalidInput):
    """Source is not a dotted string, number, sequence or VersionNumber."""

    def __init__(self, source: Any, reason: str | None = None):
        detail = reason or f"type {type(source).__name__}"
        super().__init__(
            RevisionErrorCode.UNSUPPORTED_SOURCE,
            f"cannot initialise version from {_describe(source)} ({detail})",
        )


class EmptyVersionError(InvalidInput):
    """Source text has no segments."""

    def __init__(self, text: str):
        super().__init__(RevisionErrorCode.EMPTY_VERSION, f"no version segments in {_describe(text)}")


class MalformedSegmentError(InvalidInput):
    """A segment is not plain digits (strict mode) or is too long to convert."""

    def __init__(self, text: str, segment: str):
        self.segment = segment
        super().__init__(
            RevisionErrorCode.MALFORMED_SEGMENT,
            f"segment {_describe(segment)} of {_describe(text)} is not a non-negative integer",
        )


class ParseMode(StrEnum):
    """How non-numeric dotted segments are handled."""

    LENIENT = config.PARSE_MODE_LENIENT
    STRICT = config.PARSE_MODE_STRICT


# --- Source Forms ---


@dataclass(frozen=True)
class TextForm:
    text: str


@dataclass(frozen=True)
class NumericForm:
    value: int | float | Decimal


@dataclass(frozen=True)
class CopyForm:
    components: tuple[int, ...]


@dataclass(frozen=True)
class SequenceForm:
    items: tuple[Any, ...]


SourceForm = TextForm | NumericForm | CopyForm | SequenceForm


def classify_source(source: Any) -> SourceForm:
    """Classify a construction source into its tagged form.

    Args:
        source: Value passed to VersionNumber().

    Returns:
        The matching SourceForm. Forms passed in are returned unchanged.

    Raises:
        UnsupportedSourceError: If the value has no accepted shape.
    """
    match source:
        case TextForm() | NumericForm() | CopyForm() | SequenceForm():
            return source
        case VersionNumber():
            return CopyForm(source.components)
        # bool is an int subclass; reject it before the numeric case
        case bool() | None:
            raise UnsupportedSourceError(source)
        case str():
            return TextForm(source)
        case int() | float() | Decimal():
            return NumericForm(source)
        case list() | tuple():
            return SequenceForm(tuple(source))
        case _:
            raise UnsupportedSourceError(source)


def _parse_text(text: str, mode: ParseMode) -> tuple[int, ...]:
    segments = text.split(".")
    # Trailing empty segments are dropped ("1.2." is 1.2)
    while segments and segments[-1] == "":
        segments.pop()
    if not segments:
        raise EmptyVersionError(text)

    components = []
    for segment in segments:
        if is_digits(segment):
            try:
                components.append(int(segment))
            except ValueError as e:
                raise MalformedSegmentError(text, segment) from e
        elif mode is ParseMode.STRICT:
            raise MalformedSegmentError(text, segment)
        else:
            try:
                value = lenient_int(segment, signed=False)
            except ValueError as e:
                raise MalformedSegmentError(text, segment) from e
            logger.debug("Coerced version segment %r of %r to %d", segment, text, value)
            components.append(value)
    return tuple(components)


def _check_numeric(value: int | float | Decimal) -> None:
    if isinstance(value, Decimal):
        finite = value.is_finite()
    elif isinstance(value, float):
        finite = math.isfinite(value)
    else:
        finite = True
    if not finite:
        raise UnsupportedSourceError(value, "not a finite number")
    if value < 0:
        raise UnsupportedSourceError(value, "negative number")


def _render_numeric(value: int | float | Decimal) -> str:
    # Positional only: 1e20 and Decimal("1E+2") must not reach the parser as exponents
    try:
        if isinstance(value, Decimal):
            return format(value, "f")
        if isinstance(value, float):
            return np.format_float_positional(value, trim="0")
        return str(value)
    except ValueError as e:
        raise UnsupportedSourceError(value, "too many digits") from e


def _check_sequence(items: tuple[Any, ...]) -> tuple[int, ...]:
    if not items:
        raise UnsupportedSourceError(items, "empty sequence")
    for item in items:
        if isinstance(item, bool) or not isinstance(item, int) or item < 0:
            raise UnsupportedSourceError(items, f"component {_describe(item)} is not a non-negative int")
    return tuple(int(item) for item in items)


def _components_from(form: SourceForm, mode: ParseMode) -> tuple[int, ...]:
    match form:
        case TextForm(text=text):
            return _parse_text(text, mode)
        case NumericForm(value=value):
            _check_numeric(value)
            return _parse_text(_render_numeric(value), mode)
        case CopyForm(components=components):
            return tuple(components)
        case SequenceForm(items=items):
            return _check_sequence(items)


# --- Ordering ---


class ThreeWayOrdering(ABC):
    """Mixin deriving all relational operators from compare().

    Subclasses implement compare(other) returning -1, 0 or 1. Operands of
    another type make every operator return NotImplemented.
    """

    __slots__ = ()

    @abstractmethod
    def compare(self, other) -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other."""

    def _compare_or_none(self, other) -> int | None:
        if not isinstance(other, ThreeWayOrdering):
            return None
        if not isinstance(other, type(self)) and not isinstance(self, type(other)):
            return None
        return self.compare(other)

    def __lt__(self, other):
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result == -1

    def __gt__(self, other):
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result == 1

    def __le__(self, other):
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result != 1

    def __ge__(self, other):
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result != -1

    def __eq__(self, other):
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result == 0

    def __ne__(self, other):
        result = self._compare_or_none(other)
        return NotImplemented if result is None else result != 0


def compare_components(left: Sequence[int], right: Sequence[int]) -> int:
    """Three-way compare two integer sequences.

    Components are compared pairwise from the most significant; when one
    sequence is a strict prefix of the other, the shorter one is smaller.

    Returns:
        -1 if left < right, 0 if equal, 1 if left > right.
    """
    for a, b in zip(left, right):
        if a != b:
            return -1 if a < b else 1
    return (len(left) > len(right)) - (len(left) < len(right))


class VersionNumber(ThreeWayOrdering):
    """Immutable dotted version number with numeric ordering."""

    __slots__ = ("_components",)

    def __init__(self, source: Any, mode: ParseMode | str | None = None):
        """Build a version from a string, number, sequence or VersionNumber.

        Args:
            source: Value to parse (see module docstring for accepted forms).
            mode: Parse mode; defaults to WAVETOOLS_VERSION_PARSE_MODE.

        Raises:
            InvalidInput: If the source cannot be parsed.
        """
        parse_mode = ParseMode(mode or config.default_parse_mode())
        components = _components_from(classify_source(source), parse_mode)
        object.__setattr__(self, "_components", components)

    @property
    def components(self) -> tuple[int, ...]:
        return self._components

    def to_integer_sequence(self) -> tuple[int, ...]:
        return self._components

    def to_string(self) -> str:
        return ".".join(str(c) for c in self._components)

    def compare(self, other: VersionNumber) -> int:
        return compare_components(self._components, other.components)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __hash__(self):
        return hash(self._components)

    def __reduce__(self):
        return (type(self), (self._components,))

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"{type(self).__name__}({self.to_string()!r})"

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        """Validate from any accepted source; serialize as the dotted string."""
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_string, when_used="always"
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> VersionNumber:
        if isinstance(value, cls):
            return value
        return cls(value)


def compare(a: Any, b: Any, mode: ParseMode | str | None = None) -> int:
    """Three-way compare two versions or version sources.

    Args:
        a: VersionNumber or any accepted source.
        b: VersionNumber or any accepted source.
        mode: Parse mode for sources that are not already VersionNumbers.

    Returns:
        -1, 0 or 1.
    """
    left = a if isinstance(a, VersionNumber) else VersionNumber(a, mode)
    right = b if isinstance(b, VersionNumber) else VersionNumber(b, mode)
    return left.compare(right)


__all__ = [
    "CopyForm",
    "EmptyVersionError",
    "InvalidInput",
    "MalformedSegmentError",
    "NumericForm",
    "ParseMode",
    "RevisionErrorCode",
    "SequenceForm",
    "SourceForm",
    "TextForm",
    "ThreeWayOrdering",
    "UnsupportedSourceError",
    "VersionNumber",
    "classify_source",
    "compare",
    "compare_components",
]

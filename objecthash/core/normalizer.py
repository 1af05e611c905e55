"""
Normalization into the canonical value model.

Two entry points share one set of rules:

``normalize`` takes what the JSON decoder produced. Every number, whether it
was written as ``1`` or ``1.0``, becomes a ``Number`` holding a double, since
a generic decoder cannot keep the two apart. Objects arrive as ``ObjectPairs``
so that a repeated key is reported instead of silently overwritten.

``to_common_value`` classifies native Python values. The mapping is closed:
anything not listed below raises ``UnsupportedTypeError``.

=============================  =============
Native                         Variant
=============================  =============
None                           Null
bool                           Bool
int, float, Decimal            Number
str                            UnicodeString
bytes, bytearray, memoryview   RawBytes
list, tuple                    List
dict, Mapping, BaseModel,      Dict
dataclass instance
set, frozenset                 Set
=============================  =============
"""

import dataclasses
import json
import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Iterable, Optional, Tuple, Union

from pydantic import BaseModel

from objecthash.core.canonicalization import (
    MAX_SAFE_INTEGER,
    is_finite_number,
    narrow_int,
)
from objecthash.core.config import HasherConfig
from objecthash.core.errors import (
    DepthLimitError,
    NormalizationError,
    ParseError,
    UnsupportedTypeError,
)
from objecthash.core.models import (
    Bool,
    CanonicalValue,
    Dict,
    List,
    Null,
    Number,
    RawBytes,
    Set,
    UnicodeString,
)

logger = logging.getLogger(__name__)


class ObjectPairs(list):
    """The key/value pairs of one decoded JSON object, duplicates included."""

    pass


def _parse_number(literal: str) -> float:
    # Integer and fraction literals both go straight to a double
    number = float(literal)
    if not is_finite_number(number):
        shown = literal if len(literal) <= 32 else f"{literal[:29]}..."
        raise NormalizationError(f"Number too large for a double: {shown}")
    return number


def decode_common_json(text: Union[str, bytes, bytearray]) -> Any:
    """
    Decode JSON text, keeping every object as ``ObjectPairs``.

    Args:
        text: JSON text, or UTF-8 encoded JSON bytes.

    Returns:
        The decoded value. Objects are ``ObjectPairs``, arrays are lists and
        every number literal is a float, so ``1`` and ``1.0`` decode alike.

    Raises:
        ParseError: If the text is not valid JSON. The message is the
            decoder's, unchanged.
        NormalizationError: If a number literal overflows a double. The
            ``NaN``, ``Infinity`` and ``-Infinity`` literals are not affected.
        DepthLimitError: If the decoder runs out of stack.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(str(e), position=e.start) from e

    try:
        return json.loads(
            text,
            object_pairs_hook=ObjectPairs,
            parse_int=_parse_number,
            parse_float=_parse_number,
        )
    except json.JSONDecodeError as e:
        unexpected = e.doc[e.pos] if e.pos < len(e.doc) else None
        raise ParseError(str(e), position=e.pos, unexpected=unexpected) from e
    except RecursionError as e:
        raise DepthLimitError() from e


def _type_name(value: Any) -> str:
    value_type = type(value)
    module = value_type.__module__
    if module in ("builtins", "__main__"):
        return value_type.__qualname__
    return f"{module}.{value_type.__qualname__}"


class _Normalizer:
    """One normalization pass, either over decoded JSON or native values."""

    def __init__(self, config: HasherConfig, native: bool):
        self.config = config
        self.native = native

    def normalize(self, value: Any) -> CanonicalValue:
        try:
            return self.run(value)
        except RecursionError as e:
            raise DepthLimitError(self.config.max_depth) from e

    def run(self, value: Any, depth: int = 0) -> CanonicalValue:
        if depth > self.config.max_depth:
            raise DepthLimitError(self.config.max_depth)

        if isinstance(value, CanonicalValue) and self.native:
            return value
        if value is None:
            return Null()
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return Bool(value=value)
        if isinstance(value, int):
            return Number(value=self._narrow(value))
        if isinstance(value, float):
            return Number(value=self._check_float(value))
        if isinstance(value, str):
            return UnicodeString(value=self._check_text(value))
        if isinstance(value, ObjectPairs):
            return self._dict(value, depth)
        if isinstance(value, list):
            return List(items=self._children(value, depth))
        if isinstance(value, dict):
            return self._dict(value.items(), depth)

        if self.native:
            if isinstance(value, tuple):
                return List(items=self._children(value, depth))
            if isinstance(value, (set, frozenset)):
                return Set(members=self._children(value, depth))
            if isinstance(value, (bytes, bytearray, memoryview)):
                return RawBytes(value=bytes(value))
            if isinstance(value, Decimal):
                return Number(value=self._check_float(float(value)))
            if isinstance(value, Mapping):
                return self._dict(value.items(), depth)
            if isinstance(value, BaseModel):
                return self._dict(value.model_dump(by_alias=True).items(), depth)
            if dataclasses.is_dataclass(value) and not isinstance(value, type):
                fields = [
                    (field.name, getattr(value, field.name))
                    for field in dataclasses.fields(value)
                ]
                return self._dict(fields, depth)

        raise UnsupportedTypeError(_type_name(value))

    def _children(self, values: Iterable[Any], depth: int) -> Tuple[CanonicalValue, ...]:
        children = []
        for item in values:
            children.append(self.run(item, depth + 1))
        return tuple(children)

    def _dict(self, pairs: Iterable[Tuple[Any, Any]], depth: int) -> Dict:
        entries = []
        seen = set()
        for key, item in pairs:
            if not isinstance(key, str):
                raise NormalizationError(
                    f"Dictionary keys must be strings, got {type(key).__name__}"
                )
            self._check_text(key)
            if key in seen:
                raise NormalizationError(f"Duplicate key in object: {key!r}")
            seen.add(key)
            entries.append((key, self.run(item, depth + 1)))
        return Dict(entries=tuple(entries))

    def _narrow(self, value: int) -> float:
        try:
            narrowed = narrow_int(value)
        except OverflowError as e:
            raise NormalizationError(
                f"Integer too large for a double: {value.bit_length()} bits"
            ) from e
        if abs(value) >= MAX_SAFE_INTEGER and int(narrowed) != value:
            logger.debug("Integer %d rounded to %r", value, narrowed)
        return narrowed

    def _check_float(self, value: float) -> float:
        if not self.config.allow_non_finite and not is_finite_number(value):
            raise NormalizationError(f"Non-finite number: {value}")
        return value

    def _check_text(self, value: str) -> str:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise NormalizationError(
                f"String is not encodable as UTF-8: {e.reason}"
            ) from e
        return value


def normalize(decoded: Any, config: Optional[HasherConfig] = None) -> CanonicalValue:
    """
    Normalize a decoded JSON value into the value model.

    Args:
        decoded: Output of ``decode_common_json`` (or ``json.loads``): None,
            bool, int, float, str, list, dict or ``ObjectPairs``.
        config: Depth limit and non-finite number policy.

    Raises:
        NormalizationError: On a duplicate key, an integer out of double range
            or a disallowed non-finite number.
        UnsupportedTypeError: On anything a JSON decoder does not produce.
        DepthLimitError: If the value is nested too deeply.
    """
    return _Normalizer(config or HasherConfig(), native=False).normalize(decoded)


def to_common_value(native: Any, config: Optional[HasherConfig] = None) -> CanonicalValue:
    """
    Classify a native Python value into the value model.

    Integers are narrowed to doubles, which is lossy at magnitudes of 2**53
    and above. Values already in the model pass through unchanged.

    Raises:
        UnsupportedTypeError: If some part of the value has no mapping, e.g.
            a function.
        NormalizationError: On a non-string dict key, a duplicate key, an
            integer out of double range or a disallowed non-finite number.
        DepthLimitError: If the value is nested too deeply.
    """
    return _Normalizer(config or HasherConfig(), native=True).normalize(native)

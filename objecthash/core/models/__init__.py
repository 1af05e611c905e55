"""Canonical value model: the closed set of values the hasher understands."""

from typing import ClassVar, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing_extensions import Annotated

# Type tags, one byte per variant, prefixed to every hashed encoding
NULL_TAG = b"n"
BOOL_TAG = b"b"
UNICODE_TAG = b"u"
NUMBER_TAG = b"f"
RAW_BYTES_TAG = b"r"
LIST_TAG = b"l"
DICT_TAG = b"d"
SET_TAG = b"s"


def _check_utf8(text: str) -> str:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError(f"text is not encodable as UTF-8: {e.reason}") from e
    return text


class CanonicalValue(BaseModel):
    """Base class for every value variant."""

    tag: ClassVar[bytes]

    model_config = ConfigDict(frozen=True)


class Null(CanonicalValue):
    """The null value."""

    tag: ClassVar[bytes] = NULL_TAG
    kind: Literal["null"] = "null"


class Bool(CanonicalValue):
    """A boolean."""

    tag: ClassVar[bytes] = BOOL_TAG
    kind: Literal["bool"] = "bool"
    value: bool


class UnicodeString(CanonicalValue):
    """A text string. No Unicode normalization is applied."""

    tag: ClassVar[bytes] = UNICODE_TAG
    kind: Literal["unicode"] = "unicode"
    value: str

    @field_validator("value")
    @classmethod
    def validate_utf8(cls, v: str) -> str:
        """Reject lone surrogates, which have no UTF-8 encoding."""
        return _check_utf8(v)


class Number(CanonicalValue):
    """A number, always held as an IEEE-754 double.

    There is no integer variant. Integers are narrowed to doubles before they
    get here, which loses precision at magnitudes of 2**53 and above.
    """

    tag: ClassVar[bytes] = NUMBER_TAG
    kind: Literal["number"] = "number"
    value: float


class RawBytes(CanonicalValue):
    """Binary data that is not text."""

    tag: ClassVar[bytes] = RAW_BYTES_TAG
    kind: Literal["bytes"] = "bytes"
    value: bytes


class List(CanonicalValue):
    """An ordered sequence of values."""

    tag: ClassVar[bytes] = LIST_TAG
    kind: Literal["list"] = "list"
    items: Tuple["Value", ...] = ()


class Dict(CanonicalValue):
    """A mapping from unique string keys to values.

    Entries keep the order they were given in; the digest does not depend on it.
    """

    tag: ClassVar[bytes] = DICT_TAG
    kind: Literal["dict"] = "dict"
    entries: Tuple[Tuple[str, "Value"], ...] = ()

    @field_validator("entries")
    @classmethod
    def validate_unique_keys(cls, v):
        """Keys must be unique UTF-8 encodable strings."""
        seen = set()
        for key, _ in v:
            _check_utf8(key)
            if key in seen:
                raise ValueError(f"duplicate key: {key!r}")
            seen.add(key)
        return v

    def keys(self) -> Tuple[str, ...]:
        return tuple(key for key, _ in self.entries)


class Set(CanonicalValue):
    """An unordered collection of values.

    Members are deduplicated by digest when hashed, so the same member may
    appear more than once here.
    """

    tag: ClassVar[bytes] = SET_TAG
    kind: Literal["set"] = "set"
    members: Tuple["Value", ...] = ()


Value = Annotated[
    Union[Null, Bool, UnicodeString, Number, RawBytes, List, Dict, Set],
    Field(discriminator="kind"),
]

List.model_rebuild()
Dict.model_rebuild()
Set.model_rebuild()

VALUE_TYPES = (Null, Bool, UnicodeString, Number, RawBytes, List, Dict, Set)

__all__ = [
    "CanonicalValue",
    "Value",
    "VALUE_TYPES",
    "Null",
    "Bool",
    "UnicodeString",
    "Number",
    "RawBytes",
    "List",
    "Dict",
    "Set",
    "NULL_TAG",
    "BOOL_TAG",
    "UNICODE_TAG",
    "NUMBER_TAG",
    "RAW_BYTES_TAG",
    "LIST_TAG",
    "DICT_TAG",
    "SET_TAG",
]

"""Unit tests for canonical scalar encodings."""

import pytest

from objecthash.core.canonicalization import (
    MAX_SAFE_INTEGER,
    encode_scalar,
    is_finite_number,
    narrow_int,
    normalize_float,
)
from objecthash.core.models import Bool, List, Null, Number, RawBytes, UnicodeString


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, "+0:"),
        (1.0, "+0:1"),
        (0.5, "+-1:1"),
        (0.75, "+0:011"),
        (1.5, "+1:011"),
        (-1.5, "-1:011"),
        (2.0, "+1:1"),
        (123.0, "+7:01111011"),
        (float(2 ** 53), "+53:1"),
        (5e-324, "+-1074:1"),
    ],
)
def test_normalize_float_known_encodings(value: float, expected: str) -> None:
    """Known doubles map to their canonical text."""
    assert normalize_float(value) == expected


def test_negative_zero_is_zero() -> None:
    """-0.0 compares equal to 0.0 and shares its encoding."""
    assert normalize_float(-0.0) == normalize_float(0.0) == "+0:"


def test_sign_is_always_explicit() -> None:
    """Positive numbers carry a '+' rather than no sign."""
    assert normalize_float(3.25).startswith("+")
    assert normalize_float(-3.25).startswith("-")


def test_unequal_floats_encode_differently() -> None:
    """Nearby but unequal doubles never share an encoding."""
    assert normalize_float(0.1 + 0.2) != normalize_float(0.3)
    assert normalize_float(1.0) != normalize_float(1.0000000000000002)


def test_mantissa_has_no_trailing_zero() -> None:
    """The bit string ends at the last set bit."""
    for value in (1.0, 3.0, 1000.0, 0.0001, 1.7976931348623157e308):
        assert normalize_float(value).endswith("1")


def test_non_finite_spellings() -> None:
    """NaN and the infinities have fixed spellings."""
    assert normalize_float(float("nan")) == "NaN"
    assert normalize_float(float("inf")) == "Infinity"
    assert normalize_float(float("-inf")) == "-Infinity"
    assert not is_finite_number(float("nan"))
    assert is_finite_number(1.0)


def test_narrow_int_loses_precision_past_2_53() -> None:
    """Integers above 2**53 round to the nearest double."""
    assert narrow_int(MAX_SAFE_INTEGER) == narrow_int(MAX_SAFE_INTEGER + 1)
    assert narrow_int(MAX_SAFE_INTEGER - 1) != narrow_int(MAX_SAFE_INTEGER)


def test_narrow_int_overflow() -> None:
    """Integers beyond the double range cannot be narrowed."""
    with pytest.raises(OverflowError):
        narrow_int(10 ** 400)


def test_encode_scalar_payloads() -> None:
    """Scalars encode to the bytes hashed after their tag."""
    assert encode_scalar(Null()) == b""
    assert encode_scalar(Bool(value=True)) == b"1"
    assert encode_scalar(Bool(value=False)) == b"0"
    assert encode_scalar(UnicodeString(value="café")) == "café".encode("utf-8")
    assert encode_scalar(Number(value=1.5)) == b"+1:011"
    assert encode_scalar(RawBytes(value=b"\x00\xff")) == b"\x00\xff"


def test_encode_scalar_rejects_containers() -> None:
    """Containers have no scalar payload."""
    with pytest.raises(TypeError):
        encode_scalar(List())

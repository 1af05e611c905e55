"""
Canonical byte encodings for scalar values.

This module turns each scalar variant of the value model into the exact bytes
that get hashed after its type tag. The interesting case is numbers: a double
is written as an explicit sign, a binary exponent and the binary digits of its
mantissa, so two doubles that compare equal always produce the same text and
two that differ never do. Platform float formatting is never involved.

Examples::

    normalize_float(0.0)   == "+0:"
    normalize_float(1.0)   == "+0:1"
    normalize_float(1.5)   == "+1:011"
    normalize_float(-1.5)  == "-1:011"
    normalize_float(2**53) == "+53:1"
"""

import math

from objecthash.core.errors import CanonicalizationError
from objecthash.core.models import (
    Bool,
    CanonicalValue,
    Null,
    Number,
    RawBytes,
    UnicodeString,
)

# Zero and negative zero share one encoding
ZERO = "+0:"
NAN = "NaN"
POSITIVE_INFINITY = "Infinity"
NEGATIVE_INFINITY = "-Infinity"

# Upper bound on the encoding length; a double needs far fewer characters
MAX_ENCODING_LENGTH = 1000

# Doubles at or beyond this magnitude cannot represent every integer
MAX_SAFE_INTEGER = 2 ** 53


def is_finite_number(value: float) -> bool:
    """Check if a number is neither NaN nor infinite."""
    return not (math.isnan(value) or math.isinf(value))


def normalize_float(value: float) -> str:
    """
    Return the canonical text encoding of a double.

    Args:
        value: Any float. NaN and the infinities get fixed spellings.

    Returns:
        str: ``<sign><exponent>:<mantissa bits>``, or one of the special
        spellings for zero and the non-finite values.

    Raises:
        CanonicalizationError: If the mantissa cannot be brought into range,
            which does not happen for IEEE-754 doubles.
    """
    if math.isnan(value):
        return NAN
    if math.isinf(value):
        return NEGATIVE_INFINITY if value < 0 else POSITIVE_INFINITY
    if value == 0:
        return ZERO

    f = float(value)
    sign = "+"
    if f < 0:
        sign = "-"
        f = -f

    # Scale into (0.5, 1]; halving and doubling are exact for doubles
    exponent = 0
    while f > 1:
        f /= 2
        exponent += 1
    while f <= 0.5:
        f *= 2
        exponent -= 1

    if f > 1 or f <= 0.5:
        raise CanonicalizationError(f"Could not normalize float {value!r}")

    parts = [sign, str(exponent), ":"]
    length = len(sign) + len(str(exponent)) + 1
    while f != 0:
        if f >= 1:
            parts.append("1")
            f -= 1
        else:
            parts.append("0")
        if f >= 1:
            raise CanonicalizationError(f"Could not normalize float {value!r}")
        length += 1
        if length >= MAX_ENCODING_LENGTH:
            raise CanonicalizationError(f"Could not normalize float {value!r}")
        f *= 2

    return "".join(parts)


def narrow_int(value: int) -> float:
    """
    Convert an integer to the double used for hashing.

    Integers of magnitude ``MAX_SAFE_INTEGER`` and above round to the nearest
    double, exactly as a generic JSON decoder would round them. Two different
    large integers can therefore hash the same.

    Raises:
        OverflowError: If the integer is too large for a double.
    """
    return float(value)


def encode_scalar(value: CanonicalValue) -> bytes:
    """
    Return the payload bytes hashed after the type tag of a scalar value.

    Raises:
        TypeError: If ``value`` is a container.
    """
    if isinstance(value, Null):
        return b""
    if isinstance(value, Bool):
        return b"1" if value.value else b"0"
    if isinstance(value, UnicodeString):
        return value.value.encode("utf-8")
    if isinstance(value, Number):
        return normalize_float(value.value).encode("ascii")
    if isinstance(value, RawBytes):
        return value.value

    raise TypeError(f"Not a scalar value: {type(value).__name__}")


__all__ = [
    "ZERO",
    "NAN",
    "POSITIVE_INFINITY",
    "NEGATIVE_INFINITY",
    "MAX_SAFE_INTEGER",
    "is_finite_number",
    "normalize_float",
    "narrow_int",
    "encode_scalar",
]

"""
objecthash - Structure-sensitive digests of JSON-like values.

This package computes a deterministic SHA-256 "object hash" of a nested value.
Map key order and the int-versus-float distinction of JSON do not affect the
digest, so the same data hashes the same whichever language or encoding it
came from.
"""

from importlib.metadata import PackageNotFoundError, version

# Set up version
__version__ = "1.0.0"

try:
    __version__ = version("objecthash")
except PackageNotFoundError:
    pass

# Core components
from objecthash.core.canonicalization import normalize_float
from objecthash.core.config import HasherConfig
from objecthash.core.digest import Digest, DigestComposer, digest
from objecthash.core.errors import (
    CanonicalizationError,
    DepthLimitError,
    GoldenFixtureError,
    NormalizationError,
    ObjectHashError,
    ParseError,
    UnsupportedTypeError,
)
from objecthash.core.hasher import (
    ObjectHasher,
    hash_common_json,
    hash_common_json_hex,
    hash_value,
    hash_value_hex,
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
    Value,
)
from objecthash.core.normalizer import decode_common_json, normalize, to_common_value

__all__ = [
    # Hashing
    "hash_common_json",
    "hash_common_json_hex",
    "hash_value",
    "hash_value_hex",
    "to_common_value",
    "normalize",
    "decode_common_json",
    "digest",
    "normalize_float",
    "ObjectHasher",
    "DigestComposer",
    "Digest",
    "HasherConfig",
    # Value model
    "CanonicalValue",
    "Value",
    "Null",
    "Bool",
    "UnicodeString",
    "Number",
    "RawBytes",
    "List",
    "Dict",
    "Set",
    # Errors
    "ObjectHashError",
    "ParseError",
    "NormalizationError",
    "UnsupportedTypeError",
    "DepthLimitError",
    "CanonicalizationError",
    "GoldenFixtureError",
]

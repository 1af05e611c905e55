"""
Core functionality for object hashing.

This package contains the canonical value model, the numeric canonicalizer,
the digest composer and the common-JSON normalizer.
"""

from .config import HasherConfig
from .digest import Digest, DigestComposer
from .errors import (
    CanonicalizationError,
    DepthLimitError,
    GoldenFixtureError,
    NormalizationError,
    ObjectHashError,
    ParseError,
    UnsupportedTypeError,
)
from .hasher import (
    ObjectHasher,
    hash_common_json,
    hash_common_json_hex,
    hash_value,
    hash_value_hex,
)
from .normalizer import ObjectPairs, decode_common_json, normalize, to_common_value

__all__ = [
    'HasherConfig',
    'Digest',
    'DigestComposer',
    'ObjectHasher',
    'hash_common_json',
    'hash_common_json_hex',
    'hash_value',
    'hash_value_hex',
    'ObjectPairs',
    'decode_common_json',
    'normalize',
    'to_common_value',
    'ObjectHashError',
    'ParseError',
    'NormalizationError',
    'UnsupportedTypeError',
    'DepthLimitError',
    'CanonicalizationError',
    'GoldenFixtureError',
]

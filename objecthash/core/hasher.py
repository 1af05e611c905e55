"""
Top-level object hashing API.

``hash_common_json`` hashes JSON text (decode, normalize, digest) and
``hash_value`` hashes a native Python value (classify, digest). Both give
the same digest for the same data::

    >>> hash_common_json('["foo", "bar"]').hex()
    '32ae896c413cfdc79eec68be9139c86ded8b279238467c216cf2bec4d5f1e4a2'
    >>> hash_value(["foo", "bar"]).hex()
    '32ae896c413cfdc79eec68be9139c86ded8b279238467c216cf2bec4d5f1e4a2'
"""

import logging
from typing import Any, Optional, Union

from objecthash.core.config import HasherConfig
from objecthash.core.digest import Digest, DigestComposer
from objecthash.core.models import CanonicalValue
from objecthash.core.normalizer import decode_common_json, normalize, to_common_value

logger = logging.getLogger(__name__)


class ObjectHasher:
    """Object hashing bound to one configuration."""

    def __init__(self, config: Optional[HasherConfig] = None):
        self.config = config or HasherConfig()
        self._composer = DigestComposer(self.config.max_depth)

    def digest(self, value: CanonicalValue) -> Digest:
        """Digest a value that is already in the value model."""
        return self._composer.digest(value)

    def to_common_value(self, native: Any) -> CanonicalValue:
        """Classify a native value without digesting it."""
        return to_common_value(native, self.config)

    def hash_value(self, native: Any) -> Digest:
        """
        Hash a native Python value.

        Raises:
            UnsupportedTypeError: If the value contains a type with no mapping.
            NormalizationError: If the value breaks a canonicalization rule.
            DepthLimitError: If the value is nested too deeply.
        """
        return self.digest(self.to_common_value(native))

    def hash_common_json(self, text: Union[str, bytes]) -> Digest:
        """
        Hash JSON text under common-JSON rules.

        Raises:
            ParseError: If the text is not valid JSON.
            NormalizationError: If an object repeats a key or a number
                literal overflows a double.
            DepthLimitError: If the document is nested too deeply.
        """
        value = normalize(decode_common_json(text), self.config)
        result = self.digest(value)
        logger.debug("Hashed %d bytes of JSON to %s", len(text), result)
        return result


_default_hasher = ObjectHasher()


def _hasher(config: Optional[HasherConfig]) -> ObjectHasher:
    return _default_hasher if config is None else ObjectHasher(config)


def hash_common_json(text: Union[str, bytes], config: Optional[HasherConfig] = None) -> Digest:
    """Hash JSON text. See ``ObjectHasher.hash_common_json``."""
    return _hasher(config).hash_common_json(text)


def hash_value(native: Any, config: Optional[HasherConfig] = None) -> Digest:
    """Hash a native value. See ``ObjectHasher.hash_value``."""
    return _hasher(config).hash_value(native)


def hash_common_json_hex(text: Union[str, bytes], config: Optional[HasherConfig] = None) -> str:
    """Hash JSON text and return the lowercase hex digest."""
    return hash_common_json(text, config).hex()


def hash_value_hex(native: Any, config: Optional[HasherConfig] = None) -> str:
    """Hash a native value and return the lowercase hex digest."""
    return hash_value(native, config).hex()

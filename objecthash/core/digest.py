"""
Digest composition for the canonical value model.

Every value is hashed as SHA-256 over its one-byte type tag followed by a
payload. Scalars hash their canonical encoding directly. Containers hash the
digests of their children, never their raw encodings:

- lists concatenate child digests in order;
- dicts build ``digest(key) + digest(value)`` per entry and concatenate those
  in byte order;
- sets drop repeated member digests and concatenate the rest in byte order.

Sorting on digest bytes makes dicts and sets independent of insertion order
without needing any ordering over the values themselves.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Optional

from objecthash.core.canonicalization import encode_scalar
from objecthash.core.config import DEFAULT_MAX_DEPTH
from objecthash.core.errors import DepthLimitError
from objecthash.core.models import (
    UNICODE_TAG,
    CanonicalValue,
    Dict,
    List,
    Set,
)

logger = logging.getLogger(__name__)

DIGEST_SIZE = 32


@dataclass(frozen=True, order=True)
class Digest:
    """A 32-byte object hash. Compares and sorts by its raw bytes."""

    value: bytes

    def __post_init__(self) -> None:
        if len(self.value) != DIGEST_SIZE:
            raise ValueError(
                f"Digest must be {DIGEST_SIZE} bytes, got {len(self.value)}"
            )

    @classmethod
    def fromhex(cls, text: str) -> "Digest":
        """Parse a 64-character hex digest."""
        return cls(bytes.fromhex(text))

    def hex(self) -> str:
        """Lowercase hex rendering, 64 characters."""
        return self.value.hex()

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.hex()


def hash_tagged(tag: bytes, payload: bytes) -> bytes:
    """Hash a payload with its type tag for domain separation."""
    return hashlib.sha256(tag + payload).digest()


def hash_key(key: str) -> bytes:
    """Hash a dict key exactly as the equivalent UnicodeString would hash."""
    return hash_tagged(UNICODE_TAG, key.encode("utf-8"))


class DigestComposer:
    """
    Recursively computes object hashes.

    A composer holds no state besides its depth limit and can be shared
    between threads.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max_depth

    def digest(self, value: CanonicalValue) -> Digest:
        """
        Compute the digest of a value.

        Args:
            value: Any variant of the value model.

        Returns:
            The value's 32-byte digest.

        Raises:
            DepthLimitError: If the value is nested deeper than ``max_depth``.
        """
        try:
            return Digest(self._digest(value, 0))
        except RecursionError as e:
            raise DepthLimitError(self.max_depth) from e

    def _digest(self, value: CanonicalValue, depth: int) -> bytes:
        if depth > self.max_depth:
            raise DepthLimitError(self.max_depth)

        if isinstance(value, List):
            child_hashes = []
            for item in value.items:
                child_hashes.append(self._digest(item, depth + 1))
            return hash_tagged(value.tag, b"".join(child_hashes))

        if isinstance(value, Dict):
            entry_hashes = []
            for key, item in value.entries:
                entry_hashes.append(hash_key(key) + self._digest(item, depth + 1))
            entry_hashes.sort()
            return hash_tagged(value.tag, b"".join(entry_hashes))

        if isinstance(value, Set):
            member_hashes = set()
            for member in value.members:
                member_hashes.add(self._digest(member, depth + 1))
            if len(member_hashes) < len(value.members):
                logger.debug(
                    "Collapsed %d duplicate set members",
                    len(value.members) - len(member_hashes),
                )
            return hash_tagged(value.tag, b"".join(sorted(member_hashes)))

        if not isinstance(value, CanonicalValue):
            raise TypeError(
                f"Expected a canonical value, got {type(value).__name__}; "
                "classify native values with to_common_value() first"
            )
        return hash_tagged(value.tag, encode_scalar(value))


_default_composer = DigestComposer()


def digest(value: CanonicalValue, max_depth: Optional[int] = None) -> Digest:
    """Compute the digest of a value with the default or a given depth limit."""
    if max_depth is None:
        return _default_composer.digest(value)
    return DigestComposer(max_depth).digest(value)

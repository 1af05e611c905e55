"""
Error taxonomy for object hashing.

Every failure is raised to the immediate caller. There are no partial
digests and nothing is retried: hashing is deterministic, so the caller has
to change the input.
"""

from typing import Optional

__all__ = [
    "ObjectHashError",
    "ParseError",
    "NormalizationError",
    "UnsupportedTypeError",
    "DepthLimitError",
    "CanonicalizationError",
    "GoldenFixtureError",
]


class ObjectHashError(ValueError):
    """Base class for all object hashing errors."""

    pass


class ParseError(ObjectHashError):
    """Raised when JSON text is not syntactically valid.

    The message is the decoder's own message, unchanged. ``position`` is the
    character offset the decoder stopped at and ``unexpected`` the character
    found there, when there is one.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        unexpected: Optional[str] = None,
    ):
        self.message = message
        self.position = position
        self.unexpected = unexpected
        super().__init__(message)


class NormalizationError(ObjectHashError):
    """Raised when a value breaks a canonicalization rule (e.g. a duplicate key)."""

    pass


class UnsupportedTypeError(ObjectHashError):
    """Raised when a native value has no mapping into the value model."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unsupported type: {type_name}")


class DepthLimitError(ObjectHashError):
    """Raised when a value is nested deeper than the configured limit."""

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = max_depth
        if max_depth is None:
            super().__init__("Value nested too deeply")
        else:
            super().__init__(f"Value nested deeper than {max_depth} levels")


class CanonicalizationError(ObjectHashError):
    """Raised when a number cannot be put into canonical form."""

    pass


class GoldenFixtureError(ObjectHashError):
    """Raised when a golden fixture file is malformed."""

    pass

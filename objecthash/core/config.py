"""Hasher configuration."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# Each nesting level costs one interpreter frame in both the normalizer and
# the digest composer, so this stays well below the default recursion limit.
DEFAULT_MAX_DEPTH = 256

MAX_DEPTH_ENV = "OBJECTHASH_MAX_DEPTH"
ALLOW_NON_FINITE_ENV = "OBJECTHASH_ALLOW_NON_FINITE"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class HasherConfig(BaseModel):
    """Settings shared by normalization and digesting."""

    max_depth: int = Field(
        DEFAULT_MAX_DEPTH,
        ge=1,
        description="Deepest nesting level accepted before DepthLimitError is raised.",
    )
    allow_non_finite: bool = Field(
        True,
        description="Whether NaN and the infinities may be normalized into numbers.",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HasherConfig":
        """Build a config from ``OBJECTHASH_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable is set to something unparseable.
        """
        if environ is None:
            environ = os.environ

        settings = {}
        max_depth = environ.get(MAX_DEPTH_ENV)
        if max_depth:
            settings["max_depth"] = int(max_depth)

        allow_non_finite = environ.get(ALLOW_NON_FINITE_ENV)
        if allow_non_finite:
            flag = allow_non_finite.strip().lower()
            if flag in _TRUE_VALUES:
                settings["allow_non_finite"] = True
            elif flag in _FALSE_VALUES:
                settings["allow_non_finite"] = False
            else:
                raise ValueError(
                    f"{ALLOW_NON_FINITE_ENV} must be a boolean, got {allow_non_finite!r}"
                )

        return cls(**settings)

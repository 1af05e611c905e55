"""
Golden fixture files: known JSON inputs paired with their expected digests.

The format is line oriented. Blank lines and lines starting with ``#`` are
skipped while looking for the next JSON line; the line right after a JSON
line is its expected lowercase hex digest::

    # Lists
    ["foo", "bar"]
    32ae896c413cfdc79eec68be9139c86ded8b279238467c216cf2bec4d5f1e4a2
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from pydantic import BaseModel, Field

from objecthash.core.errors import GoldenFixtureError, ObjectHashError
from objecthash.core.hasher import ObjectHasher

logger = logging.getLogger(__name__)


class GoldenCase(BaseModel):
    """One JSON input and the digest it must produce."""

    line_number: int = Field(..., ge=1, description="Line of the JSON text in the file.")
    json_text: str
    expected_hex: str


class GoldenResult(BaseModel):
    """Outcome of hashing one golden case."""

    case: GoldenCase
    actual_hex: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.actual_hex == self.case.expected_hex


def iter_golden_cases(lines: Iterable[str]) -> Iterator[GoldenCase]:
    """
    Parse golden fixture lines into cases.

    Raises:
        GoldenFixtureError: If the input ends right after a JSON line.
    """
    pending = None
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if pending is None:
            if not line or line.startswith("#"):
                continue
            pending = (line_number, line)
            continue

        json_line_number, json_text = pending
        yield GoldenCase(
            line_number=json_line_number,
            json_text=json_text,
            expected_hex=line.strip(),
        )
        pending = None

    if pending is not None:
        raise GoldenFixtureError(f"Premature EOF after line {pending[0]}")


def load_golden_file(path: Union[str, Path]) -> List[GoldenCase]:
    """Load every case from a golden fixture file."""
    with open(path, "r", encoding="utf-8") as f:
        return list(iter_golden_cases(f))


def check_golden_case(case: GoldenCase, hasher: Optional[ObjectHasher] = None) -> GoldenResult:
    """Hash one case and compare it against its expected digest."""
    hasher = hasher or ObjectHasher()
    try:
        actual = hasher.hash_common_json(case.json_text).hex()
    except ObjectHashError as e:
        logger.debug("Golden case on line %d failed: %s", case.line_number, e)
        return GoldenResult(case=case, error=str(e))
    return GoldenResult(case=case, actual_hex=actual)


def run_golden_file(
    path: Union[str, Path],
    hasher: Optional[ObjectHasher] = None,
) -> List[GoldenResult]:
    """Check every case in a golden fixture file."""
    hasher = hasher or ObjectHasher()
    return [check_golden_case(case, hasher) for case in load_golden_file(path)]

"""Parsing of ``--version`` output.

Grammar, applied to the trimmed output::

    version := marker? number rest
    marker  := a single non-digit character, e.g. "v"
    number  := space* digits ("." digits)?

Only the leading number counts for compatibility: "18.2.0" reads as 18.2,
and "v 18" reads as 18 (whitespace after the marker is skipped).
Output that does not start with a number after the marker is not an error;
it yields ``number=None`` and is never compatible.
"""

from __future__ import annotations

import re

from pydantic import BaseModel

from copilot_settings.config import REQUIRED_MAJOR_VERSION

_MARKER_RE = re.compile(r"^\D")
_NUMBER_RE = re.compile(r"^\s*\d+(?:\.\d+)?")


class VersionResult(BaseModel):
    """Outcome of a successful version query."""

    raw: str
    compatible: bool
    number: float | None = None

    @property
    def major(self) -> int | None:
        return int(self.number) if self.number is not None else None


def strip_marker(output: str) -> str:
    """Trim and drop one leading non-digit marker character."""
    text = output.strip()
    return _MARKER_RE.sub("", text, count=1)


def leading_number(text: str) -> float | None:
    """Parse the leading ``digits[.digits]`` of ``text``; None when there is none."""
    m = _NUMBER_RE.match(text)
    return float(m.group()) if m else None


def parse_version(output: str, required: int = REQUIRED_MAJOR_VERSION) -> VersionResult:
    """Classify raw ``--version`` output against ``required``."""
    raw = strip_marker(output)
    number = leading_number(raw)
    compatible = number is not None and number >= required
    return VersionResult(raw=raw, compatible=compatible, number=number)

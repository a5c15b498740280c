"""Node version tag syntax."""

from __future__ import annotations

import re
from dataclasses import dataclass

_SEMVER = re.compile(
    r"(?P<core>[0-9]+\.[0-9]+\.[0-9]+)(?:-(?P<pre>[0-9A-Za-z.-]+))?(?:\+(?P<build>[0-9A-Za-z.-]+))?"
)
_LATEST = re.compile(r"latest(?:-(?P<channel>[0-9A-Za-z.]+))?")
_RANGE = re.compile(r"(?P<op>\^|~|>=|<=|>|<)(?P<core>[0-9]+\.[0-9]+\.[0-9]+)")


@dataclass(frozen=True)
class VersionSpec:
    raw: str
    kind: str
    prerelease: str | None = None

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None


def parse_version_spec(raw: str) -> VersionSpec | None:
    """Parse a node version tag, returning None when the syntax is not accepted.

    Accepted forms: ``1.2.3`` (with optional ``-pre`` and ``+build``),
    ``latest`` or ``latest-<channel>``, ``^1.2.3``, ``~1.2.3`` and the
    comparisons ``>=``, ``<=``, ``>``, ``<`` followed by ``1.2.3``.
    """
    match = _SEMVER.fullmatch(raw)
    if match:
        return VersionSpec(raw=raw, kind="exact", prerelease=match.group("pre"))

    match = _LATEST.fullmatch(raw)
    if match:
        return VersionSpec(raw=raw, kind="latest", prerelease=match.group("channel"))

    match = _RANGE.fullmatch(raw)
    if match:
        op = match.group("op")
        kind = {"^": "caret", "~": "tilde"}.get(op, "comparison")
        return VersionSpec(raw=raw, kind=kind)
    return None

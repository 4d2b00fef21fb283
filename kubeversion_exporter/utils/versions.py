"""Version normalization and ordering.

Free-form version strings (``v1.24.3``, ``1.21``, ``2.0.0-RC1+build.7``) are
rewritten into a canonical ``MAJOR.MINOR.PATCH[.BUILD][-stability[.N]]`` form
before they are compared. Strings that do not look like a version at all are
still ordered: they sort below every parseable version and among themselves by
plain string order, so a comparison never fails.
"""

import functools
import re
from collections.abc import Iterable
from dataclasses import dataclass

_VERSION_RE = re.compile(
    r"""
    ^[vV]?
    (?P<numbers>\d+(?:\.\d+){0,3})
    (?:
        [._-]?
        (?P<stability>stable|alpha|beta|patch|dev|rc|pl|a|b|p)
        (?:[.-]?(?P<number>\d+))?
    )?
    $
    """,
    re.IGNORECASE | re.VERBOSE,
)

_STABILITY_ALIASES = {
    "a": "alpha",
    "b": "beta",
    "p": "patch",
    "pl": "patch",
    "stable": "",
}

# Release (no stability suffix) sits between rc and patch.
_STABILITY_RANK = {
    "dev": 0,
    "alpha": 1,
    "beta": 2,
    "rc": 3,
    "": 4,
    "patch": 5,
}


@dataclass(frozen=True)
class VersionDecision:
    """Normalized running/latest pair and whether latest is strictly newer."""

    running: str
    latest: str
    is_newer: int


@dataclass(frozen=True)
class _ParsedVersion:
    numbers: tuple[int, ...]
    stability: str
    number: int | None

    def canonical(self) -> str:
        text = ".".join(str(part) for part in self.numbers)
        if self.stability:
            text += f"-{self.stability}"
            if self.number is not None:
                text += f".{self.number}"
        return text

    def sort_key(self) -> tuple[tuple[int, ...], int, int]:
        padded = self.numbers + (0,) * (4 - len(self.numbers))
        return padded, _STABILITY_RANK[self.stability], self.number or 0


def _strip(version: str) -> str:
    return version.strip().split("+", 1)[0].strip()


def _parse(version: str) -> _ParsedVersion | None:
    match = _VERSION_RE.match(version)
    if match is None:
        return None

    numbers = tuple(int(part) for part in match.group("numbers").split("."))
    numbers = numbers + (0,) * (3 - len(numbers))

    stability = (match.group("stability") or "").lower()
    stability = _STABILITY_ALIASES.get(stability, stability)

    number = match.group("number")
    return _ParsedVersion(
        numbers=numbers,
        stability=stability,
        number=int(number) if number is not None and stability else None,
    )


def normalize(version: str) -> str:
    """Return the canonical form of a version string.

    The result is deterministic and idempotent. Unparseable input is returned
    trimmed and without build metadata.
    """
    stripped = _strip(version)
    parsed = _parse(stripped)
    if parsed is None:
        return stripped
    return parsed.canonical()


def _sort_key(version: str) -> tuple[int, object]:
    stripped = _strip(version)
    parsed = _parse(stripped)
    if parsed is None:
        return 0, stripped
    return 1, parsed.sort_key()


def compare(a: str, b: str) -> int:
    """Compare two version strings, returning -1, 0 or 1."""
    key_a = _sort_key(a)
    key_b = _sort_key(b)
    if key_a < key_b:  # type: ignore[operator]
        return -1
    if key_a > key_b:  # type: ignore[operator]
        return 1
    return 0


def sort_versions(versions: Iterable[str]) -> list[str]:
    """Sort version strings ascending; equal versions keep their input order."""
    return sorted(versions, key=functools.cmp_to_key(compare))


def decide(running: str, latest: str) -> VersionDecision:
    """Normalize both versions and flag whether latest is strictly newer."""
    running = normalize(running)
    latest = normalize(latest)

    is_newer = 1 if compare(latest, running) > 0 else 0
    return VersionDecision(running=running, latest=latest, is_newer=is_newer)

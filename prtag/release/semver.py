from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

from prtag.core.result import Err, Ok, Result
from prtag.release.errors import ReleaseError
from prtag.release.model import Increment


_VERSION_RE = re.compile(r"(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)\.(0|[1-9][0-9]*)")

DEFAULT_TAG_FORMAT = "%major%.%minor%.%patch%"


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def bump(self, kind: Increment) -> SemVer:
        match kind:
            case "major":
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected increment: {kind}")

    def format(self, template: str) -> str:
        """Render ``template``, substituting %major%, %minor% and %patch%.

        Other text, including unknown %placeholders%, is left as is.
        """
        return (
            template.replace("%major%", str(self.major))
            .replace("%minor%", str(self.minor))
            .replace("%patch%", str(self.patch))
        )


ZERO = SemVer(0, 0, 0)


def _match(text: str) -> SemVer | None:
    m = _VERSION_RE.fullmatch(text)
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def parse_version(text: str) -> Result[SemVer, ReleaseError]:
    v = _match(text)
    if v is None:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message=f"invalid version: {text!r}",
                hint="Expected: MAJOR.MINOR.PATCH",
            )
        )
    return Ok(v)


def parse_tolerant(text: str) -> SemVer | None:
    """Parse a tag name such as ``v1.2.3``; None if it is not a version.

    Surrounding whitespace and a single leading ``v``/``V`` are accepted; the
    rest must be a strict MAJOR.MINOR.PATCH.
    """
    s = text.strip()
    if s[:1] in ("v", "V"):
        s = s[1:]
    return _match(s)


def parse_increment(text: str) -> Result[Increment, ReleaseError]:
    match text:
        case "major" | "minor" | "patch":
            return Ok(text)
        case _:
            return Err(
                ReleaseError(
                    kind="invalid_increment",
                    message=f"invalid increment: {text!r}",
                    hint="Expected one of: major, minor, patch",
                )
            )


def bump(version: SemVer, increment: Increment) -> SemVer:
    return version.bump(increment)


def format_version(version: SemVer, template: str) -> str:
    return version.format(template)


def compare(a: SemVer, b: SemVer) -> Ordering:
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL


def bump_and_format(
    current: str,
    increment: str,
    template: str = DEFAULT_TAG_FORMAT,
) -> Result[str, ReleaseError]:
    """Compute the next tag name from a version string and an increment.

    Errors from the first failing step (version, then increment) are
    returned unchanged.
    """
    version = parse_version(current)
    if isinstance(version, Err):
        return version

    inc = parse_increment(increment)
    if isinstance(inc, Err):
        return inc

    return Ok(version.value.bump(inc.value).format(template))

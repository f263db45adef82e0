"""Version range expressions.

Grammar (blang/semver style, no wildcards):

    range      := and_set ("||" and_set)*
    and_set    := comparator (WS comparator)*
    comparator := [op] WS? version
    op         := ">=" | "<=" | ">" | "<" | "=" | "==" | "!=" | "!"

A comparator without an operator means equality. ``">=1.0.0 <2.0.0 ||
>=3.0.0"`` accepts 1.x and everything from 3.0.0 up.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from prtag.core.result import Err, Ok, Result
from prtag.release.errors import ReleaseError
from prtag.release.semver import SemVer, parse_tolerant

Operator = Literal[">=", "<=", ">", "<", "=", "!="]

_OPERATOR_RE = re.compile(r"^(>=|<=|!=|==|>|<|=|!)")
_OPERATOR_ONLY_RE = re.compile(r"^(>=|<=|!=|==|>|<|=|!)$")

_ALIASES: dict[str, Operator] = {
    ">=": ">=",
    "<=": "<=",
    ">": ">",
    "<": "<",
    "=": "=",
    "==": "=",
    "!=": "!=",
    "!": "!=",
}


@dataclass(frozen=True, slots=True)
class Comparator:
    op: Operator
    version: SemVer

    def satisfied(self, v: SemVer) -> bool:
        match self.op:
            case ">=":
                return v >= self.version
            case "<=":
                return v <= self.version
            case ">":
                return v > self.version
            case "<":
                return v < self.version
            case "=":
                return v == self.version
            case "!=":
                return v != self.version


@dataclass(frozen=True, slots=True)
class VersionRange:
    """OR of AND-sets of comparators."""

    sets: tuple[tuple[Comparator, ...], ...]

    def satisfied(self, v: SemVer) -> bool:
        return any(all(c.satisfied(v) for c in group) for group in self.sets)

    def __call__(self, v: SemVer) -> bool:
        return self.satisfied(v)


def _invalid(expr: str, why: str) -> Err[ReleaseError]:
    return Err(
        ReleaseError(
            kind="invalid_range",
            message=f"invalid version range {expr!r}: {why}",
            hint='Example: ">=1.0.0 <2.0.0"',
        )
    )


def _tokens(part: str) -> list[str]:
    # Re-attach a bare operator to the version that follows it (">= 1.0.0").
    raw = part.split()
    out: list[str] = []
    pending = ""
    for tok in raw:
        if _OPERATOR_ONLY_RE.match(tok):
            if pending:
                out.append(pending)
            pending = tok
            continue
        out.append(pending + tok)
        pending = ""
    if pending:
        out.append(pending)
    return out


def _parse_comparator(token: str) -> Comparator | None:
    m = _OPERATOR_RE.match(token)
    op: Operator = "="
    rest = token
    if m is not None:
        op = _ALIASES[m.group(1)]
        rest = token[m.end() :]
    version = parse_tolerant(rest) if rest else None
    if version is None:
        return None
    return Comparator(op=op, version=version)


def parse_range(expr: str) -> Result[VersionRange, ReleaseError]:
    if not expr.strip():
        return _invalid(expr, "empty expression")

    sets: list[tuple[Comparator, ...]] = []
    for part in expr.split("||"):
        tokens = _tokens(part)
        if not tokens:
            return _invalid(expr, "empty alternative around '||'")

        group: list[Comparator] = []
        for token in tokens:
            comparator = _parse_comparator(token)
            if comparator is None:
                return _invalid(expr, f"bad comparator {token!r}")
            group.append(comparator)
        sets.append(tuple(group))

    return Ok(VersionRange(sets=tuple(sets)))

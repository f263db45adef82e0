from __future__ import annotations

from collections.abc import Iterable

from prtag.core.result import Err, Ok, Result
from prtag.release.errors import ReleaseError
from prtag.release.ports import RefLister
from prtag.release.semver import ZERO, SemVer, parse_tolerant
from prtag.release.version_range import parse_range

_TAG_REF_PREFIX = "refs/tags/"


def tag_name(ref: str) -> str:
    if ref.startswith(_TAG_REF_PREFIX):
        return ref[len(_TAG_REF_PREFIX) :]
    return ref


def resolve_latest(refs: Iterable[str], range_expr: str) -> Result[SemVer, ReleaseError]:
    """Highest version among ``refs`` that satisfies ``range_expr``.

    Refs that are not versions (``refs/tags/nightly``) are skipped. With no
    match the result is 0.0.0, so the first release bumps from zero.
    """
    parsed = parse_range(range_expr)
    if isinstance(parsed, Err):
        return parsed
    expected = parsed.value

    latest = ZERO
    for ref in refs:
        version = parse_tolerant(tag_name(ref))
        if version is None:
            continue
        if expected.satisfied(version) and version > latest:
            latest = version
    return Ok(latest)


def latest_tag(
    lister: RefLister,
    *,
    repository: str,
    range_expr: str,
) -> Result[SemVer, ReleaseError]:
    refs = lister.list_tags(repository)
    if isinstance(refs, Err):
        return refs
    return resolve_latest(refs.value, range_expr)

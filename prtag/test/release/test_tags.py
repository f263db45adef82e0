from __future__ import annotations

import itertools

from prtag.core.result import Err, Ok
from prtag.release.errors import ReleaseError
from prtag.release.semver import SemVer
from prtag.release.tags import latest_tag, resolve_latest, tag_name
from prtag.test.fakes import FakeRefLister

REFS = [
    "refs/tags/v1.2.3",
    "refs/tags/v1.10.0",
    "refs/tags/nightly",
    "refs/tags/2.0.0",
    "refs/tags/v3.0.0-rc.1",
    "refs/tags/v0.9.9",
]


def test_tag_name_strips_prefix_once() -> None:
    assert tag_name("refs/tags/v1.2.3") == "v1.2.3"
    assert tag_name("v1.2.3") == "v1.2.3"
    assert tag_name("refs/tags/refs/tags/v1") == "refs/tags/v1"


def test_empty_refs_resolve_to_zero() -> None:
    assert resolve_latest([], ">=0.0.0") == Ok(SemVer(0, 0, 0))


def test_only_non_version_refs_resolve_to_zero() -> None:
    refs = ["refs/tags/nightly", "refs/tags/latest", "refs/tags/release-candidate"]
    assert resolve_latest(refs, ">=0.0.0") == Ok(SemVer(0, 0, 0))


def test_highest_version_wins() -> None:
    assert resolve_latest(REFS, ">=0.0.0") == Ok(SemVer(2, 0, 0))


def test_range_limits_candidates() -> None:
    assert resolve_latest(REFS, ">=1.0.0 <2.0.0") == Ok(SemVer(1, 10, 0))
    assert resolve_latest(REFS, "<1.0.0") == Ok(SemVer(0, 9, 9))
    assert resolve_latest(REFS, ">=5.0.0") == Ok(SemVer(0, 0, 0))


def test_result_does_not_depend_on_ref_order() -> None:
    for perm in itertools.permutations(REFS):
        assert resolve_latest(list(perm), ">=1.0.0 <2.0.0") == Ok(SemVer(1, 10, 0))


def test_malformed_range() -> None:
    result = resolve_latest(REFS, "latest")
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_range"


def test_latest_tag_lists_repository() -> None:
    lister = FakeRefLister(refs=["refs/tags/v0.1.0", "refs/tags/v0.2.0"])
    assert latest_tag(lister, repository="octo/app", range_expr=">=0.0.0") == Ok(SemVer(0, 2, 0))
    assert lister.calls == ["octo/app"]


def test_latest_tag_propagates_lister_error() -> None:
    error = ReleaseError(kind="ref_list_failed", message="boom")
    lister = FakeRefLister(error=error)
    assert latest_tag(lister, repository="octo/app", range_expr=">=0.0.0") == Err(error)

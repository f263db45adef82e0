from __future__ import annotations

from pathlib import Path

import pytest

from prtag.release.errors import ReleaseError
from prtag.release.guard import Fail, Proceed, Skip, run_guard
from prtag.test.fakes import FakeEventSource, make_event


def _guard(source: FakeEventSource, *, branch: str = "main", path: str = "event.json", **kw):
    return run_guard(release_branch=branch, event_path=path, events=source, **kw)


@pytest.mark.parametrize(("branch", "path"), [("", "event.json"), ("main", ""), ("", "")])
def test_empty_options_fail_before_reading_event(branch: str, path: str) -> None:
    source = FakeEventSource(event=make_event())
    decision = _guard(source, branch=branch, path=path)
    assert isinstance(decision, Fail)
    assert decision.error.kind == "empty_option"
    assert source.calls == []


def test_event_parse_error_is_propagated() -> None:
    error = ReleaseError(kind="event_parse_error", message="parsing error")
    decision = _guard(FakeEventSource(error=error))
    assert decision == Fail(error)


def test_reads_the_given_event_path() -> None:
    source = FakeEventSource(event=make_event())
    _guard(source, path="/github/workflow/event.json")
    assert source.calls == [Path("/github/workflow/event.json")]


@pytest.mark.parametrize("action", ["opened", "synchronize", None])
def test_not_closed(action: str | None) -> None:
    decision = _guard(FakeEventSource(event=make_event(action=action)))
    assert isinstance(decision, Skip)
    assert decision.reason == "not_closed"


@pytest.mark.parametrize("merged", [False, None])
def test_not_merged(merged: bool | None) -> None:
    decision = _guard(FakeEventSource(event=make_event(merged=merged)))
    assert isinstance(decision, Skip)
    assert decision.reason == "not_merged"


def test_missing_base_fails() -> None:
    decision = _guard(FakeEventSource(event=make_event(with_base=False)))
    assert isinstance(decision, Fail)
    assert decision.error.kind == "missing_base_ref"


def test_missing_base_ref_fails() -> None:
    decision = _guard(FakeEventSource(event=make_event(base=None)))
    assert isinstance(decision, Fail)
    assert decision.error.kind == "missing_base_ref"


def test_base_mismatch() -> None:
    decision = _guard(FakeEventSource(event=make_event(base="develop")))
    assert isinstance(decision, Skip)
    assert decision.reason == "base_mismatch"


def test_no_label_skips_by_default() -> None:
    decision = _guard(FakeEventSource(event=make_event(labels=("docs",))))
    assert isinstance(decision, Skip)
    assert decision.reason == "no_valid_label"


def test_ambiguous_labels_skip() -> None:
    decision = _guard(FakeEventSource(event=make_event(labels=("patch", "minor"))))
    assert isinstance(decision, Skip)
    assert decision.reason == "no_valid_label"


def test_no_label_can_fail_by_policy() -> None:
    decision = _guard(
        FakeEventSource(event=make_event(labels=())),
        on_no_valid_label="fail",
    )
    assert isinstance(decision, Fail)
    assert decision.error.kind == "no_valid_label"


def test_proceed() -> None:
    event = make_event(base="main", labels=("patch",))
    decision = _guard(FakeEventSource(event=event))
    assert decision == Proceed(event)


def test_checks_run_in_order() -> None:
    # Not closed wins over every later defect, including a missing base ref.
    event = make_event(action="opened", merged=False, with_base=False, labels=())
    decision = _guard(FakeEventSource(event=event))
    assert isinstance(decision, Skip)
    assert decision.reason == "not_closed"

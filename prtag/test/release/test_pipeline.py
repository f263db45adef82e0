from __future__ import annotations

from dataclasses import replace

from prtag.core.result import Err, Ok
from prtag.output.console import MockConsole
from prtag.release.errors import ReleaseError
from prtag.release.model import ReleaseResult, Skipped
from prtag.release.pipeline import ReleaseRequest, decide_release, publish
from prtag.test.fakes import FakeEventSource, FakePublisher, FakeRefLister, make_event


def _request(**overrides: object) -> ReleaseRequest:
    base = ReleaseRequest(
        release_branch="main",
        event_path="event.json",
        repository="octo/app",
        version_range=">=0.0.0",
        tag_format="v%major%.%minor%.%patch%",
        strategy="release",
        target_commit="abc123",
    )
    return replace(base, **overrides)  # type: ignore[arg-type]


def _decide(
    request: ReleaseRequest,
    *,
    events: FakeEventSource,
    refs: FakeRefLister | None = None,
    publisher: FakePublisher | None = None,
    console: MockConsole | None = None,
):
    return decide_release(
        request,
        events=events,
        refs=refs if refs is not None else FakeRefLister(refs=["refs/tags/v1.0.0"]),
        publisher=publisher if publisher is not None else FakePublisher(),
        console=console if console is not None else MockConsole(),
    )


def test_release_from_latest_tag() -> None:
    refs = FakeRefLister(refs=["refs/tags/v1.0.0", "refs/tags/v0.4.0"])
    publisher = FakePublisher()
    result = _decide(
        _request(),
        events=FakeEventSource(event=make_event(labels=("patch",))),
        refs=refs,
        publisher=publisher,
    )
    assert result == Ok(
        ReleaseResult(next_tag="v1.0.1", increment="patch", action="release", current_tag="1.0.0")
    )
    assert refs.calls == ["octo/app"]
    assert publisher.releases == [("v1.0.1", "abc123")]
    assert publisher.tags == []


def test_tag_strategy_creates_bare_tag() -> None:
    publisher = FakePublisher()
    result = _decide(
        _request(strategy="tag"),
        events=FakeEventSource(event=make_event(labels=("minor",))),
        publisher=publisher,
    )
    assert isinstance(result, Ok)
    assert result.value == ReleaseResult(
        next_tag="v1.1.0", increment="minor", action="tag", current_tag="1.0.0"
    )
    assert publisher.tags == [("v1.1.0", "abc123")]
    assert publisher.releases == []


def test_none_strategy_never_publishes() -> None:
    publisher = FakePublisher()
    result = _decide(
        _request(strategy="none"),
        events=FakeEventSource(event=make_event(labels=("major",))),
        publisher=publisher,
    )
    assert isinstance(result, Ok)
    assert isinstance(result.value, ReleaseResult)
    assert result.value.next_tag == "v2.0.0"
    assert result.value.action == "none"
    assert publisher.calls == 0


def test_first_release_bumps_from_zero() -> None:
    result = _decide(
        _request(),
        events=FakeEventSource(event=make_event(labels=("major",))),
        refs=FakeRefLister(refs=[]),
    )
    assert isinstance(result, Ok)
    assert isinstance(result.value, ReleaseResult)
    assert result.value.next_tag == "v1.0.0"
    assert result.value.current_tag == "0.0.0"


def test_explicit_next_tag_skips_listing_but_reports_increment() -> None:
    refs = FakeRefLister(refs=["refs/tags/v9.9.9"])
    publisher = FakePublisher()
    result = _decide(
        _request(next_tag="v7.0.0"),
        events=FakeEventSource(event=make_event(labels=("minor",))),
        refs=refs,
        publisher=publisher,
    )
    assert result == Ok(ReleaseResult(next_tag="v7.0.0", increment="minor", action="release"))
    assert refs.calls == []
    assert publisher.releases == [("v7.0.0", "abc123")]


def test_skip_label_vetoes_publishing() -> None:
    publisher = FakePublisher()
    console = MockConsole()
    result = _decide(
        _request(),
        events=FakeEventSource(event=make_event(labels=("patch", "skipRelease"))),
        publisher=publisher,
        console=console,
    )
    assert result == Ok(
        ReleaseResult(
            next_tag="v1.0.1",
            increment="patch",
            action="none",
            current_tag="1.0.0",
            vetoed=True,
        )
    )
    assert publisher.calls == 0
    assert console.has_warning()


def test_veto_labels_are_configurable() -> None:
    publisher = FakePublisher()
    result = _decide(
        _request(skip_labels=("no-release",)),
        events=FakeEventSource(event=make_event(labels=("patch", "skip-release"))),
        publisher=publisher,
    )
    assert isinstance(result, Ok)
    assert isinstance(result.value, ReleaseResult)
    assert result.value.vetoed is False
    assert publisher.releases == [("v1.0.1", "abc123")]


def test_skip_is_success_without_work() -> None:
    refs = FakeRefLister()
    publisher = FakePublisher()
    result = _decide(
        _request(),
        events=FakeEventSource(event=make_event(base="develop")),
        refs=refs,
        publisher=publisher,
    )
    assert result == Ok(Skipped(reason="base_mismatch"))
    assert refs.calls == []
    assert publisher.calls == 0


def test_guard_failure_is_an_error() -> None:
    publisher = FakePublisher()
    result = _decide(
        _request(release_branch=""),
        events=FakeEventSource(event=make_event()),
        publisher=publisher,
    )
    assert isinstance(result, Err)
    assert result.error.kind == "empty_option"
    assert publisher.calls == 0


def test_invalid_range_fails_before_publishing() -> None:
    publisher = FakePublisher()
    result = _decide(
        _request(version_range="~1"),
        events=FakeEventSource(event=make_event()),
        publisher=publisher,
    )
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_range"
    assert publisher.calls == 0


def test_ref_listing_error_propagates() -> None:
    error = ReleaseError(kind="ref_list_failed", message="HTTP 500")
    result = _decide(
        _request(),
        events=FakeEventSource(event=make_event()),
        refs=FakeRefLister(error=error),
    )
    assert result == Err(error)


def test_publisher_error_is_wrapped_and_not_retried() -> None:
    publisher = FakePublisher(error=ReleaseError(kind="invalid_config", message="422"))
    result = _decide(
        _request(),
        events=FakeEventSource(event=make_event()),
        publisher=publisher,
    )
    assert isinstance(result, Err)
    assert result.error.kind == "publish_error"
    assert len(publisher.releases) == 1
    assert publisher.tags == []


def test_target_falls_back_to_merge_commit() -> None:
    publisher = FakePublisher()
    _decide(
        _request(target_commit=None),
        events=FakeEventSource(event=make_event(merge_commit_sha="f00d")),
        publisher=publisher,
    )
    assert publisher.releases == [("v1.0.1", "f00d")]


def test_missing_target_commit() -> None:
    publisher = FakePublisher()
    result = _decide(
        _request(target_commit=None),
        events=FakeEventSource(event=make_event(merge_commit_sha=None)),
        publisher=publisher,
    )
    assert isinstance(result, Err)
    assert result.error.kind == "empty_option"
    assert publisher.calls == 0


def test_publish_none_needs_no_target() -> None:
    publisher = FakePublisher()
    assert publish(strategy="none", tag="v1.0.0", target=None, publisher=publisher) == Ok("none")
    assert publisher.calls == 0


def test_publish_passes_through_publish_errors() -> None:
    error = ReleaseError(kind="publish_error", message="tag creation failed")
    publisher = FakePublisher(error=error)
    assert publish(strategy="tag", tag="v1.0.0", target="abc", publisher=publisher) == Err(error)
    assert publisher.releases == []


def test_adapters_satisfy_ports(tmp_path) -> None:
    from prtag.release.event import JsonEventSource
    from prtag.release.gh import GhContext, GhRefLister, GhReleasePublisher
    from prtag.release.ports import EventSource, RefLister, ReleasePublisher

    ctx = GhContext(cwd=tmp_path)
    assert isinstance(JsonEventSource(), EventSource)
    assert isinstance(GhRefLister(ctx), RefLister)
    assert isinstance(GhReleasePublisher(ctx, "octo/app"), ReleasePublisher)
    assert isinstance(FakeEventSource(), EventSource)
    assert isinstance(FakeRefLister(), RefLister)
    assert isinstance(FakePublisher(), ReleasePublisher)

from __future__ import annotations

from dataclasses import dataclass

from prtag.core.result import Err, Ok, Result
from prtag.output.console import ConsoleProtocol, Style
from prtag.release.errors import ReleaseError
from prtag.release.guard import Fail, Skip, run_guard
from prtag.release.labels import extract_increment, has_label
from prtag.release.model import (
    Increment,
    NoLabelPolicy,
    PullRequestEvent,
    ReleaseAction,
    ReleaseResult,
    ReleaseStrategy,
    Skipped,
)
from prtag.release.ports import EventSource, RefLister, ReleasePublisher
from prtag.release.tags import latest_tag

DEFAULT_SKIP_LABELS: tuple[str, ...] = ("skip-release", "skipRelease")


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Normalized inputs for one release decision."""

    release_branch: str
    event_path: str
    repository: str
    version_range: str
    tag_format: str
    strategy: ReleaseStrategy
    next_tag: str | None = None
    # Explicit commit to tag; wins over the pull request's merge commit.
    target_commit: str | None = None
    skip_labels: tuple[str, ...] = DEFAULT_SKIP_LABELS
    on_no_valid_label: NoLabelPolicy = "skip"


def _next_tag(
    request: ReleaseRequest,
    *,
    increment: Increment,
    refs: RefLister,
    console: ConsoleProtocol,
) -> Result[tuple[str, str | None], ReleaseError]:
    if request.next_tag:
        console.print(f"next tag given: {request.next_tag}", Style.DIM)
        return Ok((request.next_tag, None))

    latest = latest_tag(refs, repository=request.repository, range_expr=request.version_range)
    if isinstance(latest, Err):
        return latest
    current = latest.value
    console.print(f"latest tag in {request.version_range!r}: {current}", Style.DIM)
    return Ok((current.bump(increment).format(request.tag_format), str(current)))


def _vetoed_by(request: ReleaseRequest, event: PullRequestEvent) -> str | None:
    for name in request.skip_labels:
        if has_label(name, event):
            return name
    return None


def _target_commit(request: ReleaseRequest, event: PullRequestEvent) -> str | None:
    return request.target_commit or event.pull_request.merge_commit_sha


def publish(
    *,
    strategy: ReleaseStrategy,
    tag: str,
    target: str | None,
    publisher: ReleasePublisher,
) -> Result[ReleaseAction, ReleaseError]:
    """Run the publish step for ``strategy``; at most one publisher call."""
    if strategy == "none":
        return Ok("none")

    if not target:
        return Err(
            ReleaseError(
                kind="empty_option",
                message=f"no target commit to {strategy} {tag}",
                hint="Set INPUT_CUSTOM_RELEASE_SHA or GITHUB_SHA",
            )
        )

    if strategy == "release":
        created = publisher.create_release(tag, target)
    else:
        created = publisher.create_tag(tag, target)
    if isinstance(created, Err):
        e = created.error
        if e.kind in ("publish_error", "gh_missing"):
            return created
        return Err(
            ReleaseError(
                kind="publish_error",
                message=f"failed to create {strategy} {tag}: {e.message}",
                hint=e.hint,
            )
        )
    return Ok(strategy)


def decide_release(
    request: ReleaseRequest,
    *,
    events: EventSource,
    refs: RefLister,
    publisher: ReleasePublisher,
    console: ConsoleProtocol,
) -> Result[ReleaseResult | Skipped, ReleaseError]:
    console.print("checking pull request eligibility", Style.DIM)
    decision = run_guard(
        release_branch=request.release_branch,
        event_path=request.event_path,
        events=events,
        on_no_valid_label=request.on_no_valid_label,
    )
    if isinstance(decision, Fail):
        return Err(decision.error)
    if isinstance(decision, Skip):
        console.info(f"nothing to release: {decision.message}")
        return Ok(Skipped(reason=decision.reason))
    event = decision.event

    # Recomputed even with an explicit next tag: the increment is reported.
    increment = extract_increment(event.label_names)
    if isinstance(increment, Err):
        return increment
    console.print(f"increment: {increment.value}", Style.DIM)

    tag = _next_tag(request, increment=increment.value, refs=refs, console=console)
    if isinstance(tag, Err):
        return tag
    next_tag, current = tag.value

    veto = _vetoed_by(request, event)
    if veto is not None:
        console.warning(f"label {veto!r} present: not publishing {next_tag}")
        return Ok(
            ReleaseResult(
                next_tag=next_tag,
                increment=increment.value,
                action="none",
                current_tag=current,
                vetoed=True,
            )
        )

    action = publish(
        strategy=request.strategy,
        tag=next_tag,
        target=_target_commit(request, event),
        publisher=publisher,
    )
    if isinstance(action, Err):
        return action

    return Ok(
        ReleaseResult(
            next_tag=next_tag,
            increment=increment.value,
            action=action.value,
            current_tag=current,
        )
    )

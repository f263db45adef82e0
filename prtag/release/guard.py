"""Eligibility check run before any release decision.

The checks form an ordered list; the first one that does not pass decides
the outcome. ``Fail`` is a defect an operator must fix (non-zero exit),
``Skip`` means the pull request is simply not a release trigger.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from prtag.core.result import Err
from prtag.release.errors import ReleaseError
from prtag.release.labels import extract_increment
from prtag.release.model import NoLabelPolicy, PullRequestEvent, SkipReason
from prtag.release.ports import EventSource


@dataclass(frozen=True, slots=True)
class Proceed:
    event: PullRequestEvent


@dataclass(frozen=True, slots=True)
class Skip:
    reason: SkipReason
    message: str


@dataclass(frozen=True, slots=True)
class Fail:
    error: ReleaseError


GuardDecision: TypeAlias = Proceed | Skip | Fail


def run_guard(
    *,
    release_branch: str,
    event_path: str,
    events: EventSource,
    on_no_valid_label: NoLabelPolicy = "skip",
) -> GuardDecision:
    if not release_branch or not event_path:
        return Fail(
            ReleaseError(
                kind="empty_option",
                message=(
                    "empty release branch or event path: "
                    f"release_branch={release_branch!r} event_path={event_path!r}"
                ),
                hint="Set INPUT_RELEASE_BRANCH and GITHUB_EVENT_PATH",
            )
        )

    parsed = events.parse(Path(event_path))
    if isinstance(parsed, Err):
        return Fail(parsed.error)
    event = parsed.value

    if event.action != "closed":
        return Skip("not_closed", f"pull request is not closed (action={event.action!r})")

    pr = event.pull_request
    if pr.merged is not True:
        return Skip("not_merged", "pull request is not merged")

    if pr.base is None or pr.base.ref is None:
        return Fail(
            ReleaseError(
                kind="missing_base_ref",
                message="pull request has no base ref",
                hint=event_path,
            )
        )

    if pr.base.ref != release_branch:
        return Skip(
            "base_mismatch",
            f"base ref {pr.base.ref!r} does not match release branch {release_branch!r}",
        )

    increment = extract_increment(event.label_names)
    if isinstance(increment, Err):
        if on_no_valid_label == "fail":
            return Fail(increment.error)
        return Skip("no_valid_label", increment.error.message)

    return Proceed(event)

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


Increment = Literal["major", "minor", "patch"]
ReleaseStrategy = Literal["release", "tag", "none"]
ReleaseAction = Literal["release", "tag", "none"]
NoLabelPolicy = Literal["skip", "fail"]
SkipReason = Literal["not_closed", "not_merged", "base_mismatch", "no_valid_label"]


@dataclass(frozen=True, slots=True)
class Label:
    name: str | None


@dataclass(frozen=True, slots=True)
class BranchRef:
    ref: str | None


@dataclass(frozen=True, slots=True)
class PullRequest:
    merged: bool | None
    base: BranchRef | None
    labels: tuple[Label, ...] = ()
    number: int | None = None
    # Commit created by the merge; the default publish target.
    merge_commit_sha: str | None = None


@dataclass(frozen=True, slots=True)
class PullRequestEvent:
    """The subset of a ``pull_request`` webhook payload the decision reads."""

    action: str | None
    pull_request: PullRequest

    @property
    def label_names(self) -> tuple[str | None, ...]:
        return tuple(label.name for label in self.pull_request.labels)


@dataclass(frozen=True, slots=True)
class ReleaseResult:
    next_tag: str
    increment: Increment
    action: ReleaseAction
    # Latest existing version the tag was computed from; None if next_tag was given.
    current_tag: str | None = None
    vetoed: bool = False


@dataclass(frozen=True, slots=True)
class Skipped:
    """Success without action: the pull request is not a release trigger."""

    reason: SkipReason

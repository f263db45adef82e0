"""Webhook payload reader.

GitHub Actions writes the triggering event to the file named by
``GITHUB_EVENT_PATH``. Only the fields the release decision needs are
kept; anything else in the payload is ignored.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from prtag.core.result import Err, Ok, Result
from prtag.core.structured import (
    as_obj_list,
    as_str_dict,
    get_bool,
    get_int,
    get_raw_str,
    get_str,
    get_table,
)
from prtag.release.errors import ReleaseError
from prtag.release.model import BranchRef, Label, PullRequest, PullRequestEvent

__all__ = ["JsonEventSource", "event_from_dict", "read_event"]


def _parse_error(path: Path | None, message: str) -> Err[ReleaseError]:
    return Err(
        ReleaseError(
            kind="event_parse_error",
            message=message,
            hint=str(path) if path is not None else None,
        )
    )


def _labels(pr: Mapping[str, object]) -> tuple[Label, ...]:
    raw = as_obj_list(pr.get("labels"))
    if raw is None:
        return ()
    out: list[Label] = []
    for item in raw:
        d = as_str_dict(item)
        # Keep nameless entries: the increment scan skips them itself.
        out.append(Label(name=get_raw_str(d, "name") if d is not None else None))
    return tuple(out)


def event_from_dict(
    data: Mapping[str, object], *, path: Path | None = None
) -> Result[PullRequestEvent, ReleaseError]:
    pr = get_table(data, "pull_request")
    if pr is None:
        return _parse_error(path, "event has no pull_request object")

    base_tbl = get_table(pr, "base")
    base = BranchRef(ref=get_raw_str(base_tbl, "ref")) if base_tbl is not None else None

    return Ok(
        PullRequestEvent(
            action=get_raw_str(data, "action"),
            pull_request=PullRequest(
                merged=get_bool(pr, "merged"),
                base=base,
                labels=_labels(pr),
                number=get_int(pr, "number"),
                merge_commit_sha=get_str(pr, "merge_commit_sha"),
            ),
        )
    )


def read_event(path: Path) -> Result[PullRequestEvent, ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return _parse_error(path, f"event file not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        return _parse_error(path, f"cannot read event file: {e}")

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return _parse_error(path, f"invalid JSON in event file: {e}")

    data = as_str_dict(obj)
    if data is None:
        return _parse_error(path, "event payload must be a JSON object")
    return event_from_dict(data, path=path)


class JsonEventSource:
    """EventSource reading the webhook JSON file from disk."""

    def parse(self, path: Path) -> Result[PullRequestEvent, ReleaseError]:
        return read_event(path)

from __future__ import annotations

from collections.abc import Iterable

from prtag.core.result import Err, Ok, Result
from prtag.release.errors import ReleaseError
from prtag.release.model import Increment, PullRequestEvent
from prtag.release.semver import parse_increment


def extract_increment(labels: Iterable[str | None]) -> Result[Increment, ReleaseError]:
    """Return the one increment label on a pull request.

    Labels that are not increment keywords are ignored. Two keyword labels
    are ambiguous and fail, whatever their order.
    """
    found: Increment | None = None
    for name in labels:
        if name is None:
            continue
        parsed = parse_increment(name)
        if isinstance(parsed, Err):
            continue
        if found is not None:
            return Err(
                ReleaseError(
                    kind="multiple_valid_labels",
                    message=f"multiple semver labels found: {found}, {parsed.value}",
                    hint="Keep exactly one of: major, minor, patch",
                )
            )
        found = parsed.value

    if found is None:
        return Err(
            ReleaseError(
                kind="no_valid_label",
                message="no semver label found",
                hint="Add one of the labels: major, minor, patch",
            )
        )
    return Ok(found)


def has_label(name: str, event: PullRequestEvent) -> bool:
    return name in event.label_names

"""Error types for the release decision context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "invalid_version",
    "invalid_increment",
    "invalid_range",
    "multiple_valid_labels",
    "no_valid_label",
    "empty_option",
    "missing_base_ref",
    "event_parse_error",
    "ref_list_failed",
    "publish_error",
    "gh_missing",
    "invalid_config",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    ``kind`` is stable and drives the exit code; ``message`` and ``hint``
    are for humans.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

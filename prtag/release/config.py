"""Action inputs read from the environment.

GitHub Actions passes ``with:`` inputs as ``INPUT_<NAME>`` variables and
run metadata as ``GITHUB_*`` variables. ``load_config`` turns them into a
typed, validated ``ActionConfig``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from prtag.core.result import Err, Ok, Result
from prtag.release.model import NoLabelPolicy, ReleaseStrategy
from prtag.release.pipeline import DEFAULT_SKIP_LABELS, ReleaseRequest

__all__ = [
    "ActionConfig",
    "ConfigError",
    "load_config",
    "DEFAULT_TAG_FORMAT",
    "DEFAULT_VERSION_RANGE",
    "DEFAULT_RELEASE_STRATEGY",
]

DEFAULT_TAG_FORMAT = "v%major%.%minor%.%patch%"
DEFAULT_VERSION_RANGE = ">=0.0.0"
DEFAULT_RELEASE_STRATEGY: ReleaseStrategy = "release"

_STRATEGIES: dict[str, ReleaseStrategy] = {"release": "release", "tag": "tag", "none": "none"}
_POLICIES: dict[str, NoLabelPolicy] = {"skip": "skip", "fail": "fail"}


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when action inputs are invalid."""

    message: str
    variable: str | None = None


@dataclass(frozen=True, slots=True)
class ActionConfig:
    release_branch: str = ""
    release_strategy: ReleaseStrategy = DEFAULT_RELEASE_STRATEGY
    next_tag: str | None = None
    tag_format: str = DEFAULT_TAG_FORMAT
    version_range: str = DEFAULT_VERSION_RANGE
    # INPUT_CUSTOM_RELEASE_SHA if set, else GITHUB_SHA.
    release_sha: str | None = None
    skip_labels: tuple[str, ...] = DEFAULT_SKIP_LABELS
    on_no_valid_label: NoLabelPolicy = "skip"
    github_api_url: str | None = None
    event_path: str = ""
    repository: str = ""
    token: str | None = None
    output_path: str | None = None

    def to_request(self) -> ReleaseRequest:
        return ReleaseRequest(
            release_branch=self.release_branch,
            event_path=self.event_path,
            repository=self.repository,
            version_range=self.version_range,
            tag_format=self.tag_format,
            strategy=self.release_strategy,
            next_tag=self.next_tag,
            target_commit=self.release_sha,
            skip_labels=self.skip_labels,
            on_no_valid_label=self.on_no_valid_label,
        )


def _get(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key)
    if value is None:
        return None
    s = value.strip()
    return s or None


def _split_labels(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def load_config(environ: Mapping[str, str]) -> Result[ActionConfig, ConfigError]:
    """Build the action config from environment variables.

    Args:
        environ: Usually ``os.environ``; tests pass plain dicts.

    Returns:
        Ok(ActionConfig), or Err(ConfigError) for an unknown strategy or
        no-label policy. Missing branch/event path are left empty for the
        guard to report.
    """
    strategy_raw = _get(environ, "INPUT_RELEASE_STRATEGY") or DEFAULT_RELEASE_STRATEGY
    strategy = _STRATEGIES.get(strategy_raw)
    if strategy is None:
        return Err(
            ConfigError(
                f"invalid release strategy: {strategy_raw!r} (expected release, tag or none)",
                variable="INPUT_RELEASE_STRATEGY",
            )
        )

    policy_raw = _get(environ, "INPUT_ON_NO_VALID_LABEL") or "skip"
    policy = _POLICIES.get(policy_raw)
    if policy is None:
        return Err(
            ConfigError(
                f"invalid no-label policy: {policy_raw!r} (expected skip or fail)",
                variable="INPUT_ON_NO_VALID_LABEL",
            )
        )

    skip_raw = environ.get("INPUT_SKIP_LABELS")
    skip_labels = DEFAULT_SKIP_LABELS if skip_raw is None else _split_labels(skip_raw)

    return Ok(
        ActionConfig(
            release_branch=_get(environ, "INPUT_RELEASE_BRANCH") or "",
            release_strategy=strategy,
            next_tag=_get(environ, "INPUT_NEXT_TAG"),
            tag_format=_get(environ, "INPUT_TAG_FORMAT") or DEFAULT_TAG_FORMAT,
            version_range=_get(environ, "INPUT_VERSION_RANGE") or DEFAULT_VERSION_RANGE,
            release_sha=_get(environ, "INPUT_CUSTOM_RELEASE_SHA") or _get(environ, "GITHUB_SHA"),
            skip_labels=skip_labels,
            on_no_valid_label=policy,
            github_api_url=_get(environ, "INPUT_GITHUB_API_URL"),
            event_path=_get(environ, "GITHUB_EVENT_PATH") or "",
            repository=_get(environ, "GITHUB_REPOSITORY") or "",
            token=_get(environ, "GITHUB_TOKEN"),
            output_path=_get(environ, "GITHUB_OUTPUT"),
        )
    )

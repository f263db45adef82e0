from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from time import sleep
from urllib.parse import urlsplit

from prtag.core.result import Err, Ok, Result
from prtag.platform.process import ProcessError
from prtag.platform.process import run as run_process
from prtag.release.errors import ReleaseError, ReleaseErrorKind
from prtag.release.timeouts import (
    GH_READ_RETRY_ATTEMPTS,
    GH_READ_RETRY_DELAY_SECONDS,
    GH_TIMEOUT_SECONDS,
)

_PUBLIC_API_HOST = "api.github.com"


def _is_transient_gh_error(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "tls handshake timeout",
        "network is unreachable",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    if error.timed_out:
        return True
    return any(marker in text for marker in markers)


def _is_not_found(error: ProcessError) -> bool:
    return "http 404" in f"{error.stderr}\n{error.stdout}".lower()


@dataclass(frozen=True, slots=True)
class GhContext:
    """Where and as whom gh runs.

    ``environ`` is the base environment handed to gh (the current process
    environment if None); the token and host overrides are layered on top.
    """

    cwd: Path
    token: str | None = None
    host: str | None = None
    environ: Mapping[str, str] | None = None

    def env(self) -> dict[str, str]:
        out = dict(os.environ if self.environ is None else self.environ)
        if self.token:
            out["GH_TOKEN"] = self.token
        if self.host:
            out["GH_HOST"] = self.host
        return out


def gh_host_from_api_url(api_url: str | None) -> str | None:
    """Host gh should target for a GitHub API URL; None for github.com.

    ``https://ghe.example.com/api/v3`` -> ``ghe.example.com``.
    """
    if not api_url:
        return None
    host = urlsplit(api_url).hostname
    if host is None or host == _PUBLIC_API_HOST:
        return None
    return host


def parse_repository(repository: str) -> Result[tuple[str, str], ReleaseError]:
    parts = repository.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return Err(
            ReleaseError(
                kind="invalid_config",
                message=f"invalid repository format: {repository!r}",
                hint="Expected: owner/name",
            )
        )
    return Ok((parts[0], parts[1]))


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="gh_missing",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


def run_gh_read(
    *,
    ctx: GhContext,
    cmd: list[str],
    kind: ReleaseErrorKind,
    message: str,
    hint: str | None = None,
    timeout: float = GH_TIMEOUT_SECONDS,
    retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
) -> Result[str, ProcessError | ReleaseError]:
    """Run an idempotent gh command, retrying transient failures.

    A non-transient failure is returned as the raw ProcessError so callers
    can recognise conditions such as HTTP 404; exhausted retries become a
    ReleaseError of ``kind``.
    """
    available = ensure_gh_available()
    if isinstance(available, Err):
        return available

    attempts = max(1, retry_attempts)
    for attempt in range(attempts):
        result = run_process(cmd, cwd=ctx.cwd, env=ctx.env(), timeout=timeout)
        if isinstance(result, Ok):
            return result

        error = result.error
        if not _is_transient_gh_error(error):
            return result
        if attempt < attempts - 1:
            sleep(GH_READ_RETRY_DELAY_SECONDS * (attempt + 1))
            continue

        return Err(
            ReleaseError(
                kind=kind,
                message=message,
                hint=error.stderr.strip() or hint,
            )
        )

    return Err(ReleaseError(kind=kind, message=message, hint=hint))


def run_gh_write(
    *,
    ctx: GhContext,
    cmd: list[str],
    message: str,
    timeout: float = GH_TIMEOUT_SECONDS,
) -> Result[None, ReleaseError]:
    available = ensure_gh_available()
    if isinstance(available, Err):
        return available

    result = run_process(cmd, cwd=ctx.cwd, env=ctx.env(), timeout=timeout)
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="publish_error",
                message=message,
                hint=result.error.stderr.strip() or None,
            )
        )
    return Ok(None)


@dataclass(frozen=True, slots=True)
class GhRefLister:
    ctx: GhContext

    def list_tags(self, repository: str) -> Result[list[str], ReleaseError]:
        repo = parse_repository(repository)
        if isinstance(repo, Err):
            return repo
        owner, name = repo.value

        message = f"failed to list tags: {repository}"
        result = run_gh_read(
            ctx=self.ctx,
            cmd=[
                "gh",
                "api",
                "--paginate",
                f"repos/{owner}/{name}/git/matching-refs/tags",
                "--jq",
                ".[].ref",
            ],
            kind="ref_list_failed",
            message=message,
            hint=repository,
        )
        if isinstance(result, Err):
            error = result.error
            if isinstance(error, ReleaseError):
                return Err(error)
            # A repository without any tag answers 404: same as no tags.
            if _is_not_found(error):
                return Ok([])
            return Err(
                ReleaseError(
                    kind="ref_list_failed",
                    message=message,
                    hint=error.stderr.strip() or repository,
                )
            )

        return Ok([line.strip() for line in result.value.splitlines() if line.strip()])


@dataclass(frozen=True, slots=True)
class GhReleasePublisher:
    ctx: GhContext
    repository: str

    def _endpoint(self, path: str) -> Result[str, ReleaseError]:
        repo = parse_repository(self.repository)
        if isinstance(repo, Err):
            return repo
        owner, name = repo.value
        return Ok(f"repos/{owner}/{name}/{path}")

    def create_release(self, tag: str, target: str) -> Result[None, ReleaseError]:
        endpoint = self._endpoint("releases")
        if isinstance(endpoint, Err):
            return endpoint
        return run_gh_write(
            ctx=self.ctx,
            cmd=[
                "gh",
                "api",
                "-X",
                "POST",
                endpoint.value,
                "-f",
                f"tag_name={tag}",
                "-f",
                f"name={tag}",
                "-f",
                f"target_commitish={target}",
                "-F",
                "draft=false",
                "-F",
                "prerelease=false",
            ],
            message=f"failed to create release {tag} in {self.repository}",
        )

    def create_tag(self, tag: str, target: str) -> Result[None, ReleaseError]:
        endpoint = self._endpoint("git/refs")
        if isinstance(endpoint, Err):
            return endpoint
        return run_gh_write(
            ctx=self.ctx,
            cmd=[
                "gh",
                "api",
                "-X",
                "POST",
                endpoint.value,
                "-f",
                f"ref=refs/tags/{tag}",
                "-f",
                f"sha={target}",
            ],
            message=f"failed to create tag {tag} in {self.repository}",
        )

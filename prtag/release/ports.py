"""Collaborators the release pipeline talks to.

Production implementations live in ``prtag.release.event`` (webhook file)
and ``prtag.release.gh`` (GitHub via the gh CLI). Tests inject in-memory
fakes that satisfy the same protocols.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from prtag.core.result import Result
from prtag.release.errors import ReleaseError
from prtag.release.model import PullRequestEvent

__all__ = ["EventSource", "RefLister", "ReleasePublisher"]


@runtime_checkable
class EventSource(Protocol):
    def parse(self, path: Path) -> Result[PullRequestEvent, ReleaseError]:
        """Read a pull_request webhook payload.

        Errors use kind ``event_parse_error``.
        """
        ...


@runtime_checkable
class RefLister(Protocol):
    def list_tags(self, repository: str) -> Result[list[str], ReleaseError]:
        """List raw tag refs (``refs/tags/v1.2.3``) of ``owner/name``.

        A repository without tags yields ``Ok([])``, not an error.
        """
        ...


@runtime_checkable
class ReleasePublisher(Protocol):
    def create_release(self, tag: str, target: str) -> Result[None, ReleaseError]:
        """Create a published (non-draft, non-prerelease) release for ``tag`` at ``target``."""
        ...

    def create_tag(self, tag: str, target: str) -> Result[None, ReleaseError]:
        """Create a lightweight ``refs/tags/<tag>`` pointing at ``target``."""
        ...

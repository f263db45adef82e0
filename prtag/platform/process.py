"""Child processes as values.

Only the gh adapters shell out. ``run`` hands back the child's stdout on
exit status 0 and a ``ProcessError`` carrying stderr otherwise, so a failed
``gh api`` call is inspected (404, 5xx, rate limit) instead of caught.
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from prtag.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "NOT_STARTED"]

# Exit status recorded when the child never ran or was killed on timeout.
NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    def __str__(self) -> str:
        shown = list(self.command[:3])
        if len(self.command) > 3:
            shown.append("...")
        return f"{' '.join(shown)} failed (exit {self.returncode})"


def _text(raw: str | bytes | None) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def run(
    cmd: list[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run ``cmd`` in ``cwd`` and capture its output as text.

    ``env`` replaces the child environment entirely; None inherits ours.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=None if env is None else dict(env),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=command,
                returncode=NOT_STARTED,
                stdout=_text(e.stdout),
                stderr=f"Command timed out after {timeout}s",
                timed_out=True,
            )
        )
    except OSError as e:
        return Err(ProcessError(command=command, returncode=NOT_STARTED, stdout="", stderr=str(e)))

    if proc.returncode == 0:
        return Ok(proc.stdout)
    return Err(
        ProcessError(
            command=command,
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
    )

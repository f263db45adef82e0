"""Step outputs for GitHub Actions.

Outputs are appended as ``name=value`` lines to the file named by
``GITHUB_OUTPUT``; later steps read them as ``steps.<id>.outputs.<name>``.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from uuid import uuid4

from prtag.core.result import Err, Ok, Result

__all__ = ["write_outputs"]


def _format(name: str, value: str) -> str:
    if "\n" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid4().hex}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(path: Path, outputs: Mapping[str, str]) -> Result[None, str]:
    try:
        with path.open("a", encoding="utf-8") as fh:
            for name, value in outputs.items():
                fh.write(_format(name, value))
    except OSError as e:
        return Err(f"cannot write step outputs to {path}: {e}")
    return Ok(None)

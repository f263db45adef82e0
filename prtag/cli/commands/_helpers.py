"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from prtag.core.errors import ErrorCode
from prtag.output.console import ConsoleProtocol
from prtag.release.errors import ReleaseError, ReleaseErrorKind


def release_error_code(kind: ReleaseErrorKind) -> ErrorCode:
    if kind == "gh_missing":
        return ErrorCode.ENV_ERROR
    if kind in {"ref_list_failed", "publish_error"}:
        return ErrorCode.NETWORK_ERROR
    if kind == "event_parse_error":
        return ErrorCode.IO_ERROR
    return ErrorCode.USER_ERROR


def exit_release(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}")
    raise typer.Exit(code=int(release_error_code(error.kind)))

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from prtag.core.errors import ErrorCode
from prtag.core.result import Err
from prtag.output.console import ActionsConsole, ConsoleProtocol, RichConsole
from prtag.release.config import ActionConfig, load_config
from prtag.release.gh import GhContext, gh_host_from_api_url


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ActionConfig
    console: ConsoleProtocol
    gh: GhContext


def select_console(environ: Mapping[str, str]) -> ConsoleProtocol:
    if environ.get("GITHUB_ACTIONS") == "true":
        return ActionsConsole()
    return RichConsole()


def build_context(environ: Mapping[str, str] | None = None) -> CLIContext:
    env = os.environ if environ is None else environ
    console = select_console(env)

    config_result = load_config(env)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    return CLIContext(
        config=config,
        console=console,
        gh=GhContext(
            cwd=Path.cwd(),
            token=config.token,
            host=gh_host_from_api_url(config.github_api_url),
            environ=dict(env),
        ),
    )

from __future__ import annotations

from pathlib import Path

import typer

from prtag.cli.commands._helpers import exit_release
from prtag.cli.context import build_context
from prtag.core.errors import ErrorCode
from prtag.core.result import Err
from prtag.output.actions import write_outputs
from prtag.output.console import Style
from prtag.release.event import JsonEventSource
from prtag.release.gh import GhRefLister, GhReleasePublisher
from prtag.release.model import Skipped
from prtag.release.pipeline import decide_release


def run() -> None:
    """Decide and publish the release for the pull request that triggered the workflow."""
    ctx = build_context()
    config = ctx.config
    console = ctx.console

    console.print(
        f"release_branch={config.release_branch!r} strategy={config.release_strategy} "
        f"range={config.version_range!r} format={config.tag_format!r}",
        Style.DIM,
    )

    result = decide_release(
        config.to_request(),
        events=JsonEventSource(),
        refs=GhRefLister(ctx.gh),
        publisher=GhReleasePublisher(ctx.gh, config.repository),
        console=console,
    )
    if isinstance(result, Err):
        exit_release(result.error, console)

    outcome = result.value
    if isinstance(outcome, Skipped):
        return

    if config.output_path is not None:
        written = write_outputs(
            Path(config.output_path),
            {"tag": outcome.next_tag, "increment": outcome.increment, "action": outcome.action},
        )
        if isinstance(written, Err):
            console.error(written.error)
            raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    console.success(
        f"strategy={config.release_strategy} current={outcome.current_tag or '-'} "
        f"next={outcome.next_tag} increment={outcome.increment} action={outcome.action}"
    )

"""Single-step commands for local debugging of a release decision."""

from __future__ import annotations

from pathlib import Path

import typer

from prtag.cli.commands._helpers import exit_release
from prtag.cli.context import build_context
from prtag.core.result import Err
from prtag.release.event import JsonEventSource, read_event
from prtag.release.gh import GhRefLister
from prtag.release.guard import Fail, Skip, run_guard
from prtag.release.labels import extract_increment
from prtag.release.semver import DEFAULT_TAG_FORMAT, bump_and_format
from prtag.release.tags import latest_tag as resolve_latest_tag


def guard(
    branch: str = typer.Option(..., "--branch", help="Release branch the PR must target."),
    event: Path = typer.Option(..., "--event", help="pull_request webhook payload (JSON)."),
    fail_without_label: bool = typer.Option(
        False,
        "--fail-without-label",
        help="Treat a missing/ambiguous semver label as an error instead of a skip.",
    ),
) -> None:
    """Check whether a pull_request event is a release trigger."""
    ctx = build_context()
    decision = run_guard(
        release_branch=branch,
        event_path=str(event),
        events=JsonEventSource(),
        on_no_valid_label="fail" if fail_without_label else "skip",
    )
    if isinstance(decision, Fail):
        exit_release(decision.error, ctx.console)
    if isinstance(decision, Skip):
        typer.echo(f"skip: {decision.reason}")
        ctx.console.info(decision.message)
        return
    typer.echo("proceed")


def increment(
    event: Path = typer.Option(..., "--event", help="pull_request webhook payload (JSON)."),
) -> None:
    """Print the semver increment carried by the pull request labels."""
    ctx = build_context()
    parsed = read_event(event)
    if isinstance(parsed, Err):
        exit_release(parsed.error, ctx.console)

    inc = extract_increment(parsed.value.label_names)
    if isinstance(inc, Err):
        exit_release(inc.error, ctx.console)
    typer.echo(inc.value)


def latest_tag(
    repo: str = typer.Option(..., "--repo", help="Repository as owner/name."),
    version_range: str = typer.Option(">=0.0.0", "--range", help="Version range to search."),
) -> None:
    """Print the highest existing version tag inside a range (0.0.0 if none)."""
    ctx = build_context()
    latest = resolve_latest_tag(GhRefLister(ctx.gh), repository=repo, range_expr=version_range)
    if isinstance(latest, Err):
        exit_release(latest.error, ctx.console)
    typer.echo(str(latest.value))


def next_tag(
    version: str = typer.Argument(..., help="Current version, MAJOR.MINOR.PATCH."),
    increment: str = typer.Argument(..., help="major, minor or patch."),
    tag_format: str = typer.Option(DEFAULT_TAG_FORMAT, "--format", help="Tag template."),
) -> None:
    """Bump a version and render it with a tag template."""
    ctx = build_context()
    result = bump_and_format(version, increment, tag_format)
    if isinstance(result, Err):
        exit_release(result.error, ctx.console)
    typer.echo(result.value)

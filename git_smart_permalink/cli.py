"""Typer-based CLI for git-smart-permalink."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .candidates import build_permalink_candidates
from .config import load_settings
from .exceptions import PermalinkError, ValidationError
from .interactive import pick_candidate
from .models import PermalinkCandidate, SelectedLines, Settings

app = typer.Typer(
    help="Open files of a local git checkout on GitHub or Bitbucket",
    add_completion=False,
    no_args_is_help=True,
)

_LINES_RE = re.compile(r"^\s*(\d+)\s*(?:-\s*(\d+)\s*)?$")


@dataclass(slots=True)
class AppState:
    settings: Settings
    console: Console
    verbose: bool = False


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def parse_lines(value: str) -> SelectedLines:
    """Parse ``10`` or ``10-15`` into a selection."""

    match = _LINES_RE.match(value)
    if not match:
        raise ValidationError(f"Invalid line selection '{value}'. Use N or N-M.")
    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else None
    if start < 1:
        raise ValidationError("Line numbers start at 1.")
    if end is not None and end < start:
        raise ValidationError(f"Line range end {end} is before start {start}.")
    return SelectedLines(start=start, end=end)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-smart-permalink {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    repo_type: Optional[str] = typer.Option(
        None,
        "--repo-type",
        "-t",
        help="auto, github, bitbucket or bitbucket-server (env: GIT_PERMALINK_REPOSITORY_TYPE).",
    ),
    default_branch: Optional[str] = typer.Option(None, "--default-branch", help="Default branch name."),
    default_remote: Optional[str] = typer.Option(None, "--default-remote", help="Default remote name."),
    max_buffer: Optional[int] = typer.Option(
        None, "--max-buffer", min=1, help="Maximum size in bytes of the branch listing."
    ),
    exclude_current_revision: Optional[bool] = typer.Option(
        None,
        "--exclude-current-revision/--include-current-revision",
        help="Skip the commit-pinned link for HEAD.",
    ),
    unset_git_dir: Optional[bool] = typer.Option(
        None, "--unset-git-dir/--keep-git-dir", help="Drop GIT_DIR from the environment before running git."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the git-smart-permalink version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    configure_logging(verbose)
    console = Console()
    try:
        settings = load_settings(
            repository_type=repo_type,
            default_branch=default_branch,
            default_remote=default_remote,
            max_buffer=max_buffer,
            exclude_current_revision=exclude_current_revision,
            unset_git_dir=unset_git_dir,
        )
    except PermalinkError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc
    ctx.obj = AppState(settings=settings, console=console, verbose=verbose)


def _require_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if not isinstance(state, AppState):  # pragma: no cover
        raise typer.Exit(1)
    return state


@app.command("file", help="Open a file on the hosting provider")
def file_(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File inside a git working copy."),
    print_only: bool = typer.Option(False, "--print", "-p", help="Print the URL instead of opening it."),
) -> None:
    state = _require_state(ctx)
    _open(state, path, None, "file", print_only)


@app.command(help="Open the selected lines of a file on the hosting provider")
def lines(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File inside a git working copy."),
    selection: str = typer.Option(..., "--lines", "-l", help="Line or range, e.g. 10 or 10-15."),
    print_only: bool = typer.Option(False, "--print", "-p", help="Print the URL instead of opening it."),
) -> None:
    state = _require_state(ctx)
    _open(state, path, selection, "lines", print_only)


@app.command(help="List every permalink candidate for a file")
def ls(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File inside a git working copy."),
    selection: Optional[str] = typer.Option(None, "--lines", "-l", help="Line or range, e.g. 10 or 10-15."),
    as_json: bool = typer.Option(False, "--json", help="Output JSON for scripting."),
) -> None:
    state = _require_state(ctx)
    command_name = "lines" if selection else "file"
    candidates = _resolve(state, path, selection, command_name)
    if as_json:
        typer.echo(json.dumps([item.as_dict() for item in candidates], indent=2))
        return
    if not candidates:
        state.console.print("No branch of this file is pushed to a remote.")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Branch | Remote")
    table.add_column("URL", overflow="fold")
    for item in candidates:
        table.add_row(item.detail, item.url)
    state.console.print(table)


def _resolve(state: AppState, path: Path, selection: str | None, command_name: str) -> list[PermalinkCandidate]:
    try:
        target = path.expanduser()
        if not target.is_file():
            raise ValidationError(f"File not found: {target}")
        selected = parse_lines(selection) if selection else None
        return build_permalink_candidates(
            target.resolve(),
            None,
            selected,
            state.settings,
            command_name=command_name,
        )
    except PermalinkError as exc:
        _fail(state.console, str(exc))


def _open(state: AppState, path: Path, selection: str | None, command_name: str, print_only: bool) -> None:
    candidates = _resolve(state, path, selection, command_name)
    if not candidates:
        state.console.print("No branch of this file is pushed to a remote.")
        return
    try:
        chosen = pick_candidate(candidates)
    except PermalinkError as exc:
        _fail(state.console, str(exc))
    if chosen is None:
        return
    if print_only:
        typer.echo(chosen.url)
        return
    state.console.print(f"Opening {chosen.url}")
    typer.launch(chosen.url)


def _fail(console: Console, message: str, code: int = 1) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code)


if __name__ == "__main__":
    app()

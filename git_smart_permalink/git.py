"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Protocol, Sequence

from .exceptions import GitCommandError

logger = logging.getLogger(__name__)


class GitExec(Protocol):
    """Runs ``git <args>`` in ``cwd`` and returns raw stdout."""

    def __call__(self, args: Sequence[str], *, cwd: Path, max_buffer: int | None = None) -> str:
        ...


def run_git(
    args: Sequence[str],
    *,
    cwd: Path,
    max_buffer: int | None = None,
    unset_git_dir: bool = False,
) -> str:
    """Execute a git command and return stdout.

    Fails on a non-zero exit, on any stderr output and when stdout is larger
    than ``max_buffer`` bytes.
    """

    command = ["git", *args]
    logger.debug("Running command: %s (cwd=%s)", " ".join(command), cwd)
    env = None
    if unset_git_dir:
        env = {key: value for key, value in os.environ.items() if key != "GIT_DIR"}
    try:
        proc = subprocess.run(
            command,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise GitCommandError(command, -1, stderr=str(exc)) from exc
    if proc.returncode != 0 or proc.stderr.strip():
        raise GitCommandError(command, proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
    if max_buffer is not None and len(proc.stdout.encode()) > max_buffer:
        raise GitCommandError(
            command,
            proc.returncode,
            stdout=proc.stdout,
            stderr=f"stdout maxBuffer length exceeded ({max_buffer} bytes)",
        )
    return proc.stdout


def make_exec(*, unset_git_dir: bool = False) -> GitExec:
    """Bind ``run_git`` into the ``GitExec`` shape the resolvers expect."""

    def _exec(args: Sequence[str], *, cwd: Path, max_buffer: int | None = None) -> str:
        return run_git(args, cwd=cwd, max_buffer=max_buffer, unset_git_dir=unset_git_dir)

    return _exec


def repo_root(exec_git: GitExec, path: Path) -> Path:
    return Path(exec_git(["rev-parse", "--show-toplevel"], cwd=path).strip())


def current_revision(exec_git: GitExec, path: Path) -> str:
    return exec_git(["rev-parse", "HEAD"], cwd=path).strip()


def list_branches(exec_git: GitExec, path: Path, max_buffer: int | None = None) -> str:
    return exec_git(["branch", "--no-color", "-a"], cwd=path, max_buffer=max_buffer)


def list_remotes(exec_git: GitExec, path: Path) -> str:
    return exec_git(["remote", "-v"], cwd=path)


def remote_url(exec_git: GitExec, path: Path, name: str) -> str:
    return exec_git(["config", "--get", f"remote.{name}.url"], cwd=path)


__all__ = [
    "GitExec",
    "run_git",
    "make_exec",
    "repo_root",
    "current_revision",
    "list_branches",
    "list_remotes",
    "remote_url",
]

"""Combine remotes and branches into the ordered list of permalink candidates."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence

from . import git
from .branches import resolve_branches
from .exceptions import GitCommandError, RepoDetectionError
from .formatters import choose_formatter
from .git import GitExec
from .models import PermalinkCandidate, RepositoryType, SelectedLines, Settings
from .remotes import resolve_remotes

logger = logging.getLogger(__name__)


def format_candidates(
    repository_type: RepositoryType,
    command_name: str,
    relative_path: str,
    lines: SelectedLines | None,
    remotes: Sequence[str],
    branch: str,
) -> list[PermalinkCandidate]:
    """One candidate per remote, in remote order, for a single branch."""

    return [
        PermalinkCandidate(
            label=relative_path,
            detail=f"{branch} | {remote}",
            description=f"[{command_name}]",
            url=choose_formatter(repository_type, remote)(remote, branch, relative_path, lines),
        )
        for remote in remotes
    ]


def interleave(groups: Sequence[Sequence[PermalinkCandidate]]) -> list[PermalinkCandidate]:
    """Flatten per-branch groups by remote position.

    ``[[a1, a2], [b1, b2]]`` becomes ``[a1, b1, a2, b2]`` so links for the same
    remote stay adjacent.
    """

    return [item for column in zip(*groups) for item in column]


def prepare_candidates(
    repository_type: RepositoryType,
    command_name: str,
    relative_path: str,
    lines: SelectedLines | None,
    remotes: Sequence[str],
    branches: Sequence[str],
) -> list[PermalinkCandidate]:
    if not branches:
        return []
    if len(branches) == 1:
        return format_candidates(repository_type, command_name, relative_path, lines, remotes, branches[0])
    groups = [
        format_candidates(repository_type, command_name, relative_path, lines, remotes, branch)
        for branch in branches
    ]
    return interleave(groups)


def relative_file_path(file_path: Path, root: Path) -> str:
    relative = os.path.relpath(file_path.resolve(), root.resolve())
    return Path(relative).as_posix()


def build_permalink_candidates(
    file_path: Path,
    project_root: Path | None,
    selection: SelectedLines | None,
    settings: Settings,
    *,
    command_name: str,
    exec_git: GitExec | None = None,
) -> list[PermalinkCandidate]:
    """Resolve every permalink candidate for ``file_path``.

    ``project_root`` is the directory git runs in; it defaults to the file's
    parent directory. Any git failure aborts the whole resolution.
    """

    exec_git = exec_git or git.make_exec(unset_git_dir=settings.unset_git_dir)
    cwd = project_root or file_path.parent
    try:
        root = git.repo_root(exec_git, cwd)
    except GitCommandError as exc:
        raise RepoDetectionError(f"Unable to find repo root: {exc}") from exc
    relative_path = relative_file_path(file_path, root)

    branches = resolve_branches(
        exec_git,
        cwd,
        settings.default_branch,
        max_buffer=settings.max_buffer,
        exclude_current_revision=settings.exclude_current_revision,
    )
    if not branches:
        logger.debug("No branch of %s is pushed to a remote", relative_path)
        return []

    remotes = resolve_remotes(
        exec_git,
        cwd,
        default_remote=settings.default_remote,
        default_branch=settings.default_branch,
        branches=branches,
    )
    logger.debug("Resolved branches %s against remotes %s", branches, remotes)
    return prepare_candidates(
        settings.repository_type,
        command_name,
        relative_path,
        selection,
        remotes,
        branches,
    )


__all__ = [
    "format_candidates",
    "interleave",
    "prepare_candidates",
    "relative_file_path",
    "build_permalink_candidates",
]

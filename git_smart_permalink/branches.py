"""Work out which branches (and revision) a permalink can point at."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from . import git
from .git import GitExec
from .remotes import dedupe

logger = logging.getLogger(__name__)


def current_branch(listing: str) -> str | None:
    """Name of the ``*``-marked branch in ``git branch`` output."""

    for line in listing.split("\n"):
        if line.startswith("*"):
            name = line.replace("*", "", 1).strip()
            return name or None
    return None


def remote_refs(listing: str) -> list[str]:
    """Remote-tracking refs (``remotes/<remote>/<branch>``) from the listing."""

    refs: list[str] = []
    for raw in listing.split("\n"):
        line = raw.lstrip("*").strip()
        ref = line.split(" -> ", 1)[0].strip()
        if ref.startswith("remotes/"):
            refs.append(ref)
    return refs


def is_pushed(branch: str, refs: list[str]) -> bool:
    pattern = re.compile(rf"remotes/.+/{re.escape(branch)}")
    return any(pattern.fullmatch(ref) for ref in refs)


def filter_pushed(candidates: list[str], listing: str) -> list[str]:
    refs = remote_refs(listing)
    pushed = [branch for branch in candidates if is_pushed(branch, refs)]
    skipped = [branch for branch in candidates if branch not in pushed]
    if skipped:
        logger.debug("Ignoring branches not pushed to any remote: %s", ", ".join(skipped))
    return pushed


def relevant_branches(listing: str, default_branch: str) -> list[str]:
    """Current and default branch, limited to those present on some remote."""

    current = current_branch(listing)
    logger.debug("Current branch: %s", current or "(none)")
    candidates = dedupe(branch for branch in (current, default_branch) if branch)
    return filter_pushed(candidates, listing)


def resolve_branches(
    exec_git: GitExec,
    path: Path,
    default_branch: str,
    *,
    max_buffer: int | None = None,
    exclude_current_revision: bool = False,
) -> list[str]:
    """Relevant branches, followed by the HEAD commit unless excluded."""

    listing = git.list_branches(exec_git, path, max_buffer=max_buffer)
    branches = relevant_branches(listing, default_branch)
    if exclude_current_revision:
        return branches
    return branches + [git.current_revision(exec_git, path)]


__all__ = [
    "current_branch",
    "remote_refs",
    "is_pushed",
    "filter_pushed",
    "relevant_branches",
    "resolve_branches",
]

"""Normalize git remote URLs into canonical https web URLs."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Sequence, TypeVar

from . import git
from .git import GitExec

logger = logging.getLogger(__name__)

T = TypeVar("T")

_HTTP_RE = re.compile(r"^https?:")
_FTP_RE = re.compile(r"^ftps?:")
_GIT_SUFFIX_RE = re.compile(r"\.git/?$")
_CREDENTIALS_RE = re.compile(r"^([a-z][a-z0-9+.-]*://)[^/]*@", re.IGNORECASE)


def dedupe(items: Iterable[T]) -> list[T]:
    """Drop repeated items, keeping the first occurrence."""

    seen: set[T] = set()
    result: list[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def split_remote_lines(output: str) -> list[str]:
    return [line for line in output.split("\n") if line.strip()]


def extract_remote_url(line: str) -> str | None:
    """Pull the URL out of a ``<name>\\t<url> (fetch)`` line."""

    fields = line.split("\t")
    if len(fields) < 2:
        return None
    url = fields[1].split(" ")[0].strip()
    return url or None


def parse_remote_listing(output: str) -> list[str]:
    """Raw, de-duplicated URLs from ``git remote -v`` output."""

    urls = (extract_remote_url(line) for line in split_remote_lines(output))
    return dedupe(url for url in urls if url)


def strip_git_suffix(url: str) -> str:
    return _GIT_SUFFIX_RE.sub("", url)


def strip_credentials(url: str) -> str:
    return _CREDENTIALS_RE.sub(r"\1", url)


def canonicalize_remote(raw: str) -> str | None:
    """Turn one remote URL into ``https://host/owner/repo`` or None if unrecognized."""

    remote = raw.strip()
    if _HTTP_RE.match(remote):
        remote = strip_git_suffix(remote)
    elif "@" in remote:
        remote = "https://" + strip_git_suffix(remote.rsplit("@", 1)[1]).replace(":", "/")
    elif _FTP_RE.match(remote):
        remote = "http" + strip_git_suffix(remote)[len("ftp"):]
    elif remote.startswith("ssh:"):
        remote = "https" + strip_git_suffix(remote)[len("ssh"):]
    elif remote.startswith("git:"):
        remote = "https" + strip_git_suffix(remote)[len("git"):]
    else:
        if remote:
            logger.debug("Dropping remote with unrecognized scheme: %s", remote)
        return None

    remote = strip_credentials(remote)
    if "github.com" in remote:
        remote = strip_git_suffix(remote)
    remote = remote.rstrip("/")
    return remote or None


def format_remotes(remotes: Iterable[str]) -> list[str]:
    """Canonicalize every remote and de-duplicate the result."""

    canonical = (canonicalize_remote(remote) for remote in remotes)
    return dedupe(remote for remote in canonical if remote)


def get_all_remotes(exec_git: GitExec, path: Path) -> list[str]:
    return parse_remote_listing(git.list_remotes(exec_git, path))


def get_remote_by_name(exec_git: GitExec, path: Path, name: str) -> list[str]:
    return [git.remote_url(exec_git, path, name)]


def select_remotes(
    exec_git: GitExec,
    path: Path,
    *,
    default_remote: str,
    default_branch: str,
    branches: Sequence[str],
) -> list[str]:
    """Raw remotes worth linking to for the resolved branches.

    When only the default branch is relevant there is nothing to disambiguate,
    so only the default remote is consulted.
    """

    if list(branches) == [default_branch]:
        logger.debug("Only %s is relevant; using remote %s", default_branch, default_remote)
        return get_remote_by_name(exec_git, path, default_remote)
    return get_all_remotes(exec_git, path)


def resolve_remotes(
    exec_git: GitExec,
    path: Path,
    *,
    default_remote: str,
    default_branch: str,
    branches: Sequence[str],
) -> list[str]:
    raw = select_remotes(
        exec_git,
        path,
        default_remote=default_remote,
        default_branch=default_branch,
        branches=branches,
    )
    return format_remotes(raw)


__all__ = [
    "dedupe",
    "split_remote_lines",
    "extract_remote_url",
    "parse_remote_listing",
    "strip_git_suffix",
    "strip_credentials",
    "canonicalize_remote",
    "format_remotes",
    "get_all_remotes",
    "get_remote_by_name",
    "select_remotes",
    "resolve_remotes",
]

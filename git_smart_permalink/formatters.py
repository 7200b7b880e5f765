"""Provider-specific permalink formatting."""

from __future__ import annotations

import posixpath
from typing import Callable, Optional
from urllib.parse import quote

from .models import RepositoryType, SelectedLines

Formatter = Callable[[str, str, str, Optional[SelectedLines]], str]


def format_branch_name(branch: str) -> str:
    """Percent-encode each ``/``-separated segment of a branch name."""

    return "/".join(quote(segment, safe="") for segment in branch.split("/"))


def is_bitbucket(remote: str) -> bool:
    return "bitbucket.org" in remote


def github_line_pointer(lines: SelectedLines | None) -> str:
    if not lines or not lines.start:
        return ""
    pointer = f"#L{lines.start}"
    if lines.is_range:
        pointer += f"-L{lines.end}"
    return pointer


def bitbucket_line_pointer(file_path: str, lines: SelectedLines | None) -> str:
    if not lines or not lines.start:
        return ""
    pointer = f"#{posixpath.basename(file_path)}-{lines.start}"
    if lines.is_range:
        pointer += f":{lines.end}"
    return pointer


def bitbucket_server_line_pointer(lines: SelectedLines | None) -> str:
    if not lines or not lines.start:
        return ""
    pointer = f"#{lines.start}"
    if lines.is_range:
        pointer += f"-{lines.end}"
    return pointer


def format_github(remote: str, branch: str, file_path: str, lines: SelectedLines | None = None) -> str:
    return f"{remote}/blob/{format_branch_name(branch)}/{file_path}{github_line_pointer(lines)}"


def format_bitbucket(remote: str, branch: str, file_path: str, lines: SelectedLines | None = None) -> str:
    return f"{remote}/src/{format_branch_name(branch)}/{file_path}{bitbucket_line_pointer(file_path, lines)}"


def split_bitbucket_server_remote(remote: str) -> tuple[str, str, str]:
    """Split a canonical remote into ``(prefix, project, repo)``.

    Clone URLs carry an ``scm`` segment (https) or the SSH port (ssh) in front
    of the project key; neither belongs in the browse URL.
    """

    prefix, project, repo = remote.rsplit("/", 2)
    head, _, last = prefix.rpartition("/")
    if not head.endswith(":/") and (last == "scm" or last.isdigit()):
        prefix = head
    return prefix, project, repo


def format_bitbucket_server(
    remote: str, branch: str, file_path: str, lines: SelectedLines | None = None
) -> str:
    prefix, project, repo = split_bitbucket_server_remote(remote)
    return (
        f"{prefix}/projects/{project}/repos/{repo}/browse/{file_path}"
        f"?at={quote(branch, safe='')}{bitbucket_server_line_pointer(lines)}"
    )


FORMATTERS: dict[RepositoryType, Formatter] = {
    RepositoryType.GITHUB: format_github,
    RepositoryType.BITBUCKET: format_bitbucket,
    RepositoryType.BITBUCKET_SERVER: format_bitbucket_server,
}


def choose_formatter(repository_type: RepositoryType, remote: str) -> Formatter:
    if repository_type is RepositoryType.AUTO:
        return format_bitbucket if is_bitbucket(remote) else format_github
    return FORMATTERS[repository_type]


__all__ = [
    "Formatter",
    "format_branch_name",
    "is_bitbucket",
    "github_line_pointer",
    "bitbucket_line_pointer",
    "bitbucket_server_line_pointer",
    "format_github",
    "format_bitbucket",
    "format_bitbucket_server",
    "split_bitbucket_server_remote",
    "FORMATTERS",
    "choose_formatter",
]

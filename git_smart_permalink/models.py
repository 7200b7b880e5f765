"""Shared dataclasses used throughout the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RepositoryType(str, Enum):
    """Which hosting provider URL scheme to produce."""

    AUTO = "auto"
    GITHUB = "github"
    BITBUCKET = "bitbucket"
    BITBUCKET_SERVER = "bitbucket-server"


@dataclass(frozen=True, slots=True)
class SelectedLines:
    """A 1-indexed line selection. ``end`` is optional."""

    start: int
    end: int | None = None

    @property
    def is_range(self) -> bool:
        return self.end is not None and self.end != self.start


@dataclass(frozen=True, slots=True)
class PermalinkCandidate:
    """One entry offered to the user; only ``url`` matters once picked."""

    label: str
    detail: str
    description: str
    url: str

    def as_dict(self) -> dict[str, str]:
        return {
            "label": self.label,
            "detail": self.detail,
            "description": self.description,
            "url": self.url,
        }


@dataclass(frozen=True, slots=True)
class Settings:
    repository_type: RepositoryType = RepositoryType.AUTO
    default_branch: str = "master"
    default_remote: str = "origin"
    max_buffer: int | None = None
    exclude_current_revision: bool = False
    unset_git_dir: bool = False


__all__ = [
    "RepositoryType",
    "SelectedLines",
    "PermalinkCandidate",
    "Settings",
]

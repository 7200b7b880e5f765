"""Custom error hierarchy for git-smart-permalink."""

from __future__ import annotations


class PermalinkError(RuntimeError):
    """Base error for the CLI."""


class GitCommandError(PermalinkError):
    """Raised when an underlying git command fails or writes to stderr."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        message = f"git command failed (exit {returncode}): {' '.join(command)}"
        details = self.stderr.strip()
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


class RepoDetectionError(PermalinkError):
    """Raised when the repository root cannot be resolved."""


class ValidationError(PermalinkError):
    """Raised when configuration or user input fails validation."""


class UserAbort(PermalinkError):
    """Raised when the user cancels an interactive flow."""


__all__ = [
    "PermalinkError",
    "GitCommandError",
    "RepoDetectionError",
    "ValidationError",
    "UserAbort",
]

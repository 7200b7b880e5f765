"""Interactive prompt helpers built on InquirerPy."""

from __future__ import annotations

import sys
from typing import Sequence

from InquirerPy import inquirer
from InquirerPy.base.control import Choice

from .exceptions import UserAbort, ValidationError
from .models import PermalinkCandidate


def _ensure_tty() -> None:
    if not sys.stdin.isatty():
        raise ValidationError(
            "Several permalinks match and picking one requires a TTY. Use `ls` to list them instead."
        )


def build_choices(candidates: Sequence[PermalinkCandidate]) -> list[Choice]:
    return [
        Choice(value=index, name=f"{item.label} · {item.detail} {item.description}")
        for index, item in enumerate(candidates)
    ]


def pick_candidate(candidates: Sequence[PermalinkCandidate]) -> PermalinkCandidate | None:
    """Return the candidate to open; a single candidate is returned without asking."""

    if len(candidates) == 1:
        return candidates[0]
    _ensure_tty()
    try:
        selection = inquirer.fuzzy(message="Select permalink", choices=build_choices(candidates)).execute()
    except KeyboardInterrupt as exc:  # pragma: no cover - user cancel
        raise UserAbort("User cancelled the prompt.") from exc
    if selection is None:
        return None
    return candidates[int(selection)]


__all__ = ["build_choices", "pick_candidate"]

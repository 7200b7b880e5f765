"""Environment-backed configuration for git-smart-permalink."""

from __future__ import annotations

import dataclasses
import os
from typing import Any, Mapping

from .exceptions import ValidationError
from .models import RepositoryType, Settings

ENV_PREFIX = "GIT_PERMALINK_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def load_settings(environ: Mapping[str, str] | None = None, **overrides: Any) -> Settings:
    """Build settings from ``GIT_PERMALINK_*`` variables, then apply non-None overrides."""

    env = os.environ if environ is None else environ
    defaults = Settings()
    settings = Settings(
        repository_type=parse_repository_type(
            _get(env, "REPOSITORY_TYPE") or defaults.repository_type.value
        ),
        default_branch=_get(env, "DEFAULT_BRANCH") or defaults.default_branch,
        default_remote=_get(env, "DEFAULT_REMOTE") or defaults.default_remote,
        max_buffer=_parse_max_buffer(_get(env, "MAX_BUFFER")),
        exclude_current_revision=_parse_bool(
            "EXCLUDE_CURRENT_REVISION", _get(env, "EXCLUDE_CURRENT_REVISION"), defaults.exclude_current_revision
        ),
        unset_git_dir=_parse_bool("UNSET_GIT_DIR", _get(env, "UNSET_GIT_DIR"), defaults.unset_git_dir),
    )
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "repository_type" in changes:
        changes["repository_type"] = parse_repository_type(changes["repository_type"])
    return dataclasses.replace(settings, **changes)


def parse_repository_type(value: str | RepositoryType) -> RepositoryType:
    if isinstance(value, RepositoryType):
        return value
    try:
        return RepositoryType(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(item.value for item in RepositoryType)
        raise ValidationError(f"Unsupported repository type '{value}'. Expected one of: {allowed}.") from exc


def _get(env: Mapping[str, str], name: str) -> str:
    return env.get(f"{ENV_PREFIX}{name}", "").strip()


def _parse_bool(name: str, raw: str, default: bool) -> bool:
    if not raw:
        return default
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValidationError(f"Environment variable {ENV_PREFIX}{name} must be a boolean, got '{raw}'.")


def _parse_max_buffer(raw: str) -> int | None:
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValidationError(f"Environment variable {ENV_PREFIX}MAX_BUFFER must be an integer, got '{raw}'.") from exc
    if value <= 0:
        raise ValidationError(f"Environment variable {ENV_PREFIX}MAX_BUFFER must be positive, got {value}.")
    return value


__all__ = ["ENV_PREFIX", "load_settings", "parse_repository_type"]

"""
Label Janitor
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional
from urllib.parse import urlparse

DEFAULT_API_URL = "https://api.linear.app/graphql"
DEFAULT_TIMEOUT_S = 30.0

API_KEY_ENV = "LINEAR_API_KEY"
DRY_RUN_ENV = "DRY_RUN"
API_URL_ENV = "LINEAR_API_URL"
TIMEOUT_ENV = "LABEL_JANITOR_TIMEOUT_S"
ENABLE_DELETION_ENV = "LABEL_JANITOR_ENABLE_DELETION"

# The only value that turns dry-run off. Anything else, including unset, keeps it on.
DRY_RUN_DISABLE_VALUE = "false"


class ConfigError(RuntimeError):
    """Raised when required settings are missing or malformed."""


@dataclass(frozen=True)
class Settings:
    api_key: str = field(repr=False)
    dry_run: bool = True
    api_url: str = DEFAULT_API_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    deletion_enabled: bool = False

    def with_deletion_enabled(self) -> "Settings":
        return replace(self, deletion_enabled=True)


def _dry_run_enabled(raw: Optional[str]) -> bool:
    return raw != DRY_RUN_DISABLE_VALUE


def _parse_api_url(raw: Optional[str]) -> str:
    value = (raw or "").strip()
    if not value:
        return DEFAULT_API_URL
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise ConfigError(f"{API_URL_ENV} must be an http(s) URL, got {value!r}")
    return value


def _parse_timeout(raw: Optional[str]) -> float:
    value = (raw or "").strip()
    if not value:
        return DEFAULT_TIMEOUT_S
    try:
        timeout_s = float(value)
    except ValueError as exc:
        raise ConfigError(f"{TIMEOUT_ENV} must be a number of seconds, got {value!r}") from exc
    if timeout_s <= 0:
        raise ConfigError(f"{TIMEOUT_ENV} must be > 0, got {value!r}")
    return timeout_s


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Resolve settings from the environment.

    ``LINEAR_API_KEY`` is required. Dry-run stays enabled unless ``DRY_RUN`` is
    exactly ``false``; an unset flag defaults to the safe mode rather than
    failing, so there is no separate "missing flag" error.
    """
    if env is None:
        env = os.environ

    api_key = (env.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise ConfigError(f"Missing {API_KEY_ENV} environment variable.")

    return Settings(
        api_key=api_key,
        dry_run=_dry_run_enabled(env.get(DRY_RUN_ENV)),
        api_url=_parse_api_url(env.get(API_URL_ENV)),
        timeout_s=_parse_timeout(env.get(TIMEOUT_ENV)),
        deletion_enabled=(env.get(ENABLE_DELETION_ENV) or "").strip() == "1",
    )

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    scoring_config_path: str | None
    parallel_scoring: bool
    max_workers: int
    default_heading: str


settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
    parallel_scoring=_get_env_bool("ATS_PARALLEL_SCORING", True),
    max_workers=max(1, _get_env_int("ATS_MAX_WORKERS", 5)),
    default_heading=_get_env("PARSER_DEFAULT_HEADING", "Summary") or "Summary",
)

"""
Settings for the Task Tracker, read from environment variables (+ optional .env).
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

ENV_PREFIX = "TASK_TRACKER"


def _env(suffix: str, default: str) -> str:
    value = os.getenv(f"{ENV_PREFIX}_{suffix}")
    if value is None or not value.strip():
        return default
    return value.strip()


def _env_int(suffix: str, default: int) -> int:
    try:
        return int(_env(suffix, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    title: str


def load_settings() -> Settings:
    """
    Build settings from the environment.

    Returns:
        Settings with defaults for anything unset or malformed.
    """
    return Settings(
        host=_env("HOST", "0.0.0.0"),
        port=_env_int("PORT", 8000),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        title=_env("TITLE", "Task Tracker"),
    )

"""
keyrail Configuration

Settings are read from environment variables. Nothing here holds key
material; a settings object only controls logging.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import structlog

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    """Runtime settings for keyrail."""
    log_level: str = "INFO"
    log_json: bool = False
    # Log per-candidate errors swallowed during dispatch (operator-side only)
    log_candidate_errors: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.environ.get("KEYRAIL_LOG_LEVEL", "INFO").upper(),
            log_json=_env_flag("KEYRAIL_LOG_JSON"),
            log_candidate_errors=_env_flag("KEYRAIL_LOG_CANDIDATE_ERRORS"),
        )


@lru_cache()
def get_settings() -> Settings:
    """Settings from the environment, cached for the process lifetime."""
    return Settings.from_env()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure the structlog pipeline.

    Applications embedding keyrail usually configure structlog themselves;
    this is a convenience for scripts and tests.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if settings.log_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )

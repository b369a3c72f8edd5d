"""Settings read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .calculations import DEFAULT_LEAD_DAYS, DEFAULT_LEAD_MILES
from .errors import ValidationError

DEFAULT_DATA_DIR = Path.home() / ".upkeep"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    lead_miles: int = DEFAULT_LEAD_MILES
    lead_days: int = DEFAULT_LEAD_DAYS
    log_level: str = "WARNING"
    secret_key: str = "dev-secret-key-change-in-prod"


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValidationError(f"{name} must not be negative, got {value}")
    return value


def _log_level_setting(environ: Mapping[str, str]) -> str:
    raw = environ.get("UPKEEP_LOG_LEVEL") or "WARNING"
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ValidationError(
            f"UPKEEP_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {raw!r}"
        )
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    UPKEEP_DATA_DIR, UPKEEP_LEAD_MILES, UPKEEP_LEAD_DAYS, UPKEEP_LOG_LEVEL and
    SECRET_KEY are read; anything unset keeps its default.
    """
    if environ is None:
        environ = os.environ
    data_dir = environ.get("UPKEEP_DATA_DIR")
    return Settings(
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        lead_miles=_int_setting(environ, "UPKEEP_LEAD_MILES", DEFAULT_LEAD_MILES),
        lead_days=_int_setting(environ, "UPKEEP_LEAD_DAYS", DEFAULT_LEAD_DAYS),
        log_level=_log_level_setting(environ),
        secret_key=environ.get("SECRET_KEY", "dev-secret-key-change-in-prod"),
    )

"""Runtime configuration read from the environment and an optional .env file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


LOGGER = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent

MAX_QUESTIONS = 100
MAX_MINUTES = 180
MAX_TIMEOUT_CAP = 60


@dataclass(frozen=True, slots=True)
class Settings:
    """Console and API settings."""

    score_file: Path
    timeout_cap: int
    default_questions: int
    default_minutes: int
    seed: Optional[int]
    log_level: str

    @property
    def level(self) -> int:
        """Numeric logging level; unknown names fall back to WARNING."""
        value = getattr(logging, self.log_level, None)
        return value if isinstance(value, int) else logging.WARNING


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Ignoring %s=%r (not an integer), using %s", name, raw, default)
        return default


def _clamp(value: int, maximum: int) -> int:
    return max(1, min(maximum, value))


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Build settings from APTITUDE_* environment variables.

    Args:
        env_file: .env file to load first; defaults to the one beside this module

    Returns:
        Settings object
    """
    load_dotenv(env_file or BASE_DIR / ".env")

    return Settings(
        score_file=Path(os.getenv("APTITUDE_SCORE_FILE", "scores.txt")),
        timeout_cap=_clamp(_int_env("APTITUDE_TIMEOUT_CAP", 60), MAX_TIMEOUT_CAP),
        default_questions=_clamp(_int_env("APTITUDE_DEFAULT_QUESTIONS", 10), MAX_QUESTIONS),
        default_minutes=_clamp(_int_env("APTITUDE_DEFAULT_MINUTES", 10), MAX_MINUTES),
        seed=_int_env("APTITUDE_SEED", None),
        log_level=os.getenv("APTITUDE_LOG_LEVEL", "WARNING").upper(),
    )

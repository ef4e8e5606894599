"""
Runtime configuration for WellPath.

Settings are read from the environment (optionally seeded from a .env file)
with defaults matching the standard curriculum:
- 70% quiz passing score
- 5 lessons per chapter, 30 days per phase, 180 days total
- 24 hour quiz retry cool-down
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field


PASSING_SCORE = 70
CHAPTER_SIZE = 5
DAYS_PER_PHASE = 30
TOTAL_DAYS = 180
QUIZ_RETRY_HOURS = 24

ENV_PREFIX = "WELLPATH_"


class Settings(BaseModel):
    passing_score: int = Field(default=PASSING_SCORE, ge=0, le=100)
    chapter_size: int = Field(default=CHAPTER_SIZE, ge=1)
    days_per_phase: int = Field(default=DAYS_PER_PHASE, ge=1)
    total_days: int = Field(default=TOTAL_DAYS, ge=1)
    quiz_retry_hours: int = Field(default=QUIZ_RETRY_HOURS, ge=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """
        Build settings from WELLPATH_* environment variables.

        Args:
            env_file: Optional .env file loaded before reading the environment
                (default: the nearest .env from the working directory up).
                Existing environment variables take precedence over the file.

        Returns:
            Settings with unset fields left at their defaults
        """
        load_dotenv(env_file if env_file is not None else find_dotenv(usecwd=True))

        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip():
                values[name] = raw.strip()
        return cls(**values)

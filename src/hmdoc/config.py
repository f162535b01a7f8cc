"""Settings loaded from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .syntax import SOURCE_TYPES

DEFAULT_FILES = "./*.js"


@dataclass
class Settings:
    """Runtime settings. CLI options take precedence over these."""

    files: str = DEFAULT_FILES  # Source glob, e.g. "./src/**/*.js"
    source_type: str = "script"  # "script" | "module"
    workers: int = 1  # Files parsed in parallel
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.source_type not in SOURCE_TYPES:
            raise ValueError(
                f"Invalid source type: {self.source_type} (expected script or module)"
            )
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Invalid log level: {self.log_level}")

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from HMDOC_* environment variables.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        workers = os.environ.get("HMDOC_WORKERS", "1")
        try:
            workers_count = int(workers)
        except ValueError:
            raise ValueError(f"HMDOC_WORKERS must be an integer, got {workers!r}") from None

        return cls(
            files=os.environ.get("HMDOC_FILES", DEFAULT_FILES),
            source_type=os.environ.get("HMDOC_SOURCE_TYPE", "script"),
            workers=workers_count,
            log_level=os.environ.get("HMDOC_LOG_LEVEL", "WARNING"),
        )

"""Environment-driven settings for the access-log pipeline.

Environment variables:
  - ACCESS_LOG_DIR        directory for the log file, created if missing
  - ACCESS_LOG_FILE       exact file name inside ACCESS_LOG_DIR
  - ACCESS_LOG_VERBOSITY  0=WARN, 1=INFO, 2=DEBUG, 3+=TRACE
  - ACCESS_LOG_MAX_BODY   bytes of request body kept for the record, 0 logs none
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .levels import Threshold, verbosity_to_level
from .pipeline import Pipeline, build_pipeline

DEFAULT_MAX_BODY_BYTES = 1 * 1024 * 1024  # 1MB


def _parse_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(
            f"Environment variable {name} must be a non-negative integer, got {value!r}"
        )
    if parsed < 0:
        raise ValueError(
            f"Environment variable {name} must be a non-negative integer, got {parsed!r}"
        )
    return parsed


@dataclass
class AccessLogSettings:
    directory: str = field(default_factory=lambda: os.getenv("ACCESS_LOG_DIR", "logs"))
    file_prefix: str = field(
        default_factory=lambda: os.getenv("ACCESS_LOG_FILE", "honeyaml.log")
    )
    verbosity: int = field(default_factory=lambda: _parse_int("ACCESS_LOG_VERBOSITY", 0))
    max_body: int = field(
        default_factory=lambda: _parse_int("ACCESS_LOG_MAX_BODY", DEFAULT_MAX_BODY_BYTES)
    )

    @property
    def threshold(self) -> Threshold:
        return verbosity_to_level(self.verbosity)


def build_pipeline_from_settings(settings: AccessLogSettings | None = None) -> Pipeline:
    settings = settings or AccessLogSettings()
    return build_pipeline(settings.directory, settings.file_prefix, settings.threshold)

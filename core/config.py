"""
Matching Configuration Module
Settings for the comparison engine and the services around it.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

DEFAULT_SIMILARITY_THRESHOLD = 0.7
DEFAULT_MAX_CONCURRENT_ANALYSES = 5
DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024


@dataclass(frozen=True)
class MatchingConfig:
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    timeout_seconds: Optional[float] = None
    max_concurrent_analyses: int = DEFAULT_MAX_CONCURRENT_ANALYSES
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    def __post_init__(self):
        threshold = self.similarity_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigurationError(f"similarity_threshold must be a number, got {threshold!r}")
        if not 0.0 <= threshold <= 1.0:
            raise ConfigurationError(f"similarity_threshold must be within [0, 1], got {threshold}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ConfigurationError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.max_concurrent_analyses < 1:
            raise ConfigurationError(
                f"max_concurrent_analyses must be at least 1, got {self.max_concurrent_analyses}"
            )
        if self.max_upload_bytes < 1:
            raise ConfigurationError(f"max_upload_bytes must be positive, got {self.max_upload_bytes}")

    @classmethod
    def from_env(cls, environ=None) -> 'MatchingConfig':
        """Build a config from GRADER_* environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        try:
            threshold = float(env.get('GRADER_SIMILARITY_THRESHOLD', DEFAULT_SIMILARITY_THRESHOLD))
            timeout = env.get('GRADER_ANALYSIS_TIMEOUT')
            timeout_seconds = float(timeout) if timeout else None
            max_concurrent = int(env.get('GRADER_MAX_CONCURRENT_ANALYSES', DEFAULT_MAX_CONCURRENT_ANALYSES))
            max_upload = int(env.get('GRADER_MAX_UPLOAD_BYTES', DEFAULT_MAX_UPLOAD_BYTES))
        except ValueError as e:
            raise ConfigurationError(f"Invalid grader environment setting: {e}") from e
        return cls(
            similarity_threshold=threshold,
            timeout_seconds=timeout_seconds,
            max_concurrent_analyses=max_concurrent,
            max_upload_bytes=max_upload,
        )

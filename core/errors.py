"""
Error types raised by the grader.
"""


class GraderError(Exception):
    """Base class for grader errors."""


class ConfigurationError(GraderError, ValueError):
    """Raised when a matching configuration value is out of range."""


class ComparisonCancelled(GraderError):
    """Raised between per-kind passes when a comparison is cancelled or times out."""


class ArchiveError(GraderError):
    """Raised for uploads that are not usable zip archives."""

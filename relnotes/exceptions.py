"""Custom exceptions for relnotes."""


class RelnotesError(Exception):
    """Base exception for relnotes operations."""


class ConfigurationError(RelnotesError, ValueError):
    """Invalid or unreadable configuration."""


class InvalidPatternError(ConfigurationError):
    """A skip pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")

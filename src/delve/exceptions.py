class DelveError(Exception):
    """Base exception for the Delve project."""


class ConfigError(DelveError):
    """Raised when the game configuration cannot be loaded or is invalid."""

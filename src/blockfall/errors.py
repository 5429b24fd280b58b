from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a game is constructed with an unusable configuration."""

"""Blockfall: a falling-block puzzle engine with a pygame front end."""

from .errors import ConfigurationError

__version__ = "0.1.0"

__all__ = ["ConfigurationError", "__version__"]

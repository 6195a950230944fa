"""Classify web-platform feature support and score baseline compliance."""

from ._version import __version__

__all__ = ["__version__"]

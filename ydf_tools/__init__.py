"""Top-level package for the YDF recording reader."""

from .ydf import __version__

__all__ = ["__version__"]

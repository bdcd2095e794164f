"""YDF (EDF-family) recording decoding toolkit."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ydf-tools")
except PackageNotFoundError:  # pragma: no cover - local editable install only
    __version__ = "0.0.0"

__all__ = ["__version__"]

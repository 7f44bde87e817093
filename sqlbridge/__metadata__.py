"""Metadata for the Project."""

from importlib.metadata import PackageNotFoundError, metadata, version

__all__ = ("__project__", "__version__")

try:
    __version__ = version("sqlbridge")
    """Version of the project."""
    __project__ = metadata("sqlbridge")["Name"]
    """Name of the project."""
except PackageNotFoundError:  # pragma: no cover
    __version__ = "Unknown"
    __project__ = "SQLBridge"
finally:
    del version, PackageNotFoundError, metadata

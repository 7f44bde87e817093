"""Import helpers for lazily loaded adapters and optional drivers."""

import importlib
from importlib.util import find_spec
from typing import Any

__all__ = (
    "import_string",
    "module_available",
)


def module_available(module_name: str) -> bool:
    """Check whether a top-level module can be imported without importing it.

    Args:
        module_name: The module name, e.g. ``"jpype"``.

    Returns:
        True when the module is installed.
    """
    try:
        return find_spec(module_name) is not None
    except (ImportError, ValueError):
        return False


def import_string(dotted_path: str) -> "Any":
    """Dotted Path Import.

    Import a dotted module path and return the attribute/class designated by the
    last name in the path. Raise ImportError if the import failed.

    Args:
        dotted_path: The path of the module to import.

    Raises:
        ImportError: Could not import the module.

    Returns:
        object: The imported object.
    """
    try:
        module_path, _, attr = dotted_path.rpartition(".")
        if not module_path:
            msg = f"{dotted_path} doesn't look like a module path"
            raise ImportError(msg)
        module = importlib.import_module(module_path)
        try:
            return getattr(module, attr)
        except AttributeError as e:
            msg = f"Module '{module_path}' has no attribute '{attr}' in '{dotted_path}'"
            raise ImportError(msg) from e
    except ImportError:
        raise
    except Exception as e:
        msg = f"Could not import '{dotted_path}': {e}"
        raise ImportError(msg) from e

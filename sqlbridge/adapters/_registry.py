from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Optional, Union, overload

from sqlbridge.exceptions import ImproperConfigurationError
from sqlbridge.utils.logging import get_logger
from sqlbridge.utils.module_loader import import_string

if TYPE_CHECKING:
    from sqlbridge.adapters.base import SqlAdapter

__all__ = ("create_adapter", "get_adapter_class", "list_registered_adapters", "register_adapter")

logger = get_logger("adapters.registry")

_BUILTIN_ADAPTERS: "dict[str, str]" = {"db2": "sqlbridge.adapters.db2.Db2Adapter"}
_ADAPTERS: "dict[str, Union[str, type[SqlAdapter[Any]]]]" = dict(_BUILTIN_ADAPTERS)


def _normalize(key: str) -> str:
    return key.strip().lower()


@overload
def register_adapter(key: str) -> "Callable[[type[SqlAdapter[Any]]], type[SqlAdapter[Any]]]": ...


@overload
def register_adapter(key: str, adapter: "Union[str, type[SqlAdapter[Any]]]") -> None: ...


def register_adapter(
    key: str, adapter: "Optional[Union[str, type[SqlAdapter[Any]]]]" = None
) -> "Optional[Callable[[type[SqlAdapter[Any]]], type[SqlAdapter[Any]]]]":
    """Register an adapter class under ``key``.

    Used directly with a class or dotted import path, or as a class decorator
    when ``adapter`` is omitted.

    Args:
        key: Lookup name, case-insensitive.
        adapter: The adapter class or the dotted path to it.
    """
    normalized = _normalize(key)
    if adapter is not None:
        _ADAPTERS[normalized] = adapter
        logger.debug("Registered adapter %s", normalized)
        return None

    def _decorator(cls: "type[SqlAdapter[Any]]") -> "type[SqlAdapter[Any]]":
        _ADAPTERS[normalized] = cls
        logger.debug("Registered adapter %s", normalized)
        return cls

    return _decorator


def get_adapter_class(key: str) -> "type[SqlAdapter[Any]]":
    """Return the adapter class registered under ``key``.

    Adapters registered by import path are imported on first lookup.

    Raises:
        ImproperConfigurationError: When no adapter is registered under ``key``.
    """
    normalized = _normalize(key)
    if normalized not in _ADAPTERS:
        msg = f"Unknown adapter: {key}. Available: {', '.join(list_registered_adapters())}"
        raise ImproperConfigurationError(msg)
    adapter = _ADAPTERS[normalized]
    if isinstance(adapter, str):
        adapter = import_string(adapter)
        _ADAPTERS[normalized] = adapter
    return adapter


def create_adapter(key: str, properties: "Mapping[str, Optional[str]]") -> "SqlAdapter[Any]":
    """Create a configured adapter from a framework property map."""
    return get_adapter_class(key).from_properties(properties)


def list_registered_adapters() -> "list[str]":
    """Return registered adapter keys."""
    return sorted(_ADAPTERS)


def _reset_registry() -> None:
    """Restore the built-in registrations."""
    _ADAPTERS.clear()
    _ADAPTERS.update(_BUILTIN_ADAPTERS)

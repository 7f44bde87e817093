from sqlbridge.adapters._registry import (
    create_adapter,
    get_adapter_class,
    list_registered_adapters,
    register_adapter,
)
from sqlbridge.adapters.base import SqlAdapter

__all__ = (
    "SqlAdapter",
    "create_adapter",
    "get_adapter_class",
    "list_registered_adapters",
    "register_adapter",
)

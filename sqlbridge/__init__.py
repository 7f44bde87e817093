"""SQLBridge: bridge adapters that turn generic read requests into JDBC statements."""

from sqlbridge import adapters, exceptions, utils
from sqlbridge.__metadata__ import __version__
from sqlbridge.adapters import SqlAdapter, create_adapter, get_adapter_class, list_registered_adapters, register_adapter
from sqlbridge.adapters.db2 import Db2Adapter, Db2Config
from sqlbridge.config import AdapterConfig, ConfigurableProperty
from sqlbridge.exceptions import (
    BridgeError,
    ImproperConfigurationError,
    InvalidOrderError,
    MissingDependencyError,
    MissingParameterError,
    MultipleResultsFoundError,
    QualificationError,
    SQLBridgeError,
)
from sqlbridge.qualification import Qualification, QualificationParameter, build_order_by_clause, parse_qualification
from sqlbridge.request import BridgeRequest, Record, RecordList
from sqlbridge.statement import Binding, PaginatedStatement

__all__ = (
    "AdapterConfig",
    "Binding",
    "BridgeError",
    "BridgeRequest",
    "ConfigurableProperty",
    "Db2Adapter",
    "Db2Config",
    "ImproperConfigurationError",
    "InvalidOrderError",
    "MissingDependencyError",
    "MissingParameterError",
    "MultipleResultsFoundError",
    "PaginatedStatement",
    "Qualification",
    "QualificationError",
    "QualificationParameter",
    "Record",
    "RecordList",
    "SQLBridgeError",
    "SqlAdapter",
    "__version__",
    "adapters",
    "build_order_by_clause",
    "create_adapter",
    "exceptions",
    "get_adapter_class",
    "list_registered_adapters",
    "parse_qualification",
    "register_adapter",
    "utils",
)

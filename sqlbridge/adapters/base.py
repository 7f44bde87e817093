"""Base class for JDBC backed relational adapters.

Subclasses supply the dialect: the driver class, how the connection URL is
assembled from their configuration, and how a paginated statement is built.
Everything else (driver loading, connection lifecycle, count, search and
retrieve) lives here.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from collections.abc import Generator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Optional, TypeVar

from mypy_extensions import mypyc_attr

from sqlbridge import jdbc
from sqlbridge.__metadata__ import __version__
from sqlbridge.config import AdapterConfig
from sqlbridge.exceptions import BridgeError, MultipleResultsFoundError
from sqlbridge.qualification import parse_qualification, render_identifier
from sqlbridge.request import RecordList
from sqlbridge.statement import prepare_statement, resolve_bindings
from sqlbridge.utils.logging import get_correlation_id, get_logger, log_with_context, set_correlation_id

if TYPE_CHECKING:
    from sqlbridge.config import ConfigurableProperty
    from sqlbridge.jdbc import JdbcConnectionProperties
    from sqlbridge.protocols import JdbcConnectionProtocol, JdbcPreparedStatementProtocol
    from sqlbridge.request import BridgeRequest, Record
    from sqlbridge.statement import PaginatedStatement

__all__ = ("SqlAdapter",)

logger = get_logger("adapters")

ConfigT = TypeVar("ConfigT", bound=AdapterConfig)


def _metadata_int(request: "BridgeRequest", key: str, default: int) -> int:
    raw = request.get_metadata(key)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        msg = f"The '{key}' metadata value '{raw}' is not an integer."
        raise BridgeError(msg) from e


@mypyc_attr(allow_interpreted_subclasses=True)
class SqlAdapter(ABC, Generic[ConfigT]):
    """A bridge adapter reading from a relational database over JDBC."""

    __slots__ = ("_config", "_initialized")

    name: ClassVar[str]
    driver_class: ClassVar[str]
    config_type: "ClassVar[type[AdapterConfig]]"

    def __init__(self, config: ConfigT) -> None:
        self._config = config
        self._initialized = False

    @classmethod
    def from_properties(cls, properties: "Mapping[str, Optional[str]]") -> "SqlAdapter[Any]":
        """Create an adapter from the framework's property map."""
        return cls(cls.config_type.from_properties(properties))

    @classmethod
    def get_properties(cls) -> "tuple[ConfigurableProperty, ...]":
        return cls.config_type.properties

    @property
    def version(self) -> str:
        return __version__

    @property
    def config(self) -> ConfigT:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    @abstractmethod
    def connection_url(self) -> str:
        """The JDBC URL built from the configuration."""
        raise NotImplementedError

    @abstractmethod
    def connection_properties(self) -> "JdbcConnectionProperties":
        """Credentials and driver properties for new connections."""
        raise NotImplementedError

    @property
    def classpath(self) -> "tuple[str, ...]":
        """Jar files providing the JDBC driver."""
        return ()

    def initialize(self) -> None:
        """Load the JDBC driver.

        Raises:
            BridgeError: If the driver cannot be loaded.
        """
        jdbc.load_driver(self.driver_class, self.classpath)
        self._initialized = True
        logger.info("Initialized %s %s for %s", self.name, self.version, self.connection_url)

    @contextmanager
    def provide_connection(self) -> "Generator[JdbcConnectionProtocol, None, None]":
        """Open one connection for the duration of the block and close it afterwards."""
        if not self._initialized:
            self.initialize()
        connection = jdbc.connect(self.connection_url, self.connection_properties())
        try:
            yield connection
        finally:
            jdbc.close_quietly(connection)

    @classmethod
    @abstractmethod
    def render_paginated_statement(cls, request: "BridgeRequest", offset: int, page_size: int) -> "PaginatedStatement":
        """Render the SQL text and bindings for one page of ``request`` in this dialect.

        Nothing touches a connection, so the result can be inspected or logged
        before it is prepared.
        """
        raise NotImplementedError

    def build_paginated_statement(
        self,
        connection: "JdbcConnectionProtocol",
        request: "BridgeRequest",
        offset: int,
        page_size: int,
    ) -> "JdbcPreparedStatementProtocol":
        """Build a prepared, fully bound statement for one page of ``request``.

        Args:
            connection: An open connection to prepare the statement on.
            request: The request to translate.
            offset: Number of rows to skip.
            page_size: Rows per page; zero or negative disables pagination.

        Raises:
            MissingParameterError: If the filter references a parameter the
                request does not supply. No statement is prepared.
        """
        rendered = self.render_paginated_statement(request, offset, page_size)
        return prepare_statement(connection, rendered.sql, rendered.bindings)

    def build_count_statement(
        self, connection: "JdbcConnectionProtocol", request: "BridgeRequest"
    ) -> "JdbcPreparedStatementProtocol":
        """Build a prepared ``SELECT COUNT(*)`` statement for ``request``."""
        qualification = parse_qualification(request.query)
        bindings = resolve_bindings(qualification, request)
        sql = f"SELECT COUNT(*) FROM {render_identifier(request.structure)} WHERE {qualification.parameterized_sql}"
        return prepare_statement(connection, sql, bindings)

    @contextmanager
    def _operation(self, operation: str, request: "BridgeRequest") -> "Generator[None, None, None]":
        """Run one bridge operation under a correlation id.

        An id already set by the caller is kept; otherwise a new one is used for
        the duration of the operation.
        """
        previous = get_correlation_id()
        set_correlation_id(previous or uuid.uuid4().hex)
        try:
            log_with_context(
                logger,
                logging.DEBUG,
                f"{self.name} {operation}",
                operation=operation,
                structure=request.structure,
                fields=list(request.fields),
            )
            yield
        finally:
            set_correlation_id(previous)

    def count(self, request: "BridgeRequest") -> int:
        """Count the records matching ``request``."""
        with self._operation("count", request), self.provide_connection() as connection:
            statement = self.build_count_statement(connection, request)
            result_set = None
            try:
                result_set = statement.executeQuery()
                if not result_set.next():
                    return 0
                return int(str(result_set.getString(1)))
            finally:
                jdbc.close_quietly(result_set)
                jdbc.close_quietly(statement)

    def _fetch(self, request: "BridgeRequest", offset: int, page_size: int) -> "tuple[list[str], list[Record]]":
        with self.provide_connection() as connection:
            statement = self.build_paginated_statement(connection, request, offset, page_size)
            result_set = None
            try:
                result_set = statement.executeQuery()
                labels, records = jdbc.read_records(result_set)
            finally:
                jdbc.close_quietly(result_set)
                jdbc.close_quietly(statement)
        if not request.selects_all_fields and len(request.fields) == len(labels):
            # Key rows by the requested names rather than the driver's (upper cased) labels
            keys = list(request.fields)
            records = [dict(zip(keys, record.values())) for record in records]
            labels = keys
        return labels, records

    def search(self, request: "BridgeRequest") -> RecordList:
        """Return one page of records matching ``request``.

        The page is selected by the ``offset`` and ``pageSize`` metadata values,
        both defaulting to 0 (start at the first row, no pagination).
        """
        offset = _metadata_int(request, "offset", 0)
        page_size = _metadata_int(request, "pageSize", 0)
        with self._operation("search", request):
            fields, records = self._fetch(request, offset, page_size)
        return RecordList(
            fields=fields,
            records=records,
            metadata={"offset": offset, "pageSize": page_size, "size": len(records)},
        )

    def retrieve(self, request: "BridgeRequest") -> "Optional[Record]":
        """Return the single record matching ``request``, or None.

        Raises:
            MultipleResultsFoundError: If more than one record matches.
        """
        with self._operation("retrieve", request):
            _, records = self._fetch(request, 0, 0)
        if len(records) > 1:
            msg = f"Multiple results matched the retrieve request against '{request.structure}'."
            raise MultipleResultsFoundError(msg)
        return records[0] if records else None

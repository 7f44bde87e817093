"""Runtime-checkable protocols for the JDBC objects and adapters SQLBridge works with.

JPype proxies for ``java.sql`` interfaces satisfy these structurally, which
keeps the adapters free of any import-time dependency on a running JVM.
"""

from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sqlbridge.request import BridgeRequest

__all__ = (
    "JdbcConnectionProtocol",
    "JdbcPreparedStatementProtocol",
    "JdbcResultSetMetaDataProtocol",
    "JdbcResultSetProtocol",
    "RelationalAdapterProtocol",
)


@runtime_checkable
class JdbcResultSetMetaDataProtocol(Protocol):
    """Protocol for ``java.sql.ResultSetMetaData``."""

    def getColumnCount(self) -> int:  # noqa: N802
        ...

    def getColumnLabel(self, column: int) -> Any:  # noqa: N802
        ...


@runtime_checkable
class JdbcResultSetProtocol(Protocol):
    """Protocol for ``java.sql.ResultSet``."""

    def next(self) -> bool:
        ...

    def getMetaData(self) -> JdbcResultSetMetaDataProtocol:  # noqa: N802
        ...

    def getString(self, column: int) -> Optional[Any]:  # noqa: N802
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class JdbcPreparedStatementProtocol(Protocol):
    """Protocol for ``java.sql.PreparedStatement``."""

    def setObject(self, index: int, value: Any) -> None:  # noqa: N802
        """Bind ``value`` at the one-based placeholder ``index``."""
        ...

    def executeQuery(self) -> JdbcResultSetProtocol:  # noqa: N802
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class JdbcConnectionProtocol(Protocol):
    """Protocol for ``java.sql.Connection``."""

    def prepareStatement(self, sql: str) -> JdbcPreparedStatementProtocol:  # noqa: N802
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class RelationalAdapterProtocol(Protocol):
    """Capability shared by every dialect adapter: turn one request into one bound statement."""

    name: str

    def build_paginated_statement(
        self,
        connection: JdbcConnectionProtocol,
        request: "BridgeRequest",
        offset: int,
        page_size: int,
    ) -> JdbcPreparedStatementProtocol:
        """Build a prepared, fully bound statement for one page of ``request``."""
        ...

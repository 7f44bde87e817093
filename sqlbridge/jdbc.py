"""JDBC connectivity through JPype.

The JVM is started once per process. Driver classes are loaded into it by
name, after which ``java.sql.DriverManager`` hands out connections that
satisfy :class:`~sqlbridge.protocols.JdbcConnectionProtocol`.
"""

import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Optional, TypedDict

from typing_extensions import NotRequired

from sqlbridge.exceptions import BridgeError, MissingDependencyError
from sqlbridge.utils.logging import get_logger
from sqlbridge.utils.module_loader import module_available

if TYPE_CHECKING:
    from sqlbridge.protocols import JdbcConnectionProtocol, JdbcResultSetProtocol
    from sqlbridge.request import Record

__all__ = (
    "JdbcConnectionProperties",
    "close_quietly",
    "connect",
    "load_driver",
    "read_records",
    "start_jvm",
)

logger = get_logger("jdbc")

_jvm_lock = threading.Lock()


class JdbcConnectionProperties(TypedDict, total=False):
    """Properties passed to ``DriverManager.getConnection``."""

    user: NotRequired[str]
    password: NotRequired[str]


def _import_jpype() -> Any:
    if not module_available("jpype"):
        raise MissingDependencyError(package="jpype", install_package="JPype1")
    import jpype

    return jpype


def start_jvm(classpath: "Sequence[str]" = ()) -> None:
    """Start the JVM if it is not running yet.

    Args:
        classpath: Jar files to put on the classpath. Entries can only be
            added before the JVM starts.
    """
    jpype = _import_jpype()
    with _jvm_lock:
        if jpype.isJVMStarted():
            if classpath:
                logger.debug("JVM already started, classpath entries not applied: %s", ", ".join(classpath))
            return
        for entry in classpath:
            jpype.addClassPath(entry)
        jpype.startJVM(convertStrings=True)
        logger.debug("JVM started for JDBC access")


def load_driver(driver_class: str, classpath: "Sequence[str]" = ()) -> None:
    """Load a JDBC driver class so it registers itself with ``DriverManager``.

    Args:
        driver_class: Fully qualified Java class name of the driver.
        classpath: Jar files providing the driver.

    Raises:
        BridgeError: If the driver class cannot be loaded.
    """
    start_jvm(classpath)
    jpype = _import_jpype()
    try:
        jpype.JClass(driver_class)
    except (TypeError, jpype.JException) as e:
        msg = f"Unable to load the {driver_class} JDBC driver: {e}"
        raise BridgeError(msg) from e
    logger.debug("Loaded JDBC driver %s", driver_class)


def connect(url: str, properties: JdbcConnectionProperties) -> "JdbcConnectionProtocol":
    """Open a JDBC connection.

    Args:
        url: The JDBC connection URL.
        properties: Credentials and driver properties.

    Raises:
        BridgeError: If the driver refuses the connection. The password is
            redacted from the message.

    Returns:
        An open ``java.sql.Connection``.
    """
    jpype = _import_jpype()
    driver_manager = jpype.JClass("java.sql.DriverManager")
    java_properties = jpype.JClass("java.util.Properties")()
    for key, value in properties.items():
        if value is not None:
            java_properties.setProperty(key, str(value))
    try:
        return driver_manager.getConnection(url, java_properties)
    except jpype.JException as e:
        error_message = str(e)
        password = properties.get("password")
        if password:
            error_message = error_message.replace(password, "[REDACTED]")
        msg = f"Unable to connect to {url}: {error_message}"
        raise BridgeError(msg) from e


def read_records(result_set: "JdbcResultSetProtocol") -> "tuple[list[str], list[Record]]":
    """Read every remaining row of a result set as strings.

    Args:
        result_set: An open result set.

    Returns:
        The column labels and one record per row.
    """
    metadata = result_set.getMetaData()
    labels = [str(metadata.getColumnLabel(column)) for column in range(1, int(metadata.getColumnCount()) + 1)]
    records: list[Record] = []
    while result_set.next():
        record: Record = {}
        for column, label in enumerate(labels, start=1):
            value = result_set.getString(column)
            record[label] = None if value is None else str(value)
        records.append(record)
    return labels, records


def close_quietly(resource: "Optional[Any]") -> None:
    """Close a JDBC resource, logging instead of raising on failure."""
    if resource is None:
        return
    try:
        resource.close()
    except Exception:  # noqa: BLE001
        logger.warning("Unable to close %s", type(resource).__name__, exc_info=True)

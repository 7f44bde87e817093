"""DB2 adapter configuration."""

from dataclasses import dataclass, field
from typing import ClassVar

from sqlbridge.config import AdapterConfig, ConfigurableProperty, parse_port
from sqlbridge.jdbc import JdbcConnectionProperties

__all__ = ("Db2Config",)

DEFAULT_SERVER = "127.0.0.1"
DEFAULT_PORT = 50000


def _parse_classpath(value: str) -> "tuple[str, ...]":
    return tuple(entry.strip() for entry in value.split(",") if entry.strip())


@dataclass(frozen=True)
class Db2Config(AdapterConfig):
    """Connection settings for a DB2 database.

    Args:
        username: Database user.
        password: Password of ``username``. Never shown in ``repr``.
        database_name: Name of the DB2 database.
        server: Host name or address.
        port: Listener port.
        driver_classpath: Jar files providing ``com.ibm.db2.jcc.DB2Driver``.
    """

    username: str
    password: str = field(repr=False)
    database_name: str
    server: str = DEFAULT_SERVER
    port: int = DEFAULT_PORT
    driver_classpath: "tuple[str, ...]" = ()

    properties: ClassVar["tuple[ConfigurableProperty, ...]"] = (
        ConfigurableProperty("Username", "username", required=True, description="The username used to connect."),
        ConfigurableProperty(
            "Password", "password", required=True, sensitive=True, description="The password used to connect."
        ),
        ConfigurableProperty(
            "Server", "server", required=True, default=DEFAULT_SERVER, description="The host of the DB2 server."
        ),
        ConfigurableProperty(
            "Port",
            "port",
            required=True,
            default=str(DEFAULT_PORT),
            converter=parse_port,
            description="The port the DB2 server listens on.",
        ),
        ConfigurableProperty("Database Name", "database_name", required=True, description="The database to query."),
        ConfigurableProperty(
            "Driver Classpath",
            "driver_classpath",
            converter=_parse_classpath,
            description="Comma separated jar files containing the DB2 JDBC driver.",
        ),
    )

    @property
    def jdbc_url(self) -> str:
        return f"jdbc:db2://{self.server}:{self.port}/{self.database_name}"

    def connection_properties(self) -> JdbcConnectionProperties:
        return JdbcConnectionProperties(user=self.username, password=self.password)

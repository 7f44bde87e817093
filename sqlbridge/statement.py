"""Rendered statements and positional parameter binding."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

from sqlbridge.exceptions import MissingParameterError
from sqlbridge.jdbc import close_quietly
from sqlbridge.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlbridge.protocols import JdbcConnectionProtocol, JdbcPreparedStatementProtocol
    from sqlbridge.qualification import Qualification
    from sqlbridge.request import BridgeRequest

__all__ = (
    "Binding",
    "PaginatedStatement",
    "prepare_statement",
    "resolve_bindings",
)

logger = get_logger("statement")


class Binding(NamedTuple):
    """A value bound at a one-based placeholder position."""

    position: int
    name: str
    value: Any


@dataclass(frozen=True)
class PaginatedStatement:
    """SQL text and bindings for one page of a request, before preparation.

    Args:
        sql: The statement text with ``?`` placeholders.
        bindings: Values in placeholder order.
        paginated: Whether a row-number window was applied.
        lower_bound: First row number of the window, when paginated.
        upper_bound: Last row number of the window, when paginated.
        order: The ORDER BY body used, if any.
    """

    sql: str
    bindings: "tuple[Binding, ...]" = ()
    paginated: bool = False
    lower_bound: Optional[int] = None
    upper_bound: Optional[int] = None
    order: Optional[str] = None

    @property
    def parameters(self) -> "tuple[Any, ...]":
        return tuple(binding.value for binding in self.bindings)


def resolve_bindings(qualification: "Qualification", request: "BridgeRequest") -> "tuple[Binding, ...]":
    """Look up the value of every qualification parameter in the request.

    Args:
        qualification: The parsed filter expression.
        request: The request supplying parameter values.

    Raises:
        MissingParameterError: If a referenced parameter has no value.

    Returns:
        Bindings ordered by the qualification's parameter order.
    """
    bindings: list[Binding] = []
    for parameter in qualification.parameters:
        value = request.get_parameter(parameter.name)
        if value is None:
            raise MissingParameterError(parameter.name)
        bindings.append(Binding(parameter.index, parameter.name, value))
    return tuple(bindings)


def prepare_statement(
    connection: "JdbcConnectionProtocol", sql: str, bindings: "tuple[Binding, ...]"
) -> "JdbcPreparedStatementProtocol":
    """Prepare ``sql`` on ``connection`` and bind every value positionally.

    Failures from the connection or driver propagate unchanged; a statement
    whose binding fails is closed first.

    Returns:
        The prepared statement, ready to execute.
    """
    logger.debug("Preparing Query")
    logger.debug("  %s", sql)
    statement = connection.prepareStatement(sql)
    try:
        for binding in bindings:
            logger.debug("  %d (%s) : %s", binding.position, binding.name, binding.value)
            statement.setObject(binding.position, binding.value)
    except BaseException:
        close_quietly(statement)
        raise
    return statement

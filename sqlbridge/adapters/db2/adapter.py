"""DB2 bridge adapter.

DB2 has no ``OFFSET``/``LIMIT``. A page is selected by numbering the
qualifying rows with ``ROW_NUMBER()`` in a subquery and keeping those whose
number falls inside the requested window.
"""

from typing import TYPE_CHECKING, ClassVar, Optional

from mypy_extensions import mypyc_attr

from sqlbridge.adapters.base import SqlAdapter
from sqlbridge.adapters.db2.config import Db2Config
from sqlbridge.exceptions import BridgeError
from sqlbridge.qualification import build_order_by_clause, parse_qualification, render_identifier
from sqlbridge.statement import PaginatedStatement, resolve_bindings
from sqlbridge.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlbridge.jdbc import JdbcConnectionProperties
    from sqlbridge.request import BridgeRequest

__all__ = ("Db2Adapter",)

logger = get_logger("adapters.db2")

WILDCARD = "*"


def window_bounds(offset: int, page_size: int) -> "tuple[int, int]":
    """Return the inclusive ``ROW_NUMBER()`` bounds for one page.

    A zero offset yields ``(0, page_size)``; a positive offset ``n`` yields
    ``(n + 1, n + page_size)``.
    """
    if offset > 0:
        lower = offset + 1
        return lower, lower - 1 + page_size
    return offset, page_size


@mypyc_attr(allow_interpreted_subclasses=True)
class Db2Adapter(SqlAdapter[Db2Config]):
    """Bridge adapter for IBM DB2 over the JCC JDBC driver."""

    __slots__ = ()

    name: ClassVar[str] = "DB2 Bridge"
    driver_class: ClassVar[str] = "com.ibm.db2.jcc.DB2Driver"
    config_type: "ClassVar[type[Db2Config]]" = Db2Config

    @property
    def connection_url(self) -> str:
        return self.config.jdbc_url

    def connection_properties(self) -> "JdbcConnectionProperties":
        return self.config.connection_properties()

    @property
    def classpath(self) -> "tuple[str, ...]":
        return self.config.driver_classpath

    @classmethod
    def render_paginated_statement(cls, request: "BridgeRequest", offset: int, page_size: int) -> PaginatedStatement:
        """Render the SQL and bindings for one page of ``request``.

        Nothing is prepared; the result can be inspected or handed to
        :func:`~sqlbridge.statement.prepare_statement`.

        Args:
            request: The request to translate.
            offset: Number of rows to skip.
            page_size: Rows per page. Zero or negative returns every row.

        Raises:
            BridgeError: If the request has no structure.
            QualificationError: If the filter expression is malformed.
            InvalidOrderError: If the order names a field that was not requested.
            MissingParameterError: If a referenced parameter has no value.

        Returns:
            The rendered statement.
        """
        if not request.structure or not request.structure.strip():
            msg = "A structure is required to build a statement."
            raise BridgeError(msg)

        if request.selects_all_fields:
            columns = WILDCARD
            allowed: tuple[str, ...] = ()
        else:
            columns = ",".join(render_identifier(name) for name in request.fields)
            allowed = tuple(request.fields)
        structure = render_identifier(request.structure)
        qualification = parse_qualification(request.query)

        order: Optional[str] = None
        order_metadata = request.get_metadata("order")
        if order_metadata is not None and str(order_metadata).strip():
            order = build_order_by_clause(allowed, str(order_metadata))
        elif columns != WILDCARD:
            order = build_order_by_clause(request.fields, request.field_string)

        bindings = resolve_bindings(qualification, request)
        where = qualification.parameterized_sql

        if offset >= 0 and page_size > 0 and columns != WILDCARD:
            lower, upper = window_bounds(offset, page_size)
            window = f"ORDER BY {order}" if order else ""
            sql = (
                f"SELECT {columns} FROM ("
                f"SELECT ROW_NUMBER() OVER ({window}) AS rid, {columns} FROM {structure} WHERE {where}"
                f") AS t WHERE t.rid BETWEEN {lower} AND {upper}"
            )
            return PaginatedStatement(
                sql=sql, bindings=bindings, paginated=True, lower_bound=lower, upper_bound=upper, order=order
            )

        if offset >= 0 and page_size > 0:
            logger.warning(
                "Unable to paginate a query against %s that selects all fields (*), every matching row is returned.",
                request.structure,
            )
        sql = f"SELECT {columns} FROM {structure} WHERE {where}"
        if order:
            sql = f"{sql} ORDER BY {order}"
        return PaginatedStatement(sql=sql, bindings=bindings, order=order)


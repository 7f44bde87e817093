"""Filter expression and ORDER BY handling for bridge requests.

A filter expression is SQL written against the target structure in which
values are referenced as ``<%= parameter["Name"] %>``. Parsing replaces every
reference with a positional ``?`` placeholder and records which parameter
belongs to which position, so values are only ever bound and never spliced
into the SQL text.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final, Optional

from sqlglot import exp
from sqlglot.errors import TokenError
from sqlglot.tokens import Tokenizer, TokenType

from sqlbridge.exceptions import InvalidOrderError, QualificationError
from sqlbridge.utils.logging import get_logger

__all__ = (
    "EMPTY_QUALIFICATION",
    "Qualification",
    "QualificationParameter",
    "build_order_by_clause",
    "parse_qualification",
    "render_identifier",
)

logger = get_logger("qualification")

EMPTY_QUALIFICATION: Final = "1=1"

PARAMETER_REFERENCE: Final = re.compile(
    r"""(?P<open>')?<%=\s*parameter\[\s*(?P<quote>["'])(?P<name>.*?)(?P=quote)\s*\]\s*%>(?(open)')"""
)
FIELD_REFERENCE: Final = r"""<%=\s*field\[\s*(?P<quote>["'])(?P<field>.*?)(?P=quote)\s*\]\s*%>"""
ORDER_ITEM: Final = re.compile(
    rf"""\s*(?:{FIELD_REFERENCE}|(?P<bare>[^,:]+?))\s*(?::\s*(?P<direction>[A-Za-z]*)\s*)?(?:,|$)"""
)
SORT_DIRECTIONS: Final = frozenset({"ASC", "DESC"})


@dataclass(frozen=True)
class QualificationParameter:
    """A parameter referenced by a filter expression.

    Args:
        name: Name of the referenced request parameter.
        index: One-based position of the placeholder that receives the value.
    """

    name: str
    index: int


@dataclass(frozen=True)
class Qualification:
    """A filter expression rewritten as a parameterized SQL fragment."""

    parameterized_sql: str
    parameters: "tuple[QualificationParameter, ...]" = ()

    @property
    def parameter_names(self) -> "tuple[str, ...]":
        return tuple(parameter.name for parameter in self.parameters)


def _count_placeholders(sql: str, expression: str) -> int:
    try:
        tokens = Tokenizer().tokenize(sql)
    except TokenError as e:
        msg = f"Unable to parse qualification: {e}"
        raise QualificationError(msg, expression) from e
    return sum(1 for token in tokens if token.token_type == TokenType.PLACEHOLDER)


def parse_qualification(expression: "Optional[str]") -> Qualification:
    """Parse a filter expression into a parameterized WHERE fragment.

    Args:
        expression: The raw filter expression. Blank expressions match every row.

    Raises:
        QualificationError: If the expression contains placeholders that are not
            parameter references, or references embedded inside string literals.

    Returns:
        The parameterized fragment and its parameters in placeholder order.
    """
    if expression is None or not expression.strip():
        return Qualification(parameterized_sql=EMPTY_QUALIFICATION)

    parameters: list[QualificationParameter] = []

    def _replace(match: "re.Match[str]") -> str:
        parameters.append(QualificationParameter(name=match.group("name"), index=len(parameters) + 1))
        return "?"

    parameterized_sql = PARAMETER_REFERENCE.sub(_replace, expression)

    placeholder_count = _count_placeholders(parameterized_sql, expression)
    if placeholder_count != len(parameters):
        msg = (
            f"Unable to parse qualification, found {placeholder_count} positional placeholder(s) for "
            f"{len(parameters)} parameter reference(s). Parameter references cannot appear inside string "
            "literals and the expression cannot contain its own '?' placeholders."
        )
        raise QualificationError(msg, expression)

    logger.debug("Parsed qualification with %d parameter(s)", len(parameters))
    return Qualification(parameterized_sql=parameterized_sql, parameters=tuple(parameters))


def render_identifier(name: str) -> str:
    """Render a (possibly dotted) name as a SQL identifier.

    Plain identifiers are emitted as-is; anything else is double quoted with
    embedded quotes escaped.

    Args:
        name: Column, table or ``schema.table`` name.

    Raises:
        InvalidOrderError: If the name or one of its dotted parts is empty.

    Returns:
        The identifier as SQL text.
    """
    parts = name.strip().split(".")
    if not all(part.strip() for part in parts):
        msg = f"'{name}' is not a valid identifier."
        raise InvalidOrderError(msg)
    return ".".join(exp.to_identifier(part.strip()).sql() for part in parts)


def build_order_by_clause(fields: "Sequence[str]", order: str) -> str:
    """Build an ORDER BY clause body from an order string.

    The order is a comma separated list whose items are either
    ``<%= field["Name"] %>`` references or bare field names, each optionally
    followed by ``:ASC`` or ``:DESC``. Only names present in ``fields`` may be
    referenced.

    Args:
        fields: The requested fields, which act as the allow-list.
        order: The order string.

    Raises:
        InvalidOrderError: If the order is malformed, names a field
            outside ``fields``, or uses an unknown sort direction.

    Returns:
        The clause body, e.g. ``LAST_NAME DESC,FIRST_NAME``.
    """
    if order.rstrip().endswith(","):
        msg = f"Unable to parse the order '{order}', it ends with an empty item."
        raise InvalidOrderError(msg)

    allowed = set(fields)
    items: list[str] = []
    position = 0
    while position < len(order):
        match = ORDER_ITEM.match(order, position)
        if match is None or match.end() == position:
            msg = f"Unable to parse the order '{order}' near position {position}."
            raise InvalidOrderError(msg)
        position = match.end()

        field_name = match.group("field") if match.group("field") is not None else match.group("bare").strip()
        if field_name not in allowed:
            msg = f"The '{field_name}' field was used to order the results but it was not one of the requested fields."
            raise InvalidOrderError(msg)

        item = render_identifier(field_name)
        direction = match.group("direction")
        if direction:
            direction = direction.upper()
            if direction not in SORT_DIRECTIONS:
                msg = f"The '{direction}' sort direction for the '{field_name}' field is not ASC or DESC."
                raise InvalidOrderError(msg)
            item = f"{item} {direction}"
        items.append(item)

    if not items:
        msg = f"Unable to parse the order '{order}'."
        raise InvalidOrderError(msg)
    return ",".join(items)

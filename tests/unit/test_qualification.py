"""Unit tests for sqlbridge.qualification.

Covers rewriting filter expressions into positional placeholders, ORDER BY
validation against the requested fields, and identifier rendering.
"""

import pytest

from sqlbridge.exceptions import InvalidOrderError, QualificationError
from sqlbridge.qualification import (
    EMPTY_QUALIFICATION,
    QualificationParameter,
    build_order_by_clause,
    parse_qualification,
    render_identifier,
)


@pytest.mark.parametrize("expression", [None, "", "   ", "\n\t"])
def test_blank_expression_matches_everything(expression: "str | None") -> None:
    qualification = parse_qualification(expression)

    assert qualification.parameterized_sql == EMPTY_QUALIFICATION == "1=1"
    assert qualification.parameters == ()


def test_expression_without_references_is_unchanged() -> None:
    qualification = parse_qualification("STATUS = 'ACTIVE' AND AGE > 21")

    assert qualification.parameterized_sql == "STATUS = 'ACTIVE' AND AGE > 21"
    assert qualification.parameters == ()


def test_quoted_reference_consumes_quotes() -> None:
    qualification = parse_qualification("""LAST_NAME = '<%= parameter["Last Name"] %>'""")

    assert qualification.parameterized_sql == "LAST_NAME = ?"
    assert qualification.parameters == (QualificationParameter(name="Last Name", index=1),)


def test_unquoted_reference_and_single_quoted_name() -> None:
    qualification = parse_qualification("AGE > <%=parameter['Minimum Age']%>")

    assert qualification.parameterized_sql == "AGE > ?"
    assert qualification.parameter_names == ("Minimum Age",)


def test_indices_follow_order_of_appearance() -> None:
    qualification = parse_qualification(
        """A = '<%= parameter["a"] %>' AND B = <%= parameter["b"] %> OR C = '<%= parameter["a"] %>'"""
    )

    assert qualification.parameterized_sql == "A = ? AND B = ? OR C = ?"
    assert [(p.name, p.index) for p in qualification.parameters] == [("a", 1), ("b", 2), ("a", 3)]


def test_reference_inside_string_literal_is_rejected() -> None:
    expression = """NAME LIKE '%<%= parameter["name"] %>%'"""

    with pytest.raises(QualificationError) as exc_info:
        parse_qualification(expression)

    assert exc_info.value.expression == expression
    assert f"Qualification: {expression}" in str(exc_info.value)


def test_stray_placeholder_is_rejected() -> None:
    with pytest.raises(QualificationError, match="found 2 positional placeholder"):
        parse_qualification("""A = ? AND B = '<%= parameter["b"] %>'""")


def test_unterminated_literal_is_rejected() -> None:
    with pytest.raises(QualificationError):
        parse_qualification("NAME = 'unterminated")


def test_question_mark_inside_literal_is_allowed() -> None:
    qualification = parse_qualification("""NOTE = 'why?' AND ID = <%= parameter["id"] %>""")

    assert qualification.parameterized_sql == "NOTE = 'why?' AND ID = ?"
    assert qualification.parameter_names == ("id",)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("LAST_NAME", "LAST_NAME"),
        ("HR.EMPLOYEE", "HR.EMPLOYEE"),
        ("first name", '"first name"'),
        ('odd"name', '"odd""name"'),
        ("1ST", '"1ST"'),
    ],
)
def test_render_identifier(name: str, expected: str) -> None:
    assert render_identifier(name) == expected


@pytest.mark.parametrize("name", ["", "  ", "HR.", ".EMPLOYEE"])
def test_render_identifier_rejects_empty_parts(name: str) -> None:
    with pytest.raises(InvalidOrderError):
        render_identifier(name)


class TestBuildOrderByClause:
    fields = ("FIRST_NAME", "LAST_NAME", "hire date")

    def test_bare_names_keep_their_order(self) -> None:
        assert build_order_by_clause(self.fields, "LAST_NAME,FIRST_NAME") == "LAST_NAME,FIRST_NAME"

    def test_directions_are_normalized(self) -> None:
        assert build_order_by_clause(self.fields, "LAST_NAME:desc, FIRST_NAME : Asc") == "LAST_NAME DESC,FIRST_NAME ASC"

    def test_field_references(self) -> None:
        order = """<%= field["hire date"] %>:DESC,<%= field['LAST_NAME'] %>"""

        assert build_order_by_clause(self.fields, order) == '"hire date" DESC,LAST_NAME'

    def test_default_order_from_field_string(self) -> None:
        assert build_order_by_clause(self.fields, ",".join(self.fields)) == 'FIRST_NAME,LAST_NAME,"hire date"'

    def test_unrequested_field_is_rejected(self) -> None:
        with pytest.raises(InvalidOrderError, match="'SALARY' field"):
            build_order_by_clause(self.fields, "LAST_NAME,SALARY:DESC")

    def test_injection_attempt_is_rejected(self) -> None:
        with pytest.raises(InvalidOrderError):
            build_order_by_clause(self.fields, "LAST_NAME; DROP TABLE EMPLOYEE")

    def test_unknown_direction_is_rejected(self) -> None:
        with pytest.raises(InvalidOrderError, match="'SIDEWAYS' sort direction"):
            build_order_by_clause(self.fields, "LAST_NAME:sideways")

    @pytest.mark.parametrize("order", ["LAST_NAME,", "LAST_NAME:DESC, ", ",LAST_NAME", "LAST_NAME,,FIRST_NAME"])
    def test_empty_items_are_rejected(self, order: str) -> None:
        with pytest.raises(InvalidOrderError, match="Unable to parse the order"):
            build_order_by_clause(self.fields, order)

    def test_empty_allow_list_rejects_everything(self) -> None:
        with pytest.raises(InvalidOrderError):
            build_order_by_clause((), "LAST_NAME")

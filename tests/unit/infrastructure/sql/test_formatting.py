"""
Unit tests for the query formatting engine.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum, IntEnum
from uuid import UUID

import pytest

from sql_helpers.infrastructure.sql.core.formatting import (
    as_csv,
    as_json,
    as_name,
    as_text,
    as_value,
    render,
)
from sql_helpers.infrastructure.sql.core.identifier import TableName
from sql_helpers.infrastructure.sql.exceptions import FormattingError


class Color(Enum):
    RED = "red"


class Priority(IntEnum):
    HIGH = 3


@dataclass
class Event:
    kind: str
    count: int


@pytest.mark.unit
class TestAsValue:
    """Tests for literal rendering."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (-5, "-5"),
            (1.5, "1.5"),
            (Decimal("10.50"), "10.50"),
            ("hello", "'hello'"),
            ("", "''"),
            ("O'Brien", "'O''Brien'"),
        ],
    )
    def test_scalars(self, value, expected):
        assert as_value(value) == expected

    def test_special_floats(self):
        assert as_value(math.nan) == "'NaN'"
        assert as_value(math.inf) == "'+Infinity'"
        assert as_value(-math.inf) == "'-Infinity'"

    def test_special_decimals(self):
        assert as_value(Decimal("NaN")) == "'NaN'"
        assert as_value(Decimal("-Infinity")) == "'-Infinity'"

    def test_dates_and_times(self):
        assert as_value(date(2024, 1, 2)) == "'2024-01-02'"
        assert as_value(datetime(2024, 1, 2, 3, 4, 5)) == "'2024-01-02T03:04:05'"
        assert as_value(time(1, 2, 3)) == "'01:02:03'"

    def test_bytes_render_as_hex(self):
        assert as_value(b"\x01\xff") == "'\\x01ff'"

    def test_arrays(self):
        assert as_value([1, "a"]) == "array[1,'a']"
        assert as_value((1, 2)) == "array[1,2]"

    def test_nested_arrays(self):
        assert as_value([[1, 2], [3]]) == "array[[1,2],[3]]"

    def test_empty_array(self):
        assert as_value([]) == "'{}'"

    def test_dict_renders_as_json(self):
        assert as_value({"a": 1}) == "'{\"a\": 1}'"

    def test_json_text_is_escaped(self):
        assert as_value({"k": "it's"}) == "'{\"k\": \"it''s\"}'"

    def test_enums_use_their_value(self):
        assert as_value(Color.RED) == "'red'"
        assert as_value(Priority.HIGH) == "3"

    def test_other_objects_are_quoted_text(self):
        value = UUID("12345678-1234-5678-1234-567812345678")
        assert as_value(value) == "'12345678-1234-5678-1234-567812345678'"


@pytest.mark.unit
class TestOtherFilters:
    """Tests for as_name, as_json, as_csv and as_text."""

    def test_as_name_star(self):
        assert as_name("*") == "*"

    def test_as_name_list(self):
        assert as_name(["a", "b"]) == '"a","b"'

    def test_as_name_mapping_uses_keys(self):
        assert as_name({"a": 1, "b": 2}) == '"a","b"'

    def test_as_name_table_name(self):
        assert as_name(TableName("t", schema="s")) == '"s"."t"'

    def test_as_name_empty_list(self):
        with pytest.raises(FormattingError):
            as_name([])

    def test_as_json(self):
        assert as_json([1, 2]) == "'[1, 2]'"
        assert as_json(None) == "null"

    def test_as_csv(self):
        assert as_csv([1, "a", None]) == "1,'a',null"
        assert as_csv(5) == "5"

    def test_as_text(self):
        assert as_text("it's") == "it''s"


@pytest.mark.unit
class TestRender:
    """Tests for render."""

    def test_positional_variables(self):
        result = render("select * from $1~ where id = $2", ["users", 5])
        assert result == 'select * from "users" where id = 5'

    def test_scalar_parameter_is_first_variable(self):
        assert render("select $1", "it's") == "select 'it''s'"

    def test_none_parameters_leave_template(self):
        assert render("select $1", None) == "select $1"

    def test_named_variable_syntaxes(self):
        params = {"a": 1, "b": 2, "c": 3, "d": 4, "e": 5}
        result = render("${a}, $(b), $<c>, $[d], $/e/", params)
        assert result == "1, 2, 3, 4, 5"

    def test_named_variable_with_filter(self):
        assert render("${col~} = ${data:json}", {"col": "x", "data": [1]}) == "\"x\" = '[1]'"

    def test_named_variable_allows_spaces(self):
        assert render("${ name }", {"name": "n"}) == "'n'"

    def test_named_variables_from_dataclass(self):
        assert render("${kind}:${count}", Event("click", 3)) == "'click':3"

    def test_raw_filter(self):
        assert render("values($1^)", ["now()"]) == "values(now())"

    def test_cast_is_kept(self):
        assert render("$1::int", ["5"]) == "'5'::int"

    def test_csv_filter(self):
        assert render("in ($1:csv)", [[1, "a"]]) == "in (1,'a')"

    def test_value_filter(self):
        assert render("like '%$1:value%'", ["it's"]) == "like '%it''s%'"

    def test_unknown_filter_suffix_is_literal_text(self):
        assert render("$1:jsonb", [1]) == "1:jsonb"

    def test_substitution_is_single_pass(self):
        assert render("$1, $2", ["$2", "x"]) == "'$2', 'x'"

    def test_named_variables_ignored_for_positional_params(self):
        assert render("$1 ${x}", [1]) == "1 ${x}"

    def test_positional_variables_ignored_for_named_params(self):
        assert render("$1 ${x}", {"x": 2}) == "$1 2"

    @pytest.mark.parametrize("template", ["$3", "$0"])
    def test_index_out_of_range(self, template):
        with pytest.raises(FormattingError) as exc_info:
            render(template, [1, 2])
        assert exc_info.value.variable == template

    def test_missing_property(self):
        with pytest.raises(FormattingError, match="Property 'missing' doesn't exist"):
            render("${missing}", {"present": 1})

    def test_invalid_variable_name(self):
        with pytest.raises(FormattingError, match="Invalid variable name"):
            render("${a b}", {"a": 1})

    def test_template_must_be_string(self):
        with pytest.raises(FormattingError):
            render(123, [])

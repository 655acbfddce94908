"""
Unit tests for Column and ColumnSet.
"""

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from sql_helpers.infrastructure.sql.core.columns import (
    MISSING,
    Column,
    ColumnContext,
    ColumnSet,
)
from sql_helpers.infrastructure.sql.core.identifier import TableName
from sql_helpers.infrastructure.sql.exceptions import (
    ColumnSetError,
    MissingPropertyError,
)


@dataclass
class Product:
    sku: str
    price: float


class Customer(BaseModel):
    name: str
    email: str


class Reading:
    def __init__(self, sensor, value):
        self.sensor = sensor
        self.value = value
        self._cache = None


class _Instrument:
    __slots__ = ("level",)


class Gauge(_Instrument):
    __slots__ = ("unit", "_raw")

    def __init__(self, level, unit="m"):
        self.level = level
        self.unit = unit
        self._raw = None


@pytest.mark.unit
class TestColumn:
    """Tests for Column construction and parsing."""

    def test_prop_defaults_to_name(self):
        column = Column("val")
        assert column.prop == "val"
        assert column.mod is None
        assert column.cast is None
        assert column.default is MISSING

    def test_escaped_name(self):
        assert Column('odd"name').escaped_name == '"odd""name"'

    @pytest.mark.parametrize(
        "text, name, mod, cast",
        [
            ("val", "val", None, None),
            ("expr^", "expr", "^", None),
            ("expr:raw", "expr", "^", None),
            ("col~", "col", "~", None),
            ("tags:json", "tags", ":json", None),
            ("ids:list", "ids", ":csv", None),
            ("amount::numeric", "amount", None, "numeric"),
            ("payload:json::jsonb", "payload", ":json", "jsonb"),
            ("  first name  ", "first name", None, None),
        ],
    )
    def test_parse_shorthand(self, text, name, mod, cast):
        column = Column.parse(text)
        assert (column.name, column.mod, column.cast) == (name, mod, cast)

    @pytest.mark.parametrize("text", ["", "   ", "a:b", ":json"])
    def test_parse_rejects_invalid_shorthand(self, text):
        with pytest.raises(ColumnSetError):
            Column.parse(text)

    def test_cast_leading_colons_are_stripped(self):
        assert Column("qty", cast="::int").cast == "int"

    def test_invalid_cast_rejected(self):
        with pytest.raises(ColumnSetError):
            Column("qty", cast="int; drop table users")

    def test_invalid_modifier_rejected(self):
        with pytest.raises(ColumnSetError, match="Invalid modifier"):
            Column("qty", mod=":bogus")

    def test_non_callable_init_rejected(self):
        with pytest.raises(ColumnSetError):
            Column("qty", init="not callable")

    def test_from_config(self):
        column = Column.from_config({"name": "total", "prop": "sum", "cast": "numeric", "def": 0})
        assert column.name == "total"
        assert column.prop == "sum"
        assert column.cast == "numeric"
        assert column.default == 0

    def test_from_config_rejects_unknown_keys(self):
        with pytest.raises(ColumnSetError, match="Unknown column configuration keys: bogus"):
            Column.from_config({"name": "a", "bogus": 1})

    def test_from_config_requires_name(self):
        with pytest.raises(ColumnSetError):
            Column.from_config({"prop": "a"})


@pytest.mark.unit
class TestColumnValues:
    """Tests for Column.value_for."""

    def test_reads_prop(self):
        assert Column("total", prop="sum").value_for({"sum": 9}) == 9

    def test_reads_attribute(self):
        assert Column("sku").value_for(Product("A-1", 2.5)) == "A-1"

    def test_default_when_missing(self):
        assert Column("qty", default=1).value_for({}) == 1

    def test_default_none_is_a_value(self):
        assert Column("qty", default=None).value_for({}) is None

    def test_present_none_is_kept(self):
        assert Column("qty", default=1).value_for({"qty": None}) is None

    def test_missing_without_default_raises(self):
        with pytest.raises(MissingPropertyError) as exc_info:
            Column("qty").value_for({"other": 1})
        assert exc_info.value.prop == "qty"

    def test_init_receives_context(self):
        seen = []

        def init(ctx: ColumnContext):
            seen.append(ctx)
            return ctx.value * 2

        record = {"qty": 4}
        assert Column("qty", init=init).value_for(record) == 8
        assert seen == [ColumnContext(record, "qty", 4, True)]

    def test_init_for_missing_property(self):
        column = Column("label", init=lambda ctx: "none" if not ctx.exists else ctx.value)
        assert column.value_for({}) == "none"

    def test_init_sees_default_for_missing_property(self):
        column = Column("qty", default=3, init=lambda ctx: ctx.value + 1)
        assert column.value_for({}) == 4


@pytest.mark.unit
class TestColumnSet:
    """Tests for ColumnSet normalization."""

    def test_from_list_of_names(self):
        cs = ColumnSet(["val", "msg"])
        assert [c.name for c in cs] == ["val", "msg"]
        assert cs.names == '"val","msg"'
        assert cs.variables == "$1,$2"
        assert cs.table is None

    def test_from_single_string(self):
        assert ColumnSet("val").names == '"val"'

    def test_from_single_column(self):
        assert ColumnSet(Column("val", cast="int")).variables == "$1::int"

    def test_from_mixed_specs(self):
        cs = ColumnSet(["id", Column("data", mod=":json"), {"name": "qty", "cast": "int"}])
        assert cs.names == '"id","data","qty"'
        assert cs.variables == "$1,$2:json,$3::int"

    def test_from_mapping_infers_columns(self):
        cs = ColumnSet({"val": 123, "msg": "hello"})
        assert cs.names == '"val","msg"'

    def test_from_record_with_dataclass(self):
        assert ColumnSet.from_record(Product("A-1", 2.5)).names == '"sku","price"'

    def test_from_record_with_pydantic_model(self):
        cs = ColumnSet.from_record(Customer(name="Ann", email="ann@example.com"))
        assert cs.names == '"name","email"'

    def test_from_record_with_plain_object_skips_private(self):
        assert ColumnSet.from_record(Reading("t1", 20.5)).names == '"sensor","value"'

    def test_from_record_with_slotted_object(self):
        assert ColumnSet.from_record(Gauge(1.5)).names == '"level","unit"'

    def test_from_record_rejects_non_records(self):
        with pytest.raises(ColumnSetError):
            ColumnSet.from_record([{"a": 1}])

    def test_non_string_keys_rejected(self):
        with pytest.raises(ColumnSetError):
            ColumnSet({1: "a"})

    def test_copy_of_column_set(self):
        original = ColumnSet(["a", "b"], table="t")
        copy = ColumnSet(original)
        assert copy.columns == original.columns
        assert copy.table is None

    def test_empty_list_gives_empty_set(self):
        cs = ColumnSet([])
        assert len(cs) == 0
        assert cs.names == ""

    def test_duplicate_names_rejected(self):
        with pytest.raises(ColumnSetError) as exc_info:
            ColumnSet(["a", "b", "a"])
        assert exc_info.value.column == "a"
        assert exc_info.value.position == 2

    @pytest.mark.parametrize("spec", [None, 42, [42], [None]])
    def test_invalid_specs_rejected(self, spec):
        with pytest.raises(ColumnSetError):
            ColumnSet(spec)

    def test_table_from_string(self):
        cs = ColumnSet(["a"], table="events")
        assert cs.table == TableName("events")

    def test_table_from_mapping(self):
        cs = ColumnSet(["a"], table={"table": "events", "schema": "audit"})
        assert str(cs.table) == '"audit"."events"'

    def test_columns_are_bound_to_table(self):
        cs = ColumnSet(["a", Column("b", table="other")], table="events")
        assert cs.columns[0].table == TableName("events")
        assert cs.columns[1].table == TableName("other")

    def test_invalid_table_rejected(self):
        with pytest.raises(ColumnSetError):
            ColumnSet(["a"], table="")

    def test_prepare_returns_values_in_column_order(self):
        cs = ColumnSet(["msg", "val"])
        assert cs.prepare({"val": 1, "msg": "x", "extra": True}) == ["x", 1]

    def test_prepare_missing_property(self):
        with pytest.raises(MissingPropertyError):
            ColumnSet(["val", "msg"]).prepare({"val": 1})

    def test_contains_and_len(self):
        cs = ColumnSet(["a", "b"])
        assert len(cs) == 2
        assert "a" in cs
        assert Column("b") in cs
        assert "c" not in cs

    def test_extend_keeps_table(self):
        cs = ColumnSet(["a"], table="t").extend(["b"])
        assert cs.names == '"a","b"'
        assert cs.table == TableName("t")
        assert cs.columns[1].table == TableName("t")

    def test_extend_rejects_duplicates(self):
        with pytest.raises(ColumnSetError):
            ColumnSet(["a"]).extend("a")

    def test_extend_does_not_mutate_original(self):
        cs = ColumnSet(["a"])
        cs.extend(["b"])
        assert cs.names == '"a"'

    def test_repr(self):
        assert repr(ColumnSet(["a", "b"], table="t")) == 'ColumnSet([a, b], table="t")'

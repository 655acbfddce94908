"""
Column and ColumnSet: reusable column descriptors for generated statements.

A ColumnSet normalizes a column specification into an ordered tuple of
immutable Column descriptors. Each descriptor knows the source property it
reads from a record, how its name renders as an SQL identifier, how its value
renders (modifier and cast), and how a missing or raw value is transformed.

Accepted specifications:
    "name"                      a single column from shorthand text
    Column(...)                 a single prepared column
    [spec, ...]                 shorthand strings, Columns or config mappings
    {"a": 1, "b": 2}            a record; columns inferred from its properties
    ColumnSet(...)              copied as-is

Shorthand text is ``name[modifier][::cast]``, e.g. ``"payload:json::jsonb"``.

Example:
    >>> cs = ColumnSet(["id", "payload:json"], table="events")
    >>> cs.names
    '"id","payload"'
    >>> cs.variables
    '$1,$2:json'
    >>> cs.prepare({"id": 1, "payload": {"k": "v"}})
    [1, {'k': 'v'}]
"""

import re
from dataclasses import dataclass, replace
from typing import (
    Any,
    Callable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Union,
)

from sql_helpers.utils.logging import get_logger

from ..exceptions import ColumnSetError, MissingPropertyError
from .identifier import TableName, quote_identifier
from .parameters import build_value_template
from .records import get_property, has_property, is_record, record_properties

logger = get_logger(__name__)


class _Missing:
    """Marker for a column without a default value."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

# Accepted modifiers mapped to the filter used in the value template
_MODIFIERS = {
    "^": "^",
    ":raw": "^",
    "~": "~",
    ":name": "~",
    ":json": ":json",
    ":csv": ":csv",
    ":list": ":csv",
    ":value": ":value",
}

_SHORTHAND = re.compile(
    r"^\s*(?P<name>[^:^~]+?)\s*"
    r"(?P<mod>\^|~|:raw|:name|:json|:csv|:list|:value)?\s*"
    r"(?:::\s*(?P<cast>.+?))?\s*$"
)

_CAST = re.compile(r'^[A-Za-z_][\w\s\[\](),."]*$')

_CONFIG_KEYS = {"name", "prop", "mod", "cast", "default", "def", "init"}


class ColumnContext(NamedTuple):
    """Arguments handed to a column's ``init`` transform."""

    source: Any
    name: str
    value: Any
    exists: bool


@dataclass(frozen=True)
class Column:
    """
    A single column descriptor.

    Args:
        name: Destination column name, rendered as a quoted SQL identifier
        prop: Source property name in the record; defaults to ``name``
        mod: Value modifier: ``^``/``:raw``, ``~``/``:name``, ``:json``,
            ``:csv``/``:list`` or ``:value``
        cast: SQL type appended to the value as ``::cast``
        default: Value used when the record lacks the property
        init: Value transform called with a ColumnContext; its result is
            the value rendered for the column
        table: Owning table, assigned when the column joins a ColumnSet
            that has a table
    """

    name: str
    prop: Optional[str] = None
    mod: Optional[str] = None
    cast: Optional[str] = None
    default: Any = MISSING
    init: Optional[Callable[[ColumnContext], Any]] = None
    table: Optional[TableName] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ColumnSetError("Column name must be a non-empty string")

        if self.prop is None:
            object.__setattr__(self, "prop", self.name)
        elif not isinstance(self.prop, str) or not self.prop.strip():
            raise ColumnSetError("Column property must be a non-empty string", column=self.name)

        if self.mod is not None:
            if self.mod not in _MODIFIERS:
                raise ColumnSetError(f"Invalid modifier '{self.mod}'", column=self.name)
            object.__setattr__(self, "mod", _MODIFIERS[self.mod])

        if self.cast is not None:
            cast = self.cast.strip().lstrip(":").strip() if isinstance(self.cast, str) else ""
            if not _CAST.match(cast):
                raise ColumnSetError(f"Invalid cast '{self.cast}'", column=self.name)
            object.__setattr__(self, "cast", cast)

        if self.init is not None and not callable(self.init):
            raise ColumnSetError("Column init must be callable", column=self.name)

        if self.table is not None:
            try:
                object.__setattr__(self, "table", TableName.coerce(self.table))
            except (TypeError, ValueError) as exc:
                raise ColumnSetError(f"Invalid table: {exc}", column=self.name) from exc

    @property
    def escaped_name(self) -> str:
        """The column name as a quoted SQL identifier."""
        return quote_identifier(self.name)

    @classmethod
    def parse(cls, text: str) -> "Column":
        """
        Build a column from shorthand text ``name[modifier][::cast]``.

        Examples:
            >>> Column.parse("amount::numeric").cast
            'numeric'
            >>> Column.parse("tags:json").mod
            ':json'
        """
        if not isinstance(text, str):
            raise ColumnSetError(f"Invalid column shorthand: {text!r}")
        match = _SHORTHAND.match(text)
        if match is None:
            raise ColumnSetError(f"Invalid column shorthand '{text}'")
        return cls(match.group("name"), mod=match.group("mod"), cast=match.group("cast"))

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "Column":
        """
        Build a column from a configuration mapping.

        Keys: ``name`` (required), ``prop``, ``mod``, ``cast``, ``default``
        (or ``def``) and ``init``.
        """
        unknown = set(config) - _CONFIG_KEYS
        if unknown:
            raise ColumnSetError(
                f"Unknown column configuration keys: {', '.join(sorted(map(str, unknown)))}",
                column=config.get("name"),
            )
        if "default" in config and "def" in config:
            raise ColumnSetError("Use either 'default' or 'def', not both", column=config.get("name"))
        default = config.get("default", config.get("def", MISSING))
        return cls(
            config.get("name"),
            prop=config.get("prop"),
            mod=config.get("mod"),
            cast=config.get("cast"),
            default=default,
            init=config.get("init"),
        )

    def value_for(self, record: Any) -> Any:
        """
        Extract this column's value from a record.

        Raises:
            MissingPropertyError: If the record lacks the property and the
                column has neither a default nor an init transform
        """
        exists = has_property(record, self.prop)
        value = get_property(record, self.prop) if exists else None
        if self.init is not None:
            if not exists and self.default is not MISSING:
                value = self.default
            return self.init(ColumnContext(record, self.name, value, exists))
        if not exists:
            if self.default is MISSING:
                raise MissingPropertyError(self.prop)
            return self.default
        return value


ColumnSpec = Union[str, Column, Mapping[str, Any]]


def _to_column(spec: Any, position: Optional[int] = None) -> Column:
    if isinstance(spec, Column):
        return spec
    if isinstance(spec, str):
        return Column.parse(spec)
    if isinstance(spec, Mapping):
        return Column.from_config(spec)
    raise ColumnSetError(f"Invalid column details: {spec!r}", position=position)


def _columns_from_record(record: Any) -> List[Column]:
    columns = []
    for name in record_properties(record):
        if not isinstance(name, str):
            raise ColumnSetError(f"Record property names must be strings, got {name!r}")
        columns.append(Column(name))
    return columns


class ColumnSet:
    """
    An ordered, immutable set of columns with an optional table.

    Args:
        columns: Column specification (see module docstring)
        table: Optional table as a string, a TableName or a mapping with
            ``table`` and ``schema`` keys

    Raises:
        ColumnSetError: On invalid column details or duplicate column names
    """

    def __init__(
        self,
        columns: Any,
        table: Union[str, TableName, Mapping[str, Any], None] = None,
    ):
        if table is not None:
            try:
                table = TableName.coerce(table)
            except (TypeError, ValueError) as exc:
                raise ColumnSetError(f"Invalid table: {exc}") from exc
        self._table: Optional[TableName] = table

        if isinstance(columns, ColumnSet):
            normalized = list(columns.columns)
        elif isinstance(columns, (str, Column)):
            normalized = [_to_column(columns)]
        elif isinstance(columns, (list, tuple)):
            normalized = [_to_column(spec, position) for position, spec in enumerate(columns)]
        elif is_record(columns):
            normalized = _columns_from_record(columns)
        else:
            raise ColumnSetError(f"Invalid column specification: {columns!r}")

        seen = set()
        for position, column in enumerate(normalized):
            if column.name in seen:
                raise ColumnSetError("Duplicate column name", column=column.name, position=position)
            seen.add(column.name)

        if table is not None:
            normalized = [c if c.table is not None else replace(c, table=table) for c in normalized]

        self._columns: Tuple[Column, ...] = tuple(normalized)
        self._names = ",".join(c.escaped_name for c in self._columns)
        self._variables = build_value_template(self._columns)

    @classmethod
    def from_record(
        cls,
        record: Any,
        table: Union[str, TableName, Mapping[str, Any], None] = None,
    ) -> "ColumnSet":
        """
        Infer a column set from a single record's own properties.

        Only the given record is inspected, so use this for single-record
        inserts; batches need an explicit column list.
        """
        if not is_record(record):
            raise ColumnSetError(f"Cannot infer columns from {type(record).__name__}")
        column_set = cls(_columns_from_record(record), table=table)
        logger.debug(
            "column_set.inferred",
            record_type=type(record).__name__,
            columns=len(column_set),
        )
        return column_set

    @property
    def columns(self) -> Tuple[Column, ...]:
        return self._columns

    @property
    def names(self) -> str:
        """Comma-separated quoted column names, e.g. ``"id","name"``."""
        return self._names

    @property
    def variables(self) -> str:
        """Positional value template, e.g. ``$1,$2::int``."""
        return self._variables

    @property
    def table(self) -> Optional[TableName]:
        return self._table

    def prepare(self, record: Any) -> List[Any]:
        """Extract a record's values in column order, applying defaults and transforms."""
        return [column.value_for(record) for column in self._columns]

    def extend(self, columns: Any) -> "ColumnSet":
        """
        Return a new ColumnSet with extra columns appended.

        The table is kept; a name clash raises ColumnSetError.
        """
        extra = ColumnSet(columns)
        return ColumnSet(list(self._columns) + list(extra.columns), table=self._table)

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns)

    def __contains__(self, item: Any) -> bool:
        name = item.name if isinstance(item, Column) else item
        return any(c.name == name for c in self._columns)

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self._columns)
        table = f", table={self._table}" if self._table else ""
        return f"ColumnSet([{names}]{table})"


__all__ = ["MISSING", "Column", "ColumnContext", "ColumnSet", "ColumnSpec"]

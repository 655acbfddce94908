"""
SQL INSERT statement generation.

Builds complete, ready-to-execute INSERT statements for one record or a batch
of records. Every identifier and value is routed through the formatting
engine, so the returned text contains only quoted names and escaped literals.

Example:
    >>> insert({"val": 123, "msg": "hello"}, None, "my-table")
    'insert into "my-table"("val","msg") values(123,\\'hello\\')'
    >>> insert([{"val": 1}, {"val": 2}], ["val"], "my-table", capitalize=True)
    'INSERT INTO "my-table"("val") VALUES(1),(2)'
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol, Union

from sql_helpers.config import Settings, get_settings
from sql_helpers.utils.logging import get_logger

from ..core.columns import ColumnSet
from ..core.formatting import render
from ..core.identifier import TableName
from ..core.records import is_record
from ..dialects.postgresql import PostgreSQLDialect
from ..exceptions import (
    EmptyBatchError,
    InvalidDataError,
    InvalidRecordError,
    MissingColumnsError,
    SQLGenerationError,
    UnresolvedTableError,
)

logger = get_logger(__name__)

TableRef = Union[str, TableName, Mapping[str, Any]]


class Dialect(Protocol):
    """Protocol for SQL dialects: supplies the INSERT header template."""

    name: str

    def insert_header(self, capitalize: bool = False) -> str: ...


@dataclass(frozen=True)
class InsertOptions:
    """
    Options applied to every statement an InsertBuilder generates.

    Args:
        capitalize: Upper-case the ``insert into``/``values`` keywords
    """

    capitalize: bool = False

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "InsertOptions":
        settings = settings or get_settings()
        return cls(capitalize=settings.capitalize_sql)


def _reject(error: SQLGenerationError, reason: str, **context: Any) -> SQLGenerationError:
    logger.debug("insert.rejected", reason=reason, **context)
    return error


def _is_batch(data: Any) -> bool:
    # named tuples are records, not batches
    if is_record(data):
        return False
    if isinstance(data, (list, tuple)):
        return True
    raise _reject(InvalidDataError(), "invalid_data", data_type=type(data).__name__)


def _resolve_columns(data: Any, columns: Any, batch: bool) -> ColumnSet:
    if isinstance(columns, ColumnSet):
        column_set = columns
    elif columns is None:
        if batch:
            raise _reject(MissingColumnsError(), "missing_columns")
        column_set = ColumnSet.from_record(data)
    else:
        column_set = ColumnSet(columns)

    if not len(column_set):
        raise _reject(
            MissingColumnsError("Cannot generate an insert without columns."),
            "empty_columns",
        )
    return column_set


def _resolve_table(table: Optional[TableRef], column_set: ColumnSet) -> TableName:
    if table is None:
        table = column_set.table
    if isinstance(table, TableName):
        return table
    if isinstance(table, str) and table.strip():
        return TableName(table)
    if isinstance(table, Mapping) and table.get("table"):
        try:
            return TableName.coerce(table)
        except (TypeError, ValueError) as exc:
            raise _reject(
                UnresolvedTableError(), "unresolved_table", detail=str(exc)
            ) from exc
    raise _reject(UnresolvedTableError(), "unresolved_table")


def _render_tuple(column_set: ColumnSet, record: Any) -> str:
    return "(" + render(column_set.variables, column_set.prepare(record)) + ")"


class InsertBuilder:
    """
    High-level builder for INSERT statements.

    Example:
        >>> builder = InsertBuilder(options=InsertOptions(capitalize=True))
        >>> cs = ColumnSet(["val", "msg"], table="my-table")
        >>> builder.insert([{"val": 1, "msg": "a"}, {"val": 2, "msg": "b"}], cs)
        'INSERT INTO "my-table"("val","msg") VALUES(1,\\'a\\'),(2,\\'b\\')'
    """

    def __init__(
        self,
        dialect: Optional[Dialect] = None,
        options: Optional[InsertOptions] = None,
    ):
        """
        Initialize the InsertBuilder.

        Args:
            dialect: SQL dialect supplying the header template; PostgreSQL
                by default
            options: Generation options; keywords stay lower-case by default
        """
        self.dialect = dialect or PostgreSQLDialect()
        self.options = options or InsertOptions()

    def insert(
        self,
        data: Any,
        columns: Any = None,
        table: Optional[TableRef] = None,
    ) -> str:
        """
        Build an INSERT statement for one record or a batch of records.

        Args:
            data: A record (mapping or attribute object), or a list/tuple
                of records for a multi-row insert
            columns: A ColumnSet, a column specification, or None to infer
                the columns from a single record. Required for batches.
            table: Destination table. Falls back to the ColumnSet's table
                when None.

        Returns:
            INSERT SQL statement with all values inlined as literals

        Raises:
            InvalidDataError: data is not a record or a list/tuple
            MissingColumnsError: batch without columns, or no columns at all
            UnresolvedTableError: no table from the argument or the ColumnSet
            EmptyBatchError: batch with zero records
            InvalidRecordError: a batch element is not a record
        """
        batch = _is_batch(data)
        column_set = _resolve_columns(data, columns, batch)
        target = _resolve_table(table, column_set)
        if batch and not data:
            raise _reject(EmptyBatchError(), "empty_batch", table=str(target))

        header = render(
            self.dialect.insert_header(self.options.capitalize),
            [target, column_set.names],
        )

        if batch:
            tuples: List[str] = []
            for index, record in enumerate(data):
                if not is_record(record):
                    raise _reject(
                        InvalidRecordError(index),
                        "invalid_record",
                        index=index,
                        record_type=type(record).__name__,
                    )
                tuples.append(_render_tuple(column_set, record))
            values = ",".join(tuples)
        else:
            values = _render_tuple(column_set, data)

        logger.debug(
            "insert.generated",
            table=str(target),
            rows=len(data) if batch else 1,
            columns=len(column_set),
            capitalized=self.options.capitalize,
        )
        return header + values


def insert(
    data: Any,
    columns: Any = None,
    table: Optional[TableRef] = None,
    capitalize: Optional[bool] = None,
) -> str:
    """
    Generate an INSERT statement for one record or a batch of records.

    Args:
        data: A record, or a list/tuple of records
        columns: A ColumnSet, a column specification, or None (single
            record only)
        table: Destination table; defaults to the ColumnSet's table
        capitalize: Upper-case the statement keywords. None uses the
            configured ``capitalize_sql`` setting.

    Returns:
        INSERT SQL statement

    Example:
        >>> insert([{"val": 123, "msg": "hello"}, {"val": 456, "msg": "world!"}],
        ...        ["val", "msg"], "my-table")
        'insert into "my-table"("val","msg") values(123,\\'hello\\'),(456,\\'world!\\')'
    """
    if capitalize is None:
        options = InsertOptions.from_settings()
    else:
        options = InsertOptions(capitalize=capitalize)
    return InsertBuilder(options=options).insert(data, columns, table)


__all__ = ["Dialect", "InsertBuilder", "InsertOptions", "insert"]

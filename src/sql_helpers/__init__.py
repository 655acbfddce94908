"""
sql-helpers - INSERT statement generation from in-memory records.

Builds complete SQL INSERT statements, single-row or multi-row, with every
identifier quoted and every value inlined as an escaped literal.

Usage:
    >>> from sql_helpers import ColumnSet, insert
    >>> cs = ColumnSet(["val", "msg"], table="my-table")
    >>> insert([{"val": 1, "msg": "a"}, {"val": 2, "msg": "b"}], cs)
    'insert into "my-table"("val","msg") values(1,\\'a\\'),(2,\\'b\\')'
"""

__version__ = "0.1.0"

from sql_helpers.infrastructure.sql import (
    Column,
    ColumnContext,
    ColumnSet,
    ColumnSetError,
    EmptyBatchError,
    FormattingError,
    InsertBuilder,
    InsertOptions,
    InvalidDataError,
    InvalidRecordError,
    MissingColumnsError,
    MissingPropertyError,
    SQLGenerationError,
    TableName,
    UnresolvedTableError,
    insert,
    render,
)

__all__ = [
    "__version__",
    "Column",
    "ColumnContext",
    "ColumnSet",
    "TableName",
    "InsertBuilder",
    "InsertOptions",
    "insert",
    "render",
    "SQLGenerationError",
    "InvalidDataError",
    "MissingColumnsError",
    "InvalidRecordError",
    "UnresolvedTableError",
    "EmptyBatchError",
    "ColumnSetError",
    "MissingPropertyError",
    "FormattingError",
]

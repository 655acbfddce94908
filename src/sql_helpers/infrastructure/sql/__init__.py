"""
SQL module for centralized SQL generation.

This module provides reusable utilities for building SQL statements with
proper identifier quoting, literal escaping, column sets and dialect-specific
syntax.
"""

from .core.columns import MISSING, Column, ColumnContext, ColumnSet
from .core.formatting import as_csv, as_json, as_name, as_value, render
from .core.identifier import TableName, qualify_table, quote_identifier
from .core.parameters import build_placeholders, build_value_template
from .dialects.postgresql import PostgreSQLDialect
from .exceptions import (
    ColumnSetError,
    EmptyBatchError,
    FormattingError,
    InvalidDataError,
    InvalidRecordError,
    MissingColumnsError,
    MissingPropertyError,
    SQLGenerationError,
    UnresolvedTableError,
)
from .operations.insert import InsertBuilder, InsertOptions, insert

__all__ = [
    "quote_identifier",
    "qualify_table",
    "TableName",
    "build_placeholders",
    "build_value_template",
    "render",
    "as_value",
    "as_name",
    "as_json",
    "as_csv",
    "MISSING",
    "Column",
    "ColumnContext",
    "ColumnSet",
    "PostgreSQLDialect",
    "InsertBuilder",
    "InsertOptions",
    "insert",
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

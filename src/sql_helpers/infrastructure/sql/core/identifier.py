"""
SQL identifier handling utilities.

Provides functions for proper quoting and qualification of SQL identifiers
(table names, column names) so that any name, including ones with spaces,
dashes, quotes or non-ASCII characters, is safe to interpolate.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..exceptions import FormattingError


def quote_identifier(name: str) -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: The identifier to quote

    Returns:
        Identifier wrapped in double quotes, internal double quotes doubled

    Raises:
        FormattingError: If name is not a non-empty string

    Examples:
        >>> quote_identifier("my-table")
        '"my-table"'
        >>> quote_identifier('column"name')
        '"column""name"'
    """
    if not isinstance(name, str) or not name:
        raise FormattingError("Invalid SQL name: expected a non-empty string")
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def qualify_table(table: str, schema: Optional[str] = None) -> str:
    """
    Create a fully qualified table name with optional schema prefix.

    Both parts are quoted individually.

    Examples:
        >>> qualify_table("users")
        '"users"'
        >>> qualify_table("users", schema="public")
        '"public"."users"'
    """
    quoted_table = quote_identifier(table)
    if schema:
        return f"{quote_identifier(schema)}.{quoted_table}"
    return quoted_table


@dataclass(frozen=True)
class TableName:
    """
    A table reference with an optional schema.

    A plain string table name is a single identifier; dots in it are not
    treated as schema separators. Use ``schema`` to qualify.

    Example:
        >>> str(TableName("products", schema="store"))
        '"store"."products"'
    """

    name: str
    schema: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Table name must be non-empty string")
        if self.schema is not None and (
            not isinstance(self.schema, str) or not self.schema.strip()
        ):
            raise ValueError("Schema name must be non-empty string when given")

    def __str__(self) -> str:
        return qualify_table(self.name, self.schema)

    @classmethod
    def coerce(cls, value: Union[str, "TableName", Mapping[str, Any]]) -> "TableName":
        """
        Build a TableName from a string, a mapping or an existing TableName.

        Mappings use the keys ``table`` and ``schema``.
        """
        if isinstance(value, TableName):
            return value
        if isinstance(value, str):
            return cls(value)
        if isinstance(value, Mapping):
            return cls(value.get("table"), value.get("schema"))
        raise TypeError(f"Invalid table reference: {value!r}")

"""Core SQL utilities package."""

from .identifier import TableName, qualify_table, quote_identifier
from .parameters import build_placeholders, build_value_template

__all__ = [
    "quote_identifier",
    "qualify_table",
    "TableName",
    "build_placeholders",
    "build_value_template",
]

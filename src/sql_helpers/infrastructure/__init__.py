"""
Infrastructure Layer

Reusable services that turn in-memory data into SQL text. Nothing here
performs I/O or talks to a database.

Components:
- sql: identifier quoting, value formatting, column sets and the INSERT
  generator

Usage:
    from sql_helpers.infrastructure.sql import ColumnSet, insert
"""

__all__: list[str] = []

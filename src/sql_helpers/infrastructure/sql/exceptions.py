"""
Exception hierarchy for SQL statement generation.

Every failure is raised synchronously to the immediate caller. Nothing is
retried or recovered internally, so a caller either receives a complete
statement or one of these errors.
"""

from typing import Optional


class SQLGenerationError(Exception):
    """Base exception for all SQL generation errors."""

    pass


class InvalidDataError(SQLGenerationError, TypeError):
    """Raised when the ``data`` argument is missing or not a structured value."""

    def __init__(self, message: str = "Invalid parameter 'data' specified."):
        super().__init__(message)


class MissingColumnsError(SQLGenerationError, TypeError):
    """Raised when no usable column list can be resolved."""

    def __init__(
        self,
        message: str = "Parameter 'columns' is required when inserting multiple records.",
    ):
        super().__init__(message)


class InvalidRecordError(SQLGenerationError, ValueError):
    """
    Raised when an element of a batch is not a structured value.

    Args:
        index: Zero-based position of the offending element
        message: Optional override of the default message
    """

    def __init__(self, index: int, message: Optional[str] = None):
        self.index = index
        super().__init__(message or f"Invalid insert object at index {index}.")


class UnresolvedTableError(SQLGenerationError, ValueError):
    """Raised when no table name is obtainable from any source."""

    def __init__(self, message: str = "Table name is unknown."):
        super().__init__(message)


class EmptyBatchError(SQLGenerationError, ValueError):
    """Raised when a batch insert is requested for zero records."""

    def __init__(self, message: str = "Cannot generate an insert for an empty array of records."):
        super().__init__(message)


class ColumnSetError(SQLGenerationError, ValueError):
    """
    Raised when a column specification cannot be normalized.

    Args:
        message: Error description
        column: Name of the column that caused the failure (optional)
        position: Index of the column within the specification (optional)
    """

    def __init__(
        self,
        message: str,
        column: Optional[str] = None,
        position: Optional[int] = None,
    ):
        self.column = column
        self.position = position

        context_parts = []
        if column:
            context_parts.append(f"column='{column}'")
        if position is not None:
            context_parts.append(f"position={position}")

        if context_parts:
            full_message = f"{message} ({', '.join(context_parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class MissingPropertyError(SQLGenerationError, ValueError):
    """Raised when a record lacks a column property and nothing supplies a value."""

    def __init__(self, prop: str):
        self.prop = prop
        super().__init__(f"Property '{prop}' doesn't exist.")


class FormattingError(SQLGenerationError, ValueError):
    """
    Raised when a template variable cannot be substituted.

    Args:
        message: Error description
        variable: The template variable as written, e.g. ``$3`` or ``${name}``
    """

    def __init__(self, message: str, variable: Optional[str] = None):
        self.variable = variable
        if variable:
            message = f"{message} (variable='{variable}')"
        super().__init__(message)


__all__ = [
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

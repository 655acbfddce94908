"""
Value template utilities.

Builds the positional variable template used to render one record's values,
e.g. ``$1,$2::int,$3:json``, from a list of column descriptors.
"""

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from .columns import Column


def build_placeholders(columns: Sequence["Column"]) -> List[str]:
    """
    Build one positional placeholder per column.

    The column's modifier follows the index and its cast, if any, is
    appended as ``::type``.

    Examples:
        >>> build_placeholders([Column("id"), Column("data", mod=":json", cast="jsonb")])
        ['$1', '$2:json::jsonb']
    """
    placeholders = []
    for position, column in enumerate(columns, start=1):
        placeholder = f"${position}{column.mod or ''}"
        if column.cast:
            placeholder += f"::{column.cast}"
        placeholders.append(placeholder)
    return placeholders


def build_value_template(columns: Sequence["Column"]) -> str:
    """Join the column placeholders into a comma-separated value template."""
    return ",".join(build_placeholders(columns))

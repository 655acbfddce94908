"""
Query formatting engine.

Substitutes variables in a template string with SQL text. Identifiers are
quoted as SQL names and values are rendered as escaped SQL literals, so the
result can be executed as-is without a separate bind list.

Variable syntax:
    $1, $2 ...              positional, indexing a list/tuple of parameters
    ${name}, $(name),
    $<name>, $[name],
    $/name/                 named, reading a mapping or attribute record

Filters, appended to the index or to the name inside the brackets:
    ^   or :raw             raw text, inserted without escaping
    ~   or :name            SQL name (identifier)
    :json                   JSON text literal
    :csv or :list           comma-separated values
    :value                  escaped text without surrounding quotes

Substitution is a single pass: text produced for one variable is never
scanned for further variables.

Example:
    >>> render("select * from $1~ where id = $2", ["users", 5])
    'select * from "users" where id = 5'
    >>> render("insert into t(data) values(${data:json})", {"data": {"a": 1}})
    'insert into t(data) values(\\'{"a": 1}\\')'
"""

import json
import math
import re
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from ..exceptions import FormattingError
from .identifier import TableName, quote_identifier
from .records import get_property, has_property, is_record

_FILTER = r"\^|~|:raw\b|:name\b|:json\b|:csv\b|:list\b|:value\b"

_VARIABLE = re.compile(
    r"\$(?:"
    r"(?P<index>\d+)(?P<filter>" + _FILTER + r")?"
    r"|\{(?P<curly>[^{}]*)\}"
    r"|\((?P<round>[^()]*)\)"
    r"|<(?P<angle>[^<>]*)>"
    r"|\[(?P<square>[^\[\]]*)\]"
    r"|/(?P<slash>[^/]*)/"
    r")"
)

_NAMED_GROUPS = ("curly", "round", "angle", "square", "slash")

_NAMED_BODY = re.compile(r"^\s*(?P<name>[\w$]+)\s*(?P<filter>" + _FILTER + r")?\s*$")


def _quote_text(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def _as_float(value: float) -> str:
    if math.isnan(value):
        return "'NaN'"
    if math.isinf(value):
        return "'+Infinity'" if value > 0 else "'-Infinity'"
    return repr(value)


def _as_decimal(value: Decimal) -> str:
    if value.is_nan():
        return "'NaN'"
    if value.is_infinite():
        return "'+Infinity'" if value > 0 else "'-Infinity'"
    return str(value)


def _as_array(items: Sequence[Any], nested: bool = False) -> str:
    if not items and not nested:
        return "'{}'"
    body = ",".join(
        _as_array(item, nested=True) if isinstance(item, (list, tuple)) else as_value(item)
        for item in items
    )
    return ("[" if nested else "array[") + body + "]"


def as_value(value: Any) -> str:
    """
    Render a Python value as an escaped SQL literal.

    Examples:
        >>> as_value(None)
        'null'
        >>> as_value("O'Brien")
        "'O''Brien'"
        >>> as_value([1, 2])
        'array[1,2]'
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return as_value(value.value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _as_float(value)
    if isinstance(value, Decimal):
        return _as_decimal(value)
    if isinstance(value, str):
        return _quote_text(value)
    if isinstance(value, (datetime, date, time)):
        return _quote_text(value.isoformat())
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _quote_text("\\x" + bytes(value).hex())
    if isinstance(value, (list, tuple)):
        return _as_array(value)
    if isinstance(value, Mapping):
        return as_json(value)
    return _quote_text(str(value))


def as_json(value: Any) -> str:
    """Render a value as a quoted JSON text literal."""
    if value is None:
        return "null"
    return _quote_text(json.dumps(value, default=str))


def as_csv(value: Any) -> str:
    """Render a sequence as comma-separated literals; a scalar as one literal."""
    if isinstance(value, (list, tuple)):
        return ",".join(as_value(item) for item in value)
    return as_value(value)


def as_text(value: Any) -> str:
    """Render a string escaped but without the surrounding quotes."""
    if isinstance(value, str):
        return value.replace("'", "''")
    return as_value(value)


def as_raw(value: Any) -> str:
    if value is None:
        return "null"
    return str(value)


def as_name(value: Any) -> str:
    """
    Render an SQL name.

    ``*`` is passed through, a TableName renders qualified, a list or tuple
    renders as comma-separated names and a mapping as the names of its keys.
    """
    if isinstance(value, TableName):
        return str(value)
    if isinstance(value, Mapping):
        value = list(value.keys())
    if isinstance(value, (list, tuple)):
        if not value:
            raise FormattingError("Cannot format an empty list of SQL names")
        return ",".join(as_name(item) for item in value)
    if value == "*":
        return "*"
    return quote_identifier(value)


def _apply_filter(value: Any, flt: Optional[str]) -> str:
    if flt in ("^", ":raw"):
        return as_raw(value)
    if flt in ("~", ":name"):
        return as_name(value)
    if flt == ":json":
        return as_json(value)
    if flt in (":csv", ":list"):
        return as_csv(value)
    if flt == ":value":
        return as_text(value)
    return as_value(value)


def render(template: str, params: Any = None) -> str:
    """
    Format a template, substituting variables with escaped SQL text.

    Args:
        template: Query template with positional or named variables
        params: List/tuple for positional variables, a mapping or record
            for named variables, any other value for ``$1``; None leaves
            the template untouched

    Returns:
        The formatted query text

    Raises:
        FormattingError: On out-of-range indexes, malformed variable names
            or properties missing from the record
    """
    if not isinstance(template, str):
        raise FormattingError("Query template must be a string")
    if params is None:
        return template

    positional: Optional[Sequence[Any]] = None
    named: Any = None
    if isinstance(params, (list, tuple)):
        positional = params
    elif is_record(params):
        named = params
    else:
        positional = (params,)

    def _substitute(match: "re.Match[str]") -> str:
        variable = match.group(0)
        index = match.group("index")
        if index is not None:
            if positional is None:
                return variable
            position = int(index)
            if position < 1 or position > len(positional):
                raise FormattingError(
                    f"Variable index out of range; {len(positional)} parameter(s) given",
                    variable=variable,
                )
            return _apply_filter(positional[position - 1], match.group("filter"))

        if named is None:
            return variable
        body = next(match.group(g) for g in _NAMED_GROUPS if match.group(g) is not None)
        parsed = _NAMED_BODY.match(body)
        if parsed is None:
            raise FormattingError("Invalid variable name", variable=variable)
        name = parsed.group("name")
        if not has_property(named, name):
            raise FormattingError(f"Property '{name}' doesn't exist", variable=variable)
        return _apply_filter(get_property(named, name), parsed.group("filter"))

    return _VARIABLE.sub(_substitute, template)


__all__ = [
    "render",
    "as_value",
    "as_name",
    "as_json",
    "as_csv",
    "as_text",
    "as_raw",
]

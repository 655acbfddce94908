"""
Record access helpers.

A record is any structured value that supplies column values: a mapping, or
an attribute-bearing object such as a dataclass instance, a pydantic model,
a named tuple or a slotted class. Scalars, strings, byte strings and other
sequences are never records.
"""

from dataclasses import fields, is_dataclass
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, List, Mapping
from uuid import UUID

from pydantic import BaseModel

_NON_RECORD_TYPES = (
    str,
    bytes,
    bytearray,
    memoryview,
    int,
    float,
    complex,
    Decimal,
    date,
    time,
    timedelta,
    Enum,
    UUID,
    list,
    tuple,
    set,
    frozenset,
)


def is_record(value: Any) -> bool:
    """Return True if value can supply column values by property name."""
    if isinstance(value, Mapping):
        return True
    if isinstance(value, tuple) and hasattr(type(value), "_fields"):
        return True
    if value is None or isinstance(value, _NON_RECORD_TYPES):
        return False
    if isinstance(value, type) or callable(value):
        return False
    return hasattr(value, "__dict__") or hasattr(value, "__slots__")


def _slot_names(record: Any) -> List[str]:
    names: List[str] = []
    for klass in reversed(type(record).__mro__):
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name.startswith("_") or name in names:
                continue
            if hasattr(record, name):
                names.append(name)
    return names


def record_properties(record: Any) -> List[Any]:
    """
    List the property names of a record, in declaration order.

    Mappings yield their keys, named tuples, pydantic models and dataclasses
    their declared fields, and other objects their public instance
    attributes, read from __slots__ when there is no __dict__.
    """
    if isinstance(record, Mapping):
        return list(record.keys())
    if isinstance(record, tuple):
        return list(type(record)._fields)
    if isinstance(record, BaseModel):
        return list(type(record).model_fields)
    if is_dataclass(record):
        return [f.name for f in fields(record)]
    if hasattr(record, "__dict__"):
        return [name for name in vars(record) if not name.startswith("_")]
    return _slot_names(record)


def has_property(record: Any, name: str) -> bool:
    if isinstance(record, Mapping):
        return name in record
    return hasattr(record, name)


def get_property(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record[name]
    return getattr(record, name)

"""Shared serialization utilities for sinks and API responses."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


def camelize(name: str) -> str:
    """Convert a snake_case field name to camelCase."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_dict(obj: Any, camel_case: bool = False) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj, camel_case)
    elif isinstance(obj, dict):
        return {k: serialize_value(v, camel_case) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any, camel_case: bool = False) -> dict:
    """Convert a dataclass to a JSON-ready dict.

    Parameters
    ----------
    obj : Any
        A dataclass instance. Nested dataclasses are converted recursively.
    camel_case : bool
        Rename dataclass fields to camelCase. Keys of plain dict values
        (periods, categories, product names) are data and stay untouched.

    Returns
    -------
    dict
        Serialized dictionary.
    """
    result = {}
    for f in fields(obj):
        key = camelize(f.name) if camel_case else f.name
        result[key] = serialize_value(getattr(obj, f.name), camel_case)
    return result


def serialize_value(value: Any, camel_case: bool = False) -> Any:
    """Serialize a value for JSON output. Money becomes a float."""
    if is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value, camel_case)
    elif isinstance(value, Decimal):
        return float(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif isinstance(value, dict):
        return {serialize_value(k): serialize_value(v, camel_case) for k, v in value.items()}
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(v, camel_case) for v in value]
    return value

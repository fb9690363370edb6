"""Convert loosely typed parsed documents into plain dicts, lists and scalars."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from ..model import NormalizedValue

SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, bool, Enum)


def normalize(value: Any) -> NormalizedValue:
    """Recursively normalize ``value``.

    Mappings and records (dataclasses, ``SimpleNamespace`` and other objects
    with instance attributes) become dicts keyed by field name, other iterables
    become lists with the same length and order, and scalars pass through
    unchanged. Key order follows the source and is not something to rely on.
    Cyclic inputs are not supported.
    """
    if value is None:
        return None
    if isinstance(value, SCALAR_TYPES):
        return value
    if isinstance(value, Mapping):
        return {str(key): normalize(item) for key, item in value.items()}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: normalize(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Iterable):
        return [normalize(item) for item in value]
    fields = _record_fields(value)
    if fields is not None:
        return {name: normalize(item) for name, item in fields.items()}
    return value


def _record_fields(value: Any) -> dict[str, Any] | None:
    try:
        return dict(vars(value))
    except TypeError:
        return None

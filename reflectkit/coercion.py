"""
Typed field writes.

``coerce_and_assign`` routes a boxed Python value to the narrow write that
matches the field's declared primitive kind, converting it on the way:

- integral kinds: any integral number, wrapped to the slot width
- FLOAT / DOUBLE: any real number, rounded to the slot precision; values
  beyond its range become signed infinity
- BOOLEAN: bool only
- CHAR: a one-character str only

A non-integral number for an integral field is rejected rather than truncated,
so ``11.0`` into an ``Int32`` raises CoercionError. Reference fields get a
plain write and are the only fields that accept None.
"""

from __future__ import annotations

import numbers
from collections.abc import Callable
from typing import Any

from .exceptions import CoercionError
from .members import FieldDescriptor
from .types import PrimitiveKind, get_number_value
from .validation import require_field_not_none

_NARROW_WRITES: dict[PrimitiveKind, Callable[[FieldDescriptor, Any, Any], None]] = {
    PrimitiveKind.BYTE: FieldDescriptor.set_byte,
    PrimitiveKind.SHORT: FieldDescriptor.set_short,
    PrimitiveKind.INT: FieldDescriptor.set_int,
    PrimitiveKind.LONG: FieldDescriptor.set_long,
    PrimitiveKind.FLOAT: FieldDescriptor.set_float,
    PrimitiveKind.DOUBLE: FieldDescriptor.set_double,
    PrimitiveKind.BOOLEAN: FieldDescriptor.set_boolean,
    PrimitiveKind.CHAR: FieldDescriptor.set_char,
}


def coerce(kind: PrimitiveKind, value: Any) -> Any:
    """Convert ``value`` to the representation stored in a ``kind`` slot."""
    if value is None:
        raise CoercionError(f"Cannot store None in a {kind.value} field")

    if kind is PrimitiveKind.BOOLEAN:
        if not isinstance(value, bool):
            raise CoercionError(f"Expected bool for a boolean field, got {type(value).__name__}")
        return value

    if kind is PrimitiveKind.CHAR:
        if not isinstance(value, str) or len(value) != 1:
            raise CoercionError(f"Expected a single character for a char field, got {value!r}")
        return value

    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        raise CoercionError(f"Expected a number for a {kind.value} field, got {type(value).__name__}")
    if kind.is_integral and not isinstance(value, numbers.Integral):
        raise CoercionError(f"Cannot store non-integral {value!r} in a {kind.value} field")
    if kind.is_floating and not isinstance(value, numbers.Real):
        raise CoercionError(f"Cannot store {type(value).__name__} in a {kind.value} field")
    return get_number_value(kind, value)


def coerce_and_assign(field: FieldDescriptor, obj: Any, value: Any) -> None:
    """
    Write ``value`` into ``field`` of ``obj`` (None for static fields).

    Must run with the field elevated when it is non-public or final.
    """
    require_field_not_none(field)

    kind = field.primitive_kind
    if kind is None:
        field.set(obj, value)
        return
    _NARROW_WRITES[kind](field, obj, coerce(kind, value))

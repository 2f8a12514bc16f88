"""
Primitive kinds and type classification.

Python has a single unbounded int and a double-precision float, so fixed-width
storage is opted into per field through ``Annotated`` aliases:

    class Counter:
        hits: Int32
        ratio: Float32

Any annotation that is not one of these aliases is a reference type.
"""

from __future__ import annotations

import math
import numbers
import re
import struct
from enum import Enum
from typing import Annotated, Any, ClassVar, Final, get_args, get_origin


class PrimitiveKind(Enum):
    """The eight primitive storage kinds."""

    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    CHAR = "char"

    @property
    def bits(self) -> int:
        return _BITS[self]

    @property
    def is_integral(self) -> bool:
        return self in _INTEGRAL

    @property
    def is_floating(self) -> bool:
        return self in (PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE)

    @property
    def is_numeric(self) -> bool:
        return self.is_integral or self.is_floating

    def widens_to(self, target: PrimitiveKind) -> bool:
        """True if a value of this kind may be stored into a ``target`` slot."""
        return target in _WIDENING[self]

    @classmethod
    def of(cls, annotation: Any) -> PrimitiveKind | None:
        """Primitive kind declared by an annotation, or None for reference types."""
        annotation, _, _ = unwrap_qualifiers(annotation)
        if isinstance(annotation, str):
            return _ALIAS_NAMES.get(_last_segment(annotation))
        if get_origin(annotation) is Annotated:
            for meta in annotation.__metadata__:
                if isinstance(meta, PrimitiveKind):
                    return meta
        return None


_BITS = {
    PrimitiveKind.BYTE: 8,
    PrimitiveKind.SHORT: 16,
    PrimitiveKind.INT: 32,
    PrimitiveKind.LONG: 64,
    PrimitiveKind.FLOAT: 32,
    PrimitiveKind.DOUBLE: 64,
    PrimitiveKind.BOOLEAN: 1,
    PrimitiveKind.CHAR: 16,
}

_INTEGRAL = frozenset({PrimitiveKind.BYTE, PrimitiveKind.SHORT, PrimitiveKind.INT, PrimitiveKind.LONG})

# Source kind -> kinds it may be stored into without an explicit cast
_WIDENING: dict[PrimitiveKind, frozenset[PrimitiveKind]] = {
    PrimitiveKind.BYTE: frozenset(
        {
            PrimitiveKind.BYTE,
            PrimitiveKind.SHORT,
            PrimitiveKind.INT,
            PrimitiveKind.LONG,
            PrimitiveKind.FLOAT,
            PrimitiveKind.DOUBLE,
        }
    ),
    PrimitiveKind.SHORT: frozenset(
        {PrimitiveKind.SHORT, PrimitiveKind.INT, PrimitiveKind.LONG, PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE}
    ),
    PrimitiveKind.CHAR: frozenset(
        {PrimitiveKind.CHAR, PrimitiveKind.INT, PrimitiveKind.LONG, PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE}
    ),
    PrimitiveKind.INT: frozenset({PrimitiveKind.INT, PrimitiveKind.LONG, PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE}),
    PrimitiveKind.LONG: frozenset({PrimitiveKind.LONG, PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE}),
    PrimitiveKind.FLOAT: frozenset({PrimitiveKind.FLOAT, PrimitiveKind.DOUBLE}),
    PrimitiveKind.DOUBLE: frozenset({PrimitiveKind.DOUBLE}),
    PrimitiveKind.BOOLEAN: frozenset({PrimitiveKind.BOOLEAN}),
}


# ============================================================================
# FIELD ANNOTATION ALIASES
# ============================================================================

Int8 = Annotated[int, PrimitiveKind.BYTE]
Int16 = Annotated[int, PrimitiveKind.SHORT]
Int32 = Annotated[int, PrimitiveKind.INT]
Int64 = Annotated[int, PrimitiveKind.LONG]
Float32 = Annotated[float, PrimitiveKind.FLOAT]
Float64 = Annotated[float, PrimitiveKind.DOUBLE]
Boolean = Annotated[bool, PrimitiveKind.BOOLEAN]
Char = Annotated[str, PrimitiveKind.CHAR]

_ALIAS_NAMES: dict[str, PrimitiveKind] = {
    "Int8": PrimitiveKind.BYTE,
    "Int16": PrimitiveKind.SHORT,
    "Int32": PrimitiveKind.INT,
    "Int64": PrimitiveKind.LONG,
    "Float32": PrimitiveKind.FLOAT,
    "Float64": PrimitiveKind.DOUBLE,
    "Boolean": PrimitiveKind.BOOLEAN,
    "Char": PrimitiveKind.CHAR,
}


# ============================================================================
# QUALIFIERS (Final / ClassVar)
# ============================================================================

_QUALIFIED = re.compile(r"^(?:typing\.)?(Final|ClassVar)(?:\[(.*)\])?$", re.DOTALL)


def _last_segment(text: str) -> str:
    return text.strip().rsplit(".", 1)[-1]


def unwrap_qualifiers(annotation: Any) -> tuple[Any, bool, bool]:
    """
    Strip ``Final``/``ClassVar`` wrappers from an annotation.

    Works on evaluated annotations and on their string form.

    Returns:
        (inner annotation, is_final, is_classvar); a bare qualifier yields ``object``
    """
    is_final = False
    is_classvar = False
    while True:
        if isinstance(annotation, str):
            match = _QUALIFIED.match(annotation.strip())
            if not match:
                return annotation, is_final, is_classvar
            if match.group(1) == "Final":
                is_final = True
            else:
                is_classvar = True
            inner = match.group(2)
            annotation = inner.strip() if inner else object
            continue

        if annotation is Final:
            return object, True, is_classvar
        if annotation is ClassVar:
            return object, is_final, True

        origin = get_origin(annotation)
        if origin is Final:
            is_final = True
        elif origin is ClassVar:
            is_classvar = True
        else:
            return annotation, is_final, is_classvar
        args = get_args(annotation)
        annotation = args[0] if args else object


# ============================================================================
# CLASSIFICATION
# ============================================================================


def is_boolean(tp: Any) -> bool:
    return tp is bool or PrimitiveKind.of(tp) is PrimitiveKind.BOOLEAN


def is_char(tp: Any) -> bool:
    return PrimitiveKind.of(tp) is PrimitiveKind.CHAR


def is_string(tp: Any) -> bool:
    return tp is str


def is_integral(tp: Any) -> bool:
    if tp is int:
        return True
    kind = PrimitiveKind.of(tp)
    return kind is not None and kind.is_integral


def is_floating(tp: Any) -> bool:
    if tp is float:
        return True
    kind = PrimitiveKind.of(tp)
    return kind is not None and kind.is_floating


def is_numeric(tp: Any) -> bool:
    return is_integral(tp) or is_floating(tp)


def numeric_kinds() -> tuple[PrimitiveKind, ...]:
    return tuple(kind for kind in PrimitiveKind if kind.is_numeric)


def kind_of_value(value: Any) -> PrimitiveKind | None:
    """Primitive kind a boxed Python value is treated as when it is the source of a write."""
    if isinstance(value, bool):
        return PrimitiveKind.BOOLEAN
    if isinstance(value, numbers.Integral):
        return PrimitiveKind.LONG
    if isinstance(value, numbers.Real):
        return PrimitiveKind.DOUBLE
    if isinstance(value, str) and len(value) == 1:
        return PrimitiveKind.CHAR
    return None


def _wrap_integral(value: int, bits: int) -> int:
    mask = (1 << bits) - 1
    value &= mask
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _to_float32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _to_float(number: numbers.Real) -> float:
    try:
        return float(number)
    except OverflowError:
        # ints and fractions beyond the double range
        return math.inf if number > 0 else -math.inf


def get_number_value(kind: PrimitiveKind, number: Any) -> int | float:
    """
    Convert a number to the representation of ``kind``.

    Integral kinds wrap around (two's complement), FLOAT rounds to single
    precision, DOUBLE converts to ``float``. Values beyond the range of the
    floating kind become signed infinity. Non-integral values are not
    truncated into integral kinds.
    """
    if not kind.is_numeric:
        raise ValueError(f"Cannot recognize numeric kind: {kind}")
    if kind.is_integral:
        if isinstance(number, bool) or not isinstance(number, numbers.Integral):
            raise TypeError(f"Expected an integral number for {kind.value}, got {type(number).__name__}")
        return _wrap_integral(int(number), kind.bits)
    if isinstance(number, bool) or not isinstance(number, numbers.Real):
        raise TypeError(f"Expected a real number for {kind.value}, got {type(number).__name__}")
    value = _to_float(number)
    if kind is PrimitiveKind.FLOAT:
        return _to_float32(value)
    return value

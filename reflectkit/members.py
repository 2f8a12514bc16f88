"""
Member descriptors: handles on one field, method or constructor of a class.

A descriptor is created fresh by every lookup (see ``lookup``) and carries two
pieces of state the access gate flips temporarily:

- the accessible flag (visibility check bypass)
- the modifiers bitmask, of which only FINAL is ever cleared

The raw primitives here enforce both. They never bypass a check on their own;
callers go through ``gate`` to lift them.
"""

from __future__ import annotations

import inspect
from enum import IntFlag
from typing import Any

from .exceptions import CoercionError, IllegalAccessError, InvocationTargetError, type_name
from .types import Int32, PrimitiveKind, get_number_value, kind_of_value


class Modifier(IntFlag):
    PUBLIC = 1
    PRIVATE = 2
    PROTECTED = 4
    STATIC = 8
    FINAL = 16


def mangled_prefix(cls: type) -> str:
    return f"_{cls.__name__.lstrip('_')}__"


def visibility_of(cls: type, attribute: str) -> Modifier:
    """Visibility implied by an attribute name as stored on ``cls``."""
    if attribute.startswith("__") and attribute.endswith("__"):
        return Modifier.PUBLIC
    if attribute.startswith(mangled_prefix(cls)) or attribute.startswith("__"):
        return Modifier.PRIVATE
    if attribute.startswith("_"):
        return Modifier.PROTECTED
    return Modifier.PUBLIC


def format_modifiers(modifiers: int) -> str:
    parts = [
        flag.name.lower()
        for flag in (Modifier.PUBLIC, Modifier.PROTECTED, Modifier.PRIVATE, Modifier.STATIC, Modifier.FINAL)
        if modifiers & flag
    ]
    return " ".join(parts)


class MemberDescriptor:
    """Common state of every member handle."""

    declaring_class: type
    name: str
    attribute: str
    _accessible: bool

    kind = "member"

    def __init__(self, declaring_class: type, name: str, attribute: str):
        self.declaring_class = declaring_class
        self.name = name
        self.attribute = attribute
        self._accessible = False

    @property
    def modifiers(self) -> Modifier:
        raise NotImplementedError

    @property
    def is_static(self) -> bool:
        return bool(self.modifiers & Modifier.STATIC)

    @property
    def is_public(self) -> bool:
        return bool(self.modifiers & Modifier.PUBLIC)

    def is_accessible(self) -> bool:
        return self._accessible

    def set_accessible(self, flag: bool) -> None:
        self._accessible = bool(flag)

    def check_access(self) -> None:
        if not self.is_public and not self._accessible:
            raise IllegalAccessError(
                f"Cannot access {format_modifiers(self.modifiers)} {self.kind} "
                f"'{self.name}' of class '{type_name(self.declaring_class)}'"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MemberDescriptor):
            return NotImplemented
        return (self.kind, self.declaring_class, self.attribute) == (
            other.kind,
            other.declaring_class,
            other.attribute,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.declaring_class, self.attribute))


# =============================================================================
# Fields
# =============================================================================


class FieldDescriptor(MemberDescriptor):
    """
    A data field: an instance attribute or a class-level (static) value.

    ``_modifiers`` is itself a private field of this class. The access gate
    clears FINAL by writing it through a FieldDescriptor looked up on
    FieldDescriptor, so it must stay non-final and Int32-typed.
    """

    type: Any
    _modifiers: Int32

    kind = "field"

    def __init__(self, declaring_class: type, name: str, attribute: str, field_type: Any, modifiers: int):
        super().__init__(declaring_class, name, attribute)
        self.type = field_type
        self._modifiers = int(modifiers)

    @property
    def modifiers(self) -> Modifier:
        return Modifier(self._modifiers)

    @property
    def is_final(self) -> bool:
        return bool(self._modifiers & Modifier.FINAL)

    @property
    def primitive_kind(self) -> PrimitiveKind | None:
        return PrimitiveKind.of(self.type)

    def __repr__(self) -> str:
        type_label = getattr(self.type, "__name__", None) or str(self.type)
        return f"<field {self.declaring_class.__qualname__}.{self.name}: {type_label}>"

    # -------------------------------------------------------------------------
    # Raw read/write
    # -------------------------------------------------------------------------

    def _require_target(self, obj: Any) -> None:
        if not self.is_static and obj is None:
            raise ValueError(f"Instance field '{self.name}' needs a target object")

    def get(self, obj: Any = None) -> Any:
        self.check_access()
        self._require_target(obj)
        if self.is_static:
            try:
                return vars(self.declaring_class)[self.attribute]
            except KeyError:
                raise AttributeError(
                    f"Static field '{self.name}' of '{type_name(self.declaring_class)}' has no value"
                ) from None
        return object.__getattribute__(obj, self.attribute)

    def _check_writable(self) -> None:
        self.check_access()
        if self.is_final:
            raise IllegalAccessError(
                f"Cannot set final field '{self.name}' of class '{type_name(self.declaring_class)}'"
            )

    def _store(self, obj: Any, value: Any) -> None:
        self._require_target(obj)
        if self.is_static:
            type.__setattr__(self.declaring_class, self.attribute, value)
        else:
            object.__setattr__(obj, self.attribute, value)

    def set(self, obj: Any, value: Any) -> None:
        """
        Generic write.

        For primitive-kind fields the value is unboxed and must widen to the
        declared kind; a Python ``int`` counts as LONG and a ``float`` as DOUBLE,
        so narrower slots need ``coercion.coerce_and_assign``.
        """
        self._check_writable()
        kind = self.primitive_kind
        if kind is None:
            self._store(obj, value)
            return
        source = kind_of_value(value)
        if source is None:
            raise CoercionError(f"Cannot set {kind.value} field '{self.name}' to {value!r}")
        self._set_primitive(obj, source, value)

    def _set_primitive(self, obj: Any, source: PrimitiveKind, value: Any) -> None:
        self._check_writable()
        target = self.primitive_kind
        if target is None or not source.widens_to(target):
            label = target.value if target else "reference"
            raise CoercionError(f"Cannot set {label} field '{self.name}' from {source.value} value {value!r}")
        self._store(obj, _widen(source, target, value))

    def set_byte(self, obj: Any, value: int) -> None:
        self._set_primitive(obj, PrimitiveKind.BYTE, value)

    def set_short(self, obj: Any, value: int) -> None:
        self._set_primitive(obj, PrimitiveKind.SHORT, value)

    def set_int(self, obj: Any, value: int) -> None:
        self._set_primitive(obj, PrimitiveKind.INT, value)

    def set_long(self, obj: Any, value: int) -> None:
        self._set_primitive(obj, PrimitiveKind.LONG, value)

    def set_float(self, obj: Any, value: float) -> None:
        self._set_primitive(obj, PrimitiveKind.FLOAT, value)

    def set_double(self, obj: Any, value: float) -> None:
        self._set_primitive(obj, PrimitiveKind.DOUBLE, value)

    def set_boolean(self, obj: Any, value: bool) -> None:
        self._set_primitive(obj, PrimitiveKind.BOOLEAN, value)

    def set_char(self, obj: Any, value: str) -> None:
        self._set_primitive(obj, PrimitiveKind.CHAR, value)


def _widen(source: PrimitiveKind, target: PrimitiveKind, value: Any) -> Any:
    if source is PrimitiveKind.BOOLEAN:
        if not isinstance(value, bool):
            raise CoercionError(f"Expected bool, got {type(value).__name__}")
        return value
    if source is PrimitiveKind.CHAR:
        if not isinstance(value, str) or len(value) != 1:
            raise CoercionError(f"Expected a single character, got {value!r}")
        if target is PrimitiveKind.CHAR:
            return value
        return get_number_value(target, ord(value))
    try:
        # the source value is first brought to its own kind, then widened
        return get_number_value(target, get_number_value(source, value))
    except TypeError as exc:
        raise CoercionError(str(exc)) from exc


# =============================================================================
# Callables
# =============================================================================


def _signature(func: Any) -> inspect.Signature | None:
    try:
        return inspect.signature(func, eval_str=True)
    except (ValueError, TypeError):
        # builtins without introspectable signatures
        return None
    except (NameError, SyntaxError, AttributeError):
        # string annotations that do not resolve stay as strings
        return inspect.signature(func)


def parameter_types(func: Any, *, skip_first: bool) -> tuple[Any, ...] | None:
    """Declared positional parameter types (``object`` where unannotated), or None if unknown."""
    signature = _signature(func)
    if signature is None:
        return None
    params = [
        p
        for p in signature.parameters.values()
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    if skip_first and params:
        params = params[1:]
    return tuple(object if p.annotation is inspect.Parameter.empty else p.annotation for p in params)


def return_type(func: Any) -> Any:
    signature = _signature(func)
    if signature is None or signature.return_annotation is inspect.Signature.empty:
        return object
    return signature.return_annotation


class MethodDescriptor(MemberDescriptor):
    """
    A callable declared in a class body.

    ``binding`` is "instance", "static" (staticmethod) or "class" (classmethod).
    """

    function: Any
    binding: str
    _modifiers: Int32

    kind = "method"

    def __init__(self, declaring_class: type, name: str, attribute: str, function: Any, binding: str):
        super().__init__(declaring_class, name, attribute)
        self.function = function
        self.binding = binding
        modifiers = visibility_of(declaring_class, attribute)
        if binding != "instance":
            modifiers |= Modifier.STATIC
        self._modifiers = int(modifiers)

    @property
    def modifiers(self) -> Modifier:
        return Modifier(self._modifiers)

    @property
    def parameter_types(self) -> tuple[Any, ...] | None:
        return parameter_types(self.function, skip_first=self.binding != "static")

    @property
    def return_type(self) -> Any:
        return return_type(self.function)

    def __repr__(self) -> str:
        return f"<method {self.declaring_class.__qualname__}.{self.name}>"

    def invoke(self, obj: Any, *args: Any) -> Any:
        self.check_access()
        if self.binding == "instance":
            if obj is None:
                raise ValueError(f"Instance method '{self.name}' needs a target object")
            call_args: tuple[Any, ...] = (obj, *args)
        elif self.binding == "class":
            call_args = (type(obj) if obj is not None else self.declaring_class, *args)
        else:
            call_args = args

        try:
            return self.function(*call_args)
        except Exception as exc:
            raise InvocationTargetError(exc) from exc


class ConstructorDescriptor(MemberDescriptor):
    """The effective initializer of a class."""

    _modifiers: Int32

    kind = "constructor"

    def __init__(self, declaring_class: type):
        super().__init__(declaring_class, declaring_class.__name__, "__init__")
        self._modifiers = int(visibility_of(declaring_class, declaring_class.__name__))

    @property
    def modifiers(self) -> Modifier:
        return Modifier(self._modifiers)

    @property
    def parameter_types(self) -> tuple[Any, ...] | None:
        init = self.declaring_class.__init__
        if init is object.__init__:
            return ()
        return parameter_types(init, skip_first=True)

    def __repr__(self) -> str:
        return f"<constructor {self.declaring_class.__qualname__}>"

    def new_instance(self, *args: Any) -> Any:
        self.check_access()
        try:
            return self.declaring_class(*args)
        except Exception as exc:
            raise InvocationTargetError(exc) from exc

"""
Member lookup and type resolution.

Members are resolved by walking ``cls.__mro__`` and taking the first class that
declares the name. Names starting with ``__`` are mangled per class the way the
compiler does, so ``get_field(Data, "__name")`` finds ``Data._Data__name``.

What counts as a declared field of a class:
- an annotation in the class body (instance field, or static with ClassVar or
  with ``Final`` plus a value outside dataclasses)
- a ``__slots__`` entry
- a plain class-level value that is not a routine, class, property or other
  data descriptor (static)
"""

from __future__ import annotations

import builtins
import dataclasses
import inspect
import pkgutil
from collections.abc import Sequence
from typing import Any

from .enumerated import EnumeratedMeta
from .exceptions import (
    ClassNotFoundError,
    NoSuchConstructorError,
    NoSuchFieldError,
    NoSuchMethodError,
)
from .members import (
    ConstructorDescriptor,
    FieldDescriptor,
    MethodDescriptor,
    Modifier,
    mangled_prefix,
    visibility_of,
)
from .types import unwrap_qualifiers
from .validation import (
    require_class_name_not_none,
    require_cls_not_none,
    require_field_name_not_none,
    require_method_name_not_none,
    require_obj_not_none,
    require_types_not_none,
)


# -----------------------------------------------------------------------------
# Class introspection helpers
# -----------------------------------------------------------------------------


def own_annotations(cls: type) -> dict[str, Any]:
    """Annotations declared in the body of ``cls`` itself, evaluated where possible."""
    try:
        return dict(inspect.get_annotations(cls, eval_str=True))
    except (NameError, SyntaxError, TypeError, AttributeError):
        return dict(inspect.get_annotations(cls))


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def mangle(cls: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return mangled_prefix(cls)[:-2] + name
    return name


def demangle(cls: type, attribute: str) -> str:
    prefix = mangled_prefix(cls)
    if attribute.startswith(prefix):
        return attribute[len(prefix) - 2 :]
    return attribute


def _own_slots(cls: type) -> list[str]:
    slots = vars(cls).get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [mangle(cls, slot) for slot in slots if not _is_dunder(slot)]


def _dataclass_field_names(cls: type) -> set[str]:
    if "__dataclass_fields__" not in vars(cls):
        return set()
    return {f.name for f in dataclasses.fields(cls)}


def _is_frozen_dataclass(cls: type) -> bool:
    params = vars(cls).get("__dataclass_params__")
    return bool(params is not None and params.frozen)


def _is_static_value(value: Any) -> bool:
    if isinstance(value, (staticmethod, classmethod, property, type)):
        return False
    if inspect.isroutine(value) or inspect.isdatadescriptor(value):
        return False
    return True


def _inherited_annotation(cls: type, attribute: str) -> Any | None:
    for base in cls.__mro__[1:]:
        annotations = own_annotations(base)
        if attribute in annotations:
            return annotations[attribute]
    return None


# -----------------------------------------------------------------------------
# Per-class declarations
# -----------------------------------------------------------------------------


def _declared_field(cls: type, name: str) -> FieldDescriptor | None:
    attribute = mangle(cls, name)
    if _is_dunder(attribute):
        return None

    own = vars(cls)
    annotations = own_annotations(cls)

    if attribute in annotations:
        field_type, is_final, is_classvar = unwrap_qualifiers(annotations[attribute])
        in_dataclass = attribute in _dataclass_field_names(cls)
        is_static = is_classvar or (is_final and attribute in own and not in_dataclass)
        if in_dataclass and _is_frozen_dataclass(cls):
            is_final = True
    elif attribute in _own_slots(cls):
        field_type, is_final, is_static = object, False, False
    elif attribute in own and _is_static_value(own[attribute]):
        is_static = True
        inherited = _inherited_annotation(cls, attribute)
        if inherited is None:
            field_type, is_final = type(own[attribute]), False
        else:
            field_type, is_final, _ = unwrap_qualifiers(inherited)
        # constants of an enumerated type are static final
        if isinstance(cls, EnumeratedMeta) and isinstance(own[attribute], cls):
            is_final = True
    else:
        return None

    modifiers = visibility_of(cls, attribute)
    if is_static:
        modifiers |= Modifier.STATIC
    if is_final:
        modifiers |= Modifier.FINAL
    return FieldDescriptor(cls, name, attribute, field_type, modifiers)


def _declared_method(cls: type, name: str) -> MethodDescriptor | None:
    attribute = mangle(cls, name)
    raw = vars(cls).get(attribute)
    if raw is None:
        return None
    if isinstance(raw, staticmethod):
        return MethodDescriptor(cls, name, attribute, raw.__func__, "static")
    if isinstance(raw, classmethod):
        return MethodDescriptor(cls, name, attribute, raw.__func__, "class")
    if callable(raw) and inspect.isroutine(raw):
        return MethodDescriptor(cls, name, attribute, raw, "instance")
    return None


def declared_fields(cls: type) -> list[FieldDescriptor]:
    """Fields declared by ``cls`` itself, in declaration order."""
    require_cls_not_none(cls)
    candidates = [*own_annotations(cls), *_own_slots(cls), *vars(cls)]
    seen: set[str] = set()
    fields: list[FieldDescriptor] = []
    for attribute in candidates:
        if attribute in seen:
            continue
        seen.add(attribute)
        field = _declared_field(cls, demangle(cls, attribute))
        if field is not None:
            fields.append(field)
    return fields


def declared_methods(cls: type) -> list[MethodDescriptor]:
    """Methods declared by ``cls`` itself, in declaration order."""
    require_cls_not_none(cls)
    methods = []
    for attribute in vars(cls):
        method = _declared_method(cls, demangle(cls, attribute))
        if method is not None:
            methods.append(method)
    return methods


# -----------------------------------------------------------------------------
# Lookup through the class hierarchy
# -----------------------------------------------------------------------------


def _types_match(declared: Sequence[Any] | None, requested: Sequence[Any]) -> bool:
    if declared is None or len(declared) != len(requested):
        return False
    for expected, given in zip(declared, requested):
        if expected is object or expected == given:
            continue
        if isinstance(expected, type) and isinstance(given, type) and issubclass(given, expected):
            continue
        return False
    return True


def find_field(cls: type, field_name: str) -> FieldDescriptor | None:
    require_cls_not_none(cls)
    require_field_name_not_none(field_name)

    for klass in cls.__mro__:
        field = _declared_field(klass, field_name)
        if field is not None:
            return field
    return None


def get_field(cls: type, field_name: str) -> FieldDescriptor:
    """
    First field named ``field_name`` declared by ``cls`` or one of its parents.

    Raises:
        NoSuchFieldError: if no class in the MRO declares it
    """
    field = find_field(cls, field_name)
    if field is None:
        raise NoSuchFieldError(cls, field_name)
    return field


def has_field(cls: type, field_name: str) -> bool:
    return find_field(cls, field_name) is not None


def get_instance_field(obj: Any, field_name: str) -> FieldDescriptor:
    """
    Field of ``obj`` by name, including attributes only assigned in ``__init__``.

    Declared fields win. Otherwise the instance ``__dict__`` is searched with each
    MRO class's mangling, and the field is reported as declared by that class.
    """
    require_obj_not_none(obj)
    require_field_name_not_none(field_name)

    cls = type(obj)
    field = find_field(cls, field_name)
    if field is not None:
        return field

    state = getattr(obj, "__dict__", None) or {}
    for klass in cls.__mro__:
        attribute = mangle(klass, field_name)
        if attribute in state:
            return FieldDescriptor(
                klass,
                field_name,
                attribute,
                type(state[attribute]),
                visibility_of(klass, attribute),
            )
    raise NoSuchFieldError(cls, field_name)


def get_method(cls: type, method_name: str, types: Sequence[Any] | None = None) -> MethodDescriptor:
    """
    First method named ``method_name`` in the MRO of ``cls``.

    Python has no overloading, so ``types=None`` matches by name alone. With
    ``types`` the declared positional parameters must match them one by one.

    Raises:
        NoSuchMethodError: if nothing matches
    """
    require_cls_not_none(cls)
    require_method_name_not_none(method_name)
    require_types_not_none(types)

    for klass in cls.__mro__:
        method = _declared_method(klass, method_name)
        if method is None:
            continue
        if types is None or _types_match(method.parameter_types, types):
            return method
    raise NoSuchMethodError(cls, method_name, types)


def get_constructor(cls: type, types: Sequence[Any] | None = None) -> ConstructorDescriptor:
    require_cls_not_none(cls)
    require_types_not_none(types)
    if not isinstance(cls, type):
        raise TypeError(f"'cls' should be a class, got {type(cls).__name__}")

    constructor = ConstructorDescriptor(cls)
    if types is not None and not _types_match(constructor.parameter_types, types):
        raise NoSuchConstructorError(cls, types)
    return constructor


def get_class(class_name: str) -> type:
    """
    Resolve a class from its name.

    Accepts ``package.module.Class``, ``package.module:Class.Inner`` and bare
    builtin names such as ``int``.

    Raises:
        ClassNotFoundError: if the name does not resolve to a class
    """
    require_class_name_not_none(class_name)

    if "." not in class_name and ":" not in class_name:
        found = getattr(builtins, class_name, None)
    else:
        try:
            found = pkgutil.resolve_name(class_name)
        except (ImportError, AttributeError, ValueError) as exc:
            raise ClassNotFoundError(class_name) from exc

    if not isinstance(found, type):
        raise ClassNotFoundError(class_name)
    return found

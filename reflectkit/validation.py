"""Argument checks shared by the public API. All run before any elevation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from .exceptions import DuplicateConstantError, type_name

T = TypeVar("T")


def require_not_none(value: T | None, arg_name: str) -> T:
    if value is None:
        raise ValueError(f"'{arg_name}' should not be None")
    return value


def require_obj_not_none(obj: Any) -> Any:
    return require_not_none(obj, "obj")


def require_cls_not_none(cls: type | None) -> type:
    return require_not_none(cls, "cls")


def require_field_not_none(field: Any) -> Any:
    return require_not_none(field, "field")


def require_field_name_not_none(field_name: str | None) -> str:
    return require_not_none(field_name, "field_name")


def require_method_not_none(method: Any) -> Any:
    return require_not_none(method, "method")


def require_method_name_not_none(method_name: str | None) -> str:
    return require_not_none(method_name, "method_name")


def require_member_not_none(member: Any) -> Any:
    return require_not_none(member, "member")


def require_task_not_none(task: Any) -> Any:
    return require_not_none(task, "task")


def require_class_name_not_none(class_name: str | None) -> str:
    return require_not_none(class_name, "class_name")


def require_constant_name_not_none(constant_name: str | None) -> str:
    return require_not_none(constant_name, "constant_name")


def require_types_not_none(types: Sequence[Any] | None) -> None:
    """Each requested parameter type must be given; the sequence itself may be absent."""
    if not types:
        return
    if len(types) == 1:
        require_not_none(types[0], "type")
        return
    for i, tp in enumerate(types, start=1):
        require_not_none(tp, f"type{i}")


def require_length_match(types: Sequence[Any] | None, values: Sequence[Any] | None) -> None:
    if len(types or ()) != len(values or ()):
        raise ValueError("Length of 'types' and 'values' should be equal")


def require_constant_not_exist(cls: Any, constant_name: str) -> None:
    """Case-sensitive check against every existing constant of an enumerated type."""
    require_cls_not_none(cls)
    require_constant_name_not_none(constant_name)

    if any(constant.name == constant_name for constant in cls.values()):
        raise DuplicateConstantError(cls, constant_name)


def require_attribute_not_exist(cls: Any, name: str) -> None:
    """A new constant must not be hidden behind a method or other attribute of the type."""
    require_cls_not_none(cls)
    require_constant_name_not_none(name)

    if hasattr(cls, name):
        raise ValueError(f"Enum '{type_name(cls)}' already has an attribute with name '{name}'")

"""
Field access by name or descriptor.

Names are resolved through the MRO (see ``lookup``); every access is a single
pass through the access gate, so private and final fields are readable and
writable and their flags are restored afterwards.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .gate import read_field, run_with_elevated_access, write_field
from .lookup import get_field, get_instance_field
from .members import FieldDescriptor
from .validation import (
    require_cls_not_none,
    require_field_name_not_none,
    require_field_not_none,
    require_obj_not_none,
    require_task_not_none,
)

FieldRef = FieldDescriptor | str


def _instance_field(obj: Any, field: FieldRef) -> FieldDescriptor:
    if isinstance(field, FieldDescriptor):
        return field
    require_field_name_not_none(field)
    return get_instance_field(obj, field)


def _static_field(cls: type, field: FieldRef) -> FieldDescriptor:
    if isinstance(field, FieldDescriptor):
        return field
    require_field_name_not_none(field)
    return get_field(cls, field)


def get_field_value(obj: Any, field: FieldRef) -> Any:
    """Value of an instance field of ``obj``."""
    require_obj_not_none(obj)
    require_field_not_none(field)

    return read_field(obj, _instance_field(obj, field))


def get_static_field_value(cls: type, field: FieldRef) -> Any:
    """Value of a static field declared by ``cls`` or one of its parents."""
    require_cls_not_none(cls)
    require_field_not_none(field)

    return read_field(None, _static_field(cls, field))


def set_field_value(obj: Any, field: FieldRef, value: Any) -> None:
    require_obj_not_none(obj)
    require_field_not_none(field)

    write_field(obj, _instance_field(obj, field), value)


def set_static_field_value(cls: type, field: FieldRef, value: Any) -> None:
    require_cls_not_none(cls)
    require_field_not_none(field)

    write_field(None, _static_field(cls, field), value)


def update_field_value(obj: Any, field: FieldRef, task: Callable[[FieldDescriptor], Any]) -> None:
    """Run ``task`` on the elevated instance field; the task does its own get/set."""
    require_obj_not_none(obj)
    require_field_not_none(field)
    require_task_not_none(task)

    run_with_elevated_access(_instance_field(obj, field), task)


def update_static_field_value(cls: type, field: FieldRef, task: Callable[[FieldDescriptor], Any]) -> None:
    """
    Run ``task`` on the elevated static field.

    Usage:
        update_static_field_value(Registry, "_ITEMS", lambda f: f.set(None, (*f.get(None), item)))
    """
    require_cls_not_none(cls)
    require_field_not_none(field)
    require_task_not_none(task)

    run_with_elevated_access(_static_field(cls, field), task)


def get_field_type(field: FieldDescriptor | None, default: Any = None) -> Any:
    """Declared type of ``field``, or ``default`` when no field is given."""
    return default if field is None else field.type

"""Method invocation by name or descriptor."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .gate import invoke
from .lookup import get_method
from .members import MethodDescriptor
from .validation import (
    require_cls_not_none,
    require_length_match,
    require_method_not_none,
    require_obj_not_none,
)

MethodRef = MethodDescriptor | str


def _resolve(cls: type, method: MethodRef, args: Sequence[Any], types: Sequence[Any] | None) -> MethodDescriptor:
    if isinstance(method, MethodDescriptor):
        return method
    if types is not None:
        require_length_match(types, args)
    return get_method(cls, method, types)


def invoke_method(obj: Any, method: MethodRef, *args: Any, types: Sequence[Any] | None = None) -> Any:
    """
    Call an instance method of ``obj`` regardless of its visibility.

    Args:
        obj: Target instance
        method: Descriptor, or a name resolved through ``type(obj)``'s MRO
        args: Positional arguments
        types: Optional parameter types to select the method by signature

    Returns:
        The method's return value
    """
    require_obj_not_none(obj)
    require_method_not_none(method)

    return invoke(obj, _resolve(type(obj), method, args, types), *args)


def invoke_static_method(cls: type, method: MethodRef, *args: Any, types: Sequence[Any] | None = None) -> Any:
    """Call a staticmethod or classmethod of ``cls`` regardless of its visibility."""
    require_cls_not_none(cls)
    require_method_not_none(method)

    return invoke(None, _resolve(cls, method, args, types), *args)


def get_return_type(method: MethodDescriptor | None, default: Any = None) -> Any:
    return default if method is None else method.return_type

"""Instance creation through a class's initializer, by class or by class name."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .gate import invoke
from .lookup import get_class, get_constructor
from .validation import require_length_match, require_not_none


def invoke_constructor(cls: type | str, *args: Any, types: Sequence[Any] | None = None) -> Any:
    """
    Create an instance of ``cls`` (a class or a resolvable class name).

    Raises:
        ClassNotFoundError: if a name does not resolve
        NoSuchConstructorError: if ``types`` does not match the initializer
        ReflectionError: if the initializer raises
    """
    require_not_none(cls, "cls")
    if types is not None:
        require_length_match(types, args)

    if isinstance(cls, str):
        cls = get_class(cls)
    return invoke(None, get_constructor(cls, types), *args)

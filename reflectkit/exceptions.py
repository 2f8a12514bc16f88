"""
Exception hierarchy for reflectkit.

Two families:
- ReflectionError: the domain failure surfaced to callers (lookup failures,
  wrapped reflective failures, failed enum injections)
- ReflectiveOperationError: raised by the raw member primitives themselves
  (access denied, coercion mismatch, target raised). The access gate wraps
  these into ReflectionError; anything else propagates untouched.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def type_name(cls: Any) -> str:
    """Fully qualified name of a class, for diagnostics."""
    if isinstance(cls, type):
        return f"{cls.__module__}.{cls.__qualname__}"
    return repr(cls)


def _format_types(types: Sequence[Any] | None) -> str:
    if not types:
        return "[]"
    return "[" + ", ".join(getattr(t, "__name__", None) or repr(t) for t in types) + "]"


class ReflectionError(Exception):
    """Domain-level failure of a reflective operation."""

    def __init__(self, message_or_cause: str | BaseException):
        if isinstance(message_or_cause, BaseException):
            cause = message_or_cause
            super().__init__(f"{type(cause).__name__}: {cause}")
            self.__cause__ = cause
        else:
            super().__init__(message_or_cause)


# -----------------------------------------------------------------------------
# Lookup failures
# -----------------------------------------------------------------------------


class NoSuchMemberError(ReflectionError, LookupError):
    """A member was not found in a class or any of its parents."""

    def __init__(self, cls: type, name: str, message: str):
        super().__init__(message)
        self.cls = cls
        self.name = name


class NoSuchFieldError(NoSuchMemberError):
    def __init__(self, cls: type, field_name: str):
        super().__init__(
            cls,
            field_name,
            f"Field '{field_name}' was not found in class '{type_name(cls)}' and its parents",
        )


class NoSuchMethodError(NoSuchMemberError):
    def __init__(self, cls: type, method_name: str, types: Sequence[Any] | None = None):
        super().__init__(
            cls,
            method_name,
            f"Method '{method_name}' with arguments '{_format_types(types)}' "
            f"was not found in class '{type_name(cls)}' and its parents",
        )
        self.types = tuple(types or ())


class NoSuchConstructorError(NoSuchMemberError):
    def __init__(self, cls: type, types: Sequence[Any] | None = None):
        super().__init__(
            cls,
            "__init__",
            f"Constructor with arguments '{_format_types(types)}' "
            f"was not found in class '{type_name(cls)}'",
        )
        self.types = tuple(types or ())


class ClassNotFoundError(ReflectionError, LookupError):
    def __init__(self, class_name: str):
        super().__init__(f"Class '{class_name}' was not found")
        self.class_name = class_name


class DuplicateConstantError(ValueError):
    """An enumerated type already has a constant with the requested name."""

    def __init__(self, cls: type, constant_name: str):
        super().__init__(
            f"Enum '{type_name(cls)}' already has a constant with name '{constant_name}'"
        )
        self.cls = cls
        self.constant_name = constant_name


# -----------------------------------------------------------------------------
# Failures raised by raw member primitives
# -----------------------------------------------------------------------------


class ReflectiveOperationError(Exception):
    """Base for failures raised by field/method/constructor primitives."""


class IllegalAccessError(ReflectiveOperationError):
    """Member is not accessible, or a final field was written."""


class CoercionError(ReflectiveOperationError, TypeError):
    """Value does not match the declared kind of a field."""


class InvocationTargetError(ReflectiveOperationError):
    """The invoked method or constructor raised."""

    def __init__(self, target: BaseException):
        super().__init__(f"{type(target).__name__}: {target}")
        self.target = target
        self.__cause__ = target

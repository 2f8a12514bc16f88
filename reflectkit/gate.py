"""
Scoped privilege elevation for member access.

Every read, write and invoke in reflectkit runs inside ``elevated``:

1. remember the member's accessible flag and force it on
2. for fields, remember the modifiers and clear FINAL by writing the
   descriptor's own ``_modifiers`` field, itself through an accessible
   metadata field descriptor
3. run the operation
4. restore in reverse order: modifiers, the metadata field's flag, then the
   member's flag

Restoration runs on every exit path. Failures of the reflective primitives
(ReflectiveOperationError) are re-raised as ReflectionError with the original
as cause; any other exception passes through unchanged.

The elevate/restore window is not locked. Concurrent access to the same
descriptor object must be serialised by the caller; lookups hand out fresh
descriptors, so independent callers do not share flags.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from .coercion import coerce_and_assign
from .exceptions import ReflectionError, ReflectiveOperationError
from .lookup import get_field
from .members import ConstructorDescriptor, FieldDescriptor, MemberDescriptor, MethodDescriptor, Modifier
from .validation import require_field_not_none, require_member_not_none, require_task_not_none

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=MemberDescriptor)
R = TypeVar("R")

# Field of FieldDescriptor holding the modifiers bitmask
MODIFIERS_FIELD = "_modifiers"


@contextmanager
def _final_cleared(field: FieldDescriptor) -> Iterator[None]:
    modifiers_field = get_field(FieldDescriptor, MODIFIERS_FIELD)
    accessible = modifiers_field.is_accessible()
    modifiers = int(field.modifiers)

    try:
        modifiers_field.set_accessible(True)
        modifiers_field.set_int(field, modifiers & ~int(Modifier.FINAL))
        yield
    finally:
        modifiers_field.set_int(field, modifiers)
        modifiers_field.set_accessible(accessible)


@contextmanager
def elevated(member: M) -> Iterator[M]:
    """
    Context manager form of the elevation protocol.

    Usage:
        with elevated(get_field(Data, "__name")) as field:
            field.set(data, "y")
    """
    require_member_not_none(member)

    accessible = member.is_accessible()
    logger.debug("Elevating %r (accessible=%s)", member, accessible)

    try:
        member.set_accessible(True)
        if isinstance(member, FieldDescriptor):
            with _final_cleared(member):
                yield member
        else:
            yield member
    except ReflectiveOperationError as exc:
        raise ReflectionError(exc) from exc
    finally:
        member.set_accessible(accessible)
        logger.debug("Restored %r (accessible=%s)", member, accessible)


def with_elevated_access(member: M, task: Callable[[M], R]) -> R:
    """
    Run ``task(member)`` with visibility and immutability checks lifted.

    Returns:
        Whatever ``task`` returns

    Raises:
        ValueError: if ``member`` or ``task`` is None (nothing is elevated)
        ReflectionError: if the task fails inside a reflective primitive
    """
    require_member_not_none(member)
    require_task_not_none(task)

    with elevated(member) as elevated_member:
        return task(elevated_member)


def run_with_elevated_access(member: M, task: Callable[[M], Any]) -> None:
    """Same as ``with_elevated_access`` for tasks run for their effect only."""
    require_member_not_none(member)
    require_task_not_none(task)

    with_elevated_access(member, task)


# -----------------------------------------------------------------------------
# Single-gate operations
# -----------------------------------------------------------------------------


def read_field(obj: Any, field: FieldDescriptor) -> Any:
    """Value of ``field`` on ``obj``, or of the static slot when ``obj`` is None."""
    require_field_not_none(field)
    return with_elevated_access(field, lambda f: f.get(obj))


def write_field(obj: Any, field: FieldDescriptor, value: Any) -> None:
    """Store ``value`` into ``field`` with primitive coercion; ``obj`` is None for static fields."""
    require_field_not_none(field)
    run_with_elevated_access(field, lambda f: coerce_and_assign(f, obj, value))


def invoke(obj: Any, member: MethodDescriptor | ConstructorDescriptor, *args: Any) -> Any:
    """
    Call a method (``obj`` is None for static ones) or a constructor (``obj`` is ignored).
    """
    require_member_not_none(member)
    if isinstance(member, ConstructorDescriptor):
        return with_elevated_access(member, lambda c: c.new_instance(*args))
    if isinstance(member, MethodDescriptor):
        return with_elevated_access(member, lambda m: m.invoke(obj, *args))
    raise TypeError(f"Unknown member kind: {type(member).__name__}")

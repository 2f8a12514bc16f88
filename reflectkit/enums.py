"""
Runtime extension of enumerated types.

``add_constant`` appends a constant to an existing ``Enumerated`` type without
re-running class creation and without touching the constants already handed
out:

1. validate: the name must not exist yet, as a constant or as any other
   attribute of the type (nothing is mutated on failure)
2. allocate the instance with ``object.__new__`` (no initializer runs)
3. stamp ``_name`` and ``_ordinal`` through the access gate
4. run the caller's extension hook to fill payload fields
5. replace ``_VALUES`` with a tuple one element longer
6. reset both derived caches so the next access rebuilds them

A failing hook leaves the type exactly as it was. A failure after step 4 is
not rolled back; the caches may then disagree with ``_VALUES``.

Injections are serialised by a process-wide lock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from .enumerated import Enumerated, EnumeratedMeta
from .exceptions import ReflectionError, type_name
from .fields import set_static_field_value, update_static_field_value
from .gate import run_with_elevated_access
from .lookup import get_field
from .validation import (
    require_attribute_not_exist,
    require_cls_not_none,
    require_constant_name_not_none,
    require_constant_not_exist,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enumerated)

BACKING_FIELD = "_VALUES"
DERIVED_CACHE_FIELDS = ("_constants_cache", "_directory_cache")

_INJECTION_LOCK = threading.RLock()


def _set_enum_field(field_name: str, constant: Enumerated, value: Any) -> None:
    field = get_field(Enumerated, field_name)
    run_with_elevated_access(field, lambda f: f.set(constant, value))


def _append_to_backing_sequence(cls: type, constant: Enumerated) -> None:
    def append(field: Any) -> None:
        old_values = field.get(None)
        field.set(None, (*old_values, constant))

    update_static_field_value(cls, BACKING_FIELD, append)


def add_constant(
    cls: type[E],
    constant_name: str,
    extension: Callable[[E], Any] | None = None,
) -> E:
    """
    Add a constant named ``constant_name`` to the enumerated type ``cls``.

    Args:
        cls: An ``Enumerated`` subclass
        constant_name: Name of the new constant (case-sensitive, must be new)
        extension: Called with the new constant before it is published, to set
            extra payload fields

    Returns:
        The new constant; its ordinal is the previous constant count

    Raises:
        ValueError: if an argument is None, or the name is taken by a method or
            other attribute of the type
        TypeError: if ``cls`` is not an enumerated type
        DuplicateConstantError: if the name already exists
        ReflectionError: if any later step, including ``extension``, fails
    """
    require_cls_not_none(cls)
    require_constant_name_not_none(constant_name)
    if not isinstance(cls, EnumeratedMeta) or cls is Enumerated:
        raise TypeError(f"'{type_name(cls)}' is not an enumerated type")

    with _INJECTION_LOCK:
        require_constant_not_exist(cls, constant_name)
        require_attribute_not_exist(cls, constant_name)

        try:
            constant = object.__new__(cls)
            ordinal = len(cls.values())
            _set_enum_field("_name", constant, constant_name)
            _set_enum_field("_ordinal", constant, ordinal)
            logger.debug("Allocated %s.%s with ordinal %d", cls.__qualname__, constant_name, ordinal)

            if extension is not None:
                extension(constant)

            _append_to_backing_sequence(cls, constant)
            for field_name in DERIVED_CACHE_FIELDS:
                set_static_field_value(cls, field_name, None)
        except ReflectionError:
            raise
        except Exception as exc:
            raise ReflectionError(exc) from exc

    logger.info("Added constant %s.%s", cls.__qualname__, constant_name)
    return constant

"""
Enumerated types with an append-only constant table.

    class CarBrand(Enumerated):
        BMW = ()
        MERCEDES = ()

    class Planet(Enumerated):
        EARTH = (5.976e24, 6.37814e6)

        def __init__(self, mass: float, radius: float) -> None:
            self.mass = mass
            self.radius = radius

Every public, non-callable value in the class body declares a constant; the
value is the initializer argument list (a non-tuple value is a single
argument). Constants get ``name`` and zero-based ``ordinal`` in definition
order.

State kept on each enumerated class:
- ``_VALUES``: the authoritative tuple of constants
- ``_constants_cache``: ordered tuple, built lazily from ``_VALUES``
- ``_directory_cache``: name -> constant, built lazily from the above

The class is closed to ordinary code: it cannot be called, its constants and
``_VALUES`` cannot be reassigned, and a type with constants cannot be
subclassed. ``enums.add_constant`` is the supported way to extend it.
"""

from __future__ import annotations

import inspect
from collections.abc import Iterator
from typing import Any, ClassVar, Final

_PROTECTED_NAMES = frozenset({"_VALUES"})
_IDENTITY_FIELDS = frozenset({"_name", "_ordinal"})


def _is_constant_declaration(key: str, value: Any) -> bool:
    if key.startswith("_"):
        return False
    if isinstance(value, (staticmethod, classmethod, property, type)):
        return False
    return not (inspect.isroutine(value) or hasattr(value, "__get__"))


class EnumeratedMeta(type):
    """Metaclass building and guarding the constant table."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any], **kwargs: Any):
        declared = [(key, value) for key, value in namespace.items() if _is_constant_declaration(key, value)]
        body = {key: value for key, value in namespace.items() if key not in dict(declared)}

        for base in bases:
            if isinstance(base, EnumeratedMeta) and base._VALUES:
                raise TypeError(f"Cannot extend enumerated type '{base.__qualname__}'")

        cls = super().__new__(mcs, name, bases, body, **kwargs)
        if not any(isinstance(base, EnumeratedMeta) for base in bases):
            return cls

        values = []
        for ordinal, (key, args) in enumerate(declared):
            constant = object.__new__(cls)
            object.__setattr__(constant, "_name", key)
            object.__setattr__(constant, "_ordinal", ordinal)
            constant.__init__(*(args if isinstance(args, tuple) else (args,)))
            type.__setattr__(cls, key, constant)
            values.append(constant)

        type.__setattr__(cls, "_VALUES", tuple(values))
        type.__setattr__(cls, "_constants_cache", None)
        type.__setattr__(cls, "_directory_cache", None)
        return cls

    # -------------------------------------------------------------------------
    # Constant access
    # -------------------------------------------------------------------------

    def values(cls) -> tuple[Any, ...]:
        """Snapshot of the authoritative constant sequence."""
        return tuple(vars(cls).get("_VALUES", ()))

    def constants(cls) -> tuple[Any, ...]:
        """All constants in ordinal order (cached)."""
        cached = vars(cls).get("_constants_cache")
        if cached is None:
            cached = cls.values()
            type.__setattr__(cls, "_constants_cache", cached)
        return cached

    def _directory(cls) -> dict[str, Any]:
        directory = vars(cls).get("_directory_cache")
        if directory is None:
            directory = {constant.name: constant for constant in cls.constants()}
            type.__setattr__(cls, "_directory_cache", directory)
        return directory

    def value_of(cls, name: str) -> Any:
        """Constant named ``name``; ValueError if there is none."""
        try:
            return cls._directory()[name]
        except KeyError:
            raise ValueError(f"No enum constant {cls.__qualname__}.{name}") from None

    def __getitem__(cls, name: str) -> Any:
        return cls._directory()[name]

    def __getattr__(cls, name: str) -> Any:
        # only reached for names not set on the class, e.g. injected constants
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return cls._directory()[name]
        except KeyError:
            raise AttributeError(f"type object '{cls.__qualname__}' has no attribute '{name}'") from None

    def __iter__(cls) -> Iterator[Any]:
        return iter(cls.constants())

    def __len__(cls) -> int:
        return len(cls.constants())

    def __contains__(cls, item: Any) -> bool:
        return isinstance(item, cls) and item in cls.constants()

    def __bool__(cls) -> bool:
        return True

    # -------------------------------------------------------------------------
    # Closed-type guards
    # -------------------------------------------------------------------------

    def __call__(cls, *args: Any, **kwargs: Any):
        raise TypeError(f"Cannot instantiate enumerated type '{cls.__qualname__}'")

    def __setattr__(cls, name: str, value: Any) -> None:
        if name in _PROTECTED_NAMES or name in cls._directory():
            raise AttributeError(f"Cannot reassign '{name}' of enumerated type '{cls.__qualname__}'")
        super().__setattr__(name, value)

    def __delattr__(cls, name: str) -> None:
        if name in _PROTECTED_NAMES or name in cls._directory():
            raise AttributeError(f"Cannot delete '{name}' of enumerated type '{cls.__qualname__}'")
        super().__delattr__(name)

    def __repr__(cls) -> str:
        return f"<enumerated '{cls.__qualname__}'>"


class Enumerated(metaclass=EnumeratedMeta):
    """Base class of enumerated types."""

    _name: Final[str]
    _ordinal: Final[int]

    _VALUES: Final[tuple] = ()
    _constants_cache: ClassVar[tuple | None] = None
    _directory_cache: ClassVar[dict | None] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def ordinal(self) -> int:
        return self._ordinal

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IDENTITY_FIELDS:
            raise AttributeError(f"Cannot reassign '{name}' of {self!r}")
        super().__setattr__(name, value)

    def __lt__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._ordinal < other._ordinal

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__}.{self._name}: {self._ordinal}>"

    def __str__(self) -> str:
        return self._name

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self).value_of, (self._name,)

    def __copy__(self) -> Enumerated:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Enumerated:
        return self

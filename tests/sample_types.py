"""Classes exercised by the test suite."""

from dataclasses import dataclass
from typing import ClassVar, Final

from reflectkit import Boolean, Char, Enumerated, Float32, Float64, Int8, Int16, Int32, Int64


class BaseData:
    __AUTO_BASE: ClassVar[str] = "audi"

    _base_name: Final[str]

    def __init__(self, base_name: str = "base") -> None:
        self._base_name = base_name

    def _base_greeting(self) -> str:
        return f"hello {self._base_name}"

    @staticmethod
    def __base_marker() -> str:
        return "blue"


class Data(BaseData):
    __AUTO: Final[str] = "ferrari"
    __counter: ClassVar[int] = 0

    __name: Final[str]
    __age: Final[int]
    __marker: Final[bool]

    def __init__(self, name: str = "oleg.cherednik", age: int = 666, marker: bool = False) -> None:
        super().__init__()
        self.__name = name
        self.__age = age
        self.__marker = marker

    @property
    def name(self) -> str:
        return self.__name

    @property
    def age(self) -> int:
        return self.__age

    @property
    def marker(self) -> bool:
        return self.__marker

    @staticmethod
    def __get_marker() -> str:
        return "green"

    @staticmethod
    def __add_postfix_bar(value: str) -> str:
        return value + "_bar"

    @staticmethod
    def __mul(one: int, two: int) -> int:
        return one * two

    @classmethod
    def _create(cls, name: str) -> "Data":
        return cls(name)

    def __get_city(self) -> str:
        return "Saint-Petersburg"

    def __add_prefix_foo(self, value: str) -> str:
        return "foo_" + value

    def __sum(self, one: int, two: int) -> int:
        return one + two

    def __concat(self, one: int, two: int, three: int) -> str:
        return f"{one}{two}{three}"

    def _fail(self, message: str) -> None:
        raise ValueError(message)


class Primitives:
    LIMIT: ClassVar[Int16] = 10

    byte_value: Int8
    short_value: Int16
    int_value: Int32
    long_value: Int64
    float_value: Float32
    double_value: Float64
    bool_value: Boolean
    char_value: Char
    text: str

    __ratio: Final[Float32]

    def __init__(self) -> None:
        self.byte_value = 0
        self.short_value = 0
        self.int_value = 0
        self.long_value = 0
        self.float_value = 0.0
        self.double_value = 0.0
        self.bool_value = False
        self.char_value = "a"
        self.text = ""
        self.__ratio = 1.0


@dataclass(frozen=True)
class Point:
    x: int
    y: int


class Slotted:
    __slots__ = ("__token",)

    def __init__(self, token: str) -> None:
        self.__token = token


class Plain:
    def __init__(self) -> None:
        self.__secret = "s3cr3t"


class _Hidden:
    def __init__(self, value: int) -> None:
        self.value = value


class Exploding:
    def __init__(self) -> None:
        raise RuntimeError("boom")


class Planet(Enumerated):
    MERCURY = (3.303e23, 2.4397e6)
    EARTH = (5.976e24, 6.37814e6)

    mass: Float64
    radius: Float64

    def __init__(self, mass: float, radius: float) -> None:
        self.mass = mass
        self.radius = radius

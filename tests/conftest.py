"""Pytest configuration and fixtures."""

import pytest
from sample_types import Data, Primitives

from reflectkit import Enumerated, Int32


@pytest.fixture
def data() -> Data:
    """A Data instance with default field values."""
    return Data()


@pytest.fixture
def primitives() -> Primitives:
    return Primitives()


@pytest.fixture
def car_brand() -> type[Enumerated]:
    """A fresh enumerated type per test, since constant injection mutates it."""

    class CarBrand(Enumerated):
        BMW = ()
        MERCEDES = ()

    return CarBrand


@pytest.fixture
def fuel() -> type[Enumerated]:
    """A fresh enumerated type whose constants carry a payload field."""

    class Fuel(Enumerated):
        PETROL = (95,)
        DIESEL = (0,)

        octane: Int32

        def __init__(self, octane: int) -> None:
            self.octane = octane

    return Fuel

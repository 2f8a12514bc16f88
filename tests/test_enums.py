"""
Tests for runtime constant injection.

Every test works on a fresh enumerated type from conftest, since injection
mutates the type for the rest of the process.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest
from sample_types import Data

from reflectkit import (
    DuplicateConstantError,
    Enumerated,
    ReflectionError,
    add_constant,
    get_field_value,
    set_field_value,
)
from reflectkit.exceptions import type_name


class TestAddConstant:
    def test_appends_constant(self, car_brand: Any) -> None:
        bmw, mercedes = car_brand.values()

        audi = add_constant(car_brand, "AUDI")

        assert audi.name == "AUDI"
        assert audi.ordinal == 2
        assert isinstance(audi, car_brand)
        assert car_brand.values() == (bmw, mercedes, audi)
        assert car_brand.values()[0] is bmw

    def test_constant_is_reachable_by_every_lookup(self, car_brand: Any) -> None:
        audi = add_constant(car_brand, "AUDI")

        assert car_brand.value_of("AUDI") is audi
        assert car_brand["AUDI"] is audi
        assert car_brand.AUDI is audi
        assert audi in car_brand
        assert list(car_brand)[-1] is audi
        assert len(car_brand) == 3

    def test_stale_caches_are_rebuilt(self, car_brand: Any) -> None:
        cached = car_brand.constants()
        car_brand.value_of("BMW")

        audi = add_constant(car_brand, "AUDI")

        assert car_brand.constants() is not cached
        assert car_brand.constants()[-1] is audi
        assert car_brand.value_of("AUDI") is audi

    def test_ordinals_keep_counting(self, car_brand: Any) -> None:
        audi = add_constant(car_brand, "AUDI")
        tesla = add_constant(car_brand, "TESLA")

        assert [audi.ordinal, tesla.ordinal] == [2, 3]
        assert [c.ordinal for c in car_brand.values()] == [0, 1, 2, 3]

    def test_initializer_is_not_run(self, fuel: Any) -> None:
        e85 = add_constant(fuel, "E85")

        assert not hasattr(e85, "octane")

    def test_identity_fields_are_still_guarded(self, car_brand: Any) -> None:
        audi = add_constant(car_brand, "AUDI")

        with pytest.raises(AttributeError):
            audi._name = "BMW"
        assert car_brand.values() == (car_brand.BMW, car_brand.MERCEDES, audi)

    def test_names_are_case_sensitive(self, car_brand: Any) -> None:
        bmw = add_constant(car_brand, "bmw")

        assert bmw is not car_brand.BMW
        assert len(car_brand.values()) == 3

    def test_logs_injection(self, car_brand: Any, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="reflectkit.enums"):
            add_constant(car_brand, "AUDI")

        assert "Added constant" in caplog.text
        assert "AUDI" in caplog.text


class TestExtension:
    def test_extension_sets_payload(self, fuel: Any) -> None:
        e85 = add_constant(fuel, "E85", lambda c: set_field_value(c, "octane", 105))

        assert e85.octane == 105
        assert fuel.value_of("E85").octane == 105

    def test_extension_sees_stamped_but_unpublished_constant(self, car_brand: Any) -> None:
        seen: list[tuple[str, int, bool]] = []

        add_constant(car_brand, "AUDI", lambda c: seen.append((c.name, c.ordinal, c in car_brand)))

        assert seen == [("AUDI", 2, False)]

    def test_failing_extension_leaves_type_unchanged(self, car_brand: Any) -> None:
        before = car_brand.values()

        def extension(constant: Any) -> None:
            raise RuntimeError("payload failed")

        with pytest.raises(ReflectionError, match="RuntimeError: payload failed") as exc_info:
            add_constant(car_brand, "AUDI", extension)

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert car_brand.values() == before
        with pytest.raises(ValueError):
            car_brand.value_of("AUDI")

        audi = add_constant(car_brand, "AUDI")
        assert audi.ordinal == 2

    def test_reflection_error_from_extension_is_not_rewrapped(self, fuel: Any) -> None:
        with pytest.raises(ReflectionError) as exc_info:
            add_constant(fuel, "E85", lambda c: set_field_value(c, "octane", 10.5))

        assert "CoercionError" in str(exc_info.value)
        assert len(fuel.values()) == 2

    def test_extension_may_read_payload_defaults(self, fuel: Any) -> None:
        petrol_octane = get_field_value(fuel.PETROL, "octane")

        e95 = add_constant(fuel, "E95", lambda c: set_field_value(c, "octane", petrol_octane))

        assert e95.octane == 95


class TestRejected:
    def test_duplicate_name(self, car_brand: Any) -> None:
        before = car_brand.values()

        with pytest.raises(DuplicateConstantError) as exc_info:
            add_constant(car_brand, "BMW")

        assert str(exc_info.value) == (
            f"Enum '{type_name(car_brand)}' already has a constant with name 'BMW'"
        )
        assert isinstance(exc_info.value, ValueError)
        assert car_brand.values() == before

    def test_duplicate_of_injected_name(self, car_brand: Any) -> None:
        add_constant(car_brand, "AUDI")

        with pytest.raises(DuplicateConstantError):
            add_constant(car_brand, "AUDI")
        assert len(car_brand.values()) == 3

    def test_name_of_existing_method_or_attribute(self) -> None:
        class Car(Enumerated):
            SEDAN = ()

            def describe(self) -> str:
                return self.name.lower()

        for name in ("describe", "value_of", "name"):
            with pytest.raises(ValueError, match=f"already has an attribute with name '{name}'"):
                add_constant(Car, name)

        assert Car.values() == (Car.SEDAN,)
        with pytest.raises(ValueError, match="No enum constant"):
            Car.value_of("describe")
        assert Car.SEDAN.describe() == "sedan"

    def test_not_an_enumerated_type(self) -> None:
        with pytest.raises(TypeError, match="is not an enumerated type"):
            add_constant(Data, "AUDI")
        with pytest.raises(TypeError, match="is not an enumerated type"):
            add_constant(Enumerated, "AUDI")

    def test_null_arguments(self, car_brand: Any) -> None:
        with pytest.raises(ValueError, match="'cls' should not be None"):
            add_constant(None, "AUDI")
        with pytest.raises(ValueError, match="'constant_name' should not be None"):
            add_constant(car_brand, None)


def test_concurrent_injections_get_distinct_ordinals(car_brand: Any) -> None:
    names = [f"BRAND_{i}" for i in range(16)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        added = list(pool.map(lambda name: add_constant(car_brand, name), names))

    assert sorted(c.ordinal for c in added) == list(range(2, 18))
    assert len(car_brand.values()) == 18
    assert {c.name for c in car_brand.values()} == {"BMW", "MERCEDES", *names}

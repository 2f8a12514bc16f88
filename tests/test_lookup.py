"""Tests for member lookup and class resolution."""

from __future__ import annotations

import collections

import pytest
from sample_types import BaseData, Data, Planet, Point, Primitives, Slotted

from reflectkit import (
    ClassNotFoundError,
    Modifier,
    NoSuchFieldError,
    PrimitiveKind,
    get_class,
    get_field,
    has_field,
)
from reflectkit.lookup import declared_fields, declared_methods, demangle, mangle


class TestGetField:
    def test_private_instance_field(self) -> None:
        field = get_field(Data, "__name")

        assert field.declaring_class is Data
        assert field.attribute == "_Data__name"
        assert field.modifiers == Modifier.PRIVATE | Modifier.FINAL
        assert field.type is str

    def test_protected_field_of_parent(self) -> None:
        field = get_field(Data, "_base_name")

        assert field.declaring_class is BaseData
        assert field.modifiers == Modifier.PROTECTED | Modifier.FINAL

    def test_static_fields(self) -> None:
        assert get_field(Data, "__AUTO").modifiers == Modifier.PRIVATE | Modifier.STATIC | Modifier.FINAL
        assert get_field(Data, "__counter").modifiers == Modifier.PRIVATE | Modifier.STATIC
        assert get_field(Primitives, "LIMIT").modifiers == Modifier.PUBLIC | Modifier.STATIC

    def test_primitive_kind(self) -> None:
        assert get_field(Primitives, "byte_value").primitive_kind is PrimitiveKind.BYTE
        assert get_field(Primitives, "LIMIT").primitive_kind is PrimitiveKind.SHORT
        assert get_field(Primitives, "__ratio").primitive_kind is PrimitiveKind.FLOAT
        assert get_field(Primitives, "text").primitive_kind is None

    def test_slot_field(self) -> None:
        field = get_field(Slotted, "__token")

        assert field.attribute == "_Slotted__token"
        assert field.modifiers == Modifier.PRIVATE

    def test_frozen_dataclass_field(self) -> None:
        assert get_field(Point, "y").modifiers == Modifier.PUBLIC | Modifier.FINAL

    def test_enum_constant_is_static_final(self) -> None:
        field = get_field(Planet, "EARTH")

        assert field.modifiers == Modifier.PUBLIC | Modifier.STATIC | Modifier.FINAL
        assert field.type is Planet

    def test_backing_sequence_field(self) -> None:
        field = get_field(Planet, "_VALUES")

        assert field.declaring_class is Planet
        assert field.is_static
        assert field.is_final

    def test_unknown_field(self) -> None:
        with pytest.raises(NoSuchFieldError):
            get_field(Data, "unknown")

    def test_descriptors_are_fresh_per_lookup(self) -> None:
        first = get_field(Data, "__name")
        second = get_field(Data, "__name")
        first.set_accessible(True)

        assert first == second
        assert first is not second
        assert not second.is_accessible()

    def test_null_arguments(self) -> None:
        with pytest.raises(ValueError, match="'cls' should not be None"):
            get_field(None, "__name")
        with pytest.raises(ValueError, match="'field_name' should not be None"):
            get_field(Data, None)


def test_has_field() -> None:
    assert has_field(Data, "__name")
    assert has_field(Data, "_base_name")
    assert not has_field(Data, "unknown")
    assert not has_field(BaseData, "__name")


def test_declared_fields_in_declaration_order() -> None:
    names = [field.name for field in declared_fields(Data)]

    assert names == ["__AUTO", "__counter", "__name", "__age", "__marker"]


def test_declared_methods_skip_properties() -> None:
    names = {method.name for method in declared_methods(Data)}

    assert {"__init__", "__get_city", "__sum", "__mul", "_create", "_fail"} <= names
    assert "name" not in names


def test_mangle_and_demangle() -> None:
    assert mangle(Data, "__name") == "_Data__name"
    assert mangle(Data, "__init__") == "__init__"
    assert mangle(Data, "_base_name") == "_base_name"
    assert demangle(Data, "_Data__name") == "__name"
    assert demangle(Data, "_BaseData__AUTO_BASE") == "_BaseData__AUTO_BASE"


class TestGetClass:
    def test_dotted_name(self) -> None:
        assert get_class("sample_types.Data") is Data
        assert get_class("collections.OrderedDict") is collections.OrderedDict

    def test_colon_name(self) -> None:
        assert get_class("sample_types:Planet") is Planet

    def test_builtin_name(self) -> None:
        assert get_class("int") is int

    @pytest.mark.parametrize(
        "name",
        ["no.such.Module", "sample_types.Missing", "nonexistent", "len", "sample_types.Planet.EARTH"],
    )
    def test_unresolvable_name(self, name: str) -> None:
        with pytest.raises(ClassNotFoundError, match=f"Class '{name}' was not found"):
            get_class(name)

    def test_null_name(self) -> None:
        with pytest.raises(ValueError, match="'class_name' should not be None"):
            get_class(None)

"""Tests for instance creation through constructors."""

from __future__ import annotations

import pytest
from sample_types import Data, Exploding, _Hidden

from reflectkit import (
    ClassNotFoundError,
    InvocationTargetError,
    Modifier,
    NoSuchConstructorError,
    ReflectionError,
    get_constructor,
    invoke_constructor,
)


def test_invoke_default_constructor() -> None:
    data = invoke_constructor(Data)

    assert isinstance(data, Data)
    assert data.name == "oleg.cherednik"
    assert data.age == 666


def test_invoke_constructor_with_arguments() -> None:
    data = invoke_constructor(Data, "anton", 33, True, types=[str, int, bool])

    assert data.name == "anton"
    assert data.age == 33
    assert data.marker is True


def test_invoke_constructor_by_class_name() -> None:
    data = invoke_constructor("sample_types.Data", "ivan")

    assert isinstance(data, Data)
    assert data.name == "ivan"


def test_invoke_non_public_constructor() -> None:
    hidden = invoke_constructor(_Hidden, 3)

    assert hidden.value == 3
    assert get_constructor(_Hidden).modifiers == Modifier.PROTECTED


def test_constructor_types_must_match() -> None:
    with pytest.raises(NoSuchConstructorError, match="Constructor with arguments '\\[int\\]'"):
        invoke_constructor(Data, 1, types=[int])


def test_types_and_values_length_must_match() -> None:
    with pytest.raises(ValueError, match="Length of 'types' and 'values' should be equal"):
        invoke_constructor(Data, "anton", types=[str, int])


def test_unknown_class_name() -> None:
    with pytest.raises(ClassNotFoundError, match="Class 'sample_types.Missing' was not found"):
        invoke_constructor("sample_types.Missing")


def test_initializer_exception_is_wrapped() -> None:
    with pytest.raises(ReflectionError) as exc_info:
        invoke_constructor(Exploding)

    cause = exc_info.value.__cause__
    assert isinstance(cause, InvocationTargetError)
    assert isinstance(cause.target, RuntimeError)


def test_constructor_parameter_types() -> None:
    assert get_constructor(Data).parameter_types == (str, int, bool)
    assert get_constructor(object).parameter_types == ()


def test_null_class() -> None:
    with pytest.raises(ValueError, match="'cls' should not be None"):
        invoke_constructor(None)

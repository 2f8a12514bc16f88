"""
reflectkit - privileged member access for Python classes.

Read, write and invoke members regardless of declared visibility or
immutability, and add constants to closed enumerated types at runtime.
"""

__version__ = "0.1.0"

from .constructors import invoke_constructor
from .enumerated import Enumerated, EnumeratedMeta
from .enums import add_constant
from .exceptions import (
    ClassNotFoundError,
    CoercionError,
    DuplicateConstantError,
    IllegalAccessError,
    InvocationTargetError,
    NoSuchConstructorError,
    NoSuchFieldError,
    NoSuchMemberError,
    NoSuchMethodError,
    ReflectionError,
    ReflectiveOperationError,
)
from .fields import (
    get_field_type,
    get_field_value,
    get_static_field_value,
    set_field_value,
    set_static_field_value,
    update_field_value,
    update_static_field_value,
)
from .gate import elevated, invoke, read_field, run_with_elevated_access, with_elevated_access, write_field
from .lookup import get_class, get_constructor, get_field, get_method, has_field
from .members import ConstructorDescriptor, FieldDescriptor, MemberDescriptor, MethodDescriptor, Modifier
from .methods import get_return_type, invoke_method, invoke_static_method
from .types import Boolean, Char, Float32, Float64, Int8, Int16, Int32, Int64, PrimitiveKind

__all__ = [
    "__version__",
    # core
    "elevated",
    "with_elevated_access",
    "run_with_elevated_access",
    "read_field",
    "write_field",
    "invoke",
    "add_constant",
    # descriptors and lookup
    "MemberDescriptor",
    "FieldDescriptor",
    "MethodDescriptor",
    "ConstructorDescriptor",
    "Modifier",
    "get_class",
    "get_field",
    "get_method",
    "get_constructor",
    "has_field",
    # convenience
    "get_field_value",
    "get_static_field_value",
    "set_field_value",
    "set_static_field_value",
    "update_field_value",
    "update_static_field_value",
    "get_field_type",
    "invoke_method",
    "invoke_static_method",
    "get_return_type",
    "invoke_constructor",
    # types
    "Enumerated",
    "EnumeratedMeta",
    "PrimitiveKind",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Float32",
    "Float64",
    "Boolean",
    "Char",
    # errors
    "ReflectionError",
    "NoSuchMemberError",
    "NoSuchFieldError",
    "NoSuchMethodError",
    "NoSuchConstructorError",
    "ClassNotFoundError",
    "DuplicateConstantError",
    "ReflectiveOperationError",
    "IllegalAccessError",
    "CoercionError",
    "InvocationTargetError",
]

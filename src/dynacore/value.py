"""
Re-export the dynamic value module for cleaner imports.

This allows: from dynacore.value import DynamicValue
Instead of: from dynacore.dynamic.value import DynamicValue
"""

from .dynamic.value import (
    VariantKind,
    DynamicValue,
    String,
    Array,
    Object,
    VariantTag,
    NullTag,
    BoolTag,
    IntTag,
    UIntTag,
    DoubleTag,
    StringTag,
    ArrayTag,
    ObjectTag,
    make_null,
)
from .dynamic.errors import BadCastError, DynamicError, DynamicRangeError

__all__ = [
    "VariantKind",
    "DynamicValue",
    "make_null",
    # Payloads
    "String",
    "Array",
    "Object",
    # Tags
    "VariantTag",
    "NullTag",
    "BoolTag",
    "IntTag",
    "UIntTag",
    "DoubleTag",
    "StringTag",
    "ArrayTag",
    "ObjectTag",
    # Errors
    "DynamicError",
    "BadCastError",
    "DynamicRangeError",
]

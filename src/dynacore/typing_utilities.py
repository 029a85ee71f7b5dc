"""
Re-export utilities module for cleaner imports.

This allows: from dynacore.typing_utilities import is_unsigned_integral
Instead of: from dynacore.meta.typing.predicates import is_unsigned_integral
"""

from .meta.typing.utilities import (
    is_class,
    is_union,
    strip_annotated,
    resolve_annotation,
    resolve_annotation_types,
)
from .meta.typing.predicates import (
    is_simple_ctype,
    is_unsigned_integral,
    is_signed_integral,
    is_enumeration,
    is_floating_point,
    is_ctypes_array,
    is_char_buffer,
    is_fixed_array,
    is_homogeneous_tuple,
    is_fixed_arity_tuple,
    fixed_length,
)

__all__ = [
    "is_class",
    "is_union",
    "strip_annotated",
    "resolve_annotation",
    "resolve_annotation_types",
    "is_simple_ctype",
    "is_unsigned_integral",
    "is_signed_integral",
    "is_enumeration",
    "is_floating_point",
    "is_ctypes_array",
    "is_char_buffer",
    "is_fixed_array",
    "is_homogeneous_tuple",
    "is_fixed_arity_tuple",
    "fixed_length",
]

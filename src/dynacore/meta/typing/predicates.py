"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2025-12-16
Description: Structural predicates over annotations. Each one names a property of a source
            type (unsigned integral, enumeration, fixed size array...) and the integral and
            floating point ones are built to never overlap, so that a single rule of the
            constructors accepts any numeric annotation.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ctypes
from enum import Enum
from typing import Any, Callable, get_args, get_origin

from ..classes.constants import ConstantNamespace
from .utilities import Annotation, is_class

type Predicate = Callable[[Annotation], bool]


class CTypeCodes(ConstantNamespace):
    """`_type_` codes of the ctypes simple types, grouped by the predicate accepting them.

    c_size_t and c_ssize_t are aliases of unsigned and signed integral types, so they are
    covered by these codes too. c_bool ('?') is matched by its own exact rule.
    """

    UNSIGNED_INTEGRAL: str = "BHILQ"
    SIGNED_INTEGRAL: str = "bhilq"
    FLOATING_POINT: str = "fdg"
    CHARACTERS: str = "cu"


def is_simple_ctype(annotation: Annotation) -> bool:
    """Check if an annotation is a ctypes fundamental type such as c_uint16 or c_double."""
    return is_class(annotation) and issubclass(annotation, ctypes._SimpleCData)


def _ctype_code(annotation: Annotation) -> str | None:
    if not is_simple_ctype(annotation):
        return None
    code: Any = getattr(annotation, "_type_", None)
    return code if isinstance(code, str) and len(code) == 1 else None


def _is_plain_subclass(annotation: Annotation, base: type) -> bool:
    # bool and enumerations have their own rules even though they subclass int.
    return (
        is_class(annotation)
        and issubclass(annotation, base)
        and not issubclass(annotation, (bool, Enum))
    )


def is_unsigned_integral(annotation: Annotation) -> bool:
    """Check if an annotation is an unsigned integral type: c_uint8 to c_uint64, c_size_t...

    Python int is signed, so no Python class is unsigned.
    """
    code = _ctype_code(annotation)
    return code is not None and code in CTypeCodes.UNSIGNED_INTEGRAL


def is_signed_integral(annotation: Annotation) -> bool:
    """Check if an annotation is a signed integral type: int (and its plain subclasses), c_int8
    to c_int64, c_ssize_t...
    """
    if _is_plain_subclass(annotation, int):
        return True
    code = _ctype_code(annotation)
    return code is not None and code in CTypeCodes.SIGNED_INTEGRAL


def is_enumeration(annotation: Annotation) -> bool:
    """Check if an annotation is an enumeration, IntEnum and IntFlag included."""
    return is_class(annotation) and issubclass(annotation, Enum)


def is_floating_point(annotation: Annotation) -> bool:
    """Check if an annotation is a floating point type: float, c_float, c_double, c_longdouble."""
    if _is_plain_subclass(annotation, float):
        return True
    code = _ctype_code(annotation)
    return code is not None and code in CTypeCodes.FLOATING_POINT


def is_ctypes_array(annotation: Annotation) -> bool:
    """Check if an annotation is a ctypes array type, i.e. `element_type * length`."""
    return is_class(annotation) and issubclass(annotation, ctypes.Array)


def is_char_buffer(annotation: Annotation) -> bool:
    """Check if an annotation is a fixed size character buffer: c_char * N or c_wchar * N."""
    if not is_ctypes_array(annotation):
        return False
    code = _ctype_code(annotation._type_)
    return code is not None and code in CTypeCodes.CHARACTERS


def is_fixed_array(annotation: Annotation) -> bool:
    """Check if an annotation is a fixed size array of anything but characters."""
    return is_ctypes_array(annotation) and not is_char_buffer(annotation)


def is_homogeneous_tuple(annotation: Annotation) -> bool:
    """Check if an annotation is a variable length tuple of one element type: tuple[int, ...]."""
    args = get_args(annotation)
    return get_origin(annotation) is tuple and len(args) == 2 and args[1] is Ellipsis


def is_fixed_arity_tuple(annotation: Annotation) -> bool:
    """Check if an annotation is a tuple of fixed arity: tuple[int, str], tuple[()]..."""
    return get_origin(annotation) is tuple and not is_homogeneous_tuple(annotation)


def fixed_length(annotation: Annotation) -> int:
    """The length N of a ctypes array type `element_type * N`."""
    return annotation._length_

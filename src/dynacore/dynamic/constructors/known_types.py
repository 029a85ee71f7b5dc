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
Created: 2025-12-15
Description: Built-in conversion rules. This module registers constructors for None, bool,
            str, DynamicValue, integral, enumeration and floating point types, ctypes
            character buffers and arrays, homogeneous sequences, tuples and string keyed
            mappings.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ctypes
from collections import OrderedDict, deque
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from types import NoneType, NotImplementedType
from typing import TYPE_CHECKING, Any, Callable, get_args, get_origin

from ...meta.typing.predicates import (
    fixed_length,
    is_char_buffer,
    is_enumeration,
    is_fixed_arity_tuple,
    is_fixed_array,
    is_floating_point,
    is_homogeneous_tuple,
    is_signed_integral,
    is_simple_ctype,
    is_unsigned_integral,
)
from ...meta.typing.utilities import strip_annotated
from ..value import (
    ArrayTag,
    BoolTag,
    DoubleTag,
    DynamicValue,
    IntTag,
    ObjectTag,
    StringTag,
    UIntTag,
)
from .errors import ConversionRuleError
from .rules import Annotation, Constructor, ConversionRule, Converter
from .tuples import tuple_constructor

if TYPE_CHECKING:
    from .registry import ConstructorsRegistry


def _ctype_value(annotation: Annotation, tag: Callable[[Any], Any]) -> Converter:
    """Converter reading `.value` for ctypes sources and the source itself otherwise."""
    if is_simple_ctype(annotation):
        return lambda source: DynamicValue(tag(source.value))
    return lambda source: DynamicValue(tag(source))


def _require_arguments(annotation: Annotation, count: int) -> tuple[Any, ...]:
    args = get_args(annotation)
    if get_origin(annotation) is None or len(args) != count:
        raise ConversionRuleError(
            f"Could not create constructor for '{annotation}'. The element types must be"
            " given, list[int] or dict[str, float] for example."
        )
    return args


def _is_dynamic(annotation: Annotation) -> bool:
    return strip_annotated(annotation) is DynamicValue


def _clear(source: Any) -> None:
    source.clear()


# Scalars
class NoneConversionRule(ConversionRule):
    """None converts to the NULL variant."""

    @staticmethod
    def from_borrowed(_: None, /) -> DynamicValue:
        return DynamicValue()


class BoolConversionRule(ConversionRule):
    """bool and c_bool convert to the BOOL variant."""

    def create_constructor(
        self,
        _inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        return Constructor(_ctype_value(annotation, BoolTag), annotation=annotation)


class StrConversionRule(ConversionRule):
    """str converts to the STRING variant."""

    @staticmethod
    def from_borrowed(source: str, /) -> DynamicValue:
        return DynamicValue(StringTag(source))


class DynamicValueConversionRule(ConversionRule):
    """A DynamicValue is deep copied when borrowed and taken (left null) when owned.

    Taking is split in two: the payload is shared with the result, and the source is only
    vacated once the value holding it was fully built.
    """

    def create_constructor(
        self,
        _inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        return Constructor(
            DynamicValue.copy, DynamicValue.share, annotation, DynamicValue.vacate
        )


class UnsignedIntegralConversionRule(ConversionRule):
    """Unsigned integral types convert to the UINT variant."""

    def create_constructor(
        self,
        _inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        return Constructor(_ctype_value(annotation, UIntTag), annotation=annotation)


class SignedIntegralConversionRule(ConversionRule):
    """Signed integral types convert to the INT variant."""

    def create_constructor(
        self,
        _inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        return Constructor(_ctype_value(annotation, IntTag), annotation=annotation)


class FloatingPointConversionRule(ConversionRule):
    """Floating point types convert to the DOUBLE variant."""

    def create_constructor(
        self,
        _inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        return Constructor(_ctype_value(annotation, DoubleTag), annotation=annotation)


class EnumerationConversionRule(ConversionRule):
    """Enumerations with integer values convert to the INT variant of their value.

    An enumeration with a non integer member is rejected when its constructor is resolved.
    """

    def create_constructor(
        self,
        _inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        wrong = [
            name
            for name, member in annotation.__members__.items()
            if not isinstance(member.value, int)
        ]
        if wrong:
            raise ConversionRuleError(
                f"Could not create constructor for enumeration '{annotation.__name__}'. Members"
                f" {wrong} do not have an integer value."
            )
        return Constructor(
            lambda source: DynamicValue(IntTag(source.value)), annotation=annotation
        )


# ctypes arrays
class CharBufferConversionRule(ConversionRule):
    """Character buffers `c_char * N` and `c_wchar * N` convert to a STRING of exactly N - 1
    characters, the last slot being the terminator's. c_char buffers are decoded as latin-1 so
    that every byte maps to one character.
    """

    def create_constructor(
        self,
        _inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        count = max(fixed_length(annotation) - 1, 0)

        if issubclass(annotation._type_, ctypes.c_char):

            def converter(source: Any) -> DynamicValue:
                return DynamicValue(StringTag(source[:count].decode("latin-1")))

        else:

            def converter(source: Any) -> DynamicValue:
                return DynamicValue(StringTag(source[:count]))

        return Constructor(converter, annotation=annotation)


class FixedArrayConversionRule(ConversionRule):
    """ctypes arrays `element_type * N` convert to an ARRAY of N converted elements.

    Indexing a ctypes array of a fundamental type gives plain Python values, so they are wrapped
    back in the element type for its constructor. Elements are scalars or ctypes instances, so
    moving an array copies it.
    """

    def prepare_inner(self, annotation: Annotation, f: Callable[[Any], Any]) -> Any:
        return [f(annotation._type_)]

    def create_constructor(
        self,
        inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        element_type = annotation._type_
        convert = inner_constructors[0].from_borrowed
        if ctypes._SimpleCData in element_type.__bases__:
            element_convert = convert
            convert = lambda item: element_convert(element_type(item))  # noqa: E731

        def converter(source: Any) -> DynamicValue:
            value = DynamicValue(ArrayTag())
            value.as_array().extend([convert(item) for item in source])
            return value

        return Constructor(converter, annotation=annotation)


# Homogeneous sequences: list, deque, Sequence, MutableSequence, tuple[E, ...]
def _sequence_constructor(
    inner: Constructor, element: Annotation, annotation: Annotation, clears_source: bool
) -> Constructor:
    borrow, move, release = inner.from_borrowed, inner.move, inner.release

    def from_borrowed(source: Any) -> DynamicValue:
        value = DynamicValue(ArrayTag())
        value.as_array().extend([borrow(item) for item in source])
        return value

    if _is_dynamic(element) and clears_source:
        # the source is emptied, so its values are handed over as they are.
        def transfer(source: Any) -> DynamicValue:
            value = DynamicValue(ArrayTag())
            value.as_array().extend(source)
            return value

        return Constructor(from_borrowed, transfer, annotation, _clear)

    def from_owned(source: Any) -> DynamicValue:
        value = DynamicValue(ArrayTag())
        value.as_array().extend([move(item) for item in source])
        return value

    def release_all(source: Any) -> None:
        for item in source:
            release(item)
        if clears_source:
            source.clear()

    return Constructor(from_borrowed, from_owned, annotation, release_all)


class SequenceConversionRule(ConversionRule):
    """Homogeneous sequences convert to an ARRAY of their converted elements.

    DynamicValue elements are copied when borrowed. When owned, they are the very same values
    if the move empties the source, and taken otherwise.
    """

    def __init__(self, clears_source: bool) -> None:
        """
        Args:
            clears_source (bool): Whether moving a source empties it. True for mutable sources.
        """
        self._clears_source = clears_source

    def create_constructor(
        self,
        inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        (element,) = _require_arguments(annotation, 1)
        return _sequence_constructor(
            inner_constructors[0], element, annotation, self._clears_source
        )


class TupleConversionRule(ConversionRule):
    """tuple[E, ...] converts like a sequence and tuple[E1, ..., En] slot by slot. See
    tuple_constructor.
    """

    def prepare_inner(self, annotation: Annotation, f: Callable[[Any], Any]) -> Any:
        if is_homogeneous_tuple(annotation):
            return [f(get_args(annotation)[0])]
        return list(map(f, get_args(annotation)))

    def create_constructor(
        self,
        inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        if is_homogeneous_tuple(annotation):
            return _sequence_constructor(
                inner_constructors[0], get_args(annotation)[0], annotation, False
            )
        if not is_fixed_arity_tuple(annotation):
            raise ConversionRuleError(
                f"Could not create constructor for '{annotation}'. The slot types must be"
                " given, tuple[int, str] or tuple[int, ...] for example."
            )
        return tuple_constructor(inner_constructors, annotation)


# String keyed mappings: dict, OrderedDict, Mapping, MutableMapping
class MappingConversionRule(ConversionRule):
    """String keyed mappings convert to an OBJECT. Keys are kept verbatim and values are
    converted. The object iterates by key whatever the order of the source.

    DynamicValue values are not converted again: they are copied when borrowed, handed over
    as they are when the move empties the source, and taken otherwise.
    """

    def __init__(self, clears_source: bool) -> None:
        self._clears_source = clears_source

    def create_constructor(
        self,
        inner_constructors: list[Constructor],
        annotation: Annotation,
        _registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        key, element = _require_arguments(annotation, 2)
        if strip_annotated(key) is not str:
            raise ConversionRuleError(
                f"Could not create constructor for '{annotation}'. Object keys are strings, not"
                f" '{key}'."
            )
        clears_source = self._clears_source
        inner = inner_constructors[1]
        borrow, move, release = inner.from_borrowed, inner.move, inner.release

        if _is_dynamic(element) and clears_source:
            move = lambda item: item  # noqa: E731
            release_all = _clear

        else:

            def release_all(source: Any) -> None:
                for v in source.values():
                    release(v)
                if clears_source:
                    source.clear()

        def from_borrowed(source: Any) -> DynamicValue:
            value = DynamicValue(ObjectTag())
            target = value.as_object()
            for k, v in source.items():
                target.insert(k, borrow(v))
            return value

        def from_owned(source: Any) -> DynamicValue:
            value = DynamicValue(ObjectTag())
            target = value.as_object()
            for k, v in source.items():
                target.insert(k, move(v))
            return value

        return Constructor(from_borrowed, from_owned, annotation, release_all)


def register_builtin_rules(registry: ConstructorsRegistry) -> None:
    """Register the built-in rules on `registry`."""
    registry.register_rule(NoneType, NoneConversionRule())
    registry.register_rule(bool, BoolConversionRule())
    registry.register_rule(ctypes.c_bool, BoolConversionRule())
    registry.register_rule(str, StrConversionRule())
    registry.register_rule(DynamicValue, DynamicValueConversionRule())

    registry.register_predicate_rule(
        "unsigned_integral", is_unsigned_integral, UnsignedIntegralConversionRule()
    )
    registry.register_predicate_rule(
        "signed_integral", is_signed_integral, SignedIntegralConversionRule()
    )
    registry.register_predicate_rule(
        "enumeration", is_enumeration, EnumerationConversionRule()
    )
    registry.register_predicate_rule(
        "floating_point", is_floating_point, FloatingPointConversionRule()
    )
    registry.register_predicate_rule(
        "char_buffer", is_char_buffer, CharBufferConversionRule()
    )
    registry.register_predicate_rule(
        "fixed_array", is_fixed_array, FixedArrayConversionRule()
    )

    for origin in (list, MutableSequence, deque):
        registry.register_rule(origin, SequenceConversionRule(clears_source=True))
    registry.register_rule(Sequence, SequenceConversionRule(clears_source=False))
    registry.register_rule(tuple, TupleConversionRule())

    for origin in (dict, OrderedDict, MutableMapping):
        registry.register_rule(origin, MappingConversionRule(clears_source=True))
    registry.register_rule(Mapping, MappingConversionRule(clears_source=False))

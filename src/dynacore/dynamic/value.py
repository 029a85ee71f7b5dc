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
Description: The dynamic value: a closed tagged union of eight variants (null, bool, int,
            uint, double, string, array and object). A variant is activated by assigning a
            tag, and the payload of the active variant is reached through the as_* accessors.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections import UserString
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from enum import IntEnum
from typing import Any, ClassVar, Self

from .errors import BadCastError, DynamicRangeError
from .limits import Limits


class VariantKind(IntEnum):
    """The eight variants of a DynamicValue."""

    NULL = 0
    BOOL = 1
    INT = 2
    UINT = 3
    DOUBLE = 4
    STRING = 5
    ARRAY = 6
    OBJECT = 7


class String(UserString):
    """Mutable string payload of the STRING variant. The characters live in `data`."""

    def assign(self, chars: str, count: int | None = None) -> Self:
        """Replace the content with the first `count` characters of `chars` (all of them by
        default).

        Returns:
            Self: The string, to chain calls.
        """
        self.data = str(chars) if count is None else str(chars)[:count]
        return self


class Array(list["DynamicValue"]):
    """Payload of the ARRAY variant. An ordered list of DynamicValue."""

    def __repr__(self) -> str:
        return f"Array({list.__repr__(self)})"


class Object(MutableMapping[str, "DynamicValue"]):
    """Payload of the OBJECT variant. Maps string keys to DynamicValue.

    Whatever the insertion order, iteration always follows the order of the keys.
    """

    def __init__(
        self,
        items: Mapping[str, DynamicValue] | Iterable[tuple[str, DynamicValue]] = (),
        /,
    ) -> None:
        self._items: dict[str, DynamicValue] = dict(items)

    def __getitem__(self, key: str) -> DynamicValue:
        return self._items[key]

    def __setitem__(self, key: str, value: DynamicValue) -> None:
        self._items[key] = value

    def __delitem__(self, key: str) -> None:
        del self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def insert(self, key: str, value: DynamicValue) -> bool:
        """Insert `value` under `key` unless the key is already present.

        Returns:
            bool: Whether the value was inserted.
        """
        if key in self._items:
            return False
        self._items[key] = value
        return True

    def clear(self) -> None:
        self._items.clear()

    def __repr__(self) -> str:
        content = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"Object({{{content}}})"


# Tags


class VariantTag:
    """Base of the tags. Assigning a tag to a DynamicValue activates the tag's variant."""

    __slots__ = ()
    kind: ClassVar[VariantKind]

    def payload(self) -> Any:
        """Create the payload the variant starts with."""
        return None


class NullTag(VariantTag):
    __slots__ = ()
    kind = VariantKind.NULL


class BoolTag(VariantTag):
    __slots__ = ("value",)
    kind = VariantKind.BOOL

    def __init__(self, value: bool = False) -> None:
        self.value = bool(value)

    def payload(self) -> bool:
        return self.value


class IntTag(VariantTag):
    """Signed 64 bits integer tag.

    Raises:
        DynamicRangeError: Raised when the value does not fit in 64 signed bits.
    """

    __slots__ = ("value",)
    kind = VariantKind.INT

    def __init__(self, value: int = 0) -> None:
        value = int(value)
        if not Limits.INT_MIN <= value <= Limits.INT_MAX:
            raise DynamicRangeError(f"{value} does not fit in a signed 64 bits integer.")
        self.value = value

    def payload(self) -> int:
        return self.value


class UIntTag(VariantTag):
    """Unsigned 64 bits integer tag.

    Raises:
        DynamicRangeError: Raised when the value does not fit in 64 unsigned bits.
    """

    __slots__ = ("value",)
    kind = VariantKind.UINT

    def __init__(self, value: int = 0) -> None:
        value = int(value)
        if not Limits.UINT_MIN <= value <= Limits.UINT_MAX:
            raise DynamicRangeError(f"{value} does not fit in an unsigned 64 bits integer.")
        self.value = value

    def payload(self) -> int:
        return self.value


class DoubleTag(VariantTag):
    __slots__ = ("value",)
    kind = VariantKind.DOUBLE

    def __init__(self, value: float = 0.0) -> None:
        self.value = float(value)

    def payload(self) -> float:
        return self.value


class StringTag(VariantTag):
    __slots__ = ("value",)
    kind = VariantKind.STRING

    def __init__(self, value: str = "") -> None:
        self.value = value

    def payload(self) -> String:
        return String(self.value)


class ArrayTag(VariantTag):
    __slots__ = ()
    kind = VariantKind.ARRAY

    def payload(self) -> Array:
        return Array()


class ObjectTag(VariantTag):
    __slots__ = ()
    kind = VariantKind.OBJECT

    def payload(self) -> Object:
        return Object()


class DynamicValue:
    """A value holding exactly one of the eight variants of VariantKind.

    The value exclusively owns what its array or object payload contains. A payload reference
    obtained with as_string, as_array or as_object is only valid while its variant stays
    active: assigning another tag empties the previous container payload.

    Examples:
        >>> v = DynamicValue(ArrayTag())
        >>> v.as_array().append(DynamicValue(IntTag(1)))
        >>> v.active_kind()
        <VariantKind.ARRAY: 6>
        >>> v.assign(DoubleTag(2.5)).as_double()
        2.5
        >>> v.as_array() # raises BadCastError.
    """

    __slots__ = ("_kind", "_payload")

    _kind: VariantKind
    _payload: Any

    def __init__(self, tag: VariantTag | None = None) -> None:
        self._kind = VariantKind.NULL
        self._payload = None
        if tag is not None:
            self.assign(tag)

    def assign(self, tag: VariantTag) -> Self:
        """Activate the variant of `tag`. The previous payload is released first.

        Args:
            tag (VariantTag): The tag of the variant to activate.

        Returns:
            Self: The value, to chain calls.
        """
        self._release()
        self._payload = tag.payload()
        self._kind = tag.kind
        return self

    def _release(self) -> None:
        if isinstance(self._payload, (Array, Object)):
            self._payload.clear()
        self._kind = VariantKind.NULL
        self._payload = None

    def active_kind(self) -> VariantKind:
        """The active variant."""
        return self._kind

    def is_null(self) -> bool:
        return self._kind is VariantKind.NULL

    def _expect(self, kind: VariantKind) -> Any:
        if self._kind is not kind:
            raise BadCastError(
                f"Cannot access the {kind.name} variant of a dynamic value holding"
                f" {self._kind.name}."
            )
        return self._payload

    def as_bool(self) -> bool:
        return self._expect(VariantKind.BOOL)

    def as_int(self) -> int:
        return self._expect(VariantKind.INT)

    def as_uint(self) -> int:
        return self._expect(VariantKind.UINT)

    def as_double(self) -> float:
        return self._expect(VariantKind.DOUBLE)

    def as_string(self) -> String:
        """The mutable string payload.

        Raises:
            BadCastError: Raised when the STRING variant is not active.
        """
        return self._expect(VariantKind.STRING)

    def as_array(self) -> Array:
        """The mutable array payload.

        Raises:
            BadCastError: Raised when the ARRAY variant is not active.
        """
        return self._expect(VariantKind.ARRAY)

    def as_object(self) -> Object:
        """The mutable object payload.

        Raises:
            BadCastError: Raised when the OBJECT variant is not active.
        """
        return self._expect(VariantKind.OBJECT)

    def take(self) -> DynamicValue:
        """Move the variant and its payload into a new value. This value is left null.

        Returns:
            DynamicValue: A value holding the payload this value held.
        """
        moved = self.share()
        self.vacate()
        return moved

    def share(self) -> DynamicValue:
        """A new value holding this very payload, not a copy of it. First half of take: the
        two values own the same payload until vacate is called on this one.
        """
        shared = DynamicValue()
        shared._kind, shared._payload = self._kind, self._payload
        return shared

    def vacate(self) -> None:
        """Leave this value null without emptying its payload, now owned by another value.
        Second half of take.
        """
        self._kind, self._payload = VariantKind.NULL, None

    def copy(self) -> DynamicValue:
        """Deep copy: no container is shared between the copy and this value."""
        duplicate = DynamicValue()
        duplicate._kind = self._kind
        match self._kind:
            case VariantKind.STRING:
                duplicate._payload = String(self._payload.data)
            case VariantKind.ARRAY:
                duplicate._payload = Array(v.copy() for v in self._payload)
            case VariantKind.OBJECT:
                duplicate._payload = Object((k, v.copy()) for k, v in self._payload.items())
            case _:
                duplicate._payload = self._payload
        return duplicate

    def to_python(self) -> Any:
        """Plain Python data: None, bool, int, float, str, list and dict (in key order)."""
        match self._kind:
            case VariantKind.STRING:
                return self._payload.data
            case VariantKind.ARRAY:
                return [v.to_python() for v in self._payload]
            case VariantKind.OBJECT:
                return {k: v.to_python() for k, v in self._payload.items()}
            case _:
                return self._payload

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DynamicValue):
            return NotImplemented
        return self._kind is other._kind and self._payload == other._payload

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._kind is VariantKind.NULL:
            return "DynamicValue(NULL)"
        return f"DynamicValue({self._kind.name}, {self._payload!r})"


def make_null() -> DynamicValue:
    """A null DynamicValue. Same as DynamicValue()."""
    return DynamicValue()

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
Description: Tests for the DynamicValue tagged union, its tags and its payloads.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import pytest

from dynacore.constants import Limits
from dynacore.value import (
    Array,
    ArrayTag,
    BadCastError,
    BoolTag,
    DoubleTag,
    DynamicError,
    DynamicRangeError,
    DynamicValue,
    IntTag,
    NullTag,
    Object,
    ObjectTag,
    String,
    StringTag,
    UIntTag,
    VariantKind,
    make_null,
)


def _int(i: int) -> DynamicValue:
    return DynamicValue(IntTag(i))


# =============================================================================
# Creation and active kind
# =============================================================================


class TestCreation:
    """Test the creation of dynamic values."""

    def test_default_is_null(self):
        """Test that a default value is null."""
        assert DynamicValue().active_kind() is VariantKind.NULL
        assert make_null().active_kind() is VariantKind.NULL
        assert make_null().is_null()

    @pytest.mark.parametrize(
        "tag, kind",
        [
            (NullTag(), VariantKind.NULL),
            (BoolTag(True), VariantKind.BOOL),
            (IntTag(-3), VariantKind.INT),
            (UIntTag(3), VariantKind.UINT),
            (DoubleTag(1.5), VariantKind.DOUBLE),
            (StringTag("x"), VariantKind.STRING),
            (ArrayTag(), VariantKind.ARRAY),
            (ObjectTag(), VariantKind.OBJECT),
        ],
    )
    def test_tag_sets_kind(self, tag, kind):
        """Test that each tag activates its own variant."""
        assert DynamicValue(tag).active_kind() is kind

    def test_scalar_payloads(self):
        """Test that scalar payloads are read back unchanged."""
        assert DynamicValue(BoolTag(True)).as_bool() is True
        assert DynamicValue(IntTag(-42)).as_int() == -42
        assert DynamicValue(UIntTag(42)).as_uint() == 42
        assert DynamicValue(DoubleTag(2)).as_double() == 2.0
        assert isinstance(DynamicValue(DoubleTag(2)).as_double(), float)

    def test_empty_container_payloads(self):
        """Test that string, array and object tags start empty."""
        assert DynamicValue(StringTag()).as_string() == ""
        assert DynamicValue(ArrayTag()).as_array() == []
        assert len(DynamicValue(ObjectTag()).as_object()) == 0

    def test_payload_types(self):
        """Test the payload classes of the container variants."""
        assert isinstance(DynamicValue(StringTag()).as_string(), String)
        assert isinstance(DynamicValue(ArrayTag()).as_array(), Array)
        assert isinstance(DynamicValue(ObjectTag()).as_object(), Object)


# =============================================================================
# Integer bounds
# =============================================================================


class TestIntegerBounds:
    """Test that the integer variants keep to 64 bits."""

    def test_int_bounds_accepted(self):
        """Test the limits of the INT variant."""
        assert DynamicValue(IntTag(Limits.INT_MIN)).as_int() == -(2**63)
        assert DynamicValue(IntTag(Limits.INT_MAX)).as_int() == 2**63 - 1

    def test_uint_bounds_accepted(self):
        """Test the limits of the UINT variant."""
        assert DynamicValue(UIntTag(0)).as_uint() == 0
        assert DynamicValue(UIntTag(Limits.UINT_MAX)).as_uint() == 2**64 - 1

    @pytest.mark.parametrize("value", [2**63, -(2**63) - 1])
    def test_int_out_of_range(self, value):
        """Test that INT rejects values beyond 64 signed bits."""
        with pytest.raises(DynamicRangeError):
            IntTag(value)

    @pytest.mark.parametrize("value", [-1, 2**64])
    def test_uint_out_of_range(self, value):
        """Test that UINT rejects values beyond 64 unsigned bits."""
        with pytest.raises(DynamicRangeError):
            UIntTag(value)

    def test_range_error_hierarchy(self):
        """Test that range errors are dynamic errors and overflow errors."""
        assert issubclass(DynamicRangeError, DynamicError)
        assert issubclass(DynamicRangeError, OverflowError)


# =============================================================================
# Accessors
# =============================================================================


class TestAccessors:
    """Test the variant accessors contract."""

    def test_mutable_string(self):
        """Test that the string payload is modified in place."""
        v = DynamicValue(StringTag())
        v.as_string().assign("hello world", 5)
        assert v.as_string() == "hello"
        assert v.to_python() == "hello"

    def test_mutable_array(self):
        """Test that the array payload is modified in place."""
        v = DynamicValue(ArrayTag())
        v.as_array().append(_int(1))
        v.as_array().append(_int(2))
        assert [x.as_int() for x in v.as_array()] == [1, 2]

    def test_mutable_object(self):
        """Test that the object payload is modified in place."""
        v = DynamicValue(ObjectTag())
        v.as_object()["a"] = _int(1)
        assert v.as_object()["a"].as_int() == 1

    @pytest.mark.parametrize(
        "accessor",
        ["as_bool", "as_int", "as_uint", "as_double", "as_string", "as_array", "as_object"],
    )
    def test_accessor_on_null(self, accessor):
        """Test that every accessor refuses a null value."""
        with pytest.raises(BadCastError):
            getattr(DynamicValue(), accessor)()

    def test_int_is_not_uint(self):
        """Test that INT and UINT are distinct variants."""
        with pytest.raises(BadCastError):
            DynamicValue(IntTag(1)).as_uint()
        with pytest.raises(BadCastError):
            DynamicValue(UIntTag(1)).as_int()

    def test_bad_cast_message(self):
        """Test that the error names both variants."""
        with pytest.raises(BadCastError, match="ARRAY.*DOUBLE"):
            DynamicValue(DoubleTag(1.0)).as_array()

    def test_bad_cast_is_type_error(self):
        """Test that bad casts can be caught as TypeError."""
        assert issubclass(BadCastError, TypeError)
        assert issubclass(BadCastError, DynamicError)


# =============================================================================
# Reassignment
# =============================================================================


class TestAssignment:
    """Test that assigning a tag replaces the active variant."""

    def test_assign_returns_value(self):
        """Test that assign can be chained."""
        v = DynamicValue()
        assert v.assign(IntTag(3)) is v

    def test_array_to_double_releases_payload(self):
        """Test that the old array is emptied when another variant is assigned."""
        v = DynamicValue(ArrayTag())
        nested = _int(7)
        v.as_array().append(nested)
        old = v.as_array()

        v.assign(DoubleTag(1.5))

        assert v.active_kind() is VariantKind.DOUBLE
        assert v.as_double() == 1.5
        assert len(old) == 0
        assert all(x is not nested for x in old)

    def test_object_to_null_releases_payload(self):
        """Test that the old object is emptied when the value becomes null."""
        v = DynamicValue(ObjectTag())
        v.as_object()["k"] = _int(1)
        old = v.as_object()

        v.assign(NullTag())

        assert v.is_null()
        assert len(old) == 0

    def test_reassign_same_kind_gives_fresh_payload(self):
        """Test that assigning the active kind again starts from an empty payload."""
        v = DynamicValue(ArrayTag())
        v.as_array().append(_int(1))
        v.assign(ArrayTag())
        assert v.as_array() == []

    def test_old_accessor_is_invalid(self):
        """Test that accessors of the previous variant fail after reassignment."""
        v = DynamicValue(StringTag("x"))
        v.assign(BoolTag(False))
        with pytest.raises(BadCastError):
            v.as_string()


# =============================================================================
# Object ordering
# =============================================================================


class TestObject:
    """Test the object payload."""

    def test_iterates_by_key(self):
        """Test that iteration follows key order, not insertion order."""
        o = Object()
        for key in ("c", "a", "b"):
            o[key] = _int(ord(key))
        assert list(o) == ["a", "b", "c"]
        assert [k for k, _ in o.items()] == ["a", "b", "c"]

    def test_insert_keeps_existing(self):
        """Test that insert does not overwrite an existing key."""
        o = Object()
        assert o.insert("a", _int(1)) is True
        assert o.insert("a", _int(2)) is False
        assert o["a"].as_int() == 1

    def test_setitem_overwrites(self):
        """Test that item assignment overwrites an existing key."""
        o = Object()
        o["a"] = _int(1)
        o["a"] = _int(2)
        assert o["a"].as_int() == 2
        assert len(o) == 1

    def test_delete_and_contains(self):
        """Test key removal."""
        o = Object({"a": _int(1)})
        assert "a" in o
        del o["a"]
        assert "a" not in o


# =============================================================================
# Copy, take, equality
# =============================================================================


class TestCopyAndTake:
    """Test deep copies and moves of values."""

    def _nested(self) -> DynamicValue:
        v = DynamicValue(ObjectTag())
        inner = DynamicValue(ArrayTag())
        inner.as_array().extend([_int(1), DynamicValue(StringTag("s"))])
        v.as_object()["list"] = inner
        return v

    def test_copy_is_deep(self):
        """Test that a copy shares no container with the original."""
        v = self._nested()
        c = v.copy()
        assert c == v
        c.as_object()["list"].as_array().append(_int(2))
        c.as_object()["list"].as_array()[1].as_string().assign("changed")
        assert len(v.as_object()["list"].as_array()) == 2
        assert v.as_object()["list"].as_array()[1].as_string() == "s"

    def test_take_moves_payload(self):
        """Test that take moves the payload and leaves the source null."""
        v = self._nested()
        payload = v.as_object()
        moved = v.take()
        assert v.is_null()
        assert moved.as_object() is payload
        assert len(payload) == 1

    def test_share_then_vacate(self):
        """Test that share keeps the source intact until vacate leaves it null."""
        v = self._nested()
        payload = v.as_object()
        shared = v.share()
        assert shared.as_object() is payload
        assert v.as_object() is payload
        v.vacate()
        assert v.is_null()
        assert len(shared.as_object()) == 1

    def test_equality(self):
        """Test equality of values."""
        assert _int(1) == _int(1)
        assert _int(1) != _int(2)
        assert DynamicValue(IntTag(1)) != DynamicValue(UIntTag(1))
        assert DynamicValue(BoolTag(True)) != DynamicValue(IntTag(1))
        assert DynamicValue() == make_null()
        assert _int(1) != 1

    def test_values_are_unhashable(self):
        """Test that mutable values cannot be hashed."""
        with pytest.raises(TypeError):
            hash(DynamicValue())

    def test_to_python(self):
        """Test the conversion to plain Python data."""
        v = DynamicValue(ObjectTag())
        v.as_object()["b"] = DynamicValue(DoubleTag(0.5))
        v.as_object()["a"] = DynamicValue()
        assert v.to_python() == {"a": None, "b": 0.5}
        assert list(v.to_python()) == ["a", "b"]

    def test_repr(self):
        """Test the representation of values."""
        assert repr(DynamicValue()) == "DynamicValue(NULL)"
        assert repr(_int(3)) == "DynamicValue(INT, 3)"

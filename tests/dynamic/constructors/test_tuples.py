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
Created: 2025-12-17
Description: Tests for the fixed arity tuple constructors and their chain of slot steps.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import ctypes
from enum import IntEnum

import pytest

from dynacore.constructors import (
    Constructor,
    ConversionArityError,
    ConversionRuleError,
    construct,
    construct_owned,
    constructor_from_annotation,
)
from dynacore.dynamic.constructors.tuples import tuple_constructor, tuple_steps
from dynacore.value import Array, DynamicValue, IntTag, StringTag, VariantKind


class Side(IntEnum):
    LEFT = 0
    RIGHT = 1


class TestTupleConversion:
    """Test the conversion of fixed arity tuples."""

    def test_pair(self):
        """Test that (7, "x") converts to INT 7 then STRING "x"."""
        v = construct(tuple[int, str], (7, "x"))
        array = v.as_array()
        assert len(array) == 2
        assert array[0] == DynamicValue(IntTag(7))
        assert array[1] == DynamicValue(StringTag("x"))

    def test_empty_tuple(self):
        """Test that the empty tuple converts to an empty array."""
        v = construct(tuple[()], ())
        assert v.active_kind() is VariantKind.ARRAY
        assert v.as_array() == []

    def test_single_slot(self):
        """Test a tuple of arity one."""
        assert construct(tuple[float], (0.5,)).to_python() == [0.5]

    def test_each_slot_has_its_rule(self):
        """Test that each slot resolves to the rule of its own type."""
        v = construct(
            tuple[ctypes.c_uint8, int, Side, bool, None],
            (ctypes.c_uint8(1), -1, Side.RIGHT, True, None),
        )
        kinds = [x.active_kind() for x in v.as_array()]
        assert kinds == [
            VariantKind.UINT,
            VariantKind.INT,
            VariantKind.INT,
            VariantKind.BOOL,
            VariantKind.NULL,
        ]

    def test_nested_compounds(self):
        """Test tuples holding lists and dicts."""
        v = construct(tuple[list[int], dict[str, str]], ([1, 2], {"k": "v"}))
        assert v.to_python() == [[1, 2], {"k": "v"}]

    def test_slot_order_preserved_for_long_tuples(self):
        """Test that slots are appended in slot order whatever the arity."""
        annotation = tuple[(int,) * 20]
        source = tuple(range(20))
        assert construct(annotation, source).to_python() == list(range(20))

    def test_owned_tuple_moves_each_slot(self):
        """Test that moving a tuple moves every slot once."""
        inner = [1, 2]
        value = DynamicValue(StringTag("kept"))
        v = construct_owned(tuple[list[int], DynamicValue], (inner, value))
        assert v.to_python() == [[1, 2], "kept"]
        assert inner == []
        assert value.is_null()

    def test_failed_move_keeps_every_slot(self):
        """Test that slots moved before a failing slot are left untouched."""
        value = DynamicValue(StringTag("kept"))
        inner = [1]
        with pytest.raises(OverflowError):
            construct_owned(tuple[DynamicValue, list[int], int], (value, inner, 2**70))
        assert value.as_string() == "kept"
        assert inner == [1]

    def test_borrowed_tuple_copies_each_slot(self):
        """Test that copying a tuple leaves its slots untouched."""
        inner = [1, 2]
        value = DynamicValue(StringTag("kept"))
        construct(tuple[list[int], DynamicValue], (inner, value))
        assert inner == [1, 2]
        assert value.as_string() == "kept"


class TestTupleErrors:
    """Test errors of the tuple constructors."""

    @pytest.mark.parametrize("source", [(1,), (1, "a", 2), ()])
    def test_arity_mismatch(self, source):
        """Test that a tuple of another length is rejected."""
        with pytest.raises(ConversionArityError):
            construct(tuple[int, str], source)

    def test_bare_tuple_rejected(self):
        """Test that tuple without slot types has no constructor."""
        with pytest.raises(ConversionRuleError):
            constructor_from_annotation(tuple)

    def test_unknown_slot_rejected_at_resolution(self):
        """Test that a slot without rule rejects the tuple before any conversion."""
        with pytest.raises(ConversionRuleError):
            constructor_from_annotation(tuple[int, complex])


class TestTupleSteps:
    """Test the chain of slot steps directly."""

    @staticmethod
    def _recording(log: list[str], name: str) -> Constructor:
        def convert(source):
            log.append(name)
            return DynamicValue(StringTag(str(source)))

        return Constructor(convert, lambda source: DynamicValue(StringTag(f"moved {source}")))

    def test_no_slot_does_nothing(self):
        """Test that the chain of the empty tuple appends nothing."""
        array = Array()
        tuple_steps([])((), array)
        assert array == []

    def test_steps_run_in_slot_order(self):
        """Test that step I runs before step I + 1."""
        log: list[str] = []
        constructors = [self._recording(log, n) for n in ("first", "second", "third")]
        array = Array()
        tuple_steps(constructors)(("a", "b", "c"), array)
        assert log == ["first", "second", "third"]
        assert [x.as_string() for x in array] == ["a", "b", "c"]

    def test_owned_steps_move_each_slot(self):
        """Test that the owned chain calls the moving conversions."""
        constructors = [self._recording([], "only")]
        array = Array()
        tuple_steps(constructors, owned=True)(("a",), array)
        assert array[0].as_string() == "moved a"

    def test_slots_released_after_every_move(self):
        """Test that the tuple constructor releases the slots once all of them were moved."""
        log: list[str] = []

        def slot(name: str) -> Constructor:
            return Constructor(
                lambda source: DynamicValue(StringTag(source)),
                lambda source: log.append(f"move {name}") or DynamicValue(),
                release=lambda source: log.append(f"release {name}"),
            )

        constructor = tuple_constructor([slot("a"), slot("b")], tuple[str, str])
        constructor.from_owned(("x", "y"))
        assert log == ["move a", "move b", "release a", "release b"]

    def test_tuple_constructor(self):
        """Test a tuple constructor built from slot constructors."""
        constructor = tuple_constructor(
            [constructor_from_annotation(int), constructor_from_annotation(str)],
            tuple[int, str],
        )
        assert constructor.from_borrowed((1, "a")).to_python() == [1, "a"]
        assert constructor((1, "a")).to_python() == [1, "a"]

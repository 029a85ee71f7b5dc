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
Description: Conversion of fixed arity tuples, tuple[int, str, float] for instance. The slots
            of such a tuple have different types, so each slot has its own constructor. When
            the annotation is resolved, a chain of steps is built: the step of slot I converts
            slot I then hands over to the step of slot I + 1, the step of the last slot ends the
            chain and the empty tuple gets a step doing nothing.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections.abc import Sequence
from typing import Any, Callable

from ..value import Array, ArrayTag, DynamicValue
from .errors import ConversionArityError
from .rules import Constructor

type SlotStep = Callable[[tuple[Any, ...], Array], None]


def _no_slot(_source: tuple[Any, ...], _array: Array) -> None:
    """Step of the empty tuple."""


def _slot_step(
    index: int, constructors: Sequence[Constructor], owned: bool
) -> SlotStep:
    constructor = constructors[index]
    convert = constructor.move if owned else constructor.from_borrowed

    if index == len(constructors) - 1:

        def last_slot(source: tuple[Any, ...], array: Array) -> None:
            array.append(convert(source[index]))

        return last_slot

    next_step = _slot_step(index + 1, constructors, owned)

    def slot(source: tuple[Any, ...], array: Array) -> None:
        array.append(convert(source[index]))
        next_step(source, array)

    return slot


def tuple_steps(constructors: Sequence[Constructor], owned: bool = False) -> SlotStep:
    """Build the chain of steps appending the converted slots of a tuple to an Array, slot 0
    first.

    Both building and running the chain recurse once per slot, so a tuple of about a thousand
    slots exceeds the recursion limit of the interpreter.

    Args:
        constructors (Sequence[Constructor]): The constructor of each slot, in slot order.
        owned (bool): Whether slots are moved (first phase of a move, see Constructor) or
            copied.

    Returns:
        SlotStep: The first step of the chain.
    """
    if not constructors:
        return _no_slot
    return _slot_step(0, constructors, owned)


def tuple_constructor(
    constructors: Sequence[Constructor], annotation: Any = None
) -> Constructor:
    """Create the constructor of a fixed arity tuple from the constructors of its slots.

    The returned constructor raises ConversionArityError for a tuple whose length differs
    from the number of slot constructors. Moving a tuple moves each slot once, and the slots
    are only released once every slot was moved. The tuple itself, being immutable, is left as
    is.

    Args:
        constructors (Sequence[Constructor]): The constructor of each slot, in slot order.
        annotation (Any): The tuple annotation, for error messages.

    Returns:
        Constructor: The tuple constructor.
    """
    arity = len(constructors)
    copy_steps = tuple_steps(constructors, owned=False)
    move_steps = tuple_steps(constructors, owned=True)
    releases = [constructor.release for constructor in constructors]

    def run(steps: SlotStep, source: tuple[Any, ...]) -> DynamicValue:
        if len(source) != arity:
            raise ConversionArityError(
                f"Could not convert {source!r} with '{annotation}': expected {arity} slots,"
                f" got {len(source)}."
            )
        value = DynamicValue(ArrayTag())
        steps(source, value.as_array())
        return value

    def release_slots(source: tuple[Any, ...]) -> None:
        for release, slot in zip(releases, source):
            release(slot)

    return Constructor(
        lambda source: run(copy_steps, source),
        lambda source: run(move_steps, source),
        annotation,
        release_slots,
    )

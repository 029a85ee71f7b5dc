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
Description: Conversion rules and constructors. A rule knows how to turn one kind of source
            annotation into a Constructor, the pair of callables that converts values of that
            annotation to a DynamicValue:
            - from_borrowed copies the source, which is left untouched.
            - from_owned moves the source content into the DynamicValue, leaving mutable
              sources emptied.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from types import NotImplementedType
from typing import TYPE_CHECKING, Any, Callable, Self, get_args

from ..value import DynamicValue
from .errors import ConstructionError, ConversionRuleError

if TYPE_CHECKING:
    from .registry import ConstructorsRegistry

type Annotation = Any
type Converter = Callable[[Any], DynamicValue]
type Releaser = Callable[[Any], None]
type ConstructorCreator = Callable[..., Constructor | NotImplementedType]


def _keep(_source: Any) -> None:
    """Release of sources that are never emptied."""


class Constructor:
    """The resolved conversion of one source annotation.

    Nothing is inspected when a Constructor runs: every decision was taken when it was
    resolved from its annotation.

    Moving a source happens in two phases so that a failure leaves the source untouched:
        1. move builds the DynamicValue and may fail. It must not modify the source, it may
           only hand the source's DynamicValue payloads over to the result.
        2. release empties the source, and the sources nested in it, once the whole value
           was built. It never fails.
    Compound constructors run the move of every element before releasing any of them.
    """

    __slots__ = ("annotation", "from_borrowed", "move", "release")

    def __init__(
        self,
        from_borrowed: Converter,
        from_owned: Converter | None = None,
        annotation: Annotation = None,
        release: Releaser | None = None,
    ) -> None:
        """
        Args:
            from_borrowed (Converter): Converts a source without modifying it.
            from_owned (Converter | None): First phase of a move. Defaults to from_borrowed,
                for sources where a move costs the same as a copy.
            annotation (Annotation): The annotation the constructor was resolved from.
            release (Releaser | None): Second phase of a move, empties the moved source.
                Defaults to doing nothing.
        """
        self.from_borrowed = from_borrowed
        self.move = from_owned or from_borrowed
        self.annotation = annotation
        self.release = release or _keep

    def from_owned(self, source: Any) -> DynamicValue:
        """Convert a source by moving its content. The source must not be read afterwards:
        mutable sources are left emptied, unless the conversion fails.
        """
        value = self.move(source)
        self.release(source)
        return value

    def __call__(self, source: Any) -> DynamicValue:
        return self.from_borrowed(source)

    def __repr__(self) -> str:
        return f"<Constructor for {self.annotation!r}>"


class ConversionRule:
    """Base class to hold the conversion of a kind of source annotation.

    A rule either provides from_borrowed (and optionally from_owned) directly, for sources
    whose conversion does not depend on the annotation, or overrides create_constructor to
    build a Constructor from the annotation and the constructors of its arguments.

    A from_owned given directly becomes the move of its constructor, with no release: it must
    convert the whole source before emptying it.
    """

    from_borrowed: Converter | None = None
    from_owned: Converter | None = None

    def _prepare_inner_safe(
        self, annotation: Annotation, f: Callable[[Any], Any]
    ) -> Any:
        try:
            return self.prepare_inner(annotation, f)
        except ConstructionError as e:
            raise ConversionRuleError(
                f"Could not create constructor for annotation '{annotation}'."
            ) from e

    def prepare_inner(self, annotation: Annotation, f: Callable[[Any], Any]) -> Any:
        """Can be overriden to change how the inner annotations are processed."""
        return list(map(f, get_args(annotation)))

    def raw_create_constructor(
        self,
        annotation: Annotation,
        registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        """Usually kept for private use. Can be overriden by sub-classes instead of
        create_constructor to avoid resolving the inner constructors.

        Args:
            annotation (Annotation): The annotation to create the constructor for.
            registry (ConstructorsRegistry): The registry resolving the inner annotations.

        Returns:
            Constructor | NotImplementedType: The constructor, or NotImplemented.
        """
        return self.create_constructor(
            self._prepare_inner_safe(annotation, registry.constructor_from_annotation),
            annotation,
            registry,
        )

    def create_constructor(
        self,
        inner_constructors: list[Constructor],
        annotation: Annotation,
        registry: ConstructorsRegistry,
        /,
    ) -> Constructor | NotImplementedType:
        """Create a constructor for the annotation.

        Args:
            inner_constructors (list[Constructor]): The constructors of the annotation's
                arguments, as prepared by prepare_inner.
            annotation (Annotation): The complete annotation to create the constructor for.
            registry (ConstructorsRegistry): The registry in use.

        Returns:
            Constructor | NotImplementedType: The constructor, or NotImplemented to fall back on
                from_borrowed and from_owned.
        """
        _ = inner_constructors, annotation, registry
        return NotImplemented

    def constructor_for(
        self, annotation: Annotation, registry: ConstructorsRegistry, /
    ) -> Constructor:
        """Build the constructor of `annotation` with this rule.

        Raises:
            ConversionRuleError: Raised when the rule can neither create a constructor nor
                provides from_borrowed.
        """
        constructor = self.raw_create_constructor(annotation, registry)
        if constructor is not NotImplemented:
            return constructor
        if self.from_borrowed is None:
            raise ConversionRuleError(
                f"Rule '{type(self).__name__}' provides no conversion for '{annotation}'."
            )
        return Constructor(self.from_borrowed, self.from_owned, annotation)


class HousingConversionRule(ConversionRule):
    """House conversions given as independent callables.

    Examples:
        >>> rule = HousingConversionRule()
        >>> @rule.set_from_borrowed
        ... def point(p: Point) -> DynamicValue:
        ...     return construct(tuple[int, int], (p.x, p.y))
        >>> registry.register_rule(Point, rule)
    """

    def __init__(
        self,
        from_borrowed: Converter | None = None,
        from_owned: Converter | None = None,
        constructor_creator: ConstructorCreator | None = None,
    ) -> None:
        self.from_borrowed = from_borrowed or self.from_borrowed
        self.from_owned = from_owned or self.from_owned
        self.create_constructor = constructor_creator or self.create_constructor

    def set_from_borrowed(self, converter: Converter) -> Converter:
        """Set the copying conversion. Can be used as a decorator.

        Returns:
            Converter: The converter, unchanged.
        """
        self.from_borrowed = converter
        return converter

    def set_from_owned(self, converter: Converter) -> Converter:
        """Set the moving conversion. Can be used as a decorator.

        Returns:
            Converter: The converter, unchanged.
        """
        self.from_owned = converter
        return converter

    def set_constructor_creator(self, creator: ConstructorCreator) -> ConstructorCreator:
        """Set the constructor creator. Can be used as a decorator.

        The creator receives the constructors of the annotation's arguments, the annotation and
        the registry. See ConversionRule.create_constructor.

        Returns:
            ConstructorCreator: The creator, unchanged.
        """
        self.create_constructor = creator
        return creator

    @classmethod
    def from_rule(cls, rule: ConversionRule | None) -> Self:
        """Create a HousingConversionRule from a ConversionRule."""
        if not rule:
            return cls()
        return cls(
            from_borrowed=rule.from_borrowed,
            from_owned=rule.from_owned,
            constructor_creator=rule.create_constructor,
        )

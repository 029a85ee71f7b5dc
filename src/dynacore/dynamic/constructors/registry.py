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
Description: The constructors registry. It resolves a source annotation into the Constructor
            of the one rule accepting it, and caches the result. The rules can be extended
            with custom ones. See register_rule, register_predicate_rule,
            register_from_borrowed, register_from_owned and register_constructor_creator.
🦙
"""

from __future__ import annotations

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, get_origin

from ...meta.typing.predicates import Predicate
from ...meta.typing.utilities import is_union, resolve_annotation, strip_annotated
from ..value import DynamicValue
from .errors import AmbiguousConversionRuleError, NoConversionRuleError
from .known_types import register_builtin_rules
from .rules import (
    Annotation,
    Constructor,
    ConstructorCreator,
    ConversionRule,
    Converter,
    HousingConversionRule,
)

_logger = logging.getLogger(__name__)


def _resolve(
    annotation: Annotation,
    globalns: dict[str, Any] | None,
    localns: Mapping[str, Any] | None,
) -> Annotation:
    try:
        return resolve_annotation(annotation, globalns, localns)
    except (NameError, SyntaxError) as e:
        raise NoConversionRuleError(
            f"Could not resolve a constructor for '{annotation}'. Its forward references"
            " could not be evaluated, pass the namespaces defining them."
        ) from e


class ConstructorsRegistry:
    """
    A class to hold all the conversion rules and to resolve annotations into constructors. It
    allows customization.

    Resolution of an annotation, first match wins:
        1. the rule registered for the exact annotation, int | None or Point for example.
        2. the rule registered for the origin of the annotation, list for list[int].
        3. the predicate rules. Exactly one of them must accept the annotation.
    Annotated[T, ...] resolves as T.
    """

    __rules: dict[Annotation, ConversionRule]
    __predicate_rules: dict[str, tuple[Predicate, ConversionRule]]
    __cache: dict[Annotation, Constructor]

    def __init__(self, with_builtin_rules: bool = True) -> None:
        """
        Args:
            with_builtin_rules (bool): Whether to register the built-in rules. See
                known_types.register_builtin_rules.
        """
        self.__rules = {}
        self.__predicate_rules = {}
        self.__cache = {}
        if with_builtin_rules:
            register_builtin_rules(self)

    def clear_cache_for_annotation(
        self,
        annotation: Annotation,
        *,
        globalns: dict[str, Any] | None = None,
        localns: Mapping[str, Any] | None = None,
    ) -> None:
        """Clear the cached constructor of a specific annotation.

        Args:
            annotation (Annotation): The annotation to clear the constructor cache for.
            globalns, localns: Namespaces of its forward references, as for
                constructor_from_annotation.
        """
        self.__cache.pop(annotation, None)
        self.__cache.pop(strip_annotated(_resolve(annotation, globalns, localns)), None)

    def clear_cache(self) -> None:
        """Clear the cache of all annotations."""
        self.__cache.clear()
        _logger.debug("Constructors cache cleared.")

    def register_rule(self, annotation: Annotation, rule: ConversionRule) -> None:
        """
        Register a rule for an exact annotation or for a generic origin. A rule registered for
        `list` handles list[int], list[str]...

        Constructors are resolved from the rules when first requested, so the whole cache is
        cleared: a new rule can change how a compound annotation resolves.

        Args:
            annotation (Annotation): The annotation or origin the rule is registered for.
            rule (ConversionRule): The rule.
        """
        self.__rules[annotation] = rule
        self.clear_cache()
        _logger.debug("Rule %s registered for %r.", type(rule).__name__, annotation)

    def register_predicate_rule(
        self, name: str, predicate: Predicate, rule: ConversionRule
    ) -> None:
        """
        Register a rule for every annotation accepted by `predicate`. Predicates are tried only
        when neither the annotation nor its origin has a rule, and they must not overlap: an
        annotation accepted by two predicates cannot be resolved.

        Args:
            name (str): The name of the predicate rule. Registering a name again replaces the
                previous rule.
            predicate (Predicate): Tells whether an annotation is handled by the rule.
            rule (ConversionRule): The rule.
        """
        self.__predicate_rules[name] = (predicate, rule)
        self.clear_cache()
        _logger.debug("Predicate rule '%s' registered.", name)

    def _register_single_conversion(
        self, annotation: Annotation, conversion: Any, setter: Any
    ) -> None:
        rule = self.__rules.get(annotation)
        if not isinstance(rule, HousingConversionRule):
            rule = HousingConversionRule.from_rule(rule)
            self.register_rule(annotation, rule)
        else:
            self.clear_cache()
        setter(rule, conversion)

    def register_from_borrowed(self, annotation: Annotation, converter: Converter) -> None:
        """
        Register the copying conversion of an annotation.

        Args:
            annotation (Annotation): The annotation the conversion is registered for.
            converter (Converter): Converts a source to a DynamicValue without modifying it.
        """
        self._register_single_conversion(
            annotation, converter, HousingConversionRule.set_from_borrowed
        )

    def register_from_owned(self, annotation: Annotation, converter: Converter) -> None:
        """
        Register the moving conversion of an annotation. Without one, the copying conversion is
        used to move.

        Args:
            annotation (Annotation): The annotation the conversion is registered for.
            converter (Converter): Converts a source to a DynamicValue by moving its content.
        """
        self._register_single_conversion(
            annotation, converter, HousingConversionRule.set_from_owned
        )

    def register_constructor_creator(
        self, annotation: Annotation, creator: ConstructorCreator
    ) -> None:
        """
        Register a constructor creator for an annotation, usually a generic origin.

        The creator receives the constructors of the annotation's arguments, the complete
        annotation and the registry, and returns a Constructor.

        Args:
            annotation (Annotation): The annotation the creator is registered for.
            creator (ConstructorCreator): Creates the constructor of the annotation.
        """
        self._register_single_conversion(
            annotation, creator, HousingConversionRule.set_constructor_creator
        )

    def get_rule(self, annotation: Annotation) -> ConversionRule | None:
        """Get the rule registered for an exact annotation or origin, or None."""
        return self.__rules.get(annotation)

    def has_rule(self, annotation: Annotation) -> bool:
        """Check if a rule is registered for an exact annotation or origin."""
        return annotation in self.__rules

    def list_registered_types(self) -> list[Annotation]:
        """Get all annotations and origins with a rule, for debugging/introspection."""
        return list(self.__rules.keys())

    def list_predicate_rules(self) -> list[str]:
        """Get the names of all the predicate rules."""
        return list(self.__predicate_rules.keys())

    def matching_predicates(
        self,
        annotation: Annotation,
        *,
        globalns: dict[str, Any] | None = None,
        localns: Mapping[str, Any] | None = None,
    ) -> list[str]:
        """Get the names of the predicate rules accepting an annotation.

        Args:
            annotation (Annotation): The annotation to test.

        Returns:
            list[str]: The names of the matching predicate rules. More than one means the
                annotation cannot be resolved.
        """
        annotation = strip_annotated(_resolve(annotation, globalns, localns))
        return [
            name
            for name, (predicate, _) in self.__predicate_rules.items()
            if predicate(annotation)
        ]

    def __resolve(self, annotation: Annotation) -> Constructor:
        """Find the one rule accepting the annotation and build its constructor.

        Args:
            annotation (Annotation): A resolved annotation, without Annotated layers.

        Returns:
            Constructor: The constructor of the annotation.
        """
        # Absolute priority to rules registered for the exact annotation.
        rule = self.__rules.get(annotation)
        if rule is not None:
            _logger.debug("%r resolved with its own rule.", annotation)
            return rule.constructor_for(annotation, self)

        origin = get_origin(annotation)
        if origin is not None:
            origin_rule = self.__rules.get(origin)
            if origin_rule is not None:
                _logger.debug("%r resolved with the rule of %r.", annotation, origin)
                return origin_rule.constructor_for(annotation, self)

        if is_union(annotation):
            raise NoConversionRuleError(
                f"Could not resolve a constructor for '{annotation}'. A union would select its"
                " rule from the value, register a rule for this exact union instead."
            )

        matches = [
            (name, rule)
            for name, (predicate, rule) in self.__predicate_rules.items()
            if predicate(annotation)
        ]
        if not matches:
            raise NoConversionRuleError(
                f"Could not resolve a constructor for '{annotation}'. No rule accepts it."
            )
        if len(matches) > 1:
            raise AmbiguousConversionRuleError(
                f"Could not resolve a constructor for '{annotation}'. It is accepted by the"
                f" predicate rules {[name for name, _ in matches]}."
            )
        name, rule = matches[0]
        _logger.debug("%r resolved with predicate rule '%s'.", annotation, name)
        return rule.constructor_for(annotation, self)

    def __constructor_from_annotation(self, annotation: Annotation) -> Constructor:
        annotation = strip_annotated(annotation)
        constructor = self.__cache.get(annotation)
        if constructor is None:
            constructor = self.__resolve(annotation)
            self.__cache[annotation] = constructor
        return constructor

    def constructor_from_annotation(
        self,
        annotation: Annotation,
        *,
        globalns: dict[str, Any] | None = None,
        localns: Mapping[str, Any] | None = None,
    ) -> Constructor:
        """Provides the constructor converting values of an annotation to DynamicValue. If no
        rule, or more than one predicate rule, accepts the annotation or one of its arguments,
        an error is raised before any value is converted.

        For example:
            >>> constructor = constructor_from_annotation(tuple[int, str])
            >>> constructor.from_borrowed((7, "x")) # ARRAY [INT 7, STRING "x"]
            >>> constructor_from_annotation(set[int]) # NoConversionRuleError
            >>> constructor_from_annotation(list["Point"], globalns=globals())

        Args:
            annotation (Annotation): The annotation of the source values.
            globalns (dict[str, Any] | None): Globals the forward references of the annotation
                are evaluated in. Names of this module only are known by default.
            localns (Mapping[str, Any] | None): Locals the forward references are evaluated in.

        Raises:
            NoConversionRuleError: Raised as well when a forward reference cannot be evaluated.

        Returns:
            Constructor: The constructor of the annotation.
        """
        return self.__constructor_from_annotation(_resolve(annotation, globalns, localns))

    def construct(
        self,
        annotation: Annotation,
        source: Any,
        *,
        globalns: dict[str, Any] | None = None,
        localns: Mapping[str, Any] | None = None,
    ) -> DynamicValue:
        """This function is a shortcut to
        self.constructor_from_annotation(annotation).from_borrowed(source)."""
        constructor = self.constructor_from_annotation(
            annotation, globalns=globalns, localns=localns
        )
        return constructor.from_borrowed(source)

    def construct_owned(
        self,
        annotation: Annotation,
        source: Any,
        *,
        globalns: dict[str, Any] | None = None,
        localns: Mapping[str, Any] | None = None,
    ) -> DynamicValue:
        """This function is a shortcut to
        self.constructor_from_annotation(annotation).from_owned(source).

        The source must not be read afterwards: mutable sources are left emptied. When the
        conversion fails, the source and what it contains are left untouched."""
        constructor = self.constructor_from_annotation(
            annotation, globalns=globalns, localns=localns
        )
        return constructor.from_owned(source)


@lru_cache(1)
def constructors_registry() -> ConstructorsRegistry:
    """Default constructors registry, with the built-in rules. Allows to register custom rules.
    See ConstructorsRegistry for more information.

    Returns:
        ConstructorsRegistry: the registry instance.
    """
    return ConstructorsRegistry()


def constructor_from_annotation(annotation: Annotation, **namespaces: Any) -> Constructor:
    """This function is a shortcut to `constructors_registry().constructor_from_annotation()`."""
    return constructors_registry().constructor_from_annotation(annotation, **namespaces)


def construct(annotation: Annotation, source: Any, **namespaces: Any) -> DynamicValue:
    """This function is a shortcut to `constructors_registry().construct()`."""
    return constructors_registry().construct(annotation, source, **namespaces)


def construct_owned(annotation: Annotation, source: Any, **namespaces: Any) -> DynamicValue:
    """This function is a shortcut to `constructors_registry().construct_owned()`."""
    return constructors_registry().construct_owned(annotation, source, **namespaces)

"""Errors raised while resolving and running dynamic value constructors.

Every error but ConversionArityError is raised when a constructor is resolved from an
annotation, never while a value is converted.
"""

from ...abstract.exceptions.traced_exceptions import TracedException


class ConstructionError(TracedException):
    """Base error of the dynamic value constructors."""


class NoConversionRuleError(ConstructionError):
    """Signals an annotation that no conversion rule accepts."""


class AmbiguousConversionRuleError(ConstructionError):
    """Signals an annotation accepted by more than one predicate rule."""


class ConversionRuleError(ConstructionError):
    """Signals a rule that matched an annotation but could not build its constructor."""


class ConversionArityError(ConstructionError):
    """Signals a tuple whose length differs from the arity of its annotation."""

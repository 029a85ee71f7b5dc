"""Conversion of native values to DynamicValue."""

from .rules import Constructor, ConversionRule, HousingConversionRule
from .registry import (
    ConstructorsRegistry,
    constructors_registry,
    constructor_from_annotation,
    construct,
    construct_owned,
)
from .tuples import tuple_constructor, tuple_steps
from .errors import (
    ConstructionError,
    NoConversionRuleError,
    AmbiguousConversionRuleError,
    ConversionRuleError,
    ConversionArityError,
)

__all__ = [
    # Core classes
    "Constructor",
    "ConversionRule",
    "HousingConversionRule",
    "ConstructorsRegistry",
    # Main API functions
    "constructors_registry",
    "constructor_from_annotation",
    "construct",
    "construct_owned",
    # Tuples
    "tuple_constructor",
    "tuple_steps",
    # Errors
    "ConstructionError",
    "NoConversionRuleError",
    "AmbiguousConversionRuleError",
    "ConversionRuleError",
    "ConversionArityError",
]

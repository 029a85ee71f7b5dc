"""
Re-export constructors module for cleaner imports.

This allows: from dynacore.constructors import construct
Instead of: from dynacore.dynamic.constructors.registry import construct
"""

from .dynamic.constructors import (
    Constructor,
    ConversionRule,
    HousingConversionRule,
    ConstructorsRegistry,
    constructors_registry,
    constructor_from_annotation,
    construct,
    construct_owned,
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
    # Errors
    "ConstructionError",
    "NoConversionRuleError",
    "AmbiguousConversionRuleError",
    "ConversionRuleError",
    "ConversionArityError",
]

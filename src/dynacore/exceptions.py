"""
Re-export exceptions module for cleaner imports.

This allows: from dynacore.exceptions import BadCastError
Instead of: from dynacore.dynamic.errors import BadCastError
"""

from .abstract.exceptions.traced_exceptions import (
    TracedException,
    format_exception,
    root_cause,
)
from .dynamic.errors import BadCastError, DynamicError, DynamicRangeError
from .dynamic.constructors.errors import (
    AmbiguousConversionRuleError,
    ConstructionError,
    ConversionArityError,
    ConversionRuleError,
    NoConversionRuleError,
)

__all__ = [
    "TracedException",
    "format_exception",
    "root_cause",
    # Dynamic value
    "DynamicError",
    "BadCastError",
    "DynamicRangeError",
    # Constructors
    "ConstructionError",
    "NoConversionRuleError",
    "AmbiguousConversionRuleError",
    "ConversionRuleError",
    "ConversionArityError",
]

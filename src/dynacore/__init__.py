"""
dynacore: a dynamic value type and its extensible constructors.

This library provides:
- DynamicValue, a tagged union of null, bool, int, uint, double, string, array and object
- Constructors resolved from type annotations that convert native values to DynamicValue
- ConstantNamespace for immutable class-level constants
- TracedException for enhanced exception formatting
"""

__version__ = "0.1.0"
__author__ = "Sébastien Gachoud"
__license__ = "MIT"

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
]

"""
Re-export constants module for cleaner imports.

This allows: from dynacore.constants import ConstantNamespace
Instead of: from dynacore.meta.classes.constants import ConstantNamespace
"""

from .meta.classes.constants import (
    ConstantNamespace,
    ConstantsMetaclass,
    ConstantsCompositionError,
    ConstantsInstantiationError,
    ConstantsModificationError,
)
from .dynamic.limits import Limits
from .meta.typing.predicates import CTypeCodes

__all__ = [
    "ConstantNamespace",
    "ConstantsMetaclass",
    "ConstantsCompositionError",
    "ConstantsInstantiationError",
    "ConstantsModificationError",
    "CTypeCodes",
    "Limits",
]

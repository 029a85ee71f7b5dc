"""Errors of the dynamic value."""

from ..abstract.exceptions.traced_exceptions import TracedException


class DynamicError(TracedException):
    """Base error of the dynamic value."""


class BadCastError(DynamicError, TypeError):
    """Signals an access to a variant that is not the active one."""


class DynamicRangeError(DynamicError, OverflowError):
    """Signals an integer that does not fit the 64 bits of the Int or UInt variant."""

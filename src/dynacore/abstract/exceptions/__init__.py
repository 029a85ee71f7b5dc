"""Exception utilities for dynacore."""

from .traced_exceptions import TracedException, format_exception, root_cause

__all__ = [
    "TracedException",
    "format_exception",
    "root_cause",
]

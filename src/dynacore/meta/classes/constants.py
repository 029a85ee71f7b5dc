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
Created: 2025-07-11
Updated: 2025-12-20
Description: Frozen namespaces (classes) of typed constants. dynacore keeps its numeric
            bounds and ctypes type codes in such namespaces.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect
from collections.abc import Iterator
from typing import Any, Callable, ClassVar, Final, NoReturn, get_args, get_origin

from ...abstract.exceptions.traced_exceptions import TracedException
from ..typing.utilities import is_union


class ConstantsInstantiationError(TracedException):
    """Instantiation error of a Constants class."""


class ConstantsCompositionError(TracedException):
    """Composition error of a Constants class."""


class ConstantsModificationError(TracedException):
    """Modification error of a Constants class."""


def _verify_functions(name: str, namespace: dict[str, Any]) -> None:
    """Verify that neither __new__ nor __init__ is defined.

    Raises:
        ConstantsCompositionError: Raised when a disallowed function is defined.
    """
    if "__init__" in namespace or "__new__" in namespace:
        raise ConstantsCompositionError(
            f"Constant class '{name}' is disallowed to have __new__ or __init__"
            " method since it shall never be instantiated."
        )


def _instantiation_error(name: str) -> Callable[..., NoReturn]:
    """Create a __new__ that always refuses to instantiate the class `name`."""

    def f(*_: Any, **__: Any) -> NoReturn:
        raise ConstantsInstantiationError(
            f"Cannot instantiate constant class '{name}'. Constant class cannot be instantiated."
        )

    return f


def _checked_type(annotation: Any) -> tuple[type, ...] | None:
    """The classes a constant value must be an instance of, or None when it cannot be checked.

    ClassVar[int] and Final[int] are checked against int, list[int] against list and
    int | str against both.
    """
    if annotation is Any:
        return None
    origin = get_origin(annotation)
    if origin in (ClassVar, Final):
        args = get_args(annotation)
        return _checked_type(args[0]) if args else None
    if is_union(annotation):
        checked: list[type] = []
        for arg in get_args(annotation):
            arg_types = _checked_type(arg)
            if arg_types is None:
                return None
            checked.extend(arg_types)
        return tuple(checked)
    candidate = origin or annotation
    return (candidate,) if isinstance(candidate, type) else None


def _verify_values(cls: type, annotations: dict[str, Any], names: tuple[str, ...]) -> None:
    """Verify that every constant has a value matching its annotation.

    Raises:
        ConstantsCompositionError: Raised when a value is missing or has the wrong type.
    """
    for key in names:
        if key not in cls.__dict__:
            raise ConstantsCompositionError(
                f"Attribute '{key}' needs a value in constant class '{cls.__name__}'."
            )
        expected = _checked_type(annotations[key])
        value = cls.__dict__[key]
        # bool is an int but an int constant holding True is a mistake.
        if expected is not None and (
            not isinstance(value, expected)
            or (isinstance(value, bool) and bool not in expected)
        ):
            raise ConstantsCompositionError(
                f"Constant '{key}' of class '{cls.__name__}' is annotated '{annotations[key]}'"
                f" but holds {value!r} of type '{type(value).__name__}'."
            )


class ConstantsMetaclass(type):
    __constants__: tuple[str, ...]

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        /,
        allow_private: bool = False,
        **kwargs: Any,
    ) -> Any:
        _verify_functions(name, namespace)
        namespace["__new__"] = _instantiation_error(name)

        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        annotations = inspect.get_annotations(cls, eval_str=True)
        own = tuple(
            k for k in annotations if allow_private or not k.startswith("_")
        )
        _verify_values(cls, annotations, own)

        # constants of the bases come first, in declaration order.
        names: list[str] = []
        for base in reversed(cls.__mro__[1:]):
            if isinstance(base, ConstantsMetaclass):
                names.extend(k for k in base.__constants__ if k not in names)
        names.extend(k for k in own if k not in names)

        type.__setattr__(cls, "__constants__", tuple(names))
        return cls

    def __setattr__(cls, name: str, value: Any) -> NoReturn:
        raise ConstantsModificationError(
            f"Attribute '{name}' of class '{cls.__name__}' cannot be modified. Reason: Constant"
            " class cannot be modified."
        )

    def __delattr__(cls, name: str) -> NoReturn:
        raise ConstantsModificationError(
            f"Attribute '{name}' of class '{cls.__name__}' cannot be deleted. Reason: Constant"
            " class cannot be modified."
        )

    def __repr__(cls) -> str:
        constants = ", ".join(f"{k}={getattr(cls, k)!r}" for k in cls.__constants__)
        return f"<ConstantNamespace {cls.__name__}({constants})>"

    def __iter__(cls) -> Iterator[str]:
        return iter(cls.__constants__)

    def __contains__(cls, name: str) -> bool:
        return name in cls.__constants__

    def __len__(cls) -> int:
        return len(cls.__constants__)

    def items(cls) -> list[tuple[str, Any]]:
        """Return all constants as (name, value) pairs."""
        return [(k, getattr(cls, k)) for k in cls.__constants__]

    def values(cls) -> tuple[Any, ...]:
        """Return all constant values."""
        return tuple(getattr(cls, k) for k in cls.__constants__)

    def keys(cls) -> tuple[str, ...]:
        """Return all constant names."""
        return cls.__constants__

    def get(cls, name: str, default: Any = None) -> Any:
        """Return the value of a constant, or default when there is no such constant."""
        return getattr(cls, name) if name in cls.__constants__ else default

    def has_constant(cls, name: str) -> bool:
        """Check if a constant exists."""
        return name in cls.__constants__


class ConstantNamespace(metaclass=ConstantsMetaclass, allow_private=False):
    """Base class to create namespaces (class) of constants.

    Only annotated attributes are constants. Their values are checked against their
    annotation when the class is created, and the class can neither be instantiated nor
    modified afterwards.

    Examples:
        >>> class Bounds(ConstantNamespace):
        ...    LOW: int = 0
        ...    HIGH: int = 255
        ...    step = 2 # not a constant, no annotation.

        >>> Bounds.HIGH
        255

        >>> Bounds.HIGH = 3 # raises ConstantsModificationError.

        >>> class Wrong(ConstantNamespace):
        ...    LOW: int = "0" # raises ConstantsCompositionError.
    """

    __constants__: ClassVar[tuple[str, ...]]

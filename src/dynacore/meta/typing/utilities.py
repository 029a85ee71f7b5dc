"""Type annotation utility functions.

This module provides helper functions for working with Python type annotations,
including utilities for checking union types, unwrapping Annotated and resolving
forward references in annotations.
"""
from collections.abc import Mapping
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints
from types import UnionType

type Annotation = Any


def is_class(annotation: Annotation) -> bool:
    """Check if an annotation is a plain class, not a parametrized generic such as list[int].

    Args:
        annotation (Any): The annotation to check.

    Returns:
        bool: Whether the annotation is a plain class.
    """
    return isinstance(annotation, type) and get_origin(annotation) is None


def is_union(annotation: Annotation) -> bool:
    """Check if an annotation is a union. A union is a Union or UnionType type.

    Args:
        annotation (Any): The annotation to check.

    Returns:
        bool: Whether the annotation is a union.
    """
    o = get_origin(annotation) or annotation
    return o in (Union, UnionType)


def strip_annotated(annotation: Annotation) -> Annotation:
    """Remove the Annotated layers of an annotation. Annotated[int, "meta"] -> int.

    Args:
        annotation (Any): The annotation to unwrap.

    Returns:
        Any: The innermost annotation.
    """
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def resolve_annotation_types(
    annotations: dict[str, Any],
    globalns: dict[str, Any] | None = None,
    localns: Mapping[str, Any] | None = None,
) -> dict[str, Annotation]:
    """
    Get type hints from a dictionary of annotations. See typing.get_type_hints.

    This function is useful when you want to get the type hints from a dictionary
    of annotations instead of a class or a function. Annotated metadata is kept.

    Args:
        annotations (dict[str, Any]): A dictionary of annotations.
        globalns (dict[str, Any] | None): Globals the forward references are evaluated in.
            Defaults to the globals of this module.
        localns (Mapping[str, Any] | None): Locals the forward references are evaluated in.

    Returns:
        dict[str, Any]: A dictionary of type hints.
    """
    X = type("X", (), {"__annotations__": annotations})
    return get_type_hints(X, globalns=globalns, localns=localns, include_extras=True)


def resolve_annotation(
    annotation: Annotation,
    globalns: dict[str, Any] | None = None,
    localns: Mapping[str, Any] | None = None,
) -> Annotation:
    """Resolve a single annotation: forward references are evaluated in the given namespaces
    and None becomes NoneType.
    """
    return resolve_annotation_types({"_": annotation}, globalns, localns)["_"]

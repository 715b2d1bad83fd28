"""
Value classification for the TOON encoder.

Every Python value handed to the encoder is mapped once onto a closed set of
kinds. The encoder only ever dispatches on these kinds.
"""
from collections.abc import Mapping
from enum import Enum
from typing import Any, Sequence


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    EMPTY_ARRAY = "empty_array"
    UNIFORM_OBJECT_ARRAY = "uniform_object_array"
    PRIMITIVE_ARRAY = "primitive_array"
    MIXED_ARRAY = "mixed_array"
    EMPTY_OBJECT = "empty_object"
    OBJECT = "object"


PRIMITIVE_KINDS = frozenset({
    ValueKind.NULL,
    ValueKind.BOOL,
    ValueKind.NUMBER,
    ValueKind.STRING,
})

ARRAY_KINDS = frozenset({
    ValueKind.EMPTY_ARRAY,
    ValueKind.UNIFORM_OBJECT_ARRAY,
    ValueKind.PRIMITIVE_ARRAY,
    ValueKind.MIXED_ARRAY,
})

OBJECT_KINDS = frozenset({ValueKind.EMPTY_OBJECT, ValueKind.OBJECT})


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def _scalar_kind(value: Any) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    # bool before int: True is an int
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    # str and anything unrecognised (datetime, Decimal, UUID...) render as text
    return ValueKind.STRING


def classify(value: Any) -> ValueKind:
    """
    Report the kind of a value.

    Args:
        value: Any JSON-like Python value

    Returns:
        The value's kind; arrays and objects get their sub-kind
    """
    if is_array(value):
        return classify_array(value)
    if is_object(value):
        return ValueKind.OBJECT if value else ValueKind.EMPTY_OBJECT
    return _scalar_kind(value)


def classify_array(values: Sequence[Any]) -> ValueKind:
    """
    Pick the array sub-kind that decides its layout.

    Uniform object arrays are checked first; objects are never primitives so
    the two kinds cannot overlap.
    """
    if not values:
        return ValueKind.EMPTY_ARRAY
    if is_uniform_object_array(values):
        return ValueKind.UNIFORM_OBJECT_ARRAY
    if is_primitive_array(values):
        return ValueKind.PRIMITIVE_ARRAY
    return ValueKind.MIXED_ARRAY


def is_uniform_object_array(values: Sequence[Any]) -> bool:
    """
    True when every element is an object with the same key set as the first.

    Key order does not matter; the key count must match so that both subset
    and superset mismatches are rejected. Objects without keys are uniform
    with each other.
    """
    if not values:
        return False
    if not all(is_object(item) for item in values):
        return False

    first_keys = set(values[0].keys())
    return all(
        len(item) == len(first_keys) and first_keys.issuperset(item.keys())
        for item in values
    )


def is_primitive_array(values: Sequence[Any]) -> bool:
    """True when no element is an array or an object."""
    return all(not is_array(item) and not is_object(item) for item in values)

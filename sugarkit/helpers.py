"""Truthiness and templating helpers.

    truthy(value)                      coerce any value to bool
    first_truthy(a, b, *rest)          "or" over truthiness
    first_falsy(a, b, *rest)           "and" over truthiness
    format_named(template, **values)   replace {name} placeholders
    format_pairs(template, *pairs)     same, with alternating name/value arguments
"""

from collections.abc import Sized
from numbers import Number
from typing import Any, TypeVar

T = TypeVar("T")


def truthy(value: Any) -> bool:
    """Return the truthiness of ``value``.

    None, False, numeric zero and empty strings, sequences, sets and
    mappings are false. Sized objects are judged by length, which also
    covers containers whose ``__bool__`` is ambiguous.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, Number):
        return value != 0
    if isinstance(value, Sized):
        return len(value) > 0
    return bool(value)


def first_truthy(a: T, b: T, *rest: T) -> T:
    """Return the first truthy argument, or the last argument if none is."""
    candidates = (a, b) + rest
    for value in candidates[:-1]:
        if truthy(value):
            return value
    return candidates[-1]


def first_falsy(a: T, b: T, *rest: T) -> T:
    """Return the first falsy argument, or the last argument if none is."""
    candidates = (a, b) + rest
    for value in candidates[:-1]:
        if not truthy(value):
            return value
    return candidates[-1]


def format_named(template: str, **values: Any) -> str:
    """Replace each ``{name}`` in ``template`` with ``str(values[name])``.

    Placeholders without a value are left untouched.

    Example:
        >>> format_named("name: {name}, age: {age}", name="Anne", age=15)
        'name: Anne, age: 15'
    """
    for name, value in values.items():
        template = template.replace(f"{{{name}}}", str(value))
    return template


def format_pairs(template: str, *pairs: Any) -> str:
    """Like format_named, with alternating name/value arguments.

    Raises:
        ValueError: If a name has no value
    """
    if len(pairs) % 2:
        raise ValueError(f"Expected name/value pairs, got {len(pairs)} arguments")
    for i in range(0, len(pairs), 2):
        template = template.replace(f"{{{pairs[i]}}}", str(pairs[i + 1]))
    return template

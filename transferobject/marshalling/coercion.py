"""
Scalar coercion table.

Every function here is total: any input produces a value of the target type.
Numeric strings are read from their leading numeric prefix, so "33" becomes 33,
"12.9kg" becomes 12 for an integer field and anything without a numeric prefix
becomes 0.
"""

import math
import re
from collections.abc import Mapping
from datetime import date, time
from decimal import Decimal
from numbers import Real
from typing import Any, Callable, Optional, Union
from uuid import UUID

from transferobject.exceptions import MarshallingError
from transferobject.representations.schema import DeclaredType

_NUMERIC_PREFIX = re.compile(r'\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')

_CONTAINERS = (Mapping, list, tuple, set, frozenset)


def _parse_number(text: Union[str, bytes]) -> Union[int, float]:
    if isinstance(text, bytes):
        text = text.decode('utf-8', errors='replace')

    match = _NUMERIC_PREFIX.match(text)
    if not match:
        return 0

    token = match.group().strip()
    if token.lstrip('+-').isdigit():
        return int(token)
    return float(token)


def to_integer(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, (str, bytes)):
        return to_integer(_parse_number(value))
    if isinstance(value, (Real, Decimal)):
        # truncate toward zero, non-finite values have no integer form
        return math.trunc(value) if math.isfinite(value) else 0
    if value is None:
        return 0
    if isinstance(value, _CONTAINERS):
        return 1 if value else 0
    return 1


def to_float(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (str, bytes)):
        value = _parse_number(value)
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, (Real, Decimal)):
        return float(value)
    if value is None:
        return 0.0
    if isinstance(value, _CONTAINERS):
        return 1.0 if value else 0.0
    return 1.0


def to_boolean(value: Any) -> bool:
    if isinstance(value, str) and value == '0':
        return False
    return bool(value)


def to_string(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return '1' if value else ''
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_array(value: Any) -> Union[list, dict]:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (tuple, set, frozenset)):
        return list(value)
    if value is None:
        return []
    return [value]


COERCERS: dict[DeclaredType, Callable[[Any], Any]] = {
    DeclaredType.STRING: to_string,
    DeclaredType.INTEGER: to_integer,
    DeclaredType.FLOAT: to_float,
    DeclaredType.BOOLEAN: to_boolean,
    DeclaredType.ARRAY: to_array,
}


def coerce(declared_type: DeclaredType, value: Any) -> Any:
    """
    Coerce ``value`` to a scalar declared type.

    Args:
        declared_type: One of the scalar DeclaredType members
        value: Untyped input value

    Returns:
        Value of the target type

    Raises:
        MarshallingError: declared_type is not a scalar type
    """
    coercer = COERCERS.get(declared_type)
    if coercer is None:
        raise MarshallingError(f"No coercion for declared type '{declared_type.value}'")
    return coercer(value)


def restore(python_type: Optional[type], value: Any) -> Any:
    """
    Rebuild a value of an opaque field from its flattened form.

    Dates and times are parsed from ISO 8601 strings, Decimal and UUID from
    their string form, and a mapping is passed to the class's ``from_dict`` or
    ``rehydrate`` classmethod when it has one. Anything else, including a value
    that already has the annotated class, is returned unchanged.

    Raises:
        MarshallingError: a string cannot be parsed as the annotated class
    """
    if python_type is None or value is None or isinstance(value, python_type):
        return value

    try:
        if isinstance(value, str):
            if issubclass(python_type, (date, time)):
                return python_type.fromisoformat(value)
            if issubclass(python_type, (Decimal, UUID)):
                return python_type(value)
        elif isinstance(value, Mapping):
            for name in ('from_dict', 'rehydrate'):
                factory = getattr(python_type, name, None)
                if callable(factory):
                    return factory(value)
    except (ValueError, ArithmeticError) as e:
        raise MarshallingError(f"Unable to read {value!r} as {python_type.__name__}: {e}") from e

    return value

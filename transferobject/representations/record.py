"""
Record

Base class for typed, closed-schema value holders. Subclasses declare their
fields as class annotations:

    class Contact(Record):
        name: str
        email: str
        age: int
        unsubscribed: bool = False

``Contact(data)`` trusts its input and assigns it as given; ``Contact.from_map``
and ``Contact.from_string`` coerce untrusted data through the Marshaller
first. Reading or writing a name outside the schema raises UnknownFieldError.
"""

import copy
import json
from collections.abc import Mapping
from datetime import date, time
from typing import Any, Optional

from transferobject.config.settings import get_serialization_config
from transferobject.exceptions import (
    ParseError,
    SerializationError,
    uninitialized_field,
    unknown_field,
)
from transferobject.marshalling.marshaller import Marshaller
from transferobject.representations.schema import Schema, build_schema

_PLAIN_SCALARS = (str, int, float, bool)


def flatten_value(value: Any) -> Any:
    """
    Convert a value into a plain, JSON-safe tree.

    Records and objects with a ``to_dict`` method are converted to dicts,
    sequences to lists, dates and times to ISO 8601 strings, objects defining
    their own ``__str__`` (UUIDs, decimals) to strings, and other objects to a
    dict of their public attributes.
    """
    if isinstance(value, Record):
        return value.flatten()
    if value is None or isinstance(value, _PLAIN_SCALARS):
        return value
    if isinstance(value, Mapping):
        return {key: flatten_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [flatten_value(item) for item in value]

    if isinstance(value, (date, time)):
        return value.isoformat()

    to_dict = getattr(value, 'to_dict', None)
    if callable(to_dict):
        return flatten_value(to_dict())
    if type(value).__str__ is not object.__str__:
        return str(value)
    if hasattr(value, '__dict__'):
        return {
            key: flatten_value(item)
            for key, item in vars(value).items()
            if not key.startswith('_')
        }
    return value


class Record:
    """
    Typed value holder with a fixed set of declared fields.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None, **fields):
        """
        Args:
            data: Field values keyed by attribute name or wire key. No casting
                or conversion is done.
            **fields: Field values as keyword arguments
        """
        schema = type(self).schema()
        values = dict(data or {})
        values.update(fields)

        for key, value in values.items():
            descriptor = schema.lookup(key)
            if descriptor is None:
                raise unknown_field(key, schema.name)
            object.__setattr__(self, descriptor.name, value)

        for descriptor in schema:
            if descriptor.name not in self.__dict__ and descriptor.has_default:
                object.__setattr__(self, descriptor.name, descriptor.make_default())

        self.initialize(values)

    def initialize(self, data: Mapping[str, Any]) -> None:
        """Hook run at the end of construction. Subclasses may override."""

    @classmethod
    def schema(cls) -> Schema:
        """Return the cached schema of this record type, building it on first use."""
        schema = cls.__dict__.get('_schema')
        if schema is None:
            schema = build_schema(cls, record_base=Record)
            cls._schema = schema
        return schema

    @classmethod
    def rehydrate(cls, data: Mapping[str, Any]):
        """Create an instance from already-typed data."""
        return cls(data)

    @classmethod
    def from_map(cls, data: Mapping[str, Any]):
        """
        Create an instance from untyped data, casting values to the declared
        types and building nested records.

        Args:
            data: Untyped key/value map

        Returns:
            New instance of this record type
        """
        return cls.rehydrate(Marshaller(cls.schema()).marshal(data))

    @classmethod
    def from_string(cls, serialized: str):
        """Create an instance from a JSON string."""
        record = cls()
        record.deserialize(serialized)
        return record

    def flatten(self) -> dict[str, Any]:
        """
        Convert this record to a plain dict keyed by wire key.

        Only declared fields that hold a value are included, in declaration
        order.
        """
        out = {}
        for descriptor in type(self).schema():
            if descriptor.name in self.__dict__:
                out[descriptor.key] = flatten_value(self.__dict__[descriptor.name])
        return out

    to_dict = flatten

    def serialize(self) -> str:
        """
        Serialize this record to JSON.

        Unicode and forward slashes are left unescaped unless configured
        otherwise in SerializationConfig.
        """
        config = get_serialization_config()
        separators = (',', ':') if config.indent is None else (',', ': ')

        try:
            serialized = json.dumps(
                self.flatten(),
                ensure_ascii=config.ensure_ascii,
                allow_nan=False,
                indent=config.indent,
                separators=separators,
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Unable to serialize {type(self).__name__}: {e}",
                context={'record_type': type(self).__name__},
            ) from e

        if config.escape_slashes:
            serialized = serialized.replace('/', '\\/')
        return serialized

    to_string = serialize

    def deserialize(self, serialized: str) -> None:
        """
        Decode a JSON string and marshal it into this instance in place.

        Raises:
            ParseError: the text is not a JSON object
        """
        try:
            data = json.loads(serialized)
        except json.JSONDecodeError as e:
            raise ParseError(f"Error decoding JSON: {e.msg}", position=e.pos) from e

        if not isinstance(data, dict):
            raise ParseError(
                f"Error decoding JSON: expected an object, got {type(data).__name__}"
            )

        for name, value in Marshaller(type(self).schema()).marshal(data).items():
            setattr(self, name, value)

    def copy(self):
        """Return an independent deep copy of this record."""
        return type(self).rehydrate(copy.deepcopy(self._values()))

    def _values(self) -> dict[str, Any]:
        return {
            descriptor.name: self.__dict__[descriptor.name]
            for descriptor in type(self).schema()
            if descriptor.name in self.__dict__
        }

    def __getattr__(self, name: str):
        # Only reached when normal lookup fails
        if name.startswith('_'):
            raise AttributeError(name)
        schema = type(self).schema()
        if name in schema:
            raise uninitialized_field(name, schema.name)
        raise unknown_field(name, schema.name)

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith('_') and name not in type(self).schema():
            if not isinstance(getattr(type(self), name, None), property):
                raise unknown_field(name, type(self).__name__)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        if not name.startswith('_') and name not in type(self).schema():
            raise unknown_field(name, type(self).__name__)
        object.__delattr__(self, name)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._values() == other._values()

    __hash__ = None

    def __repr__(self):
        fields = ', '.join(f"{name}={value!r}" for name, value in self._values().items())
        return f"{type(self).__name__}({fields})"

    def __str__(self):
        return self.serialize()

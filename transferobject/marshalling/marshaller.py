"""
Marshaller

Resolves an untyped map against a record schema. Scalars are coerced, nested
records and record arrays are marshalled recursively and rehydrated, and other
class-typed fields are rebuilt from their flattened form. The result is keyed
by attribute name and is meant to be passed unchanged to the record
constructor, which performs no conversion of its own.
"""

from collections.abc import Mapping
from typing import Any, Union

from transferobject.exceptions import (
    InvalidArrayElementError,
    MarshallingError,
    TransferObjectError,
    uninitialized_field,
)
from transferobject.marshalling.coercion import coerce, restore
from transferobject.representations.schema import DeclaredType, FieldDescriptor, Schema
from transferobject.utils.logging import get_logger

logger = get_logger(__name__)


def _prefix_path(error: TransferObjectError, segment: str) -> None:
    path = error.context.get('path')
    error.context['path'] = f"{segment}.{path}" if path else segment


def _is_null(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == '')


class Marshaller:
    """
    Creates the constructor arguments of a record from an array of data.

    Values are cast to the declared field types and nested mappings become
    nested records. Only declared fields are read from the input, so data from
    a form post or a database row can be used directly.
    """

    def __init__(self, schema: Union[Schema, type]):
        """
        Args:
            schema: A Schema, or a Record subclass whose schema to use
        """
        if isinstance(schema, type):
            schema = schema.schema()
        self.schema = schema

    def marshal(self, data: Mapping) -> dict[str, Any]:
        """
        Resolve ``data`` against the schema.

        Args:
            data: Untyped key/value map, e.g. decoded JSON

        Returns:
            Map of attribute name to resolved value

        Raises:
            UninitializedFieldError: a required field is missing from data
            InvalidArrayElementError: a record array holds an unusable element
            MarshallingError: data is not a mapping, or an opaque field holds
                a string its class cannot parse
        """
        if not isinstance(data, Mapping):
            raise MarshallingError(
                f"{self.schema.name} can only be marshalled from a mapping, got {type(data).__name__}",
                record_type=self.schema.name,
            )

        out = {}
        for descriptor in self.schema:
            if descriptor.key not in data:
                if descriptor.required:
                    raise uninitialized_field(descriptor.name, self.schema.name)
                continue

            out[descriptor.name] = self._resolve(descriptor, data[descriptor.key])

        logger.debug(
            "Marshalled record data",
            record_type=self.schema.name,
            fields=len(out),
            skipped=len(self.schema) - len(out),
        )
        return out

    def _resolve(self, descriptor: FieldDescriptor, value: Any) -> Any:
        declared_type = descriptor.declared_type

        if descriptor.nullable and _is_null(value):
            return None

        if declared_type.is_scalar:
            value = coerce(declared_type, value)
            if descriptor.python_type is tuple and isinstance(value, list):
                return tuple(value)
            return value

        if declared_type is DeclaredType.RECORD:
            if isinstance(value, Mapping):
                return self._rehydrate(descriptor, value, descriptor.name)
            return value

        if declared_type is DeclaredType.RECORD_ARRAY:
            if isinstance(value, Mapping):
                return self._many(descriptor, list(value.values()))
            if isinstance(value, (list, tuple)):
                return self._many(descriptor, value)
            return value

        try:
            return restore(descriptor.python_type, value)
        except MarshallingError as e:
            raise MarshallingError(
                e.message,
                record_type=self.schema.name,
                field_name=descriptor.name,
            ) from e

    def _many(self, descriptor: FieldDescriptor, values) -> list:
        """
        Builds a list of records of the field's element type.

        1. A mapping is marshalled and rehydrated as the element type
        2. An instance of the element type is kept as it is
        3. Anything else is rejected
        """
        element_type = descriptor.record_type

        out = []
        for index, value in enumerate(values):
            if isinstance(value, Mapping):
                value = self._rehydrate(descriptor, value, f"{descriptor.name}[{index}]")
            elif not isinstance(value, element_type):
                raise InvalidArrayElementError(
                    field_name=descriptor.name,
                    index=index,
                    element_type=element_type.__name__,
                    element=value,
                )
            out.append(value)

        return out

    def _rehydrate(self, descriptor: FieldDescriptor, value: Mapping, segment: str):
        record_type = descriptor.record_type
        try:
            resolved = Marshaller(record_type.schema()).marshal(value)
        except TransferObjectError as e:
            _prefix_path(e, segment)
            raise
        return record_type.rehydrate(resolved)


def marshal(schema: Union[Schema, type], data: Mapping) -> dict[str, Any]:
    """Resolve ``data`` against a schema or Record subclass."""
    return Marshaller(schema).marshal(data)

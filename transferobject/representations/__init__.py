"""Record types and their schemas."""

from .schema import DeclaredType, FieldDescriptor, Schema, field
from .record import Record, flatten_value

__all__ = [
    'DeclaredType',
    'FieldDescriptor',
    'Record',
    'Schema',
    'field',
    'flatten_value',
]

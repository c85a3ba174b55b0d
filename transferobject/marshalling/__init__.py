"""Marshalling layer - resolve untyped maps against record schemas."""

from .coercion import coerce
from .marshaller import Marshaller, marshal

__all__ = [
    'Marshaller',
    'coerce',
    'marshal',
]

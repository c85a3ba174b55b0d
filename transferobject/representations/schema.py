"""
Record schemas.

A schema is the ordered set of field descriptors for one Record subclass. It is
built from the class annotations the first time the class is used and cached on
the class afterwards, so a record may refer to its own type (an Employee whose
manager is an Employee) without any special handling.

Annotation mapping:

    str, int, float, bool          -> scalar types
    list, tuple, dict, List[X]     -> generic array
    Record subclass                -> nested record
    List[T] for a Record subclass  -> nested record array
    list + field(element_type=T)   -> nested record array
    Optional[X]                    -> X, nullable
    anything else                  -> opaque, rebuilt from its flattened form

ClassVar annotations and names starting with an underscore are not fields, and
a field may not reuse the name of a Record method.
"""

import copy
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Iterator, Optional, Union

from transferobject.exceptions import SchemaDefinitionError

# PEP 604 unions (X | None), Python 3.10+
UnionType = getattr(types, 'UnionType', None)


class _Missing:
    def __repr__(self):
        return '<MISSING>'

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING: Any = _Missing()


class DeclaredType(str, Enum):
    STRING = 'string'
    INTEGER = 'integer'
    FLOAT = 'float'
    BOOLEAN = 'boolean'
    ARRAY = 'array'
    RECORD = 'record'
    RECORD_ARRAY = 'record_array'
    OPAQUE = 'opaque'

    @property
    def is_scalar(self) -> bool:
        return self in _SCALAR_TYPES


_SCALAR_TYPES = frozenset({
    DeclaredType.STRING,
    DeclaredType.INTEGER,
    DeclaredType.FLOAT,
    DeclaredType.BOOLEAN,
    DeclaredType.ARRAY,
})

_BUILTIN_TYPES = {
    str: DeclaredType.STRING,
    int: DeclaredType.INTEGER,
    float: DeclaredType.FLOAT,
    bool: DeclaredType.BOOLEAN,
    list: DeclaredType.ARRAY,
    tuple: DeclaredType.ARRAY,
    dict: DeclaredType.ARRAY,
}


@dataclass(frozen=True)
class FieldSpec:
    """Extra declaration data attached to a field with ``field()``."""
    default: Any = MISSING
    default_factory: Optional[Callable[[], Any]] = None
    element_type: Optional[type] = None
    alias: Optional[str] = None


def field(
    *,
    default: Any = MISSING,
    default_factory: Optional[Callable[[], Any]] = None,
    element_type: Optional[type] = None,
    alias: Optional[str] = None
) -> Any:
    """
    Declare a record field with a default, a wire alias or an element type.

    Args:
        default: Default value, deep-copied into each new instance
        default_factory: Zero-argument callable producing the default
        element_type: Record type of the elements of a list field
        alias: Key used in maps and JSON instead of the attribute name

    Example:
        class Team(Record):
            members: list = field(element_type=Employee, default_factory=list)
            team_lead: Optional[Employee] = field(alias='teamLead', default=None)
    """
    if default is not MISSING and default_factory is not None:
        raise SchemaDefinitionError("Cannot specify both default and default_factory")
    return FieldSpec(
        default=default,
        default_factory=default_factory,
        element_type=element_type,
        alias=alias,
    )


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    key: str
    declared_type: DeclaredType
    nullable: bool = False
    record_type: Optional[type] = None
    default: Any = MISSING
    default_factory: Optional[Callable[[], Any]] = None
    # annotated class of ARRAY and OPAQUE fields
    python_type: Optional[type] = None

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None

    @property
    def required(self) -> bool:
        return not self.has_default

    def make_default(self) -> Any:
        """Return a fresh default value for a new instance."""
        if self.default_factory is not None:
            return self.default_factory()
        return copy.deepcopy(self.default)


class Schema:
    """Ordered, immutable collection of field descriptors for a record type."""

    def __init__(self, record_type: type, fields: tuple[FieldDescriptor, ...]):
        self.record_type = record_type
        self.fields = tuple(fields)
        self._by_name: dict[str, FieldDescriptor] = {}
        self._by_key: dict[str, FieldDescriptor] = {}

        for descriptor in self.fields:
            if descriptor.name in self._by_name:
                raise SchemaDefinitionError(
                    f"Duplicate field '{descriptor.name}'",
                    record_type=self.name,
                    field_name=descriptor.name,
                )
            if descriptor.key in self._by_key:
                raise SchemaDefinitionError(
                    f"Duplicate key '{descriptor.key}'",
                    record_type=self.name,
                    field_name=descriptor.name,
                )
            self._by_name[descriptor.name] = descriptor
            self._by_key[descriptor.key] = descriptor

    @property
    def name(self) -> str:
        return self.record_type.__name__

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._by_name)

    def get(self, name: str) -> Optional[FieldDescriptor]:
        return self._by_name.get(name)

    def lookup(self, key: str) -> Optional[FieldDescriptor]:
        """Find a descriptor by attribute name, falling back to its wire key."""
        return self._by_name.get(key) or self._by_key.get(key)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self):
        return f"<Schema {self.name} [{', '.join(self.names)}]>"


def _is_classvar(hint) -> bool:
    return hint is ClassVar or typing.get_origin(hint) is ClassVar


def _unwrap_optional(hint) -> tuple[Any, bool]:
    origin = typing.get_origin(hint)
    if origin is Union or (UnionType is not None and origin is UnionType):
        args = typing.get_args(hint)
        remaining = tuple(arg for arg in args if arg is not type(None))
        nullable = len(remaining) != len(args)
        if len(remaining) == 1:
            return remaining[0], nullable
        return Any, nullable
    return hint, False


def _is_subclass(candidate, base: type) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, base)


def _class_default(record_type: type, name: str, record_base: type) -> Any:
    for klass in record_type.__mro__:
        if klass is record_base:
            break
        if name in vars(klass):
            return vars(klass)[name]
    return MISSING


def _resolve_hints(record_type: type) -> dict[str, Any]:
    localns = {record_type.__name__: record_type}
    try:
        return typing.get_type_hints(record_type, localns=localns)
    except NameError as e:
        raise SchemaDefinitionError(
            f"Unable to resolve annotations of {record_type.__name__}: {e}",
            record_type=record_type.__name__,
        ) from e


def build_schema(record_type: type, record_base: type) -> Schema:
    """
    Build the schema of ``record_type`` from its annotations.

    Args:
        record_type: Class to describe
        record_base: Base class identifying nested record types

    Returns:
        Schema with inherited fields first, then the class's own fields
    """
    descriptors = []

    for name, hint in _resolve_hints(record_type).items():
        if name.startswith('_') or _is_classvar(hint):
            continue
        if hasattr(record_base, name):
            raise SchemaDefinitionError(
                f"Field '{name}' shadows {record_base.__name__}.{name}",
                record_type=record_type.__name__,
                field_name=name,
            )

        declared = _class_default(record_type, name, record_base)
        if isinstance(declared, FieldSpec):
            default, default_factory = declared.default, declared.default_factory
            element_type, alias = declared.element_type, declared.alias
        else:
            default, default_factory = declared, None
            element_type, alias = None, None

        hint, nullable = _unwrap_optional(hint)
        origin = typing.get_origin(hint) or hint
        record_ref = python_type = None

        if element_type is not None:
            if origin not in (list, tuple):
                raise SchemaDefinitionError(
                    f"element_type given for non-list field '{name}'",
                    record_type=record_type.__name__,
                    field_name=name,
                )
            if not _is_subclass(element_type, record_base):
                raise SchemaDefinitionError(
                    f"element_type of '{name}' must be a {record_base.__name__} subclass",
                    record_type=record_type.__name__,
                    field_name=name,
                )
            declared_type, record_ref = DeclaredType.RECORD_ARRAY, element_type
        elif origin in (list, tuple) and _is_subclass(next(iter(typing.get_args(hint)), None), record_base):
            declared_type, record_ref = DeclaredType.RECORD_ARRAY, typing.get_args(hint)[0]
        elif _is_subclass(hint, record_base):
            declared_type, record_ref = DeclaredType.RECORD, hint
        elif origin in _BUILTIN_TYPES:
            declared_type = _BUILTIN_TYPES[origin]
            if declared_type is DeclaredType.ARRAY:
                python_type = origin
        else:
            declared_type = DeclaredType.OPAQUE
            # typing.Any is a class on 3.11+
            if isinstance(hint, type) and hint is not Any:
                python_type = hint

        descriptors.append(FieldDescriptor(
            name=name,
            key=alias or name,
            declared_type=declared_type,
            nullable=nullable,
            record_type=record_ref,
            default=default,
            default_factory=default_factory,
            python_type=python_type,
        ))

    return Schema(record_type, tuple(descriptors))

"""
transferobject Exception Hierarchy
Provides specific exception types for schema, marshalling and codec failures.
"""

from typing import Any, Optional


class TransferObjectError(Exception):
    """
    Base exception class for all transferobject exceptions.
    Carries a machine-readable code and context about the failure.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ):
        """
        Initialize an exception with context.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code for categorization
            context: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a plain dictionary.

        Returns:
            Dictionary representation of the exception
        """
        result = {
            'error': self.error_code,
            'message': self.message,
            'type': self.__class__.__name__
        }

        if self.context:
            result['context'] = self.context

        return result

    def __str__(self) -> str:
        """String representation of the exception."""
        parts = [f"{self.error_code}: {self.message}"]

        if self.context:
            parts.append(f"Context: {self.context}")

        return " | ".join(parts)


class UnknownFieldError(TransferObjectError, AttributeError):
    """
    Raised when a field name outside the record schema is read or written.
    """

    def __init__(
        self,
        field_name: str,
        record_type: Optional[str] = None,
        message: Optional[str] = None,
        **kwargs
    ):
        if message is None:
            message = f"Property '{field_name}' does not exist"
            if record_type:
                message += f" on {record_type}"

        context = kwargs.pop('context', {})
        context['field_name'] = field_name
        if record_type:
            context['record_type'] = record_type

        super().__init__(
            message=message,
            error_code='UNKNOWN_FIELD',
            context=context,
            **kwargs
        )
        self.field_name = field_name
        self.record_type = record_type


class UninitializedFieldError(TransferObjectError, AttributeError):
    """
    Raised when a required field has no value and no default.
    """

    def __init__(
        self,
        field_name: str,
        record_type: Optional[str] = None,
        message: Optional[str] = None,
        **kwargs
    ):
        if message is None:
            message = f"Property '{field_name}' was not initialized"

        context = kwargs.pop('context', {})
        context['field_name'] = field_name
        if record_type:
            context['record_type'] = record_type

        super().__init__(
            message=message,
            error_code='UNINITIALIZED_FIELD',
            context=context,
            **kwargs
        )
        self.field_name = field_name
        self.record_type = record_type


class InvalidArrayElementError(TransferObjectError):
    """
    Raised when an element of a record array is neither a mapping nor an
    instance of the element type.
    """

    def __init__(
        self,
        field_name: str,
        index: int,
        element_type: Optional[str] = None,
        element: Optional[Any] = None,
        message: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize invalid array element error.

        Args:
            field_name: Field holding the array
            index: Position of the offending element
            element_type: Name of the expected record type
            element: The offending element
            message: Optional custom error message
            **kwargs: Additional arguments for base exception
        """
        if message is None:
            message = f"Invalid object in array '{field_name}' at index {index}"

        context = kwargs.pop('context', {})
        context['field_name'] = field_name
        context['index'] = index
        if element_type:
            context['element_type'] = element_type
        if element is not None:
            context['element_type_found'] = type(element).__name__

        super().__init__(
            message=message,
            error_code='INVALID_ARRAY_ELEMENT',
            context=context,
            **kwargs
        )
        self.field_name = field_name
        self.index = index
        self.element_type = element_type


class MarshallingError(TransferObjectError, TypeError):
    """
    Raised when data cannot be marshalled at all: the input is not a mapping,
    a value has no coercion for its declared type, or a string cannot be
    rebuilt as the annotated class of a field.
    """

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        field_name: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        if record_type:
            context['record_type'] = record_type
        if field_name:
            context['field_name'] = field_name

        super().__init__(
            message=message,
            error_code='MARSHALLING_ERROR',
            context=context,
            **kwargs
        )
        self.record_type = record_type
        self.field_name = field_name


class ParseError(TransferObjectError, ValueError):
    """
    Raised when serialized text cannot be decoded into a JSON object.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        if position is not None:
            context['position'] = position

        super().__init__(
            message=message,
            error_code='PARSE_ERROR',
            context=context,
            **kwargs
        )
        self.position = position


class SerializationError(TransferObjectError, ValueError):
    """
    Raised when a flattened record holds values JSON cannot represent.
    """

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            error_code='SERIALIZATION_ERROR',
            **kwargs
        )


class SchemaDefinitionError(TransferObjectError, TypeError):
    """
    Raised when a record class declares a field the schema builder cannot
    resolve.
    """

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        field_name: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        if record_type:
            context['record_type'] = record_type
        if field_name:
            context['field_name'] = field_name

        super().__init__(
            message=message,
            error_code='SCHEMA_DEFINITION_ERROR',
            context=context,
            **kwargs
        )
        self.record_type = record_type
        self.field_name = field_name


class ConfigurationError(TransferObjectError):
    """
    Raised when configuration is invalid.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        valid_values: Optional[list] = None,
        **kwargs
    ):
        """
        Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that has the error
            config_value: Invalid configuration value
            valid_values: List of valid values if applicable
            **kwargs: Additional arguments for base exception
        """
        context = kwargs.pop('context', {})

        if config_key:
            context['config_key'] = config_key
        if config_value is not None:
            context['config_value'] = str(config_value)
        if valid_values:
            context['valid_values'] = valid_values

        super().__init__(
            message=message,
            error_code='CONFIGURATION_ERROR',
            context=context,
            **kwargs
        )


def unknown_field(field_name: str, record_type: Optional[str] = None):
    """Create an UnknownFieldError with standard format"""
    return UnknownFieldError(field_name=field_name, record_type=record_type)


def uninitialized_field(field_name: str, record_type: Optional[str] = None):
    """Create an UninitializedFieldError with standard format"""
    return UninitializedFieldError(field_name=field_name, record_type=record_type)


__all__ = [
    'TransferObjectError',
    'UnknownFieldError',
    'UninitializedFieldError',
    'InvalidArrayElementError',
    'MarshallingError',
    'ParseError',
    'SerializationError',
    'SchemaDefinitionError',
    'ConfigurationError',
    'unknown_field',
    'uninitialized_field',
]

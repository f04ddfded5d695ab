"""Core type definitions for JSON Codable."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union


JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
JSONObject = Dict[str, Any]
PropertyKey = str


class _Missing:
    """Marker for a value that is absent, as opposed to JSON ``null``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING = _Missing()


class DataType(Enum):
    """Enumeration of JSON container kinds."""
    DICT = "dict"
    LIST = "list"
    PRIMITIVE = "primitive"

    @classmethod
    def of(cls, value: Any) -> "DataType":
        if isinstance(value, dict):
            return cls.DICT
        if isinstance(value, list):
            return cls.LIST
        return cls.PRIMITIVE


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    CIRCULAR = "circular"
    SCHEMA = "schema"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str


class ProcessingError(Exception):
    """Base exception for decode and encode failures raised by this package."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class ShapeMismatchError(ProcessingError):
    """A JSON value is not the container kind the caller asked for."""

    def __init__(self, expected: DataType, received: DataType,
                 location: str = "root", context: Optional[Any] = None):
        super().__init__(
            f"Expected {expected.value} at {location}, got {received.value}",
            ErrorType.STRUCTURE,
            context,
        )
        self.expected = expected
        self.received = received
        self.location = location


class SchemaDepthError(ProcessingError):
    """Nested schema recursion went deeper than the adapter allows."""

    def __init__(self, schema_name: str, max_depth: int):
        super().__init__(
            f"Nesting depth exceeded {max_depth} while rewriting {schema_name}",
            ErrorType.CIRCULAR,
            {"schema": schema_name, "max_depth": max_depth},
        )
        self.max_depth = max_depth


class SchemaError(ProcessingError, TypeError):
    """A schema class or one of its transformer table entries is unusable."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.SCHEMA, context)


# Abstract base classes for interfaces

class StructuralCodecInterface(ABC):
    """Binds schema-shaped JSON objects to and from typed instances."""

    @abstractmethod
    def decode(self, schema: type, obj: JSONObject) -> Any:
        """Build an instance of ``schema`` from a schema-shaped object."""
        pass

    @abstractmethod
    def encode(self, instance: Any) -> JSONObject:
        """Produce the schema-shaped object for ``instance``."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def describe(self, error: Exception) -> ErrorResponse:
        """Explain an error and suggest a follow-up."""
        pass

"""Runtime support imported by generated modules."""

from .auth import Auth, BearerAuth, HeaderAuth
from .converters import DateConverter, DateTimeConverter, JSONConverter, ScalarConverter, UUIDConverter
from .executor import HttpExecutor, QueryExecutor
from .result import (
    OBJECT_TYPE,
    SCALAR_TYPE,
    ErrorResult,
    OnlyErrors,
    Query,
    QueryResult,
    UnexpectedObjectType,
)

__all__ = [
    # Results
    "SCALAR_TYPE",
    "OBJECT_TYPE",
    "QueryResult",
    "Query",
    "ErrorResult",
    "OnlyErrors",
    "UnexpectedObjectType",
    # Execution
    "QueryExecutor",
    "HttpExecutor",
    "Auth",
    "BearerAuth",
    "HeaderAuth",
    # Converters
    "ScalarConverter",
    "DateTimeConverter",
    "DateConverter",
    "UUIDConverter",
    "JSONConverter",
]

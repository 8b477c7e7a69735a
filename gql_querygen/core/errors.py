"""Exceptions raised while generating result classes."""

from typing import Any


class CodegenError(Exception):
    """Base class for every error raised by the generator."""


class InvariantError(CodegenError):
    """An internal consistency check failed.

    Raised for conditions that validated input can never produce, such as
    overlapping dispatch branches or a class registered twice.
    """


class NamingError(CodegenError):
    """An operation or class name cannot be used as a Python class name."""

    def __init__(self, message: str, identifier: str | None = None):
        self.identifier = identifier
        super().__init__(message)


class UnsupportedTypeError(CodegenError):
    """A GraphQL type cannot be mapped to a Python type."""

    def __init__(self, message: str, type_name: str):
        self.type_name = type_name
        super().__init__(message)


class QueryValidationError(CodegenError):
    """A declared query failed validation against the schema."""

    def __init__(self, message: str, errors: list[Any] | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class RenderError(CodegenError):
    """The rendered module is not valid Python."""

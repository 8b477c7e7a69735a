"""Scalar converters used by generated code.

A converter maps a custom GraphQL scalar to a Python type. Generated code
calls ``serialize`` and ``deserialize`` on the class itself, so both are
static methods.

Example usage:
    from gql_querygen.core.scalars import ScalarRegistry
    from gql_querygen.runtime.converters import DateTimeConverter

    registry = ScalarRegistry(schema)
    registry.register("DateTime", DateTimeConverter)

    # Custom converter
    class MoneyConverter:
        python_type = "Decimal"
        import_statement = "from decimal import Decimal"

        @staticmethod
        def serialize(value):
            return str(value)

        @staticmethod
        def deserialize(value):
            return Decimal(value)

    registry.register("Money", MoneyConverter)
"""

from datetime import date, datetime
from typing import Any, Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class ScalarConverter(Protocol):
    """Protocol for custom scalar converters.

    Attributes:
        python_type: The Python type name used in signatures (e.g. "datetime")
        import_statement: The import that brings python_type into scope
    """

    python_type: str
    import_statement: str

    def serialize(self, value: Any) -> Any:
        """Convert a Python value to its JSON form."""
        ...

    def deserialize(self, value: Any) -> Any:
        """Convert a JSON value to the Python type."""
        ...


def _require_string(value: Any, scalar: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected a string for {scalar}, got {type(value).__name__}")
    return value


class DateTimeConverter:
    """ISO 8601 timestamps."""

    python_type = "datetime"
    import_statement = "from datetime import datetime"

    @staticmethod
    def serialize(value: datetime) -> str:
        return value.isoformat()

    @staticmethod
    def deserialize(value: Any) -> datetime:
        """Parse an ISO 8601 string, accepting a trailing ``Z``."""
        return datetime.fromisoformat(_require_string(value, "DateTime").replace("Z", "+00:00"))


class DateConverter:
    """ISO 8601 calendar dates."""

    python_type = "date"
    import_statement = "from datetime import date"

    @staticmethod
    def serialize(value: date) -> str:
        return value.isoformat()

    @staticmethod
    def deserialize(value: Any) -> date:
        return date.fromisoformat(_require_string(value, "Date"))


class UUIDConverter:
    python_type = "UUID"
    import_statement = "from uuid import UUID"

    @staticmethod
    def serialize(value: UUID) -> str:
        return str(value)

    @staticmethod
    def deserialize(value: Any) -> UUID:
        return UUID(_require_string(value, "UUID"))


class JSONConverter:
    """Arbitrary JSON, passed through untouched."""

    python_type = "Any"
    import_statement = "from typing import Any"

    @staticmethod
    def serialize(value: Any) -> Any:
        return value

    @staticmethod
    def deserialize(value: Any) -> Any:
        return value

"""Base classes for generated result classes."""

from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

# Type of custom scalars that have no converter
SCALAR_TYPE = Union[str, bool, int, float]
OBJECT_TYPE = Dict[str, Any]


class UnexpectedObjectType(Exception):
    """The server returned a ``__typename`` no generated branch handles."""

    def __init__(self, field: str, observed_type: str, expected_types: Tuple[str, ...]):
        self.field = field
        self.observed_type = observed_type
        self.expected_types = tuple(expected_types)
        super().__init__(
            f"Expected {field} to be one of {', '.join(self.expected_types)}, "
            f"but got {observed_type}"
        )


class QueryResult:
    """Wraps one JSON object of a response.

    Subclasses expose the selected fields as properties reading from
    ``raw_result``.
    """

    POSSIBLE_TYPES: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, raw_result: OBJECT_TYPE):
        self._raw_result = raw_result

    @property
    def raw_result(self) -> OBJECT_TYPE:
        return self._raw_result

    @property
    def graphql_typename(self) -> str:
        if len(self.POSSIBLE_TYPES) == 1:
            return self.POSSIBLE_TYPES[0]
        return self._raw_result["__typename"]

    def _unexpected_type(self, field: str, observed_type: str) -> UnexpectedObjectType:
        return UnexpectedObjectType(field, observed_type, self.POSSIBLE_TYPES)

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.raw_result == self.raw_result

    def __hash__(self) -> int:
        return hash((type(self), repr(self._raw_result)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._raw_result!r})"


class ErrorResult:
    """A response that carries errors but no data."""

    def __init__(self, errors: List[OBJECT_TYPE]):
        self._errors = errors

    @property
    def errors(self) -> List[OBJECT_TYPE]:
        return self._errors

    def __repr__(self) -> str:
        return f"{type(self).__name__}(errors={self._errors!r})"


class OnlyErrors(ErrorResult):
    """Returned by ``Query.from_result`` when the response has no data."""


class Query(QueryResult):
    """Base class for generated operation classes."""

    OPERATION_NAME: ClassVar[str] = ""
    QUERY_TEXT: ClassVar[str] = ""

    def __init__(self, data: OBJECT_TYPE, errors: Optional[List[OBJECT_TYPE]] = None):
        super().__init__(data)
        self._errors = errors

    @property
    def errors(self) -> Optional[List[OBJECT_TYPE]]:
        """Errors reported next to partial data, if any."""
        return self._errors

    @classmethod
    def from_result(cls, result: OBJECT_TYPE) -> Union["Query", OnlyErrors]:
        data = result.get("data")
        if data is not None:
            return cls(data, result.get("errors"))
        return OnlyErrors(result.get("errors") or [])

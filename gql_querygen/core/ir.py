"""Typed descriptors passed between the mappers and the class builders."""

from dataclasses import dataclass
from functools import total_ordering


@dataclass(frozen=True)
class TypedOutput:
    """Python signature and conversion for an output value.

    ``deserializer`` is a ``string.Template`` source over ``$raw_value``
    for a core type, or a complete accessor body once wrappers have been
    applied. ``dependency`` names the generated class it refers to.
    """

    signature: str
    deserializer: str
    dependency: str | None = None


@dataclass(frozen=True)
class TypedInput:
    """Python signature and serialization for an input value.

    ``serializer`` is a ``string.Template`` source over ``$value``.
    """

    signature: str
    serializer: str
    dependency: str | None = None


@total_ordering
@dataclass(frozen=True, eq=True)
class VariableDefinition:
    """A variable of an operation, or a field of an input object."""

    name: str
    graphql_name: str
    signature: str
    serializer: str
    dependency: str | None = None

    @property
    def optional(self) -> bool:
        return self.signature.startswith("Optional[")

    @property
    def sort_key(self) -> tuple[bool, str]:
        # Required variables first, then by name
        return (self.optional, self.name)

    def __lt__(self, other: "VariableDefinition") -> bool:
        if not isinstance(other, VariableDefinition):
            return NotImplemented
        return self.sort_key < other.sort_key

"""Peeling GraphQL list/non-null layers into an ordered wrapper list."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from graphql import GraphQLNamedType, GraphQLType, get_nullable_type, is_list_type, is_non_null_type


class TypeWrapper(Enum):
    """One layer around a core type, outermost first."""

    NULLABLE = "nullable"
    LIST = "list"


@dataclass(frozen=True)
class UnwrappedType:
    """A named GraphQL type together with the layers that wrap it."""

    core_type: GraphQLNamedType
    wrappers: tuple[TypeWrapper, ...]

    @property
    def list_depth(self) -> int:
        return sum(1 for wrapper in self.wrappers if wrapper is TypeWrapper.LIST)


def unwrap(graphql_type: GraphQLType) -> UnwrappedType:
    """Peel list and non-null layers off a type.

    GraphQL types are nullable unless wrapped in non-null, so a NULLABLE
    wrapper is recorded for every layer that is not preceded by a non-null.
    For ``[[String]]`` the wrappers are NULLABLE, LIST, NULLABLE, LIST,
    NULLABLE.
    """
    wrappers: list[TypeWrapper] = []
    current = graphql_type
    while True:
        non_null = is_non_null_type(current)
        current = get_nullable_type(current)
        if not non_null:
            wrappers.append(TypeWrapper.NULLABLE)
        if is_list_type(current):
            wrappers.append(TypeWrapper.LIST)
            current = current.of_type
            continue
        return UnwrappedType(core_type=current, wrappers=tuple(wrappers))


def rewrap(signature: str, wrappers: Sequence[TypeWrapper]) -> str:
    """Apply wrappers to a core signature, innermost first."""
    for wrapper in reversed(wrappers):
        if wrapper is TypeWrapper.LIST:
            signature = f"List[{signature}]"
        else:
            signature = f"Optional[{signature}]"
    return signature

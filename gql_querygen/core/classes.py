"""Descriptors for the classes a generation run emits.

Each descriptor carries the data the templates need and the names of the
classes it depends on, so the registry can emit dependencies first.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterable

from .errors import InvariantError
from .ir import VariableDefinition
from .methods import DefinedMethod
from .naming import enum_member_names


class DefinedClass:
    """Base for everything rendered as a top-level class.

    ``kind`` selects the template macro used to render the class.
    """

    kind: ClassVar[str] = ""
    name: str

    @property
    def dependencies(self) -> list[str]:
        return []


@dataclass
class EnumClass(DefinedClass):
    kind: ClassVar[str] = "enum"

    name: str
    graphql_name: str
    serialized_values: list[str]

    @property
    def members(self) -> list[tuple[str, str]]:
        """(member name, serialized value) pairs, sorted by value."""
        return enum_member_names(sorted(self.serialized_values))


@dataclass
class InputClass(DefinedClass):
    """A GraphQL input object, rendered as a pydantic model."""

    kind: ClassVar[str] = "input"

    name: str
    graphql_name: str
    arguments: list[VariableDefinition]

    @property
    def sorted_arguments(self) -> list[VariableDefinition]:
        return sorted(self.arguments)

    @property
    def dependencies(self) -> list[str]:
        return sorted({argument.dependency for argument in self.arguments if argument.dependency})


class _MethodsMixin:
    defined_methods: list[DefinedMethod]

    @property
    def sorted_methods(self) -> list[DefinedMethod]:
        return sorted(self.defined_methods, key=lambda method: method.name)

    def method(self, name: str) -> DefinedMethod | None:
        for defined_method in self.defined_methods:
            if defined_method.name == name:
                return defined_method
        return None


@dataclass
class LeafClass(_MethodsMixin, DefinedClass):
    """Result class for an object, interface or union selection."""

    kind: ClassVar[str] = "leaf"

    name: str
    graphql_type_name: str
    possible_types: tuple[str, ...]
    defined_methods: list[DefinedMethod]
    class_dependencies: list[str] = field(default_factory=list)

    @property
    def dependencies(self) -> list[str]:
        return sorted(set(self.class_dependencies))

    def merge_defined_methods(self, methods: list[DefinedMethod], dependencies: Iterable[str] = ()):
        """Fold the methods of a repeated selection into this class."""
        for extra in methods:
            existing = self.method(extra.name)
            if existing is None:
                self.defined_methods.append(extra)
            elif not existing.merge(extra):
                raise InvariantError(f"Cannot merge method {extra.name!r} into {self.name}")
        self.class_dependencies.extend(dependencies)


@dataclass
class RootClass(_MethodsMixin, DefinedClass):
    """Result class for a named operation."""

    kind: ClassVar[str] = "root"

    name: str
    operation_name: str
    operation_type: str
    query_text: str
    graphql_type_name: str
    possible_types: tuple[str, ...]
    defined_methods: list[DefinedMethod]
    variables: list[VariableDefinition]
    class_dependencies: list[str] = field(default_factory=list)
    schema: Any = field(default=None, repr=False, compare=False)

    @property
    def sorted_variables(self) -> list[VariableDefinition]:
        return sorted(self.variables)

    @property
    def dependencies(self) -> list[str]:
        names = set(self.class_dependencies)
        names.update(variable.dependency for variable in self.variables if variable.dependency)
        return sorted(names)

"""Shared state for one generation run."""

import logging
from dataclasses import dataclass, field

from graphql import GraphQLEnumType, GraphQLSchema, is_abstract_type, is_object_type

from .classes import EnumClass
from .errors import InvariantError, UnsupportedTypeError
from .naming import type_class_name
from .registry import ClassRegistry
from .scalars import BUILTIN_SCALARS, GENERIC_SCALAR, ScalarBinding, ScalarRegistry

logger = logging.getLogger(__name__)


@dataclass
class GeneratorContext:
    """Everything the mappers share while generating from one schema.

    Enum and input classes are generated once per GraphQL type and looked
    up through ``enum_classes`` / ``input_classes``. ``imports`` collects
    the import statements the rendered module needs.
    """

    schema: GraphQLSchema
    scalars: ScalarRegistry
    strict_scalars: bool = False
    registry: ClassRegistry = field(default_factory=ClassRegistry)
    enum_classes: dict[str, str] = field(default_factory=dict)
    input_classes: dict[str, str] = field(default_factory=dict)
    imports: set[str] = field(default_factory=set)
    _possible_types: dict[str, frozenset[str]] = field(default_factory=dict, repr=False)

    def possible_object_types(self, type_name: str) -> frozenset[str]:
        """Names of the object types a value of ``type_name`` can have at runtime."""
        cached = self._possible_types.get(type_name)
        if cached is not None:
            return cached

        graphql_type = self.schema.get_type(type_name)
        if graphql_type is None:
            raise InvariantError(f"Schema has no type named {type_name!r}")
        if is_abstract_type(graphql_type):
            names = frozenset(t.name for t in self.schema.get_possible_types(graphql_type))
        elif is_object_type(graphql_type):
            names = frozenset({graphql_type.name})
        else:
            raise InvariantError(f"{type_name} is not a composite type")

        logger.debug("Possible types of %s: %s", type_name, sorted(names))
        self._possible_types[type_name] = names
        return names

    def scalar_binding(self, scalar_name: str) -> ScalarBinding:
        """Resolve a scalar: registered binding, then built-in, then generic."""
        binding = self.scalars.get(scalar_name) or BUILTIN_SCALARS.get(scalar_name)
        if binding is None:
            if self.strict_scalars:
                raise UnsupportedTypeError(
                    f"No converter registered for custom scalar {scalar_name!r}", scalar_name
                )
            logger.debug("Scalar %s has no converter, using SCALAR_TYPE", scalar_name)
            binding = GENERIC_SCALAR
        self.imports.update(binding.imports)
        return binding

    def enum_class(self, enum_type: GraphQLEnumType) -> str:
        """Name of the class for ``enum_type``, generating it on first use."""
        class_name = self.enum_classes.get(enum_type.name)
        if class_name is None:
            class_name = type_class_name(enum_type.name)
            self.registry.add(EnumClass(class_name, enum_type.name, list(enum_type.values)))
            self.enum_classes[enum_type.name] = class_name
        return class_name

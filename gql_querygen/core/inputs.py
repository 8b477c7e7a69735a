"""Typing and serialization of operation variables and input objects."""

import logging

from graphql import GraphQLInputObjectType, GraphQLInputType, is_enum_type, is_input_object_type, is_scalar_type

from .classes import InputClass
from .context import GeneratorContext
from .errors import UnsupportedTypeError
from .expressions import build_serializer
from .ir import TypedInput, VariableDefinition
from .naming import EXPRESSION_NAMES, INPUT_PROTECTED_NAMES, PROTECTED_NAMES, safe_identifier, type_class_name, underscore
from .type_wrapper import rewrap, unwrap

logger = logging.getLogger(__name__)


class InputResolver:
    """Maps GraphQL input types to signatures and serializer expressions.

    Input object types become ``InputClass`` descriptors, generated once
    per type and registered in the context.
    """

    def __init__(self, context: GeneratorContext):
        self.context = context

    def variable_definition(
        self,
        graphql_name: str,
        graphql_type: GraphQLInputType,
        protected: set[str] = PROTECTED_NAMES | EXPRESSION_NAMES,
    ) -> VariableDefinition:
        name = safe_identifier(underscore(graphql_name), protected)
        typed = self.resolve(graphql_type, name)
        return VariableDefinition(
            name=name,
            graphql_name=graphql_name,
            signature=typed.signature,
            serializer=typed.serializer,
            dependency=typed.dependency,
        )

    def resolve(self, graphql_type: GraphQLInputType, variable_name: str) -> TypedInput:
        """Type ``graphql_type`` and build the serializer for ``variable_name``."""
        unwrapped = unwrap(graphql_type)
        core = self._core_input(unwrapped.core_type)
        serializer = build_serializer(
            unwrapped.wrappers,
            variable_name,
            variable_name,
            unwrapped.list_depth,
            core.serializer,
        )
        return TypedInput(rewrap(core.signature, unwrapped.wrappers), serializer, core.dependency)

    def _core_input(self, core_type) -> TypedInput:
        if is_scalar_type(core_type):
            binding = self.context.scalar_binding(core_type.name)
            return TypedInput(binding.python_type, binding.serialize)
        if is_enum_type(core_type):
            class_name = self.context.enum_class(core_type)
            return TypedInput(class_name, "$value.value", class_name)
        if is_input_object_type(core_type):
            class_name = self.input_class(core_type)
            return TypedInput(class_name, "$value.serialize()", class_name)
        raise UnsupportedTypeError(f"{core_type} cannot be used as an input type", str(core_type))

    def input_class(self, input_type: GraphQLInputObjectType) -> str:
        """Name of the class for ``input_type``, generating it on first use."""
        class_name = self.context.input_classes.get(input_type.name)
        if class_name is not None:
            return class_name

        class_name = type_class_name(input_type.name)
        # Cached before the fields resolve so recursive inputs terminate
        self.context.input_classes[input_type.name] = class_name
        arguments = [
            self.variable_definition(field_name, input_field.type, INPUT_PROTECTED_NAMES | EXPRESSION_NAMES)
            for field_name, input_field in input_type.fields.items()
        ]
        logger.debug("Generated input class %s with %d fields", class_name, len(arguments))
        self.context.registry.add(InputClass(class_name, input_type.name, arguments))
        return class_name

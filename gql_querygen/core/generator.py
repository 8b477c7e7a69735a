"""Generates result-class descriptors from GraphQL operations.

For every named operation the generator builds a ``RootClass`` and, for
each composite field it selects, a nested ``LeafClass`` named after the
path to it (``SomeQuery_Viewer``). Enums and input objects reached from
selections or variables become ``EnumClass`` and ``InputClass``
descriptors. Everything lands in one registry, from which
``sorted_classes`` yields a dependency-ordered list for rendering.

Example:
    generator = CodeGenerator(schema)
    generator.generate(container.declare_query(query_text))
    source = ModuleRenderer().render(generator.sorted_classes(), generator.imports)
"""

import logging

from graphql import (
    DocumentNode,
    FragmentDefinitionNode,
    GraphQLNamedType,
    GraphQLSchema,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
    is_composite_type,
    is_enum_type,
    is_scalar_type,
    parse,
    print_ast,
    type_from_ast,
)

from .classes import DefinedClass, LeafClass, RootClass
from .container import QueryDeclaration
from .context import GeneratorContext
from .errors import InvariantError, NamingError, UnsupportedTypeError
from .expressions import build_expression
from .inputs import InputResolver
from .ir import TypedOutput, VariableDefinition
from .methods import DefinedMethod, FieldAccessMethod, FieldAccessPath, SimpleMethod
from .naming import camelize, ensure_class_name, generate_method_name
from .scalars import ScalarRegistry
from .selections import FieldOccurrence, collect_fields, fragment_definitions, used_fragments
from .type_wrapper import rewrap, unwrap

logger = logging.getLogger(__name__)

TYPENAME_METHOD_BODY = "return self.graphql_typename"


class CodeGenerator:
    """Builds class descriptors for operations against one schema.

    The generator does not validate its input; declare queries through a
    ``QueryContainer`` first when they come from users.
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        scalars: ScalarRegistry | None = None,
        *,
        strict_scalars: bool = False,
    ):
        """Initialize the generator.

        Args:
            schema: Schema the operations are written against
            scalars: Scalar converter bindings; defaults to an empty registry
            strict_scalars: Fail on custom scalars without a binding instead
                of typing them as SCALAR_TYPE
        """
        self.schema = schema
        self.context = GeneratorContext(
            schema=schema,
            scalars=scalars if scalars is not None else ScalarRegistry(schema),
            strict_scalars=strict_scalars,
        )
        self.inputs = InputResolver(self.context)

    @property
    def classes(self) -> dict[str, DefinedClass]:
        return {defined_class.name: defined_class for defined_class in self.context.registry}

    @property
    def imports(self) -> list[str]:
        return sorted(self.context.imports)

    def sorted_classes(self) -> list[DefinedClass]:
        return self.context.registry.sorted_classes()

    def generate(self, query: QueryDeclaration | DocumentNode | str) -> list[RootClass]:
        """Generate the classes for every operation in a query document."""
        if isinstance(query, QueryDeclaration):
            document = query.document
        elif isinstance(query, str):
            document = parse(query)
        else:
            document = query

        fragments = fragment_definitions(document)
        return [
            self.generate_operation(definition, fragments)
            for definition in document.definitions
            if isinstance(definition, OperationDefinitionNode)
        ]

    def generate_operation(
        self,
        operation: OperationDefinitionNode,
        fragments: dict[str, FragmentDefinitionNode],
    ) -> RootClass:
        class_name = ensure_class_name(operation.name.value if operation.name else None)
        owner_type = self._root_type(operation.operation)
        variables = [
            self._variable_definition(definition.variable.name.value, definition.type)
            for definition in operation.variable_definitions or ()
        ]
        methods, dependencies = self._defined_methods(class_name, owner_type, operation.selection_set, fragments)

        query_document = DocumentNode(definitions=(operation, *used_fragments(operation, fragments)))
        root = RootClass(
            name=class_name,
            operation_name=class_name,
            operation_type=operation.operation.value,
            query_text=print_ast(query_document),
            graphql_type_name=owner_type.name,
            possible_types=tuple(sorted(self.context.possible_object_types(owner_type.name))),
            defined_methods=methods,
            variables=variables,
            class_dependencies=dependencies,
            schema=self.schema,
        )
        logger.debug("Generated %s %s with %d variables", root.operation_type, class_name, len(variables))
        self.context.registry.add(root)
        return root

    def _root_type(self, operation: OperationType) -> GraphQLNamedType:
        root_types = {
            OperationType.QUERY: self.schema.query_type,
            OperationType.MUTATION: self.schema.mutation_type,
            OperationType.SUBSCRIPTION: self.schema.subscription_type,
        }
        root_type = root_types.get(operation)
        if root_type is None:
            raise InvariantError(f"Schema does not support {operation.value} operations")
        return root_type

    def _variable_definition(self, graphql_name: str, type_node) -> VariableDefinition:
        graphql_type = type_from_ast(self.schema, type_node)
        if graphql_type is None:
            raise InvariantError(f"Unknown type for variable ${graphql_name}")
        return self.inputs.variable_definition(graphql_name, graphql_type)

    def _defined_methods(
        self,
        class_name: str,
        owner_type: GraphQLNamedType,
        selection_set: SelectionSetNode,
        fragments: dict[str, FragmentDefinitionNode],
    ) -> tuple[list[DefinedMethod], list[str]]:
        """Accessors for a selection set, one per response key."""
        methods: dict[str, DefinedMethod] = {}
        response_keys: dict[str, str] = {}
        dependencies: list[str] = []

        for occurrence in collect_fields(self.schema, owner_type, selection_set, fragments):
            method_name = generate_method_name(occurrence.response_key)
            seen_key = response_keys.setdefault(method_name, occurrence.response_key)
            if seen_key != occurrence.response_key:
                raise NamingError(
                    f"Response keys {seen_key!r} and {occurrence.response_key!r} in {class_name} "
                    f"both map to the accessor {method_name!r}",
                    method_name,
                )
            if occurrence.field_name == "__typename" and occurrence.alias is None:
                method: DefinedMethod = SimpleMethod(method_name, "str", TYPENAME_METHOD_BODY)
            else:
                typed = self._output_type(occurrence, class_name, fragments)
                if typed.dependency:
                    dependencies.append(typed.dependency)
                path = FieldAccessPath(
                    name=method_name,
                    signature=typed.signature,
                    expression=typed.deserializer,
                    fragment_types=occurrence.fragment_types,
                    context=self.context,
                )
                method = FieldAccessMethod(method_name, [path], self.context)

            existing = methods.get(method_name)
            if existing is None:
                methods[method_name] = method
            elif not existing.merge(method):
                raise InvariantError(f"Cannot merge method {method_name!r} in {class_name}")

        return list(methods.values()), dependencies

    def _output_type(
        self,
        occurrence: FieldOccurrence,
        class_name: str,
        fragments: dict[str, FragmentDefinitionNode],
    ) -> TypedOutput:
        """Signature and accessor body for one selected field."""
        unwrapped = unwrap(occurrence.field_definition.type)
        if occurrence.alias and occurrence.alias != occurrence.field_name:
            suffix = camelize(occurrence.alias) + camelize(occurrence.field_name)
        else:
            suffix = camelize(occurrence.field_name)

        core = self._core_output(
            unwrapped.core_type,
            occurrence.node.selection_set,
            f"{class_name}_{suffix}",
            fragments,
        )
        body = build_expression(
            unwrapped.wrappers,
            f'self.raw_result["{occurrence.response_key}"]',
            unwrapped.list_depth,
            0,
            core.deserializer,
        )
        return TypedOutput(rewrap(core.signature, unwrapped.wrappers), body, core.dependency)

    def _core_output(
        self,
        core_type: GraphQLNamedType,
        selection_set: SelectionSetNode | None,
        next_name: str,
        fragments: dict[str, FragmentDefinitionNode],
    ) -> TypedOutput:
        """Map a named type to its signature and ``$raw_value`` conversion."""
        if is_scalar_type(core_type):
            binding = self.context.scalar_binding(core_type.name)
            return TypedOutput(binding.python_type, binding.deserialize)

        if is_enum_type(core_type):
            class_name = self.context.enum_class(core_type)
            return TypedOutput(class_name, f"{class_name}($raw_value)", class_name)

        if is_composite_type(core_type):
            if selection_set is None:
                raise InvariantError(f"Field of type {core_type.name} has no selections")
            class_name = self._result_class(next_name, core_type, selection_set, fragments)
            return TypedOutput(class_name, f"{class_name}($raw_value)", class_name)

        raise UnsupportedTypeError(f"Cannot map {core_type} to a Python type", str(core_type))

    def _result_class(
        self,
        class_name: str,
        graphql_type: GraphQLNamedType,
        selection_set: SelectionSetNode,
        fragments: dict[str, FragmentDefinitionNode],
    ) -> str:
        """Generate (or extend) the result class for a composite selection.

        A class reached again under the same name and type, e.g. through two
        fragments selecting the same field, accumulates the new methods.
        """
        existing = self.context.registry.get(class_name)
        if existing is not None and not self._same_leaf(existing, graphql_type):
            class_name = f"{class_name}_{graphql_type.name}"
            existing = self.context.registry.get(class_name)

        methods, dependencies = self._defined_methods(class_name, graphql_type, selection_set, fragments)
        if existing is not None and self._same_leaf(existing, graphql_type):
            existing.merge_defined_methods(methods, dependencies)
            return class_name

        self.context.registry.add(LeafClass(
            name=class_name,
            graphql_type_name=graphql_type.name,
            possible_types=tuple(sorted(self.context.possible_object_types(graphql_type.name))),
            defined_methods=methods,
            class_dependencies=dependencies,
        ))
        return class_name

    @staticmethod
    def _same_leaf(defined_class: DefinedClass, graphql_type: GraphQLNamedType) -> bool:
        return isinstance(defined_class, LeafClass) and defined_class.graphql_type_name == graphql_type.name

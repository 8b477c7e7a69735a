"""Flattening selection sets into field occurrences.

Fragments are expanded in place. Every occurrence remembers the chain of
types it was reached through: the parent type first, then the type
condition of each enclosing fragment. Those chains drive the narrowing in
``methods.FieldAccessMethod``.
"""

from dataclasses import dataclass

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLField,
    GraphQLNamedType,
    GraphQLSchema,
    InlineFragmentNode,
    OperationDefinitionNode,
    SchemaMetaFieldDef,
    SelectionSetNode,
    TypeMetaFieldDef,
    TypeNameMetaFieldDef,
)

from .errors import InvariantError


@dataclass(frozen=True)
class FieldOccurrence:
    """One selection of a field, with the fragment chain that reached it."""

    node: FieldNode
    field_definition: GraphQLField
    fragment_types: tuple[str, ...]

    @property
    def response_key(self) -> str:
        return self.node.alias.value if self.node.alias else self.node.name.value

    @property
    def field_name(self) -> str:
        return self.node.name.value

    @property
    def alias(self) -> str | None:
        return self.node.alias.value if self.node.alias else None


def fragment_definitions(document: DocumentNode) -> dict[str, FragmentDefinitionNode]:
    return {
        definition.name.value: definition
        for definition in document.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }


def field_definition(schema: GraphQLSchema, parent_type: GraphQLNamedType, field_name: str) -> GraphQLField:
    """Look up a field, including the introspection meta fields."""
    if field_name == "__typename":
        return TypeNameMetaFieldDef
    if parent_type is schema.query_type:
        if field_name == "__schema":
            return SchemaMetaFieldDef
        if field_name == "__type":
            return TypeMetaFieldDef
    # Unions have no fields of their own
    fields = getattr(parent_type, "fields", {})
    if field_name not in fields:
        raise InvariantError(f"{parent_type.name} has no field named {field_name!r}")
    return fields[field_name]


def collect_fields(
    schema: GraphQLSchema,
    parent_type: GraphQLNamedType,
    selection_set: SelectionSetNode,
    fragments: dict[str, FragmentDefinitionNode],
    fragment_types: tuple[str, ...] | None = None,
) -> list[FieldOccurrence]:
    """Collect the field selections under ``parent_type`` in document order."""
    if fragment_types is None:
        fragment_types = (parent_type.name,)

    occurrences = []
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            definition = field_definition(schema, parent_type, selection.name.value)
            occurrences.append(FieldOccurrence(selection, definition, fragment_types))
        elif isinstance(selection, InlineFragmentNode):
            if selection.type_condition is None:
                occurrences.extend(
                    collect_fields(schema, parent_type, selection.selection_set, fragments, fragment_types)
                )
            else:
                fragment_type = _named_type(schema, selection.type_condition.name.value)
                occurrences.extend(collect_fields(
                    schema,
                    fragment_type,
                    selection.selection_set,
                    fragments,
                    fragment_types + (fragment_type.name,),
                ))
        elif isinstance(selection, FragmentSpreadNode):
            fragment = fragments.get(selection.name.value)
            if fragment is None:
                raise InvariantError(f"Unknown fragment {selection.name.value!r}")
            fragment_type = _named_type(schema, fragment.type_condition.name.value)
            occurrences.extend(collect_fields(
                schema,
                fragment_type,
                fragment.selection_set,
                fragments,
                fragment_types + (fragment_type.name,),
            ))
    return occurrences


def used_fragments(
    operation: OperationDefinitionNode,
    fragments: dict[str, FragmentDefinitionNode],
) -> list[FragmentDefinitionNode]:
    """Fragments an operation spreads, directly or through other fragments."""
    seen: dict[str, FragmentDefinitionNode] = {}
    pending = [operation.selection_set]
    while pending:
        selection_set = pending.pop()
        for selection in selection_set.selections:
            if isinstance(selection, FragmentSpreadNode):
                name = selection.name.value
                if name not in seen and name in fragments:
                    seen[name] = fragments[name]
                    pending.append(fragments[name].selection_set)
            elif selection.selection_set is not None:
                pending.append(selection.selection_set)
    return [seen[name] for name in sorted(seen)]


def _named_type(schema: GraphQLSchema, type_name: str) -> GraphQLNamedType:
    graphql_type = schema.get_type(type_name)
    if graphql_type is None:
        raise InvariantError(f"Schema has no type named {type_name!r}")
    return graphql_type

"""Query validation on top of graphql-core's standard rules."""

from graphql import (
    DocumentNode,
    FieldNode,
    GraphQLError,
    GraphQLSchema,
    ValidationRule,
    get_named_type,
    is_abstract_type,
    is_interface_type,
    specified_rules,
    validate,
)

TYPENAME_ERROR_CODE = "interfaceOrUnionMissingTypename"


class InterfacesAndUnionsHaveTypename(ValidationRule):
    """Selections on interfaces and unions must include ``__typename``.

    Generated classes dispatch on ``__typename`` for abstract types, so it
    has to be in the response under its own name.
    """

    def enter_field(self, node: FieldNode, *_args):
        selection_set = node.selection_set
        if selection_set is None or not selection_set.selections:
            return
        named_type = get_named_type(self.context.get_type())
        if named_type is None or not is_abstract_type(named_type):
            return
        for selection in selection_set.selections:
            if isinstance(selection, FieldNode) and selection.name.value == "__typename" and selection.alias is None:
                return

        kind = "an interface" if is_interface_type(named_type) else "a union"
        self.report_error(GraphQLError(
            "Interfaces and unions must include the __typename field "
            f"('{node.name.value}' returns {kind} {named_type.name} but doesn't select __typename)",
            node,
            extensions={"code": TYPENAME_ERROR_CODE, "typeName": named_type.name},
        ))


VALIDATION_RULES = [*specified_rules, InterfacesAndUnionsHaveTypename]


def validate_query(schema: GraphQLSchema, document: DocumentNode) -> list[GraphQLError]:
    """Validate a parsed query, returning every error found."""
    return validate(schema, document, VALIDATION_RULES)

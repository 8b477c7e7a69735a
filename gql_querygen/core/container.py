"""Declaring the queries a module is generated from."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from graphql import DocumentNode, GraphQLError, GraphQLSchema, OperationDefinitionNode, parse

from .errors import QueryValidationError
from .validation import validate_query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryDeclaration:
    """A validated query document and where it came from."""

    document: DocumentNode
    query_text: str
    source: str = "<string>"

    @property
    def operations(self) -> list[OperationDefinitionNode]:
        return [d for d in self.document.definitions if isinstance(d, OperationDefinitionNode)]

    @property
    def operation_names(self) -> list[str]:
        return [operation.name.value for operation in self.operations if operation.name]


@dataclass
class QueryContainer:
    """Collects the queries that share one schema and one output module.

    Example:
        container = QueryContainer(schema)
        container.declare_query('''
            query SomeQuery { viewer { login } }
        ''')
        for declaration in container.declarations:
            generator.generate(declaration)
    """

    schema: GraphQLSchema
    declarations: list[QueryDeclaration] = field(default_factory=list)

    def declare_query(self, query_text: str, source: str = "<string>") -> QueryDeclaration:
        """Parse and validate a query document, then record it.

        Raises:
            QueryValidationError: If the text does not parse, fails
                validation, has no operations, or has an unnamed operation.
        """
        try:
            document = parse(query_text)
        except GraphQLError as error:
            raise QueryValidationError(f"{source}: {error.message}", [error]) from error

        errors = validate_query(self.schema, document)
        if errors:
            messages = "\n".join(f"  - {error.message}" for error in errors)
            raise QueryValidationError(f"{source}: the query is invalid:\n{messages}", errors)

        declaration = QueryDeclaration(document=document, query_text=query_text, source=source)
        if not declaration.operations:
            raise QueryValidationError(f"{source}: the document does not define any operations")
        if len(declaration.operation_names) != len(declaration.operations):
            raise QueryValidationError(f"{source}: you must provide a name for each of the operations")

        logger.debug("Declared %s from %s", ", ".join(declaration.operation_names), source)
        self.declarations.append(declaration)
        return declaration

    def declare_file(self, path: str | Path) -> QueryDeclaration:
        path = Path(path)
        return self.declare_query(path.read_text(), source=str(path))

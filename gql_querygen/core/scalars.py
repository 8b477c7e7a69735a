"""Scalar mappings for generated result and input classes.

Built-in scalars map to fixed Python types. Custom scalars can be bound to
a converter class (see ``gql_querygen.runtime.converters``) or to raw
conversion templates; a binding always wins over the built-in mapping.

Example usage:
    from gql_querygen.core.scalars import ScalarRegistry
    from gql_querygen.runtime.converters import DateTimeConverter

    registry = ScalarRegistry(schema)
    registry.register("DateTime", DateTimeConverter)
    registry.register_expressions(
        "Money",
        python_type="Decimal",
        serialize="str($value)",
        deserialize="Decimal($raw_value)",
        imports=["from decimal import Decimal"],
    )
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from graphql import GraphQLSchema, is_scalar_type

from ..runtime.converters import DateConverter, DateTimeConverter, JSONConverter, UUIDConverter


@dataclass(frozen=True)
class ScalarBinding:
    """How one scalar is typed, deserialized and serialized.

    ``deserialize`` is a template over ``$raw_value`` and ``serialize`` a
    template over ``$value``.
    """

    python_type: str
    deserialize: str
    serialize: str
    imports: frozenset[str] = field(default_factory=frozenset)


BUILTIN_SCALARS: dict[str, ScalarBinding] = {
    "Boolean": ScalarBinding("bool", "cast(bool, $raw_value)", "$value"),
    "Int": ScalarBinding("int", "cast(int, $raw_value)", "$value"),
    "Float": ScalarBinding("float", "float($raw_value)", "$value"),
    "String": ScalarBinding("str", "cast(str, $raw_value)", "$value"),
    "ID": ScalarBinding("str", "cast(str, $raw_value)", "$value"),
    "BigInt": ScalarBinding("int", "int($raw_value)", "str($value)"),
    "ISO8601Date": ScalarBinding(
        "date",
        "date.fromisoformat($raw_value)",
        "$value.isoformat()",
        frozenset({"from datetime import date"}),
    ),
    "ISO8601DateTime": ScalarBinding(
        "datetime",
        'datetime.fromisoformat($raw_value.replace("Z", "+00:00"))',
        "$value.isoformat()",
        frozenset({"from datetime import datetime"}),
    ),
}

# Used for custom scalars nobody bound a converter to
GENERIC_SCALAR = ScalarBinding("SCALAR_TYPE", "cast(SCALAR_TYPE, $raw_value)", "$value")

DEFAULT_CONVERTERS = {
    "DateTime": DateTimeConverter,
    "Date": DateConverter,
    "UUID": UUIDConverter,
    "JSON": JSONConverter,
    "JSONObject": JSONConverter,
}


def binding_for_converter(converter: Any) -> ScalarBinding:
    """Describe a converter class (or an instance of one) as a binding."""
    converter_class = converter if isinstance(converter, type) else type(converter)
    name = converter_class.__name__
    imports = {f"from {converter_class.__module__} import {name}"}
    if getattr(converter_class, "import_statement", None):
        imports.add(converter_class.import_statement)
    return ScalarBinding(
        python_type=converter_class.python_type,
        deserialize=f"{name}.deserialize($raw_value)",
        serialize=f"{name}.serialize($value)",
        imports=frozenset(imports),
    )


class ScalarRegistry:
    """Registry of scalar bindings, optionally scoped to one schema.

    When a schema is given, binding a scalar the schema does not define is
    an error.

    Example:
        registry = ScalarRegistry(schema, include_defaults=True)
        binding = registry.get("DateTime")
        if binding:
            python_type = binding.python_type  # "datetime"
    """

    def __init__(self, schema: GraphQLSchema | None = None, *, include_defaults: bool = False):
        self.schema = schema
        self._bindings: dict[str, ScalarBinding] = {}
        if include_defaults:
            self._register_defaults()

    def _register_defaults(self):
        """Bind the shipped converters to the scalars the schema defines."""
        for scalar_name, converter in DEFAULT_CONVERTERS.items():
            if self.schema is None or is_scalar_type(self.schema.get_type(scalar_name)):
                self.register(scalar_name, converter)

    def _check_scalar(self, scalar_name: str):
        if self.schema is None:
            return
        if not is_scalar_type(self.schema.get_type(scalar_name)):
            raise ValueError(f"Schema does not define a scalar named {scalar_name!r}")

    def register(self, scalar_name: str, converter: Any) -> ScalarBinding:
        """Bind a converter class to a scalar."""
        self._check_scalar(scalar_name)
        binding = binding_for_converter(converter)
        self._bindings[scalar_name] = binding
        return binding

    def register_expressions(
        self,
        scalar_name: str,
        python_type: str,
        serialize: str,
        deserialize: str,
        imports: Iterable[str] = (),
    ) -> ScalarBinding:
        """Bind raw conversion templates to a scalar."""
        self._check_scalar(scalar_name)
        binding = ScalarBinding(
            python_type=python_type,
            deserialize=deserialize,
            serialize=serialize,
            imports=frozenset(imports),
        )
        self._bindings[scalar_name] = binding
        return binding

    def get(self, scalar_name: str) -> ScalarBinding | None:
        """Get the binding for a scalar, or None if not registered."""
        return self._bindings.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        return scalar_name in self._bindings

    def get_all_imports(self) -> set[str]:
        """Get all import statements needed by the registered bindings."""
        return {statement for binding in self._bindings.values() for statement in binding.imports}

"""Identifier helpers shared by the generator and the templates."""

import re

from .errors import NamingError

# Python reserved keywords that cannot be used as identifiers
PYTHON_KEYWORDS = {
    'False', 'None', 'True', 'and', 'as', 'assert', 'async', 'await',
    'break', 'class', 'continue', 'def', 'del', 'elif', 'else', 'except',
    'finally', 'for', 'from', 'global', 'if', 'import', 'in', 'is',
    'lambda', 'nonlocal', 'not', 'or', 'pass', 'raise', 'return', 'try',
    'while', 'with', 'yield'
}

# Attributes of the runtime base classes that generated accessors must not shadow
PROTECTED_NAMES = {
    'raw_result', 'graphql_typename', 'errors', 'execute', 'from_result',
    'POSSIBLE_TYPES', 'OPERATION_NAME', 'QUERY_TEXT', 'self', 'cls',
    'executor', 'options',
}

# Attributes of pydantic.BaseModel plus the generated serialize() method
INPUT_PROTECTED_NAMES = {
    'serialize', 'model_config', 'model_fields', 'model_computed_fields',
    'model_extra', 'model_fields_set', 'model_construct', 'model_copy',
    'model_dump', 'model_dump_json', 'model_json_schema', 'model_post_init',
    'model_rebuild', 'model_validate', 'model_validate_json', 'copy', 'dict',
    'json', 'parse_obj', 'parse_raw', 'parse_file', 'schema', 'schema_json',
    'construct', 'validate', 'update_forward_refs', 'from_orm', 'self',
}

# Names generated expressions refer to, which variables must not shadow
EXPRESSION_NAMES = {
    'bool', 'cast', 'date', 'datetime', 'enum', 'float', 'int', 'list', 'str',
}

CLASS_NAME_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9_]*$")


def underscore(word: str) -> str:
    """Convert a camelCase or PascalCase name to snake_case.

    Runs of capitals are treated as one acronym, so ``HTMLUrl`` becomes
    ``html_url``.
    """
    if not re.search(r"[A-Z-]", word):
        return word
    word = re.sub(r"([A-Z\d]+)([A-Z][a-z])", r"\1_\2", word)
    word = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", word)
    return word.replace("-", "_").lower()


def camelize(term: str) -> str:
    """Convert a snake_case or camelCase name to PascalCase."""
    term = re.sub(r"^[a-z\d]*", lambda m: m.group(0).capitalize(), term)
    return re.sub(r"_([a-z\d]*)", lambda m: m.group(1).capitalize(), term, flags=re.IGNORECASE)


def indent(text: str, levels: int) -> str:
    """Indent every non-blank line of ``text`` by four spaces per level."""
    padding = "    " * levels
    return "\n".join(f"{padding}{line}" if line.strip() else line for line in text.split("\n"))


def safe_identifier(name: str, protected: set[str] = PROTECTED_NAMES) -> str:
    """Turn a GraphQL name into a usable Python attribute name.

    Leading underscores move to the end (``__typename`` becomes
    ``typename__``) so the name is neither private nor mangled. Keywords and
    protected names get trailing underscores until they are free.
    """
    stripped = name.lstrip("_")
    if not stripped:
        raise NamingError(f"Cannot build an identifier from {name!r}", name)
    name = stripped + "_" * (len(name) - len(stripped))
    while name in PYTHON_KEYWORDS or name in protected:
        name = f"{name}_"
    return name


def type_class_name(name: str) -> str:
    """Class name for a generated enum or input type.

    Introspection types such as ``__TypeKind`` would be mangled inside other
    class bodies, so leading underscores move to the end (``TypeKind__``).
    """
    stripped = name.lstrip("_")
    if not stripped:
        raise NamingError(f"Cannot build a class name from {name!r}", name)
    return stripped + "_" * (len(name) - len(stripped))


def generate_method_name(name: str) -> str:
    """Accessor name for a response key."""
    return safe_identifier(underscore(name))


def ensure_class_name(name: str | None) -> str:
    """Validate an operation name for use as a generated class name."""
    if not name or not CLASS_NAME_PATTERN.match(name):
        raise NamingError(
            f"Operation names must start with a capital letter and contain only "
            f"letters, digits and underscores, got {name!r}",
            name,
        )
    return name


def enum_member_names(values: list[str]) -> list[tuple[str, str]]:
    """Assign a unique UPPER_CASE member name to each enum value.

    Collisions get numeric suffixes starting at 2, in the order given. A value
    made only of underscores becomes ``VALUE`` followed by those underscores.
    """
    members = []
    taken: set[str] = set()
    for value in values:
        if value.strip("_"):
            base = safe_identifier(underscore(value).upper(), set())
        else:
            base = "VALUE" + value
        candidate = base
        suffix = 2
        while candidate in taken:
            candidate = f"{base}{suffix}"
            suffix += 1
        taken.add(candidate)
        members.append((candidate, value))
    return members

"""Accessor methods of generated result classes.

A field can be selected several times under one parent, each time through
a different chain of fragments. ``FieldAccessMethod`` collects all of those
selections as ``FieldAccessPath`` objects and works out, from the possible
runtime types of each chain, whether the field is always present, never
present, or present only for some ``__typename`` values.
"""

from dataclasses import dataclass, field
from functools import cached_property
from itertools import combinations
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .errors import InvariantError
from .naming import indent

if TYPE_CHECKING:
    from .context import GeneratorContext

IMPOSSIBLE_BODY = (
    "# The fragments this field is selected through rule out every possible\n"
    "# runtime type, so it never has a value.\n"
    "return None"
)


@runtime_checkable
class DefinedMethod(Protocol):
    """An accessor rendered into a generated class."""

    name: str

    @property
    def signature(self) -> str:
        ...

    @property
    def body(self) -> str:
        ...

    def merge(self, other: "DefinedMethod") -> bool:
        """Absorb another method with the same name; False if impossible."""
        ...


@dataclass
class SimpleMethod:
    """An accessor with a fixed signature and body."""

    name: str
    signature: str
    body: str

    def merge(self, other: DefinedMethod) -> bool:
        return (
            isinstance(other, SimpleMethod)
            and other.name == self.name
            and other.signature == self.signature
            and other.body == self.body
        )


@dataclass(frozen=True)
class FieldAccessPath:
    """One selection of a field and the fragment chain leading to it.

    ``fragment_types`` starts with the parent type and continues with the
    type condition of each enclosing fragment.
    """

    name: str
    signature: str
    expression: str
    fragment_types: tuple[str, ...]
    context: "GeneratorContext" = field(repr=False, compare=False)

    @cached_property
    def compatible_object_types(self) -> frozenset[str]:
        """Object types for which every fragment in the chain applies."""
        compatible = self.context.possible_object_types(self.fragment_types[0])
        for type_name in self.fragment_types[1:]:
            compatible = compatible & self.context.possible_object_types(type_name)
        return compatible


@dataclass(frozen=True)
class FragmentBranch:
    """A conversion expression and the runtime types that use it."""

    typenames: frozenset[str]
    expression: str

    @property
    def sorted_typenames(self) -> tuple[str, ...]:
        return tuple(sorted(self.typenames))

    def condition(self, negate: bool = False) -> str:
        names = self.sorted_typenames
        if len(names) == 1:
            operator = "!=" if negate else "=="
            return f'typename {operator} "{names[0]}"'
        operator = "not in" if negate else "in"
        quoted = ", ".join(f'"{name}"' for name in names)
        return f"typename {operator} ({quoted})"


class FieldAccessMethod:
    """Accessor that dispatches on ``__typename`` when fragments demand it.

    Paths are accumulated with ``merge`` and reduced the first time any
    derived property is read; merging after that is an internal error.
    """

    def __init__(self, name: str, field_access_paths: list[FieldAccessPath], context: "GeneratorContext"):
        self.name = name
        self.field_access_paths = list(field_access_paths)
        self.context = context
        self._reduced: tuple[FieldAccessPath, ...] | None = None

    def __repr__(self) -> str:
        return f"FieldAccessMethod(name={self.name!r}, paths={len(self.field_access_paths)})"

    def merge(self, other: DefinedMethod) -> bool:
        if not isinstance(other, FieldAccessMethod):
            return False
        if self._reduced is not None:
            raise InvariantError(f"Cannot merge paths into {self.name!r} after they were reduced")
        self.field_access_paths.extend(other.field_access_paths)
        return True

    @property
    def reduced_paths(self) -> tuple[FieldAccessPath, ...]:
        """Paths that can match some runtime type and are not subsumed.

        Larger type sets are considered first; a path whose types are all
        covered by an already kept path is dropped, so among equal sets the
        first one selected wins.
        """
        if self._reduced is None:
            candidates = [path for path in self.field_access_paths if path.compatible_object_types]
            candidates.sort(key=lambda path: len(path.compatible_object_types), reverse=True)
            kept: list[FieldAccessPath] = []
            for path in candidates:
                if any(path.compatible_object_types <= other.compatible_object_types for other in kept):
                    continue
                kept.append(path)
            self._reduced = tuple(kept)
        return self._reduced

    @cached_property
    def root_possible_types(self) -> frozenset[str]:
        roots = {path.fragment_types[0] for path in self.field_access_paths}
        if len(roots) != 1:
            raise InvariantError(
                f"Field access paths for {self.name!r} start from different types: {sorted(roots)}"
            )
        return self.context.possible_object_types(roots.pop())

    @property
    def field_access_is_impossible(self) -> bool:
        return not self.reduced_paths

    @property
    def field_access_is_guaranteed(self) -> bool:
        """True when every possible runtime type is covered by some path."""
        if self.field_access_is_impossible:
            return False
        covered = frozenset().union(*(path.compatible_object_types for path in self.reduced_paths))
        return self.root_possible_types <= covered

    @cached_property
    def branches(self) -> list[FragmentBranch]:
        """One branch per distinct expression, ordered by type names."""
        groups: dict[str, set[str]] = {}
        for path in self.reduced_paths:
            groups.setdefault(path.expression, set()).update(path.compatible_object_types)

        branches = [FragmentBranch(frozenset(typenames), expression) for expression, typenames in groups.items()]
        for first, second in combinations(branches, 2):
            overlap = first.typenames & second.typenames
            if overlap:
                raise InvariantError(
                    "Some field access branches have overlapping types, but different field "
                    f"resolution expressions ({self.name!r} on {', '.join(sorted(overlap))})"
                )
        return sorted(branches, key=lambda branch: (branch.sorted_typenames, branch.expression))

    @cached_property
    def signature(self) -> str:
        if self.field_access_is_impossible:
            return "None"

        guaranteed = self.field_access_is_guaranteed
        signatures = set()
        for path in self.reduced_paths:
            signature = path.signature
            # The composite is made optional once below
            if not guaranteed and signature.startswith("Optional["):
                signature = signature[len("Optional["):-1]
            signatures.add(signature)

        ordered = sorted(signatures)
        signature = ordered[0] if len(ordered) == 1 else f"Union[{', '.join(ordered)}]"
        return signature if guaranteed else f"Optional[{signature}]"

    @cached_property
    def body(self) -> str:
        if self.field_access_is_impossible:
            return IMPOSSIBLE_BODY

        branches = self.branches
        guaranteed = self.field_access_is_guaranteed
        if guaranteed and len(branches) == 1:
            return branches[0].expression

        lines = ["typename = self.graphql_typename"]
        if len(branches) == 1:
            lines.append(f"if {branches[0].condition(negate=True)}:")
            lines.append("    return None")
            lines.append(branches[0].expression)
            return "\n".join(lines)

        for index, branch in enumerate(branches):
            keyword = "if" if index == 0 else "elif"
            lines.append(f"{keyword} {branch.condition()}:")
            lines.append(indent(branch.expression, 1))
        if guaranteed:
            lines.append("else:")
            lines.append(f'    raise self._unexpected_type("{self.name}", typename)')
        else:
            lines.append("return None")
        return "\n".join(lines)

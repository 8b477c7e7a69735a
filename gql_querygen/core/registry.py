"""Registry of generated classes and their dependency ordering."""

from typing import Iterator

from .classes import DefinedClass
from .errors import InvariantError

_VISITING = 1
_DONE = 2


class ClassRegistry:
    """Name-keyed store of every class generated in one run.

    Names are unique: adding a second class under a taken name is an
    internal error. Merging repeated result classes happens before
    registration, in the generator.
    """

    def __init__(self):
        self._classes: dict[str, DefinedClass] = {}

    def add(self, defined_class: DefinedClass) -> DefinedClass:
        if defined_class.name in self._classes:
            raise InvariantError(f"A class named {defined_class.name!r} is already registered")
        self._classes[defined_class.name] = defined_class
        return defined_class

    def get(self, name: str) -> DefinedClass | None:
        return self._classes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def __iter__(self) -> Iterator[DefinedClass]:
        return iter(self._classes.values())

    def _edges(self, name: str) -> list[str]:
        edges = []
        for dependency in sorted(set(self._classes[name].dependencies)):
            # A class may refer to itself (recursive input objects)
            if dependency == name:
                continue
            if dependency not in self._classes:
                raise InvariantError(f"{name} depends on unknown class {dependency!r}")
            edges.append(dependency)
        return edges

    def sorted_classes(self) -> list[DefinedClass]:
        """Every class, dependencies before dependents.

        Traversal visits names and dependencies in sorted order, so the
        result does not depend on registration order.

        Raises:
            InvariantError: If two or more classes depend on each other.
        """
        state: dict[str, int] = {}
        ordered: list[DefinedClass] = []

        for root in sorted(self._classes):
            if root in state:
                continue
            state[root] = _VISITING
            stack = [(root, iter(self._edges(root)))]
            while stack:
                name, children = stack[-1]
                child = next(children, None)
                if child is None:
                    stack.pop()
                    state[name] = _DONE
                    ordered.append(self._classes[name])
                    continue
                child_state = state.get(child)
                if child_state == _DONE:
                    continue
                if child_state == _VISITING:
                    path = [entry[0] for entry in stack]
                    cycle = path[path.index(child):] + [child]
                    raise InvariantError(f"Class dependency cycle: {' -> '.join(cycle)}")
                state[child] = _VISITING
                stack.append((child, iter(self._edges(child))))

        return ordered

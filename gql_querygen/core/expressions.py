"""Builds the Python code that converts raw JSON values.

Output expressions turn a raw response value into its typed Python value,
walking the wrapper list outermost first. At nesting level 0 the result is
a statement block ending in ``return``; deeper levels produce expressions
used inside list comprehensions.

Input serializers go the other way and are always single expressions.
"""

from string import Template
from typing import Sequence

from .errors import InvariantError
from .naming import indent
from .type_wrapper import TypeWrapper

RAW_VALUE = "raw_value"


def substitute_raw_value(template: str, binding: str) -> str:
    return Template(template).substitute(raw_value=binding)


def substitute_value(template: str, binding: str) -> str:
    return Template(template).substitute(value=binding)


def build_expression(
    wrappers: Sequence[TypeWrapper],
    binding: str,
    list_depth: int,
    level: int,
    core_expression: str,
) -> str:
    """Build the conversion of ``binding`` through ``wrappers``.

    Args:
        wrappers: Wrapper layers, outermost first
        binding: Expression holding the raw value at this layer
        list_depth: Number of LIST wrappers remaining, including this one
        level: 0 for the accessor body, deeper inside comprehensions
        core_expression: Template over ``$raw_value`` for the core type

    Example:
        For ``[String]`` read from ``self.raw_result["tags"]``::

            if self.raw_result["tags"] is None:
                return None
            return [
                None if raw_value is None else cast(str, raw_value)
                for raw_value in self.raw_result["tags"]
            ]
    """
    if not wrappers:
        value = substitute_raw_value(core_expression, binding)
        return f"return {value}" if level == 0 else value

    wrapper, rest = wrappers[0], wrappers[1:]
    if wrapper is TypeWrapper.LIST:
        list_depth -= 1
        next_binding = RAW_VALUE if list_depth == 0 else f"inner_value{list_depth}"
        inner = build_expression(rest, next_binding, list_depth, level + 1, core_expression)
        comprehension = "\n".join([
            "[",
            indent(inner, 1),
            indent(f"for {next_binding} in {binding}", 1),
            "]",
        ])
        return f"return {comprehension}" if level == 0 else comprehension

    if wrapper is TypeWrapper.NULLABLE:
        remainder = build_expression(rest, binding, list_depth, level, core_expression)
        if level == 0:
            return f"if {binding} is None:\n    return None\n{remainder}"
        return f"None if {binding} is None else {remainder}"

    raise InvariantError(f"Unknown type wrapper: {wrapper!r}")


def build_serializer(
    wrappers: Sequence[TypeWrapper],
    binding: str,
    variable_name: str,
    list_depth: int,
    core_serializer: str,
) -> str:
    """Build the serialization of ``binding`` through ``wrappers``.

    List elements are bound to ``<variable_name><N>`` where N is the list
    depth remaining, so ``[CheckRunAction!]`` for ``actions`` becomes
    ``None if actions is None else [actions1.serialize() for actions1 in actions]``.
    """
    if not wrappers:
        return substitute_value(core_serializer, binding)

    wrapper, rest = wrappers[0], wrappers[1:]
    if wrapper is TypeWrapper.LIST:
        element = f"{variable_name}{list_depth}"
        inner = build_serializer(rest, element, variable_name, list_depth - 1, core_serializer)
        if inner == element:
            return f"list({binding})"
        return f"[{inner} for {element} in {binding}]"

    if wrapper is TypeWrapper.NULLABLE:
        inner = build_serializer(rest, binding, variable_name, list_depth, core_serializer)
        if inner == binding:
            return binding
        return f"None if {binding} is None else {inner}"

    raise InvariantError(f"Unknown type wrapper: {wrapper!r}")

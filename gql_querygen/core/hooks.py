"""Rendering hooks for customizing the generated module.

Example usage:
    from gql_querygen.core.hooks import AddHeaderHook, HookRunner

    # Drop classes before rendering
    class SkipEnums:
        def pre_render(self, classes):
            return [c for c in classes if c.kind != "enum"]

    hooks = HookRunner()
    hooks.add_pre_hook(SkipEnums())
    hooks.add_post_hook(AddHeaderHook("# Copyright 2024 My Company"))
"""

from typing import Protocol, runtime_checkable

from .classes import DefinedClass


@runtime_checkable
class PreRenderHook(Protocol):
    """Receives the dependency-ordered classes before they are rendered."""

    def pre_render(self, classes: list[DefinedClass]) -> list[DefinedClass]:
        """Return the (possibly filtered or reordered) classes to render."""
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Receives the rendered module text before it is validated and written.

    Example:
        class FormatWithBlack(PostGenerateHook):
            def post_generate(self, filename: str, content: str) -> str:
                import black
                return black.format_str(content, mode=black.FileMode())
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Return the (possibly transformed) module text."""
        ...


class AddHeaderHook:
    """Prepends a header, e.g. a license comment, to the module."""

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        header = self.header.rstrip("\n")
        return f"{header}\n\n{content}"


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreRenderHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreRenderHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, classes: list[DefinedClass]) -> list[DefinedClass]:
        for hook in self.pre_hooks:
            classes = hook.pre_render(classes)
        return classes

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content

"""Tests for rendering hooks."""

from gql_querygen.core.classes import EnumClass, LeafClass
from gql_querygen.core.hooks import AddHeaderHook, HookRunner, PostGenerateHook, PreRenderHook


class TestAddHeaderHook:
    """Tests for AddHeaderHook."""

    def test_adds_header(self):
        hook = AddHeaderHook("# Auto-generated")
        result = hook.post_generate("queries.py", "class User:\n    pass")
        assert result == "# Auto-generated\n\nclass User:\n    pass"

    def test_handles_header_with_newline(self):
        hook = AddHeaderHook("# Header\n")
        # Should not double-up newlines
        assert hook.post_generate("queries.py", "code") == "# Header\n\ncode"


class TestHookRunner:
    """Tests for HookRunner."""

    def test_run_pre_hooks(self):
        class DropEnums:
            def pre_render(self, classes):
                return [c for c in classes if c.kind != "enum"]

        classes = [
            EnumClass("Status", "Status", ["OPEN"]),
            LeafClass("SomeQuery_Viewer", "User", ("User",), []),
        ]
        runner = HookRunner()
        runner.add_pre_hook(DropEnums())
        assert [c.name for c in runner.run_pre_hooks(classes)] == ["SomeQuery_Viewer"]

    def test_no_hooks_is_identity(self):
        runner = HookRunner()
        assert runner.run_post_hooks("queries.py", "code") == "code"
        assert runner.run_pre_hooks([]) == []

    def test_multiple_post_hooks_run_in_order(self):
        runner = HookRunner()
        runner.add_post_hook(AddHeaderHook("# Line 1"))
        runner.add_post_hook(AddHeaderHook("# Line 0"))

        result = runner.run_post_hooks("queries.py", "code")
        assert result == "# Line 0\n\n# Line 1\n\ncode"


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_add_header_is_post_hook(self):
        assert isinstance(AddHeaderHook("header"), PostGenerateHook)

    def test_custom_pre_hook(self):
        class CustomPreHook:
            def pre_render(self, classes):
                return classes

        assert isinstance(CustomPreHook(), PreRenderHook)

"""Tests for fragment narrowing in FieldAccessMethod."""

import pytest

from gql_querygen.core.context import GeneratorContext
from gql_querygen.core.errors import InvariantError
from gql_querygen.core.methods import (
    IMPOSSIBLE_BODY,
    FieldAccessMethod,
    FieldAccessPath,
    FragmentBranch,
    SimpleMethod,
)
from gql_querygen.core.scalars import ScalarRegistry


@pytest.fixture
def context(schema):
    return GeneratorContext(schema=schema, scalars=ScalarRegistry(schema))


@pytest.fixture
def make_method(context):
    """Build a method named 'title' from (fragment_types, expression, signature) triples."""

    def _make(*paths):
        return FieldAccessMethod(
            "title",
            [
                FieldAccessPath("title", signature, expression, tuple(fragment_types), context)
                for fragment_types, expression, signature in paths
            ],
            context,
        )

    return _make


# =============================================================================
# FieldAccessPath
# =============================================================================


class TestFieldAccessPath:
    """Tests for compatible_object_types."""

    def test_object_type_root(self, context):
        path = FieldAccessPath("id", "str", "return 1", ("User",), context)
        assert path.compatible_object_types == {"User"}

    def test_interface_intersection(self, context):
        path = FieldAccessPath("login", "str", "return 1", ("Node", "Actor"), context)
        assert path.compatible_object_types == {"Bot", "User"}

    def test_disjoint_chain_is_empty(self, context):
        path = FieldAccessPath("id", "str", "return 1", ("User", "Node", "Commit"), context)
        assert path.compatible_object_types == frozenset()

    def test_union_root(self, context):
        path = FieldAccessPath("id", "str", "return 1", ("SearchResultItem", "Node"), context)
        assert path.compatible_object_types == {"Commit", "Repository", "User"}


# =============================================================================
# Reduction and guarantees
# =============================================================================


class TestReduction:
    """Tests for reduced_paths and the guaranteed/impossible flags."""

    def test_impossible_field(self, make_method):
        method = make_method((("User", "Node", "Commit"), "return 1", "str"))
        assert method.field_access_is_impossible
        assert not method.field_access_is_guaranteed
        assert method.signature == "None"
        assert method.body == IMPOSSIBLE_BODY

    def test_subsumed_paths_are_dropped(self, make_method):
        method = make_method(
            (("User",), "return 1", "str"),
            (("User", "Node", "Actor", "User"), "return 2", "str"),
            (("User", "Node", "Commit"), "return 3", "str"),
        )
        assert [path.expression for path in method.reduced_paths] == ["return 1"]
        assert method.field_access_is_guaranteed
        assert method.body == "return 1"
        assert method.signature == "str"

    def test_larger_sets_win_over_subsets(self, make_method):
        method = make_method(
            (("Node", "User"), "return 1", "str"),
            (("Node", "Actor"), "return 2", "str"),
        )
        assert [path.expression for path in method.reduced_paths] == ["return 2"]

    def test_fragment_on_implemented_interface_is_guaranteed(self, make_method):
        method = make_method((("User", "Node"), "return 1", "str"))
        assert method.field_access_is_guaranteed
        assert method.signature == "str"

    def test_partial_coverage_is_not_guaranteed(self, make_method):
        method = make_method((("Node", "Actor"), "return 1", "Optional[str]"))
        assert not method.field_access_is_guaranteed
        assert method.signature == "Optional[str]"

    def test_joint_coverage_is_guaranteed(self, make_method):
        method = make_method(
            (("SearchResultItem", "User"), "return 1", "str"),
            (("SearchResultItem", "Commit"), "return 2", "str"),
            (("SearchResultItem", "Repository"), "return 3", "str"),
        )
        assert method.field_access_is_guaranteed

    def test_paths_from_different_roots(self, make_method):
        method = make_method(
            (("User",), "return 1", "str"),
            (("Bot",), "return 1", "str"),
        )
        with pytest.raises(InvariantError, match="different types"):
            method.field_access_is_guaranteed

    def test_reduction_is_idempotent(self, make_method, context):
        method = make_method(
            (("SearchResultItem", "User"), "return 1", "str"),
            (("SearchResultItem", "Node"), "return 2", "str"),
            (("SearchResultItem", "Node", "Actor"), "return 3", "str"),
            (("SearchResultItem", "Commit"), "return 4", "str"),
            (("SearchResultItem", "Repository", "Node"), "return 5", "str"),
            (("SearchResultItem", "User", "Commit"), "return 6", "str"),
        )
        again = FieldAccessMethod("title", list(method.reduced_paths), context)
        assert again.reduced_paths == method.reduced_paths
        assert again.field_access_is_guaranteed == method.field_access_is_guaranteed
        assert again.body == method.body


# =============================================================================
# Branches, signatures and bodies
# =============================================================================


class TestBranches:
    """Tests for grouping paths into dispatch branches."""

    def test_same_expression_shares_a_branch(self, make_method):
        method = make_method(
            (("Node", "Actor", "Bot"), "return 1", "str"),
            (("Node", "Actor", "User"), "return 1", "str"),
        )
        assert method.branches == [FragmentBranch(frozenset({"Bot", "User"}), "return 1")]

    def test_overlapping_branches_are_rejected(self, make_method):
        method = make_method(
            (("Node", "Actor"), "return 1", "str"),
            (("Node", "SearchResultItem"), "return 2", "str"),
        )
        with pytest.raises(InvariantError, match="overlapping types"):
            method.body

    def test_branches_are_sorted_by_type_names(self, make_method):
        method = make_method(
            (("Node", "PullRequest"), "return 3", "str"),
            (("Node", "Project"), "return 1", "str"),
            (("Node", "ProjectCard"), "return 2", "str"),
        )
        assert [branch.sorted_typenames for branch in method.branches] == [
            ("Project",),
            ("ProjectCard",),
            ("PullRequest",),
        ]

    def test_branch_conditions(self):
        assert FragmentBranch(frozenset({"User"}), "").condition() == 'typename == "User"'
        assert FragmentBranch(frozenset({"User", "Bot"}), "").condition(negate=True) == (
            'typename not in ("Bot", "User")'
        )


class TestBodies:
    """Tests for the generated accessor bodies."""

    def test_single_branch_not_guaranteed(self, make_method):
        method = make_method(
            (("Node", "Actor", "Bot"), "return 1", "str"),
            (("Node", "Actor", "User"), "return 1", "str"),
        )
        assert method.body == (
            "typename = self.graphql_typename\n"
            'if typename not in ("Bot", "User"):\n'
            "    return None\n"
            "return 1"
        )
        assert method.signature == "Optional[str]"

    def test_single_type_guard(self, make_method):
        method = make_method((("Node", "User", "Actor"), "return 1", "str"))
        assert 'if typename != "User":' in method.body
        assert "Bot" not in method.body

    def test_guaranteed_dispatch_raises_on_unknown_types(self, make_method):
        method = make_method(
            (("SearchResultItem", "User"), "return 1", "str"),
            (("SearchResultItem", "Commit"), "if x:\n    return None\nreturn 2", "Optional[str]"),
            (("SearchResultItem", "Repository"), "return 1", "str"),
        )
        assert method.body == (
            "typename = self.graphql_typename\n"
            'if typename == "Commit":\n'
            "    if x:\n"
            "        return None\n"
            "    return 2\n"
            'elif typename in ("Repository", "User"):\n'
            "    return 1\n"
            "else:\n"
            '    raise self._unexpected_type("title", typename)'
        )
        assert method.signature == "Union[Optional[str], str]"

    def test_unguaranteed_dispatch_falls_through_to_none(self, make_method):
        method = make_method(
            (("Node", "Project"), "return ProjectState(x)", "ProjectState"),
            (("Node", "ProjectCard"), "return ProjectCardState(x)", "Optional[ProjectCardState]"),
            (("Node", "PullRequest"), "return PullRequestState(x)", "PullRequestState"),
        )
        body = method.body
        assert body.startswith('typename = self.graphql_typename\nif typename == "Project":')
        assert 'elif typename == "ProjectCard":' in body
        assert 'elif typename == "PullRequest":' in body
        assert "else:" not in body
        assert body.endswith("\nreturn None")
        assert method.signature == "Optional[Union[ProjectCardState, ProjectState, PullRequestState]]"

    def test_body_compiles(self, make_method):
        method = make_method(
            (("SearchResultItem", "User"), "return 1", "str"),
            (("SearchResultItem", "Commit"), "return 2", "str"),
        )
        source = "def title(self):\n" + "\n".join(f"    {line}" for line in method.body.split("\n"))
        compile(source, "<title>", "exec")


# =============================================================================
# Merging
# =============================================================================


class TestMerge:
    """Tests for merging methods with the same name."""

    def test_merge_appends_paths(self, make_method):
        first = make_method((("Actor", "Node", "Commit"), "return 1", "str"))
        second = make_method((("Actor",), "return 1", "str"))
        assert first.merge(second)
        assert [path.fragment_types for path in first.field_access_paths] == [
            ("Actor", "Node", "Commit"),
            ("Actor",),
        ]
        assert first.field_access_is_guaranteed

    def test_merge_with_simple_method_fails(self, make_method):
        method = make_method((("User",), "return 1", "str"))
        assert not method.merge(SimpleMethod("title", "str", "return 1"))

    def test_merge_after_reduction_fails(self, make_method):
        method = make_method((("User",), "return 1", "str"))
        method.signature
        with pytest.raises(InvariantError):
            method.merge(make_method((("User",), "return 1", "str")))

    def test_simple_methods_merge_only_when_identical(self):
        method = SimpleMethod("typename__", "str", "return self.graphql_typename")
        assert method.merge(SimpleMethod("typename__", "str", "return self.graphql_typename"))
        assert not method.merge(SimpleMethod("typename__", "int", "return 1"))

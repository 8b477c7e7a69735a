"""Tests for the command-line interface."""

import ast
import json
import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner
from graphql import build_schema, graphql_sync, get_introspection_query

from gql_querygen.cli import main

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def queries(tmp_path):
    directory = tmp_path / "queries"
    directory.mkdir()
    (directory / "viewer.graphql").write_text("query ViewerQuery { viewer { login createdAt status } }")
    (directory / "node.graphql").write_text('query NodeQuery { node(id: "1") { __typename id } }')
    return directory


def invoke(runner, *args):
    return runner.invoke(main, ["generate", "-s", str(FIXTURES / "schema.graphql"), *args])


class TestGenerateCommand:
    """Tests for ``gql-querygen generate``."""

    def test_generates_module(self, runner, queries, tmp_path):
        output = tmp_path / "out" / "queries.py"
        result = invoke(runner, "-q", str(queries), "-o", str(output))

        assert result.exit_code == 0, result.output
        assert "Done!" in result.output
        source = output.read_text()
        ast.parse(source)
        assert "class ViewerQuery(Query):" in source
        assert "class NodeQuery(Query):" in source
        assert "class UserStatus(enum.Enum):" in source

    def test_single_query_file(self, runner, queries, tmp_path):
        output = tmp_path / "queries.py"
        result = invoke(runner, "-q", str(queries / "node.graphql"), "-o", str(output))
        assert result.exit_code == 0, result.output
        assert "class ViewerQuery" not in output.read_text()

    def test_scalar_binding(self, runner, queries, tmp_path):
        output = tmp_path / "queries.py"
        result = invoke(
            runner,
            "-q", str(queries),
            "-o", str(output),
            "--scalar", "DateTime=gql_querygen.runtime.converters:DateTimeConverter",
        )
        assert result.exit_code == 0, result.output
        assert "DateTimeConverter.deserialize(" in output.read_text()

    def test_default_scalars(self, runner, queries, tmp_path):
        output = tmp_path / "queries.py"
        result = invoke(runner, "-q", str(queries), "-o", str(output), "--default-scalars")
        assert result.exit_code == 0, result.output
        assert "from gql_querygen.runtime.converters import DateTimeConverter" in output.read_text()

    def test_bad_scalar_reference(self, runner, queries, tmp_path):
        result = invoke(
            runner,
            "-q", str(queries),
            "-o", str(tmp_path / "queries.py"),
            "--scalar", "DateTime=no_such_module_here:Converter",
        )
        assert result.exit_code != 0
        assert "no_such_module_here" in result.output

    def test_strict_scalars(self, runner, queries, tmp_path):
        result = invoke(runner, "-q", str(queries), "-o", str(tmp_path / "queries.py"), "--strict-scalars")
        assert result.exit_code == 1
        assert "DateTime" in result.output

    def test_invalid_query(self, runner, tmp_path):
        query = tmp_path / "bad.graphql"
        query.write_text('query NodeQuery { node(id: "1") { id } }')
        result = invoke(runner, "-q", str(query), "-o", str(tmp_path / "queries.py"))
        assert result.exit_code == 1
        assert "__typename" in result.output
        assert not (tmp_path / "queries.py").exists()

    def test_header(self, runner, queries, tmp_path):
        output = tmp_path / "queries.py"
        result = invoke(runner, "-q", str(queries), "-o", str(output), "--header", "# Do not edit")
        assert result.exit_code == 0, result.output
        assert output.read_text().startswith("# Do not edit\n\n")

    def test_verbose(self, runner, queries, tmp_path):
        result = invoke(runner, "-q", str(queries), "-o", str(tmp_path / "queries.py"), "-v")
        assert result.exit_code == 0, result.output
        assert "viewer.graphql: ViewerQuery" in result.output
        assert "Root classes: 2" in result.output


class TestSchemaSources:
    """Tests for the schema formats ``--schema`` accepts."""

    def test_schema_directory(self, runner, queries, tmp_path):
        schema_dir = tmp_path / "schema"
        schema_dir.mkdir()
        shutil.copy(FIXTURES / "schema.graphql", schema_dir / "schema.graphqls")
        output = tmp_path / "queries.py"

        result = runner.invoke(main, ["generate", "-s", str(schema_dir), "-q", str(queries), "-o", str(output)])
        assert result.exit_code == 0, result.output

    def test_introspection_json(self, runner, queries, tmp_path):
        schema = build_schema((FIXTURES / "schema.graphql").read_text())
        introspection = graphql_sync(schema, get_introspection_query()).data
        schema_file = tmp_path / "schema.json"
        schema_file.write_text(json.dumps({"data": introspection}))
        output = tmp_path / "queries.py"

        result = runner.invoke(main, ["generate", "-s", str(schema_file), "-q", str(queries), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert "class ViewerQuery(Query):" in output.read_text()

    def test_empty_schema_directory(self, runner, queries, tmp_path):
        schema_dir = tmp_path / "empty"
        schema_dir.mkdir()
        result = runner.invoke(
            main, ["generate", "-s", str(schema_dir), "-q", str(queries), "-o", str(tmp_path / "queries.py")]
        )
        assert result.exit_code == 1
        assert "No GraphQL schema files found" in result.output

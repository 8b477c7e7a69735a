"""Shared fixtures: the test schema and helpers to generate and import modules."""

import importlib.util
import sys
import uuid
from pathlib import Path

import pytest
from graphql import build_schema

from gql_querygen.core.container import QueryContainer
from gql_querygen.core.generator import CodeGenerator
from gql_querygen.core.renderer import ModuleRenderer

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def schema():
    return build_schema((FIXTURES / "schema.graphql").read_text())


@pytest.fixture
def generate(schema):
    """Validate and generate a query, returning the generator."""

    def _generate(query_text: str, **kwargs) -> CodeGenerator:
        container = QueryContainer(schema)
        declaration = container.declare_query(query_text)
        generator = CodeGenerator(schema, **kwargs)
        generator.generate(declaration)
        return generator

    return _generate


@pytest.fixture
def load_module(tmp_path):
    """Render a generator's classes and import the result as a module."""
    loaded = []

    def _load(generator: CodeGenerator):
        source = ModuleRenderer().render(generator.sorted_classes(), generator.imports)
        module_name = f"generated_{uuid.uuid4().hex}"
        path = tmp_path / f"{module_name}.py"
        path.write_text(source)
        spec = importlib.util.spec_from_file_location(module_name, path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        loaded.append(module_name)
        spec.loader.exec_module(module)
        return module

    yield _load
    for module_name in loaded:
        sys.modules.pop(module_name, None)


class FakeExecutor:
    """Records the last request and returns a canned response."""

    def __init__(self, response):
        self.response = response
        self.calls = []

    async def execute(self, query, *, operation_name, variables=None, options=None):
        self.calls.append({
            "query": query,
            "operation_name": operation_name,
            "variables": variables,
            "options": options,
        })
        return self.response


@pytest.fixture
def fake_executor():
    """Factory for executors answering with a fixed response."""
    return FakeExecutor

"""Command-line interface for gql-querygen."""

import importlib
import logging
from pathlib import Path

import click

from .core.container import QueryContainer
from .core.errors import CodegenError
from .core.generator import CodeGenerator
from .core.hooks import AddHeaderHook, HookRunner
from .core.renderer import ModuleRenderer
from .core.scalars import ScalarRegistry
from .core.schema_loader import load_schema

QUERY_SUFFIXES = (".graphql", ".gql")


def collect_query_files(paths: tuple[str, ...]) -> list[Path]:
    """Expand files and directories into a sorted list of query files."""
    files: list[Path] = []
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.suffix in QUERY_SUFFIXES))
        else:
            files.append(path)
    return files


def load_converter(reference: str):
    """Import ``module:Class`` and return the class."""
    module_name, _, attribute = reference.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(f"Expected module:Class, got {reference!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import {module_name!r}: {e}") from e
    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise click.BadParameter(f"{module_name!r} has no attribute {attribute!r}") from e


@click.group()
@click.version_option(package_name="gql-querygen")
def main():
    """Typed result classes for GraphQL operations.

    Generate Python classes for the queries and mutations you write.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to an SDL file, a directory of SDL files, an archive, or an introspection JSON file.",
)
@click.option(
    "--queries",
    "-q",
    required=True,
    multiple=True,
    type=click.Path(exists=True),
    help="Query file or directory of .graphql files. Can be repeated.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output file for the generated module (e.g., queries.py).",
)
@click.option(
    "--scalar",
    "scalars",
    multiple=True,
    metavar="NAME=module:Class",
    help="Bind a custom scalar to a converter class. Can be repeated.",
)
@click.option("--default-scalars", is_flag=True, help="Bind the shipped DateTime, Date, UUID and JSON converters.")
@click.option("--strict-scalars", is_flag=True, help="Fail on custom scalars without a converter.")
@click.option("--header", default=None, help="Text to prepend to the generated module.")
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    queries: tuple[str, ...],
    output: str,
    scalars: tuple[str, ...],
    default_scalars: bool,
    strict_scalars: bool,
    header: str | None,
    template_dir: str | None,
    verbose: bool,
):
    """Generate result classes for GraphQL operations.

    Examples:

        gql-querygen generate --schema ./schema.graphql --queries ./queries --output ./queries.py

        gql-querygen generate -s ./schema.json -q ./viewer.graphql -o ./viewer.py --default-scalars
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    output_path = Path(output).resolve()
    query_files = collect_query_files(queries)
    if verbose:
        click.echo(f"Schema: {Path(schema).resolve()}")
        click.echo(f"Output: {output_path}")

    click.echo("Loading schema...")
    try:
        graphql_schema = load_schema(schema)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    registry = ScalarRegistry(graphql_schema, include_defaults=default_scalars)
    for binding in scalars:
        scalar_name, _, reference = binding.partition("=")
        try:
            registry.register(scalar_name, load_converter(reference))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--scalar") from e

    try:
        container = QueryContainer(graphql_schema)
        for query_file in query_files:
            declaration = container.declare_file(query_file)
            if verbose:
                click.echo(f"  {query_file.name}: {', '.join(declaration.operation_names)}")

        click.echo(f"Generating classes for {len(container.declarations)} query files...")
        generator = CodeGenerator(graphql_schema, registry, strict_scalars=strict_scalars)
        for declaration in container.declarations:
            generator.generate(declaration)

        hooks = HookRunner()
        if header:
            hooks.add_post_hook(AddHeaderHook(header))
        renderer = ModuleRenderer(template_dir=template_dir, hooks=hooks)
        classes = generator.sorted_classes()
        renderer.write(output_path, classes, generator.imports)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        for kind in ("root", "leaf", "enum", "input"):
            count = sum(1 for defined_class in classes if defined_class.kind == kind)
            click.echo(f"  {kind.capitalize()} classes: {count}")
    click.echo(f"Done! Generated {output_path}")


if __name__ == "__main__":
    main()

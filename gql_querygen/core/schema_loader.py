"""Loading a GraphQLSchema from SDL files, directories or introspection JSON."""

import json
import logging
import os
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

from graphql import GraphQLSchema, build_client_schema, build_schema

logger = logging.getLogger(__name__)

SDL_SUFFIXES = (".graphql", ".graphqls", ".gql")
ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            tar_ref.extractall(temp_dir, filter="data")
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


def collect_schema_files(schema_path: str | Path) -> list[str]:
    """Collect all SDL files from a file or directory, sorted by path."""
    schema_path = str(schema_path)
    files = []
    if os.path.isfile(schema_path):
        if schema_path.endswith(SDL_SUFFIXES):
            files.append(schema_path)
    else:
        for root, _, filenames in os.walk(schema_path):
            for filename in filenames:
                if filename.endswith(SDL_SUFFIXES):
                    files.append(os.path.join(root, filename))
    return sorted(files)


def load_schema(schema_path: str | Path) -> GraphQLSchema:
    """Build a schema from SDL, an introspection result, or an archive of SDL.

    Raises:
        ValueError: If no schema definitions are found at ``schema_path``.
    """
    path = Path(schema_path)
    if path.is_file() and path.name.lower().endswith(ARCHIVE_SUFFIXES):
        temp_dir = extract_archive(path)
        try:
            return load_schema(temp_dir)
        finally:
            shutil.rmtree(temp_dir)

    if path.is_file() and path.suffix == ".json":
        introspection = json.loads(path.read_text())
        # Accept both a bare introspection result and a full response
        return build_client_schema(introspection.get("data", introspection))

    files = collect_schema_files(path)
    if not files:
        raise ValueError(f"No GraphQL schema files found at {path}")
    logger.debug("Building schema from %d files", len(files))
    sdl = "\n\n".join(Path(file_path).read_text() for file_path in files)
    return build_schema(sdl)

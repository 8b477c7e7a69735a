"""Typed Python result classes for GraphQL operations."""

__version__ = "0.1.0"

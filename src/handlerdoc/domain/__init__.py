"""Domain layer: definition types, docblock parsing, and text rules.

This layer depends only on stdlib and pydantic.
It must never import from services, introspection, commands, or config.
"""

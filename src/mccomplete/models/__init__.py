"""Pydantic data types for grammar trees, registries and completions."""

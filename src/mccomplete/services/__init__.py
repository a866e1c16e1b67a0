"""Parsing, completion and data loading services."""

"""Adapters for source formats, name lookups and target formats."""

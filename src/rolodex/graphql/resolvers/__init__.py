"""Resolver package for the GraphQL schema.

Resolver functions live in sibling modules and are imported lazily by the
query and mutation roots.
"""

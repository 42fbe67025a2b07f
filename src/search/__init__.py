"""
Search backend module: Typesense.

Provides:
- TypesenseClient: search, count, grouped pagination, collection and document operations
- GroupedPages: restartable, bounded page sequence over grouped queries
- filter helpers for building filter_by expressions
"""

from search.typesense_client import (
    GroupedPages,
    TypesenseClient,
    create_typesense_client,
    exact_filter,
    filter_value,
)

__all__ = [
    "TypesenseClient",
    "create_typesense_client",
    "GroupedPages",
    "exact_filter",
    "filter_value",
]

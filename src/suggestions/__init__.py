"""
Search suggestion generation.

Provides:
- extract_attributes: distinct facet values of a catalog
- resolve_mappings: facet value -> identifier/slug
- generate_suggestions: validated autocomplete suggestions
- sync_suggestions: replace a suggestions collection's contents
- run_generation / run_sync: the whole run
"""

from suggestions.extractor import extract_attributes
from suggestions.generator import generate_suggestions
from suggestions.models import (
    AttributeMapping,
    AttributeSet,
    BOOSTS,
    Suggestion,
    SuggestionType,
    SyncReport,
)
from suggestions.overrides import load_overrides
from suggestions.pipeline import run_generation, run_sync
from suggestions.resolver import resolve_mappings
from suggestions.synchronizer import sync_suggestions

__all__ = [
    "AttributeMapping",
    "AttributeSet",
    "BOOSTS",
    "Suggestion",
    "SuggestionType",
    "SyncReport",
    "extract_attributes",
    "resolve_mappings",
    "generate_suggestions",
    "sync_suggestions",
    "load_overrides",
    "run_generation",
    "run_sync",
]

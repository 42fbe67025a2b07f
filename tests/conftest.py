"""
Pytest configuration and shared fixtures for the suggestion builder tests.
"""
import os
import sys
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

from search.typesense_client import TypesenseClient


# ============================================================================
# Scripted Typesense boundary
# ============================================================================

class ScriptedSearch:
    """
    Stand-in for TypesenseClient.search that answers from canned data.

    - facet queries (facet_by)       -> ``facet_counts``
    - grouped queries (group_by)     -> ``grouped[group_by][page - 1]`` documents
    - count queries (per_page == 0)  -> ``counts[filter_by]`` (0 when absent)
    - filtered samples               -> ``samples[filter_by]`` documents
    - ``errors[filter_by or group_by]`` is raised instead of answering
    """

    def __init__(self):
        self.facet_counts: List[dict] = []
        self.grouped: Dict[str, List[List[dict]]] = {}
        self.counts: Dict[str, int] = {}
        self.samples: Dict[str, List[dict]] = {}
        self.errors: Dict[str, Exception] = {}
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, collection: str, params: Dict[str, Any]) -> dict:
        self.calls.append({"collection": collection, **params})
        key = params.get("filter_by") or params.get("group_by")
        if key in self.errors:
            raise self.errors[key]

        if "facet_by" in params:
            return {"found": 0, "grouped_hits": [], "facet_counts": self.facet_counts}

        if "group_by" in params:
            pages = self.grouped.get(params["group_by"], [])
            index = params.get("page", 1) - 1
            docs = pages[index] if 0 <= index < len(pages) else []
            return {
                "found": len(docs),
                "grouped_hits": [
                    {"group_key": [str(i)], "hits": [{"document": doc}]}
                    for i, doc in enumerate(docs)
                ],
            }

        if params.get("per_page") == 0:
            return {"found": self.counts.get(params.get("filter_by"), 0), "hits": []}

        docs = self.samples.get(params.get("filter_by"), [])[: params.get("per_page", 10)]
        return {"found": len(docs), "hits": [{"document": doc} for doc in docs]}

    def filters(self) -> List[Optional[str]]:
        """filter_by of every count query, in call order."""
        return [c.get("filter_by") for c in self.calls if c.get("per_page") == 0 and "facet_by" not in c]


@pytest.fixture
def scripted() -> ScriptedSearch:
    return ScriptedSearch()


@pytest.fixture
def fake_client(scripted: ScriptedSearch) -> MagicMock:
    """
    TypesenseClient double.

    search() answers from ``scripted``; count() and grouped_pages() run the
    real wrapper logic on top of it. Collection/document operations are
    plain mocks configured per test.
    """
    client = MagicMock(spec=TypesenseClient)
    client.search.side_effect = scripted
    client.count.side_effect = (
        lambda collection, filter_by, query_by="displayname":
        TypesenseClient.count(client, collection, filter_by, query_by)
    )
    client.grouped_pages.side_effect = (
        lambda collection, params, per_page=250, max_pages=1000:
        TypesenseClient.grouped_pages(client, collection, params, per_page, max_pages)
    )
    client.import_documents.side_effect = (
        lambda collection, documents, action="create": [{"success": True} for _ in documents]
    )
    client.delete_documents.return_value = 0
    return client


# ============================================================================
# Fixtures: Test Data
# ============================================================================

@pytest.fixture
def jewelry_facets() -> List[dict]:
    """facet_counts as returned by the extraction query."""
    def facet(field, *values):
        return {
            "field_name": field,
            "counts": [{"value": v, "count": 1, "highlighted": v} for v in values],
        }

    return [
        facet("category", "Rings", "Earrings", "Necklaces"),
        facet("subCategory", "Diamond", "Gold"),
        facet("searchTags", "gift", "anniversary", "gift"),
        facet("metalType", "Platinum", "Gold"),
        facet("style", "Solitaire", "Halo"),
        facet("occasion", "Engagement", "Wedding"),
        facet("collection", "Bridal"),
    ]


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment, writing into tmp_path."""
    from config.settings import get_settings_for_testing
    return get_settings_for_testing(output_dir=str(tmp_path))


# ============================================================================
# Markers
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")

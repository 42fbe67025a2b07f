"""
Typesense Client.

Thin wrapper around typesense.Client covering the calls the suggestion
builder makes: search, count-only search, grouped pagination, collection
retrieval/creation, delete-by-filter and bulk import.

API reference (typesense-python):
- Client({"nodes": [...], "api_key": ..., "connection_timeout_seconds": ...})
- collections[name].documents.search(params)
- collections[name].documents.import_(documents, {"action": "create"})
- collections[name].documents.delete({"filter_by": ...})
- collections[name].retrieve()  -> raises ObjectNotFound when absent
- collections.create(schema)

Responses are plain dicts. The wrapper is constructed explicitly and
passed to each component; there is no module-level client.
"""

from typing import Any, Dict, Iterator, List, Optional

import typesense

from config.settings import Settings, get_settings
from core.logging import get_logger
from search.typesense_config import MAX_GROUPS_PER_PAGE

logger = get_logger(__name__)

# Characters with meaning inside a filter_by expression
_FILTER_SPECIAL_CHARS = frozenset(",&|()[]:=`")


def filter_value(value: str) -> str:
    """
    Render a value for use on the right-hand side of a filter_by clause.

    Plain values pass through unchanged ("Rings", "Fine Jewelry"). Values
    containing filter syntax are wrapped in backticks so Typesense reads
    them literally.
    """
    if any(ch in _FILTER_SPECIAL_CHARS for ch in value):
        return "`" + value.replace("`", "") + "`"
    return value


def exact_filter(field: str, value: str) -> str:
    """Return an exact-match clause, e.g. ``category:=Rings``."""
    return f"{field}:={filter_value(value)}"


class GroupedPages:
    """
    Finite, restartable sequence of grouped result pages.

    Each iteration starts again at page 1 and yields the ``grouped_hits``
    list of one page. Iteration ends after an empty page, a short page
    (fewer groups than ``per_page``) or ``max_pages`` pages.
    """

    def __init__(
        self,
        client: "TypesenseClient",
        collection: str,
        params: Dict[str, Any],
        per_page: int = MAX_GROUPS_PER_PAGE,
        max_pages: int = 1000,
    ):
        if "group_by" not in params:
            raise ValueError("GroupedPages requires a group_by query")
        if per_page < 1:
            raise ValueError("per_page must be >= 1")
        if max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        self.client = client
        self.collection = collection
        self.params = dict(params)
        self.per_page = per_page
        self.max_pages = max_pages

    def __iter__(self) -> Iterator[List[dict]]:
        for page in range(1, self.max_pages + 1):
            result = self.client.search(
                self.collection,
                {**self.params, "page": page, "per_page": self.per_page},
            )
            groups = result.get("grouped_hits") or []
            if not groups:
                return
            yield groups
            if len(groups) < self.per_page:
                return
        logger.warning(
            "Stopped paging at max_pages",
            collection=self.collection,
            max_pages=self.max_pages,
        )

    @staticmethod
    def first_documents(groups: List[dict]) -> Iterator[dict]:
        """Yield the representative (first) document of each group."""
        for group in groups:
            hits = group.get("hits") or []
            if hits and isinstance(hits[0].get("document"), dict):
                yield hits[0]["document"]


class TypesenseClient:
    """
    Wrapper around typesense.Client.

    Errors from the underlying client (typesense.exceptions.*, transport
    errors) propagate unchanged; callers decide which ones are fatal.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        protocol: Optional[str] = None,
        api_key: Optional[str] = None,
        connection_timeout_seconds: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.host = host or settings.typesense_host
        self.port = port or settings.typesense_port
        self.protocol = protocol or settings.typesense_protocol
        self.api_key = api_key or settings.typesense_api_key
        self.connection_timeout_seconds = (
            connection_timeout_seconds or settings.typesense_connection_timeout_seconds
        )

        if not self.api_key:
            raise ValueError("TYPESENSE_API_KEY is required")

        self._client = typesense.Client({
            "nodes": [{
                "host": self.host,
                "port": str(self.port),
                "protocol": self.protocol,
            }],
            "api_key": self.api_key,
            "connection_timeout_seconds": self.connection_timeout_seconds,
        })

    # =========================================================================
    # Search
    # =========================================================================

    def search(self, collection: str, params: Dict[str, Any]) -> dict:
        """
        Run a search against a collection.

        Args:
            collection: Collection name.
            params: Typesense search parameters (q, query_by, filter_by,
                facet_by, group_by, group_limit, include_fields, page, per_page...).

        Returns:
            Response dict with hits or grouped_hits, found and facet_counts.
        """
        return self._client.collections[collection].documents.search(params)

    def count(
        self,
        collection: str,
        filter_by: str,
        query_by: str = "displayname",
    ) -> int:
        """Return how many documents match ``filter_by`` without fetching any."""
        result = self.search(collection, {
            "q": "*",
            "query_by": query_by,
            "filter_by": filter_by,
            "page": 1,
            "per_page": 0,
        })
        return result.get("found") or 0

    def grouped_pages(
        self,
        collection: str,
        params: Dict[str, Any],
        per_page: int = MAX_GROUPS_PER_PAGE,
        max_pages: int = 1000,
    ) -> GroupedPages:
        """Return a GroupedPages sequence over a grouped query."""
        return GroupedPages(self, collection, params, per_page=per_page, max_pages=max_pages)

    # =========================================================================
    # Collections
    # =========================================================================

    def retrieve_collection(self, name: str) -> dict:
        """Get a collection's schema. Raises ObjectNotFound when absent."""
        return self._client.collections[name].retrieve()

    def create_collection(self, schema: Dict[str, Any]) -> dict:
        """Create a collection from a schema dict."""
        return self._client.collections.create(schema)

    # =========================================================================
    # Documents
    # =========================================================================

    def delete_documents(self, collection: str, filter_by: str) -> int:
        """Delete every document matching ``filter_by``. Returns the count."""
        resp = self._client.collections[collection].documents.delete({"filter_by": filter_by})
        return (resp or {}).get("num_deleted", 0)

    def import_documents(
        self,
        collection: str,
        documents: List[dict],
        action: str = "create",
    ) -> List[dict]:
        """
        Bulk import documents.

        Returns:
            One result dict per document ({"success": bool, "error": ...}).
        """
        return self._client.collections[collection].documents.import_(
            documents, {"action": action},
        )


def create_typesense_client(settings: Optional[Settings] = None) -> TypesenseClient:
    """Build a TypesenseClient from settings."""
    return TypesenseClient(settings=settings or get_settings())

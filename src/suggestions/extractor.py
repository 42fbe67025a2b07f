"""
Attribute extraction.

One faceted query, grouped by product, returns every distinct value of the
attribute fields the generator combines into suggestions.
"""

from typing import Dict, List

from core.logging import get_logger
from search.typesense_client import TypesenseClient
from search.typesense_config import (
    ATTRIBUTE_FACETS,
    EXTRACT_QUERY_BY,
    EXTRACT_QUERY_BY_WEIGHTS,
    GROUPING_FIELD,
    MAX_FACET_VALUES,
)
from suggestions.models import AttributeSet

logger = get_logger(__name__)


def facet_values(facet_counts: List[dict], field_name: str) -> List[str]:
    """Return the sorted distinct values of one facet (empty if absent)."""
    for facet in facet_counts:
        if facet.get("field_name") == field_name:
            values = {c["value"] for c in facet.get("counts") or [] if c.get("value") is not None}
            return sorted(values)
    return []


def extract_attributes(client: TypesenseClient, source_collection: str) -> AttributeSet:
    """
    Harvest distinct attribute values from the source collection.

    Errors from Typesense are logged and re-raised; without attributes
    there is nothing to generate.
    """
    logger.info("Extracting unique attributes via faceting", collection=source_collection)

    try:
        result = client.search(source_collection, {
            "q": "*",
            "query_by": EXTRACT_QUERY_BY,
            "query_by_weights": EXTRACT_QUERY_BY_WEIGHTS,
            "facet_by": ",".join(ATTRIBUTE_FACETS.values()),
            "max_facet_values": MAX_FACET_VALUES,
            "page": 1,
            "per_page": 0,
            "group_by": GROUPING_FIELD,
            "group_limit": 1,
        })
    except Exception as e:
        logger.error("Attribute extraction failed", collection=source_collection, error=str(e))
        raise

    facet_counts = result.get("facet_counts") or []
    values: Dict[str, List[str]] = {
        attr: facet_values(facet_counts, field)
        for attr, field in ATTRIBUTE_FACETS.items()
    }
    attributes = AttributeSet(**values)

    logger.info("Extracted attributes", **attributes.counts())
    return attributes

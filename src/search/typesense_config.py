"""
Typesense Collection Configuration.

Field names of the product catalog that suggestions are mined from, the
query parameters used against it, and the schema of the suggestions
collection that the synchronizer writes to.
"""

from typing import Any, Dict, List


# ============================================================================
# Product Catalog Fields
# ============================================================================

# One logical product can be indexed once per variant; pId groups them.
GROUPING_FIELD = "pId"
DISPLAYNAME_FIELD = "displayname"
SLUG_FIELD = "slug"

CATEGORY_FIELD = "category"
SUBCATEGORY_FIELD = "subCategory"
SEARCH_TAGS_FIELD = "searchTags"
METAL_FIELD = "metalType"
STYLE_FIELD = "style"
OCCASION_FIELD = "occasion"
COLLECTION_FIELD = "collection"

# Identifier fields paired with the faceted strings above.
# cId and collectionSlug hold a single value per document; the others are
# arrays because a product can belong to several subcategories/occasions/styles.
CATEGORY_ID_FIELD = "cId"
COLLECTION_SLUG_FIELD = "collectionSlug"
SUBCATEGORY_ID_FIELD = "scId"
OCCASION_ID_FIELD = "oId"
STYLE_ID_FIELD = "styleIds"


# ============================================================================
# Query Parameters
# ============================================================================

# Facets harvested in one request: AttributeSet attribute -> catalog field
ATTRIBUTE_FACETS: Dict[str, str] = {
    "categories": CATEGORY_FIELD,
    "sub_categories": SUBCATEGORY_FIELD,
    "search_tags": SEARCH_TAGS_FIELD,
    "metals": METAL_FIELD,
    "styles": STYLE_FIELD,
    "occasions": OCCASION_FIELD,
    "collections": COLLECTION_FIELD,
}

EXTRACT_QUERY_BY = "category,searchTags,subCategory,occasion,collection,style"
EXTRACT_QUERY_BY_WEIGHTS = "10,8,8,5,4,4"
MAX_FACET_VALUES = 999

# Grouped queries return at most this many groups per page.
MAX_GROUPS_PER_PAGE = 250

# Records that have a type are suggestions; this matches all of them.
DELETE_ALL_FILTER = "type:!=null"


# ============================================================================
# Suggestions Collection Schema
# ============================================================================

SUGGESTION_FIELDS: List[Dict[str, Any]] = [
    {"name": "term", "type": "string"},
    {"name": "type", "type": "string", "facet": True},
    {"name": "boost", "type": "int32"},
    {"name": "target", "type": "string"},
]


def suggestions_schema(collection_name: str) -> Dict[str, Any]:
    """Return the create-collection schema for a suggestions collection."""
    return {
        "name": collection_name,
        "fields": [dict(field) for field in SUGGESTION_FIELDS],
        "default_sorting_field": "boost",
    }

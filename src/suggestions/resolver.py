"""
Mapping resolution: facet value -> internal identifier.

Category and collection identifiers are single-valued on each document,
so one grouped query per field reads them off a representative document
of each group.

Subcategory, occasion and style identifiers are arrays (a product can
belong to several of each), so a representative document cannot tell
which array element belongs to the value. For those, up to
``sample_size`` documents matching the value are sampled and their
arrays intersected: identifiers of unrelated values vary between
documents while the one responsible for the filter is shared by all of
them. This is an approximation. Values whose samples share nothing stay
unresolved and are later filtered by their raw string.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from core.logging import get_logger
from search.typesense_client import TypesenseClient, exact_filter
from search.typesense_config import (
    CATEGORY_FIELD,
    CATEGORY_ID_FIELD,
    COLLECTION_FIELD,
    COLLECTION_SLUG_FIELD,
    MAX_GROUPS_PER_PAGE,
    OCCASION_FIELD,
    OCCASION_ID_FIELD,
    STYLE_FIELD,
    STYLE_ID_FIELD,
    SUBCATEGORY_FIELD,
    SUBCATEGORY_ID_FIELD,
)
from suggestions.models import AttributeMapping, AttributeSet

logger = get_logger(__name__)

DEFAULT_SAMPLE_SIZE = 10


def intersect_ids(id_arrays: Iterable[List[Any]]) -> List[Any]:
    """
    Intersect identifier arrays, keeping the order of the first one.

    Returns an empty list when there are no arrays or nothing is shared.
    """
    arrays = list(id_arrays)
    if not arrays:
        return []
    common = list(arrays[0])
    for ids in arrays[1:]:
        members = set(ids)
        common = [i for i in common if i in members]
        if not common:
            break
    return common


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        text = str(value).strip()
        return text or None
    return None


def resolve_grouped(
    client: TypesenseClient,
    source_collection: str,
    field: str,
    id_field: str,
    coerce: Callable[[Any], Optional[Any]],
    max_pages: int = 1000,
) -> Dict[str, Any]:
    """
    Map each value of a single-valued field to its identifier.

    One grouped query (paged if there are more groups than fit on a page)
    returns a representative document per distinct value.
    """
    pages = client.grouped_pages(
        source_collection,
        {
            "q": "*",
            "query_by": field,
            "group_by": field,
            "group_limit": 1,
            "include_fields": f"{field},{id_field}",
        },
        per_page=MAX_GROUPS_PER_PAGE,
        max_pages=max_pages,
    )

    resolved: Dict[str, Any] = {}
    for groups in pages:
        for doc in pages.first_documents(groups):
            value = doc.get(field)
            ident = coerce(doc.get(id_field))
            if isinstance(value, str) and value and ident is not None:
                resolved.setdefault(value, ident)
    return resolved


def resolve_by_intersection(
    client: TypesenseClient,
    source_collection: str,
    field: str,
    id_field: str,
    value: str,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> Optional[Any]:
    """
    Find the identifier shared by every sampled document matching ``value``.

    Documents whose ``id_field`` is missing or not a list are ignored.
    Returns None if no usable document was sampled or the arrays share
    no identifier.
    """
    result = client.search(source_collection, {
        "q": "*",
        "filter_by": exact_filter(field, value),
        "include_fields": id_field,
        "per_page": sample_size,
    })
    arrays = [
        (hit.get("document") or {}).get(id_field)
        for hit in result.get("hits") or []
    ]
    common = intersect_ids(ids for ids in arrays if isinstance(ids, list))
    return common[0] if common else None


def _resolve_each(
    client: TypesenseClient,
    source_collection: str,
    values: List[str],
    field: str,
    id_field: str,
    coerce: Callable[[Any], Optional[Any]],
    sample_size: int,
) -> Dict[str, Any]:
    resolved: Dict[str, Any] = {}
    for value in values:
        try:
            ident = coerce(resolve_by_intersection(
                client, source_collection, field, id_field, value, sample_size,
            ))
        except Exception as e:
            logger.warning("Could not resolve value", field=field, value=value, error=str(e))
            continue
        if ident is not None:
            resolved[value] = ident
    return resolved


def resolve_mappings(
    client: TypesenseClient,
    attributes: AttributeSet,
    source_collection: str,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    max_pages: int = 1000,
) -> AttributeMapping:
    """
    Resolve identifiers and slugs for the extracted attributes.

    Never raises for backend errors: a failed lookup leaves the affected
    values unresolved.
    """
    logger.info("Resolving attribute IDs and slugs", collection=source_collection)

    grouped: Dict[str, Dict[str, Any]] = {}
    for name, field, id_field, coerce in (
        ("categories", CATEGORY_FIELD, CATEGORY_ID_FIELD, _as_int),
        ("collections", COLLECTION_FIELD, COLLECTION_SLUG_FIELD, _as_str),
    ):
        try:
            grouped[name] = resolve_grouped(
                client, source_collection, field, id_field, coerce, max_pages=max_pages,
            )
        except Exception as e:
            logger.error("Grouped resolution failed", field=field, error=str(e))
            grouped[name] = {}
        logger.info("Resolved identifiers", field=field, count=len(grouped[name]))

    sampled: Dict[str, Dict[str, Any]] = {}
    for name, values, field, id_field, coerce in (
        ("sub_categories", attributes.sub_categories, SUBCATEGORY_FIELD, SUBCATEGORY_ID_FIELD, _as_int),
        ("occasions", attributes.occasions, OCCASION_FIELD, OCCASION_ID_FIELD, _as_int),
        ("styles", attributes.styles, STYLE_FIELD, STYLE_ID_FIELD, _as_str),
    ):
        sampled[name] = _resolve_each(
            client, source_collection, values, field, id_field, coerce, sample_size,
        )
        logger.info(
            "Resolved identifiers",
            field=field,
            count=len(sampled[name]),
            unresolved=len(values) - len(sampled[name]),
        )

    return AttributeMapping(**grouped, **sampled)

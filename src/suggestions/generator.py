"""
Suggestion generation with faceted validation.

Candidates come from a fixed policy (categories, occasion/style/subcategory
paired with a category, styles, collections, search tags, product names).
Every attribute candidate is checked with a count-only query and only
kept when at least one product matches, so no suggestion leads to an
empty result page.
"""

from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from core.logging import get_logger
from search.typesense_client import TypesenseClient, exact_filter
from search.typesense_config import (
    CATEGORY_FIELD,
    CATEGORY_ID_FIELD,
    COLLECTION_FIELD,
    COLLECTION_SLUG_FIELD,
    DISPLAYNAME_FIELD,
    GROUPING_FIELD,
    MAX_GROUPS_PER_PAGE,
    OCCASION_FIELD,
    OCCASION_ID_FIELD,
    SEARCH_TAGS_FIELD,
    SLUG_FIELD,
    STYLE_FIELD,
    STYLE_ID_FIELD,
    SUBCATEGORY_FIELD,
    SUBCATEGORY_ID_FIELD,
)
from suggestions.models import AttributeMapping, AttributeSet, Suggestion, SuggestionType

logger = get_logger(__name__)


class Facet(NamedTuple):
    """A faceted attribute: its values and how to target them."""
    field: str
    values: List[str]
    id_field: Optional[str] = None
    ids: Optional[Dict[str, object]] = None

    def clause(self, value: str) -> str:
        return exact_filter(self.field, value)

    def segment(self, value: str) -> str:
        """Target segment, preferring the resolved identifier."""
        if self.id_field and self.ids and value in self.ids:
            return f"{self.id_field}:{self.ids[value]}"
        return f"{self.field}:{value}"


def build_facets(attributes: AttributeSet, mappings: AttributeMapping) -> Dict[str, Facet]:
    return {
        "category": Facet(CATEGORY_FIELD, attributes.categories, CATEGORY_ID_FIELD, mappings.categories),
        "occasion": Facet(OCCASION_FIELD, attributes.occasions, OCCASION_ID_FIELD, mappings.occasions),
        "style": Facet(STYLE_FIELD, attributes.styles, STYLE_ID_FIELD, mappings.styles),
        "subcategory": Facet(
            SUBCATEGORY_FIELD, attributes.sub_categories, SUBCATEGORY_ID_FIELD, mappings.sub_categories,
        ),
        "collection": Facet(
            COLLECTION_FIELD, attributes.collections, COLLECTION_SLUG_FIELD, mappings.collections,
        ),
        "search_tag": Facet(SEARCH_TAGS_FIELD, attributes.search_tags),
    }


# Emission order: (facet, paired base facet or None, type, term template).
# Paired terms are always "<value> <base value>".
POLICIES: List[Tuple[str, Optional[str], SuggestionType, str]] = [
    ("category", None, SuggestionType.CATEGORY, "{}"),
    ("occasion", "category", SuggestionType.OCCASION_CATEGORY, "{} {}"),
    ("style", "category", SuggestionType.STYLE_CATEGORY, "{} {}"),
    ("subcategory", "category", SuggestionType.SUBCATEGORY_CATEGORY, "{} {}"),
    ("style", None, SuggestionType.STYLE, "{}"),
    ("collection", None, SuggestionType.COLLECTION, "{} Collection"),
    ("search_tag", None, SuggestionType.SEARCH_TAG, "{}"),
]


def has_products(client: TypesenseClient, source_collection: str, filter_by: str) -> bool:
    """True if at least one document matches. Errors count as no match."""
    try:
        return client.count(source_collection, filter_by, query_by=DISPLAYNAME_FIELD) > 0
    except Exception as e:
        logger.error("Validation query failed", filter_by=filter_by, error=str(e))
        return False


def single_suggestions(
    client: TypesenseClient,
    source_collection: str,
    facet: Facet,
    suggestion_type: SuggestionType,
    term_template: str = "{}",
) -> Iterator[Suggestion]:
    for value in facet.values:
        if has_products(client, source_collection, facet.clause(value)):
            yield Suggestion.generated(
                term_template.format(value), suggestion_type, target=facet.segment(value),
            )


def pair_suggestions(
    client: TypesenseClient,
    source_collection: str,
    modifier: Facet,
    base: Facet,
    suggestion_type: SuggestionType,
    term_template: str = "{} {}",
) -> Iterator[Suggestion]:
    for mod_value in modifier.values:
        for base_value in base.values:
            filter_by = f"{modifier.clause(mod_value)} && {base.clause(base_value)}"
            if has_products(client, source_collection, filter_by):
                yield Suggestion.generated(
                    term_template.format(mod_value, base_value),
                    suggestion_type,
                    target=f"{modifier.segment(mod_value)},{base.segment(base_value)}",
                )


def collect_displaynames(
    client: TypesenseClient,
    source_collection: str,
    page_size: int = MAX_GROUPS_PER_PAGE,
    max_pages: int = 1000,
) -> Dict[str, Optional[str]]:
    """
    Collect unique trimmed product names across all pages.

    Returns name -> slug (None when no document with that name has one),
    in first-seen order. A failure while paging is logged and the names
    gathered so far are returned.
    """
    pages = client.grouped_pages(
        source_collection,
        {
            "q": "*",
            "query_by": DISPLAYNAME_FIELD,
            "group_by": GROUPING_FIELD,
            "group_limit": 1,
            "include_fields": f"{DISPLAYNAME_FIELD},{SLUG_FIELD},{GROUPING_FIELD}",
        },
        per_page=page_size,
        max_pages=max_pages,
    )

    names: Dict[str, Optional[str]] = {}
    page_number = 0
    try:
        for groups in pages:
            page_number += 1
            for group in groups:
                for hit in group.get("hits") or []:
                    doc = hit.get("document") or {}
                    name = doc.get(DISPLAYNAME_FIELD)
                    if not isinstance(name, str) or not name.strip():
                        continue
                    name = name.strip()
                    slug = doc.get(SLUG_FIELD)
                    slug = slug.strip() if isinstance(slug, str) and slug.strip() else None
                    if names.get(name) is None:
                        names[name] = slug
            logger.debug(
                "Fetched displayname page",
                page=page_number,
                groups=len(groups),
                unique_displaynames=len(names),
            )
    except Exception as e:
        logger.error("Fetching displaynames failed", page=page_number + 1, error=str(e))

    if not names:
        logger.info("No products found with displaynames")
    return names


def generate_suggestions(
    client: TypesenseClient,
    attributes: AttributeSet,
    mappings: AttributeMapping,
    source_collection: str,
    page_size: int = MAX_GROUPS_PER_PAGE,
    max_pages: int = 1000,
) -> List[Suggestion]:
    """
    Generate validated suggestions in policy order.

    Order: categories, paired (occasion, style, subcategory x category),
    styles, collections, search tags, product names.
    """
    logger.info("Generating suggestions with faceted validation", collection=source_collection)
    facets = build_facets(attributes, mappings)
    suggestions: List[Suggestion] = []

    for facet_name, base_name, kind, template in POLICIES:
        if base_name is None:
            produced = single_suggestions(
                client, source_collection, facets[facet_name], kind, template,
            )
        else:
            produced = pair_suggestions(
                client, source_collection, facets[facet_name], facets[base_name], kind, template,
            )
        before = len(suggestions)
        suggestions.extend(produced)
        logger.info("Validated suggestions", type=kind.value, accepted=len(suggestions) - before)

    names = collect_displaynames(client, source_collection, page_size=page_size, max_pages=max_pages)
    suggestions.extend(
        Suggestion.generated(
            name,
            SuggestionType.DISPLAYNAME,
            target=f"{SLUG_FIELD}:{slug}" if slug else None,
        )
        for name, slug in names.items()
    )
    logger.info("Added displayname suggestions", count=len(names))

    logger.info("Generated suggestions", total=len(suggestions))
    return suggestions

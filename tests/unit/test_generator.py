"""
Unit tests for suggestion generation.

Tests cover:
1. Admission by validation count
2. Policy order, terms, types and boosts
3. Targets with and without resolved identifiers
4. Display name collection and de-duplication
5. Error handling
"""

import pytest
from typesense.exceptions import ServerError

from suggestions.generator import collect_displaynames, generate_suggestions, has_products
from suggestions.models import AttributeMapping, AttributeSet, Suggestion, SuggestionType


def _by_type(suggestions, suggestion_type):
    return [s for s in suggestions if s.type == suggestion_type.value]


# =============================================================================
# 1. Admission
# =============================================================================

class TestAdmission:

    def test_zero_count_excluded(self, fake_client, scripted):
        scripted.counts["category:=Rings"] = 0
        attrs = AttributeSet(categories=["Rings"])

        result = generate_suggestions(fake_client, attrs, AttributeMapping(), "consumer-products")

        assert result == []

    def test_positive_count_included(self, fake_client, scripted):
        scripted.counts["category:=Rings"] = 1
        attrs = AttributeSet(categories=["Rings"])

        result = generate_suggestions(fake_client, attrs, AttributeMapping(), "consumer-products")

        assert result == [Suggestion(term="Rings", type="category", boost=10, target="category:Rings")]

    def test_validation_error_counts_as_no_match(self, fake_client, scripted):
        scripted.errors["category:=Rings"] = ServerError("boom")
        scripted.counts["category:=Earrings"] = 2
        attrs = AttributeSet(categories=["Rings", "Earrings"])

        result = generate_suggestions(fake_client, attrs, AttributeMapping(), "consumer-products")

        assert [s.term for s in result] == ["Earrings"]

    def test_has_products(self, fake_client, scripted):
        scripted.counts["style:=Halo"] = 4
        assert has_products(fake_client, "consumer-products", "style:=Halo") is True
        assert has_products(fake_client, "consumer-products", "style:=Bezel") is False


# =============================================================================
# 2. Policies
# =============================================================================

class TestPolicies:

    def test_engagement_rings(self, fake_client, scripted):
        """Occasion x category pair with no mapping uses raw strings."""
        scripted.counts["occasion:=Engagement && category:=Rings"] = 3
        attrs = AttributeSet(categories=["Rings"], occasions=["Engagement"])

        result = generate_suggestions(fake_client, attrs, AttributeMapping(), "consumer-products")

        assert result == [Suggestion(
            term="Engagement Rings",
            type="occasion_category",
            boost=5,
            target="occasion:Engagement,category:Rings",
        )]

    def test_engagement_rings_with_resolved_ids(self, fake_client, scripted):
        scripted.counts["occasion:=Engagement && category:=Rings"] = 3
        attrs = AttributeSet(categories=["Rings"], occasions=["Engagement"])
        mapping = AttributeMapping(categories={"Rings": 3}, occasions={"Engagement": 12})

        result = generate_suggestions(fake_client, attrs, mapping, "consumer-products")

        assert result[0].target == "oId:12,cId:3"

    def test_partial_mapping_mixes_ids_and_strings(self, fake_client, scripted):
        scripted.counts["style:=Halo && category:=Rings"] = 1
        attrs = AttributeSet(categories=["Rings"], styles=["Halo"])
        mapping = AttributeMapping(categories={"Rings": 3})

        result = generate_suggestions(fake_client, attrs, mapping, "consumer-products")

        assert _by_type(result, SuggestionType.STYLE_CATEGORY)[0].target == "style:Halo,cId:3"

    def test_every_policy(self, fake_client, scripted):
        scripted.counts.update({
            "category:=Rings": 9,
            "occasion:=Wedding && category:=Rings": 2,
            "style:=Halo && category:=Rings": 2,
            "subCategory:=Diamond && category:=Rings": 2,
            "style:=Halo": 4,
            "collection:=Bridal": 5,
            "searchTags:=gift": 6,
        })
        scripted.grouped["pId"] = [[{"displayname": "Halo Engagement Ring", "slug": "halo-ring"}]]
        attrs = AttributeSet(
            categories=["Rings"],
            occasions=["Wedding"],
            styles=["Halo"],
            sub_categories=["Diamond"],
            collections=["Bridal"],
            search_tags=["gift"],
        )
        mapping = AttributeMapping(
            sub_categories={"Diamond": 7},
            styles={"Halo": "halo"},
            collections={"Bridal": "bridal-collection"},
        )

        result = generate_suggestions(fake_client, attrs, mapping, "consumer-products")

        assert [(s.term, s.type, s.boost, s.target) for s in result] == [
            ("Rings", "category", 10, "category:Rings"),
            ("Wedding Rings", "occasion_category", 5, "occasion:Wedding,category:Rings"),
            ("Halo Rings", "style_category", 5, "styleIds:halo,category:Rings"),
            ("Diamond Rings", "subcategory_category", 8, "scId:7,category:Rings"),
            ("Halo", "style", 6, "styleIds:halo"),
            ("Bridal Collection", "collection", 4, "collectionSlug:bridal-collection"),
            ("gift", "search_tag", 8, "searchTags:gift"),
            ("Halo Engagement Ring", "displayname", 10, "slug:halo-ring"),
        ]

    def test_pairs_validate_every_combination(self, fake_client, scripted):
        attrs = AttributeSet(categories=["Earrings", "Rings"], occasions=["Engagement", "Wedding"])

        generate_suggestions(fake_client, attrs, AttributeMapping(), "consumer-products")

        pair_filters = [f for f in scripted.filters() if f.startswith("occasion")]
        assert pair_filters == [
            "occasion:=Engagement && category:=Earrings",
            "occasion:=Engagement && category:=Rings",
            "occasion:=Wedding && category:=Earrings",
            "occasion:=Wedding && category:=Rings",
        ]

    def test_metals_not_suggested(self, fake_client, scripted):
        attrs = AttributeSet(metals=["Gold"])

        generate_suggestions(fake_client, attrs, AttributeMapping(), "consumer-products")

        assert not any("metalType" in f for f in scripted.filters())

    def test_special_characters_escaped_in_filter_only(self, fake_client, scripted):
        scripted.counts["searchTags:=`rings, bands`"] = 1
        attrs = AttributeSet(search_tags=["rings, bands"])

        result = generate_suggestions(fake_client, attrs, AttributeMapping(), "consumer-products")

        assert result[0].term == "rings, bands"


# =============================================================================
# 3. Display names
# =============================================================================

class TestDisplaynames:

    def test_deduplicated_across_pages(self, fake_client, scripted):
        scripted.grouped["pId"] = [
            [{"displayname": "Classic Band"}, {"displayname": "Halo Ring"}],
            [{"displayname": "  Classic Band  "}],
        ]

        names = collect_displaynames(fake_client, "consumer-products", page_size=2)

        assert list(names) == ["Classic Band", "Halo Ring"]

    def test_duplicate_name_yields_one_suggestion(self, fake_client, scripted):
        scripted.grouped["pId"] = [
            [{"displayname": "Classic Band"}, {"displayname": "Halo Ring"}],
            [{"displayname": "Classic Band "}],
        ]

        result = generate_suggestions(
            fake_client, AttributeSet(), AttributeMapping(), "consumer-products", page_size=2,
        )

        assert [s.term for s in result if s.term == "Classic Band"] == ["Classic Band"]
        assert len(result) == 2

    def test_blank_and_missing_names_skipped(self, fake_client, scripted):
        scripted.grouped["pId"] = [[{"displayname": "   "}, {"slug": "x"}, {"displayname": 12}]]

        assert collect_displaynames(fake_client, "consumer-products") == {}

    def test_first_available_slug_kept(self, fake_client, scripted):
        scripted.grouped["pId"] = [
            [{"displayname": "Halo Ring"}, {"displayname": "Halo Ring", "slug": "halo-ring"}],
            [{"displayname": "Halo Ring", "slug": "halo-ring-2"}],
        ]

        names = collect_displaynames(fake_client, "consumer-products", page_size=2)

        assert names == {"Halo Ring": "halo-ring"}

    def test_no_slug_no_target(self, fake_client, scripted):
        scripted.grouped["pId"] = [[{"displayname": "Halo Ring"}]]

        result = generate_suggestions(fake_client, AttributeSet(), AttributeMapping(), "consumer-products")

        assert result == [Suggestion(term="Halo Ring", type="displayname", boost=10)]

    def test_paging_error_keeps_collected_names(self, fake_client, scripted):
        scripted.grouped["pId"] = [[{"displayname": "Halo Ring"}, {"displayname": "Band"}]]
        original = fake_client.search.side_effect

        def flaky(collection, params):
            if params.get("group_by") == "pId" and params.get("page") == 2:
                raise ServerError("boom")
            return original(collection, params)

        fake_client.search.side_effect = flaky

        names = collect_displaynames(fake_client, "consumer-products", page_size=2)

        assert list(names) == ["Halo Ring", "Band"]

    def test_bounded_by_max_pages(self, fake_client, scripted):
        scripted.grouped["pId"] = [[{"displayname": f"Ring {i}"}] for i in range(5)]

        names = collect_displaynames(fake_client, "consumer-products", page_size=1, max_pages=2)

        assert list(names) == ["Ring 0", "Ring 1"]

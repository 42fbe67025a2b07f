"""
Pydantic models for suggestion generation.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Enums
# ============================================================================

class SuggestionType(str, Enum):
    """Kinds of generated suggestions."""
    CATEGORY = "category"                            # "Rings"
    OCCASION_CATEGORY = "occasion_category"          # "Engagement Rings"
    STYLE_CATEGORY = "style_category"                # "Solitaire Rings"
    SUBCATEGORY_CATEGORY = "subcategory_category"    # "Diamond Rings"
    STYLE = "style"                                  # "Solitaire"
    COLLECTION = "collection"                        # "Bridal Collection"
    SEARCH_TAG = "search_tag"                        # "gift for her"
    DISPLAYNAME = "displayname"                      # product names


# Autocomplete ranking priority per type (higher ranks first).
BOOSTS: Dict[SuggestionType, int] = {
    SuggestionType.CATEGORY: 10,
    SuggestionType.OCCASION_CATEGORY: 5,
    SuggestionType.STYLE_CATEGORY: 5,
    SuggestionType.SUBCATEGORY_CATEGORY: 8,
    SuggestionType.STYLE: 6,
    SuggestionType.COLLECTION: 4,
    SuggestionType.SEARCH_TAG: 8,
    SuggestionType.DISPLAYNAME: 10,
}

# Used when a manual override omits its boost.
DEFAULT_BOOST = 10


# ============================================================================
# Attributes
# ============================================================================

class AttributeSet(BaseModel):
    """Distinct facet values of the source catalog, each sorted and unique."""
    model_config = ConfigDict(frozen=True)

    categories: List[str] = Field(default_factory=list)
    sub_categories: List[str] = Field(default_factory=list)
    search_tags: List[str] = Field(default_factory=list)
    metals: List[str] = Field(default_factory=list)
    styles: List[str] = Field(default_factory=list)
    occasions: List[str] = Field(default_factory=list)
    collections: List[str] = Field(default_factory=list)

    @field_validator("*", mode="after")
    @classmethod
    def sort_unique(cls, v: List[str]) -> List[str]:
        return sorted(set(v))

    def counts(self) -> Dict[str, int]:
        return {name: len(values) for name, values in self}


class AttributeMapping(BaseModel):
    """
    Facet value -> internal identifier.

    Best-effort: a missing entry means the value is filtered by its raw
    string instead of its identifier.
    """
    categories: Dict[str, int] = Field(default_factory=dict)
    sub_categories: Dict[str, int] = Field(default_factory=dict)
    occasions: Dict[str, int] = Field(default_factory=dict)
    styles: Dict[str, str] = Field(default_factory=dict)
    collections: Dict[str, str] = Field(default_factory=dict)

    def counts(self) -> Dict[str, int]:
        return {name: len(values) for name, values in self}


# ============================================================================
# Suggestions
# ============================================================================

class Suggestion(BaseModel):
    """
    An autocomplete entry.

    Generated suggestions always carry a SuggestionType value; manual
    overrides may use any type tag.
    """
    model_config = ConfigDict(frozen=True)

    term: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    boost: Optional[int] = None
    target: Optional[str] = None

    @classmethod
    def generated(
        cls,
        term: str,
        suggestion_type: SuggestionType,
        target: Optional[str] = None,
    ) -> "Suggestion":
        """Create a suggestion with the boost assigned to its type."""
        return cls(
            term=term,
            type=suggestion_type.value,
            boost=BOOSTS[suggestion_type],
            target=target,
        )

    def to_document(self, doc_id: int) -> dict:
        """Shape the suggestion as a suggestions-collection document."""
        return {
            "id": str(doc_id),
            "term": self.term,
            "type": self.type,
            "boost": self.boost if self.boost is not None else DEFAULT_BOOST,
            "target": self.target or "",
        }


class SyncReport(BaseModel):
    """Outcome of a synchronizer run."""
    collection: str
    created_collection: bool = False
    deleted: int = 0
    uploaded: int = 0
    batches: int = 0

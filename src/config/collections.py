"""
Collection naming.

Every source catalog gets its own suggestions collection and review file.
The suggestions collection name is derived from the source name unless
it is listed in CUSTOM_OUTPUT_COLLECTIONS or overridden explicitly.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

# Source collections whose suggestions collection predates the naming scheme
CUSTOM_OUTPUT_COLLECTIONS: Dict[str, str] = {
    "store-products": "store_search_suggestions",
}

OUTPUT_COLLECTION_PREFIX = "search_suggestions_"


@dataclass(frozen=True)
class CollectionConfig:
    source_collection: str
    output_collection: str
    output_file: Path


def default_output_collection(source_collection: str) -> str:
    """Return the suggestions collection name for a source collection."""
    custom = CUSTOM_OUTPUT_COLLECTIONS.get(source_collection)
    if custom:
        return custom
    return f"{OUTPUT_COLLECTION_PREFIX}{source_collection.replace('-', '_')}"


def get_collection_config(
    source_collection: str,
    output_collection: Optional[str] = None,
    output_dir: Union[str, Path] = ".",
) -> CollectionConfig:
    """
    Build the collection config for a run.

    Args:
        source_collection: Product collection to mine.
        output_collection: Explicit suggestions collection name. When unset
            the name is derived from the source collection.
        output_dir: Directory for the review JSON file.

    Returns:
        CollectionConfig with the resolved names and output path.
    """
    if not source_collection:
        raise ValueError("source_collection is required")

    return CollectionConfig(
        source_collection=source_collection,
        output_collection=output_collection or default_output_collection(source_collection),
        output_file=Path(output_dir) / f"suggestions-output-{source_collection}.json",
    )

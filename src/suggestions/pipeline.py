"""
Run orchestration: extract -> resolve -> generate -> write file -> sync.
"""

import json
from pathlib import Path
from typing import List, Optional, Sequence

from config.collections import CollectionConfig
from config.settings import Settings, get_settings
from core.logging import bind_context, get_logger
from search.typesense_client import TypesenseClient
from suggestions.extractor import extract_attributes
from suggestions.generator import generate_suggestions
from suggestions.models import Suggestion, SyncReport
from suggestions.resolver import resolve_mappings
from suggestions.synchronizer import sync_suggestions

logger = get_logger(__name__)


def write_suggestions(path: Path, suggestions: Sequence[Suggestion]) -> Path:
    """Write suggestions as an indented JSON array, omitting unset fields."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [s.model_dump(exclude_none=True) for s in suggestions]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def run_generation(
    client: TypesenseClient,
    config: CollectionConfig,
    overrides: Sequence[Suggestion] = (),
    settings: Optional[Settings] = None,
) -> List[Suggestion]:
    """
    Generate suggestions for ``config.source_collection`` and write the
    review file (generated plus overrides).

    Returns:
        The generated suggestions only; overrides are merged again at sync time.
    """
    settings = settings or get_settings()
    bind_context(source_collection=config.source_collection)

    attributes = extract_attributes(client, config.source_collection)
    mappings = resolve_mappings(
        client,
        attributes,
        config.source_collection,
        sample_size=settings.resolver_sample_size,
        max_pages=settings.max_pages,
    )
    generated = generate_suggestions(
        client,
        attributes,
        mappings,
        config.source_collection,
        page_size=settings.displayname_page_size,
        max_pages=settings.max_pages,
    )

    combined = [*generated, *overrides]
    output = write_suggestions(config.output_file, combined)
    logger.info(
        "Suggestions written",
        path=str(output),
        generated=len(generated),
        overrides=len(overrides),
        total=len(combined),
    )
    return generated


def run_sync(
    client: TypesenseClient,
    config: CollectionConfig,
    overrides: Sequence[Suggestion] = (),
    settings: Optional[Settings] = None,
) -> SyncReport:
    """Generate suggestions, write the review file and sync them."""
    settings = settings or get_settings()
    generated = run_generation(client, config, overrides, settings)
    return sync_suggestions(
        client,
        generated,
        config.output_collection,
        overrides=overrides,
        batch_size=settings.sync_batch_size,
    )

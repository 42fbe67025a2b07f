"""
Push suggestions into the suggestions collection.

Steps:
1. Ensure the collection exists (create it from the schema on 404).
2. Delete every existing suggestion.
3. Upload generated suggestions followed by manual overrides in batches,
   numbering documents 1..N by position.

A failed batch aborts the sync. Batches already uploaded stay in place;
rerunning the sync wipes and reloads everything.
"""

from typing import List, Sequence

from typesense.exceptions import ObjectNotFound

from core.logging import get_logger
from search.typesense_client import TypesenseClient
from search.typesense_config import DELETE_ALL_FILTER, suggestions_schema
from suggestions.errors import SyncError
from suggestions.models import Suggestion, SyncReport

logger = get_logger(__name__)

MAX_BATCH_SIZE = 100


def ensure_collection(client: TypesenseClient, collection: str) -> bool:
    """
    Create the suggestions collection if it does not exist.

    Returns:
        True if the collection was created.
    """
    try:
        client.retrieve_collection(collection)
        logger.info("Collection already exists", collection=collection)
        return False
    except ObjectNotFound:
        pass

    logger.info("Creating collection", collection=collection)
    client.create_collection(suggestions_schema(collection))
    logger.info("Collection created", collection=collection)
    return True


def clear_collection(client: TypesenseClient, collection: str) -> int:
    """Delete every suggestion. A missing collection counts as empty."""
    try:
        return client.delete_documents(collection, DELETE_ALL_FILTER)
    except ObjectNotFound:
        return 0


def build_batches(
    suggestions: Sequence[Suggestion],
    batch_size: int = MAX_BATCH_SIZE,
) -> List[List[dict]]:
    """Shape suggestions as documents with ids 1..N, split into batches."""
    if not 1 <= batch_size <= MAX_BATCH_SIZE:
        raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}")
    documents = [s.to_document(position) for position, s in enumerate(suggestions, start=1)]
    return [documents[i:i + batch_size] for i in range(0, len(documents), batch_size)]


def sync_suggestions(
    client: TypesenseClient,
    suggestions: Sequence[Suggestion],
    output_collection: str,
    overrides: Sequence[Suggestion] = (),
    batch_size: int = MAX_BATCH_SIZE,
) -> SyncReport:
    """
    Replace the contents of ``output_collection`` with the given suggestions.

    Raises:
        SyncError: A batch failed to import.
        typesense.exceptions.TypesenseClientError: Schema or delete errors
            other than not-found.
    """
    logger.info("Syncing suggestions", collection=output_collection)

    try:
        created = ensure_collection(client, output_collection)
        deleted = clear_collection(client, output_collection)
    except Exception as e:
        logger.error("Preparing suggestions collection failed", collection=output_collection, error=str(e))
        raise
    logger.info("Cleared existing suggestions", collection=output_collection, deleted=deleted)

    combined = [*suggestions, *overrides]
    batches = build_batches(combined, batch_size)
    logger.info("Total suggestions to sync", total=len(combined), batches=len(batches))

    uploaded = 0
    for number, batch in enumerate(batches, start=1):
        try:
            results = client.import_documents(output_collection, batch, action="create")
        except Exception as e:
            logger.error("Import failed", batch=number, uploaded=uploaded, error=str(e))
            raise SyncError(f"Import of batch {number} failed", batch=number, original_error=e) from e

        failures = [r for r in results or [] if not r.get("success", False)]
        if failures:
            logger.error("Import rejected documents", batch=number, failed=len(failures), uploaded=uploaded)
            raise SyncError(
                f"Batch {number}: {len(failures)} of {len(batch)} documents rejected",
                batch=number,
                failures=failures,
            )

        uploaded += len(batch)
        logger.info("Imported batch", batch=number, documents=len(batch))

    logger.info("Synced all suggestions", collection=output_collection, uploaded=uploaded)
    return SyncReport(
        collection=output_collection,
        created_collection=created,
        deleted=deleted,
        uploaded=uploaded,
        batches=len(batches),
    )

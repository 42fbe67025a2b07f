"""
Command-line entry point.

Usage:
    # Generate suggestions-output-consumer-products.json for review:
    suggestion-builder

    # Another catalog:
    suggestion-builder --collection store-products

    # Generate and push to Typesense:
    suggestion-builder --sync
"""

import argparse
import sys
from typing import List, Optional

from config.collections import get_collection_config
from config.settings import get_settings
from core.logging import clear_context, configure_logging, get_logger
from search.typesense_client import create_typesense_client
from suggestions.overrides import load_overrides
from suggestions.pipeline import run_generation, run_sync

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate search suggestions from a Typesense catalog")
    parser.add_argument("--collection", type=str, help="Source collection (default from SOURCE_COLLECTION)")
    parser.add_argument("--output-collection", type=str, help="Suggestions collection name override")
    parser.add_argument("--output-dir", type=str, help="Directory for the review JSON file")
    parser.add_argument("--overrides", type=str, help="Manual overrides JSON file")
    parser.add_argument("--sync", action="store_true", help="Also push suggestions to Typesense")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON logs")
    parser.add_argument("--log-level", type=str, help="Log level (default from LOG_LEVEL)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    configure_logging(
        json_logs=args.json_logs or settings.json_logs,
        log_level=args.log_level or settings.log_level,
    )

    config = get_collection_config(
        args.collection or settings.source_collection,
        output_collection=args.output_collection or settings.output_collection,
        output_dir=args.output_dir or settings.output_dir,
    )
    mode = "sync" if args.sync else "generate"
    logger.info(
        "Starting suggestion builder",
        mode=mode,
        source_collection=config.source_collection,
        output_collection=config.output_collection,
        output_file=str(config.output_file),
    )

    try:
        overrides = load_overrides(args.overrides or settings.manual_overrides_path)
        client = create_typesense_client(settings)
        if args.sync:
            report = run_sync(client, config, overrides, settings)
            logger.info("Suggestion sync completed", **report.model_dump())
        else:
            generated = run_generation(client, config, overrides, settings)
            logger.info(
                "Suggestions generated",
                generated=len(generated),
                review_file=str(config.output_file),
            )
    except Exception:
        logger.exception("Suggestion builder failed", mode=mode)
        return 1
    finally:
        clear_context()

    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Show how subcategory values resolve to scId by sample intersection.

Prints the sampled scId arrays and the candidates they share, which is
what the resolver picks the first element from.

Usage:
    PYTHONPATH=src python scripts/resolve_ids.py ENGAGEMENT PLATINUM
    PYTHONPATH=src python scripts/resolve_ids.py --sample-size 5 ENGAGEMENT
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from config.settings import get_settings
from search.typesense_client import create_typesense_client, exact_filter
from search.typesense_config import SUBCATEGORY_FIELD, SUBCATEGORY_ID_FIELD
from suggestions.resolver import intersect_ids


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Inspect subcategory ID resolution")
    parser.add_argument("values", nargs="+", help="Subcategory values")
    parser.add_argument("--collection", type=str, default=settings.source_collection)
    parser.add_argument("--sample-size", type=int, default=settings.resolver_sample_size)
    args = parser.parse_args()

    client = create_typesense_client(settings)
    for value in args.values:
        result = client.search(args.collection, {
            "q": "*",
            "filter_by": exact_filter(SUBCATEGORY_FIELD, value),
            "include_fields": SUBCATEGORY_ID_FIELD,
            "per_page": args.sample_size,
        })
        hits = result.get("hits") or []
        if not hits:
            print(f"No docs for {value}")
            continue

        arrays = [h["document"].get(SUBCATEGORY_ID_FIELD) for h in hits]
        for ids in arrays:
            print(f"  {value}: {ids}")
        candidates = intersect_ids(ids for ids in arrays if isinstance(ids, list))
        print(f"SubCategory: {value} -> ID candidates: {candidates}")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Print one document of a collection, to check which fields it carries.

Usage:
    PYTHONPATH=src python scripts/inspect_document.py
    PYTHONPATH=src python scripts/inspect_document.py --collection store-products
"""

import argparse
import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from config.settings import get_settings
from search.typesense_client import create_typesense_client


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Print the first document of a collection")
    parser.add_argument("--collection", type=str, default=settings.source_collection)
    args = parser.parse_args()

    client = create_typesense_client(settings)
    result = client.search(args.collection, {"q": "*", "per_page": 1})
    hits = result.get("hits") or []
    if not hits:
        print("No documents found")
        return

    print(json.dumps(hits[0]["document"], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()

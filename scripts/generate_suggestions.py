#!/usr/bin/env python3
"""
Generate search suggestions from a Typesense product collection.

Usage:
    # From project root, with venv active:
    PYTHONPATH=src python scripts/generate_suggestions.py

    # Another catalog:
    PYTHONPATH=src python scripts/generate_suggestions.py --collection store-products

    # Generate and push to the suggestions collection:
    PYTHONPATH=src python scripts/generate_suggestions.py --sync
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from suggestions.cli import main


if __name__ == "__main__":
    sys.exit(main())

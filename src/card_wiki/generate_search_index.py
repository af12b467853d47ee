#!/usr/bin/env python3
"""Write the card search index without building the whole site."""

import argparse
import logging
import sys
from pathlib import Path

from card_wiki.data_utils import generate_search_index, load_cards, save_json_data

log = logging.getLogger(__name__)


def write_search_index(cards_csv: Path, output_file: Path) -> bool:
    """Parse the card CSV and save its search index.

    Returns:
        False if the card data could not be parsed

    """
    log.info("Generating card search index...")
    result = load_cards(cards_csv)
    if not result.ok:
        return False

    save_json_data(
        generate_search_index(result.value),
        output_file,
        f"search index with {len(result.value)} cards",
    )
    return True


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate the card search index")
    parser.add_argument(
        "--cards-csv",
        type=Path,
        default=Path("data") / "cards.csv",
        help="Card CSV file (default: data/cards.csv)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("output") / "search-index.json",
        help="Output JSON file (default: output/search-index.json)",
    )
    args = parser.parse_args()

    if not args.cards_csv.exists():
        log.error("Card data not found: %s", args.cards_csv)
        sys.exit(1)

    if not write_search_index(args.cards_csv, args.output):
        sys.exit(1)


def run() -> None:
    """Set up logging and run main."""
    from card_wiki.logging_utils import setup_cli_logging
    setup_cli_logging()
    main()

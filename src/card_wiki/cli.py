#!/usr/bin/env python3
"""Command-line interface for the card wiki site generator."""

import argparse
import logging
import sys
from pathlib import Path

from card_wiki.errors import CardDataError
from card_wiki.logging_utils import setup_cli_logging
from card_wiki.models import SiteConfig
from card_wiki.sitegenerator import SiteGenerator

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the card-wiki command."""
    parser = argparse.ArgumentParser(
        description="Generate the card wiki static site from CSV data"
    )
    parser.add_argument(
        "--cards-csv",
        type=Path,
        default=Path("data") / "cards.csv",
        help="Card CSV file (default: data/cards.csv)",
    )
    parser.add_argument(
        "--rulings-csv",
        type=Path,
        default=Path("data") / "rulings.csv",
        help="Ruling CSV file (default: data/rulings.csv)",
    )
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=Path("images"),
        help="Directory containing <id>.avif card images (default: images)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output"),
        help="Output directory for generated site (default: output)",
    )
    parser.add_argument(
        "--base-path",
        type=str,
        default="/",
        help="Path the site is served under, e.g. /card-wiki/ (default: /)",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default="",
        help=(
            "Base URL for the site (e.g., https://example.github.io/card-wiki) "
            "for generating sitemap with fully qualified URLs"
        ),
    )
    parser.add_argument(
        "--title", type=str, default="Card Wiki", help="Site title"
    )
    parser.add_argument(
        "--single-card",
        type=str,
        metavar="CARD_ID",
        help="Generate page for a single card",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only parse the data files and report errors",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_cli_logging(verbose=args.verbose)

    if not args.cards_csv.exists():
        log.error("Card data file '%s' does not exist", args.cards_csv)
        sys.exit(1)

    config = SiteConfig(
        title=args.title,
        base_path=args.base_path,
        base_url=args.base_url,
    )
    generator = SiteGenerator(
        cards_csv=args.cards_csv,
        output_dir=args.output_dir,
        rulings_csv=args.rulings_csv,
        images_dir=args.images_dir,
        config=config,
    )

    try:
        if args.check:
            generator.load_data()
            log.info(
                "Data OK: %d cards, %d rulings",
                len(generator.cards),
                len(generator.rulings),
            )
        elif args.single_card:
            generator.generate_single_card(args.single_card)
        else:
            generator.generate_all()

    except CardDataError as e:
        log.error("Invalid data in %s: %s", e.source, e.error)
        sys.exit(1)
    except Exception as e:
        log.error("Error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Card Wiki: static reference site for a card game.

This library parses the hand-curated card and ruling CSV files, resolves card
artwork paths, and renders the listing, detail and ruling pages of the site.
"""

from .csv_parser import (
    CARD_SCHEMA,
    RULING_SCHEMA,
    RecordSchema,
    format_csv,
    format_records,
    parse_csv_data,
    parse_records,
    parse_rows,
    parse_ruling_data,
    split_csv_line,
    tokenize,
)
from .data_utils import group_rulings_by_card, load_cards, load_rulings
from .errors import CardDataError, CardWikiError, ParseError, ParseResult
from .image_path import get_image_path, get_placeholder_image_path, with_base
from .models import Card, Ruling, SiteConfig

__version__ = "0.1.0"

__all__ = [
    # Data models
    "Card",
    "Ruling",
    "SiteConfig",
    # Errors
    "CardDataError",
    "CardWikiError",
    "ParseError",
    "ParseResult",
    # CSV parsing
    "CARD_SCHEMA",
    "RULING_SCHEMA",
    "RecordSchema",
    "format_csv",
    "format_records",
    "parse_csv_data",
    "parse_records",
    "parse_rows",
    "parse_ruling_data",
    "split_csv_line",
    "tokenize",
    # Data utilities
    "group_rulings_by_card",
    "load_cards",
    "load_rulings",
    # Image paths
    "get_image_path",
    "get_placeholder_image_path",
    "with_base",
]

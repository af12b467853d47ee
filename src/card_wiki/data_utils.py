"""Loading and saving of card and ruling data files."""

import json
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, TypeVar

from card_wiki.csv_parser import parse_csv_data, parse_ruling_data
from card_wiki.errors import ParseError, ParseResult
from card_wiki.models import Card, Ruling

log = logging.getLogger(__name__)

T = TypeVar("T")


def read_csv_text(csv_file: Path) -> str:
    """Read a CSV file as UTF-8 text.

    A leading byte-order mark is kept; the parser removes it.
    """
    with open(csv_file, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _load(
    csv_file: Path, parse: Callable[[str], ParseResult[List[T]]], description: str
) -> ParseResult[List[T]]:
    try:
        raw_text = read_csv_text(csv_file)
    except (OSError, UnicodeDecodeError) as e:
        log.error("Error reading %s from %s: %s", description, csv_file, e)
        return ParseResult.failure(ParseError.unexpected(e))

    result = parse(raw_text)
    if result.ok:
        log.info("Loaded %d %s from %s", len(result.value), description, csv_file)
    else:
        log.error("Error parsing %s from %s: %s", description, csv_file, result.error)
    return result


def load_cards(csv_file: Path) -> ParseResult[List[Card]]:
    """Load cards from a CSV file.

    Args:
        csv_file: Path to the card CSV

    Returns:
        Result holding the cards in file order, or the parse error

    """
    return _load(Path(csv_file), parse_csv_data, "cards")


def load_rulings(csv_file: Path) -> ParseResult[List[Ruling]]:
    """Load rulings from a CSV file."""
    return _load(Path(csv_file), parse_ruling_data, "rulings")


def group_rulings_by_card(rulings: Iterable[Ruling]) -> Dict[str, List[Ruling]]:
    """Group rulings by the card they refer to, keeping file order."""
    grouped: Dict[str, List[Ruling]] = {}
    for ruling in rulings:
        grouped.setdefault(ruling.card, []).append(ruling)
    return grouped


def generate_search_index(cards: Iterable[Card]) -> List[Dict]:
    """Build the client-side search index entries for a set of cards.

    Args:
        cards: Cards to index

    Returns:
        One dictionary per card with its searchable fields and page URL

    """
    return [
        {
            "id": card.id,
            "name": card.name,
            "kind": card.kind,
            "type": card.type,
            "tags": card.tag_list,
            "url": f"cards/{card.id}.html",
        }
        for card in cards
    ]


def save_json_data(data, output_file: Path, description: str = "data") -> None:
    """Save data to JSON file with error handling and feedback.

    Args:
        data: Data to save
        output_file: Path to output file
        description: Human-readable description for logging

    """
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        log.info("Saved %s to: %s", description, output_file)

    except Exception as e:
        log.error("Error saving %s to %s: %s", description, output_file, e)
        raise

"""Static site generator for the card reference wiki."""

import logging
import shutil
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Optional
from xml.sax.saxutils import escape

from jinja2 import Environment, FileSystemLoader, select_autoescape

from card_wiki.data_utils import (
    generate_search_index,
    group_rulings_by_card,
    load_cards,
    load_rulings,
    save_json_data,
)
from card_wiki.errors import CardDataError
from card_wiki.image_path import (
    IMAGE_EXTENSION,
    PLACEHOLDER_IMAGE,
    get_image_path,
    get_placeholder_image_path,
    with_base,
)
from card_wiki.models import Card, Ruling, SiteConfig

log = logging.getLogger(__name__)


class SiteGenerator:
    """Generates the static wiki site from card and ruling CSV files."""

    def __init__(
        self,
        cards_csv: Path,
        output_dir: Path,
        rulings_csv: Optional[Path] = None,
        images_dir: Optional[Path] = None,
        config: Optional[SiteConfig] = None,
    ):
        """Initialize the SiteGenerator with data files, directories and config."""
        self.cards_csv = Path(cards_csv)
        self.output_dir = Path(output_dir)
        self.rulings_csv = Path(rulings_csv) if rulings_csv else None
        self.images_dir = Path(images_dir) if images_dir else Path("images")
        self.config = config or SiteConfig()
        self.cards: Dict[str, Card] = {}
        self.rulings: List[Ruling] = []
        self.rulings_by_card: Dict[str, List[Ruling]] = {}

        template_dir = Path(__file__).parent / "templates"
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.jinja_env.globals["site"] = self.config
        self.jinja_env.globals["with_base"] = self.with_base

    def with_base(self, path: str) -> str:
        """Prefix a site-relative path with the configured base path."""
        return with_base(path, self.config.base_path)

    def load_data(self) -> None:
        """Load cards and rulings, raising CardDataError if either is malformed."""
        log.info("Loading card data...")
        result = load_cards(self.cards_csv)
        if not result.ok:
            raise CardDataError(self.cards_csv, result.error)

        self.cards = {}
        for card in result.value:
            if card.id in self.cards:
                log.warning("Duplicate card id %s; keeping the first entry", card.id)
                continue
            self.cards[card.id] = card

        self.rulings = []
        if self.rulings_csv is None:
            log.debug("No rulings file configured")
        elif not self.rulings_csv.exists():
            log.info("No rulings found at %s", self.rulings_csv)
        else:
            ruling_result = load_rulings(self.rulings_csv)
            if not ruling_result.ok:
                raise CardDataError(self.rulings_csv, ruling_result.error)
            self.rulings = sorted(ruling_result.value, key=lambda r: r.ruling_id)

        self.rulings_by_card = group_rulings_by_card(self.rulings)

    def rulings_for(self, card: Card) -> List[Ruling]:
        """Get rulings that refer to a card by name or by id."""
        rulings = list(self.rulings_by_card.get(card.name, []))
        if card.id != card.name:
            rulings.extend(self.rulings_by_card.get(card.id, []))
        return sorted(rulings, key=lambda r: r.ruling_id)

    def find_card(self, reference: str) -> Optional[Card]:
        """Find a card by id or exact name."""
        if reference in self.cards:
            return self.cards[reference]
        for card in self.cards.values():
            if card.name == reference:
                return card
        return None

    def find_card_image(self, card_id: str) -> Optional[Path]:
        """Find the card's artwork in the images directory."""
        image_path = self.images_dir / f"{card_id}{IMAGE_EXTENSION}"
        if image_path.exists():
            return image_path
        return None

    def copy_card_image(self, card: Card) -> str:
        """Copy a card's artwork into the output and return its site path.

        Falls back to the placeholder path when the card has no artwork or the
        copy fails.
        """
        source_path = self.find_card_image(card.id)
        if source_path is None:
            log.warning("No image found for %s (ID: %s)", card.name, card.id)
            return get_placeholder_image_path(self.config.base_path)

        output_path = self.output_dir / "cards" / source_path.name
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_path, output_path)
        except OSError as e:
            log.error("Failed to copy image for card %s: %s", card.id, e)
            return get_placeholder_image_path(self.config.base_path)

        return get_image_path(card.id, self.config.base_path)

    def _write_page(self, relative_path: str, template_name: str, **context) -> Path:
        template = self.jinja_env.get_template(template_name)
        html_content = template.render(**context)

        page_file = self.output_dir / relative_path
        page_file.parent.mkdir(parents=True, exist_ok=True)
        with open(page_file, "w", encoding="utf-8") as f:
            f.write(html_content)
        return page_file

    def generate_card_page(self, card: Card) -> None:
        """Generate HTML page for a single card."""
        log.debug("Generating page for %s (ID: %s)", card.name, card.id)

        self._write_page(
            f"cards/{card.id}.html",
            "card.html",
            card=card,
            image_path=self.copy_card_image(card),
            placeholder_path=get_placeholder_image_path(self.config.base_path),
            rulings=self.rulings_for(card),
        )

    def generate_single_card(self, card_id: str) -> None:
        """Generate the page for one card only."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.load_data()

        if card_id not in self.cards:
            raise ValueError(f"Card with ID {card_id} not found in data")

        card = self.cards[card_id]
        self.generate_card_page(card)
        self.copy_static_files()

        log.info(
            "Generated page for %s at %s",
            card.name,
            self.output_dir / "cards" / f"{card_id}.html",
        )

    def generate_all(self) -> None:
        """Generate the complete static site."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.load_data()

        if not self.cards:
            log.info("No cards found in %s.", self.cards_csv)
            return

        log.info("Generating pages for %d cards...", len(self.cards))

        failed = 0
        for i, (card_id, card) in enumerate(self.cards.items(), 1):
            try:
                self.generate_card_page(card)
                if i % 10 == 0 or i == len(self.cards):
                    log.info("Generated %d/%d cards...", i, len(self.cards))
            except Exception as e:
                failed += 1
                log.error(
                    "Error generating page for %s (ID: %s): %s", card.name, card_id, e
                )

        self.generate_index_page()
        self.generate_rulings_page()
        self.generate_search_index()
        self.generate_sitemap()
        self.copy_static_files()

        if failed:
            log.warning("%d card pages failed to render", failed)
        log.info("Site generation complete!")
        log.info("Output directory: %s", self.output_dir)
        log.info("Main page: %s", self.output_dir / "index.html")

    def cards_by_kind(self) -> Dict[str, List[Card]]:
        """Group cards by kind, each group sorted by id."""
        grouped = defaultdict(list)
        for card in sorted(self.cards.values(), key=lambda c: c.id):
            grouped[card.kind or "-"].append(card)
        return dict(sorted(grouped.items()))

    def generate_index_page(self) -> None:
        """Generate the card listing page."""
        self._write_page(
            "index.html",
            "index.html",
            card_count=len(self.cards),
            ruling_count=len(self.rulings),
            cards_by_kind=self.cards_by_kind(),
        )

    def generate_rulings_page(self) -> None:
        """Generate the page listing every ruling."""
        entries = [
            {"ruling": ruling, "card": self.find_card(ruling.card)}
            for ruling in self.rulings
        ]
        self._write_page("rulings.html", "rulings.html", entries=entries)

    def generate_search_index(self) -> None:
        """Write the JSON index used by the search box."""
        cards = sorted(self.cards.values(), key=lambda c: c.id)
        save_json_data(
            generate_search_index(cards),
            self.output_dir / "search-index.json",
            f"search index with {len(cards)} cards",
        )

    def generate_sitemap(self) -> None:
        """Generate XML sitemap for all pages."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        def page_url(path: str) -> str:
            if self.config.base_url:
                return f"{self.config.base_url}/{path}"
            return path

        pages = [("index.html", "1.0"), ("rulings.html", "0.5")]
        pages.extend((f"cards/{card_id}.html", "0.8") for card_id in sorted(self.cards))

        sitemap_lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
        ]
        for path, priority in pages:
            sitemap_lines.extend(
                [
                    "  <url>",
                    f"    <loc>{escape(page_url(path))}</loc>",
                    f"    <priority>{priority}</priority>",
                    "  </url>",
                ]
            )
        sitemap_lines.append("</urlset>")

        sitemap_file = self.output_dir / "sitemap.xml"
        with open(sitemap_file, "w", encoding="utf-8") as f:
            f.write("\n".join(sitemap_lines))

    def copy_static_files(self) -> None:
        """Copy CSS, scripts and the placeholder artwork."""
        static_dir = Path(__file__).parent / "static"
        output_static_dir = self.output_dir / "static"

        if static_dir.exists():
            shutil.copytree(static_dir, output_static_dir, dirs_exist_ok=True)

        placeholder = self.images_dir / PLACEHOLDER_IMAGE
        if placeholder.exists():
            shutil.copy2(placeholder, self.output_dir / PLACEHOLDER_IMAGE)
        else:
            log.warning("Placeholder image not found at %s", placeholder)

"""Data models for cards, rulings and site configuration."""

import re
from dataclasses import dataclass
from typing import List

TAG_SEPARATORS = re.compile(r"[\s,、/]+")


@dataclass(frozen=True)
class Card:
    """Represents a single card as listed in the card CSV."""

    id: str
    name: str
    kind: str
    type: str
    effect: str
    tags: str

    @property
    def tag_list(self) -> List[str]:
        """Split the raw tag string into individual tags."""
        return [tag for tag in TAG_SEPARATORS.split(self.tags) if tag]

    @property
    def display_name(self) -> str:
        """Get a display name that includes the card id."""
        if self.id:
            return f"{self.name} ({self.id})"
        return self.name


@dataclass(frozen=True)
class Ruling:
    """Represents an official ruling about one card."""

    ruling_id: int
    card: str
    content: str


@dataclass
class SiteConfig:
    """Site-wide settings used when rendering pages."""

    title: str = "Card Wiki"
    description: str = "Card list and rulings"
    base_path: str = "/"
    base_url: str = ""
    language: str = "ja"

    def __post_init__(self):
        """Normalize base path and base URL."""
        self.base_path = normalize_base_path(self.base_path)
        self.base_url = self.base_url.rstrip("/")


def normalize_base_path(base_path: str) -> str:
    """Ensure a site base path starts and ends with a slash."""
    base_path = (base_path or "").strip()
    if not base_path.startswith("/"):
        base_path = "/" + base_path
    if not base_path.endswith("/"):
        base_path += "/"
    return base_path

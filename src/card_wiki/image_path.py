"""Site-relative paths for card artwork."""

from typing import Optional

from card_wiki.models import normalize_base_path

IMAGE_EXTENSION = ".avif"
PLACEHOLDER_IMAGE = f"placeholder{IMAGE_EXTENSION}"


def with_base(path: str, base: str = "/") -> str:
    """Prefix a site-relative path with the site base path."""
    return normalize_base_path(base) + path.lstrip("/")


def get_image_path(card_id: Optional[str] = None, base: str = "/") -> str:
    """Get the artwork path for a card, or the placeholder when no id is given.

    Args:
        card_id: Card identifier, e.g. "042"
        base: Site base path the site is served from

    Returns:
        Path such as "/cards/042.avif"

    """
    if not card_id:
        return get_placeholder_image_path(base)
    return with_base(f"cards/{card_id}{IMAGE_EXTENSION}", base)


def get_placeholder_image_path(base: str = "/") -> str:
    """Get the path of the placeholder artwork."""
    return with_base(PLACEHOLDER_IMAGE, base)

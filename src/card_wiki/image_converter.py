"""Convert source card artwork into the AVIF files the site links to.

Source images are named after the card id (e.g. ``042.png``) and are written
to the images directory as ``042.avif``, resized to the card display size.
"""

import argparse
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Set, Tuple

from PIL import Image

from card_wiki.image_path import IMAGE_EXTENSION

log = logging.getLogger(__name__)

SOURCE_EXTENSIONS = [".png", ".jpg", ".jpeg", ".webp"]


class ImageConverter:
    """Resizes card artwork and saves it as AVIF."""

    def __init__(
        self,
        source_dir: Path,
        images_dir: Path,
        size: Tuple[int, int] = (330, 459),
        quality: int = 70,
    ):
        """Initialize the ImageConverter with directories and output settings."""
        self.source_dir = Path(source_dir)
        self.images_dir = Path(images_dir)
        self.size = size
        self.quality = quality

        self.images_dir.mkdir(parents=True, exist_ok=True)

    def find_source_images(self) -> Dict[str, Path]:
        """Map card ids to their source image, preferring earlier extensions."""
        sources: Dict[str, Path] = {}
        for ext in SOURCE_EXTENSIONS:
            for image_file in sorted(self.source_dir.glob(f"*{ext}")):
                sources.setdefault(image_file.stem, image_file)
        return sources

    def get_existing_images(self) -> Set[str]:
        """Get the ids of cards that already have converted artwork."""
        return {path.stem for path in self.images_dir.glob(f"*{IMAGE_EXTENSION}")}

    def target_size(self, width: int, height: int) -> Tuple[int, int]:
        """Fit an image into the card size, keeping its aspect ratio."""
        target_width, target_height = self.size

        if width * target_height > height * target_width:
            # Wider than a card, scale by width
            return target_width, max(1, height * target_width // width)
        return max(1, width * target_height // height), target_height

    def convert_image(self, source_path: Path, card_id: str) -> bool:
        """Convert one source image into ``<card_id>.avif``."""
        try:
            with Image.open(source_path) as image:
                has_alpha = image.mode in ("RGBA", "LA") or "transparency" in image.info
                image = image.convert("RGBA" if has_alpha else "RGB")
                resized_image = image.resize(
                    self.target_size(*image.size), Image.Resampling.LANCZOS
                )

            filepath = self.images_dir / f"{card_id}{IMAGE_EXTENSION}"
            resized_image.save(filepath, "AVIF", quality=self.quality)
            return True

        except Exception as e:
            log.error("Failed to convert image for card %s: %s", card_id, e)
            return False

    def convert_missing_images(
        self, card_ids: Optional[Iterable[str]] = None, force: bool = False
    ) -> Tuple[int, int]:
        """Convert every source image that has no AVIF counterpart yet.

        Args:
            card_ids: Only convert these cards (default: every source image)
            force: Reconvert images that already exist

        Returns:
            Tuple of (successful, failed) conversion counts

        """
        sources = self.find_source_images()
        wanted = set(card_ids) if card_ids is not None else set(sources)

        for card_id in sorted(wanted - set(sources)):
            log.warning("No source image found for card %s", card_id)

        pending = wanted & set(sources)
        if not force:
            existing = self.get_existing_images()
            log.info(
                "Found %d existing images, %d missing",
                len(existing & pending),
                len(pending - existing),
            )
            pending -= existing

        if not pending:
            log.info("All images already converted!")
            return 0, 0

        success_count = 0
        failed_count = 0
        for i, card_id in enumerate(sorted(pending), 1):
            if self.convert_image(sources[card_id], card_id):
                success_count += 1
            else:
                failed_count += 1

            if i % 25 == 0 or i == len(pending):
                log.info(
                    "Progress: %d/%d processed, %d successful, %d failed",
                    i,
                    len(pending),
                    success_count,
                    failed_count,
                )

        log.info("Image conversion complete!")
        log.info("Images stored in: %s", self.images_dir)
        return success_count, failed_count


def main() -> None:
    """Main entry point for the image converter."""
    parser = argparse.ArgumentParser(
        description="Convert card artwork to AVIF for the card wiki"
    )
    parser.add_argument(
        "--source-dir",
        type=Path,
        default=Path("artwork"),
        help="Directory containing source artwork named by card id (default: artwork)",
    )
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=Path("images"),
        help="Directory to store converted images (default: images)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Reconvert all images, even if they already exist",
    )
    parser.add_argument(
        "--card-ids",
        nargs="+",
        metavar="ID",
        help="Convert specific cards by id (e.g., --card-ids 001 042)",
    )

    args = parser.parse_args()

    if not args.source_dir.exists():
        log.error("Source directory '%s' does not exist", args.source_dir)
        return

    converter = ImageConverter(source_dir=args.source_dir, images_dir=args.images_dir)
    converter.convert_missing_images(args.card_ids, force=args.force)


def run() -> None:
    """Set up logging and run main."""
    from card_wiki.logging_utils import setup_cli_logging
    setup_cli_logging(verbose=True)
    main()

"""Console logging for the card-wiki build tools.

Every entry point (``card-wiki``, ``card-wiki-search-index`` and
``card-wiki-images``) calls ``setup_cli_logging`` once before doing any work.
"""

import logging
import sys
from typing import Iterable, Optional

BUILD_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CLI_FORMAT = "%(levelname)s: %(message)s"

# Libraries whose DEBUG output drowns the build log
NOISY_LOGGERS = ("PIL",)


def setup_logging(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    noisy_loggers: Iterable[str] = NOISY_LOGGERS,
) -> logging.Handler:
    """Send log records at ``level`` and above to stdout.

    Args:
        level: Lowest level printed to the console
        format_string: Record format (default: timestamped ``BUILD_FORMAT``)
        noisy_loggers: Loggers capped at INFO regardless of ``level``

    Returns:
        The stdout handler that was attached to the root logger

    """
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(logging.Formatter(format_string or BUILD_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(stdout_handler)

    for name in noisy_loggers:
        logging.getLogger(name).setLevel(logging.INFO)

    return stdout_handler


def setup_cli_logging(verbose: bool = False) -> logging.Handler:
    """Log build progress as short ``LEVEL: message`` lines.

    Args:
        verbose: Also print DEBUG records, e.g. one line per rendered card

    """
    level = logging.DEBUG if verbose else logging.INFO
    return setup_logging(level=level, format_string=CLI_FORMAT)

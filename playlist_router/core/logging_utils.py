import logging
from typing import Optional

logger = logging.getLogger("playlist_router")


def log_section(title: str) -> None:
    """Header line for one aggregation or routing run."""
    logger.info("")
    logger.info("=== %s ===", title)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    logger.info("→ %s", message)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    logger.warning("⚠️ %s", message)


def log_error(message: str, error: Optional[BaseException] = None) -> None:
    """
    Log a failure. When `error` is given it is appended to the message and its
    traceback goes to the DEBUG level only.
    """
    if error is None:
        logger.error("❌ %s", message)
        return
    logger.error("❌ %s: %s", message, error)
    logger.debug("Traceback for: %s", message, exc_info=error)


def log_debug(message: str) -> None:
    logger.debug("%s", message)


def log_progress(current: int, total: int, prefix: str = "") -> None:
    """
    One progress line for Spotify paging: playlist pages (with `total`
    estimated from the track count of the listing) and artist batches.

      log_progress(2, 4, prefix="Artist batches") -> "Artist batches 2/4 (50.0%)"
    """
    total = max(total, 1)
    percent = min(current / total, 1.0) * 100
    label = f"{prefix} " if prefix else ""
    logger.info("%s%d/%d (%.1f%%)", label, current, total, percent)

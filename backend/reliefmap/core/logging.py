# backend/reliefmap/core/logging.py
import logging

from reliefmap.core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once at startup."""
    level_no = getattr(logging, (level or get_settings().LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(level=level_no, format=LOG_FORMAT, force=True)
    # PIL and exifread are chatty at DEBUG on odd files
    for noisy in ("PIL", "exifread"):
        logging.getLogger(noisy).setLevel(max(logging.INFO, level_no))

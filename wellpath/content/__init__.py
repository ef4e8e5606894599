"""WellPath content loading."""

from .loader import (
    DATA_DIR,
    DEFAULT_TOPIC_REVIEWS,
    read_structured_file,
    load_catalog,
    build_standard_catalog,
    load_snapshot,
    load_topic_reviews,
    run_integrity_checks,
)

__all__ = [
    "DATA_DIR",
    "DEFAULT_TOPIC_REVIEWS",
    "read_structured_file",
    "load_catalog",
    "build_standard_catalog",
    "load_snapshot",
    "load_topic_reviews",
    "run_integrity_checks",
]

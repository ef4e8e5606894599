"""
WellPath - Progression engine for a guided wellness journey.

Decides which daily lessons, chapters and quizzes a user may access from a
content catalog and a progress snapshot, and summarises their progress.
"""

__version__ = "0.1.0"

from wellpath.config import Settings
from wellpath.schemas import ContentCatalog, ProgressSnapshot
from wellpath.engine import Navigator

__all__ = [
    "__version__",
    "Settings",
    "ContentCatalog",
    "ProgressSnapshot",
    "Navigator",
]

"""
ResoSorter - find, validate and rank display resolutions in page text.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor.models import NO_LINK, RawCandidate, ResolutionRecord, TextFragment
from .pipeline import ResolutionPipeline, ScanResult, scan_fragments
from .ranking import Ranker, SortKey

__all__ = [
    "__version__",
    "Config",
    "NO_LINK",
    "RawCandidate",
    "Ranker",
    "ResolutionPipeline",
    "ResolutionRecord",
    "ScanResult",
    "SortKey",
    "TextFragment",
    "scan_fragments",
]

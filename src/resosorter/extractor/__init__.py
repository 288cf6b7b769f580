"""
ResoSorter extraction module.

Finds resolution tokens in text fragments and pairs them with the link of the
enclosing anchor:

- Matcher: one compiled pattern for explicit ``WxH`` and shorthand ``Np`` tokens
- Candidate extraction: one RawCandidate per match, ``No link`` when unanchored
- Protocols for the host-side fragment source and presenter
"""

from .candidates import extract_candidates, normalize_link
from .matcher import RESOLUTION_RE, find_resolutions
from .models import (
    MIN_AREA,
    MIN_DIMENSION,
    NO_LINK,
    RawCandidate,
    ResolutionRecord,
    TextFragment,
    UniqueCandidate,
)
from .protocols import FragmentSource, RecordPresenter

__all__ = [
    "MIN_AREA",
    "MIN_DIMENSION",
    "NO_LINK",
    "RESOLUTION_RE",
    "FragmentSource",
    "RawCandidate",
    "RecordPresenter",
    "ResolutionRecord",
    "TextFragment",
    "UniqueCandidate",
    "extract_candidates",
    "find_resolutions",
    "normalize_link",
]

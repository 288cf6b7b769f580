"""
Candidate deduplication for ResoSorter.

Raw candidates are keyed by their lower-cased token (thousands separators
folded by default); the first occurrence wins unless a later one supplies the
link the first one lacked.
"""

from .canonical import CandidateCanonicalizer, deduplicate

__all__ = [
    "CandidateCanonicalizer",
    "deduplicate",
]

"""
Candidate Canonicalization for Exact Deduplication.

Collapses raw candidates that spell the same resolution:
- Tokens are compared case-insensitively ("1920X1080" == "1920x1080")
- Thousands separators and the multiplication sign are folded by default
  ("1,920x1,080" == "1920×1080" == "1920x1080")
- The first candidate per key wins, with a single upgrade from a ``No link``
  candidate to the first link-bearing one seen later

The merge is deterministic for a given input order and idempotent: feeding the
output back in returns it unchanged.
"""

import re
from typing import Dict, Iterable, List

import structlog

from ..extractor.models import RawCandidate, UniqueCandidate

logger = structlog.get_logger(__name__)

_SEPARATORS = re.compile(r"[.,]")


class CandidateCanonicalizer:
    """
    Merges raw candidates into one unique candidate per canonical key.
    """

    def __init__(self, fold_separators: bool = True) -> None:
        self.fold_separators = fold_separators

        # Track merge statistics
        self._seen_count = 0
        self._upgraded_count = 0
        self._discarded_count = 0
        self._kept_count = 0

    def canonical_key(self, token: str) -> str:
        """
        Build the deduplication key for a token.

        Args:
            token: Matched token, original separators and case

        Returns:
            Lower-cased key; when folding, separators removed and "×" spelled "x"
        """
        key = token.lower()
        if self.fold_separators:
            key = _SEPARATORS.sub("", key).replace("×", "x")
        return key

    def deduplicate(self, candidates: Iterable[RawCandidate]) -> List[UniqueCandidate]:
        """
        Reduce candidates to one per canonical key.

        A kept candidate is replaced only when it carries no link and the new
        one does. Once a key holds a link-bearing candidate, later ones are
        discarded.

        Args:
            candidates: Raw candidates in traversal order

        Returns:
            Unique candidates in first-seen key order
        """
        kept: Dict[str, UniqueCandidate] = {}

        for candidate in candidates:
            self._seen_count += 1
            key = self.canonical_key(candidate.token)
            existing = kept.get(key)

            if existing is None:
                kept[key] = candidate
            elif not existing.has_link and candidate.has_link:
                # Replacing a value keeps the key's insertion position.
                kept[key] = candidate
                self._upgraded_count += 1
            else:
                self._discarded_count += 1

        self._kept_count += len(kept)
        logger.debug(
            "Deduplicated candidates",
            unique=len(kept),
            upgraded=self._upgraded_count,
            discarded=self._discarded_count,
        )
        return list(kept.values())

    def get_stats(self) -> dict:
        """Get merge statistics accumulated over all calls."""
        return {
            "seen_count": self._seen_count,
            "kept_count": self._kept_count,
            "upgraded_count": self._upgraded_count,
            "discarded_count": self._discarded_count,
            "fold_separators": self.fold_separators,
        }


def deduplicate(candidates: Iterable[RawCandidate], *, fold_separators: bool = True) -> List[UniqueCandidate]:
    """
    Convenience function for candidate deduplication.

    Args:
        candidates: Raw candidates in traversal order
        fold_separators: Ignore '.' and ',' when comparing tokens

    Returns:
        Unique candidates
    """
    return CandidateCanonicalizer(fold_separators=fold_separators).deduplicate(candidates)

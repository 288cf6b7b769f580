"""
Converts unique candidates into validated resolution records.

Two notations are understood:

- explicit ``WxH``: both sides parsed as integers
- shorthand ``Np``: height ``N``, width derived from a fixed 16:9 ratio

Separators (``.`` and ``,``) are stripped before parsing. Candidates that do not
decompose into two integers, or whose numbers fall outside the plausibility
window, are dropped. Dropping is a filtering decision: it is logged at debug
level and counted, never raised.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

import structlog

from ..extractor.models import MIN_AREA, MIN_DIMENSION, RawCandidate, ResolutionRecord
from ..observability.metrics import METRICS

logger = structlog.get_logger(__name__)

_SEPARATORS = re.compile(r"[.,]")
_EXPLICIT_DELIMITER = re.compile(r"[x×]", re.IGNORECASE)

# Shorthand notation assumes 16:9.
ASPECT_WIDTH = 16
ASPECT_HEIGHT = 9


class RejectionReason(Enum):
    """Why a candidate produced no record."""

    PARSE = "parse"
    BOUNDS = "bounds"


def _to_int(value: str) -> Optional[int]:
    # Plain ASCII digits only: int() and isdigit() also accept signs, underscores or other scripts
    if not value or not (value.isascii() and value.isdigit()):
        return None
    try:
        return int(value)
    except ValueError:
        return None


def shorthand_width(height: int) -> int:
    """Width implied by a shorthand height, rounded half up."""
    return (height * ASPECT_WIDTH * 2 + ASPECT_HEIGHT) // (ASPECT_HEIGHT * 2)


def parse_resolution(token: str) -> Optional[Tuple[int, int]]:
    """
    Decompose a token into ``(width, height)``.

    Args:
        token: Token as matched, separators and case preserved

    Returns:
        Width and height, or None when the token has no recognizable shape
    """
    cleaned = _SEPARATORS.sub("", token)

    if _EXPLICIT_DELIMITER.search(cleaned):
        parts = _EXPLICIT_DELIMITER.split(cleaned)
        if len(parts) != 2:
            return None
        width, height = _to_int(parts[0]), _to_int(parts[1])
        if width is None or height is None:
            return None
        return width, height

    if cleaned[-1:] in ("p", "P"):
        height = _to_int(cleaned[:-1])
        if height is None:
            return None
        return shorthand_width(height), height

    return None


def within_bounds(width: int, height: int) -> bool:
    return width > MIN_DIMENSION and height > MIN_DIMENSION and width * height > MIN_AREA


class ResolutionValidator:
    """
    Maps unique candidates to zero or one record each.

    Rejection counts are kept per reason for diagnostics.
    """

    def __init__(self, metrics_enabled: bool = True) -> None:
        self.metrics_enabled = metrics_enabled
        self.logger = logger.bind(component="ResolutionValidator")
        self._rejections: Dict[RejectionReason, int] = {reason: 0 for reason in RejectionReason}
        self._accepted = 0

    def validate(self, candidate: RawCandidate) -> Optional[ResolutionRecord]:
        """
        Validate a single candidate.

        Args:
            candidate: A unique candidate

        Returns:
            The record, or None if the candidate was rejected
        """
        parsed = parse_resolution(candidate.token)
        if parsed is None:
            self._reject(candidate, RejectionReason.PARSE)
            return None

        width, height = parsed
        if not within_bounds(width, height):
            self._reject(candidate, RejectionReason.BOUNDS, width=width, height=height)
            return None

        self._accepted += 1
        if self.metrics_enabled:
            METRICS["records_produced"].inc()
        return ResolutionRecord(
            original=candidate.token,
            width=width,
            height=height,
            area=width * height,
            link=candidate.link,
        )

    def validate_all(self, candidates: Iterable[RawCandidate]) -> List[ResolutionRecord]:
        records = []
        for candidate in candidates:
            record = self.validate(candidate)
            if record is not None:
                records.append(record)
        return records

    def _reject(self, candidate: RawCandidate, reason: RejectionReason, **numbers: int) -> None:
        self._rejections[reason] += 1
        if self.metrics_enabled:
            METRICS["candidates_rejected"].labels(reason=reason.value).inc()
        self.logger.debug("Candidate rejected", token=candidate.token, reason=reason.value, **numbers)

    def get_stats(self) -> Dict[str, int]:
        stats = {f"rejected_{reason.value}": count for reason, count in self._rejections.items()}
        stats["accepted"] = self._accepted
        return stats


def validate_candidate(candidate: RawCandidate) -> Optional[ResolutionRecord]:
    """Validate one candidate without keeping statistics."""
    return ResolutionValidator(metrics_enabled=False).validate(candidate)

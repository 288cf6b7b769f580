"""
Pairs matched resolution tokens with the link of the fragment they came from.
"""

from __future__ import annotations

from typing import Iterable, Iterator

import structlog

from ..observability.metrics import METRICS
from .matcher import find_resolutions
from .models import NO_LINK, RawCandidate, TextFragment

logger = structlog.get_logger(__name__)


def normalize_link(link: str | None) -> str:
    """Map a missing or blank href to the ``No link`` sentinel."""
    if link is None or not link.strip():
        return NO_LINK
    return link


def extract_candidates(fragments: Iterable[TextFragment]) -> Iterator[RawCandidate]:
    """
    Run the matcher over each fragment and emit one candidate per match.

    Order follows fragment order, then match order within a fragment.

    Args:
        fragments: Host-supplied text fragments

    Yields:
        RawCandidate per matched token
    """
    for fragment in fragments:
        link = normalize_link(fragment.associated_link)
        for token in find_resolutions(fragment.text):
            METRICS["tokens_matched"].inc()
            yield RawCandidate(token=token, link=link)

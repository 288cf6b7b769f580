"""
Resolution token matcher.

Recognizes two notations in one pass:

- explicit ``WIDTHxHEIGHT`` (``1920x1080``, ``4,096x2,160``, ``3840×2160``)
- shorthand ``HEIGHTp`` (``1080p``, ``4,320p``)

Quantities are either grouped thousands separated by ``.``/``,`` or a plain run
of digits. The explicit alternative is listed first so a span that could be read
both ways yields a single explicit match. No numeric plausibility checks happen
here; see :mod:`resosorter.parsing.validator`.
"""

from __future__ import annotations

import re
from typing import Iterator

_QUANTITY = r"(?:\d{1,3}(?:[.,]\d{3})+|\d+)"

RESOLUTION_RE = re.compile(
    rf"\b(?P<explicit>{_QUANTITY}[x×]{_QUANTITY})\b|\b(?P<shorthand>{_QUANTITY}p)\b",
    re.IGNORECASE | re.ASCII,
)


def find_resolutions(text: str) -> Iterator[str]:
    """
    Yield every resolution-shaped token in ``text``.

    Each call re-scans from the start, so the result can be consumed again by
    calling the function again.

    Args:
        text: Arbitrary text content

    Yields:
        The exact matched substrings, separators and case preserved
    """
    if not text:
        return
    for match in RESOLUTION_RE.finditer(text):
        yield match.group(0)

"""
Data models for resolution extraction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

NO_LINK = "No link"

# Plausibility window for a record; anything at or below these is noise.
MIN_DIMENSION = 10
MIN_AREA = 1000


@dataclass(slots=True, frozen=True)
class TextFragment:
    """One scanned text node handed over by the host."""

    text: str
    associated_link: str | None = None


@dataclass(slots=True, frozen=True)
class RawCandidate:
    """A matched token together with the link of its fragment."""

    token: str
    link: str = NO_LINK

    @property
    def has_link(self) -> bool:
        return self.link != NO_LINK


# A RawCandidate that won the merge for its canonical key.
UniqueCandidate = RawCandidate


@dataclass(slots=True, frozen=True)
class ResolutionRecord:
    """A validated resolution ready for display and sorting."""

    original: str
    width: int
    height: int
    area: int
    link: str = NO_LINK

    def __post_init__(self) -> None:
        """Validate the record."""
        if self.area != self.width * self.height:
            raise ValueError("Area must equal width * height")
        if self.width <= MIN_DIMENSION or self.height <= MIN_DIMENSION:
            raise ValueError(f"Width and height must both exceed {MIN_DIMENSION}")
        if self.area <= MIN_AREA:
            raise ValueError(f"Area must exceed {MIN_AREA}")

    @property
    def has_link(self) -> bool:
        return self.link != NO_LINK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "width": self.width,
            "height": self.height,
            "area": self.area,
            "link": self.link,
        }

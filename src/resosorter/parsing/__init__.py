"""Numeric parsing and plausibility validation of resolution tokens."""

from .validator import (
    RejectionReason,
    ResolutionValidator,
    parse_resolution,
    shorthand_width,
    validate_candidate,
    within_bounds,
)

__all__ = [
    "RejectionReason",
    "ResolutionValidator",
    "parse_resolution",
    "shorthand_width",
    "validate_candidate",
    "within_bounds",
]

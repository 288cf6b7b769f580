"""
Sortable ranking of validated resolution records.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable, Optional, Tuple

import structlog

from ..extractor.models import ResolutionRecord

logger = structlog.get_logger(__name__)


class SortKey(str, Enum):
    ORIGINAL = "original"
    WIDTH = "width"
    HEIGHT = "height"
    AREA = "area"
    LINK = "link"

    @property
    def is_numeric(self) -> bool:
        return self in (SortKey.WIDTH, SortKey.HEIGHT, SortKey.AREA)


def _coerce_key(key: SortKey | str) -> SortKey:
    try:
        return SortKey(key)
    except ValueError:
        valid = ", ".join(k.value for k in SortKey)
        raise ValueError(f"Invalid sort key '{key}'. Available keys: {valid}") from None


def _sort_value(key: SortKey) -> Callable[[ResolutionRecord], Any]:
    if key.is_numeric:
        return lambda record: getattr(record, key.value)
    return lambda record: str(getattr(record, key.value)).lower()


class Ranker:
    """
    Owns the ordered record collection and the state of the sort control.

    The initial order (area descending unless configured otherwise) does not
    count as a request: the first ``sort_by`` on any key sorts it descending.
    Requesting the same key again flips the direction; a different key starts
    over at descending. There is no secondary key, so the relative order of
    equal values is unspecified.
    """

    def __init__(
        self,
        records: Iterable[ResolutionRecord],
        *,
        initial_key: SortKey | str = SortKey.AREA,
        initial_ascending: bool = False,
    ) -> None:
        self._records: list[ResolutionRecord] = list(records)
        self._records.sort(key=_sort_value(_coerce_key(initial_key)), reverse=not initial_ascending)
        self._current_key: Optional[SortKey] = None
        self._ascending = initial_ascending
        self.logger = logger.bind(component="Ranker")

    @property
    def records(self) -> Tuple[ResolutionRecord, ...]:
        """Read-only snapshot of the current order."""
        return tuple(self._records)

    @property
    def current_key(self) -> Optional[SortKey]:
        return self._current_key

    @property
    def ascending(self) -> bool:
        return self._ascending

    @property
    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)

    def sort_by(self, key: SortKey | str, ascending: Optional[bool] = None) -> Tuple[ResolutionRecord, ...]:
        """
        Reorder the records by ``key``.

        Args:
            key: One of original, width, height, area, link
            ascending: Force a direction; when omitted the control toggles

        Returns:
            The records in their new order

        Raises:
            ValueError: If ``key`` is not a sortable column
        """
        sort_key = _coerce_key(key)

        if ascending is None:
            ascending = not self._ascending if sort_key is self._current_key else False

        self._records.sort(key=_sort_value(sort_key), reverse=not ascending)
        self._current_key = sort_key
        self._ascending = ascending

        self.logger.debug("Records sorted", key=sort_key.value, ascending=ascending, count=len(self._records))
        return self.records

"""Record ranking with a direction-toggling sort control."""

from .ranker import Ranker, SortKey

__all__ = ["Ranker", "SortKey"]

"""
Protocols for the collaborators around the extraction core.
"""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, runtime_checkable

from .models import ResolutionRecord, TextFragment


@runtime_checkable
class FragmentSource(Protocol):
    """Turns a rendered page into scannable text fragments."""

    name: str

    def fragments(self, html: str, *, base_url: str | None = None) -> Iterable[TextFragment]:
        """Enumerate text fragments of a page.

        Args:
            html: HTML content of the page
            base_url: Optional URL used to resolve relative hrefs

        Returns:
            Fragments in document order
        """
        ...


@runtime_checkable
class RecordPresenter(Protocol):
    """Renders an ordered record sequence."""

    def render(self, records: Sequence[ResolutionRecord]) -> None:
        ...

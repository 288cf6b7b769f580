"""
BeautifulSoup-based fragment source.

Mirrors what a browser host does: every element contributes its full text
content, paired with the href of the nearest enclosing anchor (the element
itself when it is an anchor). Nested elements therefore repeat text; the
canonicalizer downstream collapses the repeats and keeps the linked ones.
"""

from __future__ import annotations

from typing import Iterator, List, Optional
from urllib.parse import urljoin

import structlog
from bs4 import BeautifulSoup, Tag

from ..extractor.models import TextFragment
from ..extractor.protocols import FragmentSource

logger = structlog.get_logger(__name__)


class SoupFragmentSource(FragmentSource):
    """Fragment source walking a BeautifulSoup tree."""

    name = "soup"

    def __init__(self, parser: str = "html.parser", skip_tags: Optional[List[str]] = None) -> None:
        self.parser = parser
        self.skip_tags = list(skip_tags) if skip_tags is not None else ["script", "style", "noscript", "template"]

    def fragments(self, html: str, *, base_url: str | None = None) -> Iterator[TextFragment]:
        """Enumerate one fragment per element in document order.

        Args:
            html: HTML content of the page
            base_url: Optional URL used to resolve relative hrefs

        Yields:
            TextFragment per element with non-blank text
        """
        if not html or not html.strip():
            logger.debug("Empty HTML, no fragments")
            return

        soup = BeautifulSoup(html, self.parser)

        for tag_name in self.skip_tags:
            for tag in soup.find_all(tag_name):
                tag.decompose()

        count = 0
        for element in soup.find_all(True):
            text = element.get_text()
            if not text.strip():
                continue
            count += 1
            yield TextFragment(text=text, associated_link=self._associated_link(element, base_url))

        logger.debug("Enumerated fragments", count=count, parser=self.parser)

    def _associated_link(self, element: Tag, base_url: str | None) -> str | None:
        anchor = element if element.name == "a" else element.find_parent("a")
        if anchor is None:
            return None

        href = anchor.get("href")
        if isinstance(href, list):
            href = " ".join(href)
        if not href or not href.strip():
            return None

        href = href.strip()
        if base_url:
            # Browsers expose anchor.href already resolved against the page URL
            href = urljoin(base_url, href)
        return href

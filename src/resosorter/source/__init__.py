"""Host-side fragment sources that turn pages into scannable text fragments."""

from .fetch import PageFetchError, fetch_html
from .soup_source import SoupFragmentSource

__all__ = ["PageFetchError", "SoupFragmentSource", "fetch_html"]

"""
Fetches a page over HTTP so it can be scanned.
"""

from __future__ import annotations

import httpx
import structlog
from httpx import HTTPError, HTTPStatusError

from ..config.config import FetchConfig

logger = structlog.get_logger(__name__)


class PageFetchError(Exception):
    """Raised when a page cannot be retrieved."""


def fetch_html(url: str, config: FetchConfig | None = None, client: httpx.Client | None = None) -> str:
    """
    Retrieve the HTML of ``url``.

    Args:
        url: Page to fetch
        config: Timeout and User-Agent settings
        client: An optional httpx.Client; a short-lived one is created if omitted

    Returns:
        Decoded response body

    Raises:
        PageFetchError: On transport errors or non-2xx responses
    """
    config = config or FetchConfig()
    owns_client = client is None
    if client is None:
        client = httpx.Client(
            follow_redirects=config.follow_redirects,
            timeout=config.timeout,
            headers={"User-Agent": config.user_agent},
        )

    try:
        response = client.get(url)
        response.raise_for_status()
        logger.info("Fetched page", url=str(response.url), status=response.status_code, size=len(response.content))
        return response.text
    except HTTPStatusError as e:
        logger.warning("Page fetch returned error status", url=url, status=e.response.status_code)
        raise PageFetchError(f"{url} returned HTTP {e.response.status_code}") from e
    except HTTPError as e:
        logger.warning("Page fetch failed", url=url, error=str(e))
        raise PageFetchError(f"Failed to fetch {url}: {e}") from e
    finally:
        if owns_client:
            client.close()

"""Fetch a page over HTTP into a document-backed tab."""

import logging
from typing import Optional

import aiohttp

from .config import config
from .tabs import StaticTab

logger = logging.getLogger(__name__)


async def fetch_static_tab(url: str, timeout_s: Optional[int] = None) -> StaticTab:
    """
    Download ``url`` and wrap it as a StaticTab located at the final (post-redirect) URL.

    Raises:
        aiohttp.ClientError: connection or HTTP status failure
        asyncio.TimeoutError: no response within ``timeout_s``
    """
    headers = {"Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"}
    if config.user_agent:
        headers["User-Agent"] = config.user_agent
    timeout = aiohttp.ClientTimeout(total=timeout_s or config.fetch_timeout_s)
    async with aiohttp.ClientSession(headers=headers) as session:
        async with session.get(url, timeout=timeout) as resp:
            resp.raise_for_status()
            # a mislabelled charset must not abort the scrape
            html = await resp.text(errors="replace")
            final_url = str(resp.url)
    logger.info(f"Fetched {len(html)} chars from {final_url}")
    return StaticTab(html, final_url)

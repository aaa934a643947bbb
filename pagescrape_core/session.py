"""
Scrape session: what a user drives interactively.

Validates the selector, runs the delivery strategy against a tab, keeps the
last result in the session cache, reports progress on the status line, and
exports the cached result as CSV.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from .browser_setup import BrowserSession
from .config import Config, config as default_config
from .data_export import export_csv
from .delivery import DeliveryStrategy, is_restricted_url
from .errors import ErrorKind, NoDataError, RestrictedPageError, format_user_friendly_error
from .fetch import fetch_static_tab
from .models import DeliveryOutcome, ExtractionRequest
from .session_cache import SessionCache
from .status import ERROR, SUCCESS, StatusReporter
from .tabs import Tab

logger = logging.getLogger(__name__)


class ScrapeSession:
    def __init__(
        self,
        cfg: Optional[Config] = None,
        status: Optional[StatusReporter] = None,
        strategy: Optional[DeliveryStrategy] = None,
    ):
        self.config = cfg or default_config
        self.status = status or StatusReporter(self.config)
        self.strategy = strategy or DeliveryStrategy(self.config, self.status)
        self.cache = SessionCache()

    async def scrape(self, tab: Tab, selector: str, attribute: str = "textContent") -> DeliveryOutcome:
        selector = (selector or "").strip()
        if not selector:
            self.status.show("Please enter a CSS selector", ERROR)
            return DeliveryOutcome.failure(ErrorKind.EMPTY_SELECTOR, "Please enter a CSS selector")

        self.status.show("Starting scrape...", SUCCESS)
        outcome = await self.strategy.deliver(tab, ExtractionRequest(selector, attribute))

        if not outcome.ok:
            logger.error(f"Scraping error: {outcome.error.value if outcome.error else 'unknown'}: {outcome.message}")
            self.status.show(f"❌ Error: {outcome.message}", ERROR)
            return outcome

        self.cache.store(outcome.result)
        if outcome.result:
            self.status.show(f"✅ Found {len(outcome.result)} elements", SUCCESS)
        else:
            self.status.show("❌ No elements found with that selector", ERROR)
        return outcome

    async def scrape_url(
        self,
        url: str,
        selector: str,
        attribute: str = "textContent",
        static: bool = False,
        headless: Optional[bool] = None,
    ) -> DeliveryOutcome:
        """Open ``url`` (browser page, or a plain HTTP fetch when ``static``) and scrape it."""
        if is_restricted_url(url):
            message = str(RestrictedPageError())
            self.status.show(f"❌ Error: {message}", ERROR)
            return DeliveryOutcome.failure(ErrorKind.RESTRICTED_PAGE, message)
        if static:
            tab = await fetch_static_tab(url)
            return await self.scrape(tab, selector, attribute)
        async with BrowserSession(self.config, headless=headless) as browser:
            tab = await browser.open_tab(url)
            return await self.scrape(tab, selector, attribute)

    def results(self) -> List[str]:
        return self.cache.get() or []

    def preview(self, limit: Optional[int] = None, width: Optional[int] = None) -> List[str]:
        """First ``limit`` items as numbered lines cut at ``width`` chars, plus a remainder note."""
        limit = self.config.preview_limit if limit is None else limit
        width = self.config.preview_chars if width is None else width
        items = self.results()
        lines = []
        for index, item in enumerate(items[:limit], start=1):
            text = item[:width] + ("..." if len(item) > width else "")
            lines.append(f"{index}: {text}")
        if len(items) > limit:
            lines.append(f"... and {len(items) - limit} more items")
        return lines

    def export(self, directory: Union[str, Path, None] = None, filename: Optional[str] = None) -> Path:
        items = self.results()
        if not items:
            self.status.show("No data to export", ERROR)
            raise NoDataError()
        path = export_csv(items, directory if directory is not None else self.config.export_dir, filename)
        self.status.show("CSV exported successfully!", SUCCESS)
        return path


def describe_failure(outcome: DeliveryOutcome) -> dict:
    """User-facing explanation for a failed outcome."""
    kind = outcome.error or ErrorKind.ALL_TIERS_EXHAUSTED
    return format_user_friendly_error(kind, outcome.message)

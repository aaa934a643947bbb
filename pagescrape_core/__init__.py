"""
pagescrape_core package: CSS-selector scraping of browser tabs

Usage:
    from pagescrape_core import ScrapeSession

    session = ScrapeSession()
    outcome = await session.scrape_url("https://example.com", "a[href]", "href")
    session.export("./out")
"""
from .config import Config, config
from .delivery import DeliveryStrategy, is_restricted_url
from .errors import ErrorKind, NoDataError, ScrapeError
from .extractor import extract, parse_document
from .models import DeliveryOutcome, ExtractionRequest
from .session import ScrapeSession
from .session_cache import SessionCache
from .tabs import PlaywrightTab, StaticTab, Tab

__all__ = [
    "Config",
    "config",
    "DeliveryStrategy",
    "is_restricted_url",
    "ErrorKind",
    "NoDataError",
    "ScrapeError",
    "extract",
    "parse_document",
    "DeliveryOutcome",
    "ExtractionRequest",
    "ScrapeSession",
    "SessionCache",
    "PlaywrightTab",
    "StaticTab",
    "Tab",
]

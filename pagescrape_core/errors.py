"""
Error taxonomy for scraping.

Tabs raise the tier-level errors (timeout, transport, injection, blocked
execution); the delivery strategy catches them and turns them into a
``DeliveryOutcome``. Only terminal kinds ever reach the user.
"""

import logging
from enum import Enum
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    EMPTY_SELECTOR = "EmptySelector"
    INVALID_SELECTOR = "InvalidSelector"
    RESTRICTED_PAGE = "RestrictedPage"
    TIER_TIMEOUT = "TierTimeout"
    TRANSPORT_ERROR = "TransportError"
    UNEXPECTED_REPLY = "UnexpectedReply"
    INJECTION_FAILURE = "InjectionFailure"
    EXECUTION_BLOCKED = "ExecutionBlocked"
    ALL_TIERS_EXHAUSTED = "AllTiersExhausted"


class ScrapeError(Exception):
    """Base error; ``kind`` says which branch of the taxonomy it is."""

    kind: ErrorKind = ErrorKind.ALL_TIERS_EXHAUSTED

    def __init__(self, message: str = "", kind: Optional[ErrorKind] = None):
        super().__init__(message or self.__class__.__doc__ or "")
        if kind is not None:
            self.kind = kind


class EmptySelectorError(ScrapeError):
    """Please enter a CSS selector"""
    kind = ErrorKind.EMPTY_SELECTOR


class InvalidSelectorError(ScrapeError):
    """The CSS selector is not valid"""
    kind = ErrorKind.INVALID_SELECTOR


class RestrictedPageError(ScrapeError):
    """Cannot scrape this type of page. Please navigate to a regular website."""
    kind = ErrorKind.RESTRICTED_PAGE


class TierTimeoutError(ScrapeError):
    """Message timeout"""
    kind = ErrorKind.TIER_TIMEOUT


class TransportError(ScrapeError):
    """Could not establish connection. Receiving end does not exist."""
    kind = ErrorKind.TRANSPORT_ERROR


class UnexpectedReplyError(ScrapeError):
    """Agent replied with something that is not an extraction result"""
    kind = ErrorKind.UNEXPECTED_REPLY


class InjectionFailureError(ScrapeError):
    """Agent script injection failed"""
    kind = ErrorKind.INJECTION_FAILURE


class ExecutionBlockedError(ScrapeError):
    """Direct execution was blocked by the page"""
    kind = ErrorKind.EXECUTION_BLOCKED


class AllTiersExhaustedError(ScrapeError):
    """All scraping methods failed. The page may be blocking scripts or have security restrictions."""
    kind = ErrorKind.ALL_TIERS_EXHAUSTED


class NoDataError(Exception):
    """No data to export"""

    def __init__(self, message: str = "No data to export"):
        super().__init__(message)


ERROR_MAPPINGS: Dict[ErrorKind, Dict] = {
    ErrorKind.EMPTY_SELECTOR: {
        "message": "Please enter a CSS selector",
        "suggestion": "Type a selector such as 'h1' or pick one of the presets",
        "severity": "warning",
        "can_retry": False,
    },
    ErrorKind.INVALID_SELECTOR: {
        "message": "The CSS selector is not valid",
        "suggestion": "Check the selector syntax, e.g. 'a[href]' or 'div.item > span'",
        "severity": "warning",
        "can_retry": False,
    },
    ErrorKind.RESTRICTED_PAGE: {
        "message": "Cannot scrape this type of page",
        "suggestion": "Please navigate to a regular website",
        "severity": "error",
        "can_retry": False,
    },
    ErrorKind.ALL_TIERS_EXHAUSTED: {
        "message": "All scraping methods failed",
        "suggestion": "Try refreshing the page and make sure you're on a regular webpage",
        "severity": "critical",
        "can_retry": True,
    },
}


def format_user_friendly_error(kind: ErrorKind, technical_details: Optional[str] = None) -> Dict:
    """
    Convert a terminal error kind into a message with an actionable suggestion.

    Returns:
        {"message", "suggestion", "technical", "severity", "can_retry"}
    """
    mapped = ERROR_MAPPINGS.get(kind)
    if mapped is None:
        logger.debug(f"No friendly mapping for {kind}, using fallback")
        mapped = ERROR_MAPPINGS[ErrorKind.ALL_TIERS_EXHAUSTED]
    result = dict(mapped)
    result["technical"] = technical_details or kind.value
    return result

"""
Delivery strategy: get the extractor running inside a tab.

Tiers are tried strictly in order and each runs at most once:

1. Existing agent - message an agent that may already be listening
   (bounded by ``agent_timeout_ms``).
2. Inject & retry - install the agent, wait ``settle_delay_ms``, message
   again (bounded by ``inject_timeout_ms``).
3. Direct execution - run the extractor one-shot in the tab.

Tier 1 and 2 failures are logged and fall through. Only tier 3 failing ends
the delivery with AllTiersExhausted. No exception crosses ``deliver()``;
callers always receive a ``DeliveryOutcome``.

Usage:
    strategy = DeliveryStrategy()
    outcome = await strategy.deliver(tab, ExtractionRequest("a[href]", "href"))
    if outcome.ok:
        print(outcome.result)
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional

from .config import Config, config as default_config
from .errors import (
    AllTiersExhaustedError,
    ErrorKind,
    InvalidSelectorError,
    RestrictedPageError,
    ScrapeError,
    TierTimeoutError,
    UnexpectedReplyError,
)
from .models import (
    DeliveryOutcome,
    ExtractionRequest,
    TierAttempt,
    invalid_selector_message,
    is_extraction_result,
)
from .status import StatusReporter
from .tabs import Tab

logger = logging.getLogger(__name__)

RESTRICTED_URL_PREFIXES = (
    "chrome://",
    "chrome-extension://",
    "moz-extension://",
)

TIER_EXISTING_AGENT = 1
TIER_INJECT_AND_RETRY = 2
TIER_DIRECT_EXECUTION = 3


def is_restricted_url(url: Optional[str]) -> bool:
    """Browser-internal and extension pages cannot be scraped; neither can a tab without a URL."""
    if not url:
        return True
    return url.startswith(RESTRICTED_URL_PREFIXES)


class DeliveryStrategy:
    def __init__(
        self,
        cfg: Optional[Config] = None,
        status: Optional[StatusReporter] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.config = cfg or default_config
        self.status = status or StatusReporter(self.config)
        self.sleep = sleep

    async def deliver(self, tab: Tab, request: ExtractionRequest) -> DeliveryOutcome:
        if not request.selector or not request.selector.strip():
            return DeliveryOutcome.failure(ErrorKind.EMPTY_SELECTOR, "Please enter a CSS selector")

        url = tab.url
        logger.info(f"Current tab: {url}")
        if is_restricted_url(url):
            return DeliveryOutcome.failure(ErrorKind.RESTRICTED_PAGE, str(RestrictedPageError()))

        attempts: List[TierAttempt] = []
        tiers = (
            (TIER_EXISTING_AGENT, "🔍 Checking for content script...", self._existing_agent),
            (TIER_INJECT_AND_RETRY, "🔧 Injecting content script...", self._inject_and_retry),
        )
        for tier, progress, attempt in tiers:
            self.status.show(progress)
            try:
                result = await attempt(tab, request)
            except InvalidSelectorError as e:
                attempts.append(TierAttempt(tier, ErrorKind.INVALID_SELECTOR, str(e)))
                return DeliveryOutcome.failure(ErrorKind.INVALID_SELECTOR, str(e), attempts)
            except ScrapeError as e:
                logger.info(f"Tier {tier} failed ({e.kind.value}), falling through: {e}")
                attempts.append(TierAttempt(tier, e.kind, str(e)))
                continue
            except Exception as e:
                logger.info(f"Tier {tier} failed unexpectedly, falling through: {e}")
                attempts.append(TierAttempt(tier, ErrorKind.TRANSPORT_ERROR, str(e)))
                continue
            attempts.append(TierAttempt(tier))
            return DeliveryOutcome.success(result, tier, attempts)

        self.status.show("⚡ Using direct execution method...")
        try:
            result = await self._direct_execution(tab, request)
        except InvalidSelectorError as e:
            attempts.append(TierAttempt(TIER_DIRECT_EXECUTION, ErrorKind.INVALID_SELECTOR, str(e)))
            return DeliveryOutcome.failure(ErrorKind.INVALID_SELECTOR, str(e), attempts)
        except Exception as e:
            kind = e.kind if isinstance(e, ScrapeError) else ErrorKind.EXECUTION_BLOCKED
            logger.error(f"Direct execution failed: {e}")
            attempts.append(TierAttempt(TIER_DIRECT_EXECUTION, kind, str(e)))
            return DeliveryOutcome.failure(ErrorKind.ALL_TIERS_EXHAUSTED, str(AllTiersExhaustedError()), attempts)
        if result is None:
            logger.error("Direct execution returned no result")
            attempts.append(TierAttempt(TIER_DIRECT_EXECUTION, ErrorKind.EXECUTION_BLOCKED, "no result"))
            return DeliveryOutcome.failure(
                ErrorKind.ALL_TIERS_EXHAUSTED, "Unable to scrape data from this page", attempts
            )
        attempts.append(TierAttempt(TIER_DIRECT_EXECUTION))
        return DeliveryOutcome.success(result, TIER_DIRECT_EXECUTION, attempts)

    async def _send_with_timeout(self, tab: Tab, request: ExtractionRequest, timeout_ms: int) -> Any:
        try:
            return await asyncio.wait_for(tab.send_message(request.to_message()), timeout=timeout_ms / 1000.0)
        except asyncio.TimeoutError as e:
            raise TierTimeoutError(f"Message timeout after {timeout_ms}ms") from e

    def _check_reply(self, reply: Any) -> List[str]:
        message = invalid_selector_message(reply)
        if message is not None:
            raise InvalidSelectorError(message)
        if not is_extraction_result(reply):
            raise UnexpectedReplyError(f"unexpected reply of type {type(reply).__name__}")
        return reply

    async def _existing_agent(self, tab: Tab, request: ExtractionRequest) -> List[str]:
        reply = await self._send_with_timeout(tab, request, self.config.agent_timeout_ms)
        return self._check_reply(reply)

    async def _inject_and_retry(self, tab: Tab, request: ExtractionRequest) -> List[str]:
        await tab.inject_agent()
        await self.sleep(self.config.settle_delay_ms / 1000.0)
        reply = await self._send_with_timeout(tab, request, self.config.inject_timeout_ms)
        return self._check_reply(reply)

    async def _direct_execution(self, tab: Tab, request: ExtractionRequest) -> Optional[List[str]]:
        reply = await tab.execute(request.selector, request.attribute)
        message = invalid_selector_message(reply)
        if message is not None:
            raise InvalidSelectorError(message)
        if not is_extraction_result(reply):
            return None
        return reply

#!/usr/bin/env python3
"""
Tabs: what the delivery strategy can reach.

A tab offers three operations, one per delivery tier:

- ``send_message(message)``: ask an already-installed agent (tier 1 and 2)
- ``inject_agent()``: install the agent into the tab (tier 2)
- ``execute(selector, attribute)``: run the extractor one-shot (tier 3)

Tabs raise ``TransportError``, ``InjectionFailureError`` or
``ExecutionBlockedError``; timeouts are applied by the caller.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from .agent import AGENT_SCRIPT_JS, DISPATCH_JS, EXTRACT_FUNCTION_JS, ExtractionAgent
from .errors import ExecutionBlockedError, InjectionFailureError, TransportError
from .extractor import extract, parse_document

logger = logging.getLogger(__name__)


class Tab:
    """Interface shared by browser pages and static documents."""

    @property
    def url(self) -> Optional[str]:
        raise NotImplementedError

    async def send_message(self, message: Dict[str, Any]) -> Any:
        raise NotImplementedError

    async def inject_agent(self) -> None:
        raise NotImplementedError

    async def execute(self, selector: str, attribute: str) -> Any:
        raise NotImplementedError


class PlaywrightTab(Tab):
    """A live Playwright page."""

    def __init__(self, page):
        self.page = page

    @property
    def url(self) -> Optional[str]:
        return self.page.url

    async def send_message(self, message: Dict[str, Any]) -> Any:
        try:
            return await self.page.evaluate(DISPATCH_JS, message)
        except Exception as e:
            raise TransportError(str(e)) from e

    async def inject_agent(self) -> None:
        # add_script_tag is subject to the page's CSP, evaluate is not
        try:
            await self.page.add_script_tag(content=AGENT_SCRIPT_JS)
        except Exception as e:
            raise InjectionFailureError(str(e)) from e

    async def execute(self, selector: str, attribute: str) -> Any:
        try:
            return await self.page.evaluate(EXTRACT_FUNCTION_JS, [selector, attribute])
        except Exception as e:
            raise ExecutionBlockedError(str(e)) from e


class StaticTab(Tab):
    """
    A parsed HTML document standing in for a tab.

    Messages are delivered to registered listeners; the first one returning a
    value other than None answers, like a browser runtime message.
    """

    def __init__(self, html: str, url: Optional[str] = None, allow_scripts: bool = True):
        self.document = parse_document(html)
        self._url = url
        self.allow_scripts = allow_scripts
        self.listeners: List[Callable[[Dict[str, Any]], Any]] = []
        self.agent = ExtractionAgent(self.document, url)

    @property
    def url(self) -> Optional[str]:
        return self._url

    def add_listener(self, listener: Callable[[Dict[str, Any]], Any]) -> None:
        self.listeners.append(listener)

    async def send_message(self, message: Dict[str, Any]) -> Any:
        if not self.listeners:
            raise TransportError()
        for listener in self.listeners:
            response = listener(message)
            if response is not None:
                return response
        return None

    async def inject_agent(self) -> None:
        if not self.allow_scripts:
            raise InjectionFailureError("Script injection is not allowed in this tab")
        self.agent.install(self.add_listener)

    async def execute(self, selector: str, attribute: str) -> Any:
        if not self.allow_scripts:
            raise ExecutionBlockedError("Script execution is not allowed in this tab")
        return extract(self.document, selector, attribute, base_url=self._url)

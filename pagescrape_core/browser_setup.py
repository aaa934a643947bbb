#!/usr/bin/env python3
import logging
from pathlib import Path
from typing import Dict, Optional

from .config import Config, config as default_config
from .tabs import PlaywrightTab

logger = logging.getLogger(__name__)


def _ensure_playwright_browsers():
    """Check if Playwright browsers are installed, auto-install if missing."""
    import subprocess
    import sys

    cache_dir = Path.home() / ".cache" / "ms-playwright"
    chromium_dirs = list(cache_dir.glob("chromium*")) if cache_dir.exists() else []
    if chromium_dirs:
        return

    logger.info("🔧 Playwright browsers not found. Installing automatically...")
    try:
        result = subprocess.run(
            [sys.executable, "-m", "playwright", "install", "chromium"],
            capture_output=True,
            text=True,
            timeout=300,
        )
        if result.returncode == 0:
            logger.info("✅ Playwright browsers installed successfully!")
        else:
            logger.warning(f"⚠️ Playwright install warning: {result.stderr[:200]}")
    except subprocess.TimeoutExpired:
        logger.warning("⚠️ Playwright install timed out, continuing anyway...")
    except OSError as e:
        logger.warning(f"⚠️ Failed to auto-install Playwright: {e}")


class BrowserSession:
    """
    Owns a Playwright browser and hands out tabs.

    Usage:
        async with BrowserSession() as browser:
            tab = await browser.open_tab("https://example.com")
    """

    def __init__(self, cfg: Optional[Config] = None, headless: Optional[bool] = None):
        self.config = cfg or default_config
        self.headless = self.config.headless if headless is None else headless
        self._playwright = None
        self._browser = None
        self._context = None

    async def start(self):
        from playwright.async_api import async_playwright

        _ensure_playwright_browsers()
        self._playwright = await async_playwright().start()
        launch_args = {
            "headless": bool(self.headless),
            "args": ["--no-sandbox", "--disable-dev-shm-usage"],
        }
        self._browser = await self._playwright.chromium.launch(**launch_args)
        context_args: Dict = {}
        if self.config.user_agent:
            context_args["user_agent"] = self.config.user_agent
        self._context = await self._browser.new_context(**context_args)
        return self

    async def open_tab(self, url: str) -> PlaywrightTab:
        if self._context is None:
            await self.start()
        page = await self._context.new_page()
        logger.info(f"Opening {url}")
        await page.goto(url, timeout=self.config.navigation_timeout_ms, wait_until=self.config.wait_until)
        return PlaywrightTab(page)

    async def close(self):
        try:
            if self._context is not None:
                await self._context.close()
            if self._browser is not None:
                await self._browser.close()
        finally:
            if self._playwright is not None:
                await self._playwright.stop()
            self._context = self._browser = self._playwright = None

    async def __aenter__(self):
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

"""
Pytest configuration for real-browser tests
"""

import os

import pytest
import pytest_asyncio

BROWSER_TESTS = os.getenv("PAGESCRAPE_BROWSER_TESTS", "false").lower() == "true"


def pytest_collection_modifyitems(config, items):
    if BROWSER_TESTS:
        return
    skip = pytest.mark.skip(reason="set PAGESCRAPE_BROWSER_TESTS=true to run real-browser tests")
    for item in items:
        if "browser" in item.keywords:
            item.add_marker(skip)


@pytest_asyncio.fixture
async def browser_page():
    """Provide a browser page for tests"""
    from playwright.async_api import async_playwright

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        page = await browser.new_page()
        yield page
        await browser.close()

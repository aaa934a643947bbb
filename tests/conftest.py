"""
Shared fixtures for pagescrape tests
"""

import pytest

from pagescrape_core.config import Config
from pagescrape_core.status import StatusReporter

SAMPLE_HTML = """
<html>
  <head><title>Sample</title></head>
  <body>
    <h1>Main title</h1>
    <h2>  Sub title  </h2>
    <h3>   </h3>
    <nav>
      <a href="/about">About</a>
      <a href="https://other.example.org/x">Other</a>
      <a href="mailto:a@example.com">Mail</a>
      <a href="tel:+48123456789">Call</a>
      <a href="#top">Top</a>
      <a href="">Empty</a>
      <a>No href</a>
    </nav>
    <img src="img/logo.png" alt="Logo" title="Company logo" class="brand wide">
    <img src="data:image/gif;base64,R0lGODlhAQABAAAAACw=" alt="">
    <div class="item" data-id="7"><b>Bold</b> text</div>
    <div class="item" data-id="">Blank id</div>
  </body>
</html>
"""

SAMPLE_URL = "https://example.com/page"


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def fast_config():
    """Config with short timeouts and no settle delay"""
    return Config(agent_timeout_ms=50, inject_timeout_ms=50, settle_delay_ms=0)


@pytest.fixture
def status():
    return StatusReporter()


@pytest.fixture
def no_sleep():
    calls = []

    async def _sleep(seconds):
        calls.append(seconds)

    _sleep.calls = calls
    return _sleep

"""Tests for the pagescrape command line."""

import json

from unittest.mock import AsyncMock, patch

from pagescrape_core import cli
from pagescrape_core.errors import ErrorKind
from pagescrape_core.models import DeliveryOutcome


def test_parser_scrape_options():
    args = cli.build_parser().parse_args(["scrape", "https://example.com", "-p", "links", "--static", "--export", "out"])
    assert args.url == "https://example.com"
    assert args.preset == "links"
    assert args.static is True
    assert args.export == "out"


def test_presets_command(capsys):
    assert cli.main(["presets"]) == 0
    out = capsys.readouterr().out
    assert "headings" in out
    assert "'a[href]' -> href" in out


def test_missing_selector_is_usage_error(capsys):
    assert cli.main(["scrape", "https://example.com"]) == 2
    assert "CSS selector" in capsys.readouterr().err


def test_scrape_prints_preview_and_exports(tmp_path, capsys):
    async def fake_scrape_url(self, url, selector, attribute, static=False, headless=None):
        self.cache.store(["First", "Second"])
        return DeliveryOutcome.success(["First", "Second"], tier=1)

    with patch("pagescrape_core.cli.ScrapeSession.scrape_url", fake_scrape_url):
        code = cli.main(["scrape", "https://example.com", "-s", "h1", "--export", str(tmp_path)])

    assert code == 0
    out = capsys.readouterr().out
    assert "1: First" in out
    assert len(list(tmp_path.glob("scraped-data-*.csv"))) == 1


def test_scrape_failure_exit_code(capsys):
    failure = DeliveryOutcome.failure(ErrorKind.ALL_TIERS_EXHAUSTED, "All scraping methods failed.")
    with patch("pagescrape_core.cli.ScrapeSession.scrape_url", AsyncMock(return_value=failure)):
        code = cli.main(["scrape", "https://example.com", "-s", "h1", "--json"])

    assert code == 1
    body = json.loads(capsys.readouterr().out)
    assert body["error"] == "AllTiersExhausted"


def test_scrape_navigation_error(capsys):
    with patch("pagescrape_core.cli.ScrapeSession.scrape_url", AsyncMock(side_effect=RuntimeError("net::ERR_NAME_NOT_RESOLVED"))):
        code = cli.main(["scrape", "https://nowhere.invalid", "-s", "h1"])

    assert code == 1
    assert "ERR_NAME_NOT_RESOLVED" in capsys.readouterr().err

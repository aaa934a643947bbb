"""Tests for the Flask API."""

import pytest
from unittest.mock import patch

from pagescrape_core.errors import ErrorKind
from pagescrape_core.models import DeliveryOutcome
from pagescrape_core.session import ScrapeSession
from pagescrape_server.app import create_app


@pytest.fixture
def session(fast_config):
    return ScrapeSession(fast_config)


@pytest.fixture
def client(session):
    app = create_app(session)
    app.config["TESTING"] = True
    return app.test_client()


def _stub_scrape(outcome):
    async def fake(self, url, selector, attribute, static=False, headless=None):
        if outcome.ok:
            self.cache.store(outcome.result)
        return outcome
    return fake


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "healthy"


def test_presets(client):
    body = client.get("/api/presets").get_json()
    assert body["presets"]["images"] == {"selector": "img", "attribute": "src"}
    assert "innerHTML" in body["attributes"]


def test_scrape_and_export(client):
    outcome = DeliveryOutcome.success(["A", 'B"C'], tier=3)
    with patch.object(ScrapeSession, "scrape_url", _stub_scrape(outcome)):
        resp = client.post("/api/scrape", json={"url": "https://example.com", "preset": "headings"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["count"] == 2
    assert body["tier"] == 3
    assert body["preview"] == ["1: A", '2: B"C']

    assert client.get("/api/results").get_json()["items"] == ["A", 'B"C']

    export = client.get("/api/export")
    assert export.status_code == 200
    assert export.mimetype == "text/csv"
    assert 'filename="scraped-data-' in export.headers["Content-Disposition"]
    assert export.get_data(as_text=True).split("\n")[1:] == ['1,"A"', '2,"B""C"']


def test_export_empty(client):
    resp = client.get("/api/export")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "No data to export"


def test_scrape_requires_url(client):
    assert client.post("/api/scrape", json={"selector": "h1"}).status_code == 400


def test_scrape_unknown_preset(client):
    assert client.post("/api/scrape", json={"url": "https://example.com", "preset": "tables"}).status_code == 400


@pytest.mark.parametrize("payload", [
    [1, 2],
    "h1",
    {"url": "https://example.com", "selector": 5},
    {"url": ["https://example.com"], "selector": "h1"},
    {"url": "https://example.com", "selector": "h1", "attribute": {"name": "href"}},
    {"url": "https://example.com", "preset": 1},
    {"url": "https://example.com", "selector": "h1", "static": "false"},
])
def test_scrape_rejects_malformed_body(client, payload):
    with patch.object(ScrapeSession, "scrape_url") as scrape_url:
        resp = client.post("/api/scrape", json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    scrape_url.assert_not_called()


@pytest.mark.parametrize("kind,status_code", [
    (ErrorKind.EMPTY_SELECTOR, 400),
    (ErrorKind.RESTRICTED_PAGE, 422),
    (ErrorKind.INVALID_SELECTOR, 422),
    (ErrorKind.ALL_TIERS_EXHAUSTED, 502),
])
def test_scrape_failures(client, kind, status_code):
    outcome = DeliveryOutcome.failure(kind, "failed")
    with patch.object(ScrapeSession, "scrape_url", _stub_scrape(outcome)):
        resp = client.post("/api/scrape", json={"url": "https://example.com", "selector": "h1"})

    body = resp.get_json()
    assert resp.status_code == status_code
    assert body["success"] is False
    assert body["error"] == kind.value
    assert body["help"]


def test_scrape_page_load_error(client):
    async def boom(self, *args, **kwargs):
        raise RuntimeError("net::ERR_CONNECTION_REFUSED")

    with patch.object(ScrapeSession, "scrape_url", boom):
        resp = client.post("/api/scrape", json={"url": "https://example.com", "selector": "h1"})

    assert resp.status_code == 502
    assert "ERR_CONNECTION_REFUSED" in resp.get_json()["error"]

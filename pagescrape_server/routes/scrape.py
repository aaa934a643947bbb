"""Scrape endpoint"""

import asyncio
import logging
import threading

from flask import Blueprint, request, jsonify

from pagescrape_core.errors import ErrorKind
from pagescrape_core.presets import build_request
from pagescrape_core.session import describe_failure
from pagescrape_server.routes import get_session

logger = logging.getLogger(__name__)

scrape_bp = Blueprint('scrape', __name__)

# One delivery at a time per server, like the disabled scrape button
_scrape_lock = threading.Lock()

STATUS_FOR_ERROR = {
    ErrorKind.EMPTY_SELECTOR: 400,
    ErrorKind.INVALID_SELECTOR: 422,
    ErrorKind.RESTRICTED_PAGE: 422,
    ErrorKind.ALL_TIERS_EXHAUSTED: 502,
}


def _run_in_new_loop(coro):
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(coro)
    finally:
        loop.close()
        asyncio.set_event_loop(None)


@scrape_bp.route('/api/scrape', methods=['POST'])
def scrape():
    """Scrape ``url`` with a selector/attribute pair or a preset"""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({"success": False, "error": "Request body must be a JSON object"}), 400
    for field in ('url', 'selector', 'attribute', 'preset'):
        if data.get(field) is not None and not isinstance(data[field], str):
            return jsonify({"success": False, "error": f"{field} must be a string"}), 400
    if not isinstance(data.get('static', False), bool):
        return jsonify({"success": False, "error": "static must be true or false"}), 400

    url = (data.get('url') or '').strip()
    if not url:
        return jsonify({"success": False, "error": "url is required"}), 400
    try:
        req = build_request(data.get('selector'), data.get('attribute'), data.get('preset'))
    except KeyError:
        return jsonify({"success": False, "error": f"Unknown preset: {data.get('preset')}"}), 400

    session = get_session()
    if not _scrape_lock.acquire(blocking=False):
        return jsonify({"success": False, "error": "A scrape is already running"}), 409
    try:
        outcome = _run_in_new_loop(
            session.scrape_url(url, req.selector, req.attribute, static=data.get('static', False))
        )
    except Exception as e:
        logger.error(f"Scraping error for {url}: {e}")
        return jsonify({
            "success": False,
            "error": f"Could not load page: {e}",
            "help": "Check that the URL is correct and the site is reachable",
        }), 502
    finally:
        _scrape_lock.release()

    body = outcome.to_dict()
    body["preview"] = session.preview() if outcome.ok else []
    if outcome.ok:
        return jsonify(body)
    info = describe_failure(outcome)
    body["help"] = info["suggestion"]
    return jsonify(body), STATUS_FOR_ERROR.get(outcome.error, 502)


@scrape_bp.route('/api/results', methods=['GET'])
def results():
    items = get_session().results()
    return jsonify({"count": len(items), "items": items})

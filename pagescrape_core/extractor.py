"""
Element value extraction.

``extract()`` queries a parsed document with a CSS selector and turns every
matching element into one trimmed string, using a resolver picked from
``RESOLVERS`` by attribute name. Elements whose value trims to empty are
skipped. The JavaScript twin of these rules lives in ``agent.py``.

Usage:
    from pagescrape_core.extractor import parse_document, extract

    doc = parse_document(html)
    links = extract(doc, "a[href]", "href", base_url="https://example.com/page")
"""

import logging
from typing import Callable, Dict, List, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from .errors import EmptySelectorError, InvalidSelectorError

logger = logging.getLogger(__name__)

Resolver = Callable[[Tag, Optional[str]], str]

HREF_PASSTHROUGH_PREFIXES = ("mailto:", "tel:", "#")
SRC_PASSTHROUGH_PREFIXES = ("data:",)


def parse_document(html: str) -> BeautifulSoup:
    # keep attribute text as written; class="a   b" must not become "a b"
    return BeautifulSoup(html or "", "html.parser", multi_valued_attributes=None)


def _attr(element: Tag, name: str) -> str:
    value = element.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v) for v in value)
    return str(value)


def resolve_url(value: str, base_url: Optional[str], passthrough: tuple) -> str:
    """Make ``value`` absolute against ``base_url`` unless it already is or is exempt."""
    if not value or value.startswith("http") or value.startswith(passthrough):
        return value
    if not base_url:
        return value
    try:
        return urljoin(base_url, value)
    except ValueError as e:
        logger.warning(f"URL conversion failed for {value!r}: {e}")
        return value


def document_base_url(root: Union[BeautifulSoup, Tag], base_url: Optional[str]) -> Optional[str]:
    """Base URL for relative links: the document's <base href> wins over its location."""
    base = root.find("base", href=True)
    if base is None:
        return base_url
    try:
        return urljoin(base_url or "", _attr(base, "href"))
    except ValueError as e:
        logger.warning(f"Ignoring unusable <base href>: {e}")
        return base_url


def _text_content(element: Tag, base_url: Optional[str]) -> str:
    return element.get_text().strip()


def _inner_html(element: Tag, base_url: Optional[str]) -> str:
    return element.decode_contents()


def _href(element: Tag, base_url: Optional[str]) -> str:
    return resolve_url(_attr(element, "href"), base_url, HREF_PASSTHROUGH_PREFIXES)


def _src(element: Tag, base_url: Optional[str]) -> str:
    return resolve_url(_attr(element, "src"), base_url, SRC_PASSTHROUGH_PREFIXES)


def _alt(element: Tag, base_url: Optional[str]) -> str:
    return _attr(element, "alt")


def _title(element: Tag, base_url: Optional[str]) -> str:
    return _attr(element, "title")


def _class_name(element: Tag, base_url: Optional[str]) -> str:
    return _attr(element, "class")


RESOLVERS: Dict[str, Resolver] = {
    "textContent": _text_content,
    "innerHTML": _inner_html,
    "href": _href,
    "src": _src,
    "alt": _alt,
    "title": _title,
    "className": _class_name,
}


def get_resolver(attribute: str) -> Resolver:
    """Named attributes map to their resolver; any other name is a plain attribute lookup."""
    resolver = RESOLVERS.get(attribute)
    if resolver is not None:
        return resolver
    # the parser lower-cases attribute names, so lookups are case-insensitive
    name = attribute.lower()
    return lambda element, base_url: _attr(element, name)


def select_elements(root: Union[BeautifulSoup, Tag], selector: str) -> List[Tag]:
    if not selector or not selector.strip():
        raise EmptySelectorError()
    try:
        return root.select(selector)
    except (SelectorSyntaxError, NotImplementedError, ValueError) as e:
        raise InvalidSelectorError(f"Invalid selector {selector!r}: {e}") from e


def extract(
    root: Union[BeautifulSoup, Tag],
    selector: str,
    attribute: str = "textContent",
    base_url: Optional[str] = None,
) -> List[str]:
    """
    Extract one value per element matching ``selector``, in document order.

    Args:
        root: Parsed document (or subtree) to query
        selector: CSS selector
        attribute: One of NAMED_ATTRIBUTES or any attribute name
        base_url: Document location used to absolutize href/src

    Returns:
        Non-empty trimmed strings; never longer than the match count

    Raises:
        EmptySelectorError: blank selector
        InvalidSelectorError: malformed selector
    """
    elements = select_elements(root, selector)
    logger.debug(f"Found {len(elements)} elements for selector {selector!r}")
    resolver = get_resolver(attribute)
    base_url = document_base_url(root, base_url)

    results: List[str] = []
    for index, element in enumerate(elements):
        try:
            value = resolver(element, base_url)
        except Exception as e:
            logger.warning(f"Error processing element {index}: {e}")
            continue
        value = (value or "").strip()
        if value:
            results.append(value)
    logger.debug(f"Returning {len(results)} results")
    return results

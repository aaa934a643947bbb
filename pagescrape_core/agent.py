"""
Extraction agent: the listener that answers scrape messages inside a tab.

Two flavours share one contract (install once, answer
``{"action": "scrape", "selector", "attribute"}`` with a list of strings):

- ``AGENT_SCRIPT_JS`` is installed into browser pages. A
  ``window.__pagescrapeLoaded`` flag keeps a second install from registering
  a second handler.
- ``ExtractionAgent`` serves document-backed tabs with the Python extractor.

``EXTRACT_FUNCTION_JS`` is the same extraction logic as a one-shot function
for ``page.evaluate(fn, [selector, attribute])``.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from .errors import ErrorKind, InvalidSelectorError
from .extractor import extract
from .models import SCRAPE_ACTION, ExtractionRequest

logger = logging.getLogger(__name__)

AGENT_GLOBAL = "__pagescrapeAgent"
LOADED_FLAG = "__pagescrapeLoaded"

_EXTRACT_BODY_JS = r"""
function pagescrapeExtract(selector, attribute) {
    let elements;
    try {
        elements = document.querySelectorAll(selector);
    } catch (error) {
        return { error: 'InvalidSelector', message: String((error && error.message) || error) };
    }

    const absolutize = (value, passthrough) => {
        if (!value || value.startsWith('http') || passthrough.some(p => value.startsWith(p))) {
            return value;
        }
        try {
            return new URL(value, document.baseURI).href;
        } catch (urlError) {
            console.warn('[pagescrape] URL conversion failed:', urlError);
            return value;
        }
    };
    const prop = (el, name) => (typeof el[name] === 'string' ? el[name] : '');

    const resolvers = {
        textContent: (el) => (el.textContent ? el.textContent.trim() : ''),
        innerHTML: (el) => el.innerHTML || '',
        href: (el) => absolutize(prop(el, 'href') || el.getAttribute('href') || '', ['mailto:', 'tel:', '#']),
        src: (el) => absolutize(prop(el, 'src') || el.getAttribute('src') || '', ['data:']),
        alt: (el) => prop(el, 'alt') || el.getAttribute('alt') || '',
        title: (el) => prop(el, 'title') || el.getAttribute('title') || '',
        className: (el) => prop(el, 'className') || el.getAttribute('class') || '',
    };
    const resolve = Object.prototype.hasOwnProperty.call(resolvers, attribute)
        ? resolvers[attribute]
        : (el) => el.getAttribute(attribute) || '';

    const results = [];
    elements.forEach((el, index) => {
        try {
            const value = String(resolve(el) || '').trim();
            if (value) {
                results.push(value);
            }
        } catch (elementError) {
            console.warn(`[pagescrape] Error processing element ${index}:`, elementError);
        }
    });
    return results;
}
"""

EXTRACT_FUNCTION_JS = (
    "([selector, attribute]) => {\n"
    + _EXTRACT_BODY_JS
    + "\n    return pagescrapeExtract(selector, attribute);\n}"
)

AGENT_SCRIPT_JS = (
    "(() => {\n"
    f"    if (window.{LOADED_FLAG}) {{ return; }}\n"
    f"    window.{LOADED_FLAG} = true;\n"
    + _EXTRACT_BODY_JS
    + f"""
    window.{AGENT_GLOBAL} = {{
        dispatch(message) {{
            if (!message || message.action !== '{SCRAPE_ACTION}') {{
                return null;
            }}
            try {{
                return pagescrapeExtract(message.selector, message.attribute);
            }} catch (error) {{
                console.error('[pagescrape] agent error:', error);
                return [];
            }}
        }},
    }};
    console.log('[pagescrape] extraction agent ready');
}})();
"""
)

# Delivers one message to the agent; rejects when nothing is listening.
DISPATCH_JS = f"""
(message) => {{
    const agent = window.{AGENT_GLOBAL};
    if (!agent || typeof agent.dispatch !== 'function') {{
        throw new Error('Could not establish connection. Receiving end does not exist.');
    }}
    return agent.dispatch(message);
}}
"""


class ExtractionAgent:
    """Python agent for document-backed tabs."""

    def __init__(self, document, url: Optional[str] = None):
        self.document = document
        self.url = url
        self.installed = False

    def install(self, register: Callable[[Callable[[Dict[str, Any]], Any]], None]) -> bool:
        """Register ``handle`` through ``register`` once; later calls are no-ops."""
        if self.installed:
            logger.debug("Extraction agent already installed")
            return False
        self.installed = True
        register(self.handle)
        logger.debug("Extraction agent installed")
        return True

    def handle(self, message: Dict[str, Any]) -> Optional[Any]:
        if not isinstance(message, dict) or message.get("action") != SCRAPE_ACTION:
            return None
        request = ExtractionRequest.from_message(message)
        try:
            results: List[str] = extract(self.document, request.selector, request.attribute, base_url=self.url)
        except InvalidSelectorError as e:
            return {"error": ErrorKind.INVALID_SELECTOR.value, "message": str(e)}
        except Exception as e:
            logger.error(f"Agent error: {e}")
            return []
        logger.info(f"Scraping completed, found {len(results)} items")
        return results

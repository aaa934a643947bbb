"""
pagescrape_server - HTTP API for scraping pages by CSS selector
"""

from pagescrape_server.app import app, create_app

__all__ = [
    'app',
    'create_app',
]

"""Routes module for Flask endpoints"""

from flask import current_app

from pagescrape_core.session import ScrapeSession


def get_session() -> ScrapeSession:
    return current_app.extensions['pagescrape_session']


__all__ = ['get_session']

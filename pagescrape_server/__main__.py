"""Main entry point for pagescrape server"""

import logging

from pagescrape_core.config import config
from pagescrape_server.app import app

logger = logging.getLogger(__name__)


def main():
    """Run the pagescrape API server"""
    logger.info(f"Starting pagescrape API server on port {config.api_port}...")
    logger.info(f"Headless browser: {config.headless}")
    app.run(host=config.api_host, port=config.api_port, debug=False, use_reloader=False)


if __name__ == '__main__':
    main()

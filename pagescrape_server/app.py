"""Flask application setup for pagescrape server"""

import logging

from flask import Flask
from flask_cors import CORS

from pagescrape_core.config import config
from pagescrape_core.session import ScrapeSession
from pagescrape_server.routes.health import health_bp
from pagescrape_server.routes.presets import presets_bp
from pagescrape_server.routes.scrape import scrape_bp
from pagescrape_server.routes.export import export_bp

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def create_app(session: ScrapeSession = None) -> Flask:
    """Build the app; one ScrapeSession (and its result cache) lives as long as the app."""
    application = Flask(__name__)
    CORS(application)
    application.extensions['pagescrape_session'] = session or ScrapeSession()

    # Register blueprints
    application.register_blueprint(health_bp)
    application.register_blueprint(presets_bp)
    application.register_blueprint(scrape_bp)
    application.register_blueprint(export_bp)
    return application


app = create_app()

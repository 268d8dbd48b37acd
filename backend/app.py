from flask import Flask, render_template
from flask_cors import CORS
import logging
import os
from werkzeug.exceptions import NotFound
from config import Config
from blueprints import register_blueprints
from pipeline import CONTAINER_EXTENSION, install_pipeline
from services.container import ServiceContainer
from services.errors import PortalError
from services.localization import Localizer
from services.repository import PostgresRepository, Repository
from services.view_renderer import ViewRenderer


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_container(app):
    """Register the default capabilities for page controllers."""
    container = ServiceContainer()
    container.register_singleton(
        Localizer,
        lambda: Localizer(app.config['LOCALES_DIR'], app.config['DEFAULT_CULTURE']),
    )
    container.register(ViewRenderer, lambda: ViewRenderer(app.jinja_env))
    container.register_open_generic(
        Repository,
        lambda entity_type: PostgresRepository(entity_type, app.config['DATABASE_URL']),
    )
    return container


def create_app(overrides=None):
    """
    Build the Flask application.

    Args:
        overrides: Optional mapping applied on top of Config, e.g. in tests
    """
    app = Flask(__name__)
    app.config.from_mapping(Config.as_dict())
    if overrides:
        app.config.update(overrides)

    # Validate configuration
    if not app.config.get('TESTING') and not Config.validate_config():
        logger.warning("Some configuration variables are missing. Please check your .env file.")

    CORS(app, origins=app.config['CORS_ORIGINS'])

    app.extensions[CONTAINER_EXTENSION] = build_container(app)
    install_pipeline(app, app.config['PIPELINE_STAGES'])
    home_controller = register_blueprints(app)

    app.register_error_handler(NotFound, home_controller.not_found)

    @app.errorhandler(PortalError)
    def handle_portal_error(error):
        logger.error(f"Unhandled portal error: {error}", exc_info=error)
        return render_template('Shared/Error.html', message=str(error)), error.status_code

    return app


if __name__ == '__main__':
    logger.info("Starting portal web server...")
    create_app().run(debug=Config.DEBUG, host='0.0.0.0', port=int(os.getenv('PORT', 5000)))

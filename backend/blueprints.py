"""Blueprint registration for the portal web app.

Blueprint names are controller names and endpoints are action names, so
``Home.SuccessPage`` routes to ``HomeController.success_page``.
"""

from flask import Blueprint
from controllers import (
    HomeController,
    SecurityController,
    ContactController,
)


def create_home_blueprint():
    """Create and configure home blueprint."""
    bp = Blueprint('Home', __name__)
    controller = HomeController()

    bp.add_url_rule('/', 'Index', controller.index, methods=['GET'])
    bp.add_url_rule('/success', 'SuccessPage', controller.success_page, methods=['GET'])
    bp.add_url_rule('/theme', 'ChangeTheme', controller.change_theme, methods=['GET'])

    return bp, controller


def create_security_blueprint():
    """Create and configure security blueprint."""
    bp = Blueprint('Security', __name__, url_prefix='/security')
    controller = SecurityController()

    bp.add_url_rule('/access-denied', 'AccessDenied', controller.access_denied_page, methods=['GET'])

    return bp


def create_contact_blueprint():
    """Create and configure contact blueprint."""
    bp = Blueprint('Contact', __name__, url_prefix='/contact')
    controller = ContactController()

    bp.add_url_rule('/', 'Index', controller.index, methods=['GET'])
    bp.add_url_rule('/', 'Submit', controller.submit, methods=['POST'])
    bp.add_url_rule('/preview', 'Preview', controller.preview, methods=['POST'])

    return bp


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance

    Returns:
        The HomeController, which also serves the app-wide 404 page
    """
    home_bp, home_controller = create_home_blueprint()
    app.register_blueprint(home_bp)
    app.register_blueprint(create_security_blueprint())
    app.register_blueprint(create_contact_blueprint())
    return home_controller

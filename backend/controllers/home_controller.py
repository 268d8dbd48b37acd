"""Home controller handling the landing, success and theme endpoints."""

import logging
from flask import current_app, request, session, url_for
from services.requests_utils import parse_wait_seconds
from .base_controller import BaseController

logger = logging.getLogger(__name__)


class HomeController(BaseController):
    """Controller for the landing page and shared interstitials."""

    def __init__(self):
        """Initialize home controller."""
        super().__init__()

    def index(self):
        """Landing page."""
        return self.view(model={
            'title': self.localize('home.title'),
            'welcome': self.localize('home.welcome', current_app.config['APP_NAMESPACE']),
        })

    def success_page(self):
        """Interstitial shown after a successful action, returning to retController.retAction."""
        args = request.args
        model = {
            'page_title': args.get('pageTitle') or self.localize('success.default_title'),
            'wait_seconds': parse_wait_seconds(args.get('waitSeconds')),
            'return_action': args.get('retAction') or 'Index',
            'return_controller': args.get('retController') or 'Home',
        }
        model['return_url'] = self._return_url(model['return_controller'], model['return_action'])
        return self.view(model=model)

    def change_theme(self):
        """Store a known theme in the session and go back to the landing page."""
        theme = request.args.get('theme')
        if theme in current_app.config['THEMES']:
            session['theme'] = theme
            logger.info(f"Theme changed to {theme}")
        else:
            logger.warning(f"Ignoring unknown theme: {theme}")
        return self.redirect_to_action('Index')

    def not_found(self, error=None):
        """App-wide 404 handler."""
        return self.page_not_found()

    @staticmethod
    def _return_url(controller, action):
        """URL for the return target, or the landing page when it does not exist."""
        endpoint = f"{controller}.{action}"
        if endpoint not in current_app.view_functions:
            logger.warning(f"Unknown return target {endpoint}, using Home.Index")
            endpoint = 'Home.Index'
        return url_for(endpoint)

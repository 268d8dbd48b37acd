"""Security controller rendering the access denied page."""

import logging
from flask import request
from .base_controller import BaseController

logger = logging.getLogger(__name__)


class SecurityController(BaseController):
    """Controller for authorization failure pages."""

    def __init__(self):
        """Initialize security controller."""
        super().__init__()

    def access_denied_page(self):
        """Access denied page for the URL passed as pageUrl."""
        page_url = request.args.get('pageUrl', '')
        logger.info(f"Access denied for {page_url or 'unknown page'}")
        return self.view(model={
            'page_url': page_url,
            'message': self.localize('security.access_denied', page_url),
        }, status=403)

"""
Per-request state shared by the pipeline stages and page controllers.

A ``RequestContext`` is created when a request is dispatched and stored on
``flask.g``. It owns the resolved-service cache, the notification queue and
the view data for the response being built.
"""

import logging
from typing import Any, Dict, Optional

from flask import g, has_app_context

from .container import ServiceContainer
from .notifications import NotificationQueue
from .repository import Repository, require_aggregate_root

logger = logging.getLogger(__name__)

CONTEXT_ATTR = 'request_context'


class RequestContext:
    """State for exactly one request."""

    def __init__(
        self,
        container: ServiceContainer,
        namespace: str,
        controller: Optional[str] = None,
        action: Optional[str] = None,
        culture: Optional[str] = None,
        theme: Optional[str] = None,
    ):
        self.container = container
        self.notifications = NotificationQueue(namespace)
        self.controller = controller
        self.action = action
        self.culture = culture
        self.theme = theme
        self.view_data: Dict[str, Any] = {}
        self._services: Dict[Any, Any] = {}

    def service(self, capability):
        """Resolve a capability once per request and reuse the instance afterwards."""
        if capability not in self._services:
            self._services[capability] = self.container.resolve(capability)
        return self._services[capability]

    def repository(self, entity_type) -> Repository:
        require_aggregate_root(entity_type)
        return self.service(Repository[entity_type])


def split_endpoint(endpoint: Optional[str]):
    """Split a Flask endpoint 'Controller.Action' into (controller, action)."""
    if not endpoint:
        return None, None
    if '.' in endpoint:
        controller, action = endpoint.rsplit('.', 1)
        return controller, action
    return None, endpoint


def current_request_context() -> RequestContext:
    """
    Return the context installed for the current request.

    Raises:
        RuntimeError: Outside a request, or when the request_scope stage is not installed
    """
    context = getattr(g, CONTEXT_ATTR, None) if has_app_context() else None
    if context is None:
        raise RuntimeError(
            "No request context; is the 'request_scope' pipeline stage installed?"
        )
    return context

"""Base controller class with common functionality."""

import io
import logging
from typing import Any, Dict, Optional, Union

from flask import current_app, redirect, render_template, request, url_for

from services.localization import Localizer
from services.notifications import NotificationScope, NotifyType
from services.request_context import RequestContext, current_request_context
from services.view_renderer import ViewRenderer

logger = logging.getLogger(__name__)

SUCCESS_PAGE_ACTION = 'SuccessPage'
SUCCESS_PAGE_CONTROLLER = 'Home'
ACCESS_DENIED_ACTION = 'AccessDenied'
ACCESS_DENIED_CONTROLLER = 'Security'
PAGE_NOT_FOUND_VIEW = 'PageNotFound'

_MISSING = object()


class RedirectInstruction:
    """
    Redirect to a controller action with query parameters.

    Controllers may return it from an action: it is a WSGI callable, which
    Flask accepts as a response.
    """

    def __init__(self, action: str, controller: str, params: Optional[Dict[str, Any]] = None):
        self.action = action
        self.controller = controller
        self.params = dict(params or {})

    @property
    def endpoint(self) -> str:
        return f"{self.controller}.{self.action}"

    def url(self) -> str:
        return url_for(self.endpoint, **self.params)

    def to_response(self, code: int = 302):
        return redirect(self.url(), code=code)

    def __call__(self, environ, start_response):
        return self.to_response()(environ, start_response)

    def __eq__(self, other):
        if not isinstance(other, RedirectInstruction):
            return NotImplemented
        return (self.action, self.controller, self.params) == (other.action, other.controller, other.params)

    def __repr__(self):
        return f"RedirectInstruction({self.endpoint!r}, {self.params!r})"


class BaseController:
    """Base controller with shared utilities."""

    def __init__(self):
        """Initialize base controller."""
        self.logger = logger

    @property
    def context(self) -> RequestContext:
        """The state of the request being handled."""
        return current_request_context()

    # Services

    def service(self, capability):
        """Resolve a capability, reusing the instance for the rest of the request."""
        return self.context.service(capability)

    def repository(self, entity_type):
        """Repository for an aggregate root type."""
        return self.context.repository(entity_type)

    # Localization

    def localize(self, key: str, *args, culture: Optional[str] = None) -> str:
        """Localized text for key in culture, or in the request's culture when None."""
        localizer = self.service(Localizer)
        return localizer.get(key, culture or self.context.culture, args)

    # Views

    def view(self, view_name: Optional[str] = None, model=None, status: int = 200, **extra):
        """Render a full view for the current action, like render_template with view lookup."""
        context = self.context
        view_name = view_name or context.action
        template = self.service(ViewRenderer).find_view(context.controller, view_name, context.theme)
        context.view_data['model'] = model
        view_context = dict(context.view_data)
        view_context.update(extra)
        return render_template(template, **view_context), status

    def render_partial_to_string(self, view_name: Optional[str] = None, model=None) -> str:
        """
        Render a partial view into a string.

        Args:
            view_name: View to render; defaults to the name of the executing action
            model: Value exposed to the template as ``model``

        Raises:
            ViewNotFoundError: If no template matches the view name
        """
        context = self.context
        if not view_name:
            view_name = context.action

        renderer = self.service(ViewRenderer)
        previous_model = context.view_data.get('model', _MISSING)
        context.view_data['model'] = model
        try:
            template = renderer.find_partial_view(context.controller, view_name, context.theme)
            with io.StringIO() as buffer:
                renderer.render(template, self._view_context(), buffer)
                return buffer.getvalue()
        finally:
            if previous_model is _MISSING:
                context.view_data.pop('model', None)
            else:
                context.view_data['model'] = previous_model

    def _view_context(self) -> Dict[str, Any]:
        view_context = dict(self.context.view_data)
        current_app.update_template_context(view_context)
        return view_context

    # Notifications

    def log_error(self, error: BaseException) -> None:
        self.logger.error(f"Portal error: {error}", exc_info=error)

    def notify_success(self, message: str, persist: bool = True) -> None:
        """
        Display a success notification.

        Args:
            message: Message
            persist: Whether the message should be kept for the next request
        """
        self.add_notification(NotifyType.SUCCESS, message, persist)

    def notify_error(self, error: Union[str, BaseException], persist: bool = True, log_error: bool = True) -> None:
        """
        Display an error notification.

        Args:
            error: Message, or an exception whose text becomes the message
            persist: Whether the message should be kept for the next request
            log_error: Whether an exception should be logged first
        """
        if isinstance(error, BaseException):
            if log_error:
                self.log_error(error)
            message = str(error)
        else:
            message = error
        self.add_notification(NotifyType.ERROR, message, persist)

    def add_notification(self, notify_type: NotifyType, message: str, persist: bool) -> None:
        scope = NotificationScope.CARRIED_OVER if persist else NotificationScope.TRANSIENT
        self.context.notifications.add(notify_type, message, scope)

    # Redirects and error pages

    def redirect_to_action(self, action: str, controller: Optional[str] = None, **params) -> RedirectInstruction:
        return RedirectInstruction(action, controller or self.context.controller, params)

    def redirect_to_success_page(
        self,
        page_title: str,
        action: str = 'Index',
        controller: str = 'Home',
        wait_seconds: int = 3,
    ) -> RedirectInstruction:
        """
        Redirect to the success page.

        Args:
            page_title: Success message shown on the page
            action: Action to return to afterwards
            controller: Controller to return to afterwards
            wait_seconds: Seconds to stay on the success page
        """
        return RedirectInstruction(SUCCESS_PAGE_ACTION, SUCCESS_PAGE_CONTROLLER, {
            'pageTitle': page_title,
            'retAction': action,
            'retController': controller,
            'waitSeconds': wait_seconds,
        })

    def page_not_found(self):
        return self.view(PAGE_NOT_FOUND_VIEW, status=404)

    def access_denied(self) -> RedirectInstruction:
        return RedirectInstruction(ACCESS_DENIED_ACTION, ACCESS_DENIED_CONTROLLER, {
            'pageUrl': request.full_path.rstrip('?'),
        })

"""
Request pipeline stages.

Cross-cutting behavior is installed as named stages, in the order given by
``PIPELINE_STAGES``. Each stage hooks into Flask's before/after request
callbacks.
"""

import logging
from typing import Dict, Iterable, Type

from flask import current_app, g, redirect, request, session

from services.localization import Localizer
from services.notifications import NotifyType
from services.request_context import (
    CONTEXT_ATTR,
    RequestContext,
    current_request_context,
    split_endpoint,
)

logger = logging.getLogger(__name__)

CONTAINER_EXTENSION = 'portal.container'


class PipelineStage:
    """A before/after hook pair around request dispatch."""

    name = ''

    def install(self, app):
        app.before_request(self.before_request)
        app.after_request(self.after_request)

    def before_request(self):
        return None

    def after_request(self, response):
        return response


class HttpsRequirementStage(PipelineStage):
    """Redirects plain HTTP requests to HTTPS when REQUIRE_HTTPS is set."""

    name = 'https_requirement'

    def before_request(self):
        if not current_app.config.get('REQUIRE_HTTPS') or request.is_secure:
            return None
        secure_url = request.url.replace('http://', 'https://', 1)
        logger.info(f"Redirecting insecure request to {secure_url}")
        return redirect(secure_url, code=301)


class RequestScopeStage(PipelineStage):
    """Creates the RequestContext and carries notifications across requests."""

    name = 'request_scope'

    def install(self, app):
        super().install(app)
        app.context_processor(self.template_helpers)

    def before_request(self):
        config = current_app.config
        controller, action = split_endpoint(request.endpoint)
        culture = request.accept_languages.best_match(
            config['SUPPORTED_CULTURES'], default=config['DEFAULT_CULTURE']
        )
        context = RequestContext(
            current_app.extensions[CONTAINER_EXTENSION],
            config['APP_NAMESPACE'],
            controller=controller,
            action=action,
            culture=culture,
        )

        carried = {}
        for notify_type in NotifyType:
            key = context.notifications.key_for(notify_type)
            if key in session:
                carried[key] = session.pop(key)
        context.notifications.load_carried(carried)

        setattr(g, CONTEXT_ATTR, context)
        return None

    def after_request(self, response):
        context = getattr(g, CONTEXT_ATTR, None)
        if context is None:
            return response
        pending = context.notifications.pending_carried()
        for key, messages in pending.items():
            session[key] = messages
        if pending:
            logger.debug(f"Carried {sum(len(m) for m in pending.values())} notifications to next request")
        return response

    @staticmethod
    def template_helpers():
        def notifications(severity):
            context = getattr(g, CONTEXT_ATTR, None)
            if context is None:
                return []
            return context.notifications.consume(NotifyType(severity))

        def localize(key, *args):
            context = current_request_context()
            return context.service(Localizer).get(key, context.culture, args)

        return {'notifications': notifications, 'localize': localize}


class ThemeStage(PipelineStage):
    """Selects the theme stored in the session, falling back to DEFAULT_THEME."""

    name = 'theme'

    def before_request(self):
        config = current_app.config
        theme = session.get('theme')
        if theme not in config['THEMES']:
            theme = config['DEFAULT_THEME']
        g.theme = theme
        if getattr(g, CONTEXT_ATTR, None) is not None:
            current_request_context().theme = theme
        return None


STAGES: Dict[str, Type[PipelineStage]] = {
    stage.name: stage
    for stage in (HttpsRequirementStage, RequestScopeStage, ThemeStage)
}


def install_pipeline(app, stage_names: Iterable[str]):
    """
    Install the named stages on the app, in order.

    Raises:
        ValueError: If a stage name is not recognized
    """
    installed = []
    for name in stage_names:
        stage_class = STAGES.get(name)
        if stage_class is None:
            raise ValueError(
                f"Unknown pipeline stage: {name}. Must be one of: {', '.join(STAGES)}."
            )
        stage = stage_class()
        stage.install(app)
        installed.append(stage)
        logger.info(f"Installed pipeline stage '{name}'")
    return installed

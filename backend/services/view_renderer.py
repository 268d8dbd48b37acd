"""Locates and renders Jinja views by controller, view name and theme."""

import logging
from typing import Any, Dict, List, Optional, TextIO

from jinja2 import Environment, Template, TemplatesNotFound

from .errors import ViewNotFoundError

logger = logging.getLogger(__name__)

SHARED_FOLDER = 'Shared'
THEMES_FOLDER = 'Themes'


def view_candidates(controller: Optional[str], view_name: str, theme: Optional[str] = None) -> List[str]:
    """Template paths searched for a view, most specific first."""
    candidates = []
    if theme and controller:
        candidates.append(f"{THEMES_FOLDER}/{theme}/{controller}/{view_name}.html")
    if theme:
        candidates.append(f"{THEMES_FOLDER}/{theme}/{SHARED_FOLDER}/{view_name}.html")
    if controller:
        candidates.append(f"{controller}/{view_name}.html")
    candidates.append(f"{SHARED_FOLDER}/{view_name}.html")
    return candidates


class ViewRenderer:
    """Thin wrapper over the app's Jinja environment."""

    def __init__(self, jinja_env: Environment):
        self.jinja_env = jinja_env

    def find_view(self, controller: Optional[str], view_name: str, theme: Optional[str] = None) -> Template:
        """
        Find the template for a view.

        Raises:
            ViewNotFoundError: If none of the candidate paths exist
        """
        candidates = view_candidates(controller, view_name, theme)
        try:
            return self.jinja_env.select_template(candidates)
        except TemplatesNotFound as e:
            raise ViewNotFoundError(view_name, candidates) from e

    # Partials use the same search path as full views.
    find_partial_view = find_view

    def render(self, template: Template, view_context: Dict[str, Any], output: TextIO) -> None:
        """Stream the rendered template into output."""
        template.stream(view_context).dump(output)

"""Controllers package for the portal web app."""

from .base_controller import BaseController, RedirectInstruction
from .home_controller import HomeController
from .security_controller import SecurityController
from .contact_controller import ContactController

__all__ = [
    'BaseController',
    'RedirectInstruction',
    'HomeController',
    'SecurityController',
    'ContactController',
]

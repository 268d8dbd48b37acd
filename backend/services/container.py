"""
Service container used to resolve capabilities for page controllers.

Capabilities are keyed by type: a plain class (``Localizer``) or a
parameterized generic (``Repository[ContactMessage]``). Open generics can be
registered once and resolved for any type argument.
"""

import logging
import threading
import typing
from typing import Any, Callable, Dict

from .errors import ResolutionError, describe_capability

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Process-wide registry of capability factories."""

    def __init__(self):
        self._factories: Dict[Any, Callable[[], Any]] = {}
        self._singletons: Dict[Any, Any] = {}
        self._singleton_factories: Dict[Any, Callable[[], Any]] = {}
        self._open_generics: Dict[Any, Callable[..., Any]] = {}
        self._lock = threading.Lock()

    def register(self, capability, factory: Callable[[], Any]) -> None:
        """Register a factory called on every resolution of the capability."""
        self._factories[capability] = factory

    def register_singleton(self, capability, factory: Callable[[], Any]) -> None:
        """Register a factory called once per process; later resolutions share its instance."""
        self._singleton_factories[capability] = factory
        self._singletons.pop(capability, None)
        self._factories[capability] = lambda: self._get_singleton(capability)

    def register_instance(self, capability, instance) -> None:
        """Register an already-built instance."""
        self._factories[capability] = lambda: instance

    def register_open_generic(self, generic, factory: Callable[..., Any]) -> None:
        """
        Register a factory for every parameterization of a generic.

        Args:
            generic: Unparameterized generic class, e.g. Repository
            factory: Called with the type arguments, e.g. factory(ContactMessage)
        """
        self._open_generics[generic] = factory

    def is_registered(self, capability) -> bool:
        if capability in self._factories:
            return True
        return typing.get_origin(capability) in self._open_generics

    def resolve(self, capability):
        """
        Build an instance for the capability.

        Raises:
            ResolutionError: If nothing is registered, the factory fails or returns None
        """
        factory = self._factories.get(capability)
        if factory is None:
            factory = self._open_generic_factory(capability)
        if factory is None:
            raise ResolutionError(capability)

        try:
            instance = factory()
        except ResolutionError:
            raise
        except Exception as e:
            logger.error(f"Factory for {describe_capability(capability)} failed: {e}")
            raise ResolutionError(capability, f"factory failed: {e}") from e

        if instance is None:
            raise ResolutionError(capability, "factory returned None")
        return instance

    def _open_generic_factory(self, capability):
        origin = typing.get_origin(capability)
        open_factory = self._open_generics.get(origin) if origin is not None else None
        if open_factory is None:
            return None
        args = typing.get_args(capability)
        return lambda: open_factory(*args)

    def _get_singleton(self, capability):
        with self._lock:
            if capability not in self._singletons:
                self._singletons[capability] = self._singleton_factories[capability]()
                logger.info(f"Created singleton {describe_capability(capability)}")
            return self._singletons[capability]

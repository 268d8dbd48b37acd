"""Unit tests for the service container."""
from __future__ import annotations

import pytest

from models import ContactMessage
from services.container import ServiceContainer
from services.errors import ResolutionError
from services.repository import Repository


class Clock:
    pass


def test_resolve_unregistered_capability_raises() -> None:
    container = ServiceContainer()

    with pytest.raises(ResolutionError) as exc_info:
        container.resolve(Clock)

    assert exc_info.value.capability is Clock
    assert "Clock" in str(exc_info.value)


def test_register_calls_factory_on_every_resolution() -> None:
    container = ServiceContainer()
    container.register(Clock, Clock)

    assert container.resolve(Clock) is not container.resolve(Clock)


def test_register_singleton_builds_once() -> None:
    container = ServiceContainer()
    calls = []

    def factory():
        calls.append(1)
        return Clock()

    container.register_singleton(Clock, factory)

    assert container.resolve(Clock) is container.resolve(Clock)
    assert len(calls) == 1


def test_register_instance_returns_same_object() -> None:
    container = ServiceContainer()
    clock = Clock()
    container.register_instance(Clock, clock)

    assert container.resolve(Clock) is clock


def test_factory_failure_is_wrapped_in_resolution_error() -> None:
    container = ServiceContainer()

    def broken():
        raise RuntimeError("boom")

    container.register(Clock, broken)

    with pytest.raises(ResolutionError) as exc_info:
        container.resolve(Clock)

    assert "boom" in exc_info.value.reason
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_factory_returning_none_raises() -> None:
    container = ServiceContainer()
    container.register(Clock, lambda: None)

    with pytest.raises(ResolutionError, match="returned None"):
        container.resolve(Clock)


def test_open_generic_receives_type_argument() -> None:
    container = ServiceContainer()
    seen = []

    def factory(entity_type):
        seen.append(entity_type)
        return object()

    container.register_open_generic(Repository, factory)

    assert container.is_registered(Repository[ContactMessage])
    container.resolve(Repository[ContactMessage])
    assert seen == [ContactMessage]


def test_explicit_registration_wins_over_open_generic() -> None:
    container = ServiceContainer()
    explicit = object()
    container.register_open_generic(Repository, lambda entity_type: object())
    container.register_instance(Repository[ContactMessage], explicit)

    assert container.resolve(Repository[ContactMessage]) is explicit


def test_is_registered_false_for_unknown() -> None:
    assert not ServiceContainer().is_registered(Clock)

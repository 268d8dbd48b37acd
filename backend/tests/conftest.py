"""Shared pytest fixtures for portal tests."""
from __future__ import annotations

from collections.abc import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from app import create_app
from models import ContactMessage
from pipeline import CONTAINER_EXTENSION
from services.container import ServiceContainer
from services.repository import Repository


class FakeRepository(Repository):
    """In-memory repository recording what controllers save."""

    def __init__(self):
        self.items = {}
        self.next_id = 1
        self.fail_with = None

    def get(self, entity_id):
        return self.items.get(entity_id)

    def list(self, limit=50):
        return list(self.items.values())[:limit]

    def add(self, entity):
        if self.fail_with is not None:
            raise self.fail_with
        entity.id = self.next_id
        self.items[entity.id] = entity
        self.next_id += 1
        return entity

    def remove(self, entity_id):
        return self.items.pop(entity_id, None) is not None


@pytest.fixture()
def app() -> Flask:
    return create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'DATABASE_URL': None,
        'REQUIRE_HTTPS': False,
        'SUPPORTED_CULTURES': ['en', 'fr'],
        'DEFAULT_CULTURE': 'en',
        'THEMES': ['default', 'dark'],
        'DEFAULT_THEME': 'default',
        'PIPELINE_STAGES': ['https_requirement', 'request_scope', 'theme'],
    })


@pytest.fixture()
def container(app: Flask) -> ServiceContainer:
    return app.extensions[CONTAINER_EXTENSION]


@pytest.fixture()
def contact_repository(container: ServiceContainer) -> FakeRepository:
    repository = FakeRepository()
    container.register_instance(Repository[ContactMessage], repository)
    return repository


@pytest.fixture()
def client(app: Flask) -> Generator[FlaskClient, None, None]:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def request_context(app: Flask):
    """Run before_request stages for GET / and yield the portal RequestContext."""
    from services.request_context import current_request_context

    with app.test_request_context('/', headers={'Accept-Language': 'fr-FR,fr;q=0.9'}):
        app.preprocess_request()
        yield current_request_context()

"""Unit tests for the Postgres repository with a mocked connection."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

from models import ContactMessage
from services import repository as repository_module
from services.errors import RepositoryError
from services.repository import AggregateRoot, PostgresRepository


def fake_connection(rows=None, one=None, rowcount=0):
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.fetchall.return_value = rows or []
    cursor.fetchone.return_value = one
    cursor.rowcount = rowcount
    return conn, cursor


@pytest.fixture()
def use_connection(monkeypatch):
    def install(conn):
        @contextmanager
        def fake_db_connection(label, database_url=None):
            yield conn

        monkeypatch.setattr(repository_module, 'db_connection', fake_db_connection)

    return install


def test_rejects_non_aggregate_types() -> None:
    @dataclass
    class Note:
        text: str

    with pytest.raises(TypeError):
        PostgresRepository(Note)


def test_rejects_aggregate_without_table() -> None:
    @dataclass
    class Draft(AggregateRoot):
        text: str

    with pytest.raises(TypeError, match='__tablename__'):
        PostgresRepository(Draft)


def test_add_inserts_without_id_and_assigns_returned_id(use_connection) -> None:
    conn, cursor = fake_connection(one={'id': 7})
    use_connection(conn)
    contact = ContactMessage(name='Ada', email='ada@example.com', message='Hi')

    saved = PostgresRepository(ContactMessage).add(contact)

    assert saved is contact
    assert contact.id == 7
    params = cursor.execute.call_args.args[1]
    assert params[:3] == ['Ada', 'ada@example.com', 'Hi']
    assert len(params) == 4


def test_add_without_database_raises(use_connection) -> None:
    use_connection(None)

    with pytest.raises(RepositoryError):
        PostgresRepository(ContactMessage).add(ContactMessage(name='a', email='a@b.c', message='m'))


def test_get_maps_row_to_entity(use_connection) -> None:
    row = {'id': 3, 'name': 'Ada', 'email': 'ada@example.com', 'message': 'Hi', 'created_at': None}
    conn, cursor = fake_connection(one=row)
    use_connection(conn)

    contact = PostgresRepository(ContactMessage).get(3)

    assert contact == ContactMessage(name='Ada', email='ada@example.com', message='Hi', created_at=None, id=3)
    assert cursor.execute.call_args.args[1] == (3,)


def test_get_missing_returns_none(use_connection) -> None:
    conn, _ = fake_connection(one=None)
    use_connection(conn)

    assert PostgresRepository(ContactMessage).get(99) is None


def test_list_without_database_returns_empty(use_connection) -> None:
    use_connection(None)

    assert PostgresRepository(ContactMessage).list() == []


def test_list_passes_limit(use_connection) -> None:
    conn, cursor = fake_connection(rows=[
        {'id': 1, 'name': 'A', 'email': 'a@x.io', 'message': 'm', 'created_at': None},
    ])
    use_connection(conn)

    contacts = PostgresRepository(ContactMessage).list(limit=5)

    assert [c.id for c in contacts] == [1]
    assert cursor.execute.call_args.args[1] == (5,)


def test_remove_reports_deleted_rows(use_connection) -> None:
    conn, _ = fake_connection(rowcount=1)
    use_connection(conn)

    assert PostgresRepository(ContactMessage).remove(1) is True

"""
Repositories for aggregate roots.

``Repository[T]`` is the capability controllers ask for; the app registers
``PostgresRepository`` as the default implementation for every aggregate.
"""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from psycopg2 import sql

from db import db_connection
from .errors import RepositoryError

logger = logging.getLogger(__name__)


class AggregateRoot:
    """Entity with its own identity and lifecycle; the unit of persistence."""

    __tablename__: str = ''
    id: Optional[int] = None


TEntity = TypeVar('TEntity', bound=AggregateRoot)


def require_aggregate_root(entity_type) -> None:
    if not (isinstance(entity_type, type) and issubclass(entity_type, AggregateRoot)):
        raise TypeError(f"{entity_type!r} is not an AggregateRoot subclass")


class Repository(ABC, Generic[TEntity]):
    """Persistence contract for one aggregate type."""

    @abstractmethod
    def get(self, entity_id: int) -> Optional[TEntity]:
        pass

    @abstractmethod
    def list(self, limit: int = 50) -> List[TEntity]:
        pass

    @abstractmethod
    def add(self, entity: TEntity) -> TEntity:
        pass

    @abstractmethod
    def remove(self, entity_id: int) -> bool:
        pass


class PostgresRepository(Repository[TEntity]):
    """Repository over one table, mapping dataclass fields to columns."""

    def __init__(self, entity_type: Type[TEntity], database_url: Optional[str] = None):
        require_aggregate_root(entity_type)
        if not dataclasses.is_dataclass(entity_type):
            raise TypeError(f"{entity_type.__name__} must be a dataclass")
        if not entity_type.__tablename__:
            raise TypeError(f"{entity_type.__name__} has no __tablename__")
        self.entity_type = entity_type
        self.database_url = database_url
        self.table = sql.Identifier(entity_type.__tablename__)
        self.columns = [f.name for f in dataclasses.fields(entity_type)]

    def get(self, entity_id):
        query = sql.SQL("SELECT {fields} FROM {table} WHERE id = %s;").format(
            fields=self._fields(self.columns),
            table=self.table,
        )
        with db_connection(f"get {self.entity_type.__name__}", self.database_url) as conn:
            if conn is None:
                return None
            with conn.cursor() as cur:
                cur.execute(query, (entity_id,))
                row = cur.fetchone()
                return self._to_entity(row) if row else None

    def list(self, limit=50):
        query = sql.SQL("SELECT {fields} FROM {table} ORDER BY id DESC LIMIT %s;").format(
            fields=self._fields(self.columns),
            table=self.table,
        )
        with db_connection(f"list {self.entity_type.__name__}", self.database_url) as conn:
            if conn is None:
                logger.warning("Database unavailable, returning empty list")
                return []
            with conn.cursor() as cur:
                cur.execute(query, (limit,))
                return [self._to_entity(row) for row in cur.fetchall() or []]

    def add(self, entity):
        values = self._to_row(entity)
        values.pop('id', None)
        names = list(values)
        query = sql.SQL("INSERT INTO {table} ({fields}) VALUES ({values}) RETURNING id;").format(
            table=self.table,
            fields=self._fields(names),
            values=sql.SQL(', ').join(sql.Placeholder() * len(names)),
        )
        with db_connection(f"add {self.entity_type.__name__}", self.database_url) as conn:
            if conn is None:
                raise RepositoryError(f"Cannot save {self.entity_type.__name__}: database unavailable")
            try:
                with conn:  # Transaction context
                    with conn.cursor() as cur:
                        cur.execute(query, [values[name] for name in names])
                        row = cur.fetchone()
                        entity.id = row['id'] if row else None
                        return entity
            except Exception:
                logger.exception(f"Failed to save {self.entity_type.__name__} to the database")
                raise

    def remove(self, entity_id):
        query = sql.SQL("DELETE FROM {table} WHERE id = %s;").format(table=self.table)
        with db_connection(f"remove {self.entity_type.__name__}", self.database_url) as conn:
            if conn is None:
                raise RepositoryError(f"Cannot remove {self.entity_type.__name__}: database unavailable")
            with conn:
                with conn.cursor() as cur:
                    cur.execute(query, (entity_id,))
                    return cur.rowcount > 0

    @staticmethod
    def _fields(names):
        return sql.SQL(', ').join(sql.Identifier(name) for name in names)

    def _to_row(self, entity) -> Dict[str, Any]:
        return {name: getattr(entity, name) for name in self.columns}

    def _to_entity(self, row):
        return self.entity_type(**{name: row.get(name) for name in self.columns})

"""
Entity store.

`Repository` is the only surface the routes and the aggregation code see.
`MemoryRepository` keeps everything in a dict and is what tests and local
development run against; `MySqlRepository` persists to MySQL through the
mysql-connector connection pool.
"""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from models import RESOURCES, Resource, Schema, utcnow

logger = logging.getLogger(__name__)


class Repository(ABC):
    def __init__(self, resource: Resource):
        self.resource = resource

    @abstractmethod
    def list(self) -> list:
        ...

    @abstractmethod
    def get(self, id: str) -> Optional[Schema]:
        ...

    @abstractmethod
    def create(self, fields) -> Schema:
        ...

    @abstractmethod
    def update(self, id: str, partial) -> Optional[Schema]:
        ...

    @abstractmethod
    def delete(self, id: str) -> bool:
        ...

    def _new_entity(self, fields):
        if not isinstance(fields, self.resource.create_model):
            fields = self.resource.create_model.model_validate(fields)
        return self.resource.model(
            id=str(uuid.uuid4()),
            created_at=utcnow(),
            **fields.model_dump(),
        )

    def _changes(self, partial) -> dict:
        if not isinstance(partial, self.resource.update_model):
            partial = self.resource.update_model.model_validate(partial or {})
        return partial.model_dump(exclude_unset=True)


class MemoryRepository(Repository):
    def __init__(self, resource: Resource):
        super().__init__(resource)
        self._items = {}
        self._lock = threading.RLock()

    def list(self):
        with self._lock:
            items = list(self._items.values())
        key = self.resource.newest_first_by
        if key:
            # sorted() is stable under reverse=True, equal keys keep insertion order
            items = sorted(items, key=lambda item: getattr(item, key), reverse=True)
        return items

    def get(self, id):
        with self._lock:
            return self._items.get(id)

    def create(self, fields):
        entity = self._new_entity(fields)
        with self._lock:
            self._items[entity.id] = entity
        return entity

    def update(self, id, partial):
        changes = self._changes(partial)
        with self._lock:
            existing = self._items.get(id)
            if existing is None:
                return None
            updated = existing.model_copy(update=changes)
            self._items[id] = updated
        return updated

    def delete(self, id):
        with self._lock:
            return self._items.pop(id, None) is not None


class MySqlRepository(Repository):
    def __init__(self, resource: Resource, pool):
        super().__init__(resource)
        self.pool = pool

    @contextmanager
    def _cursor(self):
        conn = self.pool.get_connection()
        try:
            with conn.cursor(dictionary=True) as cur:
                yield cur
            conn.commit()
        finally:
            conn.close()

    @property
    def _columns(self):
        return ['id', 'created_at'] + self.resource.fields

    def _select(self):
        cols = ", ".join(f"`{c}`" for c in self._columns)
        return f"SELECT {cols} FROM `{self.resource.table}`"

    def _order_by(self):
        key = self.resource.newest_first_by
        if key:
            return f" ORDER BY `{key}` DESC, `created_at`, `id`"
        return " ORDER BY `created_at`, `id`"

    def _to_entity(self, row):
        # DATETIME columns hold UTC without an offset
        created_at = row.get('created_at')
        if isinstance(created_at, datetime) and created_at.tzinfo is None:
            row = dict(row, created_at=created_at.replace(tzinfo=timezone.utc))
        return self.resource.model.model_validate(row)

    def list(self):
        with self._cursor() as cur:
            cur.execute(self._select() + self._order_by())
            return [self._to_entity(row) for row in cur.fetchall()]

    def get(self, id):
        with self._cursor() as cur:
            cur.execute(self._select() + " WHERE `id`=%s", (id,))
            row = cur.fetchone()
        return self._to_entity(row) if row else None

    def create(self, fields):
        entity = self._new_entity(fields)
        values = [getattr(entity, c) for c in self._columns]
        values[1] = entity.created_at.replace(tzinfo=None)
        cols = ", ".join(f"`{c}`" for c in self._columns)
        marks = ", ".join(["%s"] * len(self._columns))
        with self._cursor() as cur:
            cur.execute(
                f"INSERT INTO `{self.resource.table}` ({cols}) VALUES ({marks})",
                tuple(values)
            )
        return entity

    def update(self, id, partial):
        changes = self._changes(partial)
        with self._cursor() as cur:
            cur.execute(self._select() + " WHERE `id`=%s", (id,))
            row = cur.fetchone()
            if not row:
                return None
            updated = self._to_entity(row).model_copy(update=changes)
            if changes:
                assignments = ", ".join(f"`{c}`=%s" for c in changes)
                cur.execute(
                    f"UPDATE `{self.resource.table}` SET {assignments} WHERE `id`=%s",
                    tuple(changes.values()) + (id,)
                )
        return updated

    def delete(self, id):
        with self._cursor() as cur:
            cur.execute(f"DELETE FROM `{self.resource.table}` WHERE `id`=%s", (id,))
            return cur.rowcount > 0


class Storage:
    """One repository per resource, looked up by resource name."""

    def __init__(self, repositories):
        self._repositories = dict(repositories)

    @classmethod
    def in_memory(cls):
        return cls({name: MemoryRepository(r) for name, r in RESOURCES.items()})

    @classmethod
    def mysql(cls, pool):
        logger.info("Using MySQL storage")
        return cls({name: MySqlRepository(r, pool) for name, r in RESOURCES.items()})

    def __getitem__(self, name) -> Repository:
        return self._repositories[name]

    @property
    def subscriptions(self) -> Repository:
        return self._repositories['subscriptions']

    @property
    def transactions(self) -> Repository:
        return self._repositories['transactions']

    @property
    def savings(self) -> Repository:
        return self._repositories['savings']

    @property
    def goals(self) -> Repository:
        return self._repositories['goals']

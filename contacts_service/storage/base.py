"""Shared persistence behaviour for hashed entities.

A gateway translates between a domain value and its table row. Rows never
leave the gateway: every finder returns freshly built domain objects.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HashedStorage(Generic[T]):
    table: Any = None

    def __init__(self, db: Session):
        self.db = db

    # ---- row mapping ----

    @staticmethod
    def to_item(row: Any) -> T:
        raise NotImplementedError

    def fill_row(self, row: Any, item: T) -> None:
        raise NotImplementedError

    def order_by(self) -> tuple:
        return (self.table.id,)

    # ---- queries ----

    def find_by_id(self, key: int) -> Optional[T]:
        row = self.db.get(self.table, key)
        return None if row is None else self.to_item(row)

    def find_by_hash(self, hash_key: int) -> Optional[T]:
        q = select(self.table).where(self.table.hash_key == hash_key)
        row = self.db.execute(q).scalar_one_or_none()
        return None if row is None else self.to_item(row)

    def find_all(self) -> list[T]:
        rows = self.db.execute(select(self.table).order_by(*self.order_by())).scalars().all()
        return [self.to_item(r) for r in rows]

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(self.table)).scalar_one()

    # ---- writes ----

    def save(self, item: Any) -> T:
        """Insert or update the row for ``item`` and return the stored value.

        An insert that collides with an existing hash key (a concurrent writer
        got there first) resolves to the row already stored.
        """
        item.prepare_hash()
        row = self.db.get(self.table, item.key) if item.key else None
        if row is not None:
            self.fill_row(row, item)
            self.db.flush()
            return self.to_item(row)

        row = self.table()
        self.fill_row(row, item)
        try:
            with self.db.begin_nested():
                self.db.add(row)
                self.db.flush()
        except IntegrityError:
            existing = self.find_by_hash(item.hash_key)
            if existing is None:
                raise
            logger.info("Insert of %s lost a race, using key %s", item.description(), existing.key)
            return existing

        logger.debug("Stored %s as key %s", item.description(), row.id)
        return self.to_item(row)

    def delete(self, item: Any) -> None:
        row = self.db.get(self.table, item.key)
        if row is not None:
            self.db.delete(row)
            self.db.flush()

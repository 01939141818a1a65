"""Identity and lifecycle shared by every persistent entity.

Each entity carries a surrogate ``key`` (0 until first saved) and a content
``hash_key`` (0 until computed from the canonical form). Changing any field
of the canonical form clears both, so the next save re-resolves identity
against the store.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from contacts_service.domain.hashing import hash64
from contacts_service.storage.registry import registry

logger = logging.getLogger(__name__)


class Hashed:
    """An entity keyed both by surrogate and by the hash of its canonical form."""

    # human name used in duplicate messages
    noun = "item"

    def __init__(self) -> None:
        self.key = 0
        self.hash_key = 0

    @classmethod
    def storage(cls, db: Session) -> Any:
        return registry.storage(db, cls)

    @classmethod
    def count(cls, db: Session) -> int:
        return cls.storage(db).count()

    def format_value(self) -> str:
        raise NotImplementedError

    def was_saved(self) -> bool:
        return self.key != 0

    def prepare_hash(self) -> None:
        if self.hash_key == 0:
            self.hash_key = hash64(self.format_value())

    def digest(self) -> int:
        self.prepare_hash()
        return self.hash_key

    def mark_dirty(self) -> None:
        self.key = 0
        self.hash_key = 0

    def find_with_hash(self, db: Session) -> Optional[Any]:
        return self.storage(db).find_by_hash(self.digest())

    def find_item(self, db: Session) -> Optional[Any]:
        if self.key:
            return self.storage(db).find_by_id(self.key)
        return self.find_with_hash(db)

    def save_item(self, db: Session) -> Any:
        """Persist this value, returning the stored instance.

        Values are immutable once saved, and an equal value already in the
        store is returned instead of inserting a second row. Callers must use
        the returned instance.
        """
        if self.key:
            return self
        existing = self.find_with_hash(db)
        if existing is not None:
            logger.debug("Reusing stored %s", existing.hash_description())
            return existing
        return self.storage(db).save(self)

    def remove_item(self, db: Session) -> bool:
        if not self.key:
            return False
        self.storage(db).delete(self)
        return True

    def description(self) -> str:
        return f"{type(self).__name__}='{self.format_value()}'"

    def hash_description(self) -> str:
        return f"{self.description()}, hash={self.digest()}, key={self.key}"

    def format_fully(self, prefix: str) -> str:
        return f"{prefix} {self.hash_description()}"

    def describe(self) -> None:
        logger.info(self.hash_description())

    def __eq__(self, other: object) -> bool:
        if other is None or type(other) is not type(self):
            return NotImplemented
        return self.format_value() == other.format_value()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.format_value()))

    def __repr__(self) -> str:
        return f"<{self.hash_description()}>"

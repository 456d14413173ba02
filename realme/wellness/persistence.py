"""
Key-value persistence for per-user wellness records.

Values are opaque strings; callers own the serialization format.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from realme.core.config import STORAGE_KEY_PREFIX
from realme.core.exceptions import PersistenceError
from realme.wellness.models import KeyValueEntry

logger = logging.getLogger(__name__)


def achievements_key(email: str, prefix: str = STORAGE_KEY_PREFIX) -> str:
    return f"{prefix}-achievements-{email}"


def interactions_key(email: str, prefix: str = STORAGE_KEY_PREFIX) -> str:
    return f"{prefix}-interactions-{email}"


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SqlKeyValueStore(KeyValueStore):
    """
    Key-value store over the kv_entries table.

    Takes a session factory so each operation runs in its own short session.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            entry = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
            return entry.value if entry else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read {key}: {e}") from e
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            entry = db.query(KeyValueEntry).filter(KeyValueEntry.key == key).first()
            if entry:
                entry.value = value
            else:
                db.add(KeyValueEntry(key=key, value=value))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to write {key}: {e}") from e
        finally:
            db.close()

    def remove(self, key: str) -> None:
        db = self.session_factory()
        try:
            db.query(KeyValueEntry).filter(KeyValueEntry.key == key).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to remove {key}: {e}") from e
        finally:
            db.close()

# app/core/storage.py
"""Key-value storage port and its SQL and in-memory implementations.

Values are opaque strings; callers own the encoding.
"""
from enum import Enum
from typing import Callable, Protocol

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import Session

from app.core.database import Base


class StorageKey(str, Enum):
    CURRENT_USER = "currentUser"
    USERS = "users"
    APPLICATIONS = "applications"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)


class SqlKeyValueStore:
    """One short session per call; no transaction spans several keys."""

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        with self._session_factory() as db:
            entry = db.get(KeyValueEntry, str(key))
            return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as db:
            db.merge(KeyValueEntry(key=str(key), value=value))
            db.commit()

    def remove(self, key: str) -> None:
        with self._session_factory() as db:
            entry = db.get(KeyValueEntry, str(key))
            if entry is not None:
                db.delete(entry)
                db.commit()


class InMemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(str(key))

    def set(self, key: str, value: str) -> None:
        self.data[str(key)] = value

    def remove(self, key: str) -> None:
        self.data.pop(str(key), None)

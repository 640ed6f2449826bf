"""Thread-safe in-memory storage for user records."""

from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from .models import User


class ReadWriteLock:
    """Many concurrent readers or a single writer.

    New readers are held back only while a writer is inside its mutating
    step; a writer that is still waiting for earlier readers to leave does
    not block anyone.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._condition:
            while self._writer_active:
                self._condition.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._condition:
            while self._writer_active or self._readers:
                self._condition.wait()
            self._writer_active = True
        try:
            yield
        finally:
            with self._condition:
                self._writer_active = False
                self._condition.notify_all()


class UserStore:
    """Maps identifiers to users; records become visible all at once."""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._users: Dict[uuid.UUID, User] = {}

    def insert(self, user: User) -> None:
        """Add ``user``. Its identifier must be fresh from the generator."""

        with self._lock.write():
            self._users[user.id] = user

    def get(self, user_id: uuid.UUID) -> Optional[User]:
        with self._lock.read():
            return self._users.get(user_id)

    def list_all(self) -> List[User]:
        """Return a snapshot of every stored user in no particular order."""

        with self._lock.read():
            return list(self._users.values())

    def count(self) -> int:
        with self._lock.read():
            return len(self._users)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, user_id: object) -> bool:
        with self._lock.read():
            return user_id in self._users


__all__ = ["ReadWriteLock", "UserStore"]

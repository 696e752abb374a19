# workout_api/repositories/base.py
from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generic, Hashable, Iterator, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from workout_api.errors import StoreError

T = TypeVar("T")  # SQLAlchemy model type

log = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self, action: str) -> Iterator[Session]:
        """
        Unit of work: commit when the block finishes, roll back on any error.

        Store failures are re-raised as StoreError, everything else (domain
        errors raised inside the block) propagates unchanged after rollback.
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.exception("store failure while trying to %s", action)
            raise StoreError() from exc
        except Exception:
            self.db.rollback()
            raise

    @contextmanager
    def reading(self, action: str) -> Iterator[Session]:
        try:
            yield self.db
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.exception("store failure while trying to %s", action)
            raise StoreError() from exc

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity


@dataclass
class _Holder:
    lock: threading.Lock = field(default_factory=threading.Lock)
    waiters: int = 0


class KeyedLock:
    """
    One mutex per key, created on demand and dropped when nobody holds it.

    Serializes writers of the same key inside this process; cross-process
    ordering is left to row locks in the database.
    """
    def __init__(self):
        self._guard = threading.Lock()
        self._holders: dict[Hashable, _Holder] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            holder = self._holders.setdefault(key, _Holder())
            holder.waiters += 1
        try:
            with holder.lock:
                yield
        finally:
            with self._guard:
                holder.waiters -= 1
                if holder.waiters == 0:
                    del self._holders[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._holders)

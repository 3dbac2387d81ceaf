"""Read-through cache in front of a session repository."""

import copy
import logging
from dataclasses import dataclass

from wa_gateway.domain.sessions import Session
from wa_gateway.services.cache import Cache
from wa_gateway.services.sessions import SessionRepository

logger = logging.getLogger(__name__)


def _id_key(session_id: str) -> str:
    return f"session:id:{session_id}"


def _name_key(name: str) -> str:
    return f"session:name:{name}"


@dataclass
class CachedSessionRepository(SessionRepository):
    """Caches single-session lookups; lists always hit the backing store.

    Cached sessions are copied on the way in and out so callers mutating a
    returned session never touch the cached one.
    """

    repository: SessionRepository
    cache: Cache
    ttl_seconds: int

    def get_by_id(self, session_id: str) -> Session:
        cached = self._read(_id_key(session_id))
        if cached is not None:
            return cached
        session = self.repository.get_by_id(session_id)
        self._write(session)
        return session

    def get_by_name(self, name: str) -> Session:
        cached = self._read(_name_key(name))
        if cached is not None:
            return cached
        session = self.repository.get_by_name(name)
        self._write(session)
        return session

    def get_all(self) -> list[Session]:
        return self.repository.get_all()

    def create_with_generated_id(self, session: Session) -> str:
        return self.repository.create_with_generated_id(session)

    def update(self, session: Session) -> None:
        self.repository.update(session)
        self._invalidate(session.id, session.name)

    def delete(self, session_id: str) -> None:
        cached = self._read(_id_key(session_id))
        self.repository.delete(session_id)
        self._invalidate(session_id, cached.name if cached else None)

    def _read(self, key: str) -> Session | None:
        try:
            value = self.cache.get(key)
        except Exception:
            logger.warning("Session cache read failed", extra={"key": key})
            return None
        if isinstance(value, Session):
            return copy.deepcopy(value)
        return None

    def _write(self, session: Session) -> None:
        snapshot = copy.deepcopy(session)
        try:
            self.cache.set(_id_key(session.id), snapshot, self.ttl_seconds)
            self.cache.set(_name_key(session.name), snapshot, self.ttl_seconds)
        except Exception:
            logger.warning(
                "Session cache write failed", extra={"session_id": session.id}
            )

    def _invalidate(self, session_id: str, name: str | None) -> None:
        keys = [_id_key(session_id)]
        if name:
            keys.append(_name_key(name))
        for key in keys:
            try:
                self.cache.delete(key)
            except Exception:
                logger.warning("Session cache delete failed", extra={"key": key})

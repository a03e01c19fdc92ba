"""
Sessões do lado do servidor.

Uma Session liga um identificador opaco (sid) a um usuário até expires_at.
O armazenamento é intercambiável: RedisSessionStore em produção e
MemorySessionStore para testes e desenvolvimento local.
"""

import json
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError

from alerta_dengue.core.config import settings
from alerta_dengue.core.security import session_expiration, utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    id: str
    user_id: int
    expires_at: datetime

    @property
    def expired(self) -> bool:
        return self.expires_at <= utcnow()


def new_session(user_id: int) -> Session:
    return Session(id=secrets.token_urlsafe(32), user_id=user_id, expires_at=session_expiration())


class SessionStore(Protocol):
    async def save(self, session: Session) -> None: ...

    async def get(self, session_id: str) -> Optional[Session]: ...

    async def delete(self, session_id: str) -> None: ...

    async def ping(self) -> bool: ...

class MemorySessionStore:
    """Sessões em um dicionário do processo. Expiradas são descartadas na leitura."""

    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    async def save(self, session: Session) -> None:
        self._sessions[session.id] = session

    async def get(self, session_id: str) -> Optional[Session]:
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if session.expired:
            self._sessions.pop(session_id, None)
            return None
        return session

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._sessions)


class RedisSessionStore:
    """Sessões como chaves session:<sid> no Redis, com TTL igual à validade."""

    prefix = "session:"

    def __init__(self, redis: Redis) -> None:
        self.redis = redis

    def _key(self, session_id: str) -> str:
        return f"{self.prefix}{session_id}"

    async def save(self, session: Session) -> None:
        ttl = int((session.expires_at - utcnow()).total_seconds())
        if ttl <= 0:
            return
        value = json.dumps({"user_id": session.user_id, "expires_at": session.expires_at.isoformat()})
        await self.redis.set(self._key(session.id), value, ex=ttl)

    async def get(self, session_id: str) -> Optional[Session]:
        raw = await self.redis.get(self._key(session_id))
        if not raw:
            return None

        # Converter para string se for bytes
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")

        try:
            data = json.loads(raw)
            session = Session(
                id=session_id,
                user_id=int(data["user_id"]),
                expires_at=datetime.fromisoformat(data["expires_at"]),
            )
        except (ValueError, KeyError, TypeError):
            logger.warning(f"Registro de sessão corrompido descartado: {session_id}")
            await self.delete(session_id)
            return None

        return None if session.expired else session

    async def delete(self, session_id: str) -> None:
        await self.redis.delete(self._key(session_id))

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except (RedisError, OSError):
            return False


def build_session_store() -> SessionStore:
    """Cria o session store configurado em SESSION_BACKEND."""
    if settings.SESSION_BACKEND == "memory":
        logger.warning("Usando sessões em memória; elas serão perdidas ao reiniciar o processo")
        return MemorySessionStore()

    redis = Redis(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        decode_responses=True
    )
    return RedisSessionStore(redis)

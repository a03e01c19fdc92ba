from typing import Optional

from alerta_dengue.core.errors import Forbidden, Unauthorized
from alerta_dengue.core.sessions import Session
from alerta_dengue.models.user import User
from alerta_dengue.repositories.base import ReportStore


async def require_authenticated(session: Optional[Session], store: ReportStore) -> User:
    """
    Devolve o usuário dono de uma sessão ativa.
    Sessão ausente, expirada ou de usuário inexistente resulta em Unauthorized.
    """
    if session is None or session.expired:
        raise Unauthorized()

    user = await store.find_user_by_id(session.user_id)
    if user is None:
        raise Unauthorized()
    return user


def require_ownership(user_id: int, resource_owner_id: int) -> None:
    """Só o dono do recurso pode alterá-lo."""
    if user_id != resource_owner_id:
        raise Forbidden()

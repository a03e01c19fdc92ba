from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from alerta_dengue.core.authorization import require_authenticated
from alerta_dengue.core.config import settings
from alerta_dengue.core.errors import Unauthorized
from alerta_dengue.core.security import decode_token
from alerta_dengue.core.sessions import Session, SessionStore, build_session_store
from alerta_dengue.db.session import get_db
from alerta_dengue.models.user import User
from alerta_dengue.repositories.base import ReportStore
from alerta_dengue.repositories.sql import SqlAlchemyReportStore
from alerta_dengue.services.accounts import AccountService
from alerta_dengue.services.geocoding import GeocodingAdapter
from alerta_dengue.services.reports import ReportService

# Token no cabeçalho Authorization; auto_error=False para aceitar também o cookie
bearer_scheme = HTTPBearer(auto_error=False)

@lru_cache
def get_session_store() -> SessionStore:
    """Session store único por processo, conforme SESSION_BACKEND."""
    return build_session_store()

def get_store(db: AsyncSession = Depends(get_db)) -> ReportStore:
    return SqlAlchemyReportStore(db)

def get_account_service(
    store: ReportStore = Depends(get_store),
    sessions: SessionStore = Depends(get_session_store),
) -> AccountService:
    return AccountService(store, sessions)

def get_report_service(store: ReportStore = Depends(get_store)) -> ReportService:
    return ReportService(store)

def get_geocoding_adapter() -> GeocodingAdapter:
    return GeocodingAdapter()

def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Token de sessão do cabeçalho Authorization: Bearer ou do cookie de sessão."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)

async def get_current_session(
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
) -> Session:
    """
    Valida o token e busca a sessão correspondente no session store.
    Sessões encerradas (logout) deixam de valer mesmo com o token ainda válido.
    """
    if not token:
        raise Unauthorized()

    payload = decode_token(token)
    if not payload or payload.get("type") != "session":
        raise Unauthorized("Sessão inválida ou expirada")

    session_id = payload.get("sid")
    if not session_id:
        raise Unauthorized("Sessão inválida ou expirada")

    session = await sessions.get(session_id)
    if session is None or str(session.user_id) != payload.get("sub"):
        raise Unauthorized("Sessão inválida ou expirada")

    return session

async def get_current_user(
    session: Session = Depends(get_current_session),
    store: ReportStore = Depends(get_store),
) -> User:
    """Dependência que exige um usuário autenticado."""
    return await require_authenticated(session, store)

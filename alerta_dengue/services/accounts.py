import logging
from typing import Any, Mapping, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from alerta_dengue.core.authorization import require_authenticated
from alerta_dengue.core.errors import DuplicateIdentity, InvalidCredentials
from alerta_dengue.core.security import create_session_token, hash_password, utcnow, verify_password
from alerta_dengue.core.sessions import Session, SessionStore, new_session
from alerta_dengue.models.user import User
from alerta_dengue.repositories.base import ReportStore
from alerta_dengue.schemas.auth import UserCreate
from alerta_dengue.services.validation import validation_error_from

logger = logging.getLogger(__name__)


class AccountService:
    """
    Registro, login e logout.

    Registro e login abrem uma sessão e devolvem o usuário junto com o token
    que o cliente deve apresentar nas próximas requisições.
    """

    def __init__(self, store: ReportStore, sessions: SessionStore):
        self.store = store
        self.sessions = sessions

    async def register(self, candidate: Union[UserCreate, Mapping[str, Any]]) -> Tuple[User, str]:
        if not isinstance(candidate, UserCreate):
            try:
                candidate = UserCreate.model_validate(candidate)
            except PydanticValidationError as exc:
                raise validation_error_from(exc) from exc

        if await self.store.find_user_by_username(candidate.username):
            raise DuplicateIdentity("Nome de usuário já registrado")
        if await self.store.find_user_by_email(candidate.email):
            raise DuplicateIdentity("Email já registrado")

        user = User(
            first_name=candidate.first_name,
            last_name=candidate.last_name,
            username=candidate.username,
            email=candidate.email,
            hashed_password=hash_password(candidate.password),
            created_at=utcnow(),
        )
        user = await self.store.insert_user(user)
        logger.info(f"Usuário registrado: id={user.id} username={user.username}")

        token = await self._open_session(user)
        return user, token

    async def authenticate(self, username: str, password: str) -> Tuple[User, str]:
        user = await self.store.find_user_by_username(username)

        # Mesma resposta para usuário inexistente e senha errada
        if not user or not verify_password(password, user.hashed_password):
            logger.info(f"Falha de login para o usuário '{username}'")
            raise InvalidCredentials()

        token = await self._open_session(user)
        return user, token

    async def end_session(self, session_id: str) -> None:
        """Encerra a sessão. Encerrar uma sessão já encerrada não é erro."""
        await self.sessions.delete(session_id)

    async def current_user(self, session: Session | None) -> User:
        return await require_authenticated(session, self.store)

    async def _open_session(self, user: User) -> str:
        session = new_session(user.id)
        await self.sessions.save(session)
        return create_session_token(user.id, session.id, session.expires_at)

from fastapi import APIRouter, Depends, Request, Response, status

from alerta_dengue.api.v1.deps import limiter
from alerta_dengue.core.config import settings
from alerta_dengue.core.deps import get_account_service, get_current_session, get_current_user
from alerta_dengue.core.sessions import Session
from alerta_dengue.models.user import User
from alerta_dengue.schemas.auth import Message, SessionResponse, UserCreate, UserLogin, UserResponse
from alerta_dengue.services.accounts import AccountService

router = APIRouter()

def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )

@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
async def register(
    request: Request,
    response: Response,
    user_in: UserCreate,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Registra um novo usuário e já abre uma sessão para ele.
    """
    user, token = await accounts.register(user_in)
    set_session_cookie(response, token)

    return SessionResponse(access_token=token, user=UserResponse.model_validate(user))

@router.post("/login", response_model=SessionResponse)
@limiter.limit("15/minute")
async def login(
    request: Request,
    response: Response,
    credentials: UserLogin,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Autentica com usuário e senha e devolve o token de sessão.
    """
    user, token = await accounts.authenticate(credentials.username, credentials.password)
    set_session_cookie(response, token)

    return SessionResponse(access_token=token, user=UserResponse.model_validate(user))

@router.post("/logout", response_model=Message)
async def logout(
    response: Response,
    session: Session = Depends(get_current_session),
    accounts: AccountService = Depends(get_account_service),
):
    """
    Encerra a sessão atual.
    """
    await accounts.end_session(session.id)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)

    return Message(message="Sessão encerrada")

@router.get("/user", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """
    Dados do usuário autenticado.
    """
    return current_user

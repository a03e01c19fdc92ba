from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from passlib.context import CryptContext

from alerta_dengue.core.config import settings

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Funções para hash e verificação de senha
def hash_password(password: str) -> str:
    """Cria um hash (bcrypt, com salt) da senha fornecida."""
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica se a senha em texto plano corresponde ao hash armazenado."""
    return pwd_context.verify(plain_password, hashed_password)

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def session_expiration() -> datetime:
    """Momento em que uma sessão criada agora deixa de valer."""
    return utcnow() + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)

# Funções para o token de sessão
def create_session_token(user_id: int, session_id: str, expires_at: datetime) -> str:
    """
    Cria o token JWT entregue ao cliente.
    O token só identifica a sessão; o registro no session store é quem decide
    se ela ainda está ativa.
    """
    to_encode = {
        "sub": str(user_id),
        "sid": session_id,
        "exp": expires_at,
        "type": "session"
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )

def decode_token(token: str) -> dict | None:
    """
    Decodifica um token JWT e retorna o payload.
    Retorna None se o token for inválido ou estiver expirado.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
        return payload
    except JWTError:
        return None

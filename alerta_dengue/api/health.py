import time
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from alerta_dengue.core.deps import get_session_store
from alerta_dengue.core.sessions import SessionStore
from alerta_dengue.db.session import get_db

router = APIRouter()

@router.get("/health", response_model=dict)
async def health_check(
    db: AsyncSession = Depends(get_db),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Verifica a saúde da aplicação.
    - Disponibilidade do banco de dados
    - Disponibilidade do session store
    - Tempo de resposta
    """
    start_time = time.time()

    try:
        result = await db.execute(text("SELECT 1"))
        db_status = "online" if result.scalar() == 1 else "offline"
    except (SQLAlchemyError, OSError):
        db_status = "offline"

    sessions_status = "online" if await sessions.ping() else "offline"

    return {
        "status": "ok",
        "database": db_status,
        "sessions": sessions_status,
        "response_time_ms": round((time.time() - start_time) * 1000, 2),
        "timestamp": time.time()
    }

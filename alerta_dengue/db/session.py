from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from alerta_dengue.core.config import settings

# asyncpg em produção; os testes trocam por aiosqlite via DATABASE_URL
engine = create_async_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=False,
)

# expire_on_commit=False: denúncias e usuários continuam legíveis depois do commit
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Uma sessão por requisição, usada pelo SqlAlchemyReportStore e pelo /health."""
    async with AsyncSessionLocal() as session:
        yield session

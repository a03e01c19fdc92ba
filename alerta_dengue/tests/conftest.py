"""
Configuração para testes da aplicação.

Os testes usam SQLite em memória (aiosqlite) no lugar do PostgreSQL, sessões
em memória no lugar do Redis e o rate limiter com storage em memória. As
variáveis de ambiente precisam ser definidas antes de importar a aplicação.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "chave-secreta-para-testes")
os.environ.setdefault("SESSION_BACKEND", "memory")
os.environ.setdefault("RATE_LIMIT_STORAGE_URI", "memory://")
os.environ.setdefault("RUN_MIGRATIONS", "false")
os.environ.setdefault("ENABLE_PROMETHEUS", "false")

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from typing import AsyncGenerator, Dict

from alerta_dengue.db.base import Base
from alerta_dengue.db.session import get_db
from alerta_dengue.core.deps import get_session_store
from alerta_dengue.core.sessions import MemorySessionStore, RedisSessionStore
from alerta_dengue.main import app as fastapi_app
from alerta_dengue.api.v1.deps import limiter
from alerta_dengue.repositories.memory import MemoryReportStore
from alerta_dengue.repositories.sql import SqlAlchemyReportStore
from alerta_dengue.services.accounts import AccountService
from alerta_dengue.services.reports import ReportService
from alerta_dengue.tests.factories import MockRedis

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Engine novo (e banco vazio) para cada teste."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()

@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)

@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Fornece uma sessão de banco de dados para preparar e conferir dados."""
    async with session_factory() as session:
        yield session

@pytest_asyncio.fixture
async def session_store() -> MemorySessionStore:
    return MemorySessionStore()

@pytest_asyncio.fixture
async def mock_redis() -> MockRedis:
    return MockRedis()

@pytest_asyncio.fixture
async def redis_session_store(mock_redis) -> RedisSessionStore:
    return RedisSessionStore(mock_redis)

@pytest_asyncio.fixture
async def async_client(session_factory, session_store) -> AsyncGenerator[AsyncClient, None]:
    """Fornece um cliente HTTP assíncrono para testes."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_session_store] = lambda: session_store
    limiter.reset()

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://test") as client:
        yield client

    fastapi_app.dependency_overrides.clear()
    limiter.reset()

@pytest_asyncio.fixture
async def account_service(db_session, session_store) -> AccountService:
    """AccountService sobre o mesmo banco e session store usados pelo cliente HTTP."""
    return AccountService(SqlAlchemyReportStore(db_session), session_store)

@pytest_asyncio.fixture
async def test_user(account_service: AccountService) -> Dict:
    """Cria um usuário de teste e devolve o usuário e o token de sessão."""
    user, token = await account_service.register({
        "first_name": "Maria",
        "last_name": "Silva",
        "username": "maria",
        "email": "maria@example.com",
        "password": "senha123",
    })
    return {"user": user, "token": token}

@pytest_asyncio.fixture
async def other_user(account_service: AccountService) -> Dict:
    """Um segundo usuário, para os testes de autorização."""
    user, token = await account_service.register({
        "first_name": "João",
        "last_name": "Souza",
        "username": "joao",
        "email": "joao@example.com",
        "password": "senha456",
    })
    return {"user": user, "token": token}

@pytest_asyncio.fixture
async def user_token_headers(test_user) -> Dict[str, str]:
    """Headers com o token de sessão do usuário de teste."""
    return {"Authorization": f"Bearer {test_user['token']}"}

@pytest_asyncio.fixture
async def other_token_headers(other_user) -> Dict[str, str]:
    return {"Authorization": f"Bearer {other_user['token']}"}

@pytest_asyncio.fixture
async def memory_store() -> MemoryReportStore:
    return MemoryReportStore()

@pytest_asyncio.fixture
async def memory_accounts(memory_store, session_store) -> AccountService:
    """AccountService totalmente em memória, sem banco."""
    return AccountService(memory_store, session_store)

@pytest_asyncio.fixture
async def memory_reports(memory_store) -> ReportService:
    return ReportService(memory_store)

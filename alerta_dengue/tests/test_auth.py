import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from alerta_dengue.core.config import settings
from alerta_dengue.tests.factories import count_users, user_payload

pytestmark = pytest.mark.asyncio

async def test_register_user(async_client: AsyncClient) -> None:
    """Testa o registro de um novo usuário, que já sai autenticado."""
    response = await async_client.post("/api/register", json=user_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["username"] == "ana"
    assert data["user"]["email"] == "ana@example.com"
    assert "password" not in data["user"]
    assert "hashed_password" not in data["user"]
    assert settings.SESSION_COOKIE_NAME in response.cookies

    me = await async_client.get(
        "/api/user",
        headers={"Authorization": f"Bearer {data['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["id"] == data["user"]["id"]

async def test_register_existing_username_case_insensitive(
    async_client: AsyncClient, test_user, db_session: AsyncSession
) -> None:
    """Username já usado (com outra caixa) é recusado sem criar registro."""
    before = await count_users(db_session)

    response = await async_client.post(
        "/api/register",
        json=user_payload(username="MARIA", email="outra@example.com")
    )

    assert response.status_code == 400
    assert "já registrado" in response.json()["detail"].lower()
    assert await count_users(db_session) == before

async def test_register_existing_email_case_insensitive(
    async_client: AsyncClient, test_user, db_session: AsyncSession
) -> None:
    before = await count_users(db_session)

    response = await async_client.post(
        "/api/register",
        json=user_payload(username="outra", email="Maria@Example.com")
    )

    assert response.status_code == 400
    assert "email já registrado" in response.json()["detail"].lower()
    assert await count_users(db_session) == before

async def test_register_password_mismatch(async_client: AsyncClient) -> None:
    response = await async_client.post(
        "/api/register",
        json=user_payload(confirm_password="diferente")
    )

    assert response.status_code == 400
    assert response.json()["errors"]

async def test_register_missing_fields(async_client: AsyncClient) -> None:
    response = await async_client.post("/api/register", json={"username": "ana"})

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert {"first_name", "last_name", "email", "password"} <= fields

async def test_login_success(async_client: AsyncClient, test_user) -> None:
    """Testa login bem-sucedido, com username em outra caixa."""
    response = await async_client.post(
        "/api/login",
        json={"username": "Maria", "password": "senha123"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["access_token"]
    assert data["user"]["id"] == test_user["user"].id

async def test_register_keeps_password_whitespace(async_client: AsyncClient) -> None:
    """Espaços nas bordas fazem parte da senha; username e email são aparados."""
    register = await async_client.post(
        "/api/register",
        json=user_payload(username="  ana  ", email=" ana@example.com ", password="  senha789  ")
    )
    assert register.status_code == 201
    assert register.json()["user"]["username"] == "ana"

    login = await async_client.post(
        "/api/login",
        json={"username": " ana ", "password": "  senha789  "}
    )
    assert login.status_code == 200
    assert login.json()["user"]["id"] == register.json()["user"]["id"]

    stripped = await async_client.post(
        "/api/login",
        json={"username": "ana", "password": "senha789"}
    )
    assert stripped.status_code == 401

async def test_login_wrong_password(async_client: AsyncClient, test_user) -> None:
    response = await async_client.post(
        "/api/login",
        json={"username": "maria", "password": "senhaerrada"}
    )

    assert response.status_code == 401
    assert "incorretos" in response.json()["detail"].lower()

async def test_login_nonexistent_user_same_message(async_client: AsyncClient, test_user) -> None:
    """Usuário inexistente e senha errada recebem a mesma resposta."""
    wrong_password = await async_client.post(
        "/api/login",
        json={"username": "maria", "password": "senhaerrada"}
    )
    unknown_user = await async_client.post(
        "/api/login",
        json={"username": "ninguem", "password": "senha123"}
    )

    assert unknown_user.status_code == 401
    assert unknown_user.json() == wrong_password.json()

async def test_protected_endpoint_without_token(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/user")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"

async def test_protected_endpoint_invalid_token(async_client: AsyncClient) -> None:
    response = await async_client.get(
        "/api/user",
        headers={"Authorization": "Bearer token-invalido"}
    )

    assert response.status_code == 401

async def test_session_cookie_authenticates(async_client: AsyncClient, test_user) -> None:
    """O cookie definido no login basta para as próximas requisições."""
    login = await async_client.post(
        "/api/login",
        json={"username": "maria", "password": "senha123"}
    )
    assert login.status_code == 200

    response = await async_client.get("/api/user")

    assert response.status_code == 200
    assert response.json()["username"] == "maria"

async def test_logout_ends_session(async_client: AsyncClient, user_token_headers, session_store) -> None:
    sessions_before = len(session_store)

    response = await async_client.post("/api/logout", headers=user_token_headers)

    assert response.status_code == 200
    assert len(session_store) == sessions_before - 1

    # O token continua bem formado, mas a sessão não existe mais
    after = await async_client.get("/api/user", headers=user_token_headers)
    assert after.status_code == 401

async def test_logout_without_session(async_client: AsyncClient) -> None:
    response = await async_client.post("/api/logout")

    assert response.status_code == 401

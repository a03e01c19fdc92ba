import httpx
import pytest
from httpx import AsyncClient

from alerta_dengue.core.deps import get_geocoding_adapter
from alerta_dengue.core.errors import AddressNotFound, LookupFailed, ValidationError
from alerta_dengue.main import app as fastapi_app
from alerta_dengue.services.geocoding import GeocodingAdapter
from alerta_dengue.services.reports import ReportService
from alerta_dengue.tests.factories import report_payload

pytestmark = pytest.mark.asyncio

NOMINATIM_URL = "https://nominatim.test/search"

def adapter_returning(payload, status_code: int = 200, seen: list | None = None) -> GeocodingAdapter:
    """Adapter cujas requisições são respondidas por um MockTransport."""
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return GeocodingAdapter(base_url=NOMINATIM_URL, country_hint="Brasil", transport=httpx.MockTransport(handler))

async def test_resolve_address() -> None:
    seen: list = []
    adapter = adapter_returning(
        [{"lat": "-23.9666", "lon": "-46.3833", "display_name": "Santos, São Paulo, Brasil"}],
        seen=seen,
    )

    result = await adapter.resolve("Rua X, 100")

    assert result.latitude == -23.9666
    assert result.longitude == -46.3833
    assert result.display_name == "Santos, São Paulo, Brasil"

    request = seen[0]
    assert request.url.params["q"] == "Rua X, 100, Brasil"
    assert request.url.params["limit"] == "1"
    assert request.url.params["format"] == "json"
    assert request.headers["user-agent"]

async def test_resolve_closes_search(monkeypatch) -> None:
    """resolve encerra a busca assim que obtém o primeiro resultado."""
    adapter = adapter_returning([])
    closed: list = []

    async def search(address):
        try:
            yield "primeiro"
            yield "segundo"
        finally:
            closed.append(address)

    monkeypatch.setattr(adapter, "search", search)

    assert await adapter.resolve("Rua X, 100") == "primeiro"
    assert closed == ["Rua X, 100"]

async def test_search_is_lazy() -> None:
    seen: list = []
    adapter = adapter_returning([], seen=seen)

    results = adapter.search("Rua X, 100")
    assert seen == []

    assert [r async for r in results] == []
    assert len(seen) == 1

async def test_search_yields_at_most_one_result() -> None:
    adapter = adapter_returning([
        {"lat": "1.0", "lon": "2.0"},
        {"lat": "3.0", "lon": "4.0"},
    ])

    results = [r async for r in adapter.search("Rua Y")]

    assert len(results) == 1
    assert results[0].latitude == 1.0

async def test_without_country_hint() -> None:
    seen: list = []
    adapter = GeocodingAdapter(
        base_url=NOMINATIM_URL,
        country_hint=None,
        transport=httpx.MockTransport(lambda request: seen.append(request) or httpx.Response(200, json=[])),
    )

    with pytest.raises(AddressNotFound):
        await adapter.resolve("Rua Z")

    assert seen[0].url.params["q"] == "Rua Z"

async def test_address_not_found_then_manual_coordinates(memory_reports: ReportService) -> None:
    """Sem resultado na geocodificação, a denúncia sai com o ponto marcado no mapa."""
    adapter = adapter_returning([])

    with pytest.raises(AddressNotFound):
        await adapter.resolve("Endereço inexistente, 0")

    report = await memory_reports.submit(
        1, report_payload(address="Endereço inexistente, 0", latitude=-23.9666, longitude=-46.3833)
    )

    assert report.id is not None
    assert report.latitude == -23.9666
    assert report.status == "pendente"

@pytest.mark.parametrize("payload,status_code", [
    ({"error": "bad"}, 200),
    ([{"lat": "abc", "lon": "1"}], 200),
    ([{"display_name": "sem coordenadas"}], 200),
    ([], 503),
])
async def test_lookup_failed_on_bad_response(payload, status_code) -> None:
    adapter = adapter_returning(payload, status_code=status_code)

    with pytest.raises(LookupFailed):
        await adapter.resolve("Rua X, 100")

async def test_lookup_failed_on_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("sem rede", request=request)

    adapter = GeocodingAdapter(base_url=NOMINATIM_URL, transport=httpx.MockTransport(handler))

    with pytest.raises(LookupFailed):
        await adapter.resolve("Rua X, 100")

async def test_blank_address() -> None:
    adapter = adapter_returning([])

    with pytest.raises(ValidationError):
        await adapter.resolve("   ")

async def test_geocode_endpoint(async_client: AsyncClient, user_token_headers) -> None:
    fastapi_app.dependency_overrides[get_geocoding_adapter] = lambda: adapter_returning(
        [{"lat": "-22.9068", "lon": "-43.1729", "display_name": "Rio de Janeiro"}]
    )

    response = await async_client.get(
        "/api/geocode",
        params={"address": "Praça XV"},
        headers=user_token_headers
    )

    assert response.status_code == 200
    assert response.json() == {"latitude": -22.9068, "longitude": -43.1729, "display_name": "Rio de Janeiro"}

async def test_geocode_endpoint_not_found(async_client: AsyncClient, user_token_headers) -> None:
    fastapi_app.dependency_overrides[get_geocoding_adapter] = lambda: adapter_returning([])

    response = await async_client.get(
        "/api/geocode",
        params={"address": "Lugar nenhum"},
        headers=user_token_headers
    )

    assert response.status_code == 404
    assert "não encontrado" in response.json()["detail"].lower()

async def test_geocode_endpoint_lookup_failed(async_client: AsyncClient, user_token_headers) -> None:
    fastapi_app.dependency_overrides[get_geocoding_adapter] = lambda: adapter_returning([], status_code=500)

    response = await async_client.get(
        "/api/geocode",
        params={"address": "Rua X, 100"},
        headers=user_token_headers
    )

    assert response.status_code == 502

async def test_geocode_endpoint_requires_session(async_client: AsyncClient) -> None:
    response = await async_client.get("/api/geocode", params={"address": "Rua X, 100"})

    assert response.status_code == 401

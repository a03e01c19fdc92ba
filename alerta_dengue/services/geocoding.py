"""
Geocodificação de endereços via OpenStreetMap Nominatim.

A busca é best-effort: se o endereço não for encontrado ou o serviço falhar,
o cliente ainda pode marcar o ponto diretamente no mapa e enviar as
coordenadas em ReportService.submit.
"""

import logging
from contextlib import aclosing
from dataclasses import dataclass
from typing import AsyncIterator, Optional

import httpx

from alerta_dengue.core.config import settings
from alerta_dengue.core.errors import AddressNotFound, LookupFailed, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeocodeResult:
    latitude: float
    longitude: float
    display_name: Optional[str] = None


class GeocodingAdapter:
    """Cliente de geocodificação direta (endereço -> latitude/longitude)."""

    def __init__(
        self,
        base_url: str = settings.GEOCODING_URL,
        country_hint: Optional[str] = settings.GEOCODING_COUNTRY_HINT,
        user_agent: str = settings.GEOCODING_USER_AGENT,
        timeout: float = settings.GEOCODING_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.country_hint = country_hint
        self.user_agent = user_agent
        self.timeout = timeout
        self.transport = transport

    def build_query(self, address: str) -> str:
        # O país ao final do endereço melhora a precisão do Nominatim
        if self.country_hint:
            return f"{address}, {self.country_hint}"
        return address

    async def search(self, address: str) -> AsyncIterator[GeocodeResult]:
        """
        Gera no máximo um resultado. Nenhuma requisição é feita até a
        iteração começar.
        """
        address = (address or "").strip()
        if not address:
            raise ValidationError(
                [{"field": "address", "message": "Digite um endereço para localizar no mapa"}]
            )

        params = {"q": self.build_query(address), "format": "json", "limit": 1}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.get(self.base_url, params=params, headers=headers)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Erro ao geocodificar '{address}': {exc}")
            raise LookupFailed() from exc

        if not isinstance(payload, list):
            logger.warning(f"Resposta inesperada do serviço de geocodificação: {payload!r}")
            raise LookupFailed()

        for item in payload[:1]:
            try:
                result = GeocodeResult(
                    latitude=float(item["lat"]),
                    longitude=float(item["lon"]),
                    display_name=item.get("display_name"),
                )
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning(f"Resultado de geocodificação malformado: {item!r}")
                raise LookupFailed() from exc
            yield result

    async def resolve(self, address: str) -> GeocodeResult:
        """Primeiro resultado da busca, ou AddressNotFound."""
        async with aclosing(self.search(address)) as results:
            async for result in results:
                return result

        logger.info(f"Endereço não encontrado: '{address}'")
        raise AddressNotFound()

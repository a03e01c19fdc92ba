from fastapi import APIRouter, Depends, Query

from alerta_dengue.core.deps import get_current_user, get_geocoding_adapter
from alerta_dengue.models.user import User
from alerta_dengue.schemas.geocoding import GeocodeResponse
from alerta_dengue.services.geocoding import GeocodingAdapter

router = APIRouter()

@router.get("/geocode", response_model=GeocodeResponse)
async def geocode_address(
    address: str = Query(..., min_length=1, description="Endereço em texto livre"),
    current_user: User = Depends(get_current_user),
    geocoder: GeocodingAdapter = Depends(get_geocoding_adapter),
):
    """
    Localiza um endereço no mapa.

    Se o endereço não for encontrado (404) ou o serviço falhar (502), a
    denúncia ainda pode ser enviada com o ponto marcado diretamente no mapa.
    """
    result = await geocoder.resolve(address)
    return GeocodeResponse(
        latitude=result.latitude,
        longitude=result.longitude,
        display_name=result.display_name,
    )

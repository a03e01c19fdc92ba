from pydantic import BaseModel

class GeocodeResponse(BaseModel):
    """Coordenadas encontradas para um endereço."""
    latitude: float
    longitude: float
    display_name: str | None = None

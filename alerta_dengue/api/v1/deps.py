from slowapi import Limiter
from slowapi.util import get_remote_address

from alerta_dengue.core.config import settings

# Rate limiter; usa o Redis como storage, a não ser que RATE_LIMIT_STORAGE_URI diga outro
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.rate_limit_storage_uri,
    enabled=settings.RATE_LIMIT_ENABLED,
)

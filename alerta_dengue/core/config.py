import secrets
from typing import List, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field

class Settings(BaseSettings):
    # Configurações gerais
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Alerta Dengue API"
    LOG_LEVEL: str = "INFO"

    # CORS - definido como string para evitar problemas de parsing
    CORS_ORIGINS_STR: str = "http://localhost:5000,http://localhost:3000"

    @computed_field
    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Converte a string CORS_ORIGINS_STR em uma lista."""
        if not self.CORS_ORIGINS_STR:
            return ["http://localhost:5000", "http://localhost:3000"]
        return [origin.strip() for origin in self.CORS_ORIGINS_STR.split(",") if origin.strip()]

    # Database
    POSTGRES_HOST: str = "db"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "alerta"
    POSTGRES_PASSWORD: str = "alerta"
    POSTGRES_DB: str = "alerta_dengue"
    DATABASE_URL: str | None = None  # Será carregado do .env
    RUN_MIGRATIONS: bool = True

    @property
    def database_url(self) -> str:
        """
        Gera a URL do banco de dados se não for especificada.
        Certifica-se de usar o prefixo postgresql+asyncpg:// para conexões assíncronas.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Redis (sessões & rate-limit)
    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379

    # Sessões
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 60 * 24 * 7
    SESSION_COOKIE_NAME: str = "alerta_dengue_session"
    SESSION_BACKEND: Literal["redis", "memory"] = "redis"

    # Rate limit
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str | None = None

    @property
    def rate_limit_storage_uri(self) -> str:
        """Usa o Redis como storage do rate limiter, a menos que outro seja informado."""
        if self.RATE_LIMIT_STORAGE_URI:
            return self.RATE_LIMIT_STORAGE_URI
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}"

    # Geocodificação (OpenStreetMap Nominatim)
    GEOCODING_URL: str = "https://nominatim.openstreetmap.org/search"
    GEOCODING_COUNTRY_HINT: str | None = "Brasil"
    GEOCODING_USER_AGENT: str = "alerta-dengue/1.0"
    GEOCODING_TIMEOUT_SECONDS: float = 10.0

    # Prometheus
    ENABLE_PROMETHEUS: bool = True

    # Configuração para carregar de arquivo .env
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

# Instância global para uso em toda a aplicação
settings = Settings()

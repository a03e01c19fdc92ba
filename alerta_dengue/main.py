from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
import logging
from contextlib import asynccontextmanager

from slowapi.errors import RateLimitExceeded

from alerta_dengue.api.health import router as health_router
from alerta_dengue.api.v1.deps import limiter
from alerta_dengue.api.v1.endpoints.auth import router as auth_router
from alerta_dengue.api.v1.endpoints.reports import router as reports_router
from alerta_dengue.api.v1.endpoints.geocoding import router as geocoding_router
from alerta_dengue.core.config import settings
from alerta_dengue.core.errors import AppError, ValidationError
from alerta_dengue.core.logging import configure_logging
from alerta_dengue.db.init_db import init_db
from alerta_dengue.db.migrations import run_migrations
from alerta_dengue.services.validation import field_errors

configure_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Aplicar migrações do banco de dados
    if settings.RUN_MIGRATIONS:
        try:
            await run_migrations()
        except Exception as e:
            logger.error(f"Falha ao aplicar migrações: {e}")
            raise

    logger.info("Inicializando banco de dados...")
    await init_db()
    logger.info("Banco de dados inicializado com sucesso!")
    yield

# Inicialização do aplicativo
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API para denúncias de focos do mosquito da dengue",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter

@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Limite de requisições excedido. Tente novamente mais tarde."},
    )

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # Corpo, path e query inválidos respondem 400 com as mensagens por campo
    error = ValidationError(field_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Erro inesperado em {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Erro interno do servidor"})

# Configuração CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Inclusão das rotas
app.include_router(health_router, tags=["Health"])
app.include_router(auth_router, prefix=settings.API_PREFIX, tags=["Autenticação"])
app.include_router(reports_router, prefix=settings.API_PREFIX, tags=["Denúncias"])
app.include_router(geocoding_router, prefix=settings.API_PREFIX, tags=["Geocodificação"])

# Configuração do Prometheus (métricas)
if settings.ENABLE_PROMETHEUS:
    instrumentator = Instrumentator()
    instrumentator.instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

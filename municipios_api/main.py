from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
import time

from municipios_api.config.settings import get_settings
from municipios_api.database.store import MunicipalityStore
from municipios_api.dependencies import get_store
from municipios_api.middleware.error_handler import setup_error_handlers
from municipios_api.middleware.request_id import RequestIDMiddleware
from municipios_api.routers import municipalities_router
from municipios_api.services.ibge_client import IBGEClient

# Configurar logger
logger = logging.getLogger("municipios_api.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Store and IBGE client live for the whole process
    settings = get_settings()
    store = MunicipalityStore.from_settings(settings.database_url)
    await store.init()
    app.state.store = store
    app.state.ibge_client = IBGEClient.from_settings()
    logger.info(f"🚀 API de municípios iniciada (IBGE: {settings.ibge_municipios_url})")
    try:
        yield
    finally:
        await store.close()
        logger.info("🛑 API de municípios encerrada")


app = FastAPI(
    title="Municípios API",
    description="API para ingestão e manutenção de municípios do IBGE",
    version="0.1.0",
    lifespan=lifespan,
)


# Middleware para logging de requisições
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log de todas as requisições para depuração."""
    start_time = time.time()
    path = request.url.path
    method = request.method

    logger.info(f"🔔 {method} {path}")

    response = await call_next(request)

    process_time = time.time() - start_time
    status_code = response.status_code

    # Status code por categoria
    if status_code < 400:
        status_str = f"✅ {status_code}"
    elif status_code < 500:
        status_str = f"⚠️ {status_code}"
    else:
        status_str = f"❌ {status_code}"

    logger.info(f"🏁 {method} {path} - {status_str} - {process_time:.3f}s")
    return response


# Configuração de CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Added last so it runs first and request logs carry the ID
app.add_middleware(RequestIDMiddleware)

# Configurar handlers de exceção
setup_error_handlers(app)

app.include_router(municipalities_router.router)


@app.get("/")
async def root():
    return {"message": "Bem-vindo à API de Municípios"}


@app.get("/health")
async def health_check(request: Request):
    store = get_store(request)
    return {"status": "ok", "municipios": await store.count()}

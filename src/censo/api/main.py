"""API pública de consulta del Censo Liberal.

English:
    Public lookup API for the Censo Liberal.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from censo import __version__
from censo.api.middleware import client_address, install_security_headers
from censo.config import CensoSettings, load_config
from censo.download import ParquetFetcher
from censo.handler import CitizenLookup, LocalFileProvider, handle_lookup
from censo.query import CitizenRepository

logger = structlog.get_logger(__name__)

HEALTH_MESSAGE = "✅ API Censo Liberal Activa"


def create_app(
    settings: Optional[CensoSettings] = None,
    *,
    fetcher: Optional[LocalFileProvider] = None,
    repository: Optional[CitizenLookup] = None,
) -> FastAPI:
    """Construye la app con sus dependencias inyectadas.

    El repositorio DuckDB se crea una sola vez aquí y se comparte entre todos
    los requests; se cierra al apagar la app.

    English:
        Build the app with its dependencies injected.

        The DuckDB repository is created once here and shared by every
        request; it is closed when the app shuts down.
    """
    settings = settings or load_config()
    if fetcher is None:
        fetcher = ParquetFetcher(
            settings.PARQUET_URL,
            settings.LOCAL_FILE,
            timeout=settings.DOWNLOAD_TIMEOUT_SECONDS,
        )
    if repository is None:
        repository = CitizenRepository(settings.LOCAL_FILE)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("api_started", message=f"API Liberal escuchando en http://localhost:{settings.PORT}")
        yield
        close = getattr(repository, "close", None)
        if callable(close):
            close()
        logger.info("api_stopped")

    app = FastAPI(
        title="API Censo Liberal",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.fetcher = fetcher
    app.state.repository = repository

    # Límite de aplicación: un solo contador por cliente para todas las rutas.
    # Application limit: one counter per client shared by every route.
    limiter = Limiter(
        key_func=get_remote_address,
        application_limits=[settings.rate_limit()],
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # CORS por fuera del limitador: las 429 también llevan Access-Control-*.
    # CORS outside the limiter: 429 responses carry Access-Control-* too.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list(),
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Último en instalarse = más externo: cubre también las respuestas 429.
    # Installed last = outermost: also covers 429 responses.
    install_security_headers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Chequeo de vida. / Liveness check."""
        return HEALTH_MESSAGE

    @app.get("/buscar")
    async def buscar(
        request: Request,
        identidad: Optional[str] = Query(None, description="Número de identidad"),
    ) -> JSONResponse:
        """Busca un ciudadano por número de identidad.

        English: Look up a citizen by identity number.
        """
        return await handle_lookup(
            identidad,
            fetcher=request.app.state.fetcher,
            repository=request.app.state.repository,
            client_ip=client_address(request),
        )

    return app


if __name__ == "__main__":
    import uvicorn

    from censo.logging import setup_logging

    _settings = load_config()
    setup_logging(_settings.LOG_LEVEL, _settings.LOG_DIR)
    uvicorn.run(create_app(_settings), host=_settings.HOST, port=_settings.PORT, log_level="info")

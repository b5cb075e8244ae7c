# Cli Module
# AUTO-DOC-INDEX
#
# ES: Índice rápido
#   1) Propósito del módulo
#   2) Componentes principales
#   3) Puntos de extensión
#
# EN: Quick index
#   1) Module purpose
#   2) Main components
#   3) Extension points

"""Interfaz de línea de comandos de la API del censo.

English: Command line interface for the census API.
"""

import asyncio
import json
from typing import Optional

import typer

from .config import load_config
from .download import ParquetFetcher
from .errors import RemoteFetchError
from .handler import handle_lookup
from .logging import setup_logging
from .query import CitizenRepository

app = typer.Typer(help="API Censo Liberal")


@app.callback()
def main() -> None:
    """Interfaz de línea de comandos de la API del censo.

    English: Census API command line interface.
    """


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Interfaz de escucha / Bind host"),
    port: Optional[int] = typer.Option(None, help="Puerto / Port (default: PORT)"),
) -> None:
    """Levanta el servidor HTTP con uvicorn.

    English: Run the HTTP server with uvicorn.
    """
    import uvicorn

    from .api.main import create_app

    settings = load_config()
    if host is not None:
        settings.HOST = host
    if port is not None:
        settings.PORT = port
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_level="info")


@app.command()
def descargar() -> None:
    """Descarga el Parquet si aún no existe en disco.

    English: Download the Parquet file if it is not on disk yet.
    """
    settings = load_config()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    fetcher = ParquetFetcher(
        settings.PARQUET_URL,
        settings.LOCAL_FILE,
        timeout=settings.DOWNLOAD_TIMEOUT_SECONDS,
    )
    try:
        path = asyncio.run(fetcher.ensure_local_file())
    except RemoteFetchError as exc:
        typer.echo(exc.message, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(str(path))


@app.command()
def buscar(identidad: str = typer.Argument(..., help="Número de identidad")) -> None:
    """Ejecuta una consulta local y muestra la respuesta JSON.

    English: Run one local lookup and print the JSON body.
    """
    settings = load_config()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    fetcher = ParquetFetcher(
        settings.PARQUET_URL,
        settings.LOCAL_FILE,
        timeout=settings.DOWNLOAD_TIMEOUT_SECONDS,
    )
    repository = CitizenRepository(settings.LOCAL_FILE)
    try:
        response = asyncio.run(handle_lookup(identidad, fetcher=fetcher, repository=repository))
    finally:
        repository.close()
    typer.echo(json.dumps(json.loads(response.body), ensure_ascii=False, indent=2))
    if response.status_code != 200:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

"""Orquestación de la consulta: validar, descargar, consultar, responder.

English: Lookup orchestration: validate, fetch, query, respond.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

import structlog
from fastapi.responses import JSONResponse

from .errors import CensoError, InvalidIdentityError
from .identity import validate_identity
from .logging import bind_request
from .schemas import CitizenRecord, ErrorResponse, NotFoundResponse

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


class LocalFileProvider(Protocol):
    async def ensure_local_file(self) -> Path: ...


class CitizenLookup(Protocol):
    async def lookup(self, identity: str) -> Optional[CitizenRecord]: ...


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


async def handle_lookup(
    raw_identity: Optional[str],
    *,
    fetcher: LocalFileProvider,
    repository: CitizenLookup,
    client_ip: Optional[str] = None,
) -> JSONResponse:
    """Resuelve un número de identidad a una respuesta HTTP.

    - 400 si quedan menos de 6 dígitos tras el saneamiento (sin descarga ni
      consulta).
    - 500 ante cualquier fallo de descarga o consulta, con solo el mensaje.
    - 200 con `{"mensaje": "No encontrado"}` o con el registro completo.

    English:
        Resolve an identity number to an HTTP response.

        - 400 when fewer than 6 digits remain after sanitization (no fetch,
          no query).
        - 500 on any fetch or query failure, carrying only the message.
        - 200 with `{"mensaje": "No encontrado"}` or the full record.
    """
    try:
        identity = validate_identity(raw_identity)
    except InvalidIdentityError as exc:
        return _error(exc.status_code, exc.message)

    log = bind_request(logger, identity=identity, client_ip=client_ip)
    try:
        await fetcher.ensure_local_file()
        record = await repository.lookup(identity)
    except CensoError as exc:
        log.error("lookup_failed", error=exc.message, detail=getattr(exc, "detail", None), exc_info=exc)
        return _error(exc.status_code, exc.message)
    except Exception as exc:  # noqa: BLE001
        log.error("lookup_unexpected_error", error=str(exc), exc_info=exc)
        # El texto de la excepción puede incluir rutas locales.
        # The exception text may include local paths.
        return _error(500, INTERNAL_ERROR_MESSAGE)

    if record is None:
        log.info("lookup_not_found")
        return JSONResponse(content=NotFoundResponse().model_dump())
    log.info("lookup_found")
    return JSONResponse(content=record.model_dump(mode="json"))

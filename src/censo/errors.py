"""Errores controlados de la API del censo.

English: Controlled errors for the census API.
"""

from __future__ import annotations

from typing import Optional


class CensoError(Exception):
    """Error base con mensaje apto para el cliente.

    English: Base error whose message is safe to return to clients.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidIdentityError(CensoError):
    """Número de identidad vacío o demasiado corto.

    English: Empty or too short identity number.
    """

    status_code = 400


class RemoteFetchError(CensoError):
    """Fallo al materializar el Parquet remoto en disco.

    English: Failure materializing the remote Parquet file on disk.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        # Status HTTP del origen, no el de nuestra respuesta.
        # Upstream HTTP status, not the status of our response.
        self.upstream_status = status_code
        self.cause = cause


class QueryExecutionError(CensoError):
    """Fallo del motor DuckDB (archivo corrupto, error interno).

    `message` es fijo y apto para el cliente; `detail` conserva el texto del
    motor (rutas, SQL) solo para los logs.

    English: DuckDB engine failure (malformed file, engine fault).
    `message` is fixed and client-safe; `detail` keeps the engine text
    (paths, SQL) for logs only.
    """

    def __init__(self, message: str, *, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.detail = detail if detail is not None else message

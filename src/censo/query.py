"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/censo/query.py`.
Consulta parametrizada sobre el Parquet local mediante DuckDB embebido.

Componentes detectados:
  - CitizenRepository
  - build_lookup_sql

Notas:
- El número de identidad nunca se interpola en el SQL; siempre se enlaza
  como parámetro posicional (?).
- Una sola conexión por proceso, creada al arrancar e inyectada.

======================== ENGLISH ========================
File: `src/censo/query.py`.
Parameterized query over the local Parquet file through embedded DuckDB.

Detected components:
  - CitizenRepository
  - build_lookup_sql

Notes:
- The identity number is never interpolated into SQL; it is always bound as
  a positional parameter (?).
- One connection per process, created at startup and injected.
"""

from __future__ import annotations

import asyncio
import threading
from pathlib import Path
from typing import Optional

import duckdb
import structlog

from .errors import QueryExecutionError
from .schemas import RECORD_COLUMNS, CitizenRecord

logger = structlog.get_logger(__name__)

QUERY_ERROR_MESSAGE = "Error al consultar el padrón"


def _sql_string_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def build_lookup_sql(parquet_path: Path) -> str:
    """Construye la plantilla de búsqueda para un Parquet dado.

    La ruta proviene de configuración confiable; la identidad queda como `?`.

    English: Build the lookup template for a given Parquet file. The path
    comes from trusted configuration; the identity stays as `?`.
    """
    columns = ",\n        ".join(RECORD_COLUMNS)
    return f"""
        SELECT
        {columns}
        FROM read_parquet({_sql_string_literal(str(parquet_path))})
        WHERE NUMERO_IDENTIDAD = ?
        LIMIT 1
    """


class CitizenRepository:
    """Búsqueda de ciudadanos respaldada por DuckDB.

    Las consultas corren en un hilo de trabajo para no bloquear el event
    loop. La conexión DuckDB no admite uso simultáneo desde varios hilos, así
    que un lock serializa el acceso.

    English:
        DuckDB-backed citizen lookup.

        Queries run in a worker thread so the event loop is never blocked.
        The DuckDB connection does not support simultaneous use from several
        threads, so a lock serializes access.
    """

    def __init__(
        self,
        parquet_path: Path,
        conn: Optional[duckdb.DuckDBPyConnection] = None,
    ) -> None:
        self.parquet_path = Path(parquet_path)
        self._conn = conn if conn is not None else duckdb.connect(":memory:")
        self._sql = build_lookup_sql(self.parquet_path)
        self._lock = threading.Lock()

    def lookup_sync(self, identity: str) -> Optional[CitizenRecord]:
        """Versión bloqueante de `lookup`.

        English: Blocking version of `lookup`.
        """
        try:
            with self._lock:
                cursor = self._conn.execute(self._sql, [identity])
                row = cursor.fetchone()
                columns = [column[0] for column in cursor.description]
        except duckdb.Error as exc:
            logger.error("citizen_query_failed", path=str(self.parquet_path), error=str(exc))
            raise QueryExecutionError(QUERY_ERROR_MESSAGE, detail=str(exc)) from exc

        if row is None:
            return None
        return CitizenRecord.from_row(columns, row)

    async def lookup(self, identity: str) -> Optional[CitizenRecord]:
        """Busca por NUMERO_IDENTIDAD; `None` si no hay coincidencia.

        English: Look up by NUMERO_IDENTIDAD; `None` when nothing matches.

        Raises:
            QueryExecutionError: archivo corrupto o fallo del motor.
        """
        return await asyncio.to_thread(self.lookup_sync, identity)

    def close(self) -> None:
        """Cierra la conexión DuckDB."""
        with self._lock:
            self._conn.close()

"""Materialización perezosa del Parquet remoto con descarga única.

Lazy materialization of the remote Parquet file with single-flight download.
"""

from __future__ import annotations

import asyncio
import os
import time
from pathlib import Path
from typing import Callable, Optional

import httpx
import structlog

from .errors import RemoteFetchError

logger = structlog.get_logger(__name__)

USER_AGENT = "CensoLiberalAPI/0.2.0"
CHUNK_SIZE = 1024 * 1024


def build_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """Construye el cliente HTTP; `None` desactiva el timeout.

    English: Build the HTTP client; `None` disables the timeout.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )


def partial_path(path: Path) -> Path:
    """Ruta temporal donde se escribe la descarga en curso.

    English: Temporary path receiving the in-progress download.
    """
    return path.with_name(f"{path.name}.part")


class ParquetFetcher:
    """Garantiza que el Parquet exista en disco, descargándolo una sola vez.

    El primer llamador crea la tarea de descarga; los concurrentes esperan la
    misma tarea. Los bytes van a `<archivo>.part` y solo se renombran al
    destino final cuando el stream terminó y el handle se cerró, así que un
    archivo presente en la ruta final siempre está completo.

    English:
        Ensures the Parquet file exists on disk, downloading it once.

        The first caller creates the download task; concurrent callers await
        the same task. Bytes go to `<file>.part` and are renamed onto the
        final path only after the stream finished and the handle was closed,
        so a file present at the final path is always complete.
    """

    def __init__(
        self,
        url: str,
        local_path: Path,
        *,
        timeout: Optional[float] = None,
        client_factory: Callable[[Optional[float]], httpx.AsyncClient] = build_client,
    ) -> None:
        self.url = url
        self.local_path = Path(local_path)
        self._timeout = timeout
        self._client_factory = client_factory
        self._pending: Optional[asyncio.Task[Path]] = None
        self.download_attempts = 0

    async def ensure_local_file(self) -> Path:
        """Devuelve la ruta local, descargando el archivo si falta.

        English: Return the local path, downloading the file if missing.

        Raises:
            RemoteFetchError: status distinto de 200 o error de red.
        """
        if self.local_path.exists():
            return self.local_path
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._download())
            self._pending.add_done_callback(self._clear_pending)
        # La cancelación de un request no cancela la descarga compartida.
        # Cancelling one request does not cancel the shared download.
        return await asyncio.shield(self._pending)

    def _clear_pending(self, task: asyncio.Task[Path]) -> None:
        if self._pending is task:
            self._pending = None
        # Marca el error como leído aunque todos los requests se hayan cancelado.
        # Mark the failure as retrieved even when every caller was cancelled.
        if not task.cancelled():
            task.exception()

    async def _download(self) -> Path:
        self.download_attempts += 1
        target = self.local_path
        tmp_path = partial_path(target)
        target.parent.mkdir(parents=True, exist_ok=True)

        start = time.monotonic()
        logger.info("parquet_download_start", url=self.url, path=str(target))
        written = 0
        try:
            async with self._client_factory(self._timeout) as client:
                async with client.stream("GET", self.url) as response:
                    if response.status_code != 200:
                        raise RemoteFetchError(
                            f"Status {response.status_code} al descargar parquet",
                            status_code=response.status_code,
                        )
                    # La E/S de disco corre en hilos para no frenar el event loop.
                    # Disk I/O runs in worker threads so the event loop keeps moving.
                    handle = await asyncio.to_thread(tmp_path.open, "wb")
                    try:
                        async for chunk in response.aiter_bytes(CHUNK_SIZE):
                            await asyncio.to_thread(handle.write, chunk)
                            written += len(chunk)
                    finally:
                        await asyncio.to_thread(handle.close)
        except httpx.HTTPError as exc:
            tmp_path.unlink(missing_ok=True)
            logger.warning("parquet_download_failed", url=self.url, error=str(exc))
            raise RemoteFetchError(
                f"Error de red al descargar parquet: {exc}", cause=exc
            ) from exc
        except RemoteFetchError as exc:
            tmp_path.unlink(missing_ok=True)
            logger.warning(
                "parquet_download_failed",
                url=self.url,
                status_code=exc.upstream_status,
            )
            raise
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

        os.replace(tmp_path, target)
        logger.info(
            "parquet_download_done",
            path=str(target),
            content_bytes=written,
            elapsed_seconds=round(time.monotonic() - start, 3),
        )
        return target

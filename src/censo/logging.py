"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/censo/logging.py`.
Configuración de structlog para la API del censo.

Componentes detectados:
  - setup_logging
  - bind_request

======================== ENGLISH ========================
File: `src/censo/logging.py`.
structlog configuration for the census API.

Detected components:
  - setup_logging
  - bind_request
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import structlog


def setup_logging(log_level: str, log_dir: Optional[Path] = None) -> structlog.BoundLogger:
    """Configura structlog y handlers de consola/archivo.

    Sin `log_dir` solo se registra en consola.

    English: Configure structlog and console/file handlers. Without
    `log_dir` only the console is used.
    """
    # stdout queda libre para la salida de la CLI.
    # stdout stays free for CLI output.
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            TimedRotatingFileHandler(
                log_dir / "censo.log",
                when="midnight",
                backupCount=30,
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=log_level.upper(),
        handlers=handlers,
        format="%(message)s",
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper())),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger()


def bind_request(
    logger: structlog.BoundLogger,
    identity: Optional[str] = None,
    client_ip: Optional[str] = None,
) -> structlog.BoundLogger:
    """Adjunta contexto de la consulta al logger.

    English: Bind lookup context to the logger.
    """
    context: dict[str, Any] = {}
    if identity:
        # Solo el sufijo: el número completo es dato personal.
        # Suffix only: the full number is personal data.
        context["identity_suffix"] = identity[-4:]
    if client_ip:
        context["client_ip"] = client_ip
    return logger.bind(**context)

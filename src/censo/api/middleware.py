"""Cabeceras de seguridad para cada respuesta de la API.
(Security headers for every API response.)

Se instala como el middleware más externo para que también las respuestas
429 del limitador y los errores 400/500 lleven las cabeceras.

(Installed as the outermost middleware so limiter 429 responses and 400/500
errors carry the headers too.)
"""

from __future__ import annotations

import logging
from typing import Mapping

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("censo.middleware")

# Equivalentes a los valores por defecto de helmet.
# Equivalent to helmet's defaults.
SECURITY_HEADERS: Mapping[str, str] = {
    "Content-Security-Policy": "default-src 'self'; frame-ancestors 'none'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "DENY",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Agrega cabeceras de endurecimiento y oculta la firma del servidor.
    (Adds hardening headers and hides the server signature.)
    """

    def __init__(self, app: FastAPI, headers: Mapping[str, str] = SECURITY_HEADERS) -> None:
        super().__init__(app)
        self._headers = dict(headers)

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        response = await call_next(request)
        for name, value in self._headers.items():
            response.headers.setdefault(name, value)
        if "server" in response.headers:
            del response.headers["server"]
        return response


def client_address(request: Request) -> str:
    """Dirección del cliente según el socket, sin confiar en X-Forwarded-For.
    (Client address from the socket, without trusting X-Forwarded-For.)
    """
    if request.client:
        return request.client.host
    return "unknown"


def install_security_headers(app: FastAPI) -> None:
    """Instala el middleware de cabeceras; llamar después del resto.
    (Install the headers middleware; call after every other middleware.)
    """
    app.add_middleware(SecurityHeadersMiddleware)
    logger.info("security_headers_installed count=%d", len(SECURITY_HEADERS))

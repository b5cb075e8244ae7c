# Config Module
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
#
# Secciones / Sections:
#   - Configuración / Configuration
#   - Lógica principal / Core logic

"""Configuración validada de la API del censo.

Validated configuration for the census API.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import AnyUrl, Field, TypeAdapter, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PARQUET_URL = "https://pub-7ad254fd2edb413b968a33fff1a674d5.r2.dev/liberal.parquet"
DEFAULT_LOCAL_FILE = Path("/tmp/liberal.parquet")

_ENV_PATH = Path(".env")
_ENV_LOCAL_PATH = Path(".env.local")
load_dotenv(_ENV_PATH, override=False)
load_dotenv(_ENV_LOCAL_PATH, override=False)


class CensoSettings(BaseSettings):
    """Variables de entorno y archivo .env para la API.

    English: Environment variables and .env file for the API.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    HOST: str = "0.0.0.0"
    PORT: int = Field(default=3000, ge=1, le=65535)
    PARQUET_URL: str = DEFAULT_PARQUET_URL
    LOCAL_FILE: Path = DEFAULT_LOCAL_FILE
    RATE_LIMIT_MAX: int = Field(default=15, ge=1)
    RATE_LIMIT_WINDOW_SECONDS: int = Field(default=60, ge=1)
    CORS_ORIGINS: str = "*"
    # Sin timeout por defecto: una descarga lenta espera indefinidamente.
    # No timeout by default: a slow download waits indefinitely.
    DOWNLOAD_TIMEOUT_SECONDS: Optional[float] = Field(default=None, gt=0)
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[Path] = None

    @field_validator("PARQUET_URL")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        """Validate URLs without changing the stored type."""
        TypeAdapter(AnyUrl).validate_python(value)
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def cors_origins_list(self) -> List[str]:
        """/** Lista de orígenes CORS. / CORS origins list. **/"""
        raw = self.CORS_ORIGINS.strip()
        if raw == "*":
            return ["*"]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    def rate_limit(self) -> str:
        """Límite en la sintaxis de `limits` (p. ej. "15 per 60 seconds").

        English: Limit in `limits` syntax (e.g. "15 per 60 seconds").
        """
        return f"{self.RATE_LIMIT_MAX} per {self.RATE_LIMIT_WINDOW_SECONDS} seconds"


def load_config() -> CensoSettings:
    """/** Carga y valida configuración, fallando con detalle. / Load and validate configuration, failing with details. **/"""
    try:
        return CensoSettings()
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc

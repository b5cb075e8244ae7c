"""
======================== ÍNDICE / INDEX ========================
1. Descripción general / Overview
2. Componentes principales / Main components
3. Notas de mantenimiento / Maintenance notes

======================== ESPAÑOL ========================
Archivo: `src/censo/schemas.py`.
Esquemas pydantic del registro ciudadano y de las respuestas JSON.

Componentes detectados:
  - RECORD_COLUMNS
  - CitizenRecord
  - NotFoundResponse
  - ErrorResponse

Notas:
- El orden de los campos de CitizenRecord es el orden de la respuesta JSON.

======================== ENGLISH ========================
File: `src/censo/schemas.py`.
Pydantic schemas for the citizen record and the JSON responses.

Detected components:
  - RECORD_COLUMNS
  - CitizenRecord
  - NotFoundResponse
  - ErrorResponse

Notes:
- CitizenRecord field order is the JSON response order.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

NOT_FOUND_MESSAGE = "No encontrado"


class CitizenRecord(BaseModel):
    """Fila del padrón tal como la expone la API.

    English: Census row as exposed by the API.
    """

    model_config = ConfigDict(frozen=True)

    NUMERO_IDENTIDAD: str
    PRIMER_NOMBRE: Optional[str] = None
    SEGUNDO_NOMBRE: Optional[str] = None
    PRIMER_APELLIDO: Optional[str] = None
    SEGUNDO_APELLIDO: Optional[str] = None
    SEXO: Optional[str] = None
    FECHA_NACIMIENTO: Optional[str] = None
    Edad: Optional[int] = None
    DEPARTAMENTO: Optional[str] = None
    MUNICIPIO: Optional[str] = None
    AREA: Optional[str] = None
    SECTOR: Optional[str] = None
    CODIGO_CENTRO: Optional[str] = None
    NOMBRE_CENTRO: Optional[str] = None

    @field_validator(
        "NUMERO_IDENTIDAD",
        "PRIMER_NOMBRE",
        "SEGUNDO_NOMBRE",
        "PRIMER_APELLIDO",
        "SEGUNDO_APELLIDO",
        "SEXO",
        "DEPARTAMENTO",
        "MUNICIPIO",
        "AREA",
        "SECTOR",
        "CODIGO_CENTRO",
        "NOMBRE_CENTRO",
        mode="before",
    )
    @classmethod
    def as_text(cls, value: Any) -> Any:
        """Convierte códigos numéricos del Parquet a texto.

        English: Render numeric Parquet codes as text.
        """
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("FECHA_NACIMIENTO", mode="before")
    @classmethod
    def iso_date(cls, value: Any) -> Any:
        """Normaliza fechas a ISO `YYYY-MM-DD`.

        English: Normalize dates to ISO `YYYY-MM-DD`.
        """
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        return value

    @classmethod
    def from_row(cls, columns: list[str], row: tuple) -> "CitizenRecord":
        return cls(**dict(zip(columns, row)))


# Columnas seleccionadas, en el mismo orden que la respuesta.
# Selected columns, in response order.
RECORD_COLUMNS: tuple[str, ...] = tuple(CitizenRecord.model_fields)


class NotFoundResponse(BaseModel):
    mensaje: str = NOT_FOUND_MESSAGE


class ErrorResponse(BaseModel):
    error: str

"""Fixtures compartidas: Parquet de prueba y dobles de fetcher/repositorio.

English: Shared fixtures: test Parquet file and fetcher/repository doubles.
"""

from __future__ import annotations

from pathlib import Path

import duckdb
import pytest

from censo.config import CensoSettings
from censo.errors import RemoteFetchError
from doubles import FakeFetcher

PARQUET_URL = "https://r2.example.com/liberal.parquet"

_ROWS_SQL = """
    SELECT
        '00112233' AS NUMERO_IDENTIDAD,
        'MARIA' AS PRIMER_NOMBRE,
        'JOSE' AS SEGUNDO_NOMBRE,
        'LOPEZ' AS PRIMER_APELLIDO,
        'REYES' AS SEGUNDO_APELLIDO,
        'F' AS SEXO,
        DATE '1988-03-14' AS FECHA_NACIMIENTO,
        CAST(37 AS BIGINT) AS Edad,
        'FRANCISCO MORAZAN' AS DEPARTAMENTO,
        'DISTRITO CENTRAL' AS MUNICIPIO,
        'URBANA' AS AREA,
        'SECTOR 12' AS SECTOR,
        CAST(4521 AS INTEGER) AS CODIGO_CENTRO,
        'ESCUELA REPUBLICA DE MEXICO' AS NOMBRE_CENTRO
    UNION ALL
    SELECT
        '0801199012345', 'CARLOS', NULL, 'MEJIA', 'CRUZ', 'M',
        DATE '1990-07-01', CAST(35 AS BIGINT), 'CORTES', 'SAN PEDRO SULA',
        'URBANA', 'SECTOR 3', CAST(1102 AS INTEGER), 'INSTITUTO JOSE TRINIDAD REYES'
"""


def write_census_parquet(path: Path) -> Path:
    """Escribe un Parquet con dos filas conocidas.

    English: Write a Parquet file with two known rows.
    """
    target = str(path).replace("'", "''")
    conn = duckdb.connect(":memory:")
    try:
        conn.execute(f"COPY ({_ROWS_SQL}) TO '{target}' (FORMAT PARQUET)")
    finally:
        conn.close()
    return path


@pytest.fixture
def parquet_file(tmp_path: Path) -> Path:
    return write_census_parquet(tmp_path / "liberal.parquet")


@pytest.fixture
def parquet_bytes(tmp_path: Path) -> bytes:
    staging = tmp_path / "staging"
    staging.mkdir()
    return write_census_parquet(staging / "liberal.parquet").read_bytes()


@pytest.fixture
def settings(tmp_path: Path) -> CensoSettings:
    return CensoSettings(
        PARQUET_URL=PARQUET_URL,
        LOCAL_FILE=tmp_path / "cache" / "liberal.parquet",
    )


@pytest.fixture
def fake_fetcher(tmp_path: Path) -> FakeFetcher:
    return FakeFetcher(tmp_path / "liberal.parquet")


@pytest.fixture
def failing_fetcher(tmp_path: Path) -> FakeFetcher:
    return FakeFetcher(
        tmp_path / "liberal.parquet",
        error=RemoteFetchError("Status 403 al descargar parquet", status_code=403),
    )

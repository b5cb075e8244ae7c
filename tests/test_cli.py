"""Pruebas de la CLI.

Tests for the CLI.
"""

import json
import sys

import pytest
import structlog
from typer.testing import CliRunner

from censo import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def stderr_logging(monkeypatch):
    """Deja los eventos de structlog en stderr, como hace `setup_logging`.

    English: Keep structlog events on stderr, as `setup_logging` does.
    """
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))
    yield
    structlog.reset_defaults()


def test_buscar_prints_record(monkeypatch, parquet_file):
    monkeypatch.setenv("LOCAL_FILE", str(parquet_file))

    result = runner.invoke(cli.app, ["buscar", "0011-2233"])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["NUMERO_IDENTIDAD"] == "00112233"


def test_buscar_invalid_identity_exits_1(monkeypatch, parquet_file):
    monkeypatch.setenv("LOCAL_FILE", str(parquet_file))

    result = runner.invoke(cli.app, ["buscar", "123"])

    assert result.exit_code == 1
    assert "Número de identidad inválido" in result.stdout


def test_descargar_reports_existing_file(monkeypatch, parquet_file):
    monkeypatch.setenv("LOCAL_FILE", str(parquet_file))

    result = runner.invoke(cli.app, ["descargar"])

    assert result.exit_code == 0
    assert str(parquet_file) in result.stdout


def test_descargar_failure_exits_1(monkeypatch, httpx_mock, tmp_path):
    url = "https://r2.example.com/liberal.parquet"
    httpx_mock.add_response(url=url, status_code=404)
    monkeypatch.setenv("PARQUET_URL", url)
    monkeypatch.setenv("LOCAL_FILE", str(tmp_path / "liberal.parquet"))

    result = runner.invoke(cli.app, ["descargar"])

    assert result.exit_code == 1
    assert "Status 404" in result.output


def test_buscar_not_found_keeps_stdout_json(monkeypatch, parquet_file):
    monkeypatch.setenv("LOCAL_FILE", str(parquet_file))

    result = runner.invoke(cli.app, ["buscar", "99999999"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"mensaje": "No encontrado"}

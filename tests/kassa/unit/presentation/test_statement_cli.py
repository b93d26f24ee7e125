"""Tests for the kassa command line."""

import pytest
from rich.console import Console
from typer.testing import CliRunner

from kassa.presentation.cli.app import app
from kassa_config import clear_settings_cache

runner = CliRunner()

GENERIC_CSV = (
    "date,amount,description\n"
    "2025-03-01,100.00,Invoice 1\n"
    "2025-03-02,abc,Broken\n"
)

SWEDBANK_CSV = (
    "\ufeffKuupäev,Väärtuspäev,Valuuta,Summa,Tüüp,Viitenumber,Selgitus,"
    "Saaja/maksja nimi,Konto\n"
    '14.03.2025,14.03.2025,EUR,"1 234,56",K,RF18,Invoice 1001,Acme OÜ,EE12\n'
)


@pytest.fixture
def generic_file(tmp_path):
    path = tmp_path / "generic.csv"
    path.write_text(GENERIC_CSV, encoding="utf-8")
    return path


@pytest.fixture
def swedbank_file(tmp_path):
    path = tmp_path / "swedbank.csv"
    path.write_text(SWEDBANK_CSV, encoding="utf-8")
    return path


class TestStatementCommands:
    """Tests for the statement sub-commands."""

    def test_detect(self, swedbank_file):
        result = runner.invoke(app, ["statement", "detect", str(swedbank_file)])

        assert result.exit_code == 0
        assert "SWEDBANK_EE" in result.output

    def test_preview_reports_bad_rows(self, generic_file):
        result = runner.invoke(app, ["statement", "preview", str(generic_file)])

        assert result.exit_code == 0
        assert "GENERIC" in result.output
        assert "invalid amount 'abc'" in result.output

    def test_preview_shows_canonical_date_and_amount(self, swedbank_file, monkeypatch):
        monkeypatch.setattr("kassa.presentation.cli.app.console", Console(width=240))

        result = runner.invoke(app, ["statement", "preview", str(swedbank_file)])

        assert result.exit_code == 0
        assert "2025-03-14" in result.output
        assert "1,234.56" in result.output
        assert "1 234,56" not in result.output

    def test_validate_fails_on_bad_rows(self, generic_file):
        result = runner.invoke(app, ["statement", "validate", str(generic_file)])

        assert result.exit_code == 1
        assert "Row errors (1)" in result.output

    def test_validate_clean_file(self, swedbank_file):
        result = runner.invoke(app, ["statement", "validate", str(swedbank_file)])

        assert result.exit_code == 0
        assert "All rows are valid." in result.output

    def test_validate_with_wrong_format(self, swedbank_file):
        result = runner.invoke(
            app,
            ["statement", "validate", str(swedbank_file), "--format", "GENERIC"],
        )

        assert result.exit_code == 1

    def test_missing_file(self, tmp_path):
        result = runner.invoke(
            app,
            ["statement", "detect", str(tmp_path / "missing.csv")],
        )

        assert result.exit_code != 0

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes("date,amount\n2025-03-01,1.00,Caf\xe9\n".encode("latin-1"))

        result = runner.invoke(app, ["statement", "preview", str(path)])

        assert result.exit_code == 2
        assert "Could not read latin1.csv" in result.output


class TestDbCommands:
    """Tests for the db sub-commands."""

    def test_init_creates_database(self, tmp_path, monkeypatch):
        db_path = tmp_path / "data" / "kassa.db"
        monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
        clear_settings_cache()

        try:
            result = runner.invoke(app, ["db", "init"])
        finally:
            clear_settings_cache()

        assert result.exit_code == 0
        assert "Database ready" in result.output
        assert db_path.exists()


class TestServeCommand:
    """Tests for the serve command."""

    def test_serve_uses_settings(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            "kassa.presentation.cli.app.uvicorn.run",
            lambda target, **kwargs: calls.append((target, kwargs)),
        )
        monkeypatch.setenv("API_PORT", "8123")
        clear_settings_cache()

        try:
            result = runner.invoke(app, ["serve", "--host", "127.0.0.1"])
        finally:
            clear_settings_cache()

        assert result.exit_code == 0
        [(target, kwargs)] = calls
        assert target == "kassa.presentation.api.app:app"
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8123
        assert kwargs["reload"] is False

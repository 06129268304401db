"""Tests for the query inspection CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from querystore.cli import main
from querystore.config.logging import configure_logging

_QUERIES_DIR = Path(__file__).resolve().parent / "fixtures" / "queries"


def test_cli_prints_positional_queries(capsys: pytest.CaptureFixture[str]) -> None:
    code = main([str(_QUERIES_DIR / "users.sql"), "--name", "create_user"])

    out = capsys.readouterr().out
    assert code == 0
    assert out == (
        "-- name: create_user\n"
        "-- params: $1=full_name, $2=age\n"
        "INSERT INTO users (full_name, age)\n"
        "VALUES ($1, $2)\n"
        "RETURNING id\n"
    )


def test_cli_loads_directories(capsys: pytest.CaptureFixture[str]) -> None:
    code = main([str(_QUERIES_DIR), "--exclude-reserved"])

    out = capsys.readouterr().out
    assert code == 0
    assert "-- name: activity_by_hour\n-- params: $1=user_id, $2=since\n" in out
    assert "'HH24:MI:SS'" in out
    assert "-- name: get_user\n" in out


def test_cli_reports_duplicates(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "dup.sql"
    path.write_text("-- name: get_user\nSELECT 1\n", encoding="utf-8")

    code = main([str(_QUERIES_DIR / "users.sql"), str(path)])

    assert code == 1
    assert "Query 'get_user' already exists" in capsys.readouterr().err


def test_cli_reports_unknown_query(capsys: pytest.CaptureFixture[str]) -> None:
    code = main([str(_QUERIES_DIR / "users.sql"), "--name", "nope"])

    assert code == 1
    assert "Query 'nope' not found" in capsys.readouterr().err


def test_cli_reports_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main([str(tmp_path / "missing.sql")])

    assert code == 1
    assert "missing.sql" in capsys.readouterr().err


def test_configure_logging_keeps_driver_quiet() -> None:
    configure_logging("debug")

    assert logging.getLogger("querystore").level == logging.DEBUG
    assert logging.getLogger("psycopg").level == logging.WARNING
    assert logging.getLogger("psycopg.pool").level == logging.WARNING

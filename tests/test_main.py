"""Tests for the command line interface."""

import sys
from pathlib import Path

import pytest
from werkzeug.security import check_password_hash

from secure_access.main import main

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["secure-access", *argv])
    main()


def test_check_config_ok(monkeypatch, capsys):
    monkeypatch.setenv("SECRET_KEY", "test-key")
    run_cli(monkeypatch, "--config", str(FIXTURES_DIR / "sample_config.yaml"), "check-config")
    out = capsys.readouterr().out
    assert "Configuration OK: 1 users, 2 pages, registration enabled" in out


def test_check_config_errors(monkeypatch, capsys):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(SystemExit) as exc:
        run_cli(monkeypatch, "--config", str(FIXTURES_DIR / "sample_config.yaml"), "check-config")
    assert exc.value.code == 1
    assert "SECRET_KEY" in capsys.readouterr().out


def test_check_config_missing_file(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "--config", "nonexistent.yaml", "check-config")
    assert "not found" in capsys.readouterr().out


def test_hash_password(monkeypatch, capsys):
    run_cli(monkeypatch, "hash-password", "s3cret")
    pw_hash = capsys.readouterr().out.strip()
    assert check_password_hash(pw_hash, "s3cret")


def test_no_command(monkeypatch):
    with pytest.raises(SystemExit):
        run_cli(monkeypatch)

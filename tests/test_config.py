"""Tests for configuration loading."""

from pathlib import Path

import pytest

from secure_access.config import Config, PageConfig, load_config, validate_config


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def no_secret_key(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)


def test_load_config():
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))

    assert config.site.title == "Test Intranet"
    assert config.site.description == "Members only"
    assert [p.slug for p in config.site.pages] == ["about", "handbook"]
    assert config.site.pages[0].title == "About Us"
    assert "alice" in config.users
    assert config.registration.enabled is True
    assert config.login.message == "Maintenance tonight at 22:00"
    assert config.logging.level == "DEBUG"
    assert config.logging.file == ""
    assert config.web.port == 9000


def test_load_config_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config("nonexistent.yaml")


def test_load_config_empty_file(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("")
    config = load_config(str(config_file))

    assert config.site.title == "Secure Site"
    assert config.users == {}
    assert config.registration.enabled is False
    assert config.login.message == ""
    assert config.web.port == 8080


def test_secret_key_from_env(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))
    assert config.secret_key == "from-env"


def test_validate_config_missing_secret_key():
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))
    errors = validate_config(config)
    assert any("SECRET_KEY" in e for e in errors)


def test_validate_config_valid():
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))
    config.secret_key = "test-key"
    assert validate_config(config) == []


def test_validate_config_nobody_can_log_in():
    config = Config(secret_key="test-key")
    errors = validate_config(config)
    assert any("nobody can log in" in e for e in errors)


def test_validate_config_registration_allows_no_users():
    config = Config(secret_key="test-key")
    config.registration.enabled = True
    assert validate_config(config) == []


def test_validate_config_bad_pages():
    config = Config(secret_key="test-key", users={"alice": "hash"})
    config.site.pages = [
        PageConfig(slug="", title="Nameless"),
        PageConfig(slug="login"),
        PageConfig(slug="docs"),
        PageConfig(slug="docs"),
    ]
    errors = validate_config(config)
    assert any("has no slug" in e for e in errors)
    assert any("'login' is reserved" in e for e in errors)
    assert any("Duplicate page slug 'docs'" in e for e in errors)


def test_load_config_empty_sections(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("site:\nusers:\nregistration:\nlogin:\ndatabase:\nlogging:\nweb:\n")
    config = load_config(str(config_file))

    assert config.site.title == "Secure Site"
    assert config.site.pages == []
    assert config.users == {}
    assert config.database_path == "data/secure-access.db"
    assert config.web.port == 8080


def test_load_config_empty_pages(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("site:\n  title: Notes\n  pages:\n")
    config = load_config(str(config_file))
    assert config.site.title == "Notes"
    assert config.site.pages == []


def test_database_path():
    config = load_config(str(FIXTURES_DIR / "sample_config.yaml"))
    assert config.database_path == ":memory:"

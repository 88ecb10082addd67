"""Configuration loading from YAML and environment variables."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv


@dataclass
class PageConfig:
    slug: str
    title: str = ""
    body: str = ""


@dataclass
class SiteConfig:
    title: str = "Secure Site"
    description: str = ""
    pages: list[PageConfig] = field(default_factory=list)


@dataclass
class RegistrationConfig:
    enabled: bool = False


@dataclass
class LoginConfig:
    message: str = ""  # shown above the form; suppresses the default notice


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = "logs/secure-access.log"
    max_size_mb: int = 10
    backup_count: int = 5


@dataclass
class WebConfig:
    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class Config:
    site: SiteConfig = field(default_factory=SiteConfig)
    users: dict[str, str] = field(default_factory=dict)  # username -> password hash
    registration: RegistrationConfig = field(default_factory=RegistrationConfig)
    login: LoginConfig = field(default_factory=LoginConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    database_path: str = "data/secure-access.db"
    web: WebConfig = field(default_factory=WebConfig)
    secret_key: str = ""


def load_config(config_path: str = "config.yaml", env_path: str = ".env") -> Config:
    """Load configuration from YAML file and environment variables."""
    # Load .env file for secrets
    env_file = Path(env_path)
    if env_file.exists():
        load_dotenv(env_file)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file) as f:
        raw = yaml.safe_load(f) or {}

    config = Config()

    # Site content
    site_raw = raw.get("site") or {}
    config.site = SiteConfig(
        title=site_raw.get("title", config.site.title),
        description=site_raw.get("description", ""),
    )
    for page_raw in site_raw.get("pages") or []:
        config.site.pages.append(PageConfig(
            slug=str(page_raw.get("slug", "")),
            title=page_raw.get("title", ""),
            body=page_raw.get("body", ""),
        ))

    # Users are stored as password hashes, never plain text
    config.users = {str(name): str(pw_hash) for name, pw_hash in (raw.get("users") or {}).items()}

    reg_raw = raw.get("registration") or {}
    config.registration = RegistrationConfig(enabled=reg_raw.get("enabled", False))

    login_raw = raw.get("login") or {}
    config.login = LoginConfig(message=login_raw.get("message", "") or "")

    # Accounts created through the signup screen
    db_raw = raw.get("database") or {}
    config.database_path = db_raw.get("path", config.database_path)

    # Logging
    log_raw = raw.get("logging") or {}
    config.logging = LoggingConfig(
        level=log_raw.get("level", "INFO"),
        file=log_raw.get("file", "logs/secure-access.log"),
        max_size_mb=log_raw.get("max_size_mb", 10),
        backup_count=log_raw.get("backup_count", 5),
    )

    # Web server settings
    web_raw = raw.get("web") or {}
    config.web = WebConfig(
        host=web_raw.get("host", "127.0.0.1"),
        port=web_raw.get("port", 8080),
    )

    config.secret_key = os.environ.get("SECRET_KEY", "")

    return config


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return a list of errors (empty if valid)."""
    errors = []

    if not config.secret_key:
        errors.append("SECRET_KEY environment variable is not set")

    if not config.users and not config.registration.enabled:
        errors.append("No users defined in config.yaml and registration is disabled; nobody can log in")

    seen = set()
    for i, page in enumerate(config.site.pages):
        if not page.slug:
            errors.append(f"Page [{i}] '{page.title}' has no slug")
            continue
        if "/" in page.slug or page.slug in ("login", "logout", "signup", "feed"):
            errors.append(f"Page [{i}] slug '{page.slug}' is reserved or contains '/'")
        if page.slug in seen:
            errors.append(f"Duplicate page slug '{page.slug}'")
        seen.add(page.slug)

    return errors

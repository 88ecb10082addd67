"""CLI entry point for the secure access site."""

import argparse
import getpass
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from werkzeug.security import generate_password_hash

from .config import load_config, validate_config


def setup_logging(level: str = "INFO", log_file: str | None = None, max_size_mb: int = 10, backup_count: int = 5):
    """Configure logging."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        ))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def _load_and_setup(config_path: str):
    config = load_config(config_path)
    setup_logging(
        config.logging.level,
        config.logging.file,
        config.logging.max_size_mb,
        config.logging.backup_count,
    )
    return config


def cmd_serve(args):
    """Run the development web server."""
    config = _load_and_setup(args.config)
    logger = logging.getLogger("secure_access")

    errors = validate_config(config)
    if errors:
        for err in errors:
            logger.error(f"Config error: {err}")
        sys.exit(1)

    from .web.app import create_app

    app = create_app(config_path=args.config)
    host = args.host or config.web.host
    port = args.port or config.web.port
    logger.info(f"Starting {config.site.title} at http://{host}:{port}")
    app.run(host=host, port=port, debug=args.debug)


def cmd_check_config(args):
    """Validate the configuration file."""
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        for err in errors:
            print(f"Error: {err}")
        sys.exit(1)

    print(
        f"Configuration OK: {len(config.users)} users, "
        f"{len(config.site.pages)} pages, "
        f"registration {'enabled' if config.registration.enabled else 'disabled'}"
    )


def cmd_hash_password(args):
    """Print a password hash for the users section of config.yaml."""
    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Error: password must not be empty")
        sys.exit(1)
    print(generate_password_hash(password))


def main():
    parser = argparse.ArgumentParser(
        prog="secure-access",
        description="Serve a site that requires visitors to log in.",
    )
    parser.add_argument(
        "--config", default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the development server")
    serve_parser.add_argument("--host", help="Bind address (default: web.host from config)")
    serve_parser.add_argument("--port", type=int, help="Port (default: web.port from config)")
    serve_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    serve_parser.set_defaults(func=cmd_serve)

    # check-config
    check_parser = subparsers.add_parser("check-config", help="Validate the configuration")
    check_parser.set_defaults(func=cmd_check_config)

    # hash-password
    hash_parser = subparsers.add_parser("hash-password", help="Hash a password for config.yaml")
    hash_parser.add_argument("password", nargs="?", help="Password to hash (prompted if omitted)")
    hash_parser.set_defaults(func=cmd_hash_password)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()

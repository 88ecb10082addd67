"""Flask application factory."""

import os
from pathlib import Path

from flask import Flask

from ..config import load_config
from ..users import UserStore


def create_app(config_path: str | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_path: Path to the secure_access config.yaml.
                     Defaults to CONFIG_PATH env var or 'config.yaml'.
    """
    app = Flask(
        __name__,
        template_folder=str(Path(__file__).parent / "templates"),
        static_folder=None,
    )

    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config.yaml")

    sa_config = load_config(config_path)
    app.config["SA_CONFIG"] = sa_config

    # The signed session cookie is the only proof of login
    if not sa_config.secret_key:
        raise RuntimeError("SECRET_KEY environment variable is not set; refusing to start")
    app.config["SECRET_KEY"] = sa_config.secret_key
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"

    user_store = UserStore(sa_config.database_path, sa_config.users)
    user_store.init_db()
    app.config["USER_STORE"] = user_store

    # The gate must be the first request hook registered
    from .auth import bp as auth_bp
    from .auth import init_gate
    init_gate(app)
    app.register_blueprint(auth_bp)

    from .routes import bp
    app.register_blueprint(bp)

    return app

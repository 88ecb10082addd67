"""Entry point for the secure access web site."""

import os

from secure_access.config import load_config
from secure_access.main import setup_logging
from secure_access.web.app import create_app

config_path = os.environ.get("CONFIG_PATH", "config.yaml")
_config = load_config(config_path)
setup_logging(
    _config.logging.level,
    _config.logging.file,
    _config.logging.max_size_mb,
    _config.logging.backup_count,
)

app = create_app(config_path=config_path)

if __name__ == "__main__":
    port = int(os.environ.get("PORT", _config.web.port))
    host = os.environ.get("HOST", _config.web.host)
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"

    print(f"Starting {_config.site.title} at http://{host}:{port}")
    app.run(host=host, port=port, debug=debug)

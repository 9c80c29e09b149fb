"""
project: Digger
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally loaded from a
``.env`` file) with defaults suitable for local development. Dungeon
generation defaults can be overridden with ``DIGGER_*`` variables; see
``digger.dungeon.config.apply_env_overrides``.
"""

import os

from dotenv import load_dotenv
from flask import Flask

from digger.dungeon.config import DungeonConfig, apply_env_overrides

__version__ = "0.1.0"

# Load .env if present so DIGGER_* settings can be supplied without exporting
# shell variables during development.
load_dotenv()


def create_app(config_overrides: dict | None = None) -> Flask:
    """Return a new Flask app with the dungeon API registered."""
    app = Flask(__name__, instance_relative_config=True)

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # read-only installs still serve the API; only file logging needs it
        pass

    dungeon_defaults = apply_env_overrides(DungeonConfig())
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        DIGGER_DEFAULT_ROOMS=dungeon_defaults.rooms,
        DIGGER_MAX_ROOMS=int(os.getenv("DIGGER_MAX_ROOMS", "50")),
        DIGGER_EXTENT=dungeon_defaults.extent,
        DIGGER_STOP_ON_EXHAUSTION=dungeon_defaults.stop_on_exhaustion,
        DIGGER_DISABLE_CACHE=os.getenv("DIGGER_DISABLE_CACHE", "0") == "1",
    )
    if config_overrides:
        app.config.update(config_overrides)

    from digger.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)
    return app


__all__ = ["create_app", "__version__"]

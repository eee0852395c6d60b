"""
project: Labyrinth Arcade
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally via a local
.env file) with defaults suitable for development. The maze generator reads
MAZE_* keys from ``app.config`` on top of its own environment overrides.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so LABYRINTH_* / MAZE_* settings can be supplied
# without exporting shell variables during development.
load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(test_config=None):
    """Build the Flask app and register the API blueprints."""
    app = Flask(__name__, instance_relative_config=True)

    # Ensure instance directory exists for the rotating log file
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        JSON_SORT_KEYS=False,
        MAZE_COLS=int(os.getenv("MAZE_COLS", "28")),
        MAZE_ROWS=int(os.getenv("MAZE_ROWS", "31")),
        MAZE_JOIN_POCKETS=_env_flag("MAZE_JOIN_POCKETS", "1"),
    )
    if os.getenv("MAZE_MAX_ATTEMPTS"):
        app.config["MAZE_MAX_ATTEMPTS"] = int(os.environ["MAZE_MAX_ATTEMPTS"])
    if test_config:
        app.config.update(test_config)

    from labyrinth.routes.maze_api import bp_maze
    from labyrinth.routes.score_api import bp_score

    app.register_blueprint(bp_maze)
    app.register_blueprint(bp_score)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app


app = create_app()

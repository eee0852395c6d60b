"""
project: Labyrinth Arcade
module: server.py
License: MIT

Server bootstrap: stdlib logging for Flask/werkzeug and the development
HTTP server. Application events keep using ``labyrinth.logging_utils``.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from labyrinth import app
from labyrinth.logging_utils import log

# LABYRINTH_LOG_LEVEL names -> stdlib levels
_STDLIB_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Configure logging and serve the maze API with Flask's built-in server."""
    with app.app_context():
        log_path = _configure_logging()
    log.info(event="server_start", host=host, port=port, debug=debug, log_file=log_path)
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(max_bytes: int = 1_000_000, backups: int = 3):
    """Send stdlib logging (request lines, tracebacks from the 500 handler) to
    the console and a rotating ``app.log`` under the instance folder.

    Safe to call more than once: existing root handlers are replaced.
    Returns the log file path.
    """
    os.makedirs(app.instance_path, exist_ok=True)
    log_path = os.path.join(app.instance_path, "app.log")
    level = _STDLIB_LEVELS.get(os.getenv("LABYRINTH_LOG_LEVEL", "info").lower(), logging.INFO)

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    handlers = [
        RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backups),
        logging.StreamHandler(),
    ]
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        root.addHandler(h)
    root.setLevel(level)
    # werkzeug request lines follow the same threshold
    logging.getLogger("werkzeug").setLevel(level)
    return log_path

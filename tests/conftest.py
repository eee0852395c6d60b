import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from labyrinth import create_app  # noqa: E402
from labyrinth.routes.maze_api import clear_maze_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_maze_cache():
    """Keep cached mazes from leaking config between tests."""
    clear_maze_cache()
    yield
    clear_maze_cache()

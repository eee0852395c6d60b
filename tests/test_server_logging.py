import json

import pytest

from labyrinth import app, create_app
from labyrinth import logging_utils
from labyrinth.server import _configure_logging


def test_configure_logging_creates_file(tmp_path, monkeypatch):
    # Redirect instance path to a temp directory to exercise logging setup
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    with app.app_context():
        # Run twice to ensure idempotence (handler replace path)
        _configure_logging()
        path = _configure_logging()
    assert path == str(tmp_path / "app.log")
    assert (tmp_path / "app.log").exists()


def test_key_value_log_line(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    logging_utils.get_logger("labyrinth.test").info(event="unit test", seed=42, skipped=None)
    line = capsys.readouterr().out.strip()
    assert "level=info" in line
    assert "event=unit_test" in line
    assert "seed=42" in line
    assert "logger=labyrinth.test" in line
    assert "skipped" not in line


def test_json_log_line(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    logging_utils.get_logger("labyrinth.test").warn(event="maze_fallback", attempts=30)
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["level"] == "warn"
    assert rec["event"] == "maze_fallback"
    assert rec["attempts"] == 30


def test_level_threshold_filters(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["warn"])
    log = logging_utils.get_logger("labyrinth.test")
    log.info(event="hidden")
    log.error(event="shown")
    captured = capsys.readouterr()
    assert "hidden" not in captured.out
    assert "event=shown" in captured.err or '"shown"' in captured.err


def test_get_logger_is_cached():
    assert logging_utils.get_logger("labyrinth.x") is logging_utils.get_logger("labyrinth.x")


def test_internal_error_handler_returns_error_id():
    test_app = create_app({"TESTING": False, "PROPAGATE_EXCEPTIONS": False})

    @test_app.route("/boom")
    def boom():
        raise RuntimeError("kaboom")

    r = test_app.test_client().get("/boom")
    assert r.status_code == 500
    data = r.get_json()
    assert data["error"] == "internal error"
    assert len(data["error_id"]) == 8


def test_bound_logger_repeats_fields(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["debug"])
    match_log = logging_utils.get_logger("labyrinth.test").bind(seed=7)
    match_log.debug(event="a")
    match_log.info(event="b", seed=8)
    first, second = [json.loads(ln) for ln in capsys.readouterr().out.strip().splitlines()]
    assert first["seed"] == 7 and first["logger"] == "labyrinth.test"
    assert second["seed"] == 8


def test_set_level_rejects_unknown(monkeypatch):
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.CURRENT_LEVEL)
    assert logging_utils.set_level("WARN") == 30
    with pytest.raises(ValueError):
        logging_utils.set_level("loud")


def test_reserved_field_names_do_not_clash(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    logging_utils.get_logger("labyrinth.test").info(event="level_start", level=3, ts="late")
    line = capsys.readouterr().out.strip()
    assert line.startswith("level=info ")
    assert "level_=3" in line
    assert "ts_=late" in line


def test_reserved_field_names_in_json(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    logging_utils.get_logger("labyrinth.test").warn(event="maze_fallback", level=2)
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec["level"] == "warn"
    assert rec["level_"] == 2

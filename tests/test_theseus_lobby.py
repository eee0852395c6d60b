import pytest

from labyrinth.game import InputState, Lobby, SlotState, TheseusMatch
from labyrinth.game.entities import MINOTAUR_ROLES, ROLE_SPEED
from labyrinth.game.lobby import LOBBY_COUNTDOWN, default_slots
from labyrinth.game.pathfinding import find_path
from labyrinth.game.pursuit import PursuitContext
from labyrinth.game.theseus import STATE_LOST, STATE_PLAYING, STATE_WAITING


@pytest.fixture()
def match():
    m = TheseusMatch(seed=7)
    m.setup_slots(default_slots())
    return m


def _humanize(match):
    for m in match.minotaurs:
        m.is_ai = False


def test_waiting_match_ignores_ticks():
    m = TheseusMatch(seed=7)
    assert m.state == STATE_WAITING
    assert m.update(16) == []


def test_setup_places_runner_and_minotaurs(match):
    assert match.state == STATE_PLAYING
    assert [m.role for m in match.minotaurs] == list(MINOTAUR_ROLES)
    cells = list(match.maze.ghost_house.cells)
    assert [m.tile for m in match.minotaurs] == cells[:4]
    assert not match.board.in_ghost_house(*match.theseus.tile)
    assert match.theseus.speed == ROLE_SPEED["theseus"]
    assert match.minotaurs[0].speed == ROLE_SPEED["hunter"]
    assert match.thread == [match.theseus.tile]


def test_slots_only_accepted_before_start(match):
    assert match.setup_slots(default_slots()) is False


def test_slot_records_from_dicts():
    m = TheseusMatch(seed=7)
    m.setup_slots([
        {"id": "runner-1", "role": "theseus", "isAI": False, "connected": True},
        {"id": "p2", "role": "warden", "isAI": False, "connected": True},
    ])
    assert m.theseus.id == "runner-1"
    warden = next(x for x in m.minotaurs if x.role == "warden")
    assert warden.id == "p2" and warden.is_ai is False
    assert all(x.is_ai for x in m.minotaurs if x.role != "warden")


def test_thread_extends_and_gets_cut(match):
    _humanize(match)
    match.thread = [(1, 1), (2, 1), (3, 1), (4, 1)]
    match._cut_thread((2, 1))
    assert match.thread == [(3, 1), (4, 1)]
    match._cut_thread((9, 9))
    assert match.thread == [(3, 1), (4, 1)]
    match.theseus.place(5, 1)
    match._extend_thread()
    match._extend_thread()
    assert match.thread == [(3, 1), (4, 1), (5, 1)]


def test_capture_ends_match(match):
    _humanize(match)
    hunter = match.minotaurs[0]
    hunter.place(*match.theseus.tile)
    events = match.update(0)
    assert [e.kind for e in events] == ["capture", "match_lost"]
    assert events[0].data["role"] == "hunter"
    assert match.state == STATE_LOST
    # the minotaur stood on the thread head, so everything up to it is gone
    assert match.thread == []
    assert match.update(16) == []


def test_ai_refreshes_path_toward_role_target(match):
    hunter = match.minotaurs[0]
    hunter.path = []
    ctx = PursuitContext(match.theseus, hunter, match.board.cols, match.board.rows)
    expected = find_path(match.board.grid, hunter.tile, match.theseus.tile)
    match._refresh_ai_path(hunter, ctx)
    if len(expected) >= 2:
        assert hunter.path == expected
    else:
        assert hunter.path == []


def test_human_minotaur_follows_input(match):
    _humanize(match)
    brute = match.minotaurs[3]
    dirs = match.board.available_directions(*brute.tile)
    assert dirs
    dx, dy = dirs[0]
    name = {(0, -1): "up", (0, 1): "down", (-1, 0): "left", (1, 0): "right"}[(dx, dy)]
    match.update(16, minotaur_inputs={brute.id: InputState(**{name: True})})
    assert brute.moving or brute.tile != brute.spawn


def test_snapshot_has_thread(match):
    snap = match.snapshot()
    assert snap["thread"] == [list(match.theseus.tile)]
    assert len(snap["entities"]) == 5


def test_lobby_countdown_fires_once():
    started = []
    lobby = Lobby(on_start=started.append)
    lobby.set_slots(default_slots())
    lobby.start_countdown()
    assert lobby.countdown == LOBBY_COUNTDOWN
    lobby.tick(30.5)
    assert lobby.countdown == 30 and not started
    lobby.tick(29.5)
    assert lobby.started and len(started) == 1
    lobby.tick(10)
    lobby.force_start()
    assert len(started) == 1


def test_lobby_force_start_defaults_and_fills_ai():
    received = []
    lobby = Lobby(on_start=received.append)
    lobby.force_start()
    slots = received[0]
    assert [s.role for s in slots] == ["theseus"] + list(MINOTAUR_ROLES)
    assert all(s.is_ai for s in slots if not s.connected)


def test_lobby_marks_disconnected_slots_ai():
    lobby = Lobby(on_start=lambda slots: None)
    lobby.set_slots([
        SlotState("a", "theseus", is_ai=False, connected=False),
        {"id": "b", "role": "hunter", "is_ai": False, "connected": True},
    ])
    lobby.fill_ai()
    assert lobby.slots[0].is_ai is True
    assert lobby.slots[1].is_ai is False


def test_slot_state_roundtrip_keys():
    s = SlotState.from_dict({"id": "x", "role": "brute", "isAI": False})
    assert s.to_dict() == {"id": "x", "role": "brute", "is_ai": False, "connected": False}

"""
project: Labyrinth Arcade
module: score_api.py
License: MIT

Score submission endpoint. Scores are validated and logged; persistence is
left to whatever collects the logs.
"""

from flask import Blueprint, jsonify, request

from labyrinth.logging_utils import get_logger

log = get_logger("labyrinth.score")

bp_score = Blueprint("score", __name__)


@bp_score.route("/api/score", methods=["POST"])
def submit_score():
    """Body JSON: { "player": <str>, "score": <number> } -> { "ok": true }"""
    payload = request.get_json(silent=True) or {}
    player = payload.get("player") if isinstance(payload, dict) else None
    score = payload.get("score") if isinstance(payload, dict) else None
    if not player or isinstance(score, bool) or not isinstance(score, (int, float)):
        return jsonify({"error": "Invalid payload"}), 400
    log.info(event="score_submitted", player=str(player), score=score)
    return jsonify({"ok": True})

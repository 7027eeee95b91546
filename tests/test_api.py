"""Tests for the FastAPI ClassicXO interface."""

from __future__ import annotations

from fastapi.testclient import TestClient

from classicxo import ui
from classicxo.ai import Difficulty
from classicxo.ui import app


client = TestClient(app)
ui.AI_THINK_DELAY = (0.0, 0.0)


def _perfect_bot(game_id: str) -> None:
    ai = ui.SESSIONS[game_id].controller.ai
    ai.random_move_chance = 0.0


def test_create_game_and_first_move():
    response = client.post("/api/game", json={"difficulty": "hard"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["mode"] == "bot"
    assert payload["difficulty"] == "hard"
    assert payload["currentPlayer"] == "X"
    assert payload["cells"] == [""] * 9
    assert payload["moveLog"] == []

    game_id = payload["id"]
    _perfect_bot(game_id)
    move_response = client.post(f"/api/game/{game_id}/move", json={"cellIndex": 4})
    assert move_response.status_code == 200
    state = move_response.json()
    assert state["moveLog"][0] == {"player": "X", "cellIndex": 4}
    assert state["cells"][4] == "X"
    assert state["currentPlayer"] == "O"
    assert state["aiPending"] is True

    follow_up = client.get(f"/api/game/{game_id}")
    assert follow_up.status_code == 200
    final_state = follow_up.json()
    assert final_state["aiPending"] is False
    assert final_state["currentPlayer"] == "X"
    assert final_state["moveLog"][-1] == {"player": "O", "cellIndex": 0}
    assert final_state["cells"][0] == "O"


def test_invalid_move_rejected():
    response = client.post("/api/game", json={"mode": "pvp"})
    assert response.status_code == 200
    game_id = response.json()["id"]

    first_move = client.post(f"/api/game/{game_id}/move", json={"cellIndex": 0})
    assert first_move.status_code == 200

    # Attempting to play the same cell should fail.
    duplicate_move = client.post(f"/api/game/{game_id}/move", json={"cellIndex": 0})
    assert duplicate_move.status_code == 400
    assert duplicate_move.json()["detail"]


def test_pvp_game_reports_winner_and_line():
    game_id = client.post("/api/game", json={"mode": "pvp"}).json()["id"]
    for cell in (0, 3, 1, 4):
        client.post(f"/api/game/{game_id}/move", json={"cellIndex": cell})
    state = client.post(f"/api/game/{game_id}/move", json={"cellIndex": 2}).json()

    assert state["difficulty"] is None
    assert state["status"] == "win"
    assert state["winner"] == "X"
    assert state["winLine"] == 0
    assert state["scores"] == {"X": 1, "O": 0}

    finished = client.post(f"/api/game/{game_id}/move", json={"cellIndex": 8})
    assert finished.status_code == 400

    reset = client.post(f"/api/game/{game_id}/reset")
    assert reset.status_code == 200
    fresh = reset.json()
    assert fresh["status"] == "playing"
    assert fresh["cells"] == [""] * 9
    assert fresh["moveLog"] == []
    assert fresh["scores"] == {"X": 1, "O": 0}


def test_bot_blocks_over_http():
    game_id = client.post("/api/game", json={"difficulty": "hard"}).json()["id"]
    _perfect_bot(game_id)
    client.post(f"/api/game/{game_id}/move", json={"cellIndex": 0})
    state = client.post(f"/api/game/{game_id}/move", json={"cellIndex": 1}).json()
    assert state["aiPending"] is True

    state = client.get(f"/api/game/{game_id}").json()
    assert state["cells"][2] == "O"


def test_session_keeps_requested_difficulty():
    game_id = client.post("/api/game", json={"difficulty": "easy"}).json()["id"]
    assert ui.SESSIONS[game_id].controller.ai.difficulty == Difficulty.EASY


def test_rejects_unsupported_difficulty():
    response = client.post("/api/game", json={"difficulty": "impossible"})
    assert response.status_code == 422


def test_rejects_out_of_range_cell():
    game_id = client.post("/api/game", json={"mode": "pvp"}).json()["id"]
    response = client.post(f"/api/game/{game_id}/move", json={"cellIndex": 9})
    assert response.status_code == 422


def test_missing_game_returns_404():
    missing = client.get("/api/game/INVALID")
    assert missing.status_code == 404


def test_pvp_win_unlocks_first_victory():
    game_id = client.post("/api/game", json={"mode": "pvp"}).json()["id"]
    for cell in (0, 5, 1, 6):
        client.post(f"/api/game/{game_id}/move", json={"cellIndex": cell})
    state = client.post(f"/api/game/{game_id}/move", json={"cellIndex": 2}).json()

    unlocked = {a["id"] for a in state["achievements"] if a["unlocked"]}
    assert unlocked == {"first_victory", "perfect_victory"}
    assert state["winStreak"] == 1
    assert len(state["achievements"]) == 5

"""
Testing the HTTP routes and socket events that expose the game.
"""
import json

from app import create_app, socketio


def test_first_state_request_starts_a_game(client):
    response = client.get("/api/state")
    assert response.status_code == 200
    state = response.get_json()
    assert state["status"] == "in_progress"
    assert state["max_guesses"] == 6
    assert state["word_length"] == 5
    assert state["attempts"] == []
    assert "secret_word" not in state


def test_guess_flow(client):
    client.post("/api/new-game")

    response = client.post("/api/guess", json={"guess": "angry"})
    assert response.status_code == 200
    data = response.get_json()
    assert data["success"] is True
    assert data["outcome"] == "accepted"
    assert data["attempt"]["feedback_code"] == "GGGRR"
    assert data["attempt"]["labels"] == ["correct", "correct", "correct", "miss", "miss"]
    assert data["state"]["current_attempt_index"] == 1

    response = client.post("/api/guess", json={"guess": "agnel"})
    assert response.get_json()["attempt"]["feedback_code"] == "GYYYY"


def test_wrong_length_guess(client):
    client.post("/api/new-game")
    response = client.post("/api/guess", json={"guess": "abc"})
    assert response.status_code == 400
    data = response.get_json()
    assert data["outcome"] == "wrong_length"
    assert data["error"] == "Guess must be 5 letters"
    assert data["state"]["attempts"] == []


def test_missing_body_is_wrong_length(client):
    client.post("/api/new-game")
    response = client.post("/api/guess")
    assert response.status_code == 400
    assert response.get_json()["outcome"] == "wrong_length"


def test_invalid_word_guess(client):
    client.post("/api/new-game")
    response = client.post("/api/guess", json={"guess": "zzzzz"})
    assert response.status_code == 400
    data = response.get_json()
    assert data["outcome"] == "invalid_word"
    assert data["error"] == "Not in word list"
    assert len(data["state"]["attempts"]) == 1
    assert data["state"]["current_attempt_index"] == 0


def test_win_then_reject_then_new_game(client):
    client.post("/api/new-game")
    response = client.post("/api/guess", json={"guess": "angle"})
    state = response.get_json()["state"]
    assert state["status"] == "won"
    assert state["game_message"] == "Congratulations! You guessed the word!"

    response = client.post("/api/guess", json={"guess": "angle"})
    assert response.status_code == 409
    assert response.get_json()["error"] == "No active game"

    response = client.post("/api/new-game")
    assert response.status_code == 200
    data = response.get_json()
    assert data["success"] is True
    assert data["state"]["status"] == "in_progress"
    assert data["state"]["attempts"] == []


def test_loss_reveals_answer(client):
    client.post("/api/new-game")
    for guess in ["angry", "crane", "slate", "speed", "erase"]:
        client.post("/api/guess", json={"guess": guess})
    response = client.post("/api/guess", json={"guess": "lemon"})
    state = response.get_json()["state"]
    assert state["status"] == "lost"
    assert state["revealed_answer"] == "ANGLE"


def test_new_game_load_error(tmp_path):
    app = create_app({
        "TESTING": True,
        "SESSION_TYPE": None,
        "REDIS_URL": None,
        "WORDLE_SECRET_WORDS": str(tmp_path / "missing.txt"),
        "WORDLE_VALID_WORDS": str(tmp_path / "missing.txt"),
    })
    client = app.test_client()

    response = client.post("/api/new-game")
    assert response.status_code == 503
    data = response.get_json()
    assert data["success"] is False
    assert data["state"]["status"] == "load_error"

    # Word lists appear; the next new game retries the load
    (tmp_path / "missing.txt").write_text("angle\n", encoding="utf-8")
    response = client.post("/api/new-game")
    assert response.status_code == 200
    assert response.get_json()["state"]["status"] == "in_progress"


def test_socket_game_flow(app):
    client = socketio.test_client(app)
    assert client.is_connected()

    received = client.get_received()
    assert received[0]["name"] == "game_state"
    assert received[0]["args"][0]["status"] == "loading"

    client.emit("new_game")
    received = client.get_received()
    assert received[0]["name"] == "game_state"
    assert received[0]["args"][0]["status"] == "in_progress"

    client.emit("submit_guess", {"guess": "agnel"})
    received = client.get_received()
    assert received[0]["name"] == "guess_feedback"
    payload = received[0]["args"][0]
    assert payload["feedback"] == "GYYYY"
    assert payload["colors"] == ["correct", "present", "present", "present", "present"]
    assert payload["solved"] is False

    client.emit("submit_guess", {"guess": "zzzzz"})
    received = client.get_received()
    assert received[0]["name"] == "guess_error"
    assert received[0]["args"][0]["outcome"] == "invalid_word"

    client.emit("submit_guess", {"guess": "angle"})
    received = client.get_received()
    assert received[0]["args"][0]["solved"] is True
    assert received[0]["args"][0]["state"]["status"] == "won"

    client.disconnect()


def test_session_holds_only_a_game_id(client):
    client.post("/api/new-game")
    with client.session_transaction() as sess:
        stored = dict(sess)
    assert set(stored) == {"game_id"}
    assert "ANGLE" not in json.dumps(stored)


def test_replaying_an_old_session_cannot_undo_a_win(client):
    client.post("/api/new-game")
    with client.session_transaction() as sess:
        before = dict(sess)

    client.post("/api/guess", json={"guess": "angle"})

    # Send the session from before the win again
    with client.session_transaction() as sess:
        sess.clear()
        sess.update(before)

    response = client.post("/api/guess", json={"guess": "angle"})
    assert response.status_code == 409
    assert response.get_json()["state"]["status"] == "won"


def test_non_string_guess_is_wrong_length(client):
    client.post("/api/new-game")
    for body in [{"guess": 12345}, {"guess": ["angle"]}, ["x"], "angle", 42]:
        response = client.post("/api/guess", json=body)
        assert response.status_code == 400
        assert response.get_json()["outcome"] == "wrong_length"

    state = client.get("/api/state").get_json()
    assert state["attempts"] == []


def test_socket_non_string_guess(app):
    client = socketio.test_client(app)
    client.emit("new_game")
    client.get_received()

    for payload in [{"guess": 12345}, ["x"], "angle", None]:
        client.emit("submit_guess", payload)
        received = client.get_received()
        assert received[0]["name"] == "guess_error"
        assert received[0]["args"][0]["outcome"] == "wrong_length"

    client.disconnect()

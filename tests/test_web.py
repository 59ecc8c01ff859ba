"""Tests for the FastAPI endpoint."""

import chess
import pytest
from fastapi.testclient import TestClient

from web.app import MAX_REQUEST_DEPTH, MoveRequest, app

BACK_RANK_MATE = "6k1/5ppp/8/8/8/8/2n5/R5K1 w - - 0 1"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestMoveEndpoint:
    def test_health(self, client) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.parametrize("algorithm", ["alphabeta", "minimax"])
    def test_returns_mating_move(self, client, algorithm: str) -> None:
        response = client.post(
            "/api/move", json={"fen": BACK_RANK_MATE, "depth": 1, "algorithm": algorithm}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["move"] == "a1a8"
        assert chess.Board(body["fen"]).is_checkmate()
        assert body["depth"] == 1
        assert body["nodes"] > 0

    def test_depth_zero_returns_no_move(self, client) -> None:
        response = client.post("/api/move", json={"fen": chess.STARTING_FEN, "depth": 0})

        assert response.status_code == 200
        body = response.json()
        assert body["move"] is None
        assert body["fen"] == chess.STARTING_FEN

    def test_invalid_fen(self, client) -> None:
        response = client.post("/api/move", json={"fen": "garbage"})

        assert response.status_code == 400

    def test_game_over(self, client) -> None:
        response = client.post("/api/move", json={"fen": FOOLS_MATE})

        assert response.status_code == 400
        assert "over" in response.json()["detail"]

    def test_unknown_algorithm(self, client) -> None:
        response = client.post(
            "/api/move", json={"fen": chess.STARTING_FEN, "algorithm": "negascout"}
        )

        assert response.status_code == 422


class TestMoveRequest:
    @pytest.mark.parametrize(("depth", "expected"), [(50, MAX_REQUEST_DEPTH), (-3, 0), (2, 2)])
    def test_depth_is_clamped(self, depth: int, expected: int) -> None:
        assert MoveRequest(fen=chess.STARTING_FEN, depth=depth).depth == expected

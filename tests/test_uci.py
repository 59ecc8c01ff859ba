"""Tests for the UCI protocol handler."""

import chess
import pytest

from gamesearch.constants import CHECKMATE_SCORE, MAX_DEPTH
from interface.uci import UciHandler, format_score

BACK_RANK_MATE = "6k1/5ppp/8/8/8/8/2n5/R5K1 w - - 0 1"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


@pytest.fixture
def handler():
    h = UciHandler()
    yield h
    h.handle_stop()


class TestHandshake:
    def test_uci_lists_options(self, handler, capsys) -> None:
        handler.handle_uci()

        out = capsys.readouterr().out.splitlines()
        assert out[0] == "id name GameSearch"
        assert "option name Algorithm type combo default alphabeta var alphabeta var minimax" in out
        assert out[-1] == "uciok"

    def test_isready(self, handler, capsys) -> None:
        handler.handle_isready()

        assert capsys.readouterr().out == "readyok\n"


class TestPosition:
    def test_startpos_with_moves(self, handler) -> None:
        handler.handle_position(["startpos", "moves", "e2e4", "e7e5"])

        assert [m.uci() for m in handler.board.move_stack] == ["e2e4", "e7e5"]

    def test_fen_with_moves(self, handler) -> None:
        handler.handle_position(["fen", *BACK_RANK_MATE.split(), "moves", "a1a8"])

        assert handler.board.is_checkmate()

    def test_illegal_move_stops_replay(self, handler, capsys) -> None:
        handler.handle_position(["startpos", "moves", "e2e4", "e2e4", "e7e5"])

        assert len(handler.board.move_stack) == 1
        assert "illegal move" in capsys.readouterr().err

    def test_bad_fen_keeps_previous_board(self, handler) -> None:
        handler.handle_position(["fen", "not", "a", "fen"])

        assert handler.board.fen() == chess.STARTING_FEN


class TestSetOption:
    def test_depth_is_clamped(self, handler) -> None:
        handler.handle_setoption(["name", "Depth", "value", "999"])

        assert handler.depth == MAX_DEPTH

    def test_algorithm(self, handler) -> None:
        handler.handle_setoption(["name", "Algorithm", "value", "Minimax"])

        assert handler.algorithm == "minimax"

    def test_unknown_algorithm_is_ignored(self, handler) -> None:
        handler.handle_setoption(["name", "Algorithm", "value", "mcts"])

        assert handler.algorithm == "alphabeta"

    def test_seed_enables_rng(self, handler) -> None:
        handler.handle_setoption(["name", "Seed", "value", "7"])
        assert handler.rng is not None

        handler.handle_setoption(["name", "Seed", "value", "-1"])
        assert handler.rng is None


class TestGo:
    @pytest.mark.parametrize("algorithm", ["alphabeta", "minimax"])
    def test_depth_search_replies_with_mate(self, handler, capsys, algorithm: str) -> None:
        handler.handle_setoption(["name", "Algorithm", "value", algorithm])
        handler.handle_position(["fen", *BACK_RANK_MATE.split()])

        handler.handle_go(["depth", "1"])
        handler.wait(timeout=30)

        out = capsys.readouterr().out
        assert "score mate 1" in out
        assert out.rstrip().endswith("bestmove a1a8")

    def test_checkmated_position_replies_none(self, handler, capsys) -> None:
        handler.handle_position(["fen", *FOOLS_MATE.split()])

        handler.handle_go(["depth", "2"])
        handler.wait(timeout=30)

        assert "bestmove (none)" in capsys.readouterr().out

    def test_stop_ends_infinite_search(self, handler, capsys) -> None:
        handler.handle_go(["infinite"])
        handler.handle_stop()
        handler.wait(timeout=30)

        lines = capsys.readouterr().out.splitlines()
        bestmove = lines[-1].split()
        assert bestmove[0] == "bestmove"
        assert chess.Move.from_uci(bestmove[1]) in chess.Board().legal_moves

    def test_stop_waits_for_search_to_reply(self, handler, capsys) -> None:
        handler.handle_go(["infinite"])
        handler.handle_stop()

        assert handler.search_thread is None
        assert capsys.readouterr().out.count("bestmove") == 1

    def test_new_go_never_overlaps_running_search(self, handler, capsys) -> None:
        handler.handle_go(["infinite"])
        handler.handle_go(["depth", "1"])
        handler.wait(timeout=30)

        lines = capsys.readouterr().out.splitlines()
        assert [line.split()[0] for line in lines] == ["info", "bestmove", "info", "bestmove"]

    def test_go_depth_parsing(self, handler) -> None:
        assert handler._parse_go_depth(["depth", "3"]) == 3
        assert handler._parse_go_depth(["infinite"]) == MAX_DEPTH
        assert handler._parse_go_depth(["wtime", "1000"]) == handler.depth


class TestFormatScore:
    @pytest.mark.parametrize(
        ("score", "expected"),
        [
            (35, "cp 35"),
            (-120, "cp -120"),
            (CHECKMATE_SCORE - 1, "mate 1"),
            (CHECKMATE_SCORE - 3, "mate 2"),
            (-(CHECKMATE_SCORE - 2), "mate -1"),
        ],
    )
    def test_formats(self, score: int, expected: str) -> None:
        assert format_score(score) == expected

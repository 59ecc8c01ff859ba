"""Tests for the static evaluators."""

import chess
import pytest

from gamesearch.constants import PIECE_VALUES
from gamesearch.evaluate import MaterialEvaluator, PestoEvaluator, material_balance
from gamesearch.position import ChessPosition

POSITIONS = [
    chess.STARTING_FEN,
    "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3",
    "3rk3/8/8/8/8/8/8/3QK3 w - - 0 1",
    "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1",
    "4k3/1P6/8/8/8/8/6p1/4K3 b - - 0 1",
]


class TestMaterial:
    def test_start_position_is_level(self) -> None:
        assert MaterialEvaluator().evaluate(ChessPosition()) == 0

    def test_extra_rook_from_both_sides(self) -> None:
        white = ChessPosition.from_fen("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        black = ChessPosition.from_fen("4k3/8/8/8/8/8/8/R3K3 b - - 0 1")

        assert MaterialEvaluator().evaluate(white) == PIECE_VALUES[chess.ROOK]
        assert MaterialEvaluator().evaluate(black) == -PIECE_VALUES[chess.ROOK]

    def test_kings_are_not_counted(self) -> None:
        assert material_balance(chess.Board("4k3/8/8/8/8/8/8/4K3 w - - 0 1")) == 0


class TestPesto:
    def test_start_position_is_level(self) -> None:
        assert PestoEvaluator().evaluate(ChessPosition()) == 0

    @pytest.mark.parametrize("fen", POSITIONS)
    def test_flipping_side_to_move_negates(self, fen: str) -> None:
        position = ChessPosition.from_fen(fen)
        flipped = position.copy()
        flipped.board.turn = not flipped.board.turn

        assert PestoEvaluator().evaluate(flipped) == -PestoEvaluator().evaluate(position)

    @pytest.mark.parametrize("fen", POSITIONS)
    def test_colour_mirror_scores_the_same(self, fen: str) -> None:
        position = ChessPosition.from_fen(fen)

        assert PestoEvaluator().evaluate(position.mirror()) == PestoEvaluator().evaluate(position)

    def test_centralised_knight_beats_rim_knight(self) -> None:
        centre = ChessPosition.from_fen("4k3/8/8/8/3N4/8/8/4K3 w - - 0 1")
        rim = ChessPosition.from_fen("4k3/8/8/8/N7/8/8/4K3 w - - 0 1")

        assert PestoEvaluator().evaluate(centre) > PestoEvaluator().evaluate(rim)

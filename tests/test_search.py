"""Tests for the strategy factory, iterative driver and get_best_move()."""

import random
import threading

import chess
import pytest

from gamesearch.alphabeta import AlphaBetaSearch
from gamesearch.constants import CHECKMATE_SCORE
from gamesearch.evaluate import MaterialEvaluator
from gamesearch.minimax import MinimaxSearch
from gamesearch.search import choose_move, get_best_move, iterative_search, make_search
from gamesearch.types import SearchResult
from tests.trees import TreeEvaluator, TreePosition, uniform_tree

BACK_RANK_MATE = "6k1/5ppp/8/8/8/8/2n5/R5K1 w - - 0 1"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestMakeSearch:
    def test_builds_each_strategy(self) -> None:
        assert isinstance(make_search("minimax"), MinimaxSearch)
        assert isinstance(make_search("alphabeta"), AlphaBetaSearch)

    def test_passes_options_through(self) -> None:
        search = make_search("alphabeta", MaterialEvaluator(), resolve_root_ties=True)

        assert search.resolve_root_ties

    def test_rejects_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="negascout"):
            make_search("negascout")


class TestChooseMove:
    def test_without_rng_returns_first_best(self) -> None:
        result = SearchResult(best_move=0, score=5, nodes_visited=3, best_moves=(0, 1, 2))

        assert choose_move(result) == 0

    def test_rng_picks_among_ties(self) -> None:
        result = SearchResult(best_move=0, score=5, nodes_visited=3, best_moves=(0, 1, 2))
        rng = random.Random(3)

        picks = {choose_move(result, rng) for _ in range(50)}

        assert picks == {0, 1, 2}

    def test_no_move_stays_none(self) -> None:
        result = SearchResult(best_move=None, score=0, nodes_visited=1)

        assert choose_move(result, random.Random(0)) is None


class TestIterativeSearch:
    def test_reports_completed_depth_and_total_nodes(self) -> None:
        root = uniform_tree([-3, -5, -2, -4, -1, -3, -8, -7], 2)
        search = AlphaBetaSearch(TreeEvaluator())

        result, depth, nodes = iterative_search(search, TreePosition(root), 3)
        single = search.search(TreePosition(root), 3)

        assert depth == 3
        assert result.best_move == 0
        assert result.score == 4
        assert nodes > single.nodes_visited

    def test_rejects_negative_depth(self) -> None:
        with pytest.raises(ValueError):
            iterative_search(MinimaxSearch(TreeEvaluator()), TreePosition(uniform_tree([0], 1)), -2)


class TestGetBestMove:
    @pytest.mark.parametrize("algorithm", ["alphabeta", "minimax"])
    def test_finds_mate_in_one(self, algorithm: str) -> None:
        board = chess.Board(BACK_RANK_MATE)

        move, score, depth, nodes = get_best_move(
            board, 2, threading.Event(), algorithm=algorithm
        )

        assert move == chess.Move.from_uci("a1a8")
        assert score == CHECKMATE_SCORE - 1
        assert depth == 2
        assert nodes > 0
        assert board.fen() == BACK_RANK_MATE

    def test_game_over_returns_no_move(self) -> None:
        move, score, depth, nodes = get_best_move(chess.Board(FOOLS_MATE), 3, threading.Event())

        assert move is None
        assert score == -CHECKMATE_SCORE
        assert depth == 0
        assert nodes == 1

    def test_depth_zero_only_evaluates(self) -> None:
        move, score, depth, _ = get_best_move(chess.Board(), 0, threading.Event())

        assert move is None
        assert score == 0
        assert depth == 0

    def test_cancelled_before_start_still_returns_legal_move(self) -> None:
        board = chess.Board()
        event = threading.Event()
        event.set()

        move, _, depth, _ = get_best_move(board, 4, event)

        assert move in board.legal_moves
        assert depth == 0

    def test_seeded_rng_is_reproducible(self) -> None:
        first = get_best_move(chess.Board(), 1, threading.Event(), rng=random.Random(11))
        second = get_best_move(chess.Board(), 1, threading.Event(), rng=random.Random(11))

        assert first == second
        assert first[0] in chess.Board().legal_moves

    def test_rejects_unknown_algorithm(self) -> None:
        with pytest.raises(ValueError):
            get_best_move(chess.Board(), 1, threading.Event(), algorithm="mcts")

"""
Search entry point: strategy selection, fixed-depth iterative driver, and
randomized choice among equally good root moves.

This module defines the stable interface that interface/uci.py, web/app.py and
tools/bench.py depend on. The signature of get_best_move() stays fixed; the
strategies behind it can change.

Layering:
    make_search()      picks Minimax or Alpha-Beta once, at construction.
    iterative_search() runs a strategy at depths 1, 2, ..., N, searching the
                       previous iteration's best moves first at the root. It
                       never reads a clock; time policy belongs to the caller,
                       which cancels through stop_event.
    choose_move()      post-processes a SearchResult: with an injected RNG it
                       picks uniformly among the proven equal-best root moves,
                       without one it returns the deterministic first-best.

Threading model:
    The UCI handler runs get_best_move() in a daemon thread and sets
    stop_event on "stop". The search polls the event at every node and unwinds
    with the best result found so far.
"""

import logging
import random
import threading

import chess

from gamesearch.alphabeta import AlphaBetaSearch
from gamesearch.evaluate import PestoEvaluator
from gamesearch.minimax import MinimaxSearch
from gamesearch.position import ChessPosition
from gamesearch.state import check_depth
from gamesearch.types import Evaluator, Position, SearchAlgorithm, SearchResult

_log = logging.getLogger(__name__)

STRATEGIES: dict[str, type] = {
    MinimaxSearch.name: MinimaxSearch,
    AlphaBetaSearch.name: AlphaBetaSearch,
}


def make_search(
    name: str,
    evaluator: Evaluator | None = None,
    **options,
) -> SearchAlgorithm:
    """
    Build a search strategy by name.

    Args:
        name:      "minimax" or "alphabeta".
        evaluator: Static evaluator; defaults to PestoEvaluator.
        options:   Strategy keywords (max_quiescence_depth, and
                   resolve_root_ties for Alpha-Beta).

    Raises:
        ValueError: Unknown strategy name.
    """
    try:
        cls = STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown search algorithm {name!r}; expected one of {sorted(STRATEGIES)}"
        ) from None
    return cls(evaluator if evaluator is not None else PestoEvaluator(), **options)


def choose_move(result: SearchResult, rng: random.Random | None = None):
    """Pick the move to play from a result's equal-best root moves."""
    if rng is None or len(result.best_moves) < 2:
        return result.best_move
    return rng.choice(result.best_moves)


def iterative_search(
    search: SearchAlgorithm,
    position: Position,
    depth: int,
    stop_event: threading.Event | None = None,
) -> tuple[SearchResult, int, int]:
    """
    Search depths 1..depth, carrying root ordering between iterations.

    Each completed iteration leaves a valid answer behind, so a cancelled
    deeper iteration falls back to the previous one. If the very first
    iteration is cancelled, its partial (but well-formed) result is used.

    Returns:
        (result, completed_depth, total_nodes) where total_nodes sums every
        iteration, cancelled ones included.
    """
    check_depth(depth)

    last: SearchResult | None = None
    completed_depth = 0
    total_nodes = 0
    root_order = None

    for current in (range(1, depth + 1) if depth > 0 else (0,)):
        result = search.search(
            position, current, stop_event=stop_event, root_order=root_order
        )
        total_nodes += result.nodes_visited

        if not result.complete:
            _log.info("iteration at depth %d cancelled", current)
            if last is None:
                last = result
            break

        last = result
        # Terminal root or pure evaluation: deeper iterations change nothing.
        if result.best_move is None:
            break
        completed_depth = current
        root_order = result.best_moves

    return last, completed_depth, total_nodes


def get_best_move(
    board: chess.Board,
    depth: int,
    stop_event: threading.Event,
    algorithm: str = AlphaBetaSearch.name,
    rng: random.Random | None = None,
    evaluator: Evaluator | None = None,
) -> tuple[chess.Move | None, int, int, int]:
    """
    Return the best move for `board` searched to a fixed depth.

    The return type is always (move, score_cp, depth, nodes):
        - move:     chess.Move, or None when the game is already over or
                    depth is 0.
        - score_cp: Score from the side-to-move's perspective. Mate scores
                    are CHECKMATE_SCORE - ply (see gamesearch.scoring).
        - depth:    Deepest fully completed iteration.
        - nodes:    Nodes visited across all iterations.

    Args:
        board:      Position to search. Restored before returning.
        depth:      Nominal depth in plies, >= 0.
        stop_event: Cancellation signal; when set, returns the best move
                    found so far.
        algorithm:  "alphabeta" (default) or "minimax".
        rng:        Optional seeded RNG for choosing among tied best moves.
                    Alpha-Beta resolves root ties exactly when one is given.
        evaluator:  Static evaluator; defaults to PestoEvaluator.

    Raises:
        ValueError: Negative depth or unknown algorithm.
    """
    options = {}
    if rng is not None and algorithm == AlphaBetaSearch.name:
        options["resolve_root_ties"] = True
    search = make_search(algorithm, evaluator, **options)

    position = ChessPosition(board, ordered=True)
    result, completed_depth, nodes = iterative_search(search, position, depth, stop_event)

    return (choose_move(result, rng), result.score, completed_depth, nodes)

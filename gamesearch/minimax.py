"""
Minimax search: exhaustive full-width negamax to a fixed depth.

Every branch is searched regardless of how bad it looks. This is the reference
strategy: Alpha-Beta must produce the same root move and score for every
position and depth, only with fewer visited nodes.

Negamax convention: the evaluator always scores from the side to move. After a
move the side to move flips, so a good score for the opponent is a bad score
for us and every child score is negated when folded into its parent.
"""

import logging
import threading
from collections.abc import Sequence

from gamesearch.constants import INF_SCORE, MAX_QUIESCENCE_DEPTH
from gamesearch.quiescence import Quiescence
from gamesearch.scoring import terminal_score
from gamesearch.state import SearchState, check_depth, order_root_moves
from gamesearch.types import Evaluator, Position, SearchResult

_log = logging.getLogger(__name__)


class MinimaxSearch:
    """Full-width negamax with quiescence at the frontier."""

    name = "minimax"

    def __init__(
        self,
        evaluator: Evaluator,
        max_quiescence_depth: int = MAX_QUIESCENCE_DEPTH,
    ) -> None:
        self.evaluator = evaluator
        self.quiescence = Quiescence(evaluator, max_quiescence_depth)

    def search(
        self,
        position: Position,
        depth: int,
        *,
        stop_event: threading.Event | None = None,
        root_order: Sequence | None = None,
    ) -> SearchResult:
        """
        Collapse the game tree below `position` to `depth` plies.

        Args:
            position:   Root position. Modified in-place during the search
                        and restored before returning.
            depth:      Nominal depth in plies, >= 0. Depth 0 is a pure
                        quiescence evaluation and returns no move.
            stop_event: Optional cancellation signal, polled once per node.
            root_order: Optional preferred root moves, searched first.

        Returns:
            SearchResult with every root move tied at the best score listed
            in best_moves (ties keep enumeration order).

        Raises:
            ValueError: depth is negative.
        """
        check_depth(depth)
        state = SearchState(stop_event=stop_event or threading.Event())

        if depth == 0:
            score = self.quiescence.quiesce(position, -INF_SCORE, INF_SCORE, 0, state)
            return SearchResult(None, score, state.nodes, complete=not state.stopped)

        state.visit()
        if position.is_terminal():
            return SearchResult(None, terminal_score(position, 0), state.nodes)
        moves = order_root_moves(position.legal_moves(), root_order)
        if not moves:
            return SearchResult(None, terminal_score(position, 0), state.nodes)

        best_score = -INF_SCORE
        best_moves: list = []
        searched = 0

        for move in moves:
            if state.should_stop():
                break
            position.push(move)
            score = -self._collapse(position, depth - 1, 1, state)
            position.pop()
            if state.stopped:
                break
            searched += 1

            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        complete = searched == len(moves)
        if not best_moves:
            # Cancelled before the first root move finished.
            _log.info("minimax cancelled before any root move completed")
            return SearchResult(
                moves[0],
                self.evaluator.evaluate(position),
                state.nodes,
                (moves[0],),
                complete=False,
            )
        if not complete:
            _log.info("minimax cancelled after %d/%d root moves", searched, len(moves))

        _log.debug(
            "minimax depth=%d score=%d nodes=%d ties=%d",
            depth, best_score, state.nodes, len(best_moves),
        )
        return SearchResult(
            best_moves[0], best_score, state.nodes, tuple(best_moves), complete
        )

    def _collapse(
        self,
        position: Position,
        depth: int,
        ply: int,
        state: SearchState,
    ) -> int:
        """
        Exact negamax value of `position` searched to `depth` plies.

        Returns the static evaluation if cancelled before any child finished;
        the caller discards it because state.stopped is set.
        """
        if depth == 0:
            return self.quiescence.quiesce(position, -INF_SCORE, INF_SCORE, ply, state)

        if state.should_stop():
            return self.evaluator.evaluate(position)

        state.visit()

        if position.is_terminal():
            return terminal_score(position, ply)

        moves = position.legal_moves()
        if not moves:
            return terminal_score(position, ply)

        best = -INF_SCORE
        for move in moves:
            position.push(move)
            score = -self._collapse(position, depth - 1, ply + 1, state)
            position.pop()
            if state.stopped:
                break
            if score > best:
                best = score

        if best == -INF_SCORE:
            return self.evaluator.evaluate(position)
        return best

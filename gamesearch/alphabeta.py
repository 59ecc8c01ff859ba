"""
Alpha-Beta search: negamax with alpha-beta pruning and quiescence at the leaves.

The alpha-beta window [alpha, beta] prunes branches that cannot influence the
root decision. alpha is the score the side to move can already guarantee;
beta is the score the opponent will not let it exceed. Each recursive call
swaps and negates the window: the child's alpha is -beta and its beta is
-alpha. Once alpha >= beta the opponent already holds a refutation at least as
good as anything left in this node, and the remaining siblings are skipped.

The window narrows monotonically while siblings are searched and never widens.

Returned scores are fail-soft. After a cutoff, a node's value is only a bound:
a lower bound when it failed high, an upper bound when it failed low. At the
root with the full window the score of best_move is exact and the root move is
identical to Minimax's. Other root moves only report "no better than the best",
so two of them returning the same bound are unresolved, not tied. Construct
with resolve_root_ties=True to keep the root alpha one point below the best
score; equal-scoring siblings then come back exact and are listed in
SearchResult.best_moves.

Alpha-beta reduces the tree from O(b^d) to roughly O(b^(d/2)) with perfect move
ordering. Ordering never changes the result, only how many nodes are visited.
"""

import logging
import threading
from collections.abc import Sequence

from gamesearch.constants import INF_SCORE, MAX_QUIESCENCE_DEPTH
from gamesearch.quiescence import Quiescence
from gamesearch.scoring import terminal_score
from gamesearch.state import SearchState, check_depth, check_window, order_root_moves
from gamesearch.types import Evaluator, Position, SearchResult

_log = logging.getLogger(__name__)


class AlphaBetaSearch:
    """Decision-preserving pruning variant of MinimaxSearch."""

    name = "alphabeta"

    def __init__(
        self,
        evaluator: Evaluator,
        max_quiescence_depth: int = MAX_QUIESCENCE_DEPTH,
        resolve_root_ties: bool = False,
    ) -> None:
        self.evaluator = evaluator
        self.quiescence = Quiescence(evaluator, max_quiescence_depth)
        self.resolve_root_ties = resolve_root_ties

    def search(
        self,
        position: Position,
        depth: int,
        *,
        stop_event: threading.Event | None = None,
        root_order: Sequence | None = None,
        alpha: int = -INF_SCORE,
        beta: int = INF_SCORE,
    ) -> SearchResult:
        """
        Search `position` to `depth` plies within the window (alpha, beta).

        Args:
            position:   Root position. Modified in-place during the search
                        and restored before returning.
            depth:      Nominal depth in plies, >= 0. Depth 0 is a pure
                        quiescence evaluation and returns no move.
            stop_event: Optional cancellation signal, polled once per node.
            root_order: Optional preferred root moves, searched first.
            alpha:      Root lower bound. Defaults to the widest window.
            beta:       Root upper bound. Defaults to the widest window.
                        With a narrowed window the returned score may be a
                        bound rather than the exact value.

        Returns:
            SearchResult for the root.

        Raises:
            ValueError: depth is negative or alpha >= beta.
        """
        check_depth(depth)
        check_window(alpha, beta)
        state = SearchState(stop_event=stop_event or threading.Event())

        if depth == 0:
            score = self.quiescence.quiesce(position, alpha, beta, 0, state)
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
        cutoff = False

        for move in moves:
            if state.should_stop():
                break
            position.push(move)
            score = -self._negamax(position, depth - 1, -beta, -alpha, 1, state)
            position.pop()
            if state.stopped:
                break
            searched += 1

            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score and self.resolve_root_ties:
                best_moves.append(move)

            floor = best_score - 1 if self.resolve_root_ties else best_score
            if floor > alpha:
                alpha = floor
            if alpha >= beta:
                cutoff = True
                break

        complete = cutoff or searched == len(moves)
        if not best_moves:
            _log.info("alphabeta cancelled before any root move completed")
            return SearchResult(
                moves[0],
                self.evaluator.evaluate(position),
                state.nodes,
                (moves[0],),
                complete=False,
            )
        if not complete:
            _log.info("alphabeta cancelled after %d/%d root moves", searched, len(moves))

        _log.debug(
            "alphabeta depth=%d score=%d nodes=%d searched=%d/%d",
            depth, best_score, state.nodes, searched, len(moves),
        )
        return SearchResult(
            best_moves[0], best_score, state.nodes, tuple(best_moves), complete
        )

    def _negamax(
        self,
        position: Position,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
        state: SearchState,
    ) -> int:
        """
        Fail-soft alpha-beta value of `position` searched to `depth` plies.

        Args:
            position: Current position. Modified in-place via push/pop and
                      always restored before returning, cutoffs included.
            depth:    Remaining depth. At 0 the node drops into quiescence.
            alpha:    Best score the side to move can already guarantee.
            beta:     Best score the opponent lets the side to move reach.
            ply:      Distance from the root, for mate distance encoding.
            state:    Per-call bookkeeping.

        Returns:
            Score from the side to move's perspective: exact when strictly
            inside (alpha, beta), otherwise a bound on the true value.
        """
        check_window(alpha, beta)

        if depth == 0:
            return self.quiescence.quiesce(position, alpha, beta, ply, state)

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
            score = -self._negamax(position, depth - 1, -beta, -alpha, ply + 1, state)
            position.pop()
            if state.stopped:
                break

            if score > best:
                best = score
            if best > alpha:
                alpha = best

            # Beta cutoff: the opponent already has a refutation.
            if alpha >= beta:
                break

        if best == -INF_SCORE:
            return self.evaluator.evaluate(position)
        return best

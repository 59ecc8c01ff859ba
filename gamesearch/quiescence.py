"""
Quiescence search: resolves tactical instability at the search frontier.

The "horizon effect" occurs when a fixed-depth search evaluates a position
mid-exchange. At depth 3 the search may see that it captures a knight but not
the recapture one ply later. Instead of trusting the static evaluation at the
nominal depth limit, the tree search hands the leaf to quiesce(), which keeps
playing noisy moves (captures, checks, promotions) until the position is quiet.

Stand-pat: the side to move is never forced to play a tactical move. The
static evaluation of the position as-is is a lower bound on its value. If it
already reaches beta the opponent would never allow this position and the
node fails high immediately; if it beats alpha, alpha is raised to it.

Bounds are fail-hard: the return value is always inside [alpha, beta]. On a
position with no noisy moves, quiesce() returns exactly
clamp(evaluate(position), alpha, beta).

Termination: noisy-move chains are capped at max_depth plies (see
MAX_QUIESCENCE_DEPTH). At the cap the node keeps its stand-pat verdict.
"""

from gamesearch.constants import MAX_QUIESCENCE_DEPTH
from gamesearch.scoring import terminal_score
from gamesearch.state import SearchState, check_window
from gamesearch.types import Evaluator, Position


class Quiescence:
    """Noisy-move extension shared by Minimax and Alpha-Beta."""

    def __init__(
        self,
        evaluator: Evaluator,
        max_depth: int = MAX_QUIESCENCE_DEPTH,
    ) -> None:
        if max_depth < 0:
            raise ValueError(f"Quiescence depth bound must be >= 0, got {max_depth}")
        self.evaluator = evaluator
        self.max_depth = max_depth

    def quiesce(
        self,
        position: Position,
        alpha: int,
        beta: int,
        ply: int,
        state: SearchState,
        q_depth: int = 0,
    ) -> int:
        """
        Return the stabilized score of `position` within the window.

        Args:
            position: Position to score. Modified in-place via push/pop and
                      always restored before returning.
            alpha:    Lower bound of the window.
            beta:     Upper bound of the window. Must exceed alpha.
            ply:      Distance from the root (used for mate distance).
            state:    Per-call bookkeeping (node counter, stop signal).
            q_depth:  Noisy plies already played below the frontier.

        Returns:
            Score from the perspective of the side to move, fail-hard
            clamped to [alpha, beta] unless the position is terminal.
        """
        check_window(alpha, beta)

        if state.should_stop():
            return self.evaluator.evaluate(position)

        state.visit()

        if position.is_terminal():
            return terminal_score(position, ply)

        stand_pat = self.evaluator.evaluate(position)
        if stand_pat >= beta:
            return beta
        if stand_pat > alpha:
            alpha = stand_pat

        if q_depth >= self.max_depth:
            return alpha

        noisy = [move for move in position.legal_moves() if position.classify(move)]
        for move in noisy:
            position.push(move)
            score = -self.quiesce(position, -beta, -alpha, ply + 1, state, q_depth + 1)
            position.pop()

            # An interrupted child only saw part of its subtree; drop it.
            if state.stopped:
                break

            if score >= beta:
                return beta
            if score > alpha:
                alpha = score

        return alpha

"""
Terminal scoring and mate-score helpers.

Minimax, Alpha-Beta and quiescence search all score finished games through
terminal_score(), so their results stay comparable.

Mate encoding: the side to move that is checkmated `ply` half-moves from the
root scores -(CHECKMATE_SCORE - ply). Folding that up through the negamax
recursion, the winner at the root sees CHECKMATE_SCORE - ply, so a mate in
one (ply 1) outranks a mate in two (ply 3).
"""

from gamesearch.constants import CHECKMATE_SCORE, DRAW_SCORE, MAX_PLY
from gamesearch.types import Position


def terminal_score(position: Position, ply: int) -> int:
    """
    Score a position the rules collaborator reports as finished.

    No legal moves while in check is checkmate; every other finished game
    (stalemate, insufficient material, 75-move rule, fivefold repetition)
    is a draw.

    Args:
        position: A terminal position, or one with no legal moves.
        ply:      Distance from the root in half-moves.

    Returns:
        Score from the perspective of the side to move in `position`.
    """
    if position.in_check() and not position.legal_moves():
        return mated_score(ply)
    return DRAW_SCORE


def mated_score(ply: int) -> int:
    return -(CHECKMATE_SCORE - ply)


def is_mate_score(score: int) -> bool:
    return abs(score) >= CHECKMATE_SCORE - MAX_PLY


def mate_distance(score: int) -> int | None:
    """
    Convert a mate score into signed full moves to mate.

    Positive: the side to move mates in N moves. Negative: the side to move
    gets mated in N moves. None for ordinary centipawn scores.

    Example:
        >>> mate_distance(CHECKMATE_SCORE - 1)   # mate in one
        1
        >>> mate_distance(-(CHECKMATE_SCORE - 2))  # mated after two plies
        -1
    """
    if not is_mate_score(score):
        return None
    plies = CHECKMATE_SCORE - abs(score)
    if score > 0:
        return (plies + 1) // 2
    return -(plies // 2)

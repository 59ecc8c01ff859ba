"""
Static evaluators for chess positions.

Two evaluators implement the Evaluator capability:

    MaterialEvaluator: material count only. Cheap and predictable, which
                       makes node counts and scores easy to reason about in
                       tests and benchmarks.
    PestoEvaluator:    tapered PeSTO evaluation: material plus middlegame and
                       endgame piece-square tables, blended by game phase.

Both return centipawns from the perspective of the side to move (negamax
convention): positive means the side to move is ahead. Flipping only the side
to move therefore negates the score, and a colour-swapped mirror of a position
scores the same as the original.
"""

import chess

from gamesearch.constants import MAX_PHASE, PHASE_WEIGHTS, PIECE_VALUES, PST


def material_balance(board: chess.Board) -> int:
    """Material in centipawns, White minus Black. Kings are not counted."""
    score = 0
    for piece_type, value in PIECE_VALUES.items():
        if piece_type == chess.KING:
            continue
        score += value * len(board.pieces(piece_type, chess.WHITE))
        score -= value * len(board.pieces(piece_type, chess.BLACK))
    return score


def pesto_balance(board: chess.Board) -> int:
    """
    Tapered PeSTO score, White minus Black.

    Square indexing for PST lookup: the tables are written visually with
    index 0 = a8, while python-chess has a1 = 0. White pieces use sq ^ 56
    (flip the rank); Black pieces use sq directly, which mirrors them.

    The phase counter sums PHASE_WEIGHTS of the remaining pieces: 24 is the
    full middlegame, 0 a bare pawn ending. Integer arithmetic throughout.
    """
    mg_score = 0
    eg_score = 0
    phase = 0

    for sq, piece in board.piece_map().items():
        pt = piece.piece_type
        mg_table, eg_table = PST[pt]
        material = 0 if pt == chess.KING else PIECE_VALUES[pt]

        if piece.color == chess.WHITE:
            idx = sq ^ 56
            mg_score += material + mg_table[idx]
            eg_score += material + eg_table[idx]
        else:
            mg_score -= material + mg_table[sq]
            eg_score -= material + eg_table[sq]

        phase += PHASE_WEIGHTS.get(pt, 0)

    # Promotions can push the phase past the opening total.
    phase = min(phase, MAX_PHASE)
    blended = mg_score * phase + eg_score * (MAX_PHASE - phase)
    # Truncate toward zero so a colour-swapped board scores exactly -score.
    if blended < 0:
        return -(-blended // MAX_PHASE)
    return blended // MAX_PHASE


def _from_mover(board: chess.Board, white_score: int) -> int:
    return white_score if board.turn == chess.WHITE else -white_score


class MaterialEvaluator:
    """Material-only evaluation from the side to move."""

    def evaluate(self, position) -> int:
        return _from_mover(position.board, material_balance(position.board))


class PestoEvaluator:
    """
    Tapered PeSTO evaluation from the side to move.

    Example:
        >>> from gamesearch.position import ChessPosition
        >>> PestoEvaluator().evaluate(ChessPosition())  # symmetric start
        0
    """

    def evaluate(self, position) -> int:
        return _from_mover(position.board, pesto_balance(position.board))

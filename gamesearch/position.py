"""
python-chess implementation of the Position capability.

ChessPosition wraps a chess.Board and exposes the narrow interface the search
core consumes: legal move listing, in-place push/pop, terminal detection, check
detection and tactical classification. python-chess keeps its own move stack,
so pop() always restores the exact prior board, including castling rights, en
passant square, clocks and repetition history.
"""

from collections.abc import Iterable

import chess

from gamesearch.constants import PIECE_VALUES
from gamesearch.types import MoveClass


def order_moves(board: chess.Board, moves: Iterable[chess.Move]) -> list[chess.Move]:
    """
    Order moves for better alpha-beta pruning using MVV-LVA for captures.

    MVV-LVA (Most Valuable Victim - Least Valuable Aggressor): search captures
    of high-value pieces first, and prefer capturing with low-value pieces.
        - PxQ scores highest (cheap attacker, expensive victim)
        - QxP scores lowest among captures
        - Quiet moves are searched last (score 0), promotions just above them

    sorted() is stable, so equally scored moves keep python-chess's
    generation order and the result stays deterministic.

    Args:
        board: The current board position (used to look up piece types).
        moves: Legal moves to order.

    Returns:
        List of moves sorted from highest to lowest score.
    """
    def _mvv_lva_score(move: chess.Move) -> int:
        if not board.is_capture(move):
            return PIECE_VALUES.get(move.promotion, 0) if move.promotion else 0
        attacker = board.piece_at(move.from_square)
        victim = board.piece_at(move.to_square)
        attacker_val = PIECE_VALUES.get(attacker.piece_type, 0) if attacker else 0
        # En passant: the captured pawn is not on move.to_square; default to pawn value.
        victim_val = PIECE_VALUES.get(victim.piece_type, 0) if victim else PIECE_VALUES[chess.PAWN]
        return 10_000 + victim_val - attacker_val

    return sorted(moves, key=_mvv_lva_score, reverse=True)


class ChessPosition:
    """
    Chess position for the search core.

    Attributes:
        board:   The wrapped python-chess board. The search mutates it through
                 push/pop only; callers may read it freely between searches.
        ordered: When True, legal_moves() returns captures first (MVV-LVA).
                 When False, python-chess generation order is kept.
    """

    def __init__(self, board: chess.Board | None = None, ordered: bool = False) -> None:
        self.board = board if board is not None else chess.Board()
        self.ordered = ordered

    @classmethod
    def from_fen(cls, fen: str, ordered: bool = False) -> "ChessPosition":
        """Build a position from FEN. Raises ValueError on malformed FEN."""
        return cls(chess.Board(fen), ordered=ordered)

    def copy(self) -> "ChessPosition":
        return ChessPosition(self.board.copy(), ordered=self.ordered)

    def mirror(self) -> "ChessPosition":
        """Colour-swapped, vertically flipped copy with the other side to move."""
        return ChessPosition(self.board.mirror(), ordered=self.ordered)

    # -----------------------------------------------------------------------
    # Position capability
    # -----------------------------------------------------------------------

    def legal_moves(self) -> list[chess.Move]:
        moves = list(self.board.legal_moves)
        if self.ordered:
            return order_moves(self.board, moves)
        return moves

    def push(self, move: chess.Move) -> None:
        self.board.push(move)

    def pop(self) -> None:
        self.board.pop()

    def is_terminal(self) -> bool:
        # Checkmate, stalemate, insufficient material, 75-move rule and
        # fivefold repetition. Claimable draws are not terminal.
        return self.board.is_game_over()

    def in_check(self) -> bool:
        return self.board.is_check()

    def classify(self, move: chess.Move) -> MoveClass:
        """Tactical flags for `move`. Must be called before the move is pushed."""
        flags = MoveClass.QUIET
        if self.board.is_capture(move):
            flags |= MoveClass.CAPTURE
        if self.board.gives_check(move):
            flags |= MoveClass.CHECK
        if move.promotion is not None:
            flags |= MoveClass.PROMOTION
        return flags

    def __repr__(self) -> str:
        return f"ChessPosition({self.board.fen()!r})"

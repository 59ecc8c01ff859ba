"""
Shared search types: the result contract and the capability protocols.

The search core never looks inside a position. It talks to its collaborators
only through the protocols below, so the same Minimax / Alpha-Beta code runs
over a python-chess board (gamesearch.position.ChessPosition) or over a
hand-built game tree in the test suite.

Moves are opaque tokens: the core copies them, compares them for equality,
and hands them back to the position that produced them. Nothing else.
"""

import enum
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol


class MoveClass(enum.IntFlag):
    """
    Tactical classification of a move. Flags combine: a capturing promotion
    that also gives check is CAPTURE | CHECK | PROMOTION.

    Any non-zero value makes the move "noisy" and eligible for quiescence
    search; QUIET (0) moves are skipped there.
    """

    QUIET = 0
    CAPTURE = 1
    CHECK = 2
    PROMOTION = 4


@dataclass(frozen=True)
class SearchResult:
    """
    Output of one top-level search call.

    Attributes:
        best_move:     Move with the best collapsed score, or None when the
                       root is terminal or the call was a depth-0 evaluation.
        score:         Score of best_move from the root mover's perspective.
        nodes_visited: Nodes expanded or evaluated during this call.
        best_moves:    Root moves proven to score exactly `score`, in
                       search order. best_moves[0] is best_move. Only
                       Minimax, or Alpha-Beta with resolve_root_ties=True,
                       can prove more than one.
        complete:      False when the search was cancelled before every root
                       move was searched. The result is still well-formed.
    """

    best_move: object | None
    score: int
    nodes_visited: int
    best_moves: tuple = field(default=())
    complete: bool = True


class Position(Protocol):
    """
    Game-state capability consumed by the search.

    push/pop mutate in place and follow strict stack discipline: every push
    at a recursion level is undone by exactly one pop before that level
    returns, restoring the exact prior state.
    """

    def legal_moves(self) -> Sequence: ...

    def push(self, move) -> None: ...

    def pop(self) -> None: ...

    def is_terminal(self) -> bool: ...

    def in_check(self) -> bool: ...

    def classify(self, move) -> MoveClass: ...


class Evaluator(Protocol):
    """Static evaluation from the perspective of the side to move."""

    def evaluate(self, position) -> int: ...


class SearchAlgorithm(Protocol):
    """A search strategy: Minimax and Alpha-Beta both implement this."""

    name: str

    def search(
        self,
        position: Position,
        depth: int,
        *,
        stop_event: threading.Event | None = None,
        root_order: Sequence | None = None,
    ) -> SearchResult: ...

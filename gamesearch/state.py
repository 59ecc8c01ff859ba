"""
Per-call search bookkeeping shared by the tree search and quiescence search.
"""

import threading
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass
class SearchState:
    """
    Mutable state for a single top-level search call.

    Created fresh by every search() and discarded when it returns; nothing
    survives across calls.

    Attributes:
        stop_event: Set by the caller (UCI "stop", HTTP shutdown, a timer
                    owned by the control loop) to cancel the search. Polled
                    at every node entry; never interrupts a node midway.
        nodes:      Nodes visited so far. Monotonically non-decreasing.
        stopped:    Sticky copy of the stop signal. Once True it stays True
                    so every recursion level unwinds consistently even if
                    the caller clears the event.
    """

    stop_event: threading.Event = field(default_factory=threading.Event)
    nodes: int = 0
    stopped: bool = False

    def visit(self) -> None:
        self.nodes += 1

    def should_stop(self) -> bool:
        """Poll the stop signal. Called once per node."""
        if not self.stopped and self.stop_event.is_set():
            self.stopped = True
        return self.stopped


def check_depth(depth: int) -> None:
    if depth < 0:
        raise ValueError(f"Search depth must be >= 0, got {depth}")


def check_window(alpha: int, beta: int) -> None:
    # Never clamp: alpha < beta must hold on entry to every node.
    if alpha >= beta:
        raise ValueError(f"Malformed search window: alpha={alpha} >= beta={beta}")


def order_root_moves(moves: Sequence, root_order: Sequence | None) -> list:
    """
    Put the caller's preferred moves first, keep the rest in enumeration order.

    Preferred moves that are not legal here are ignored, so a stale hint from
    a previous iteration can never smuggle an illegal move into the search.
    Moves are matched by equality only, so they need not be hashable.
    """
    moves = list(moves)
    if not root_order:
        return moves
    first = []
    for move in root_order:
        if move in moves and move not in first:
            first.append(move)
    return first + [move for move in moves if move not in first]

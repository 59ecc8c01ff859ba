"""
Game-tree search core for two-player, perfect-information, zero-sum games.

Minimax and Alpha-Beta negamax search with quiescence extension, written
against narrow capability protocols so any game can plug in. Chess support is
provided through python-chess.

Modules:
    types: SearchResult, MoveClass, Position/Evaluator/SearchAlgorithm protocols
    constants: Score sentinels, depth limits, piece values, PeSTO tables
    state: Per-call bookkeeping (node counter, stop signal, preconditions)
    scoring: Terminal (mate/draw) scoring and mate distance helpers
    quiescence: Noisy-move extension at the search frontier
    minimax: Exhaustive full-width negamax (reference strategy)
    alphabeta: Alpha-beta pruned negamax
    position: python-chess Position adapter and MVV-LVA ordering
    evaluate: Material and tapered PeSTO evaluators
    search: Strategy factory, iterative driver, get_best_move()
"""

from gamesearch.alphabeta import AlphaBetaSearch
from gamesearch.evaluate import MaterialEvaluator, PestoEvaluator
from gamesearch.minimax import MinimaxSearch
from gamesearch.position import ChessPosition
from gamesearch.quiescence import Quiescence
from gamesearch.search import choose_move, get_best_move, iterative_search, make_search
from gamesearch.types import MoveClass, SearchResult

__all__ = [
    "AlphaBetaSearch",
    "ChessPosition",
    "MaterialEvaluator",
    "MinimaxSearch",
    "MoveClass",
    "PestoEvaluator",
    "Quiescence",
    "SearchResult",
    "choose_move",
    "get_best_move",
    "iterative_search",
    "make_search",
]

#!/usr/bin/env python3
"""
Benchmark: Minimax vs Alpha-Beta on fixed positions and mate puzzles.

For every position both strategies search to the same depth. The table shows
nodes visited, wall time, and whether the two agree on move and score. They
must always agree; Alpha-Beta should visit far fewer nodes.

With --puzzles, each strategy also plays through a mate-puzzle CSV
(header row, then `id,fen,moves` with space-separated UCI moves). The first
move is the opponent's setup move; the engine must find every move on the
odd plies after it.

Usage:
    python3 tools/bench.py [--depth N] [--puzzles FILE] [--evaluator pesto|material]
"""

import argparse
import csv
import os
import sys
import threading
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

import chess

from gamesearch.evaluate import MaterialEvaluator, PestoEvaluator
from gamesearch.position import ChessPosition
from gamesearch.search import get_best_move, make_search

# Fixed forever, so runs are comparable across changes.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("Italian",      "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Back rank",    "6k1/5ppp/8/8/8/8/2n5/R5K1 w - - 0 1"),
    ("Hanging rook", "3rk3/8/8/8/8/8/8/3QK3 w - - 0 1"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
]

EVALUATORS = {"pesto": PestoEvaluator, "material": MaterialEvaluator}


def run_position(label: str, fen: str, depth: int, evaluator) -> dict:
    """Search one position with both strategies and collect metrics."""
    row = {"label": label}
    for name in ("minimax", "alphabeta"):
        search = make_search(name, evaluator)
        position = ChessPosition.from_fen(fen)
        start = time.perf_counter()
        result = search.search(position, depth)
        elapsed_ms = (time.perf_counter() - start) * 1000
        row[name] = {
            "move": result.best_move.uci() if result.best_move else "(none)",
            "score": result.score,
            "nodes": result.nodes_visited,
            "time_ms": elapsed_ms,
        }
    mm, ab = row["minimax"], row["alphabeta"]
    row["agree"] = mm["move"] == ab["move"] and mm["score"] == ab["score"]
    return row


def load_puzzles(path: str) -> list[dict]:
    """Read `id,fen,moves` rows, skipping the header and blank lines."""
    puzzles = []
    with open(path, newline="") as fh:
        reader = csv.reader(fh)
        next(reader, None)
        for line_number, row in enumerate(reader, start=2):
            if not row or not "".join(row).strip():
                continue
            if len(row) < 3:
                raise ValueError(f"{path}:{line_number}: expected id,fen,moves")
            puzzles.append({"id": row[0], "fen": row[1], "moves": row[2].split()})
    return puzzles


def solve_puzzle(puzzle: dict, depth: int, algorithm: str, evaluator) -> bool:
    """Replay the setup move, then require the engine's move on every engine ply."""
    board = chess.Board(puzzle["fen"])
    moves = puzzle["moves"]
    if not moves:
        return False
    board.push_uci(moves[0])

    for idx, expected in enumerate(moves[1:], start=1):
        if idx % 2 == 1:
            move, _, _, _ = get_best_move(
                board, depth, threading.Event(), algorithm=algorithm, evaluator=evaluator
            )
            if move is None or move.uci() != expected:
                return False
        board.push_uci(expected)
    return True


def run_puzzles(path: str, depth: int, evaluator) -> None:
    puzzles = load_puzzles(path)
    print(f"{path}: {len(puzzles)} puzzles")
    for algorithm in ("alphabeta", "minimax"):
        start = time.perf_counter()
        solved = sum(solve_puzzle(p, depth, algorithm, evaluator) for p in puzzles)
        elapsed = time.perf_counter() - start
        rate = 100.0 * solved / len(puzzles) if puzzles else 0.0
        print(f"{algorithm:<10} solved {solved}/{len(puzzles)} ({rate:.2f}%) in {elapsed:.2f}s")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--depth", type=int, default=2, help="search depth in plies")
    parser.add_argument("--puzzles", help="mate-puzzle CSV file")
    parser.add_argument("--evaluator", choices=sorted(EVALUATORS), default="material")
    args = parser.parse_args(argv)

    evaluator = EVALUATORS[args.evaluator]()

    print(f"Depth {args.depth}, evaluator {args.evaluator}")
    print(
        f"{'Position':<14} {'Move':<7} {'Score':>6} {'MM nodes':>10} {'AB nodes':>10} "
        f"{'MM ms':>8} {'AB ms':>8} {'Agree':>6}"
    )
    print("-" * 76)

    for label, fen in POSITIONS:
        r = run_position(label, fen, args.depth, evaluator)
        mm, ab = r["minimax"], r["alphabeta"]
        print(
            f"{r['label']:<14} {ab['move']:<7} {ab['score']:>6} {mm['nodes']:>10,} "
            f"{ab['nodes']:>10,} {mm['time_ms']:>8.0f} {ab['time_ms']:>8.0f} "
            f"{'yes' if r['agree'] else 'NO':>6}"
        )

    if args.puzzles:
        print()
        run_puzzles(args.puzzles, args.depth, evaluator)


if __name__ == "__main__":
    main()

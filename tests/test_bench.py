"""Tests for the benchmark helpers."""

import pytest

from gamesearch.evaluate import MaterialEvaluator
from tools.bench import load_puzzles, run_position, solve_puzzle

# Black's setup move, then White mates on the back rank.
PUZZLE = {
    "id": "backrank",
    "fen": "6k1/5ppp/8/8/8/8/2n5/R5K1 b - - 0 1",
    "moves": ["c2e3", "a1a8"],
}


def test_strategies_agree_on_fixed_position() -> None:
    row = run_position("Hanging rook", "3rk3/8/8/8/8/8/8/3QK3 w - - 0 1", 2, MaterialEvaluator())

    assert row["agree"]
    assert row["alphabeta"]["nodes"] <= row["minimax"]["nodes"]


@pytest.mark.parametrize("algorithm", ["alphabeta", "minimax"])
def test_solves_mate_in_one_puzzle(algorithm: str) -> None:
    assert solve_puzzle(PUZZLE, 1, algorithm, MaterialEvaluator())


def test_wrong_solution_fails() -> None:
    puzzle = dict(PUZZLE, moves=["c2e3", "a1a7"])

    assert not solve_puzzle(puzzle, 1, "alphabeta", MaterialEvaluator())


def test_load_puzzles(tmp_path) -> None:
    path = tmp_path / "puzzles.csv"
    path.write_text(f"id,fen,moves\n\n{PUZZLE['id']},{PUZZLE['fen']},c2e3 a1a8\n")

    assert load_puzzles(str(path)) == [PUZZLE]


def test_load_puzzles_rejects_short_rows(tmp_path) -> None:
    path = tmp_path / "puzzles.csv"
    path.write_text("id,fen,moves\nonly-id\n")

    with pytest.raises(ValueError, match="expected id,fen,moves"):
        load_puzzles(str(path))

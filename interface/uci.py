"""
UCI (Universal Chess Interface) protocol handler.

UCI is the text protocol chess GUIs and testing tools (cutechess-cli, lichess
bots) use to drive an engine. Commands arrive on stdin, responses go to
stdout, and every output line is flushed immediately.

Protocol subset:
    GUI → Engine: uci, isready, ucinewgame, setoption, position, go, stop, quit
    Engine → GUI: id, option, uciok, readyok, info, bestmove

This layer translates "search to depth N" and "stop" into calls on the search
core and translates the result back into protocol lines. It owns no search
logic. "go" without a depth searches to the Depth option; "go infinite"
searches until "stop". Clock-based tokens (movetime, wtime, ...) are ignored:
the engine has no time management.

Threading model:
    The loop runs on the main thread and never blocks on the search. "go"
    starts a daemon thread; "stop" sets the shared threading.Event and the
    search unwinds at its next node and still prints "bestmove".

Critical rule: NEVER print to stdout except for valid UCI responses.
Diagnostics go to stderr.
"""

import os
import random
import sys
import threading
import time

# Make 'gamesearch' importable when run as `python interface/uci.py` from a
# source checkout that was not installed.
_REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

import chess

from gamesearch.constants import DEFAULT_DEPTH, MAX_DEPTH
from gamesearch.scoring import mate_distance
from gamesearch.search import STRATEGIES, get_best_move

ENGINE_NAME = "GameSearch"
ENGINE_AUTHOR = "GameSearch developers"


def _send(line: str) -> None:
    """Write one protocol line to stdout and flush it."""
    print(line, flush=True)


def _log(message: str) -> None:
    """Write a diagnostic line to stderr; stdout is reserved for protocol."""
    print(message, file=sys.stderr, flush=True)


def format_score(score: int) -> str:
    """UCI score token: "cp 35" or "mate 2" / "mate -1"."""
    moves = mate_distance(score)
    if moves is None:
        return f"cp {score}"
    return f"mate {moves}"


class UciHandler:
    """
    Stateful handler for the UCI protocol.

    Attributes:
        board:         Current position, updated by "position" commands.
        search_thread: Active search thread, or None.
        stop_event:    Event shared with the active search; set to cancel it.
        algorithm:     Search strategy name ("Algorithm" option).
        depth:         Default search depth ("Depth" option).
        seed:          RNG seed for tie-breaking ("Seed" option); -1 keeps
                       the deterministic first-best move.
    """

    def __init__(self) -> None:
        self.board: chess.Board = chess.Board()
        self.search_thread: threading.Thread | None = None
        self.stop_event: threading.Event = threading.Event()
        self.algorithm: str = "alphabeta"
        self.depth: int = DEFAULT_DEPTH
        self.seed: int = -1
        self.rng: random.Random | None = None

    # -----------------------------------------------------------------------
    # Command handlers
    # -----------------------------------------------------------------------

    def handle_uci(self) -> None:
        """Identify the engine and list its options."""
        _send(f"id name {ENGINE_NAME}")
        _send(f"id author {ENGINE_AUTHOR}")
        algorithms = " ".join(f"var {name}" for name in sorted(STRATEGIES))
        _send(f"option name Algorithm type combo default {self.algorithm} {algorithms}")
        _send(f"option name Depth type spin default {DEFAULT_DEPTH} min 0 max {MAX_DEPTH}")
        _send("option name Seed type spin default -1 min -1 max 2147483647")
        _send("uciok")

    def handle_isready(self) -> None:
        _send("readyok")

    def handle_ucinewgame(self) -> None:
        """Stop any search, reset the board and reseed the tie-break RNG."""
        self._stop_search()
        self.board = chess.Board()
        self._reseed()

    def handle_setoption(self, tokens: list[str]) -> None:
        """
        Apply "setoption name <Name> value <Value>".

        Option names are case-insensitive. Invalid values are logged and the
        previous setting is kept.
        """
        if "name" not in tokens:
            _log("uci: setoption without name")
            return
        name_idx = tokens.index("name")
        if "value" in tokens:
            value_idx = tokens.index("value")
            name = " ".join(tokens[name_idx + 1:value_idx])
            value = " ".join(tokens[value_idx + 1:])
        else:
            name = " ".join(tokens[name_idx + 1:])
            value = ""

        key = name.lower()
        if key == "algorithm":
            if value.lower() not in STRATEGIES:
                _log(f"uci: unknown algorithm {value!r}")
                return
            self.algorithm = value.lower()
        elif key == "depth":
            try:
                self.depth = max(0, min(int(value), MAX_DEPTH))
            except ValueError:
                _log(f"uci: invalid depth {value!r}")
        elif key == "seed":
            try:
                self.seed = int(value)
            except ValueError:
                _log(f"uci: invalid seed {value!r}")
                return
            self._reseed()
        else:
            _log(f"uci: ignoring unknown option {name!r}")

    def handle_position(self, tokens: list[str]) -> None:
        """
        Parse and apply a "position" command.

        Command formats:
            position startpos [moves e2e4 e7e5 ...]
            position fen <FEN> [moves e2e4 e7e5 ...]

        An illegal move stops the replay at the last legal position.
        """
        try:
            if not tokens:
                return

            if tokens[0] == "startpos":
                board = chess.Board()
                move_tokens = tokens[2:] if len(tokens) > 1 and tokens[1] == "moves" else []
            elif tokens[0] == "fen":
                if "moves" in tokens:
                    moves_idx = tokens.index("moves")
                    fen = " ".join(tokens[1:moves_idx])
                    move_tokens = tokens[moves_idx + 1:]
                else:
                    fen = " ".join(tokens[1:])
                    move_tokens = []
                board = chess.Board(fen)
            else:
                _log(f"uci: unknown position type: {tokens[0]}")
                return

            for uci_move in move_tokens:
                move = chess.Move.from_uci(uci_move)
                if move not in board.legal_moves:
                    _log(f"uci: illegal move in position command: {uci_move}")
                    break
                board.push(move)

            self.board = board

        except ValueError as e:
            _log(f"uci: error in position command: {e}")

    def handle_go(self, tokens: list[str]) -> None:
        """
        Start a search in a background thread.

        Supports "go depth N" and "go infinite"; any other token is ignored.
        The board is copied so a following "position" command cannot race
        with the running search.
        """
        self._stop_search()

        depth = self._parse_go_depth(tokens)
        self.stop_event = threading.Event()
        board_copy = self.board.copy()
        stop_event = self.stop_event
        algorithm = self.algorithm
        rng = self.rng

        def search_and_reply() -> None:
            """Run the search and emit the info and bestmove lines."""
            try:
                start = time.monotonic()
                move, score, done_depth, nodes = get_best_move(
                    board_copy, depth, stop_event, algorithm=algorithm, rng=rng
                )
                elapsed_ms = max(1, int((time.monotonic() - start) * 1000))
                nps = nodes * 1000 // elapsed_ms
                _send(
                    f"info depth {done_depth} score {format_score(score)} "
                    f"nodes {nodes} nps {nps} time {elapsed_ms}"
                )
                # No legal moves: "(none)" is the conventional reply.
                _send(f"bestmove {move.uci() if move is not None else '(none)'}")

            except Exception as e:
                _log(f"search error: {e}")
                _send("bestmove (none)")

        self.search_thread = threading.Thread(target=search_and_reply, daemon=True)
        self.search_thread.start()

    def handle_stop(self) -> None:
        """Cancel the running search; it still replies with bestmove."""
        self._stop_search()

    def handle_quit(self) -> None:
        self._stop_search()
        sys.exit(0)

    def wait(self, timeout: float | None = None) -> None:
        """Block until the running search (if any) has replied."""
        if self.search_thread is not None:
            self.search_thread.join(timeout=timeout)

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    def _stop_search(self) -> None:
        self.stop_event.set()
        # Join without a timeout: a new "go" must never overlap a search
        # that can still print bestmove.
        if self.search_thread is not None:
            self.search_thread.join()
        self.search_thread = None

    def _reseed(self) -> None:
        self.rng = random.Random(self.seed) if self.seed >= 0 else None

    def _parse_go_depth(self, tokens: list[str]) -> int:
        """Depth from "go" tokens: explicit depth, MAX_DEPTH for infinite, else the option."""
        if "infinite" in tokens:
            return MAX_DEPTH
        if "depth" in tokens:
            idx = tokens.index("depth")
            try:
                return max(0, min(int(tokens[idx + 1]), MAX_DEPTH))
            except (ValueError, IndexError):
                _log("uci: invalid go depth, using configured depth")
        ignored = [t for t in tokens if t not in ("depth", "infinite") and not t.lstrip("-").isdigit()]
        if ignored:
            _log(f"uci: ignoring go parameters: {' '.join(ignored)}")
        return self.depth


def run_uci_loop() -> None:
    """
    Main UCI protocol loop.

    Reads stdin until "quit" or EOF. Each command is wrapped so that a bug in
    one handler is logged to stderr and does not crash the engine mid-game.
    """
    handler = UciHandler()

    for raw_line in sys.stdin:
        line = raw_line.strip()
        if not line:
            continue

        tokens = line.split()
        command = tokens[0]
        args = tokens[1:]

        try:
            if command == "uci":
                handler.handle_uci()
            elif command == "isready":
                handler.handle_isready()
            elif command == "ucinewgame":
                handler.handle_ucinewgame()
            elif command == "setoption":
                handler.handle_setoption(args)
            elif command == "position":
                handler.handle_position(args)
            elif command == "go":
                handler.handle_go(args)
            elif command == "stop":
                handler.handle_stop()
            elif command == "quit":
                handler.handle_quit()
            else:
                # Engines must ignore unknown commands.
                _log(f"uci: ignoring unknown command: {command!r}")

        except Exception as e:
            _log(f"uci: unhandled error for command {command!r}: {e}")

    # EOF: let a running search finish replying before the process exits.
    handler.wait()


if __name__ == "__main__":
    run_uci_loop()

"""Play White against the computer in the terminal."""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from .ai import AlphaBetaPruner
from .board import ChessBoard
from .definitions import FILES, RANKS, GameState, PieceColor, PieceKind, in_bounds, opposite_color
from .game import Game, IllegalMoveError

_SYMBOLS = {
    PieceKind.PAWN: "p",
    PieceKind.ROOK: "r",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}

_PROMOTION_LETTERS = {"q": "q", "r": "r", "b": "b", "k": "k", "n": "k"}


def parse_move(text: str) -> tuple[str, str, Optional[str]]:
    """Parse ``e2e4``, ``e2 e4`` or ``e2-e4``, with an optional promotion letter.

    Returns ``(from, to, promotion)``; the promotion letter is one of q, r, b, k
    (knight, also written n) or None. Raises ValueError on anything else.
    """
    compact = "".join(ch for ch in text.strip().lower() if ch not in " -")
    if len(compact) not in (4, 5):
        raise ValueError(f"cannot read move {text!r}")
    from_square, to_square = compact[:2], compact[2:4]
    for square in (from_square, to_square):
        if not in_bounds(square[0], square[1]):
            raise ValueError(f"no such square {square!r}")
    promotion = None
    if len(compact) == 5:
        try:
            promotion = _PROMOTION_LETTERS[compact[4]]
        except KeyError:
            raise ValueError(f"cannot promote to {compact[4]!r}") from None
    return from_square, to_square, promotion


def _render(board: ChessBoard) -> str:
    lines = []
    for rank in reversed(RANKS):
        cells = []
        for file in FILES:
            piece = board[file + rank]
            if piece is None:
                cells.append(".")
            else:
                symbol = _SYMBOLS[piece.kind]
                cells.append(symbol.upper() if piece.color is PieceColor.WHITE else symbol)
        lines.append(f"{rank} " + " ".join(cells))
    lines.append("  " + " ".join(FILES))
    return "\n".join(lines)


def _announce_end(game: Game, state: GameState, out) -> bool:
    if state is GameState.CHECKMATE:
        winner = opposite_color(game.player_turn)
        name = "White" if winner is PieceColor.WHITE else "Black"
        print(f"{name} wins by checkmate!", file=out)
        return True
    if state is GameState.STALEMATE:
        print("Game drawn by stalemate!", file=out)
        return True
    return False


def _play(game: Game, from_square: str, to_square: str, promotion: Optional[str]) -> GameState:
    result = game.apply_move(from_square, to_square)
    if result.state is GameState.PROMOTE:
        return game.promote(to_square, promotion or "q")
    return result.state


def main(argv=None) -> int:
    """Run a game of the user as White against the computer as Black."""
    parser = argparse.ArgumentParser(prog="alphachess", description=__doc__)
    parser.add_argument("--depth", type=int, default=2, help="search depth in plies")
    args = parser.parse_args(argv)
    if args.depth < 1:
        parser.error("--depth must be at least 1")

    out = sys.stdout
    game = Game(ChessBoard())
    engine = AlphaBetaPruner(args.depth)

    while True:
        print(_render(game.board), file=out)
        print("White to move: ", end="", file=out, flush=True)
        line = sys.stdin.readline()
        if not line:
            return 0
        line = line.strip()
        if line in ("quit", "exit"):
            return 0
        try:
            from_square, to_square, promotion = parse_move(line)
        except ValueError as error:
            print(f"Invalid input: {error}", file=out)
            continue
        try:
            state = _play(game, from_square, to_square, promotion)
        except IllegalMoveError:
            print("Illegal move", file=out)
            continue
        if _announce_end(game, state, out):
            print(_render(game.board), file=out)
            return 0

        reply = engine.find_best_move(game.board, PieceColor.BLACK)
        if reply is None:
            return 0
        state = _play(game, reply[0], reply[1], None)
        print(f"Black plays {reply[0]}{reply[1]}", file=out)
        if _announce_end(game, state, out):
            print(_render(game.board), file=out)
            return 0


if __name__ == "__main__":
    sys.exit(main())
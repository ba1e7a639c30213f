"""A material-counting alpha-beta search."""

from __future__ import annotations

import math
from typing import Optional

from .board import ChessBoard
from .definitions import FILES, RANKS, Action, PieceColor, PieceKind, opposite_color

_VALUES = {
    PieceKind.PAWN: 100,
    PieceKind.KNIGHT: 320,
    PieceKind.BISHOP: 330,
    PieceKind.ROOK: 500,
    PieceKind.QUEEN: 900,
    PieceKind.KING: 20000,
}

_MATE_SCORE = 20000


def piece_value(kind: PieceKind) -> int:
    """Return the material value the search gives a piece kind."""
    return _VALUES.get(kind, 0)


def _legal_moves(board: ChessBoard, color: PieceColor) -> tuple[list[tuple[str, str, Action]], bool]:
    """Regenerate and list the moves of ``color``; also tell whether there are any."""
    pieces = []
    any_moves = False
    for file in FILES:
        for rank in RANKS:
            square = file + rank
            piece = board[square]
            if piece is None or piece.color != color:
                continue
            pieces.append((square, piece))
            if piece.update_valid_moves(board):
                any_moves = True
    moves = [(square, to, action) for square, piece in pieces for to, action in piece.valid_moves]
    return moves, any_moves


class AlphaBetaPruner:
    """Searches a fixed number of plies ahead and picks the best move for a side."""

    def __init__(self, max_depth: int) -> None:
        if max_depth < 1:
            raise ValueError("search depth must be at least 1")
        self.max_depth = max_depth

    def find_best_move(self, board: ChessBoard, ai_color: PieceColor) -> Optional[tuple[str, str]]:
        """Return ``(from, to)`` for the best move, or None when there is none.

        The given board is not changed.
        """
        root = board.copy()
        moves, any_moves = _legal_moves(root, ai_color)
        if not any_moves:
            return None

        alpha, beta = -math.inf, math.inf
        best_value = -math.inf
        best_move: Optional[tuple[str, str]] = None
        for from_square, to_square, action in moves:
            child = root.copy()
            child.update_board(from_square, to_square, action)
            value = self._alpha_beta(child, self.max_depth - 1, alpha, beta, False, ai_color)
            if value > best_value or best_move is None:
                best_value = value
                best_move = (from_square, to_square)
            alpha = max(alpha, best_value)
            if beta <= alpha:
                break
        return best_move

    def _alpha_beta(self, board, depth, alpha, beta, maximizing, ai_color):
        color = ai_color if maximizing else opposite_color(ai_color)
        moves, any_moves = _legal_moves(board, color)
        if depth <= 0 or not any_moves:
            return self._evaluate(board, ai_color, any_moves)

        best = -math.inf if maximizing else math.inf
        for from_square, to_square, action in moves:
            child = board.copy()
            child.update_board(from_square, to_square, action)
            value = self._alpha_beta(child, depth - 1, alpha, beta, not maximizing, ai_color)
            if maximizing:
                best = max(best, value)
                alpha = max(alpha, best)
            else:
                best = min(best, value)
                beta = min(beta, best)
            if beta <= alpha:
                break
        return best

    @staticmethod
    def _evaluate(board: ChessBoard, ai_color: PieceColor, any_moves: bool) -> int:
        if not any_moves:
            if board.is_checked_square(board.white_king_position, PieceColor.BLACK):
                return _MATE_SCORE if ai_color is PieceColor.BLACK else -_MATE_SCORE
            if board.is_checked_square(board.black_king_position, PieceColor.WHITE):
                return _MATE_SCORE if ai_color is PieceColor.WHITE else -_MATE_SCORE
            return 0
        return sum(
            piece_value(piece.kind) if piece.color == ai_color else -piece_value(piece.kind)
            for piece in board
            if piece is not None
        )
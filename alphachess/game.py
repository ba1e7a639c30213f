"""Turn handling, move legality and end-of-game detection."""

from __future__ import annotations

from dataclasses import dataclass

from .board import ChessBoard
from .definitions import FILES, RANKS, Action, GameState, PieceColor, PieceKind, opposite_color
from .pieces import Bishop, Knight, Queen, Rook

_PROMOTIONS = {"q": Queen, "r": Rook, "k": Knight, "b": Bishop}


@dataclass(frozen=True)
class MoveResult:
    """What a move did and the state of the game afterwards."""

    action: Action
    state: GameState


class IllegalMoveError(ValueError):
    """Raised when a move is not allowed in the current position."""


class Game:
    """A game played on a :class:`ChessBoard`, starting with White to move."""

    def __init__(self, board: ChessBoard) -> None:
        self.board = board
        self.player_turn = PieceColor.WHITE
        self.move_number = 0
        self.valid_move_count = 0
        self.state = GameState.KEEP_PLAYING
        self.refresh_state()

    def is_game_over(self) -> bool:
        """Tell whether the side to move has no legal move."""
        return self.valid_move_count == 0

    def refresh_state(self) -> GameState:
        """Regenerate the moves of the side to move and work out the game state."""
        self.valid_move_count = 0
        for file in FILES:
            for rank in RANKS:
                piece = self.board[file + rank]
                if piece is not None and piece.color == self.player_turn:
                    self.valid_move_count += piece.update_valid_moves(self.board)

        if self.valid_move_count == 0:
            if self.player_turn is PieceColor.WHITE:
                king_square = self.board.white_king_position
            else:
                king_square = self.board.black_king_position
            attacked = self.board.is_checked_square(king_square, opposite_color(self.player_turn))
            self.state = GameState.CHECKMATE if attacked else GameState.STALEMATE
        else:
            self.state = GameState.KEEP_PLAYING
        return self.state

    def change_playing_side(self) -> None:
        """Hand the move to the other side."""
        self.player_turn = opposite_color(self.player_turn)

    def is_any_promotion(self) -> bool:
        """Tell whether a pawn stands on the first or the last rank."""
        return any(
            (piece := self.board[file + rank]) is not None and piece.kind is PieceKind.PAWN
            for rank in ("1", "8")
            for file in FILES
        )

    def apply_move(self, move_from: str, move_to: str) -> MoveResult:
        """Play a move for the side to move.

        When a pawn reaches the last rank the result's state is PROMOTE and the
        turn does not pass until :meth:`promote` is called.
        """
        piece = self.board[move_from]
        if piece is None or piece.color != self.player_turn:
            raise IllegalMoveError(f"no piece of the side to move on {move_from}")

        for target, action in piece.valid_moves:
            if target == move_to:
                self.board.update_board(move_from, move_to, action)
                if self.is_any_promotion():
                    return MoveResult(action, GameState.PROMOTE)
                self.change_playing_side()
                self.refresh_state()
                return MoveResult(action, self.state)

        raise IllegalMoveError(f"illegal move {move_from}{move_to}")

    def promote(self, square: str, kind_char: str) -> GameState:
        """Replace the pawn on ``square`` with a queen, rook, knight or bishop.

        ``kind_char`` is ``q``, ``r``, ``k`` (knight) or ``b``. The turn then passes.
        """
        try:
            cls = _PROMOTIONS[kind_char]
        except KeyError:
            raise ValueError(f"cannot promote to {kind_char!r}") from None
        piece = self.board[square]
        if piece is None:
            raise IllegalMoveError(f"no piece to promote on {square}")
        self.board[square] = cls(piece.color, square)
        self.change_playing_side()
        return self.refresh_state()
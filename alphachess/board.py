"""The chess board: piece placement, attack detection and move application."""

from __future__ import annotations

from typing import Iterator, Optional

from .definitions import (
    FILES,
    Action,
    InitialPosition,
    PieceColor,
    PieceKind,
    get_square,
    in_bounds,
    opposite_color,
)
from .pieces import Bishop, King, Knight, Pawn, Piece, Queen, Rook, make_piece

_STRAIGHT = ((1, 0), (-1, 0), (0, 1), (0, -1))
_DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))
_KNIGHT_JUMPS = ((2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2))
_KING_STEPS = ((0, 1), (0, -1), (1, 0), (-1, 0), (1, 1), (1, -1), (-1, 1), (-1, -1))

_BACK_RANK = (Rook, Knight, Bishop, Queen, King, Bishop, Knight, Rook)


class BoardPositionError(IndexError):
    """Raised when a square name does not name a square on the board."""


def _valid_square(square: str) -> bool:
    return isinstance(square, str) and len(square) == 2 and in_bounds(square[0], square[1])


def _shift(square: str, d_file: int, d_rank: int) -> str:
    return chr(ord(square[0]) + d_file) + chr(ord(square[1]) + d_rank)


class ChessBoard:
    """An 8x8 board addressed by algebraic square names such as ``"e4"``.

    The board remembers only the last move applied with :meth:`update_board`,
    so :meth:`undo_move` takes back a single move.
    """

    def __init__(self, initial: InitialPosition = InitialPosition.STANDARD_BOARD) -> None:
        self._squares: list[list[Optional[Piece]]] = [[None] * 8 for _ in range(8)]
        self.white_king_position = ""
        self.black_king_position = ""
        self.last_from = ""
        self.last_to = ""
        self.last_action = Action.INVALID_MOVE
        self.last_captured = PieceKind.EMPTY

        if initial is InitialPosition.STANDARD_BOARD:
            for file, cls in zip(FILES, _BACK_RANK):
                self[file + "1"] = cls(PieceColor.WHITE, file + "1")
                self[file + "2"] = Pawn(PieceColor.WHITE, file + "2")
                self[file + "7"] = Pawn(PieceColor.BLACK, file + "7")
                self[file + "8"] = cls(PieceColor.BLACK, file + "8")
            self.white_king_position = "e1"
            self.black_king_position = "e8"

    @staticmethod
    def _index(pos: str) -> tuple[int, int]:
        if not _valid_square(pos):
            raise BoardPositionError(f"Invalid board position: {pos}")
        return ord(pos[1]) - ord("1"), ord(pos[0]) - ord("a")

    def __getitem__(self, pos: str) -> Optional[Piece]:
        rank, file = self._index(pos)
        return self._squares[rank][file]

    def __setitem__(self, pos: str, piece: Optional[Piece]) -> None:
        rank, file = self._index(pos)
        self._squares[rank][file] = piece

    def __iter__(self) -> Iterator[Optional[Piece]]:
        for row in self._squares:
            yield from row

    def copy(self) -> "ChessBoard":
        """Return an independent board with cloned pieces and the same move record."""
        board = ChessBoard(InitialPosition.EMPTY_BOARD)
        board._squares = [
            [piece.clone() if piece is not None else None for piece in row]
            for row in self._squares
        ]
        board.white_king_position = self.white_king_position
        board.black_king_position = self.black_king_position
        board.last_from = self.last_from
        board.last_to = self.last_to
        board.last_action = self.last_action
        board.last_captured = self.last_captured
        return board

    # Attack detection -------------------------------------------------

    def _checked_by_pawn(self, square: str, attacker: PieceColor) -> bool:
        d_rank = 1 if attacker is PieceColor.BLACK else -1
        for d_file in (-1, 1):
            target = _shift(square, d_file, d_rank)
            if _valid_square(target):
                piece = self[target]
                if piece is not None and piece.kind is PieceKind.PAWN and piece.color == attacker:
                    return True
        return False

    def _checked_along(self, square, attacker, directions, kinds) -> bool:
        for d_file, d_rank in directions:
            target = _shift(square, d_file, d_rank)
            while _valid_square(target):
                piece = self[target]
                if piece is not None:
                    if piece.kind in kinds and piece.color == attacker:
                        return True
                    break
                target = _shift(target, d_file, d_rank)
        return False

    def _checked_by_step(self, square, attacker, offsets, kind) -> bool:
        for d_file, d_rank in offsets:
            target = _shift(square, d_file, d_rank)
            if _valid_square(target):
                piece = self[target]
                if piece is not None and piece.kind is kind and piece.color == attacker:
                    return True
        return False

    def is_checked_square(self, square: str, attacker: PieceColor) -> bool:
        """Tell whether ``attacker`` attacks ``square``; a bad square is never attacked."""
        if not _valid_square(square):
            return False
        return (
            self._checked_by_pawn(square, attacker)
            or self._checked_along(
                square, attacker, _DIAGONAL, (PieceKind.BISHOP, PieceKind.QUEEN)
            )
            or self._checked_along(
                square, attacker, _STRAIGHT, (PieceKind.ROOK, PieceKind.QUEEN)
            )
            or self._checked_by_step(square, attacker, _KNIGHT_JUMPS, PieceKind.KNIGHT)
            or self._checked_by_step(square, attacker, _KING_STEPS, PieceKind.KING)
        )

    def _king_position(self, color: PieceColor) -> str:
        if color is PieceColor.WHITE:
            return self.white_king_position
        return self.black_king_position

    def _set_king_position(self, color: PieceColor, square: str) -> None:
        if color is PieceColor.WHITE:
            self.white_king_position = square
        else:
            self.black_king_position = square

    def would_be_in_check_after_move(
        self,
        from_square: str,
        to_square: str,
        player_color: PieceColor,
        is_en_passant: bool = False,
    ) -> bool:
        """Try a move and tell whether it leaves ``player_color``'s king attacked.

        The board is left exactly as it was.
        """
        if not _valid_square(from_square) or not _valid_square(to_square):
            return False
        moved = self[from_square]
        if moved is None:
            return False

        captured = self[to_square]
        self[to_square] = moved
        self[from_square] = None
        old_pos = moved.pos
        moved.pos = to_square

        is_king = moved.kind is PieceKind.KING
        original_king = self._king_position(player_color) if is_king else ""
        if is_king:
            self._set_king_position(player_color, to_square)

        en_passant_square = get_square(to_square[0], from_square[1])
        en_passant_captured = None
        if is_en_passant:
            en_passant_captured = self[en_passant_square]
            self[en_passant_square] = None

        in_check = self.is_checked_square(
            self._king_position(player_color), opposite_color(player_color)
        )

        moved.pos = old_pos
        self[from_square] = moved
        self[to_square] = captured
        if is_en_passant and en_passant_captured is not None:
            self[en_passant_square] = en_passant_captured
        if is_king:
            self._set_king_position(player_color, original_king)
        return in_check

    # Applying and taking back moves ------------------------------------

    def _update_king_position(self, from_square: str, to_square: str) -> None:
        if from_square == self.black_king_position:
            self.black_king_position = to_square
        elif from_square == self.white_king_position:
            self.white_king_position = to_square

    def _castle(self, from_square: str, rook_file: str, rook_to_file: str, king_file: str) -> None:
        rank = from_square[1]
        rook_from = get_square(rook_file, rank)
        rook_to = get_square(rook_to_file, rank)
        king_to = get_square(king_file, rank)

        self[king_to] = self[from_square]
        self[rook_to] = self[rook_from]
        self[from_square] = None
        self[rook_from] = None
        self[king_to].move_to(king_to)
        self[rook_to].move_to(rook_to)
        self._update_king_position(from_square, king_to)

        # Only the rook's part of a castle is recorded for undo.
        self.last_from = rook_from
        self.last_to = rook_to
        self.last_action = Action.MOVE
        self.last_captured = PieceKind.EMPTY

    def update_board(self, from_square: str, to_square: str, action: Action) -> None:
        """Apply a move of the given action; bad squares or an empty origin do nothing."""
        if not _valid_square(from_square) or not _valid_square(to_square):
            return
        moving = self[from_square]
        if moving is None:
            return

        self.last_from = from_square
        self.last_to = to_square
        self.last_action = action
        self.last_captured = PieceKind.EMPTY
        if action is Action.CAPTURE:
            target = self[to_square]
            self.last_captured = target.kind if target is not None else PieceKind.EMPTY
        elif action is Action.EN_PASSANT:
            target = self[get_square(to_square[0], from_square[1])]
            self.last_captured = target.kind if target is not None else PieceKind.EMPTY

        if action in (Action.MOVE, Action.CAPTURE):
            self[to_square] = moving
            self[from_square] = None
            moving.move_to(to_square)
            self._update_king_position(from_square, to_square)
        elif action is Action.EN_PASSANT:
            self[get_square(to_square[0], from_square[1])] = None
            self[to_square] = moving
            self[from_square] = None
            moving.move_to(to_square)
        elif action is Action.LONG_CASTLE:
            self._castle(from_square, "a", "d", "c")
        elif action is Action.SHORT_CASTLE:
            self._castle(from_square, "h", "f", "g")

    def _uncastle(self, from_square: str, rook_file: str, rook_to_file: str, king_file: str) -> None:
        rank = from_square[1]
        king_to = get_square(king_file, rank)
        king = self[king_to]
        self[from_square] = king
        self[king_to] = None
        if king is not None:
            king.move_to(from_square)

        rook_to = get_square(rook_to_file, rank)
        rook_from = get_square(rook_file, rank)
        rook = self[rook_to]
        self[rook_from] = rook
        self[rook_to] = None
        if rook is not None:
            rook.move_to(rook_from)
        self._update_king_position(king_to, from_square)

    def undo_move(self) -> None:
        """Take back the last move recorded by :meth:`update_board`."""
        action = self.last_action
        from_square = self.last_from
        to_square = self.last_to
        captured = self.last_captured

        if action is Action.MOVE:
            moved = self[to_square]
            if moved is None:
                return
            self[from_square] = moved
            self[to_square] = None
            moved.move_to(from_square)
            self._update_king_position(to_square, from_square)
        elif action is Action.CAPTURE:
            moved = self[to_square]
            if moved is None:
                return
            self[from_square] = moved
            moved.move_to(from_square)
            if captured is PieceKind.EMPTY:
                self[to_square] = None
            else:
                self[to_square] = make_piece(captured, opposite_color(moved.color), to_square)
            self._update_king_position(to_square, from_square)
        elif action is Action.EN_PASSANT:
            moved = self[to_square]
            if moved is None:
                return
            self[from_square] = moved
            moved.move_to(from_square)
            self[to_square] = None
            if captured is not PieceKind.EMPTY:
                captured_square = get_square(to_square[0], from_square[1])
                pawn = Pawn(opposite_color(moved.color), captured_square)
                pawn.moved_two_squares = True
                self[captured_square] = pawn
        elif action is Action.LONG_CASTLE:
            self._uncastle(from_square, "a", "d", "c")
        elif action is Action.SHORT_CASTLE:
            self._uncastle(from_square, "h", "f", "g")
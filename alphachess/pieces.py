"""Chess pieces and their move generation."""

from __future__ import annotations

from typing import Optional, Protocol

from .definitions import Action, PieceColor, PieceKind, in_bounds, opposite_color

_STRAIGHT = ((1, 0), (-1, 0), (0, 1), (0, -1))
_DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))
_KNIGHT_JUMPS = ((2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2))
_KING_STEPS = ((0, 1), (0, -1), (1, 0), (-1, 0), (1, 1), (1, -1), (-1, 1), (-1, -1))

_INT_MAX = 2**31 - 1


class _Board(Protocol):
    def __getitem__(self, square: str) -> Optional["Piece"]: ...

    def is_checked_square(self, square: str, attacker: PieceColor) -> bool: ...

    def would_be_in_check_after_move(
        self, from_square: str, to_square: str, player_color: PieceColor, is_en_passant: bool = False
    ) -> bool: ...


def _offset(square: str, d_file: int, d_rank: int) -> str:
    return chr(ord(square[0]) + d_file) + chr(ord(square[1]) + d_rank)


def _on_board(square: str) -> bool:
    return len(square) == 2 and in_bounds(square[0], square[1])


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _line_action(piece: "Piece", move: str, board: _Board, diagonal: bool) -> Action:
    """Validate a sliding move along a straight line or a diagonal."""
    if move == piece.pos or not _on_board(move):
        return Action.INVALID_MOVE
    dx = ord(move[0]) - ord(piece.pos[0])
    dy = ord(move[1]) - ord(piece.pos[1])
    if diagonal:
        if abs(dx) != abs(dy):
            return Action.INVALID_MOVE
    elif dx != 0 and dy != 0:
        return Action.INVALID_MOVE

    step_x, step_y = _sign(dx), _sign(dy)
    square = _offset(piece.pos, step_x, step_y)
    while square != move:
        if board[square] is not None:
            return Action.INVALID_MOVE
        square = _offset(square, step_x, step_y)

    target = board[move]
    if target is None:
        return Action.MOVE
    if target.color != piece.color:
        return Action.CAPTURE
    return Action.INVALID_MOVE


def _slide_moves(piece: "Piece", board: _Board, directions) -> list[tuple[str, Action]]:
    moves: list[tuple[str, Action]] = []
    for d_file, d_rank in directions:
        square = piece.pos
        while True:
            square = _offset(square, d_file, d_rank)
            if not _on_board(square):
                break
            action = piece.is_valid_move(square, board)
            if action is not Action.INVALID_MOVE and not board.would_be_in_check_after_move(
                piece.pos, square, piece.color
            ):
                moves.append((square, action))
            if board[square] is not None:
                break
    return moves


class Piece:
    """A piece on a square; subclasses know how they move."""

    kind = PieceKind.EMPTY
    value = 0

    def __init__(self, color: PieceColor, pos: str) -> None:
        self.color = color
        self.pos = pos
        self.valid_moves: list[tuple[str, Action]] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color.name}, {self.pos!r})"

    def is_valid_move(self, move: str, board: _Board) -> Action:
        """Return the action a move to ``move`` would be, or INVALID_MOVE."""
        return Action.INVALID_MOVE

    def update_valid_moves(self, board: _Board) -> int:
        """Recompute ``valid_moves`` for the current position and return their count."""
        return 0

    def move_to(self, new_pos: str, undo: bool = False) -> None:
        """Place the piece on ``new_pos``."""
        self.pos = new_pos

    def clone(self) -> "Piece":
        """Return a fresh piece of the same kind, colour, square and move flags."""
        return type(self)(self.color, self.pos)


class Pawn(Piece):
    """A pawn, with double steps, diagonal captures and en passant."""

    kind = PieceKind.PAWN
    value = 1

    def __init__(self, color: PieceColor, pos: str) -> None:
        super().__init__(color, pos)
        self.moved_two_squares = False

    def clone(self) -> "Pawn":
        copy = Pawn(self.color, self.pos)
        copy.moved_two_squares = self.moved_two_squares
        return copy

    def move_to(self, new_pos: str, undo: bool = False) -> None:
        if abs(ord(self.pos[1]) - ord(new_pos[1])) == 2:
            self.moved_two_squares = True
        self.pos = new_pos

    def _forward(self) -> int:
        return 1 if self.color is PieceColor.WHITE else -1

    def _moves_forward(self, move: str, board: _Board) -> bool:
        dx = ord(move[0]) - ord(self.pos[0])
        dy = ord(move[1]) - ord(self.pos[1])
        if board[move] is not None or dx != 0:
            return False
        if self.color is PieceColor.WHITE:
            start_rank, middle_rank = "2", "3"
        else:
            start_rank, middle_rank = "7", "6"
        step = self._forward()
        if dy == step:
            return True
        return (
            dy == 2 * step
            and self.pos[1] == start_rank
            and board[self.pos[0] + middle_rank] is None
        )

    def _is_en_passant(self, move: str, board: _Board) -> bool:
        dx = ord(move[0]) - ord(self.pos[0])
        dy = ord(move[1]) - ord(self.pos[1])
        if board[move] is not None or abs(dx) != 1:
            return False
        neighbour = board[move[0] + self.pos[1]]
        return (
            isinstance(neighbour, Pawn)
            and neighbour.color != self.color
            and neighbour.moved_two_squares
            and dy == self._forward()
        )

    def _captures(self, move: str, board: _Board) -> bool:
        dx = ord(move[0]) - ord(self.pos[0])
        dy = ord(move[1]) - ord(self.pos[1])
        target = board[move]
        return (
            target is not None
            and target.color != self.color
            and abs(dx) == 1
            and dy == self._forward()
        )

    def is_valid_move(self, move: str, board: _Board) -> Action:
        if self._moves_forward(move, board):
            return Action.MOVE
        if self._is_en_passant(move, board):
            return Action.EN_PASSANT
        if self._captures(move, board):
            return Action.CAPTURE
        return Action.INVALID_MOVE

    def _consider(self, square: str, board: _Board) -> None:
        action = self.is_valid_move(square, board)
        if action is Action.INVALID_MOVE:
            return
        if not board.would_be_in_check_after_move(
            self.pos, square, self.color, is_en_passant=action is Action.EN_PASSANT
        ):
            self.valid_moves.append((square, action))

    def update_valid_moves(self, board: _Board) -> int:
        self.valid_moves = []
        # A double step only counts for en passant until this side moves again.
        self.moved_two_squares = False
        step = self._forward()
        start_rank = "2" if self.color is PieceColor.WHITE else "7"

        if self.pos[1] == start_rank:
            double = _offset(self.pos, 0, 2 * step)
            action = self.is_valid_move(double, board)
            if action is not Action.INVALID_MOVE and not board.would_be_in_check_after_move(
                self.pos, double, self.color
            ):
                self.valid_moves.append((double, action))

        ahead = _offset(self.pos, 0, step)
        if not _on_board(ahead):
            return len(self.valid_moves)
        self._consider(ahead, board)
        if self.pos[0] != "a":
            self._consider(_offset(self.pos, -1, step), board)
        if self.pos[0] != "h":
            self._consider(_offset(self.pos, 1, step), board)
        return len(self.valid_moves)


class Bishop(Piece):
    """A bishop, sliding along diagonals."""

    kind = PieceKind.BISHOP
    value = 3

    def is_valid_move(self, move: str, board: _Board) -> Action:
        return _line_action(self, move, board, diagonal=True)

    def update_valid_moves(self, board: _Board) -> int:
        self.valid_moves = _slide_moves(self, board, _DIAGONAL)
        return len(self.valid_moves)


class Knight(Piece):
    """A knight, jumping in an L shape."""

    kind = PieceKind.KNIGHT
    value = 3

    def is_valid_move(self, move: str, board: _Board) -> Action:
        target = board[move]
        if target is None:
            return Action.MOVE
        if target.color != self.color:
            return Action.CAPTURE
        return Action.INVALID_MOVE

    def update_valid_moves(self, board: _Board) -> int:
        self.valid_moves = []
        for d_file, d_rank in _KNIGHT_JUMPS:
            square = _offset(self.pos, d_file, d_rank)
            if not _on_board(square):
                continue
            action = self.is_valid_move(square, board)
            if action is not Action.INVALID_MOVE and not board.would_be_in_check_after_move(
                self.pos, square, self.color
            ):
                self.valid_moves.append((square, action))
        return len(self.valid_moves)


class Rook(Piece):
    """A rook, sliding along ranks and files; remembers whether it has moved."""

    kind = PieceKind.ROOK
    value = 5

    def __init__(self, color: PieceColor, pos: str) -> None:
        super().__init__(color, pos)
        self.moved_before = False
        self._previous_moved_before = False

    def clone(self) -> "Rook":
        copy = Rook(self.color, self.pos)
        copy.moved_before = self.moved_before
        return copy

    def move_to(self, new_pos: str, undo: bool = False) -> None:
        self.pos = new_pos
        if undo:
            self.moved_before = self._previous_moved_before
        else:
            self._previous_moved_before = self.moved_before
            self.moved_before = True

    def is_valid_move(self, move: str, board: _Board) -> Action:
        return _line_action(self, move, board, diagonal=False)

    def update_valid_moves(self, board: _Board) -> int:
        self.valid_moves = _slide_moves(self, board, _STRAIGHT)
        return len(self.valid_moves)


class Queen(Piece):
    """A queen, moving like a rook or a bishop."""

    kind = PieceKind.QUEEN
    value = 9

    def is_valid_move(self, move: str, board: _Board) -> Action:
        if move == self.pos:
            return Action.INVALID_MOVE
        action = _line_action(self, move, board, diagonal=False)
        if action is Action.INVALID_MOVE:
            action = _line_action(self, move, board, diagonal=True)
        return action

    def update_valid_moves(self, board: _Board) -> int:
        self.valid_moves = _slide_moves(self, board, _STRAIGHT) + _slide_moves(
            self, board, _DIAGONAL
        )
        return len(self.valid_moves)


class King(Piece):
    """A king, stepping one square or castling; remembers whether it has moved."""

    kind = PieceKind.KING
    value = _INT_MAX

    def __init__(self, color: PieceColor, pos: str) -> None:
        super().__init__(color, pos)
        self.moved_before = False
        self._previous_moved_before = False

    def clone(self) -> "King":
        copy = King(self.color, self.pos)
        copy.moved_before = self.moved_before
        return copy

    def move_to(self, new_pos: str, undo: bool = False) -> None:
        self.pos = new_pos
        if undo:
            self.moved_before = self._previous_moved_before
        else:
            self._previous_moved_before = self.moved_before
            self.moved_before = True

    def _castle_rook_ready(self, board: _Board, file: str) -> bool:
        rook = board[file + self.pos[1]]
        return isinstance(rook, Rook) and not rook.moved_before

    def is_valid_move(self, move: str, board: _Board) -> Action:
        attacker = opposite_color(self.color)
        rank = self.pos[1]

        if move[0] <= "c" and not self.moved_before:
            between = [f + rank for f in "bcd"]
            if (
                self._castle_rook_ready(board, "a")
                and all(board[sq] is None for sq in between)
                and not board.is_checked_square(self.pos, attacker)
                and not board.is_checked_square("d" + rank, attacker)
                and not board.is_checked_square("c" + rank, attacker)
            ):
                return Action.LONG_CASTLE
            return Action.INVALID_MOVE

        if move[0] >= "g" and not self.moved_before:
            f_square, g_square = "f" + rank, "g" + rank
            if (
                self._castle_rook_ready(board, "h")
                and board[f_square] is None
                and board[g_square] is None
                and not board.is_checked_square(self.pos, attacker)
                and not board.is_checked_square(f_square, attacker)
                and not board.is_checked_square(g_square, attacker)
            ):
                return Action.SHORT_CASTLE
            return Action.INVALID_MOVE

        target = board[move]
        if target is None:
            return Action.MOVE
        if target.color != self.color:
            return Action.CAPTURE
        return Action.INVALID_MOVE

    def update_valid_moves(self, board: _Board) -> int:
        self.valid_moves = []
        for d_file, d_rank in _KING_STEPS:
            square = _offset(self.pos, d_file, d_rank)
            if not _on_board(square):
                continue
            action = self.is_valid_move(square, board)
            if action is not Action.INVALID_MOVE and not board.would_be_in_check_after_move(
                self.pos, square, self.color
            ):
                self.valid_moves.append((square, action))

        if not self.moved_before:
            long_target = "c" + self.pos[1]
            if self.is_valid_move(long_target, board) is Action.LONG_CASTLE:
                self.valid_moves.append((long_target, Action.LONG_CASTLE))
            short_target = "g" + self.pos[1]
            if self.is_valid_move(short_target, board) is Action.SHORT_CASTLE:
                self.valid_moves.append((short_target, Action.SHORT_CASTLE))
        return len(self.valid_moves)


_CLASSES = {
    PieceKind.PAWN: Pawn,
    PieceKind.ROOK: Rook,
    PieceKind.KNIGHT: Knight,
    PieceKind.BISHOP: Bishop,
    PieceKind.QUEEN: Queen,
    PieceKind.KING: King,
}


def make_piece(kind: PieceKind, color: PieceColor, pos: str) -> Piece:
    """Create a piece of the given kind; EMPTY has no piece and raises ValueError."""
    try:
        cls = _CLASSES[PieceKind(kind)]
    except (KeyError, ValueError):
        raise ValueError(f"no piece of kind {kind!r}") from None
    return cls(color, pos)
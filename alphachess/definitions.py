"""Chess enumerations and helpers for algebraic square names."""

from enum import Enum, IntEnum

FILES = "abcdefgh"
RANKS = "12345678"


class PieceKind(IntEnum):
    """The kind of a chess piece."""

    EMPTY = 0
    PAWN = 1
    ROOK = 2
    KNIGHT = 3
    BISHOP = 4
    QUEEN = 5
    KING = 6


class PieceColor(Enum):
    """The side a piece belongs to."""

    WHITE = 0
    BLACK = 1


class Action(Enum):
    """What a move does on the board."""

    INVALID_MOVE = 0
    MOVE = 1
    CAPTURE = 2
    SHORT_CASTLE = 3
    LONG_CASTLE = 4
    CHECK = 5
    OUT_OF_TIME = 6
    EN_PASSANT = 7


class GameState(Enum):
    """The state of a game after a move."""

    CHECKMATE = 0
    STALEMATE = 1
    DRAW = 2
    KEEP_PLAYING = 3
    PROMOTE = 4


class InitialPosition(Enum):
    """How a new board is filled."""

    STANDARD_BOARD = 0
    EMPTY_BOARD = 1


def get_square(file: str, rank: str) -> str:
    """Join a file letter and a rank digit into a square name."""
    return f"{file}{rank}"


def square_at(file_index: int, rank_index: int) -> str:
    """Return the square name for zero-based file and rank indices."""
    return get_square(chr(ord("a") + file_index), chr(ord("1") + rank_index))


def in_bounds(file: str, rank: str) -> bool:
    """Tell whether a file letter and rank digit lie on the board."""
    return (
        len(file) == 1
        and len(rank) == 1
        and "a" <= file <= "h"
        and "1" <= rank <= "8"
    )


def opposite_color(color: PieceColor) -> PieceColor:
    """Return the other side."""
    return PieceColor.BLACK if color is PieceColor.WHITE else PieceColor.WHITE
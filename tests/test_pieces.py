import pytest

from alphachess.definitions import Action, PieceColor, PieceKind
from alphachess.pieces import (
    Bishop,
    King,
    Knight,
    Pawn,
    Piece,
    Queen,
    Rook,
    make_piece,
)

WHITE = PieceColor.WHITE
BLACK = PieceColor.BLACK


class FakeBoard:
    def __init__(self, *pieces, attacked=(), check_after=False):
        self.squares = {p.pos: p for p in pieces}
        self.attacked = set(attacked)
        self.check_after = check_after
        self.en_passant_flags = []

    def __getitem__(self, square):
        return self.squares.get(square)

    def is_checked_square(self, square, attacker):
        return square in self.attacked

    def would_be_in_check_after_move(self, from_square, to_square, player_color, is_en_passant=False):
        self.en_passant_flags.append(is_en_passant)
        return self.check_after


def targets(piece):
    return {sq for sq, _ in piece.valid_moves}


def delta(a, b):
    return ord(b[0]) - ord(a[0]), ord(b[1]) - ord(a[1])


@pytest.mark.parametrize(
    "kind, cls",
    [
        (PieceKind.PAWN, Pawn),
        (PieceKind.ROOK, Rook),
        (PieceKind.KNIGHT, Knight),
        (PieceKind.BISHOP, Bishop),
        (PieceKind.QUEEN, Queen),
        (PieceKind.KING, King),
    ],
)
def test_make_piece(kind, cls):
    piece = make_piece(kind, BLACK, "c3")
    assert isinstance(piece, cls)
    assert piece.kind is kind
    assert piece.color is BLACK
    assert piece.pos == "c3"


def test_make_piece_empty_raises():
    with pytest.raises(ValueError):
        make_piece(PieceKind.EMPTY, WHITE, "a1")


def test_base_piece_has_no_moves():
    piece = Piece(WHITE, "d4")
    board = FakeBoard(piece)
    assert piece.is_valid_move("d5", board) is Action.INVALID_MOVE
    assert piece.update_valid_moves(board) == 0


def test_rook_moves_stay_on_lines():
    rook = Rook(WHITE, "d4")
    board = FakeBoard(rook)
    count = rook.update_valid_moves(board)
    assert count == len(rook.valid_moves)
    for sq, action in rook.valid_moves:
        dx, dy = delta("d4", sq)
        assert (dx == 0) != (dy == 0)
        assert action is Action.MOVE


def test_rook_blocked_by_own_and_captures_enemy():
    rook = Rook(WHITE, "a1")
    own = Pawn(WHITE, "a2")
    enemy = Knight(BLACK, "c1")
    board = FakeBoard(rook, own, enemy)
    rook.update_valid_moves(board)
    assert "a2" not in targets(rook)
    assert ("c1", Action.CAPTURE) in rook.valid_moves
    assert all(sq[1] == "1" for sq in targets(rook))
    assert "d1" not in targets(rook)


def test_bishop_moves_are_diagonal():
    bishop = Bishop(BLACK, "c5")
    board = FakeBoard(bishop)
    assert bishop.update_valid_moves(board) > 0
    for sq in targets(bishop):
        dx, dy = delta("c5", sq)
        assert abs(dx) == abs(dy) != 0


def test_bishop_rejects_non_diagonal_and_blocked():
    bishop = Bishop(WHITE, "c1")
    blocker = Pawn(WHITE, "d2")
    board = FakeBoard(bishop, blocker)
    assert bishop.is_valid_move("c4", board) is Action.INVALID_MOVE
    assert bishop.is_valid_move("e3", board) is Action.INVALID_MOVE
    assert bishop.is_valid_move("c1", board) is Action.INVALID_MOVE
    assert bishop.is_valid_move("b2", board) is Action.MOVE


def test_queen_moves_are_rook_then_bishop_moves():
    queen = Queen(WHITE, "e4")
    rook = Rook(WHITE, "e4")
    bishop = Bishop(WHITE, "e4")
    enemy = Pawn(BLACK, "g6")
    queen.update_valid_moves(FakeBoard(queen, enemy))
    rook.update_valid_moves(FakeBoard(rook, enemy))
    bishop.update_valid_moves(FakeBoard(bishop, enemy))
    assert queen.valid_moves == rook.valid_moves + bishop.valid_moves


def test_queen_move_to_updates_position():
    queen = Queen(BLACK, "d8")
    queen.move_to("d5")
    board = FakeBoard(queen)
    queen.update_valid_moves(board)
    assert queen.pos == "d5"
    assert queen.is_valid_move("a8", board) is Action.MOVE


def test_knight_moves_are_l_shaped():
    knight = Knight(WHITE, "b1")
    board = FakeBoard(knight, Pawn(WHITE, "d2"), Pawn(BLACK, "c3"))
    knight.update_valid_moves(board)
    assert "d2" not in targets(knight)
    assert ("c3", Action.CAPTURE) in knight.valid_moves
    for sq in targets(knight):
        dx, dy = delta("b1", sq)
        assert {abs(dx), abs(dy)} == {1, 2}


def test_moves_leaving_king_in_check_are_dropped():
    for piece in (Rook(WHITE, "d4"), Bishop(WHITE, "d4"), Knight(WHITE, "d4"), Queen(WHITE, "d4")):
        board = FakeBoard(piece, check_after=True)
        assert piece.update_valid_moves(board) == 0
        assert piece.valid_moves == []


def test_white_pawn_first_move():
    pawn = Pawn(WHITE, "e2")
    board = FakeBoard(pawn)
    assert pawn.update_valid_moves(board) == 2
    assert targets(pawn) == {"e3", "e4"}
    assert all(action is Action.MOVE for _, action in pawn.valid_moves)


def test_pawn_double_step_blocked_by_middle_piece():
    pawn = Pawn(BLACK, "d7")
    board = FakeBoard(pawn, Knight(WHITE, "d6"))
    assert pawn.update_valid_moves(board) == 0


def test_pawn_move_to_marks_double_step_and_update_clears_it():
    pawn = Pawn(WHITE, "a2")
    pawn.move_to("a4")
    assert pawn.moved_two_squares is True
    pawn.update_valid_moves(FakeBoard(pawn))
    assert pawn.moved_two_squares is False


def test_pawn_captures_diagonally_only_forward():
    pawn = Pawn(WHITE, "d4")
    board = FakeBoard(pawn, Bishop(BLACK, "e5"), Bishop(BLACK, "c3"))
    pawn.update_valid_moves(board)
    assert ("e5", Action.CAPTURE) in pawn.valid_moves
    assert "c3" not in targets(pawn)


def test_en_passant():
    pawn = Pawn(WHITE, "e5")
    enemy = Pawn(BLACK, "d7")
    enemy.move_to("d5")
    board = FakeBoard(pawn, enemy)
    pawn.update_valid_moves(board)
    assert ("d6", Action.EN_PASSANT) in pawn.valid_moves
    assert True in board.en_passant_flags


def test_no_en_passant_without_double_step():
    pawn = Pawn(WHITE, "e5")
    enemy = Pawn(BLACK, "d5")
    board = FakeBoard(pawn, enemy)
    count = pawn.update_valid_moves(board)
    assert count == 1
    assert pawn.valid_moves == [("e6", Action.MOVE)]
    assert board.en_passant_flags == [False]


def test_pawn_on_last_rank_has_no_moves():
    pawn = Pawn(WHITE, "b8")
    assert pawn.update_valid_moves(FakeBoard(pawn)) == 0


def _castle_board(**kwargs):
    king = King(WHITE, "e1")
    short_rook = Rook(WHITE, "h1")
    long_rook = Rook(WHITE, "a1")
    return king, short_rook, long_rook, FakeBoard(king, short_rook, long_rook, **kwargs)


def test_king_can_castle_both_ways():
    king, _, _, board = _castle_board()
    king.update_valid_moves(board)
    assert ("g1", Action.SHORT_CASTLE) in king.valid_moves
    assert ("c1", Action.LONG_CASTLE) in king.valid_moves


def test_king_cannot_castle_with_moved_rook():
    king, short_rook, _, board = _castle_board()
    short_rook.moved_before = True
    king.update_valid_moves(board)
    assert all(action is not Action.SHORT_CASTLE for _, action in king.valid_moves)
    assert any(action is Action.LONG_CASTLE for _, action in king.valid_moves)


def test_king_cannot_castle_through_attacked_square():
    king, _, _, board = _castle_board(attacked={"f1", "d1"})
    count = king.update_valid_moves(board)
    assert count == 5
    assert set(king.valid_moves) == {
        ("e2", Action.MOVE),
        ("f1", Action.MOVE),
        ("d1", Action.MOVE),
        ("f2", Action.MOVE),
        ("d2", Action.MOVE),
    }


def test_moved_king_steps_only():
    king = King(BLACK, "d4")
    king.moved_before = True
    board = FakeBoard(king, Pawn(WHITE, "e5"), Pawn(BLACK, "c3"))
    king.update_valid_moves(board)
    assert ("e5", Action.CAPTURE) in king.valid_moves
    assert "c3" not in targets(king)
    for sq in targets(king):
        dx, dy = delta("d4", sq)
        assert max(abs(dx), abs(dy)) == 1


@pytest.mark.parametrize("cls", [Rook, King])
def test_move_to_and_undo_restore_moved_flag(cls):
    piece = cls(WHITE, "e1")
    piece.move_to("e2")
    assert piece.moved_before is True
    piece.move_to("e1", undo=True)
    assert piece.moved_before is False
    assert piece.pos == "e1"


def test_clone_copies_flags_independently():
    pawn = Pawn(BLACK, "c7")
    pawn.moved_two_squares = True
    rook = Rook(WHITE, "h1")
    rook.moved_before = True
    pawn_copy, rook_copy = pawn.clone(), rook.clone()
    assert (pawn_copy.color, pawn_copy.pos, pawn_copy.moved_two_squares) == (BLACK, "c7", True)
    assert rook_copy.moved_before is True
    rook_copy.move_to("h4")
    assert rook.pos == "h1"
    assert pawn_copy is not pawn
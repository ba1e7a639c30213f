import pytest

from alphachess.definitions import (
    FILES,
    RANKS,
    PieceColor,
    get_square,
    in_bounds,
    opposite_color,
    square_at,
)


def test_get_square_joins_file_and_rank():
    assert get_square("e", "4") == "e4"


def test_square_at_corners():
    assert square_at(0, 0) == "a1"
    assert square_at(7, 7) == "h8"


def test_square_at_covers_all_squares_once():
    squares = {square_at(f, r) for f in range(8) for r in range(8)}
    assert len(squares) == 64
    assert all(in_bounds(sq[0], sq[1]) for sq in squares)


def test_square_at_matches_get_square():
    for f, file in enumerate(FILES):
        for r, rank in enumerate(RANKS):
            assert square_at(f, r) == get_square(file, rank)


@pytest.mark.parametrize(
    "file, rank, expected",
    [
        ("a", "1", True),
        ("h", "8", True),
        ("i", "1", False),
        ("`", "4", False),
        ("d", "0", False),
        ("d", "9", False),
        ("ab", "1", False),
    ],
)
def test_in_bounds(file, rank, expected):
    assert in_bounds(file, rank) is expected


def test_out_of_range_indices_are_out_of_bounds():
    sq = square_at(8, -1)
    assert not in_bounds(sq[0], sq[1])


def test_opposite_color_is_involution():
    assert opposite_color(PieceColor.WHITE) is PieceColor.BLACK
    assert opposite_color(PieceColor.BLACK) is PieceColor.WHITE
    for color in PieceColor:
        assert opposite_color(opposite_color(color)) is color
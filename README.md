# alphachess

Chess rules with legal-move generation for every piece, including castling,
en passant and promotion, and detection of checkmate and stalemate. It also
has a small alpha-beta search that scores positions by material. You can play
against it in the terminal or use it as a library.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Playing in the terminal

```
alphachess
alphachess --depth 3
```

You play White and the engine plays Black. `--depth` sets how many plies the
engine searches (default 2, at least 1).

The board is printed with White pieces in upper case and Black pieces in lower
case. Enter a move as two squares: `e2e4`, `e2 e4` or `e2-e4`. To promote a
pawn, add a letter after the move: `q`, `r`, `b`, or `k` or `n` for a knight,
as in `e7e8n`. Without a letter a pawn promotes to a queen; the engine always
promotes to a queen. Unreadable input and illegal moves are reported and you
are asked again.

After each of your moves the engine's answer is printed as `Black plays ...`.
The game ends on checkmate (`White wins by checkmate!` or
`Black wins by checkmate!`) or stalemate (`Game drawn by stalemate!`). Type
`quit` or `exit`, or end the input, to stop.

## Using the library

```python
from alphachess.board import ChessBoard
from alphachess.game import Game, IllegalMoveError
from alphachess.ai import AlphaBetaPruner
from alphachess.definitions import PieceColor, GameState

board = ChessBoard()
game = Game(board)

result = game.apply_move("e2", "e4")
print(result.action, result.state)   # Action.MOVE GameState.KEEP_PLAYING

engine = AlphaBetaPruner(2)
best = engine.find_best_move(board, PieceColor.BLACK)
if best is not None:
    game.apply_move(*best)

try:
    game.apply_move("e4", "e8")
except IllegalMoveError as exc:
    print("rejected:", exc)
```

When a move brings a pawn to the last rank, `apply_move` returns a
`MoveResult` whose state is `GameState.PROMOTE` and the turn does not pass
until you call `game.promote(square, letter)` with `"q"`, `"r"`, `"b"` or
`"k"` (knight). `promote` returns the new game state.

Modules:

- `alphachess.definitions`: the enums `PieceKind`, `PieceColor`, `Action`,
  `GameState` and `InitialPosition`, and the helpers `get_square`,
  `square_at`, `in_bounds` and `opposite_color`.
- `alphachess.pieces`: `Pawn`, `Knight`, `Bishop`, `Rook`, `Queen` and
  `King`, and `make_piece`. `update_valid_moves(board)` fills a piece's
  `valid_moves` list with `(square, Action)` pairs and returns their count.
- `alphachess.board`: `ChessBoard`, indexed by squares such as
  `board["e4"]` (a bad square raises `BoardPositionError`). It can tell
  whether a square is attacked (`is_checked_square`), test whether a move
  would leave a king in check (`would_be_in_check_after_move`), apply a move
  (`update_board`), take back the last one (`undo_move`) and `copy` itself.
- `alphachess.game`: `Game`, which tracks whose turn it is, plays moves with
  `apply_move` and `promote`, and works out the state with `refresh_state`
  and `is_game_over`. Illegal moves raise `IllegalMoveError`.
- `alphachess.ai`: `AlphaBetaPruner(max_depth)` and `piece_value`.
  `find_best_move(board, color)` returns a `(from, to)` pair, or `None` when
  that side has no move; the given board is left unchanged.
- `alphachess.cli`: the terminal game (`main`) and `parse_move`.

## What it does not do

- There is no graphical board, no clock and no network play.
- Draws are recognised only by stalemate: there is no threefold repetition,
  fifty-move rule, insufficient-material rule, resignation or draw offer.
- There is no move history. `ChessBoard.undo_move` takes back only the last
  move, and after castling it puts back only the rook.
- Games cannot be saved or loaded, and there is no PGN or FEN support.
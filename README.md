# termtetris

A falling-block puzzle game played in the terminal with curses. Pieces drop
onto a 10 × 20 board; fill a row completely to clear it and score points. The
game ends when a locked piece reaches the top row.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Playing

```
termtetris
```

The terminal must be at least 48 columns wide and 23 rows tall. On a smaller
terminal a "Too small, make terminal bigger!" message is shown for five
seconds and the command exits with status 1. The terminal must also support
changing colours; otherwise the command prints "Can't change color!" and
exits. On a terminal taller than 43 rows the windows are drawn at double
size.

Controls:

| Key     | Action                                                   |
|---------|----------------------------------------------------------|
| `a`     | move the piece left                                      |
| `d`     | move the piece right                                     |
| `w`     | rotate the piece clockwise, unless it would collide      |
| `s`     | drop faster (50 ms instead of 500 ms) while held         |
| space   | hard drop: let the piece fall, lock it, spawn the next   |
| `e`     | hold the falling piece, or swap it with the held one     |
| Enter   | stamp the falling piece onto the board where it is       |
| `q`     | quit                                                     |

Each cleared row is worth 10 points.

Command-line options, recognised when given as the only argument:

```
termtetris -h    # show the controls
termtetris -v    # show version information
```

## What the game does not do

The score, preview and hold windows are drawn with their titles and borders,
but their contents are not filled in: the current score, the upcoming pieces
and the held piece are tracked by the game state yet not shown on screen.
There is no high-score storage, no levels and no speed-up over time.

## Using the game logic

The rules live in `termtetris.logic` and can be driven without a terminal:

```python
import random

from termtetris.blocks import BLOCK_LIST
from termtetris.logic import GameState

state = GameState()
state.set_up(BLOCK_LIST, random.Random(1))
state.add_falling_block(state.get_next(BLOCK_LIST))

state.rotate_right()
state.move_left()
while not state.fall_further_down():
    pass
state.lock_falling_block()
state.clear_falling_block()
state.check_and_clear_line()

print(state.render())
print(state.score, state.is_game_over())
```

`GameState` holds the locked board (`game_frame`), the falling piece
(`falling_frame`), the upcoming queue (`next_block`, `next_next_block`), the
held piece and the score. `fall_further_down` returns `True` once the piece
has landed; `rotate_right`, `move_left` and `move_right` return whether the
piece moved. `render` returns the combined board as text, one row per line.

`termtetris.blocks` defines the seven pieces as `Block` objects, collected in
`BLOCK_LIST`; `Block.shape` returns a piece's grid for a given orientation
(counted in clockwise quarter turns) and `Block.cells` the occupied cells in
it.

`termtetris.app` holds the curses front end: `compute_layout` works out the
window positions for a terminal size, `handle_key` applies a key press to a
`GameState`, and `main` is the `termtetris` command.
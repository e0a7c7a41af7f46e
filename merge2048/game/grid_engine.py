"""
Core Game Logic for 2048.

This module implements the rules of 2048 for an embedded game engine:
the host (a UI, a bot, a Gymnasium environment) calls `move`, `undo` and
`start_new_game`, then reads the state back and re-renders.

Key Design Points:
1.  Numba JIT Compilation: Compacting and merging a single line is
    compiled with `@njit`. Every direction is reduced to "slide toward
    index 0" by rotating the board, so one kernel serves all four moves.
2.  Logic Separation: `_move_logic` computes the result of a move *without*
    mutating the engine or spawning tiles. `move` commits it, and
    `available_moves` uses it to preview legal directions.
3.  One-Level Undo: Before every grid-changing move the previous board,
    score and move count are kept in a single snapshot slot.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np
from numba import njit

from merge2048.config import BOARD_SIZE, STARTING_TILES, WIN_TILE
from merge2048.game.color_schemes import ColorScheme
from merge2048.game.random_source import RandomSource
from merge2048.storage.score_store import InMemoryScoreStore

logger = logging.getLogger(__name__)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value):
        """Accepts a Direction or its name ('left', 'LEFT'). Returns None if unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


# Rotations (np.rot90 k) that turn each direction into "slide left".
# Up(1): row r of the rotated board is column (size-1-r) read top to bottom.
_ROTATIONS = {
    Direction.UP: 1,
    Direction.DOWN: 3,
    Direction.LEFT: 0,
    Direction.RIGHT: 2,
}


@njit
def _compact(line):
    """
    Compress Phase: removes empty cells (0) and pads the end with empties.

    [0, 2, 0, 4] -> [2, 4, 0, 0]
    """
    size = line.shape[0]
    result = np.zeros(size, dtype=np.int32)
    count = 0
    for i in range(size):
        if line[i] != 0:
            result[count] = line[i]
            count += 1
    return result


@njit
def _merge(line):
    """
    Merge Phase: a single left-to-right pass over a compacted line.

    When cell i and cell i+1 are equal, cell i doubles and cell i+1 is
    cleared. The cleared cell can't match anything, so a merged tile is
    never the left side of a second merge in the same pass:
    - [2, 2, 2, 2] -> [4, 0, 4, 0]
    - [2, 2, 4, 0] -> [4, 0, 4, 0]

    Returns:
        (np.array, int): The merged line (not re-compacted) and the score gained.
    """
    result = line.copy()
    score = 0
    for i in range(result.shape[0] - 1):
        if result[i] != 0 and result[i] == result[i + 1]:
            result[i] = result[i] * 2
            result[i + 1] = 0
            score += result[i]
    return result, score


@njit
def slide_line(line):
    """
    Slides one row or column toward index 0: compact, merge, compact again.

    Returns:
        (np.array, int): The new line and the score gained.
    """
    merged, score = _merge(_compact(line))
    return _compact(merged), score


def _is_stuck(board):
    """True when the board is full and no row or column neighbours match."""
    if np.any(board == 0):
        return False
    if np.any(board[:, :-1] == board[:, 1:]):
        return False
    if np.any(board[:-1, :] == board[1:, :]):
        return False
    return True


@dataclass(frozen=True)
class UndoSnapshot:
    board: np.ndarray
    score: int
    move_count: int


@dataclass(frozen=True)
class GameState:
    """Everything a host needs to draw one frame. `grid` uses None for empty cells."""
    grid: tuple
    score: int
    best_score: int
    move_count: int
    can_undo: bool
    has_won: bool
    is_game_over: bool
    has_shown_win_message: bool
    color_scheme: ColorScheme


class GridEngine:
    """
    The Game Engine. Manages the board, score, undo slot and win/loss flags.

    The engine is single-threaded: every call runs to completion and there
    is no locking, so a host must drive it from one owner only.

    Args:
        store: Persistence collaborator (see `merge2048.storage.score_store`).
               Read once here, written on every new best score.
        random_source: Supplies spawn cells and values. Pass a seeded
                       `RandomSource` for reproducible games.
    """
    def __init__(self, store=None, random_source=None):
        self.store = store if store is not None else InMemoryScoreStore()
        self.random_source = random_source if random_source is not None else RandomSource()

        self._board = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
        self._score = 0
        self._move_count = 0
        self._has_won = False
        self._has_shown_win_message = False
        self._is_game_over = False
        self._undo = None

        self._best_score = int(self.store.load_best_score())
        self._color_scheme = self._load_color_scheme()

        self.start_new_game()

    def _load_color_scheme(self):
        saved = self.store.load_color_scheme()
        if saved is None:
            return ColorScheme.CLASSIC
        try:
            return ColorScheme.from_name(saved)
        except ValueError:
            logger.warning("Unknown saved color scheme %r, using Classic", saved)
            return ColorScheme.CLASSIC

    # --- Read accessors ---

    @property
    def board(self):
        """A copy of the raw board (int32, 0 = empty)."""
        return self._board.copy()

    @property
    def grid(self):
        """The board as a tuple of row tuples, None for empty cells."""
        return tuple(
            tuple(int(value) if value else None for value in row)
            for row in self._board
        )

    @property
    def score(self):
        return self._score

    @property
    def best_score(self):
        return self._best_score

    @property
    def move_count(self):
        return self._move_count

    @property
    def can_undo(self):
        return self._undo is not None

    @property
    def has_won(self):
        return self._has_won

    @property
    def has_shown_win_message(self):
        return self._has_shown_win_message

    @property
    def should_show_win_message(self):
        return self._has_won and not self._has_shown_win_message

    @property
    def is_game_over(self):
        return self._is_game_over

    @property
    def color_scheme(self):
        return self._color_scheme

    @property
    def max_tile(self):
        return int(np.max(self._board))

    def empty_cells(self):
        """Returns the (row, col) of every empty cell, row by row."""
        rows, cols = np.where(self._board == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def state(self):
        return GameState(
            grid=self.grid,
            score=self._score,
            best_score=self._best_score,
            move_count=self._move_count,
            can_undo=self.can_undo,
            has_won=self._has_won,
            is_game_over=self._is_game_over,
            has_shown_win_message=self._has_shown_win_message,
            color_scheme=self._color_scheme,
        )

    # --- Operations ---

    def start_new_game(self):
        """
        Resets the session in-place and places the starting tiles.

        Best score and colour scheme survive; everything else is cleared.
        """
        self._board.fill(0)
        self._score = 0
        self._move_count = 0
        self._has_won = False
        self._has_shown_win_message = False
        self._is_game_over = False
        self._undo = None

        for _ in range(STARTING_TILES):
            self._add_new_tile()
        logger.debug("Started a new game")

    def _add_new_tile(self):
        """
        Spawns a new tile in a random empty location.
        Probabilities: 90% chance of '2', 10% chance of '4'.
        """
        empty_cells = self.empty_cells()
        if empty_cells:
            row, col = self.random_source.choose_cell(empty_cells)
            self._board[row, col] = self.random_source.tile_value()

    def _move_logic(self, direction):
        """
        Calculates the result of a move *without* spawning new tiles.

        Args:
            direction (Direction): The direction of travel.

        Returns:
            (np.ndarray, int): The new board and the score gained.
        """
        # Rotate so the move always points "left", slide every row,
        # then rotate back.
        k = _ROTATIONS[direction]
        rotated_board = np.rot90(self._board, k=k)

        move_score = 0
        temp_board = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int32)
        for r in range(BOARD_SIZE):
            new_row, row_score = slide_line(rotated_board[r])
            temp_board[r] = new_row
            move_score += int(row_score)

        final_board = np.ascontiguousarray(np.rot90(temp_board, k=-k))
        return final_board, move_score

    def move(self, direction):
        """
        Slides the board in `direction`.

        Returns True if the grid changed. An ineffective move, a move after
        game over, or an unknown direction changes nothing and returns False.
        An ineffective move also keeps any existing undo slot, so the last
        successful move can still be undone after it.

        Side Effects (only when the grid changed):
            1. Commits the undo snapshot and bumps the move count
            2. Updates the score and spawns one new tile
            3. Sets the win flag, then the game-over flag
            4. Persists a new best score
        """
        if self._is_game_over:
            return False

        direction = Direction.parse(direction)
        if direction is None:
            return False

        snapshot = UndoSnapshot(self._board.copy(), self._score, self._move_count)
        final_board, move_score = self._move_logic(direction)

        if np.array_equal(final_board, snapshot.board):
            # Catches a stuck board that was never flagged
            if _is_stuck(self._board):
                self._is_game_over = True
            return False

        self._board = final_board
        self._score += move_score
        self._undo = snapshot
        self._move_count += 1

        self._add_new_tile()

        if not self._has_won and np.any(self._board == WIN_TILE):
            self._has_won = True
            logger.debug("Reached %d after %d moves", WIN_TILE, self._move_count)

        if _is_stuck(self._board):
            self._is_game_over = True
            logger.debug("Game over with score %d", self._score)

        if self._score > self._best_score:
            self._best_score = self._score
            self.store.save_best_score(self._best_score)

        return True

    def undo(self):
        """
        Restores the board, score and move count from before the last move.

        Only one step is kept, so a second undo in a row does nothing.
        The win flag is never reverted.
        """
        if self._undo is None:
            return

        self._board = self._undo.board.copy()
        self._score = self._undo.score
        self._move_count = self._undo.move_count
        # The state before a successful move always had a legal move
        self._is_game_over = False
        self._undo = None

    def available_moves(self):
        """Returns the directions that would change the board."""
        if self._is_game_over:
            return []
        return [
            direction for direction in Direction
            if not np.array_equal(self._move_logic(direction)[0], self._board)
        ]

    def acknowledge_win(self):
        """Marks the "You Win!" message as shown for this session."""
        if self._has_won:
            self._has_shown_win_message = True

    def set_color_scheme(self, scheme):
        scheme = ColorScheme.from_name(scheme)
        self._color_scheme = scheme
        self.store.save_color_scheme(scheme.value)

    def set_grid(self, rows):
        """
        Replaces the board with `rows` (None or 0 for empty cells).

        Used by hosts restoring a position and by tests. The undo slot is
        dropped, since it belongs to the previous position, and the
        game-over flag is recomputed for the new board. Score, move count
        and the win flag are left alone.

        Raises:
            ValueError: If the grid is not 4x4 or holds a value that is not
                        an integer power of two >= 2 that fits in int32.
        """
        values = []
        for row in rows:
            row_values = []
            for value in row:
                if value is None:
                    value = 0
                if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                    raise ValueError(f"Tiles must be integers, got {value!r}")
                row_values.append(int(value))
            values.append(row_values)

        try:
            board = np.array(values, dtype=np.int64)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Grid must be {BOARD_SIZE}x{BOARD_SIZE} integers: {e}") from e

        if board.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Grid must be {BOARD_SIZE}x{BOARD_SIZE}, got shape {board.shape}")

        tiles = board[board != 0]
        if np.any(tiles < 2) or np.any(tiles & (tiles - 1)):
            raise ValueError(f"Tiles must be powers of two >= 2, got {sorted(set(tiles.tolist()))}")
        if np.any(tiles > np.iinfo(np.int32).max):
            raise ValueError(f"Tiles must fit in int32, got {int(tiles.max())}")

        self._board = board.astype(np.int32)
        self._undo = None
        self._is_game_over = _is_stuck(self._board)

    def __str__(self):
        """String representation for printing the board."""
        score_str = "Score: {}  Best: {}\n".format(self._score, self._best_score)
        board_str = str(self._board)
        return score_str + board_str

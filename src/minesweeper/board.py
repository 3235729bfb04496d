"""
Board module for Minesweeper game.

Implements the game board with mine placement, adjacency counting,
cell revealing, flagging and game state management.
"""
import logging
import random
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from numbers import Integral
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell
from .errors import InvalidConfig

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Lifecycle stages of a single board."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    ENDED = auto()


class GameResult(Enum):
    """How an ended game finished."""

    WON = auto()
    LOST = auto()


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 8
    cols: int = 8
    num_mines: int = 12

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfig("Board dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidConfig("Number of mines cannot be negative")
        max_mines = self.total_cells - 1
        if self.num_mines > max_mines:
            raise InvalidConfig(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


# Preset difficulty levels
DEFAULT = BoardConfig(8, 8, 12)
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)

DIFFICULTIES = {
    "default": DEFAULT,
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


def local_now() -> datetime:
    """Current local time with its zone attached."""
    return datetime.now().astimezone()


# ============================================================================
# Action Results
# ============================================================================

@dataclass(frozen=True)
class RevealedCell:
    """A cell exposed by a reveal, with the count to display on it."""

    id: int
    adjacent_mines: int


@dataclass(frozen=True)
class RevealResult:
    """
    Outcome of a reveal action.

    Attributes:
        state: Game state after the action.
        result: WON or LOST once the game has ended, else None.
        revealed: Safe cells exposed by this action.
        mine_cells: Every mine id when this action lost the game.
        changed: Whether the action had any effect on the board.
    """

    state: GameState
    result: Optional[GameResult] = None
    revealed: Tuple[RevealedCell, ...] = ()
    mine_cells: Tuple[int, ...] = ()
    changed: bool = False


@dataclass(frozen=True)
class FlagResult:
    """Outcome of a flag toggle."""

    state: GameState
    flagged: bool
    won: bool = False
    changed: bool = False


@dataclass(frozen=True)
class ClockSnapshot:
    """Consistent view of the fields a clock display reads."""

    state: GameState
    start_time: Optional[datetime]
    end_time: Optional[datetime]


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Cells are stored row-major, so the cell at (row, col) has id
    ``row * cols + col``. A board is played once; restarting means
    building a new one with :func:`new_game`.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    clock: Callable[[], datetime] = field(
        default_factory=lambda: local_now, repr=False
    )
    cells: List[Cell] = field(init=False, repr=False)
    _state: GameState = field(default=GameState.NOT_STARTED, init=False)
    _result: Optional[GameResult] = field(default=None, init=False)
    _start_time: Optional[datetime] = field(default=None, init=False)
    _end_time: Optional[datetime] = field(default=None, init=False)
    _mines_placed: bool = field(default=False, init=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self.cells = [Cell(id=cell_id) for cell_id in range(self.total_cells)]

    def place_mines(self, positions: Optional[Iterable[int]] = None) -> None:
        """
        Place the configured number of mines.

        Args:
            positions: Fixed mine ids to use instead of a random draw.
                Must hold exactly ``num_mines`` distinct, in-range ids.

        Raises:
            InvalidConfig: If ``positions`` does not describe a valid layout.
            RuntimeError: If mines were already placed on this board.
        """
        if self._mines_placed:
            raise RuntimeError("Mines already placed on this board")

        if positions is None:
            mine_ids = self.rng.sample(
                range(self.total_cells), self.config.num_mines
            )
        else:
            mine_ids = self._validate_positions(positions)

        for cell_id in mine_ids:
            self.cells[cell_id].is_mine = True
        self._mines_placed = True
        logger.debug("Mine ids: %s", " ".join(map(str, sorted(mine_ids))))

    def _validate_positions(self, positions: Iterable[int]) -> List[int]:
        """Check an explicit mine layout against the configuration."""
        mine_ids = list(positions)
        if len(set(mine_ids)) != len(mine_ids):
            raise InvalidConfig("Mine positions must be distinct")
        if len(mine_ids) != self.config.num_mines:
            raise InvalidConfig(
                f"Expected {self.config.num_mines} mine positions, "
                f"got {len(mine_ids)}"
            )
        for cell_id in mine_ids:
            if isinstance(cell_id, bool) or not isinstance(cell_id, Integral):
                raise InvalidConfig(f"Mine position {cell_id!r} is not an integer")
            if not self._is_valid_id(cell_id):
                raise InvalidConfig(f"Mine position {cell_id} is off the board")
        return [int(cell_id) for cell_id in mine_ids]

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, cell_id: int) -> List[int]:
        """
        Get ids of the cells surrounding a cell.

        Neighbors never wrap around a row or column edge, so a corner
        cell has 3 neighbors, an edge cell 5 and an interior cell 8.

        Args:
            cell_id: Id of center cell.

        Returns:
            List of neighbor ids in row-major order.
        """
        self._check_id(cell_id)
        row, col = divmod(cell_id, self.cols)
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append(new_row * self.cols + new_col)
        return neighbors

    def count_adjacent_mines(self, cell_id: int) -> int:
        """Count mines among the neighbors of a cell."""
        return sum(
            1 for neighbor in self.neighbors(cell_id)
            if self.cells[neighbor].is_mine
        )

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _is_valid_id(self, cell_id: int) -> bool:
        return 0 <= cell_id < self.total_cells

    def _check_id(self, cell_id: int) -> None:
        if not self._is_valid_id(cell_id):
            raise IndexError(
                f"Cell id {cell_id} out of range for "
                f"{self.rows}x{self.cols} board"
            )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, cell_id: int) -> RevealResult:
        """
        Reveal the cell with the given id.

        Only the chosen cell is exposed; cells with no adjacent mines do
        not open their neighbors. Revealing a mine loses the game.

        Args:
            cell_id: Id of the cell to reveal.

        Returns:
            RevealResult describing what changed. Flagged or already
            revealed cells, and ended games, give an empty result.

        Raises:
            IndexError: If the id is not on the board.
        """
        self._check_id(cell_id)
        cell = self.cells[cell_id]
        if self.is_ended or cell.is_flagged or cell.is_revealed:
            return self._unchanged_reveal()

        self._start_if_needed()

        if cell.is_mine:
            logger.debug("Revealed mine at cell %d", cell_id)
            cell.is_revealed = True
            self.end_game(GameResult.LOST)
            return RevealResult(
                state=self.state,
                result=self.result,
                mine_cells=tuple(self.mine_ids),
                changed=True,
            )

        cell.reveal()
        cell.adjacent_mines = self.count_adjacent_mines(cell_id)
        logger.debug(
            "Revealed cell %d (%d adjacent mines)",
            cell_id, cell.adjacent_mines,
        )
        return RevealResult(
            state=self.state,
            revealed=(RevealedCell(cell_id, cell.adjacent_mines),),
            changed=True,
        )

    def _unchanged_reveal(self) -> RevealResult:
        return RevealResult(state=self.state, result=self.result)

    def toggle_flag(self, cell_id: int) -> FlagResult:
        """
        Toggle flag on a cell.

        Flagging the last unflagged mine wins the game, even when safe
        cells are still hidden.

        Args:
            cell_id: Id of the cell.

        Returns:
            FlagResult with the new flag value and whether it won.

        Raises:
            IndexError: If the id is not on the board.
        """
        self._check_id(cell_id)
        cell = self.cells[cell_id]
        if self.is_ended or not cell.toggle_flag():
            return FlagResult(state=self.state, flagged=cell.is_flagged)

        self._start_if_needed()
        logger.debug(
            "%s cell %d", "Flagged" if cell.is_flagged else "Unflagged",
            cell_id,
        )

        won = False
        if cell.is_flagged and self._mines_placed and self.unflagged_mines == 0:
            self.end_game(GameResult.WON)
            won = True
        return FlagResult(
            state=self.state, flagged=cell.is_flagged, won=won, changed=True
        )

    def end_game(self, result: GameResult) -> None:
        """
        End the game with the given result.

        On a loss every mine is exposed; flagged mines keep their flag so
        they can be drawn differently. A win exposes nothing. Calling this
        on an ended board does nothing.
        """
        with self._lock:
            if self._state == GameState.ENDED:
                return
            self._state = GameState.ENDED
            self._result = result
            self._end_time = self.clock()

        if result == GameResult.LOST:
            for cell_id in self.mine_ids:
                self.cells[cell_id].is_revealed = True
        logger.info("Game ended: %s", result.name.lower())

    def _start_if_needed(self) -> None:
        """Move a fresh board into play on its first interaction."""
        with self._lock:
            if self._state == GameState.NOT_STARTED:
                self._state = GameState.IN_PROGRESS
                self._start_time = self.clock()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def total_cells(self) -> int:
        return self.config.total_cells

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def result(self) -> Optional[GameResult]:
        """Get how the game ended, or None while it is not over."""
        return self._result

    @property
    def start_time(self) -> Optional[datetime]:
        return self._start_time

    @property
    def end_time(self) -> Optional[datetime]:
        return self._end_time

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def is_ended(self) -> bool:
        """Check if the game is over."""
        return self._state == GameState.ENDED

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._result == GameResult.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._result == GameResult.LOST

    @property
    def mine_ids(self) -> List[int]:
        """Ids of all mine cells in ascending order."""
        return [cell.id for cell in self.cells if cell.is_mine]

    @property
    def unflagged_mines(self) -> int:
        """Number of mines the player has not flagged yet."""
        return sum(
            1 for cell in self.cells if cell.is_mine and not cell.is_flagged
        )

    @property
    def flags_used(self) -> int:
        return sum(1 for cell in self.cells if cell.is_flagged)

    @property
    def mines_remaining(self) -> int:
        """Mine counter as shown to the player: mines minus flags."""
        return self.config.num_mines - self.flags_used

    def get_cell(self, cell_id: int) -> Cell:
        """Get cell by id."""
        self._check_id(cell_id)
        return self.cells[cell_id]

    def cell_id(self, row: int, col: int) -> int:
        """Convert (row, col) position to a cell id."""
        if not self._is_valid_position(row, col):
            raise IndexError(
                f"Position ({row}, {col}) out of range for "
                f"{self.rows}x{self.cols} board"
            )
        return row * self.cols + col

    def snapshot(self) -> ClockSnapshot:
        """Read state and timing fields together for a clock display."""
        with self._lock:
            return ClockSnapshot(
                state=self._state,
                start_time=self._start_time,
                end_time=self._end_time,
            )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = exposed mine
                10 = exposed mine that was flagged
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for cell in self.cells:
            row, col = cell.position(self.cols)
            obs[row, col] = cell.to_observation()
        return obs


# ============================================================================
# Game Setup
# ============================================================================

def new_game(
    config: Optional[BoardConfig] = None,
    rng: Optional[random.Random] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> Board:
    """
    Build a board and place its mines, ready for the first move.

    Restarting a game is calling this again and dropping the old board.
    """
    board = Board(
        config=config or BoardConfig(),
        rng=rng or random.Random(),
        clock=clock or local_now,
    )
    board.place_mines()
    return board

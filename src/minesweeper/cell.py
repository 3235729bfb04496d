"""
Cell module for Minesweeper game.

Represents individual grid positions: whether they hold a mine and
whether the player has revealed or flagged them.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Visual state of a cell as a presentation layer would draw it."""

    HIDDEN = auto()
    FLAGGED = auto()
    REVEALED = auto()
    MINE = auto()
    FLAGGED_MINE = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        id: Row-major index of the cell, fixed at creation.
        is_mine: Whether this cell contains a mine.
        is_revealed: Whether the player has exposed this cell.
        is_flagged: Whether the player has marked this cell.
        adjacent_mines: Count of mines in neighboring cells (0-8),
            filled in when the cell is revealed.
    """

    id: int = 0
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0

    def __setattr__(self, name: str, value: object) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Cell id cannot be changed")
        super().__setattr__(name, value)

    def position(self, cols: int) -> Tuple[int, int]:
        """Return (row, col) of this cell on a grid `cols` wide."""
        return divmod(self.id, cols)

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was revealed, False if it was already revealed
            or is flagged.
        """
        if self.is_revealed or self.is_flagged:
            return False
        self.is_revealed = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.is_revealed:
            return False
        self.is_flagged = not self.is_flagged
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return not self.is_revealed and not self.is_flagged

    @property
    def state(self) -> CellState:
        """Derive the visual state from the cell flags."""
        if self.is_revealed and self.is_mine:
            return CellState.FLAGGED_MINE if self.is_flagged else CellState.MINE
        if self.is_flagged:
            return CellState.FLAGGED
        if self.is_revealed:
            return CellState.REVEALED
        return CellState.HIDDEN

    def to_observation(self) -> int:
        """
        Convert cell to a compact integer code.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Exposed mine
            10: Exposed mine that had been flagged
        """
        state = self.state
        if state == CellState.HIDDEN:
            return -1
        if state == CellState.FLAGGED:
            return -2
        if state == CellState.MINE:
            return 9
        if state == CellState.FLAGGED_MINE:
            return 10
        return self.adjacent_mines

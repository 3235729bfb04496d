"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell


# ============================================================================
# Clock Fixtures
# ============================================================================

class FakeClock:
    """Manually advanced clock standing in for datetime.now."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock starting at a fixed instant."""
    return FakeClock(datetime(2024, 1, 2, 15, 4, 5))


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 8x8 board with 12 mines, not yet placed."""
    return Board()


@pytest.fixture
def seeded_board() -> Board:
    """Create a default board with mines placed from a fixed seed."""
    board = Board(rng=random.Random(1234))
    board.place_mines()
    return board


@pytest.fixture
def two_mine_board(fake_clock: FakeClock) -> Board:
    """8x8 board with mines at ids 0 and 9."""
    board = Board(BoardConfig(8, 8, 2), clock=fake_clock)
    board.place_mines([0, 9])
    return board


@pytest.fixture
def small_board(fake_clock: FakeClock) -> Board:
    """3x3 board with a single mine in the center."""
    board = Board(BoardConfig(3, 3, 1), clock=fake_clock)
    board.place_mines([4])
    return board


@pytest.fixture
def empty_board() -> Board:
    """5x5 board with no mines."""
    board = Board(BoardConfig(5, 5, 0))
    board.place_mines()
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(id=7)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(id=3, is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(8, 8, 12)

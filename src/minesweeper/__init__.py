"""
Minesweeper game module.

Provides the board model (mine placement, adjacency counts, reveal,
flagging and win/loss) plus a clock display and a terminal front end.
"""
from .cell import Cell, CellState
from .errors import InvalidConfig
from .board import (
    Board,
    BoardConfig,
    ClockSnapshot,
    FlagResult,
    GameResult,
    GameState,
    RevealedCell,
    RevealResult,
    new_game,
    local_now,
    DEFAULT,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
)
from .clock import clock_display, format_elapsed, format_wall_clock
from .console import ConsoleGame, render_board

__all__ = [
    "Cell",
    "CellState",
    "InvalidConfig",
    "Board",
    "BoardConfig",
    "ClockSnapshot",
    "FlagResult",
    "GameResult",
    "GameState",
    "RevealedCell",
    "RevealResult",
    "new_game",
    "local_now",
    "DEFAULT",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "clock_display",
    "format_elapsed",
    "format_wall_clock",
    "ConsoleGame",
    "render_board",
]

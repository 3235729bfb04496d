"""
Terminal front end for the Minesweeper board.

Draws the board as text and turns typed commands into board actions.
The board itself knows nothing about how it is displayed.
"""
import logging
import random
import sys
from datetime import datetime
from typing import Callable, List, Optional, TextIO

from .board import Board, BoardConfig, GameResult, local_now, new_game
from .clock import clock_display

logger = logging.getLogger(__name__)


# Observation code -> glyph
GLYPHS = {
    -1: ".",
    -2: "F",
    0: " ",
    9: "*",
    10: "#",
}

HELP = """Commands:
  r ID | r ROW COL   reveal a cell
  f ID | f ROW COL   flag or unflag a cell
  n                  start a new game
  h                  show this help
  q                  quit"""


def render_board(board: Board) -> str:
    """Render board as text with row and column headers."""
    obs = board.get_observation()
    cell_width = len(str(board.cols - 1))
    label_width = len(str(board.rows - 1))

    header = " " * label_width + " " + " ".join(
        str(col).rjust(cell_width) for col in range(board.cols)
    )
    lines = [header]
    for row in range(board.rows):
        glyphs = [
            GLYPHS.get(int(value), str(value)).rjust(cell_width)
            for value in obs[row]
        ]
        lines.append(str(row).rjust(label_width) + " " + " ".join(glyphs))
    return "\n".join(lines)


def status_line(board: Board) -> str:
    """Describe the mine counter or the final result."""
    if board.result == GameResult.WON:
        return "All mines flagged. You won!"
    if board.result == GameResult.LOST:
        return "Boom! You hit a mine."
    return f"Mines left: {board.mines_remaining}"


class ConsoleGame:
    """
    Interactive game loop reading commands from a text stream.

    A new board is built on every restart; the previous one is dropped.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.config = config or BoardConfig()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.rng = rng or random.Random()
        self.clock = clock or local_now
        self.board = self.restart()

    def restart(self) -> Board:
        """Replace the current board with a freshly mined one."""
        self.board = new_game(self.config, rng=self.rng, clock=self.clock)
        logger.info(
            "New %dx%d game with %d mines",
            self.config.rows, self.config.cols, self.config.num_mines,
        )
        return self.board

    def render(self) -> str:
        """Clock, board and status as one block of text."""
        return "\n".join([
            clock_display(self.board, self.clock()),
            render_board(self.board),
            status_line(self.board),
        ])

    def write(self, text: str) -> None:
        self.stdout.write(text + "\n")

    def handle(self, line: str) -> bool:
        """
        Apply one command line.

        Returns:
            False when the player asked to quit, True otherwise.
        """
        tokens = line.split()
        if not tokens:
            return True

        command, args = tokens[0].lower(), tokens[1:]
        if command in ("q", "quit"):
            return False
        if command in ("h", "help"):
            self.write(HELP)
        elif command in ("n", "new", "restart"):
            self.restart()
        elif command in ("r", "reveal", "f", "flag"):
            try:
                cell_id = self._parse_target(args)
                if command.startswith("r"):
                    self.board.reveal(cell_id)
                else:
                    self.board.toggle_flag(cell_id)
            except (ValueError, IndexError) as exc:
                self.write(f"Invalid move: {exc}")
        else:
            self.write(f"Unknown command: {command} (h for help)")
        return True

    def _parse_target(self, args: List[str]) -> int:
        """Turn ``ID`` or ``ROW COL`` arguments into a cell id."""
        if len(args) == 1:
            return int(args[0])
        if len(args) == 2:
            return self.board.cell_id(int(args[0]), int(args[1]))
        raise ValueError("expected ID or ROW COL")

    def run(self) -> None:
        """Play until the player quits or input runs out."""
        self.write(self.render())
        for line in self.stdin:
            if not self.handle(line):
                break
            self.write(self.render())
        self.write("Exiting.")

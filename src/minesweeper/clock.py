"""
Clock text for a periodic timer display.

Before the first move the display shows the wall clock; during play it
shows time since the first move; after the game it stays frozen at the
final time. Everything here only reads board state.
"""
from datetime import datetime, timedelta
from typing import Union

from .board import Board, ClockSnapshot, GameState


def format_wall_clock(now: datetime) -> str:
    """Format a time like ``Mon Jan  2 15:04:05 MST 2006``."""
    parts = [f"{now:%a %b} {now.day:>2} {now:%H:%M:%S}"]
    zone = now.strftime("%Z")
    if zone:
        parts.append(zone)
    parts.append(str(now.year))
    return " ".join(parts)


def format_elapsed(elapsed: timedelta) -> str:
    """
    Format a duration truncated to whole seconds.

    Examples: ``0s``, ``45s``, ``2m5s``, ``1h0m3s``.
    """
    seconds = max(int(elapsed.total_seconds()), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{minutes}m{seconds}s"
    return f"{seconds}s"


def clock_display(source: Union[Board, ClockSnapshot], now: datetime) -> str:
    """
    Text for the timer label at time ``now``.

    Args:
        source: A board, or a snapshot already taken from one.
        now: Current time, from the same clock the board uses.

    Returns:
        Wall clock before the game starts, elapsed time afterwards.
    """
    snapshot = source.snapshot() if isinstance(source, Board) else source

    if snapshot.state == GameState.NOT_STARTED or snapshot.start_time is None:
        return format_wall_clock(now)
    if snapshot.state == GameState.ENDED and snapshot.end_time is not None:
        return format_elapsed(snapshot.end_time - snapshot.start_time)
    return format_elapsed(now - snapshot.start_time)

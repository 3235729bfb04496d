"""
Error types for the Minesweeper board model.

Out-of-range cell ids raise the built-in IndexError.
"""


class InvalidConfig(ValueError):
    """Raised when board dimensions or mine layout are not playable."""

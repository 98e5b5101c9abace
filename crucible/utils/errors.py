# IN THIS FILE: EXCEPTIONS RAISED BY THE LOADER AND THE SEARCH

from typing import Optional


class CrucibleError(Exception):
    """Base class for every error the package raises on purpose"""
    pass


class GridParseError(CrucibleError, ValueError):
    """
    Grid text is malformed (non-digit character, ragged or missing rows).
    `row` / `column` are zero-based; `column` is None for whole-row problems.
    """

    def __init__(self, message: str, row: int, column: Optional[int] = None, char: Optional[str] = None):
        self.row = row
        self.column = column
        self.char = char
        if column is None:
            location = f"row {row}"
        else:
            location = f"row {row}, column {column}"
        super().__init__(f"{message} ({location})")


class NoSolutionError(CrucibleError):
    """No accepting state at the destination is reachable under the policy"""

    def __init__(self, destination, policy):
        self.destination = destination
        self.policy = policy
        super().__init__(f"no path to {destination} satisfies {policy}")

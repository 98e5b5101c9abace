# crucible/entities/grid.py

from typing import List, Optional, Sequence, Union

import numpy as np
from loguru import logger

from crucible.utils.errors import GridParseError
from crucible.utils.types import Coordinate


class CostGrid:
    """
    Rectangular, read-only grid of non-negative cell entry costs.
    costs[y, x] is what it costs to step INTO cell (x, y).
    """

    def __init__(self, costs: Union[np.ndarray, Sequence[Sequence[int]]]):
        try:
            raw = np.asarray(costs)
        except ValueError as e:
            # ragged nested lists end up here
            raise ValueError(f"costs must be a rectangular 2-D array of integers: {e}") from e

        # whole-number floats are fine, anything else would be silently truncated
        if np.issubdtype(raw.dtype, np.floating):
            whole = np.isfinite(raw) & (raw == np.floor(raw)) & (np.abs(raw) < 2.0 ** 63)
            if not whole.all():
                raise ValueError("costs must be whole numbers")
        elif not np.issubdtype(raw.dtype, np.integer):
            raise ValueError(f"costs must be integers, got {raw.dtype}")
        try:
            array = raw.astype(np.int64)
        except OverflowError as e:
            raise ValueError(f"costs do not fit in 64 bits: {e}") from e

        if array.ndim != 2 or array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError(f"costs must be a non-empty 2-D array, got shape {array.shape}")
        if (array < 0).any():
            raise ValueError("costs must be non-negative")

        array.setflags(write=False)
        self.costs = array
        self.height, self.width = array.shape

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str) -> 'CostGrid':
        """Parse a block of digit rows separated by line breaks. Only blank lines around it are dropped."""
        return cls.from_rows(text.strip("\r\n").splitlines())

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'CostGrid':
        """
        Parse already-split digit rows.

        Raises:
            GridParseError: empty input, a non-digit character, or a row
                whose length differs from the first row.
        """
        if not rows or not rows[0]:
            raise GridParseError("grid is empty", row=0)

        width = len(rows[0])
        parsed: List[List[int]] = []
        for y, line in enumerate(rows):
            if len(line) != width:
                raise GridParseError(
                    f"ragged row: expected {width} cells, found {len(line)}", row=y
                )
            row = []
            for x, ch in enumerate(line):
                # str.isdigit() also accepts non-ASCII digits like '²'
                if ch not in "0123456789":
                    raise GridParseError(f"invalid cost character {ch!r}", row=y, column=x, char=ch)
                row.append(ord(ch) - ord("0"))
            parsed.append(row)

        logger.debug(f"Loaded {width}x{len(parsed)} cost grid")
        return cls(parsed)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def __contains__(self, c: Coordinate) -> bool:
        return 0 <= c.x < self.width and 0 <= c.y < self.height

    def cost(self, c: Coordinate) -> Optional[int]:
        """Cost of entering `c`, or None when `c` is off the grid."""
        if c not in self:
            return None
        return int(self.costs[c.y, c.x])

    def origin(self) -> Coordinate:
        return Coordinate(0, 0)

    def destination(self) -> Coordinate:
        """Bottom-right cell."""
        return Coordinate(self.width - 1, self.height - 1)

    def rows(self) -> List[List[int]]:
        return self.costs.tolist()

    def __repr__(self) -> str:
        return f"CostGrid(width={self.width}, height={self.height})"

"""Shared constants and enumerations for the shared crossword core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    @property
    def other(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS


class Axis(str, Enum):
    """Cell visitation orders used by arrow movement."""

    ROW_MAJOR = "row_major"
    COLUMN_MAJOR = "column_major"


class CellKind(str, Enum):
    """All supported cell kinds in a rendered layout."""

    BLACK = "BLACK"
    WHITE = "WHITE"


# Unit step along each direction's axis, as (row, col) deltas.
DIRECTION_STEPS: Dict[Direction, Tuple[int, int]] = {
    Direction.ACROSS: (0, 1),
    Direction.DOWN: (1, 0),
}


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

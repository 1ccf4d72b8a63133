"""Grid layout derived from clue metadata, plus the cell traversal orders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from ..core.constants import Axis, Bounds, CellKind, Direction, DIRECTION_STEPS
from ..core.exceptions import PuzzleConfigError
from ..core.models import Coord, Puzzle
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class LayoutCell:
    """One cell of the rendered grid image."""

    kind: CellKind = CellKind.BLACK
    number: Optional[int] = None

    @property
    def is_white(self) -> bool:
        return self.kind == CellKind.WHITE


BLACK_CELL = LayoutCell()


class GridLayout:
    """Black/white/numbered image of a puzzle, computed once per puzzle load."""

    def __init__(self, puzzle: Puzzle) -> None:
        self.puzzle = puzzle
        self.bounds = Bounds(rows=puzzle.height, cols=puzzle.width)
        self._cells: List[List[LayoutCell]] = self._build(puzzle)
        self._orders: Dict[Axis, Tuple[Coord, ...]] = {
            axis: tuple(self._scan(axis)) for axis in Axis
        }
        self._positions: Dict[Axis, Dict[Coord, int]] = {
            axis: {coord: index for index, coord in enumerate(order)}
            for axis, order in self._orders.items()
        }
        LOGGER.debug(
            "Built %sx%s layout with %s white cells",
            self.bounds.rows,
            self.bounds.cols,
            self.white_count,
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def _build(self, puzzle: Puzzle) -> List[List[LayoutCell]]:
        if puzzle.width <= 0 or puzzle.height <= 0:
            raise PuzzleConfigError(
                f"Grid dimensions must be positive, got {puzzle.height}x{puzzle.width}"
            )
        cells = [[BLACK_CELL for _ in range(puzzle.width)] for _ in range(puzzle.height)]

        for direction in Direction:
            clue_set = puzzle.clues(direction)
            missing = [number for number in clue_set.order if number not in clue_set.by_number]
            if missing:
                raise PuzzleConfigError(
                    f"{direction.value} order references unknown clues {missing}"
                )
            dr, dc = DIRECTION_STEPS[direction]
            for number, entry in clue_set.by_number.items():
                if entry.size <= 0:
                    raise PuzzleConfigError(
                        f"{direction.value} clue {number} has non-positive size {entry.size}"
                    )
                end_row = entry.row + dr * (entry.size - 1)
                end_col = entry.col + dc * (entry.size - 1)
                if not (
                    self.bounds.contains(entry.row, entry.col)
                    and self.bounds.contains(end_row, end_col)
                ):
                    raise PuzzleConfigError(
                        f"{direction.value} clue {number} spans outside the grid: "
                        f"({entry.row},{entry.col}) size {entry.size}"
                    )
                for index in range(entry.size):
                    r, c = entry.row + dr * index, entry.col + dc * index
                    if not cells[r][c].is_white:
                        cells[r][c] = LayoutCell(kind=CellKind.WHITE)
                existing = cells[entry.row][entry.col].number
                if existing is not None and existing != number:
                    raise PuzzleConfigError(
                        f"Cell ({entry.row},{entry.col}) starts clues numbered "
                        f"{existing} and {number}"
                    )
                cells[entry.row][entry.col] = LayoutCell(kind=CellKind.WHITE, number=number)
        return cells

    def _scan(self, axis: Axis) -> Iterator[Coord]:
        """Yield white cells in row-major or column-major order."""

        outer, inner = self.bounds.rows, self.bounds.cols
        if axis == Axis.COLUMN_MAJOR:
            outer, inner = inner, outer
        for i in range(outer):
            for j in range(inner):
                row, col = (i, j) if axis == Axis.ROW_MAJOR else (j, i)
                if self._cells[row][col].is_white:
                    yield row, col

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> LayoutCell:
        if not self.bounds.contains(row, col):
            return BLACK_CELL
        return self._cells[row][col]

    def is_white(self, row: int, col: int) -> bool:
        return self.cell(row, col).is_white

    @property
    def rows(self) -> Tuple[Tuple[LayoutCell, ...], ...]:
        return tuple(tuple(row) for row in self._cells)

    @property
    def white_count(self) -> int:
        return len(self._orders[Axis.ROW_MAJOR])

    def traversal(self, axis: Axis) -> Tuple[Coord, ...]:
        return self._orders[axis]

    def step(self, cell: Coord, axis: Axis, delta: int) -> Optional[Coord]:
        """Return the white cell ``delta`` places from ``cell``, wrapping around.

        ``cell`` itself need not be white; the search then starts from where it
        would sit in the traversal order.
        """

        order = self._orders[axis]
        if not order:
            return None
        position = self._positions[axis].get(cell)
        if position is None:
            key = _order_key(cell, axis)
            position = sum(1 for coord in order if _order_key(coord, axis) < key)
            if delta > 0:
                position -= 1
        return order[(position + delta) % len(order)]


def _order_key(cell: Coord, axis: Axis) -> Coord:
    row, col = cell
    return (row, col) if axis == Axis.ROW_MAJOR else (col, row)


def build_layout(puzzle: Puzzle) -> GridLayout:
    """Build the layout for ``puzzle``, raising :class:`PuzzleConfigError` on bad data."""

    return GridLayout(puzzle)

"""Translation between grid coordinates and (clue, offset) cursor space."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..core.constants import Direction, DIRECTION_STEPS
from ..core.models import Coord, Puzzle


def word_at(puzzle: Puzzle, cell: Coord, direction: Direction) -> Optional[Tuple[int, int]]:
    """Return ``(clue_number, offset)`` of the ``direction`` word covering ``cell``."""

    row, col = cell
    dr, dc = DIRECTION_STEPS[direction]
    for number, entry in puzzle.clues(direction).by_number.items():
        offset = (row - entry.row) if dr else (col - entry.col)
        if 0 <= offset < entry.size and (entry.row + dr * offset, entry.col + dc * offset) == cell:
            return number, offset
    return None


def words_at(puzzle: Puzzle, cell: Coord) -> Dict[Direction, Tuple[int, int]]:
    """Map each direction with a word covering ``cell`` to its ``(clue_number, offset)``."""

    found: Dict[Direction, Tuple[int, int]] = {}
    for direction in Direction:
        word = word_at(puzzle, cell, direction)
        if word is not None:
            found[direction] = word
    return found


def cell_of(puzzle: Puzzle, direction: Direction, clue_number: int, char: int) -> Coord:
    """Return the grid cell holding character ``char`` of the given clue."""

    entry = puzzle.clues(direction).by_number[clue_number]
    dr, dc = DIRECTION_STEPS[direction]
    return entry.row + dr * char, entry.col + dc * char

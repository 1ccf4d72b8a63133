"""Data models shared by the navigation engine and the replication layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

from .constants import Direction


LettersGrid = Tuple[Tuple[str, ...], ...]
Coord = Tuple[int, int]


@dataclass(frozen=True)
class ClueEntry:
    """A single clue and the span of cells its answer occupies."""

    clue: str
    size: int
    row: int
    col: int
    word_arrangement: str = ""

    @property
    def arrangement(self) -> str:
        return self.word_arrangement or str(self.size)


@dataclass(frozen=True)
class ClueSet:
    """Clues for one direction, in display order."""

    order: Tuple[int, ...] = ()
    by_number: Dict[int, ClueEntry] = field(default_factory=dict)

    def get(self, number: int) -> Optional[ClueEntry]:
        return self.by_number.get(number)

    def entries(self) -> Iterator[Tuple[int, ClueEntry]]:
        for number in self.order:
            entry = self.by_number.get(number)
            if entry is not None:
                yield number, entry

    def next_number(self, number: int) -> Optional[int]:
        """Return the clue number following ``number`` in ``order``, if any."""

        try:
            index = self.order.index(number)
        except ValueError:
            return None
        if index + 1 < len(self.order):
            return self.order[index + 1]
        return None


@dataclass(frozen=True)
class Puzzle:
    """Immutable puzzle structure supplied by the puzzle source."""

    width: int
    height: int
    across: ClueSet
    down: ClueSet

    def clues(self, direction: Direction) -> ClueSet:
        return self.across if direction == Direction.ACROSS else self.down


@dataclass(frozen=True)
class Cursor:
    """The selected character slot: direction, clue number and offset."""

    direction: Direction
    clue_number: int
    char: int


@dataclass(frozen=True)
class LetterChange:
    """A single-cell letter edit. An empty letter clears the cell."""

    row: int
    col: int
    letter: str


@dataclass(frozen=True)
class Action:
    """The replicated unit: a player's resulting cursor and an optional letter edit."""

    player_id: str
    cursor: Optional[Cursor]
    set_letter: Optional[LetterChange] = None


@dataclass(frozen=True)
class SessionState:
    """One participant's copy of the shared session."""

    cursors: Dict[str, Optional[Cursor]] = field(default_factory=dict)
    letters: LettersGrid = ()
    puzzle: Optional[Puzzle] = None
    is_complete: bool = False

    @classmethod
    def uninitialized(cls) -> "SessionState":
        return cls()

    @classmethod
    def for_puzzle(cls, puzzle: Puzzle) -> "SessionState":
        return cls(letters=blank_letters(puzzle.height, puzzle.width), puzzle=puzzle)

    @property
    def is_initialized(self) -> bool:
        return self.puzzle is not None

    def cursor_of(self, player_id: str) -> Optional[Cursor]:
        return self.cursors.get(player_id)


def blank_letters(height: int, width: int) -> LettersGrid:
    return tuple(tuple("" for _ in range(width)) for _ in range(height))


def normalize_letters(rows: Iterable[Sequence[str]], height: int, width: int) -> LettersGrid:
    """Pad or crop ragged rows into a full ``height`` x ``width`` grid.

    Snapshots on the wire may omit trailing blanks (``[["W"], [], []]``), so
    missing cells are treated as blank.
    """

    materialized = [list(row) for row in rows]
    grid = []
    for r in range(height):
        source = materialized[r] if r < len(materialized) else []
        grid.append(
            tuple((source[c] or "") if c < len(source) else "" for c in range(width))
        )
    return tuple(grid)


def with_letter(letters: LettersGrid, row: int, col: int, letter: str) -> LettersGrid:
    """Return a copy of ``letters`` with exactly one cell replaced."""

    target = list(letters[row])
    target[col] = letter
    return letters[:row] + (tuple(target),) + letters[row + 1:]

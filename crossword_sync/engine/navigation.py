"""Grid navigation & editing state machine.

Every transition is a pure function of ``(letters, cursor, intent)``. The
result is turned into an :class:`~crossword_sync.core.models.Action`, and the
action (not the intent) is what gets applied locally and on every other
participant, so all copies replay identical values.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union

from ..core.constants import Axis
from ..core.models import Action, Coord, Cursor, LetterChange, LettersGrid, Puzzle, SessionState
from ..utils.logger import get_logger
from .cursor import resolve_cursor, toggle_cursor
from .layout import GridLayout
from .words import cell_of


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Click:
    row: int
    col: int


@dataclass(frozen=True)
class Move:
    """Step to the next (``delta=1``) or previous (``delta=-1``) white cell."""

    axis: Axis
    delta: int


@dataclass(frozen=True)
class TypeLetter:
    letter: str


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class Blur:
    pass


Intent = Union[Click, Move, TypeLetter, Delete, Backspace, Blur]


@dataclass(frozen=True)
class NavigationResult:
    cursor: Optional[Cursor]
    set_letter: Optional[LetterChange] = None


def navigate(
    puzzle: Puzzle,
    layout: GridLayout,
    letters: LettersGrid,
    cursor: Optional[Cursor],
    intent: Intent,
) -> NavigationResult:
    """Apply one intent to the current cursor and return the resulting edit."""

    current = _current_cell(puzzle, cursor)
    if current is None:
        cursor = None

    if isinstance(intent, Blur):
        return NavigationResult(cursor=None)

    if isinstance(intent, Click):
        cell = (intent.row, intent.col)
        if not layout.is_white(*cell):
            return NavigationResult(cursor=None)
        if cursor is not None and cell == current:
            return NavigationResult(cursor=toggle_cursor(puzzle, cursor))
        previous = cursor.direction if cursor is not None else None
        return NavigationResult(cursor=resolve_cursor(puzzle, layout, cell, previous))

    # Everything below needs a selected cell.
    if cursor is None or current is None:
        return NavigationResult(cursor=cursor)

    if isinstance(intent, Move):
        destination = layout.step(current, intent.axis, intent.delta)
        if destination is None:
            return NavigationResult(cursor=cursor)
        return NavigationResult(
            cursor=resolve_cursor(puzzle, layout, destination, cursor.direction)
        )

    row, col = current
    if isinstance(intent, TypeLetter):
        letter = intent.letter.upper()
        if len(letter) != 1 or letter.isspace():
            return NavigationResult(cursor=cursor)
        return NavigationResult(
            cursor=_advance(puzzle, cursor),
            set_letter=LetterChange(row=row, col=col, letter=letter),
        )

    if isinstance(intent, Delete):
        return NavigationResult(cursor=cursor, set_letter=LetterChange(row=row, col=col, letter=""))

    if isinstance(intent, Backspace):
        # At the first character the cursor stays put.
        moved = replace(cursor, char=cursor.char - 1) if cursor.char > 0 else cursor
        return NavigationResult(cursor=moved, set_letter=LetterChange(row=row, col=col, letter=""))

    LOGGER.warning("Ignoring unknown intent %r", intent)
    return NavigationResult(cursor=cursor)


def to_action(
    state: SessionState,
    layout: GridLayout,
    player_id: str,
    intent: Intent,
) -> Optional[Action]:
    """Run ``intent`` against ``player_id``'s cursor and describe the outcome.

    Returns ``None`` when the intent neither edits a cell nor moves the cursor,
    including intents that make no sense for the current state (typing with no
    cursor, moving on an empty grid).
    """

    if state.puzzle is None:
        return None
    cursor = state.cursor_of(player_id)
    result = navigate(state.puzzle, layout, state.letters, cursor, intent)

    # Edits carry their letter even when the local copy already holds it.
    set_letter = result.set_letter
    if set_letter is None and result.cursor == cursor:
        LOGGER.debug("Intent %r from %s is a no-op", intent, player_id)
        return None
    return Action(player_id=player_id, cursor=result.cursor, set_letter=set_letter)


def _current_cell(puzzle: Puzzle, cursor: Optional[Cursor]) -> Optional[Coord]:
    if cursor is None:
        return None
    entry = puzzle.clues(cursor.direction).get(cursor.clue_number)
    if entry is None or not 0 <= cursor.char < entry.size:
        return None
    return cell_of(puzzle, cursor.direction, cursor.clue_number, cursor.char)


def _advance(puzzle: Puzzle, cursor: Cursor) -> Optional[Cursor]:
    """Move to the next character, then the next clue, deselecting after the last."""

    clue_set = puzzle.clues(cursor.direction)
    entry = clue_set.by_number[cursor.clue_number]
    if cursor.char < entry.size - 1:
        return replace(cursor, char=cursor.char + 1)
    following = clue_set.next_number(cursor.clue_number)
    if following is None:
        return None
    return Cursor(direction=cursor.direction, clue_number=following, char=0)

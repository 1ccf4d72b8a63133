"""Shared crossword navigation and replication core.

This package exposes the public API surface via:

- ``crossword_sync.engine.layout.build_layout``: black/white/numbered grid image.
- ``crossword_sync.engine.navigation``: intents and the navigation state machine.
- ``crossword_sync.engine.replication.Replica``: one participant's session copy.
- ``crossword_sync.engine.relay.LocalRelay``: in-process ordering relay.
"""

from .core.constants import Axis, Direction
from .core.models import Action, ClueEntry, ClueSet, Cursor, LetterChange, Puzzle, SessionState
from .engine.layout import GridLayout, build_layout
from .engine.navigation import Backspace, Blur, Click, Delete, Move, TypeLetter, navigate, to_action
from .engine.relay import LocalRelay
from .engine.replication import Replica, apply_event

__all__ = [
    "Action",
    "Axis",
    "Backspace",
    "Blur",
    "Click",
    "ClueEntry",
    "ClueSet",
    "Cursor",
    "Delete",
    "Direction",
    "GridLayout",
    "LetterChange",
    "LocalRelay",
    "Move",
    "Puzzle",
    "Replica",
    "SessionState",
    "TypeLetter",
    "apply_event",
    "build_layout",
    "navigate",
    "to_action",
]

__version__ = "0.1.0"

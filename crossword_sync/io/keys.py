"""Decode keyboard key names into navigation intents."""

from __future__ import annotations

from typing import Dict, Optional

from ..core.constants import Axis
from ..engine.navigation import Backspace, Blur, Delete, Intent, Move, TypeLetter


KEY_INTENTS: Dict[str, Intent] = {
    "ArrowRight": Move(Axis.ROW_MAJOR, 1),
    "ArrowLeft": Move(Axis.ROW_MAJOR, -1),
    "ArrowDown": Move(Axis.COLUMN_MAJOR, 1),
    "ArrowUp": Move(Axis.COLUMN_MAJOR, -1),
    "Escape": Blur(),
    "Backspace": Backspace(),
    "Delete": Delete(),
}


def intent_for_key(key: str) -> Optional[Intent]:
    """Return the intent for a DOM-style key name, or ``None`` if it is not bound."""

    if key in KEY_INTENTS:
        return KEY_INTENTS[key]
    if len(key) == 1 and "a" <= key.lower() <= "z":
        return TypeLetter(key)
    return None

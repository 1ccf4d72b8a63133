"""Load puzzles from local JSON files or over HTTP."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from ..core.exceptions import PuzzleConfigError, PuzzleLoadError, WireFormatError
from ..core.models import Puzzle
from ..engine.layout import build_layout
from ..utils.logger import get_logger
from .wire import puzzle_from_jsonable


LOGGER = get_logger(__name__)


@dataclass
class PuzzleSourceConfig:
    """Configuration values for fetching puzzles."""

    timeout_seconds: float = 10.0
    url_env: str = "CROSSWORD_PUZZLE_URL"

    def default_location(self) -> Optional[str]:
        return os.environ.get(self.url_env)


def load_puzzle(
    location: Optional[str | Path] = None,
    config: Optional[PuzzleSourceConfig] = None,
) -> Puzzle:
    """Read and validate a puzzle from a path or ``http(s)://`` URL.

    Falls back to the URL named by ``config.url_env`` when no location is
    given. The puzzle's layout is built once here so malformed clue data fails
    at load time rather than on the first keystroke. Every failure surfaces as
    :class:`PuzzleLoadError`, chained to the underlying codec or layout error.
    """

    config = config or PuzzleSourceConfig()
    location = location or config.default_location()
    if not location:
        raise PuzzleLoadError(
            f"No puzzle location given and {config.url_env} is not set"
        )

    text = str(location)
    if text.startswith(("http://", "https://")):
        payload = _fetch(text, config.timeout_seconds)
    else:
        payload = _read(Path(text))

    # Relays wrap the puzzle as ``clues`` inside a snapshot.
    if isinstance(payload, dict) and "clues" in payload and "width" not in payload:
        payload = payload["clues"]
    if not isinstance(payload, dict):
        raise PuzzleLoadError(f"Puzzle payload from {text} is not a JSON object")
    try:
        puzzle = puzzle_from_jsonable(payload)
        build_layout(puzzle)
    except (WireFormatError, PuzzleConfigError) as exc:
        raise PuzzleLoadError(f"Puzzle from {text} is invalid: {exc}") from exc
    LOGGER.info(
        "Loaded %sx%s puzzle from %s (%s across, %s down)",
        puzzle.height,
        puzzle.width,
        text,
        len(puzzle.across.order),
        len(puzzle.down.order),
    )
    return puzzle


def _fetch(url: str, timeout_seconds: float) -> Any:
    try:
        response = requests.get(url, timeout=timeout_seconds)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as exc:
        raise PuzzleLoadError(f"Puzzle request failed: {exc}") from exc
    except ValueError as exc:
        raise PuzzleLoadError(f"Puzzle response from {url} is not JSON: {exc}") from exc


def _read(path: Path) -> Dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise PuzzleLoadError(f"Cannot read puzzle file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise PuzzleLoadError(f"Puzzle file {path} is not valid JSON: {exc}") from exc

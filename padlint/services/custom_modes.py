"""
User-defined language modes.

Custom modes are stored as a JSON list of definitions and are
registered after the built-in languages.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from padlint.core.models import CustomModeError, HighlightPattern, LanguageMode, StyleTag


def _slugify(name: str) -> str:
    return re.sub(r'[^a-z0-9]+', '-', name.strip().lower()).strip('-')


def _string_list(data: dict[str, Any], key: str, name: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise CustomModeError(f"{key!r} of custom mode {name!r} must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


def mode_from_dict(data: dict[str, Any]) -> LanguageMode:
    """
    Build a LanguageMode from a custom mode definition.

    Raises:
        CustomModeError: if the definition is malformed
    """
    if not isinstance(data, dict):
        raise CustomModeError(f"Custom mode must be an object, got {type(data).__name__}")

    name = str(data.get('name', '')).strip()
    if not name:
        raise CustomModeError("Custom mode requires a name")

    mode_id = str(data.get('id') or _slugify(name))
    if not mode_id:
        raise CustomModeError(f"Cannot derive an id for custom mode {name!r}")

    try:
        patterns = tuple(
            HighlightPattern(
                regex=str(entry['pattern']),
                style_tag=StyleTag.from_name(str(entry.get('color_name', 'default'))),
            )
            for entry in data.get('syntax_patterns', [])
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise CustomModeError(f"Invalid syntax pattern in custom mode {name!r}: {e}") from e

    return LanguageMode(
        id=mode_id,
        display_name=name,
        file_extensions=tuple(ext.lstrip('.').lower() for ext in _string_list(data, 'file_extensions', name)),
        line_comment=str(data.get('line_comment', '')),
        block_comment_start=str(data.get('block_comment_start', '')),
        block_comment_end=str(data.get('block_comment_end', '')),
        keywords=frozenset(_string_list(data, 'keywords', name)),
        patterns=patterns,
    )


def mode_to_dict(mode: LanguageMode) -> dict[str, Any]:
    """Convert a LanguageMode to its custom mode definition."""
    return {
        'id': mode.id,
        'name': mode.display_name,
        'file_extensions': list(mode.file_extensions),
        'keywords': sorted(mode.keywords),
        'line_comment': mode.line_comment,
        'block_comment_start': mode.block_comment_start,
        'block_comment_end': mode.block_comment_end,
        'syntax_patterns': [
            {'pattern': p.regex, 'color_name': p.style_tag.value}
            for p in mode.patterns
        ],
    }


class CustomModeStore:
    """Loads and saves user-defined language modes."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._modes: Optional[list[LanguageMode]] = None

    @property
    def modes(self) -> list[LanguageMode]:
        """Current custom modes, loading from disk if needed."""
        if self._modes is None:
            self._modes = self.load()
        return self._modes

    def load(self) -> list[LanguageMode]:
        """Load custom modes; malformed entries are skipped."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logging.error(f"CustomModeStore - Failed to read {self.path}: {e}")
            return []

        if not isinstance(data, list):
            logging.error(f"CustomModeStore - Expected a list of modes in {self.path}")
            return []

        modes: list[LanguageMode] = []
        seen: set[str] = set()
        for entry in data:
            try:
                mode = mode_from_dict(entry)
            except CustomModeError as e:
                logging.warning(f"CustomModeStore - Skipping custom mode: {e}")
                continue
            if mode.id in seen:
                logging.warning(f"CustomModeStore - Skipping duplicate custom mode {mode.id!r}")
                continue
            seen.add(mode.id)
            modes.append(mode)

        return modes

    def save(self) -> bool:
        """Save custom modes to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump([mode_to_dict(m) for m in self.modes], f, indent=2)
            return True
        except OSError as e:
            logging.error(f"CustomModeStore - Failed to save {self.path}: {e}")
            return False

    def add(self, mode: LanguageMode) -> None:
        """Add or replace a custom mode and persist."""
        self._modes = [m for m in self.modes if m.id != mode.id] + [mode]
        self.save()

    def remove(self, mode_id: str) -> bool:
        """Remove a custom mode by id and persist."""
        remaining = [m for m in self.modes if m.id != mode_id]
        if len(remaining) == len(self.modes):
            return False
        self._modes = remaining
        self.save()
        return True

    def mode_for_extension(self, extension: str) -> Optional[LanguageMode]:
        """First custom mode claiming the extension (case-insensitive)."""
        for mode in self.modes:
            if mode.matches_extension(extension):
                return mode
        return None

"""
Keyword and bracket completion.

Suggests closing partners right after an opening trigger
character, and language keywords for a partially typed word.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from padlint.core.models import LanguageMode


CLOSING_PARTNERS: dict[str, str] = {
    "{": "}",
    "(": ")",
    "[": "]",
    "<": ">",
    '"': '"',
    "'": "'",
}

MEMBER_SUGGESTIONS: dict[str, list[str]] = {
    "String": ["count", "isEmpty", "first", "last", "append"],
    "Array": ["count", "isEmpty", "first", "last", "append"],
    "Dictionary": ["count", "isEmpty", "first", "last", "append"],
}

MIN_PREFIX_LENGTH = 2

_TRAILING_WORD = re.compile(r'[^\W_]*$')


@dataclass
class Completion:
    """Suggestions and the text range a chosen one replaces."""
    suggestions: list[str] = field(default_factory=list)
    replace_start: int = 0
    replace_length: int = 0
    is_insertion: bool = False

    def apply(self, suggestion: str) -> tuple[str, int, int]:
        """
        Get (text, start, length) for applying a suggestion.

        Closers are inserted at the cursor as-is; keywords replace
        the typed word and get a trailing space.
        """
        if self.is_insertion:
            return (suggestion, self.replace_start + self.replace_length, 0)
        return (suggestion + " ", self.replace_start, self.replace_length)


def complete(text: str, cursor: int, mode: LanguageMode) -> Optional[Completion]:
    """
    Compute completions for the text before the cursor.

    Returns:
        A Completion, or None when nothing applies
    """
    cursor = max(0, min(cursor, len(text)))
    prefix = text[:cursor]
    if not prefix:
        return None

    last_char = prefix[-1]

    if last_char == ".":
        before_dot = _TRAILING_WORD.search(prefix[:-1]).group()
        members = MEMBER_SUGGESTIONS.get(before_dot)
        if not members:
            return None
        return Completion(list(members), cursor, 0, is_insertion=True)

    if last_char in CLOSING_PARTNERS:
        return Completion([CLOSING_PARTNERS[last_char]], cursor, 0, is_insertion=True)

    word = _TRAILING_WORD.search(prefix).group()
    if len(word) < MIN_PREFIX_LENGTH:
        return None

    suggestions = sorted(k for k in mode.keywords if k.startswith(word))
    if not suggestions:
        return None
    return Completion(suggestions, cursor - len(word), len(word))

"""
Regex-based syntax highlighter.

Provides:
- Style-tag assignment from a language's ordered pattern table
- Gap-free run-length encoded span output
- Per-pattern graceful degradation on invalid regular expressions
- Optional style resolution through a host-supplied resolver
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Any, Callable, Optional, Pattern

from padlint.core.models import HighlightPattern, LanguageMode, StyledSpan, StyleTag


# Host-supplied mapping from a style tag to a concrete visual attribute
StyleResolver = Callable[[StyleTag], Any]


@lru_cache(maxsize=512)
def _compile(regex: str, flags: int) -> Optional[Pattern]:
    """Compile a pattern once; None if it is not a valid expression."""
    try:
        return re.compile(regex, flags)
    except re.error as e:
        logging.warning(f"Highlighter - Skipping invalid pattern {regex!r}: {e}")
        return None


def compile_pattern(pattern: HighlightPattern) -> Optional[Pattern]:
    """Get the compiled regex for a highlight pattern, or None if invalid."""
    return _compile(pattern.regex, pattern.flags)


def assign_tags(text: str, mode: LanguageMode) -> list[Optional[StyleTag]]:
    """
    Compute the style tag of every character in text.

    Patterns are applied in table order; a later match overwrites
    earlier tags. Characters no pattern matched stay None.
    """
    tags: list[Optional[StyleTag]] = [None] * len(text)

    for pattern in mode.patterns:
        compiled = compile_pattern(pattern)
        if compiled is None:
            continue

        for match in compiled.finditer(text):
            start, end = match.span()
            if end > start:
                tags[start:end] = [pattern.style_tag] * (end - start)

    return tags


def encode_spans(
    tags: list[Optional[StyleTag]],
    theme: Optional[StyleResolver] = None
) -> list[StyledSpan]:
    """Run-length encode per-character tags, filling gaps with DEFAULT."""
    spans: list[StyledSpan] = []
    if not tags:
        return spans

    run_start = 0
    run_tag = tags[0] or StyleTag.DEFAULT

    for index in range(1, len(tags) + 1):
        tag = (tags[index] or StyleTag.DEFAULT) if index < len(tags) else None
        if tag is run_tag:
            continue

        style = theme(run_tag) if theme is not None else None
        spans.append(StyledSpan(run_start, index - run_start, run_tag, style))
        run_start = index
        run_tag = tag

    return spans


def highlight(
    text: str,
    mode: LanguageMode,
    theme: Optional[StyleResolver] = None
) -> list[StyledSpan]:
    """
    Highlight text with a language's pattern table.

    Args:
        text: Source text snapshot
        mode: Resolved language mode
        theme: Optional resolver applied to every span's tag

    Returns:
        Spans covering [0, len(text)) with no gaps or overlaps
    """
    if not text:
        return []
    return encode_spans(assign_tags(text, mode), theme)


class Highlighter:
    """
    Highlighter bound to a language and an optional resolver.

    Convenience wrapper for hosts that highlight the same
    language repeatedly.
    """

    def __init__(self, mode: LanguageMode, theme: Optional[StyleResolver] = None):
        self.mode = mode
        self.theme = theme

    def highlight(self, text: str) -> list[StyledSpan]:
        """Highlight text with the bound language."""
        return highlight(text, self.mode, self.theme)

    def invalid_patterns(self) -> list[HighlightPattern]:
        """Patterns of the bound language that fail to compile."""
        return [p for p in self.mode.patterns if compile_pattern(p) is None]

"""
Qt integration for highlighting and diagnostics.

Provides:
- Theme-derived color schemes as Qt text formats
- A QSyntaxHighlighter driven by the core highlighter
- Wave-underline extra selections for diagnostics
- Code point to UTF-16 offset conversion
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from PyQt6.QtGui import (
    QColor, QFont, QSyntaxHighlighter, QTextCharFormat, QTextCursor, QTextDocument
)
from PyQt6.QtWidgets import QPlainTextEdit, QTextEdit

from padlint.core.highlighter import highlight
from padlint.core.languages import LanguageRegistry, default_registry
from padlint.core.models import Diagnostic, LanguageMode, Severity, StyledSpan, StyleTag
from padlint.services.themes import BUILTIN_THEMES, Theme


def utf16_offsets(text: str) -> list[int]:
    """
    Map code point offsets to UTF-16 offsets.

    Entry i is the UTF-16 offset of code point i; the list has
    len(text) + 1 entries.
    """
    offsets = [0] * (len(text) + 1)
    position = 0
    for index, char in enumerate(text):
        offsets[index] = position
        position += 2 if ord(char) > 0xFFFF else 1
    offsets[len(text)] = position
    return offsets


@dataclass
class ColorScheme:
    """Color scheme for syntax highlighting and diagnostics."""
    name: str
    background: QColor
    foreground: QColor

    # Token colors
    colors: dict[StyleTag, QColor] = field(default_factory=dict)

    # Token styles (bold, italic)
    bold: set[StyleTag] = field(default_factory=set)
    italic: set[StyleTag] = field(default_factory=set)

    # Diagnostic underline colors
    diagnostic_colors: dict[Severity, QColor] = field(default_factory=lambda: {
        Severity.ERROR: QColor(255, 59, 48),
        Severity.WARNING: QColor(255, 149, 0),
        Severity.HINT: QColor(142, 142, 147),
    })

    def get_format(self, tag: StyleTag) -> QTextCharFormat:
        """Get QTextCharFormat for a style tag."""
        fmt = QTextCharFormat()
        fmt.setForeground(self.colors.get(tag, self.foreground))

        if tag in self.bold:
            fmt.setFontWeight(QFont.Weight.Bold)

        if tag in self.italic:
            fmt.setFontItalic(True)

        return fmt

    def diagnostic_color(self, severity: Severity) -> QColor:
        return self.diagnostic_colors.get(severity, self.foreground)

    @classmethod
    def from_theme(cls, theme: Theme, dark: bool = False) -> 'ColorScheme':
        """Build a scheme from a theme for the given appearance."""
        return cls(
            name=theme.name,
            background=QColor(theme.background.for_appearance(dark)),
            foreground=QColor(theme.foreground.for_appearance(dark)),
            colors={tag: QColor(theme.color_for(tag, dark)) for tag in StyleTag},
            bold={StyleTag.KEYWORD},
            italic={StyleTag.COMMENT},
        )


class SyntaxHighlighter(QSyntaxHighlighter):
    """
    Syntax highlighter for a text document.

    Spans are computed over the whole document with the core
    highlighter (so multi-line constructs such as block comments
    are handled) and painted block by block.
    """

    def __init__(
        self,
        document: QTextDocument,
        language: Optional[Union[str, LanguageMode]] = None,
        color_scheme: Optional[ColorScheme] = None,
        registry: Optional[LanguageRegistry] = None
    ):
        super().__init__(None)
        self.setParent(document)

        self._registry = registry or default_registry()
        self._mode: Optional[LanguageMode] = None
        self._color_scheme = color_scheme or ColorScheme.from_theme(BUILTIN_THEMES[0])
        self._formats: dict[StyleTag, QTextCharFormat] = {}
        self._enabled = True

        self._spans: list[StyledSpan] = []
        self._span_starts: list[int] = []
        self._span_ranges: list[tuple[int, int]] = []  # UTF-16 (start, end)
        self._text = ""
        self._dirty = True

        # Build formats
        self._build_formats()

        # Connected before setDocument so spans are marked stale before
        # the base class re-highlights the changed blocks
        document.contentsChange.connect(self._on_contents_change)
        self.setDocument(document)

        # Set language
        if language:
            self.set_language(language)

    def _build_formats(self) -> None:
        """Build text formats from color scheme."""
        self._formats = {tag: self._color_scheme.get_format(tag) for tag in StyleTag}

    def _invalidate(self) -> None:
        self._dirty = True

    def _on_contents_change(self, position: int, removed: int, added: int) -> None:
        # Format-only updates, including our own, leave the text untouched
        if removed == added and self.document().toPlainText() == self._text:
            return
        self._dirty = True

    def _ensure_spans(self) -> None:
        """Recompute document spans if the document changed."""
        if not self._dirty:
            return

        text = self.document().toPlainText()
        self._text = text
        self._spans = highlight(text, self._mode, self._formats.get) if self._mode else []

        offsets = utf16_offsets(text)
        self._span_ranges = [(offsets[s.start], offsets[s.end]) for s in self._spans]
        self._span_starts = [start for start, _ in self._span_ranges]
        self._dirty = False

    def set_language(self, language: Union[str, LanguageMode]) -> bool:
        """Set the language for highlighting by mode, id or extension."""
        if isinstance(language, LanguageMode):
            mode: Optional[LanguageMode] = language
        else:
            mode = self._registry.resolve(language) or self._registry.detect(language)

        self._mode = mode
        self._invalidate()
        self.rehighlight()
        return mode is not None

    def set_language_for_file(self, filename: str) -> bool:
        """Set language based on file extension."""
        self._mode = self._registry.detect_for_file(filename)
        self._invalidate()
        self.rehighlight()
        return self._mode is not None

    def set_color_scheme(self, scheme: ColorScheme) -> None:
        """Set the color scheme."""
        self._color_scheme = scheme
        self._build_formats()
        self._invalidate()
        self.rehighlight()

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable highlighting."""
        self._enabled = enabled
        self.rehighlight()

    @property
    def language(self) -> Optional[LanguageMode]:
        return self._mode

    @property
    def color_scheme(self) -> ColorScheme:
        return self._color_scheme

    def spans(self) -> list[StyledSpan]:
        """Spans for the current document contents."""
        self._ensure_spans()
        return list(self._spans)

    def highlightBlock(self, text: str) -> None:
        """Paint the document spans that intersect the current block."""
        if not self._enabled or self._mode is None:
            return

        self._ensure_spans()
        if not self._spans:
            return

        block_start = self.currentBlock().position()
        block_end = block_start + len(text.encode('utf-16-le')) // 2

        index = max(bisect.bisect_right(self._span_starts, block_start) - 1, 0)
        while index < len(self._spans):
            start, end = self._span_ranges[index]
            if start >= block_end:
                break
            lo = max(start, block_start)
            hi = min(end, block_end)
            if hi > lo:
                self.setFormat(lo - block_start, hi - lo, self._spans[index].style)
            index += 1


def diagnostic_selections(
    editor: Union[QPlainTextEdit, QTextEdit],
    diagnostics: Iterable[Diagnostic],
    scheme: Optional[ColorScheme] = None
) -> list[QTextEdit.ExtraSelection]:
    """
    Build wave-underline selections for diagnostics.

    Each underline runs from the diagnostic column to the end of
    its line. Diagnostics past the end of the document are skipped.
    """
    scheme = scheme or ColorScheme.from_theme(BUILTIN_THEMES[0])
    document = editor.document()
    selections = []

    for diagnostic in diagnostics:
        block = document.findBlockByNumber(diagnostic.line - 1)
        if not block.isValid():
            continue

        line_text = block.text()
        offsets = utf16_offsets(line_text)
        column = min(max(diagnostic.column - 1, 0), len(line_text))
        start = block.position() + offsets[column]
        end = block.position() + offsets[len(line_text)]
        if end <= start:
            # Nothing after the column; underline the preceding character
            start = max(block.position(), end - 1)

        cursor = QTextCursor(document)
        cursor.setPosition(start)
        cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)

        selection = QTextEdit.ExtraSelection()
        selection.cursor = cursor
        selection.format.setUnderlineStyle(QTextCharFormat.UnderlineStyle.WaveUnderline)
        selection.format.setUnderlineColor(scheme.diagnostic_color(diagnostic.severity))
        selection.format.setToolTip(f"{diagnostic.severity.label}: {diagnostic.message}")
        selections.append(selection)

    return selections


def create_highlighter_for_file(
    document: QTextDocument,
    filename: str,
    color_scheme: Optional[ColorScheme] = None,
    registry: Optional[LanguageRegistry] = None
) -> SyntaxHighlighter:
    """
    Create a syntax highlighter for a file.

    Automatically detects language from filename.
    """
    highlighter = SyntaxHighlighter(document, color_scheme=color_scheme, registry=registry)
    highlighter.set_language_for_file(filename)
    return highlighter

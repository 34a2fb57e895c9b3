"""
Qt widgets integration.

Provides:
- Syntax highlighting for QTextDocument
- Diagnostic underlines for text editors
"""

from padlint.ui.widgets.syntax_highlighter import (
    ColorScheme,
    SyntaxHighlighter,
    create_highlighter_for_file as get_highlighter_for_file,
    diagnostic_selections,
    utf16_offsets,
)

__all__ = [
    'ColorScheme',
    'SyntaxHighlighter',
    'get_highlighter_for_file',
    'diagnostic_selections',
    'utf16_offsets',
]

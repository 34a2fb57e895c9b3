"""
Language definitions and registry.

Provides:
- Highlight pattern tables for the built-in languages
- Keyword sets, comment tokens and delimiters per language
- Lookup by language id or by file extension
- Extension of the built-in set with user-defined modes
"""

from __future__ import annotations

import os
import re
from typing import Iterable, Iterator, Optional

from padlint.core.models import (
    HighlightPattern,
    LanguageMode,
    LanguageNotFoundError,
    StyleTag,
)


# =============================================================================
# Shared Patterns
# =============================================================================

LINE_COMMENT_SLASH = r'//.*'
LINE_COMMENT_HASH = r'#.*'
BLOCK_COMMENT_C = r'(?s)/\*.*?\*/'
BLOCK_COMMENT_MARKUP = r'(?s)<!--.*?-->'

DOUBLE_QUOTED = r'"[^"\\]*(?:\\.[^"\\]*)*"'
SINGLE_QUOTED = r"'[^'\\]*(?:\\.[^'\\]*)*'"
BACKTICK_QUOTED = r'`[^`\\]*(?:\\.[^`\\]*)*`'

INTEGER = r'\b[0-9]+\b'

MARKUP_TAG = r'<[^>]*>'


def _word_pattern(words: Iterable[str]) -> str:
    """Build a word-boundary alternation, longest words first."""
    ordered = sorted(words, key=lambda w: (-len(w), w))
    return r'\b(' + '|'.join(re.escape(w) for w in ordered) + r')\b'


def _rule(regex: str, tag: StyleTag, flags: int = 0) -> HighlightPattern:
    return HighlightPattern(regex=regex, style_tag=tag, flags=flags)


# =============================================================================
# Keyword Sets
# =============================================================================

SWIFT_KEYWORDS = frozenset({
    "let", "var", "func", "class", "struct", "enum", "protocol",
    "if", "else", "for", "while", "switch", "case", "default",
    "return", "break", "continue", "guard", "defer", "throw",
    "try", "catch", "finally", "do", "import", "public", "private",
    "internal", "fileprivate", "open", "static", "final", "override",
})

PYTHON_KEYWORDS = frozenset({
    "def", "class", "return", "if", "else", "elif", "for", "while",
    "try", "except", "finally", "raise", "import", "from", "as",
    "with", "pass", "break", "continue", "global", "nonlocal",
})

JAVASCRIPT_KEYWORDS = frozenset({
    "let", "const", "var", "function", "return", "if", "else",
    "for", "while", "do", "switch", "case", "default", "break",
    "continue", "try", "catch", "finally", "throw", "new", "this",
    "class", "extends", "import", "export", "await", "async",
})

TYPESCRIPT_KEYWORDS = JAVASCRIPT_KEYWORDS | frozenset({
    "interface", "type", "namespace", "enum", "public", "private",
    "protected", "readonly", "static", "abstract", "implements",
})

HTML_KEYWORDS = frozenset({
    "div", "span", "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "a", "img", "input", "button", "form", "table", "tr", "td",
    "th", "ul", "ol", "li", "head", "body", "title", "meta",
    "script", "style", "link",
})

CSS_KEYWORDS = frozenset({
    "color", "background", "font", "margin", "padding", "border",
    "display", "position", "width", "height", "flex", "grid",
})

SHELL_KEYWORDS = frozenset({
    "if", "then", "else", "elif", "fi", "for", "while", "do", "done",
    "case", "esac", "function", "return", "export", "local", "readonly",
    "declare", "typeset", "unset", "alias", "source", ".",
})


# =============================================================================
# Language Modes
# =============================================================================

SWIFT = LanguageMode(
    id="swift",
    display_name="Swift",
    file_extensions=("swift",),
    line_comment="//",
    block_comment_start="/*",
    block_comment_end="*/",
    keywords=SWIFT_KEYWORDS,
    delimiters=("(", ")", "{", "}", "[", "]", ";", ","),
    patterns=(
        _rule(LINE_COMMENT_SLASH, StyleTag.COMMENT),
        _rule(BLOCK_COMMENT_C, StyleTag.COMMENT),
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(SINGLE_QUOTED, StyleTag.STRING),
        _rule(_word_pattern(SWIFT_KEYWORDS), StyleTag.KEYWORD),
        _rule(r'\b(true|false|nil)\b', StyleTag.CONSTANT),
        _rule(r'\b(Int|String|Double|Float|Bool|Array|Dictionary)\b', StyleTag.TYPE),
        _rule(INTEGER, StyleTag.NUMBER),
    ),
)

PYTHON = LanguageMode(
    id="python",
    display_name="Python",
    file_extensions=("py", "python"),
    line_comment="#",
    keywords=PYTHON_KEYWORDS,
    delimiters=("(", ")", "{", "}", "[", "]", ":"),
    patterns=(
        _rule(LINE_COMMENT_HASH, StyleTag.COMMENT),
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(SINGLE_QUOTED, StyleTag.STRING),
        _rule(_word_pattern(PYTHON_KEYWORDS), StyleTag.KEYWORD),
        _rule(r'\b(True|False|None)\b', StyleTag.CONSTANT),
        _rule(INTEGER, StyleTag.NUMBER),
    ),
)

JAVASCRIPT = LanguageMode(
    id="javascript",
    display_name="JavaScript",
    file_extensions=("js", "jsx"),
    line_comment="//",
    block_comment_start="/*",
    block_comment_end="*/",
    keywords=JAVASCRIPT_KEYWORDS,
    delimiters=("(", ")", "{", "}", "[", "]", ";", ","),
    patterns=(
        _rule(LINE_COMMENT_SLASH, StyleTag.COMMENT),
        _rule(BLOCK_COMMENT_C, StyleTag.COMMENT),
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(SINGLE_QUOTED, StyleTag.STRING),
        _rule(_word_pattern(JAVASCRIPT_KEYWORDS), StyleTag.KEYWORD),
        _rule(r'\b(true|false|null|undefined)\b', StyleTag.CONSTANT),
        _rule(INTEGER, StyleTag.NUMBER),
    ),
)

JSON = LanguageMode(
    id="json",
    display_name="JSON",
    file_extensions=("json",),
    delimiters=("{", "}", "[", "]", ",", ":"),
    patterns=(
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(INTEGER, StyleTag.NUMBER),
        _rule(r'\b(null|true|false)\b', StyleTag.CONSTANT),
    ),
)

HTML = LanguageMode(
    id="html",
    display_name="HTML",
    file_extensions=("html", "htm"),
    block_comment_start="<!--",
    block_comment_end="-->",
    keywords=HTML_KEYWORDS,
    delimiters=("<", ">", "/", '"', "'"),
    patterns=(
        _rule(BLOCK_COMMENT_MARKUP, StyleTag.COMMENT),
        _rule(MARKUP_TAG, StyleTag.KEYWORD),
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(SINGLE_QUOTED, StyleTag.STRING),
        _rule(_word_pattern(HTML_KEYWORDS), StyleTag.TYPE),
    ),
)

CSS = LanguageMode(
    id="css",
    display_name="CSS",
    file_extensions=("css",),
    line_comment="//",
    block_comment_start="/*",
    block_comment_end="*/",
    keywords=CSS_KEYWORDS,
    patterns=(
        _rule(LINE_COMMENT_SLASH, StyleTag.COMMENT),
        _rule(BLOCK_COMMENT_C, StyleTag.COMMENT),
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(SINGLE_QUOTED, StyleTag.STRING),
        _rule(_word_pattern(CSS_KEYWORDS), StyleTag.KEYWORD),
        _rule(r'#[a-fA-F0-9]{3,6}\b', StyleTag.CONSTANT),
        _rule(r'\b[0-9]+px\b|\b[0-9]+%|\b[0-9]+\b', StyleTag.NUMBER),
    ),
)

TYPESCRIPT = LanguageMode(
    id="typescript",
    display_name="TypeScript",
    file_extensions=("ts", "tsx"),
    line_comment="//",
    block_comment_start="/*",
    block_comment_end="*/",
    keywords=TYPESCRIPT_KEYWORDS,
    delimiters=("(", ")", "{", "}", "[", "]", ";", ","),
    patterns=(
        _rule(LINE_COMMENT_SLASH, StyleTag.COMMENT),
        _rule(BLOCK_COMMENT_C, StyleTag.COMMENT),
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(SINGLE_QUOTED, StyleTag.STRING),
        _rule(BACKTICK_QUOTED, StyleTag.STRING),
        _rule(_word_pattern(TYPESCRIPT_KEYWORDS), StyleTag.KEYWORD),
        _rule(r'\b(true|false|null|undefined)\b', StyleTag.CONSTANT),
        _rule(r'\b(number|string|boolean|any|void|never|unknown|object|Array|Promise)\b',
              StyleTag.TYPE),
        _rule(INTEGER, StyleTag.NUMBER),
    ),
)

MARKDOWN = LanguageMode(
    id="markdown",
    display_name="Markdown",
    file_extensions=("md", "markdown", "mdown", "mkd"),
    delimiters=("#", "*", "_", "`", "[", "]", "(", ")"),
    patterns=(
        # Headers
        _rule(r'^#{1,6}\s+.*', StyleTag.KEYWORD, re.MULTILINE),
        # Bold, then italic
        _rule(r'\*\*[^*]+\*\*', StyleTag.KEYWORD),
        _rule(r'\*[^*]+\*', StyleTag.TYPE),
        # Inline code and fenced blocks
        _rule(r'`[^`]+`', StyleTag.STRING),
        _rule(r'```[\s\S]*?```', StyleTag.STRING),
        # Links
        _rule(r'\[([^\]]+)\]\(([^)]+)\)', StyleTag.TYPE),
        # Lists
        _rule(r'^[ \t]*[-*+][ \t]+', StyleTag.KEYWORD, re.MULTILINE),
        _rule(r'^[ \t]*\d+\.[ \t]+', StyleTag.KEYWORD, re.MULTILINE),
        # Blockquotes
        _rule(r'^>\s+.*', StyleTag.COMMENT, re.MULTILINE),
    ),
)

YAML = LanguageMode(
    id="yaml",
    display_name="YAML",
    file_extensions=("yaml", "yml"),
    line_comment="#",
    delimiters=(":", "-", "[", "]", "{", "}", ",", "|", ">"),
    patterns=(
        _rule(LINE_COMMENT_HASH, StyleTag.COMMENT),
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(SINGLE_QUOTED, StyleTag.STRING),
        _rule(r'^[ \t]*[a-zA-Z_][a-zA-Z0-9_]*:', StyleTag.KEYWORD, re.MULTILINE),
        _rule(r'\b(true|false|null)\b|(?<!\S)~(?!\S)', StyleTag.CONSTANT),
        _rule(INTEGER, StyleTag.NUMBER),
        _rule(r'^[ \t]*-[ \t]+', StyleTag.TYPE, re.MULTILINE),
    ),
)

XML = LanguageMode(
    id="xml",
    display_name="XML",
    file_extensions=("xml", "xsd", "xsl", "xslt"),
    block_comment_start="<!--",
    block_comment_end="-->",
    delimiters=("<", ">", "/", '"', "'"),
    patterns=(
        _rule(BLOCK_COMMENT_MARKUP, StyleTag.COMMENT),
        _rule(MARKUP_TAG, StyleTag.KEYWORD),
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(SINGLE_QUOTED, StyleTag.STRING),
        _rule(r'\b(xml|version|encoding|standalone|xmlns)\b', StyleTag.TYPE),
    ),
)

SHELL = LanguageMode(
    id="shell",
    display_name="Shell Script",
    file_extensions=("sh", "bash", "zsh", "fish", "csh", "ksh"),
    line_comment="#",
    keywords=SHELL_KEYWORDS,
    delimiters=("(", ")", "{", "}", "[", "]", ";", "|", "&", "$"),
    patterns=(
        _rule(LINE_COMMENT_HASH, StyleTag.COMMENT),
        _rule(DOUBLE_QUOTED, StyleTag.STRING),
        _rule(SINGLE_QUOTED, StyleTag.STRING),
        # Variables
        _rule(r'\$[a-zA-Z_][a-zA-Z0-9_]*', StyleTag.TYPE),
        _rule(r'\$\{[^}]+\}', StyleTag.TYPE),
        _rule(_word_pattern(SHELL_KEYWORDS - {"."}) + r'|(?<!\S)\.(?=\s)', StyleTag.KEYWORD),
        _rule(r'\b(true|false)\b', StyleTag.CONSTANT),
        _rule(INTEGER, StyleTag.NUMBER),
        # Variable assignments
        _rule(r'^[ \t]*[a-zA-Z_][a-zA-Z0-9_]*[ \t]*=', StyleTag.KEYWORD, re.MULTILINE),
    ),
)

BUILTIN_MODES: tuple[LanguageMode, ...] = (
    SWIFT,
    PYTHON,
    JAVASCRIPT,
    JSON,
    HTML,
    CSS,
    TYPESCRIPT,
    MARKDOWN,
    YAML,
    XML,
    SHELL,
)


# =============================================================================
# Registry
# =============================================================================

class LanguageRegistry:
    """
    Immutable registry of language modes.

    Modes are kept in registration order; extension detection
    returns the first registered mode that claims the extension.
    """

    def __init__(self, modes: Iterable[LanguageMode] = BUILTIN_MODES):
        self._modes: tuple[LanguageMode, ...] = tuple(modes)
        self._by_id: dict[str, LanguageMode] = {}
        self._by_extension: dict[str, LanguageMode] = {}

        for mode in self._modes:
            key = mode.id.lower()
            if key in self._by_id:
                raise ValueError(f"Duplicate language id: {mode.id!r}")
            self._by_id[key] = mode

            for ext in mode.file_extensions:
                # First registration wins on ambiguity
                self._by_extension.setdefault(ext.lower().lstrip('.'), mode)

    def resolve(self, language_id: str) -> Optional[LanguageMode]:
        """Get a language mode by id (case-insensitive)."""
        return self._by_id.get(language_id.strip().lower())

    def require(self, language_id: str) -> LanguageMode:
        """Get a language mode by id, raising if it is not registered."""
        mode = self.resolve(language_id)
        if mode is None:
            raise LanguageNotFoundError(language_id)
        return mode

    def detect(self, extension: str) -> Optional[LanguageMode]:
        """Get a language mode for a file extension (with or without dot)."""
        return self._by_extension.get(extension.strip().lstrip('.').lower())

    def detect_for_file(self, filename: str) -> Optional[LanguageMode]:
        """Get a language mode for a file based on its extension."""
        _, ext = os.path.splitext(filename)
        if not ext:
            return None
        return self.detect(ext)

    def lookup(self, language: str) -> LanguageMode:
        """
        Resolve a language id or file extension.

        Ids take precedence over extensions.

        Raises:
            LanguageNotFoundError: if neither matches
        """
        mode = self.resolve(language) or self.detect(language)
        if mode is None:
            raise LanguageNotFoundError(language)
        return mode

    def with_modes(self, extra: Iterable[LanguageMode]) -> 'LanguageRegistry':
        """Create a new registry with additional modes appended."""
        return LanguageRegistry(self._modes + tuple(extra))

    def ids(self) -> list[str]:
        """Get list of all registered language ids."""
        return [mode.id for mode in self._modes]

    def extensions(self) -> list[str]:
        """Get list of all supported file extensions."""
        return list(self._by_extension.keys())

    def __iter__(self) -> Iterator[LanguageMode]:
        return iter(self._modes)

    def __len__(self) -> int:
        return len(self._modes)

    def __contains__(self, language_id: object) -> bool:
        return isinstance(language_id, str) and self.resolve(language_id) is not None


_DEFAULT_REGISTRY = LanguageRegistry(BUILTIN_MODES)


def default_registry() -> LanguageRegistry:
    """Get the shared registry of built-in languages."""
    return _DEFAULT_REGISTRY

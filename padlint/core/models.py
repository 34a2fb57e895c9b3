"""
Core data models for the highlighting and linting pipeline.

This module defines all data structures used across the application:
- Semantic style tags and diagnostic severities
- Language mode descriptors and their highlight patterns
- Highlighter output (styled spans)
- Linter output (diagnostics)
- Combined analysis results

All models are designed to be:
- UI-agnostic (can be used with any frontend)
- Immutable where practical
- Type-hinted for IDE support
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


# =============================================================================
# Enumerations
# =============================================================================

class StyleTag(Enum):
    """Semantic role of a highlighted character range."""
    COMMENT = "comment"
    STRING = "string"
    KEYWORD = "keyword"
    CONSTANT = "constant"
    TYPE = "type"
    NUMBER = "number"
    DEFAULT = "default"

    @classmethod
    def from_name(cls, name: str) -> 'StyleTag':
        """Map a (case-insensitive) role name to a tag, DEFAULT if unknown."""
        try:
            return cls(name.strip().lower())
        except (ValueError, AttributeError):
            return cls.DEFAULT


class Severity(Enum):
    """Diagnostic severity, ordered hint < warning < error."""
    HINT = 1
    WARNING = 2
    ERROR = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> 'Severity':
        """Create from a severity name such as 'warning'."""
        return cls[name.strip().upper()]

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.value >= other.value


# =============================================================================
# Errors
# =============================================================================

class PadLintError(Exception):
    """Base class for all analysis errors."""


class LanguageNotFoundError(PadLintError, LookupError):
    """Raised when a language id or extension cannot be resolved."""

    def __init__(self, language: str):
        super().__init__(f"Unknown language: {language!r}")
        self.language = language


class CustomModeError(PadLintError, ValueError):
    """Raised for a malformed user-defined language mode."""


# =============================================================================
# Language Models
# =============================================================================

@dataclass(frozen=True)
class HighlightPattern:
    """
    One rule in a language's highlight table.

    Order within the table matters: a later pattern's matches
    overwrite earlier ones on overlapping characters.
    """
    regex: str
    style_tag: StyleTag
    flags: int = 0


@dataclass(frozen=True)
class LanguageMode:
    """
    Static descriptor of a supported language.

    Built once when the registry is created and never mutated.
    """
    id: str
    display_name: str
    file_extensions: tuple[str, ...] = ()
    line_comment: str = ""
    block_comment_start: str = ""
    block_comment_end: str = ""
    keywords: frozenset[str] = frozenset()
    delimiters: tuple[str, ...] = ()
    patterns: tuple[HighlightPattern, ...] = ()

    def matches_extension(self, extension: str) -> bool:
        """Case-insensitive exact match against the mode's extensions."""
        ext = extension.strip().lstrip('.').lower()
        return ext in self.file_extensions

    @property
    def has_comments(self) -> bool:
        return bool(self.line_comment or self.block_comment_start)


# =============================================================================
# Analysis Output Models
# =============================================================================

@dataclass(frozen=True)
class StyledSpan:
    """
    A contiguous character range tagged with a style role.

    Offsets are Python string indices (code points) into the
    analyzed text.
    """
    start: int
    length: int
    style_tag: StyleTag
    style: Any = field(default=None, compare=False)

    @property
    def end(self) -> int:
        """End offset (exclusive)."""
        return self.start + self.length


@dataclass(frozen=True)
class Diagnostic:
    """A positional, severity-tagged message produced by the linter."""
    line: int           # 1-based
    column: int         # 1-based
    severity: Severity
    message: str
    rule: str

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.line, self.column)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.severity.label}: {self.message} [{self.rule}]"


@dataclass
class AnalysisResult:
    """Combined highlighter and linter output for one text snapshot."""
    spans: list[StyledSpan] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    language: Optional[LanguageMode] = None

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    def count(self, severity: Severity) -> int:
        """Number of diagnostics with the given severity."""
        return sum(1 for d in self.diagnostics if d.severity is severity)

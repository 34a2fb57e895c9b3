"""
Analysis facade.

Resolves a language through the registry and delegates to the
highlighter and linter. Hosts that only need one output can call
highlight() or lint() directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from padlint.core import highlighter as _highlighter
from padlint.core import linter as _linter
from padlint.core.highlighter import StyleResolver
from padlint.core.languages import LanguageRegistry, default_registry
from padlint.core.models import (
    AnalysisResult,
    Diagnostic,
    LanguageMode,
    Severity,
    StyledSpan,
)


Language = Union[LanguageMode, str]


@dataclass
class AnalysisOptions:
    """Options applied to analysis output."""
    lint_enabled: bool = True
    highlight_enabled: bool = True
    min_severity: Severity = Severity.HINT
    disabled_rules: frozenset[str] = field(default_factory=frozenset)

    def accepts(self, diagnostic: Diagnostic) -> bool:
        """Check whether a diagnostic passes the severity and rule filters."""
        return (diagnostic.severity >= self.min_severity
                and diagnostic.rule not in self.disabled_rules)


def resolve_language(
    language: Language,
    registry: Optional[LanguageRegistry] = None
) -> LanguageMode:
    """
    Get a LanguageMode from a mode, id or file extension.

    Raises:
        LanguageNotFoundError: if a string does not resolve
    """
    if isinstance(language, LanguageMode):
        return language
    return (registry or default_registry()).lookup(language)


def highlight(
    text: str,
    language: Language,
    theme: Optional[StyleResolver] = None,
    registry: Optional[LanguageRegistry] = None
) -> list[StyledSpan]:
    """Highlight text in the given language."""
    return _highlighter.highlight(text, resolve_language(language, registry), theme)


def lint(
    text: str,
    language: Language,
    registry: Optional[LanguageRegistry] = None,
    options: Optional[AnalysisOptions] = None
) -> list[Diagnostic]:
    """Lint text in the given language."""
    mode = resolve_language(language, registry)
    diagnostics = _linter.lint(text, mode)
    if options is not None:
        diagnostics = [d for d in diagnostics if options.accepts(d)]
    return diagnostics


def analyze(
    text: str,
    language: Language,
    theme: Optional[StyleResolver] = None,
    registry: Optional[LanguageRegistry] = None,
    options: Optional[AnalysisOptions] = None
) -> AnalysisResult:
    """
    Highlight and lint text in one call.

    Args:
        text: Source text snapshot
        language: LanguageMode, language id or file extension
        theme: Optional style resolver for span styles
        registry: Registry used to resolve string languages
        options: Output filters; defaults leave output unchanged

    Returns:
        AnalysisResult with spans, diagnostics and the mode used
    """
    options = options or AnalysisOptions()
    mode = resolve_language(language, registry)

    spans = _highlighter.highlight(text, mode, theme) if options.highlight_enabled else []
    diagnostics = lint(text, mode, options=options) if options.lint_enabled else []

    return AnalysisResult(spans=spans, diagnostics=diagnostics, language=mode)

"""
Core analysis module.

Provides:
- Language registry with built-in language modes
- Regex-based syntax highlighting
- Line-oriented heuristic linting
- Keyword and bracket completion
- A facade combining highlighting and linting
"""

from padlint.core.models import (
    AnalysisResult,
    CustomModeError,
    Diagnostic,
    HighlightPattern,
    LanguageMode,
    LanguageNotFoundError,
    PadLintError,
    Severity,
    StyledSpan,
    StyleTag,
)
from padlint.core.languages import (
    BUILTIN_MODES,
    LanguageRegistry,
    default_registry,
)
from padlint.core.highlighter import (
    Highlighter,
    StyleResolver,
)
from padlint.core.completion import (
    Completion,
    complete,
)
from padlint.core.pipeline import (
    AnalysisOptions,
    analyze,
    highlight,
    lint,
    resolve_language,
)

__all__ = [
    # Models
    'AnalysisResult',
    'CustomModeError',
    'Diagnostic',
    'HighlightPattern',
    'LanguageMode',
    'LanguageNotFoundError',
    'PadLintError',
    'Severity',
    'StyledSpan',
    'StyleTag',
    # Registry
    'BUILTIN_MODES',
    'LanguageRegistry',
    'default_registry',
    # Highlighting
    'Highlighter',
    'StyleResolver',
    # Completion
    'Completion',
    'complete',
    # Facade
    'AnalysisOptions',
    'analyze',
    'highlight',
    'lint',
    'resolve_language',
]

"""
Main entry point for the PadLint command line tool.

This module handles:
- Command line argument parsing
- Logging configuration
- Settings loading
- Lint and highlight output
- Exception handling
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, List, TextIO

from padlint import __version__
from padlint.core.languages import LanguageRegistry
from padlint.core.models import Diagnostic, LanguageMode, LanguageNotFoundError, Severity, StyledSpan, StyleTag
from padlint.core.pipeline import analyze, resolve_language
from padlint.services.settings import SettingsManager


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "padlint"
APP_VERSION = __version__

EXIT_OK = 0
EXIT_LINT_ERRORS = 1
EXIT_USAGE = 2


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Log records go to stderr so they never mix with lint output.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_file,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    return root_logger


# =============================================================================
# Exception Handling
# =============================================================================

class ExceptionHandler:
    """
    Global exception handler for unhandled exceptions.

    Logs the exception at CRITICAL.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle_exception(
        self,
        exc_type: type,
        exc_value: BaseException,
        exc_tb
    ) -> None:
        """Handle an unhandled exception."""
        # Don't handle keyboard interrupt
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        self.logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_tb)
        )


# =============================================================================
# Command Line Parsing
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Syntax highlighting and lint checks for source text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s lint config.json                  Check a JSON file
  %(prog)s lint script --language python     Force a language
  %(prog)s highlight app.swift --dark        Show styled spans
  %(prog)s languages                         List supported languages
        """
    )

    # Configuration
    parser.add_argument(
        '-c', '--config',
        help='Settings file path'
    )

    # Logging
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )
    parser.add_argument(
        '--log-file',
        help='Also write log records to this file'
    )

    # Version
    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {APP_VERSION}'
    )

    commands = parser.add_subparsers(dest='command', required=True)

    # lint
    lint_parser = commands.add_parser('lint', help='Report diagnostics for a file')
    lint_parser.add_argument('file', help='File to check')
    lint_parser.add_argument(
        '-l', '--language',
        help='Language id or extension (detected from the file name by default)'
    )
    lint_parser.add_argument(
        '--min-severity',
        choices=[s.label for s in Severity],
        default=None,
        help='Hide diagnostics below this severity'
    )
    lint_parser.add_argument(
        '--format',
        choices=['text', 'json'],
        default='text',
        help='Output format'
    )

    # highlight
    highlight_parser = commands.add_parser('highlight', help='Print styled spans for a file')
    highlight_parser.add_argument('file', help='File to highlight')
    highlight_parser.add_argument(
        '-l', '--language',
        help='Language id or extension (detected from the file name by default)'
    )
    highlight_parser.add_argument(
        '--theme',
        help='Theme id used to resolve span colors'
    )
    highlight_parser.add_argument(
        '--dark',
        action='store_true',
        help='Use the dark variant of the theme'
    )
    highlight_parser.add_argument(
        '--format',
        choices=['text', 'json'],
        default='text',
        help='Output format'
    )

    # languages
    commands.add_parser('languages', help='List supported languages')

    return parser


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    return build_parser().parse_args(args)


# =============================================================================
# Commands
# =============================================================================

def _read_source(path: Path) -> str:
    # newline='' keeps \r\n and \r so line numbering matches the file
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def _resolve_mode(
    language: Optional[str],
    path: Path,
    registry: LanguageRegistry
) -> LanguageMode:
    if language:
        return resolve_language(language, registry)

    mode = registry.detect_for_file(path.name)
    if mode is None:
        raise LanguageNotFoundError(path.suffix or path.name)
    return mode


def _diagnostic_to_dict(diagnostic: Diagnostic) -> dict:
    return {
        'line': diagnostic.line,
        'column': diagnostic.column,
        'severity': diagnostic.severity.label,
        'message': diagnostic.message,
        'rule': diagnostic.rule,
    }


def _span_to_dict(span: StyledSpan, text: str) -> dict:
    return {
        'start': span.start,
        'length': span.length,
        'style_tag': span.style_tag.value,
        'style': span.style,
        'text': text[span.start:span.end],
    }


def run_lint(
    args: argparse.Namespace,
    manager: SettingsManager,
    out: TextIO
) -> int:
    """Lint a file and print its diagnostics."""
    path = Path(args.file)
    registry = manager.build_registry()
    mode = _resolve_mode(args.language, path, registry)

    options = manager.build_options()
    options.highlight_enabled = False
    options.lint_enabled = True
    if args.min_severity:
        options.min_severity = Severity.from_name(args.min_severity)

    result = analyze(_read_source(path), mode, registry=registry, options=options)
    diagnostics = sorted(result.diagnostics, key=lambda d: d.sort_key)

    if args.format == 'json':
        json.dump({
            'file': str(path),
            'language': mode.id,
            'diagnostics': [_diagnostic_to_dict(d) for d in diagnostics],
        }, out, indent=2)
        out.write("\n")
    else:
        for diagnostic in diagnostics:
            out.write(f"{path}:{diagnostic}\n")

    return EXIT_LINT_ERRORS if result.has_errors else EXIT_OK


def run_highlight(
    args: argparse.Namespace,
    manager: SettingsManager,
    out: TextIO
) -> int:
    """Highlight a file and print its styled spans."""
    path = Path(args.file)
    registry = manager.build_registry()
    mode = _resolve_mode(args.language, path, registry)

    themes = manager.build_theme_manager()
    if args.theme and not themes.set_theme(args.theme):
        logging.warning(f"main - Using theme {themes.current_theme.id!r} instead")
    dark = args.dark or manager.settings.appearance.is_dark
    resolver = themes.resolver(dark)

    text = _read_source(path)
    result = analyze(text, mode, theme=resolver, registry=registry)

    if args.format == 'json':
        json.dump({
            'file': str(path),
            'language': mode.id,
            'theme': themes.current_theme.id,
            'spans': [_span_to_dict(s, text) for s in result.spans],
        }, out, indent=2)
        out.write("\n")
    else:
        for span in result.spans:
            if span.style_tag is StyleTag.DEFAULT:
                continue
            fragment = text[span.start:span.end]
            out.write(f"{span.start}+{span.length}\t{span.style_tag.value}\t{span.style}\t{fragment!r}\n")

    return EXIT_OK


def run_languages(
    args: argparse.Namespace,
    manager: SettingsManager,
    out: TextIO
) -> int:
    """List registered languages."""
    for mode in manager.build_registry():
        extensions = ", ".join(mode.file_extensions)
        out.write(f"{mode.id:<12} {mode.display_name:<14} {extensions}\n")
    return EXIT_OK


COMMANDS = {
    'lint': run_lint,
    'highlight': run_highlight,
    'languages': run_languages,
}


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None, out: Optional[TextIO] = None) -> int:
    """
    Command line entry point.

    Returns:
        0 on success, 1 if lint reported errors, 2 for usage
        and configuration problems
    """
    out = out or sys.stdout

    args = parse_arguments(argv)

    log_file = Path(args.log_file) if args.log_file else None
    logger = setup_logging(args.log_level, log_file)
    logger.debug(f"Starting {APP_NAME} v{APP_VERSION}")

    exception_handler = ExceptionHandler(logger)
    sys.excepthook = exception_handler.handle_exception

    manager = SettingsManager(Path(args.config) if args.config else None)

    try:
        return COMMANDS[args.command](args, manager, out)
    except LanguageNotFoundError as e:
        logger.error(f"{e}; use --language or run '{APP_NAME} languages'")
        return EXIT_USAGE
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read {getattr(args, 'file', '')}: {e}")
        return EXIT_USAGE


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())

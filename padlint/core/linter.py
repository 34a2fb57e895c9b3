"""
Line-oriented heuristic linter.

Provides:
- Indentation, terminator and declaration checks for Swift
- Indentation and whitespace checks for Python
- Terminator and indentation checks for JavaScript/TypeScript
- Structural validation of JSON with brace/bracket diagnostics
- Single-line tag balance checks for HTML/XML

These are simple per-line scans, not parsers. Every call
re-checks the whole text.
"""

from __future__ import annotations

import json
import re
from typing import Callable

from padlint.core.models import Diagnostic, LanguageMode, Severity


LintFunction = Callable[[str], list[Diagnostic]]

_LINE_BREAK = re.compile(r'\r\n|\r|\n')


def split_lines(text: str) -> list[str]:
    """Split text into lines on any line break convention."""
    return _LINE_BREAK.split(text)


def leading_spaces(line: str) -> int:
    """Count the run of space characters at the start of a line."""
    return len(line) - len(line.lstrip(' '))


def _trim(line: str) -> str:
    return line.strip(' \t')


# =============================================================================
# Swift
# =============================================================================

_IDENTIFIER_PREFIX = re.compile(r'\w+')


def lint_swift(text: str) -> list[Diagnostic]:
    """Check Swift indentation, uninitialized lets and semicolons."""
    diagnostics: list[Diagnostic] = []

    for line_number, line in enumerate(split_lines(text), start=1):
        trimmed = _trim(line)
        if not trimmed or trimmed.startswith("//") or trimmed.startswith("*"):
            continue

        spaces = leading_spaces(line)
        if spaces > 0 and spaces % 4 != 0:
            diagnostics.append(Diagnostic(
                line=line_number,
                column=spaces + 1,
                severity=Severity.WARNING,
                message=f"Indentation should be in multiples of 4 spaces (found {spaces})",
                rule="indentation",
            ))

        if trimmed.startswith("let ") and "=" not in line:
            name_start = line.find("let ") + len("let ")
            name = _IDENTIFIER_PREFIX.match(line, name_start)
            if name:
                diagnostics.append(Diagnostic(
                    line=line_number,
                    column=name_start + 1,
                    severity=Severity.WARNING,
                    message=f"Variable '{name.group()}' declared but not initialized",
                    rule="uninitialized_declaration",
                ))

        if trimmed.endswith(";"):
            diagnostics.append(Diagnostic(
                line=line_number,
                column=len(line),
                severity=Severity.HINT,
                message="Semicolon not needed in Swift",
                rule="redundant_semicolon",
            ))

    return diagnostics


# =============================================================================
# Python
# =============================================================================

def lint_python(text: str) -> list[Diagnostic]:
    """Check Python indentation and whitespace."""
    diagnostics: list[Diagnostic] = []

    for line_number, line in enumerate(split_lines(text), start=1):
        trimmed = _trim(line)
        if not trimmed or trimmed.startswith("#"):
            continue

        has_tab = "\t" in line

        if has_tab and " " in line:
            diagnostics.append(Diagnostic(
                line=line_number,
                column=1,
                severity=Severity.ERROR,
                message="Mixed tabs and spaces in indentation",
                rule="mixed_tabs_spaces",
            ))

        spaces = leading_spaces(line)
        if spaces > 0 and spaces % 4 != 0 and not has_tab:
            diagnostics.append(Diagnostic(
                line=line_number,
                column=spaces + 1,
                severity=Severity.WARNING,
                message=f"Python indentation should be multiples of 4 spaces (found {spaces})",
                rule="indentation",
            ))

        if line.endswith((" ", "\t")):
            diagnostics.append(Diagnostic(
                line=line_number,
                column=len(line),
                severity=Severity.HINT,
                message="Trailing whitespace detected",
                rule="trailing_whitespace",
            ))

    return diagnostics


# =============================================================================
# JavaScript / TypeScript
# =============================================================================

_STATEMENT_ENDINGS = (";", "{", "}", ")", "]", "//")
_BINDING_KEYWORDS = ("let ", "const ", "var ")


def lint_javascript(text: str) -> list[Diagnostic]:
    """Check JavaScript statement terminators and indentation."""
    diagnostics: list[Diagnostic] = []

    for line_number, line in enumerate(split_lines(text), start=1):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("//") or trimmed.startswith("*"):
            continue

        if (not trimmed.endswith(_STATEMENT_ENDINGS)
                and any(keyword in trimmed for keyword in _BINDING_KEYWORDS)):
            diagnostics.append(Diagnostic(
                line=line_number,
                column=len(line),
                severity=Severity.HINT,
                message="Consider adding semicolon",
                rule="missing_semicolon",
            ))

        spaces = leading_spaces(line)
        if spaces > 0 and spaces % 2 != 0 and spaces % 4 != 0:
            diagnostics.append(Diagnostic(
                line=line_number,
                column=spaces + 1,
                severity=Severity.WARNING,
                message=f"Indentation should be multiples of 2 or 4 spaces (found {spaces})",
                rule="indentation",
            ))

    return diagnostics


# =============================================================================
# JSON
# =============================================================================

def _reject_constant(name: str) -> None:
    raise ValueError(f"Invalid JSON constant {name}")


def _scan_balance(lines: list[str]) -> list[Diagnostic]:
    """
    Report brace/bracket imbalance outside of string literals.

    String state carries across lines; a backslash escapes the
    next character.
    """
    diagnostics: list[Diagnostic] = []
    open_braces = 0
    open_brackets = 0
    in_string = False
    escape_next = False

    for line_number, line in enumerate(lines, start=1):
        for column, char in enumerate(line, start=1):
            if escape_next:
                escape_next = False
                continue
            if char == "\\":
                escape_next = True
                continue
            if char == '"':
                in_string = not in_string
                continue
            if in_string:
                continue

            if char == "{":
                open_braces += 1
            elif char == "}":
                open_braces -= 1
                if open_braces < 0:
                    diagnostics.append(Diagnostic(
                        line=line_number,
                        column=column,
                        severity=Severity.ERROR,
                        message="Unexpected closing brace '}'",
                        rule="unexpected_closing_brace",
                    ))
                    open_braces = 0
            elif char == "[":
                open_brackets += 1
            elif char == "]":
                open_brackets -= 1
                if open_brackets < 0:
                    diagnostics.append(Diagnostic(
                        line=line_number,
                        column=column,
                        severity=Severity.ERROR,
                        message="Unexpected closing bracket ']'",
                        rule="unexpected_closing_bracket",
                    ))
                    open_brackets = 0

    if open_braces > 0:
        diagnostics.append(Diagnostic(
            line=len(lines),
            column=1,
            severity=Severity.ERROR,
            message=f"Missing {open_braces} closing brace(s)",
            rule="unclosed_brace",
        ))
    if open_brackets > 0:
        diagnostics.append(Diagnostic(
            line=len(lines),
            column=1,
            severity=Severity.ERROR,
            message=f"Missing {open_brackets} closing bracket(s)",
            rule="unclosed_bracket",
        ))

    return diagnostics


def lint_json(text: str) -> list[Diagnostic]:
    """
    Validate JSON.

    The parser is authoritative: valid documents produce no
    diagnostics. The top level must be an object or array, and
    nesting too deep for the parser counts as invalid. Invalid
    documents are scanned for brace/bracket imbalance; if none is
    found the parser error itself is reported.
    """
    try:
        document = json.loads(text, parse_constant=_reject_constant)
        if not isinstance(document, (dict, list)):
            raise ValueError("Top-level value must be an object or array")
        return []
    except (ValueError, RecursionError) as error:
        parse_error = error

    diagnostics = _scan_balance(split_lines(text))
    if diagnostics:
        return diagnostics

    line = getattr(parse_error, "lineno", None) or 1
    column = getattr(parse_error, "colno", None) or 1
    message = getattr(parse_error, "msg", None) or str(parse_error)
    return [Diagnostic(
        line=line,
        column=column,
        severity=Severity.ERROR,
        message=f"Invalid JSON: {message}",
        rule="invalid_json",
    )]


# =============================================================================
# HTML / XML
# =============================================================================

def lint_markup(text: str) -> list[Diagnostic]:
    """Flag lines with an unbalanced '<' or '>' (single-line heuristic)."""
    diagnostics: list[Diagnostic] = []

    for line_number, line in enumerate(split_lines(text), start=1):
        has_open = "<" in line
        has_close = ">" in line

        if has_open and not has_close:
            diagnostics.append(Diagnostic(
                line=line_number,
                column=line.index("<") + 1,
                severity=Severity.ERROR,
                message="Unclosed tag",
                rule="unclosed_tag",
            ))

        if has_close and not has_open:
            diagnostics.append(Diagnostic(
                line=line_number,
                column=line.index(">") + 1,
                severity=Severity.ERROR,
                message="Unopened tag",
                rule="unopened_tag",
            ))

    return diagnostics


# =============================================================================
# Dispatch
# =============================================================================

LINTERS: dict[str, LintFunction] = {
    "swift": lint_swift,
    "python": lint_python,
    "javascript": lint_javascript,
    "typescript": lint_javascript,
    "json": lint_json,
    "html": lint_markup,
    "xml": lint_markup,
}


def lint(text: str, mode: LanguageMode) -> list[Diagnostic]:
    """
    Run the language's heuristic checks over text.

    Languages without checks return an empty list.
    """
    if not text:
        return []

    lint_function = LINTERS.get(mode.id)
    if lint_function is None:
        return []
    return lint_function(text)

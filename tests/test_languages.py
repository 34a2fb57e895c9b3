"""
Tests for the language registry and built-in language modes.
"""

import re

import pytest

from padlint.core.highlighter import compile_pattern
from padlint.core.languages import (
    BUILTIN_MODES,
    LanguageRegistry,
    default_registry,
)
from padlint.core.models import LanguageMode, LanguageNotFoundError


@pytest.fixture
def registry():
    return LanguageRegistry()


class TestBuiltinModes:
    """Tests for the built-in language table."""

    def test_registration_order(self, registry):
        assert registry.ids() == [
            "swift", "python", "javascript", "json", "html", "css",
            "typescript", "markdown", "yaml", "xml", "shell",
        ]

    def test_all_patterns_compile(self):
        for mode in BUILTIN_MODES:
            for pattern in mode.patterns:
                assert compile_pattern(pattern) is not None, (mode.id, pattern.regex)

    def test_extensions_are_lowercase_without_dot(self):
        for mode in BUILTIN_MODES:
            for ext in mode.file_extensions:
                assert ext == ext.lower()
                assert not ext.startswith(".")

    def test_comment_tokens(self, registry):
        swift = registry.require("swift")
        assert swift.line_comment == "//"
        assert swift.block_comment_start == "/*"
        assert swift.block_comment_end == "*/"

        json_mode = registry.require("json")
        assert json_mode.line_comment == ""
        assert not json_mode.has_comments

    def test_line_anchored_patterns_are_multiline(self, registry):
        markdown = registry.require("markdown")
        anchored = [p for p in markdown.patterns if p.regex.startswith("^")]
        assert anchored
        assert all(p.flags & re.MULTILINE for p in anchored)

    def test_python_keywords(self, registry):
        python = registry.require("python")
        assert {"def", "class", "elif", "nonlocal"} <= python.keywords


class TestDetection:
    """Tests for extension-based detection."""

    def test_detect_lowercase(self, registry):
        assert registry.detect("py").id == "python"

    def test_detect_is_case_insensitive(self, registry):
        assert registry.detect("PY").id == "python"

    def test_detect_unknown_extension(self, registry):
        assert registry.detect("zzz") is None

    def test_detect_ignores_leading_dot(self, registry):
        assert registry.detect(".json").id == "json"

    def test_detect_alternate_extensions(self, registry):
        assert registry.detect("yml").id == "yaml"
        assert registry.detect("htm").id == "html"
        assert registry.detect("zsh").id == "shell"
        assert registry.detect("tsx").id == "typescript"

    def test_detect_for_file(self, registry):
        assert registry.detect_for_file("/tmp/Main.SWIFT").id == "swift"
        assert registry.detect_for_file("notes.md").id == "markdown"
        assert registry.detect_for_file("Makefile") is None

    def test_first_registration_wins(self):
        first = LanguageMode(id="first", display_name="First", file_extensions=("dup",))
        second = LanguageMode(id="second", display_name="Second", file_extensions=("dup",))
        registry = LanguageRegistry([first, second])
        assert registry.detect("dup") is first

    def test_matches_extension(self, registry):
        python = registry.require("python")
        assert python.matches_extension("PY")
        assert python.matches_extension(".py")
        assert not python.matches_extension("pyc")


class TestLookup:
    """Tests for id lookup."""

    def test_resolve_by_id(self, registry):
        assert registry.resolve("Python").id == "python"
        assert registry.resolve("cobol") is None

    def test_require_raises_for_unknown_id(self, registry):
        with pytest.raises(LanguageNotFoundError) as excinfo:
            registry.require("cobol")
        assert excinfo.value.language == "cobol"

    def test_lookup_prefers_id_then_extension(self, registry):
        assert registry.lookup("json").id == "json"
        assert registry.lookup("yml").id == "yaml"

    def test_lookup_raises_lookup_error(self, registry):
        with pytest.raises(LookupError):
            registry.lookup("zzz")

    def test_contains(self, registry):
        assert "swift" in registry
        assert "zzz" not in registry
        assert 42 not in registry

    def test_duplicate_ids_rejected(self):
        mode = LanguageMode(id="dup", display_name="Dup")
        with pytest.raises(ValueError):
            LanguageRegistry([mode, mode])


class TestRegistryExtension:
    """Tests for adding modes to a registry."""

    def test_with_modes_appends(self, registry):
        custom = LanguageMode(id="ini", display_name="INI", file_extensions=("ini", "py"))
        extended = registry.with_modes([custom])

        assert len(extended) == len(registry) + 1
        assert extended.detect("ini") is custom
        # Built-in still owns its extension
        assert extended.detect("py").id == "python"
        # Base registry untouched
        assert "ini" not in registry

    def test_default_registry_is_shared(self):
        assert default_registry() is default_registry()
        assert len(default_registry()) == len(BUILTIN_MODES)

"""
Tests for the padlint command line entry point.
"""

import io
import json
import logging
import sys

import pytest

import main
from padlint.services.custom_modes import CustomModeStore, mode_from_dict
from padlint.services.settings import SettingsManager


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the global logging and excepthook changes made by main()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    excepthook = sys.excepthook
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    sys.excepthook = excepthook


@pytest.fixture
def config(tmp_path):
    """Settings file with defaults written to disk."""
    path = tmp_path / "settings.json"
    SettingsManager(path).reset()
    return path


def run(*args: str) -> tuple[int, str]:
    out = io.StringIO()
    code = main.main(list(args), out=out)
    return code, out.getvalue()


class TestLintCommand:
    """Tests for `padlint lint`."""

    def test_clean_file(self, tmp_path, config):
        path = tmp_path / "data.json"
        path.write_text('{"a": 1}', encoding="utf-8")

        code, output = run("--config", str(config), "lint", str(path))

        assert code == main.EXIT_OK
        assert output == ""

    def test_errors_exit_one(self, tmp_path, config):
        path = tmp_path / "data.json"
        path.write_text('{"a":1}}', encoding="utf-8")

        code, output = run("--config", str(config), "lint", str(path))

        assert code == main.EXIT_LINT_ERRORS
        assert output == f"{path}:1:8: error: Unexpected closing brace '}}' [unexpected_closing_brace]\n"

    def test_warnings_exit_zero(self, tmp_path, config):
        path = tmp_path / "main.swift"
        path.write_text("func f() {\n   x = 1\n}", encoding="utf-8")

        code, output = run("--config", str(config), "lint", str(path))

        assert code == main.EXIT_OK
        assert ":2:4: warning:" in output

    def test_json_output_sorted(self, tmp_path, config):
        path = tmp_path / "script.py"
        path.write_text("x = 1  \nif x:\n\t y = 2\n", encoding="utf-8")

        code, output = run("--config", str(config), "lint", str(path), "--format", "json")

        data = json.loads(output)
        assert code == main.EXIT_LINT_ERRORS
        assert data["language"] == "python"
        assert [(d["line"], d["rule"]) for d in data["diagnostics"]] == [
            (1, "trailing_whitespace"),
            (3, "mixed_tabs_spaces"),
        ]
        assert data["diagnostics"][1]["severity"] == "error"

    def test_min_severity(self, tmp_path, config):
        path = tmp_path / "script.py"
        path.write_text("x = 1  \n", encoding="utf-8")

        code, output = run("--config", str(config), "lint", str(path), "--min-severity", "warning")

        assert code == main.EXIT_OK
        assert output == ""

    def test_language_override(self, tmp_path, config):
        path = tmp_path / "payload.txt"
        path.write_text('{"a":1', encoding="utf-8")

        code, output = run("--config", str(config), "lint", str(path), "--language", "json")

        assert code == main.EXIT_LINT_ERRORS
        assert "unclosed_brace" in output

    def test_crlf_line_numbers(self, tmp_path, config):
        path = tmp_path / "script.py"
        path.write_bytes(b"x = 1\r\n  y = 2\r\n")

        code, output = run("--config", str(config), "lint", str(path))

        assert ":2:3: warning:" in output

    def test_disabled_rules_from_settings(self, tmp_path, config):
        manager = SettingsManager(config)
        manager.settings.analysis.disabled_rules = ["trailing_whitespace"]
        manager.save()

        path = tmp_path / "script.py"
        path.write_text("x = 1  \n", encoding="utf-8")

        code, output = run("--config", str(config), "lint", str(path))

        assert output == ""

    def test_custom_mode_from_settings(self, tmp_path, config):
        modes_path = tmp_path / "custom_modes.json"
        CustomModeStore(modes_path).add(mode_from_dict({"name": "INI", "file_extensions": ["ini"]}))
        manager = SettingsManager(config)
        manager.settings.custom_modes_path = str(modes_path)
        manager.save()

        path = tmp_path / "setup.ini"
        path.write_text("[core]\n", encoding="utf-8")

        code, output = run("--config", str(config), "lint", str(path))

        assert code == main.EXIT_OK
        assert output == ""


class TestErrors:
    """Tests for usage and configuration errors."""

    def test_unknown_extension(self, tmp_path, config, caplog):
        path = tmp_path / "file.zzz"
        path.write_text("text", encoding="utf-8")

        code, _ = run("--config", str(config), "lint", str(path))

        assert code == main.EXIT_USAGE

    def test_unknown_language_option(self, tmp_path, config):
        path = tmp_path / "file.py"
        path.write_text("pass", encoding="utf-8")

        code, _ = run("--config", str(config), "lint", str(path), "--language", "cobol")

        assert code == main.EXIT_USAGE

    def test_missing_file(self, tmp_path, config):
        code, _ = run("--config", str(config), "lint", str(tmp_path / "missing.py"))
        assert code == main.EXIT_USAGE

    def test_non_utf8_file(self, tmp_path, config, caplog):
        path = tmp_path / "data.json"
        path.write_bytes(b'{"a": "\xff"}')

        code, output = run("--config", str(config), "lint", str(path))

        assert code == main.EXIT_USAGE
        assert output == ""

    def test_missing_command(self):
        with pytest.raises(SystemExit) as excinfo:
            main.parse_arguments([])
        assert excinfo.value.code == 2


class TestHighlightCommand:
    """Tests for `padlint highlight`."""

    def test_text_output_skips_default_spans(self, tmp_path, config):
        path = tmp_path / "script.py"
        path.write_text("pass # done", encoding="utf-8")

        code, output = run("--config", str(config), "highlight", str(path), "--theme", "monokai")

        assert code == main.EXIT_OK
        lines = output.splitlines()
        assert lines[0] == "0+4\tkeyword\t#F92672\t'pass'"
        assert lines[1] == "5+6\tcomment\t#75715E\t'# done'"
        assert len(lines) == 2

    def test_json_output(self, tmp_path, config):
        path = tmp_path / "data.json"
        path.write_text('{"a": 1}', encoding="utf-8")

        code, output = run("--config", str(config), "highlight", str(path),
                           "--format", "json", "--theme", "xcode-dark", "--dark")

        data = json.loads(output)
        assert data["theme"] == "xcode-dark"
        assert data["spans"][1] == {
            "start": 1, "length": 3, "style_tag": "string",
            "style": "#CE9178", "text": '"a"',
        }
        assert sum(span["length"] for span in data["spans"]) == len('{"a": 1}')

    def test_unknown_theme_falls_back(self, tmp_path, config):
        path = tmp_path / "script.py"
        path.write_text("pass", encoding="utf-8")

        code, output = run("--config", str(config), "highlight", str(path), "--theme", "missing")

        assert code == main.EXIT_OK
        assert output == "0+4\tkeyword\t#0033B3\t'pass'\n"


class TestLanguagesCommand:
    """Tests for `padlint languages`."""

    def test_lists_builtin_languages(self, config):
        code, output = run("--config", str(config), "languages")

        assert code == main.EXIT_OK
        ids = [line.split()[0] for line in output.splitlines()]
        assert ids[:3] == ["swift", "python", "javascript"]
        assert len(ids) == 11


class TestLogging:
    """Tests for logging setup."""

    def test_log_file(self, tmp_path, config):
        log_file = tmp_path / "logs" / "padlint.log"
        path = tmp_path / "file.zzz"
        path.write_text("text", encoding="utf-8")

        run("--config", str(config), "--log-file", str(log_file), "lint", str(path))

        assert log_file.exists()
        content = log_file.read_text(encoding="utf-8")
        assert "ERROR" in content
        assert "Unknown language" in content

    def test_formatter_without_colors(self):
        formatter = main.LogFormatter(use_colors=False)
        record = logging.LogRecord("padlint", logging.WARNING, __file__, 1, "message", None, None)
        assert formatter.format(record).endswith("| WARNING  | padlint | message")

    def test_exception_handler_logs_critical(self, caplog):
        handler = main.ExceptionHandler(logging.getLogger("padlint.test"))
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            exc_info = sys.exc_info()

        with caplog.at_level(logging.CRITICAL):
            handler.handle_exception(*exc_info)

        assert "Unhandled exception" in caplog.text

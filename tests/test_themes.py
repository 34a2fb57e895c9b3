"""
Tests for color themes and style resolution.
"""

import json
import logging

import pytest

from padlint.core.models import StyleTag
from padlint.services.themes import (
    BUILTIN_THEMES,
    DEFAULT_CONSTANT,
    Theme,
    ThemeColor,
    ThemeManager,
    ThemeStyleResolver,
    get_theme,
    parse_hex_color,
)


def theme_data(theme_id: str = "custom", **overrides) -> dict:
    data = {
        "id": theme_id,
        "name": "Custom",
        "background": "#101010",
        "foreground": {"light": "#000000", "dark": "#FFFFFF"},
        "selection": "#333333",
        "comment": "#777777",
        "keyword": {"light": "#0000AA", "dark": "#AAAAFF"},
        "string": "#AA0000",
        "number": "#00AA00",
        "function": "#123456",
        "variable": "#654321",
        "type": "#ABCDEF",
    }
    data.update(overrides)
    return data


class TestParseHexColor:
    """Tests for hex color parsing."""

    def test_six_digits(self):
        assert parse_hex_color("#FF8000") == (255, 128, 0, 255)

    def test_three_digits(self):
        assert parse_hex_color("#f80") == (255, 136, 0, 255)

    def test_eight_digits_alpha_first(self):
        assert parse_hex_color("80FF0000") == (255, 0, 0, 128)

    @pytest.mark.parametrize("value", ["", "#12", "#GGGGGG", "#12345", "red"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_hex_color(value)


class TestTheme:
    """Tests for theme definitions."""

    def test_builtin_themes(self):
        ids = [theme.id for theme in BUILTIN_THEMES]
        assert ids[0] == "xcode-light"
        assert len(ids) == len(set(ids)) == 9
        assert all(theme.built_in for theme in BUILTIN_THEMES)

    def test_builtin_colors_parse(self):
        for theme in BUILTIN_THEMES:
            for tag in StyleTag:
                parse_hex_color(theme.color_for(tag))
                parse_hex_color(theme.color_for(tag, dark=True))

    def test_color_for_tags(self):
        theme = get_theme("monokai")
        assert theme.color_for(StyleTag.KEYWORD) == "#F92672"
        assert theme.color_for(StyleTag.CONSTANT) == DEFAULT_CONSTANT.light
        assert theme.color_for(StyleTag.DEFAULT) == "#F8F8F2"

    def test_get_theme_falls_back(self):
        assert get_theme("missing") is BUILTIN_THEMES[0]

    def test_from_dict_light_and_dark(self):
        theme = Theme.from_dict(theme_data())
        assert not theme.built_in
        assert theme.color_for(StyleTag.KEYWORD) == "#0000AA"
        assert theme.color_for(StyleTag.KEYWORD, dark=True) == "#AAAAFF"
        assert theme.background == ThemeColor.single("#101010")
        assert theme.constant == DEFAULT_CONSTANT

    def test_from_dict_missing_color(self):
        data = theme_data()
        del data["keyword"]
        with pytest.raises(KeyError):
            Theme.from_dict(data)

    def test_from_dict_invalid_color(self):
        with pytest.raises(ValueError):
            Theme.from_dict(theme_data(string="not-a-color"))

    def test_to_dict_round_trip(self):
        theme = Theme.from_dict(theme_data(constant="#FF00FF"))
        assert Theme.from_dict(theme.to_dict()) == theme
        assert "built_in" not in theme.to_dict()


class TestThemeStyleResolver:
    """Tests for the callable resolver."""

    def test_resolves_for_appearance(self):
        theme = Theme.from_dict(theme_data())
        light = ThemeStyleResolver(theme)
        dark = ThemeStyleResolver(theme, dark=True)

        assert light(StyleTag.KEYWORD) == "#0000AA"
        assert dark(StyleTag.KEYWORD) == "#AAAAFF"
        assert light.foreground == "#000000"
        assert dark.foreground == "#FFFFFF"
        assert dark.background == "#101010"


class TestThemeManager:
    """Tests for custom theme loading."""

    def test_defaults_without_directory(self):
        manager = ThemeManager()
        assert manager.current_theme is BUILTIN_THEMES[0]
        assert manager.all_themes == list(BUILTIN_THEMES)

    def test_loads_custom_themes(self, tmp_path):
        (tmp_path / "mine.theme.json").write_text(json.dumps(theme_data("mine")), encoding="utf-8")
        (tmp_path / "ignored.json").write_text(json.dumps(theme_data("ignored")), encoding="utf-8")

        manager = ThemeManager(tmp_path, current_id="mine")

        assert manager.all_themes[0].id == "mine"
        assert manager.find("ignored") is None
        assert manager.current_theme.id == "mine"

    def test_bad_theme_file_is_skipped(self, tmp_path, caplog):
        (tmp_path / "bad.theme.json").write_text("{not json", encoding="utf-8")
        (tmp_path / "partial.theme.json").write_text(json.dumps({"id": "partial"}), encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            manager = ThemeManager(tmp_path)

        assert manager.all_themes == list(BUILTIN_THEMES)
        assert "Failed to load theme" in caplog.text

    def test_unknown_current_id_falls_back(self, tmp_path):
        manager = ThemeManager(tmp_path, current_id="missing")
        assert manager.current_theme is BUILTIN_THEMES[0]

    def test_set_theme(self):
        manager = ThemeManager()
        assert manager.set_theme("github-dark")
        assert manager.current_theme.id == "github-dark"
        assert not manager.set_theme("missing")
        assert manager.current_theme.id == "github-dark"

    def test_resolver_uses_current_theme(self):
        manager = ThemeManager(current_id="solarized-dark")
        resolver = manager.resolver(dark=True)
        assert resolver(StyleTag.STRING) == "#2AA198"
        assert resolver.dark

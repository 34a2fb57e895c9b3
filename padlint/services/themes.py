"""
Color themes and style resolution.

Provides:
- Light/dark color pairs and theme definitions
- Built-in themes
- A callable style resolver mapping style tags to hex colors
- Loading of custom themes from JSON files
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from padlint.core.models import StyleTag


@dataclass(frozen=True)
class ThemeColor:
    """A color with separate light and dark appearance values."""
    light: str
    dark: str

    @classmethod
    def single(cls, hex_color: str) -> 'ThemeColor':
        """Same color for both appearances."""
        return cls(hex_color, hex_color)

    def for_appearance(self, dark: bool) -> str:
        return self.dark if dark else self.light


def parse_hex_color(value: str) -> tuple[int, int, int, int]:
    """
    Parse a hex color into (r, g, b, a).

    Accepts RGB (3 digits), RRGGBB (6) and AARRGGBB (8).

    Raises:
        ValueError: if the value is not a supported hex color
    """
    digits = value.strip().lstrip('#')
    try:
        number = int(digits, 16)
    except ValueError:
        raise ValueError(f"Invalid hex color: {value!r}") from None

    if len(digits) == 3:
        r, g, b = (number >> 8) * 17, (number >> 4 & 0xF) * 17, (number & 0xF) * 17
        return (r, g, b, 255)
    if len(digits) == 6:
        return (number >> 16, number >> 8 & 0xFF, number & 0xFF, 255)
    if len(digits) == 8:
        return (number >> 16 & 0xFF, number >> 8 & 0xFF, number & 0xFF, number >> 24)
    raise ValueError(f"Invalid hex color: {value!r}")


DEFAULT_CONSTANT = ThemeColor.single("#AF52DE")


@dataclass(frozen=True)
class Theme:
    """Editor color theme."""
    id: str
    name: str
    background: ThemeColor
    foreground: ThemeColor
    selection: ThemeColor
    comment: ThemeColor
    keyword: ThemeColor
    string: ThemeColor
    number: ThemeColor
    function: ThemeColor
    variable: ThemeColor
    type: ThemeColor
    constant: ThemeColor = DEFAULT_CONSTANT
    built_in: bool = False

    def color_for(self, tag: StyleTag, dark: bool = False) -> str:
        """Get the hex color for a style tag."""
        color = {
            StyleTag.COMMENT: self.comment,
            StyleTag.STRING: self.string,
            StyleTag.KEYWORD: self.keyword,
            StyleTag.CONSTANT: self.constant,
            StyleTag.TYPE: self.type,
            StyleTag.NUMBER: self.number,
        }.get(tag, self.foreground)
        return color.for_appearance(dark)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop('built_in')
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Theme':
        """
        Create a theme from a JSON-style dictionary.

        Color entries may be a {"light", "dark"} object or a single
        hex string used for both appearances.
        """
        kwargs: dict[str, Any] = {'id': data['id'], 'name': data.get('name', data['id'])}

        for f in fields(cls):
            if f.name in ('id', 'name', 'built_in'):
                continue
            if f.name not in data:
                if f.name == 'constant':
                    continue
                raise KeyError(f.name)

            value = data[f.name]
            if isinstance(value, str):
                color = ThemeColor.single(value)
            else:
                color = ThemeColor(value['light'], value['dark'])
            parse_hex_color(color.light)
            parse_hex_color(color.dark)
            kwargs[f.name] = color

        return cls(**kwargs)


def _builtin(theme_id: str, name: str, colors: dict[str, str]) -> Theme:
    return Theme(
        id=theme_id,
        name=name,
        built_in=True,
        **{key: ThemeColor.single(value) for key, value in colors.items()},
    )


BUILTIN_THEMES: tuple[Theme, ...] = (
    _builtin("xcode-light", "Xcode Light", dict(
        background="#FFFFFF", foreground="#000000", selection="#B3D7FF",
        comment="#007400", keyword="#0033B3", string="#C41A16", number="#1750EB",
        function="#00627A", variable="#000000", type="#267F99",
    )),
    _builtin("xcode-dark", "Xcode Dark", dict(
        background="#1F1F24", foreground="#DEDEDE", selection="#264F78",
        comment="#6A9955", keyword="#569CD6", string="#CE9178", number="#B5CEA8",
        function="#DCDCAA", variable="#9CDCFE", type="#4EC9B0",
    )),
    _builtin("vscode-dark", "VS Code Dark+", dict(
        background="#1E1E1E", foreground="#D4D4D4", selection="#264F78",
        comment="#6A9955", keyword="#569CD6", string="#CE9178", number="#B5CEA8",
        function="#DCDCAA", variable="#9CDCFE", type="#4EC9B0",
    )),
    _builtin("vscode-light", "VS Code Light+", dict(
        background="#FFFFFF", foreground="#000000", selection="#ADD6FF",
        comment="#008000", keyword="#0000FF", string="#A31515", number="#098658",
        function="#795E26", variable="#001080", type="#267F99",
    )),
    _builtin("monokai", "Monokai", dict(
        background="#272822", foreground="#F8F8F2", selection="#49483E",
        comment="#75715E", keyword="#F92672", string="#E6DB74", number="#AE81FF",
        function="#A6E22E", variable="#F8F8F2", type="#66D9EF",
    )),
    _builtin("solarized-dark", "Solarized Dark", dict(
        background="#002B36", foreground="#839496", selection="#073642",
        comment="#586E75", keyword="#859900", string="#2AA198", number="#D33682",
        function="#268BD2", variable="#839496", type="#B58900",
    )),
    _builtin("solarized-light", "Solarized Light", dict(
        background="#FDF6E3", foreground="#657B83", selection="#EEE8D5",
        comment="#93A1A1", keyword="#859900", string="#2AA198", number="#D33682",
        function="#268BD2", variable="#657B83", type="#B58900",
    )),
    _builtin("github-dark", "GitHub Dark", dict(
        background="#0D1117", foreground="#C9D1D9", selection="#264F78",
        comment="#8B949E", keyword="#FF7B72", string="#A5D6FF", number="#79C0FF",
        function="#D2A8FF", variable="#C9D1D9", type="#79C0FF",
    )),
    _builtin("github-light", "GitHub Light", dict(
        background="#FFFFFF", foreground="#24292F", selection="#B6E3FF",
        comment="#6E7781", keyword="#CF222E", string="#0A3069", number="#0550AE",
        function="#8250DF", variable="#953800", type="#116329",
    )),
)


def get_theme(theme_id: str) -> Theme:
    """Get a built-in theme by id, falling back to the first theme."""
    for theme in BUILTIN_THEMES:
        if theme.id == theme_id:
            return theme
    return BUILTIN_THEMES[0]


class ThemeStyleResolver:
    """Style resolver mapping style tags to a theme's hex colors."""

    def __init__(self, theme: Theme, dark: bool = False):
        self.theme = theme
        self.dark = dark

    def __call__(self, tag: StyleTag) -> str:
        return self.theme.color_for(tag, self.dark)

    @property
    def background(self) -> str:
        return self.theme.background.for_appearance(self.dark)

    @property
    def foreground(self) -> str:
        return self.theme.foreground.for_appearance(self.dark)


class ThemeManager:
    """
    Manages available themes and the active selection.

    Custom themes are read from ``*.theme.json`` files in a
    directory and listed ahead of the built-in themes.
    """

    THEME_SUFFIX = ".theme.json"

    def __init__(self, themes_dir: Optional[Path] = None, current_id: str = "xcode-light"):
        self.themes_dir = themes_dir
        self._custom: list[Theme] = self._load_custom_themes()
        self._current = self.find(current_id) or BUILTIN_THEMES[0]

    def _load_custom_themes(self) -> list[Theme]:
        if self.themes_dir is None or not self.themes_dir.is_dir():
            return []

        themes: list[Theme] = []
        for path in sorted(self.themes_dir.glob(f"*{self.THEME_SUFFIX}")):
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    themes.append(Theme.from_dict(json.load(f)))
            except (OSError, ValueError, KeyError, TypeError) as e:
                logging.warning(f"ThemeManager - Failed to load theme from {path}: {e}")
        return themes

    @property
    def all_themes(self) -> list[Theme]:
        return self._custom + list(BUILTIN_THEMES)

    @property
    def current_theme(self) -> Theme:
        return self._current

    def find(self, theme_id: str) -> Optional[Theme]:
        """Find a custom or built-in theme by id."""
        for theme in self.all_themes:
            if theme.id == theme_id:
                return theme
        return None

    def set_theme(self, theme_id: str) -> bool:
        """Set the active theme; returns False if the id is unknown."""
        theme = self.find(theme_id)
        if theme is None:
            logging.warning(f"ThemeManager - Unknown theme id {theme_id!r}")
            return False
        self._current = theme
        return True

    def resolver(self, dark: bool = False) -> ThemeStyleResolver:
        """Get a style resolver for the active theme."""
        return ThemeStyleResolver(self._current, dark)

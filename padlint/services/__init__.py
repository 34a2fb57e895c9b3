"""
Application services.

Provides:
- Color themes and style resolvers
- User-defined language modes
- Persistent settings
"""

from padlint.services.themes import (
    BUILTIN_THEMES,
    Theme,
    ThemeColor,
    ThemeManager,
    ThemeStyleResolver,
    get_theme,
    parse_hex_color,
)
from padlint.services.custom_modes import (
    CustomModeStore,
    mode_from_dict,
    mode_to_dict,
)
from padlint.services.settings import (
    Appearance,
    ApplicationSettings,
    SettingsManager,
)

__all__ = [
    # Themes
    'BUILTIN_THEMES',
    'Theme',
    'ThemeColor',
    'ThemeManager',
    'ThemeStyleResolver',
    'get_theme',
    'parse_hex_color',
    # Custom modes
    'CustomModeStore',
    'mode_from_dict',
    'mode_to_dict',
    # Settings
    'Appearance',
    'ApplicationSettings',
    'SettingsManager',
]

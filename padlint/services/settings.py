"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Callable, Optional
from enum import Enum

from padlint.core.languages import LanguageRegistry, default_registry
from padlint.core.models import Severity
from padlint.core.pipeline import AnalysisOptions
from padlint.services.custom_modes import CustomModeStore
from padlint.services.themes import ThemeManager, ThemeStyleResolver


class Appearance(Enum):
    """Editor appearance options."""
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_string(cls, value: str) -> 'Appearance':
        """Create from string value."""
        try:
            # Try to match by value
            for appearance in cls:
                if appearance.value == value.lower():
                    return appearance
            # Try to match by name
            return cls[value.upper()]
        except (KeyError, AttributeError):
            return cls.SYSTEM


@dataclass
class AnalysisSettings:
    """Settings for highlighting and linting."""
    lint_enabled: bool = True
    highlight_enabled: bool = True
    min_severity: str = "hint"
    disabled_rules: list[str] = field(default_factory=list)
    debounce_ms: int = 250


@dataclass
class AppearanceSettings:
    """Settings for editor colors and fonts."""
    theme_id: str = "xcode-light"
    appearance: Appearance = Appearance.LIGHT
    font_family: str = "Menlo"
    font_size: int = 12

    @property
    def is_dark(self) -> bool:
        return self.appearance == Appearance.DARK


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    analysis: AnalysisSettings = field(default_factory=AnalysisSettings)
    appearance: AppearanceSettings = field(default_factory=AppearanceSettings)
    custom_modes_path: str = ""
    themes_dir: str = ""


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = settings_path or self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None
        self._observers: list[Callable[[ApplicationSettings], None]] = []

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'PadLint' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'padlint' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logging.warning(f"SettingsManager - Failed to load {self.settings_path}, using defaults: {e}")
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            data = self._to_dict(settings)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)

            self._settings = settings
            self._notify_observers()
            return True

        except OSError as e:
            logging.error(f"SettingsManager - Failed to save {self.settings_path}: {e}")
            return False

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def add_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Add a callback to be notified of settings changes."""
        self._observers.append(callback)

    def remove_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Remove a settings change observer."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        """Notify all observers of settings change."""
        for callback in self._observers:
            try:
                callback(self._settings)
            except Exception as e:
                logging.error(f"SettingsManager - Settings observer failed: {e}", exc_info=True)

    # -------------------------------------------------------------------------
    # Builders for analysis collaborators
    # -------------------------------------------------------------------------

    def build_options(self) -> AnalysisOptions:
        """Create analysis options from the current settings."""
        analysis = self.settings.analysis
        try:
            min_severity = Severity.from_name(analysis.min_severity)
        except KeyError:
            logging.warning(f"SettingsManager - Unknown severity {analysis.min_severity!r}, using hint")
            min_severity = Severity.HINT

        return AnalysisOptions(
            lint_enabled=analysis.lint_enabled,
            highlight_enabled=analysis.highlight_enabled,
            min_severity=min_severity,
            disabled_rules=frozenset(analysis.disabled_rules),
        )

    def build_registry(self) -> LanguageRegistry:
        """Create the built-in registry extended with custom modes."""
        registry = default_registry()
        if not self.settings.custom_modes_path:
            return registry

        store = CustomModeStore(Path(self.settings.custom_modes_path))
        extra = []
        for mode in store.modes:
            if mode.id in registry:
                logging.warning(f"SettingsManager - Custom mode {mode.id!r} shadows a built-in language, skipped")
                continue
            extra.append(mode)
        return registry.with_modes(extra)

    def build_theme_manager(self) -> ThemeManager:
        """Create a theme manager for the configured theme."""
        themes_dir = Path(self.settings.themes_dir) if self.settings.themes_dir else None
        return ThemeManager(themes_dir, self.settings.appearance.theme_id)

    def build_resolver(self) -> ThemeStyleResolver:
        """Create a style resolver for the configured theme and appearance."""
        return self.build_theme_manager().resolver(self.settings.appearance.is_dark)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        def convert(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.name
            elif hasattr(obj, '__dataclass_fields__'):
                return {k: convert(v) for k, v in asdict(obj).items()}
            elif isinstance(obj, list):
                return [convert(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            else:
                return obj

        return convert(settings)

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        analysis_data = data.get('analysis', {})
        defaults = AnalysisSettings()
        analysis = AnalysisSettings(
            lint_enabled=analysis_data.get('lint_enabled', defaults.lint_enabled),
            highlight_enabled=analysis_data.get('highlight_enabled', defaults.highlight_enabled),
            min_severity=analysis_data.get('min_severity', defaults.min_severity),
            disabled_rules=list(analysis_data.get('disabled_rules', [])),
            debounce_ms=analysis_data.get('debounce_ms', defaults.debounce_ms),
        )

        appearance_data = data.get('appearance', {})
        appearance = AppearanceSettings(
            theme_id=appearance_data.get('theme_id', AppearanceSettings().theme_id),
            appearance=Appearance.from_string(appearance_data.get('appearance', 'LIGHT')),
            font_family=appearance_data.get('font_family', AppearanceSettings().font_family),
            font_size=appearance_data.get('font_size', AppearanceSettings().font_size),
        )

        return ApplicationSettings(
            analysis=analysis,
            appearance=appearance,
            custom_modes_path=data.get('custom_modes_path', ''),
            themes_dir=data.get('themes_dir', ''),
        )

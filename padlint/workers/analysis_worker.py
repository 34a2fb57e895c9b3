"""
Workers for text analysis.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from padlint.core.highlighter import StyleResolver
from padlint.core.languages import LanguageRegistry
from padlint.core.models import AnalysisResult, LanguageMode, LanguageNotFoundError
from padlint.core.pipeline import AnalysisOptions, analyze
from padlint.workers.base_worker import BaseWorker


class AnalysisWorker(BaseWorker):
    """
    Worker for highlighting and linting a text snapshot.
    """

    def __init__(
        self,
        text: str,
        language: Union[str, LanguageMode],
        registry: Optional[LanguageRegistry] = None,
        options: Optional[AnalysisOptions] = None,
        theme: Optional[StyleResolver] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.text = text
        self.language = language
        self.registry = registry
        self.options = options
        self.theme = theme

    def do_work(self) -> AnalysisResult:
        """Analyze the snapshot."""
        self.report_status("Analyzing...")
        return analyze(
            self.text,
            self.language,
            theme=self.theme,
            registry=self.registry,
            options=self.options,
        )


class DebouncedAnalyzer(QObject):
    """
    Re-analyzes a text source after edits settle.

    Each schedule() restarts the delay; when it expires the
    current text is analyzed and `analyzed` is emitted.
    """

    analyzed = pyqtSignal(object)  # AnalysisResult
    failed = pyqtSignal(str)

    def __init__(
        self,
        text_source: Callable[[], str],
        language: Union[str, LanguageMode],
        delay_ms: int = 250,
        registry: Optional[LanguageRegistry] = None,
        options: Optional[AnalysisOptions] = None,
        theme: Optional[StyleResolver] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self._text_source = text_source
        self.language = language
        self.registry = registry
        self.options = options
        self.theme = theme
        self.last_result: Optional[AnalysisResult] = None

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, delay_ms))
        self._timer.timeout.connect(self.run_now)

    @property
    def is_pending(self) -> bool:
        return self._timer.isActive()

    def schedule(self) -> None:
        """Schedule analysis, restarting any pending delay."""
        self._timer.start()

    def cancel(self) -> None:
        """Drop a pending analysis."""
        self._timer.stop()

    def run_now(self) -> None:
        """Analyze immediately."""
        self._timer.stop()
        try:
            result = analyze(
                self._text_source(),
                self.language,
                theme=self.theme,
                registry=self.registry,
                options=self.options,
            )
        except LanguageNotFoundError as e:
            logging.error(f"DebouncedAnalyzer - {e}")
            self.failed.emit(str(e))
            return

        self.last_result = result
        self.analyzed.emit(result)

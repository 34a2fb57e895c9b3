"""
Tests for background analysis workers using pytest-qt.
"""

from padlint.core.models import AnalysisResult, Severity, StyleTag
from padlint.core.pipeline import AnalysisOptions
from padlint.workers import (
    AnalysisWorker,
    DebouncedAnalyzer,
    WorkerState,
    WorkerThread,
)


class TestAnalysisWorker:
    """Tests for the AnalysisWorker."""

    def test_run_emits_result(self, qtbot):
        worker = AnalysisWorker('{"a":1', "json")

        with qtbot.waitSignal(worker.signals.finished) as blocker:
            worker.run()

        result = blocker.args[0]
        assert isinstance(result, AnalysisResult)
        assert [d.rule for d in result.diagnostics] == ["unclosed_brace"]
        assert worker.state is WorkerState.COMPLETED
        assert worker.result is result

    def test_status_and_state_signals(self, qtbot):
        worker = AnalysisWorker("pass", "python")
        statuses = []
        states = []
        worker.signals.status.connect(statuses.append)
        worker.signals.state_changed.connect(states.append)

        worker.run()

        assert statuses == ["Analyzing..."]
        assert states == [WorkerState.RUNNING, WorkerState.COMPLETED]

    def test_options_and_theme_forwarded(self, qtbot):
        worker = AnalysisWorker(
            "if x:\n\t y = 1  ",
            "python",
            options=AnalysisOptions(min_severity=Severity.ERROR),
            theme=lambda tag: tag.value,
        )
        worker.run()

        assert [d.rule for d in worker.result.diagnostics] == ["mixed_tabs_spaces"]
        assert worker.result.spans[0].style_tag is StyleTag.KEYWORD
        assert worker.result.spans[0].style == "keyword"

    def test_cancel_before_run(self, qtbot):
        worker = AnalysisWorker("pass", "python")
        worker.cancel()

        with qtbot.waitSignal(worker.signals.cancelled):
            worker.run()

        assert worker.state is WorkerState.CANCELLED
        assert worker.result is None

    def test_cancel_during_run_discards_result(self, qtbot):
        worker = AnalysisWorker("pass", "python")
        finished = []
        worker.signals.finished.connect(finished.append)
        worker.signals.started.connect(worker.cancel)

        with qtbot.waitSignal(worker.signals.cancelled):
            worker.run()

        assert worker.state is WorkerState.CANCELLED
        assert worker.result is None
        assert finished == []

    def test_unknown_language_reports_error(self, qtbot):
        worker = AnalysisWorker("text", "cobol")

        with qtbot.waitSignal(worker.signals.error) as blocker:
            worker.run()

        assert blocker.args[0] == "LanguageNotFoundError"
        assert "cobol" in blocker.args[1]
        assert worker.state is WorkerState.FAILED
        assert worker.error == (blocker.args[0], blocker.args[1])

    def test_runs_on_worker_thread(self, qtbot):
        worker = AnalysisWorker("let x = 1;", "swift")
        thread = WorkerThread(worker)

        with qtbot.waitSignal(worker.signals.finished, timeout=5000):
            thread.start()

        assert thread.wait(5000)
        assert [d.rule for d in thread.result.diagnostics] == ["redundant_semicolon"]
        assert thread.error is None


class TestDebouncedAnalyzer:
    """Tests for debounced re-analysis."""

    def test_emits_after_delay(self, qtbot):
        text = ["pass"]
        analyzer = DebouncedAnalyzer(lambda: text[0], "python", delay_ms=10)

        with qtbot.waitSignal(analyzer.analyzed, timeout=2000) as blocker:
            analyzer.schedule()
            assert analyzer.is_pending

        assert blocker.args[0].spans[0].style_tag is StyleTag.KEYWORD
        assert analyzer.last_result is blocker.args[0]
        assert not analyzer.is_pending

    def test_repeated_schedule_coalesces(self, qtbot):
        text = ["x = 1"]
        analyzer = DebouncedAnalyzer(lambda: text[0], "python", delay_ms=30)
        results = []
        analyzer.analyzed.connect(results.append)

        analyzer.schedule()
        text[0] = "x = 2"
        analyzer.schedule()
        text[0] = "x = 3  "
        analyzer.schedule()

        qtbot.waitUntil(lambda: len(results) == 1, timeout=2000)
        qtbot.wait(100)

        assert len(results) == 1
        assert [d.rule for d in results[0].diagnostics] == ["trailing_whitespace"]

    def test_cancel_drops_pending_analysis(self, qtbot):
        analyzer = DebouncedAnalyzer(lambda: "pass", "python", delay_ms=10)
        results = []
        analyzer.analyzed.connect(results.append)

        analyzer.schedule()
        analyzer.cancel()
        qtbot.wait(50)

        assert results == []
        assert not analyzer.is_pending

    def test_unknown_language_emits_failed(self, qtbot):
        analyzer = DebouncedAnalyzer(lambda: "text", "cobol", delay_ms=0)

        with qtbot.waitSignal(analyzer.failed) as blocker:
            analyzer.run_now()

        assert "cobol" in blocker.args[0]
        assert analyzer.last_result is None

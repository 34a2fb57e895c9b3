"""
Background workers for non-blocking analysis.

Provides QThread-based workers and a debounced analyzer for
running highlighting and linting away from keystroke handling.

All workers use Qt signals for thread-safe communication
with the UI thread.
"""

from padlint.workers.base_worker import (
    BaseWorker,
    WorkerSignals,
    WorkerState,
    WorkerThread,
)
from padlint.workers.analysis_worker import (
    AnalysisWorker,
    DebouncedAnalyzer,
)

__all__ = [
    # Base
    'BaseWorker',
    'WorkerSignals',
    'WorkerState',
    'WorkerThread',
    # Analysis
    'AnalysisWorker',
    'DebouncedAnalyzer',
]

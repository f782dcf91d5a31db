from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from core.logging import get_logger
from history_search import HistorySearchExecutor, SearchOutcome

_worker_logger = get_logger("app.services.workers")


# -----------------------------------------------------------------------------
# History Search Task
# -----------------------------------------------------------------------------

class HistorySearchSignals(QObject):
    """Signals for HistorySearchTask."""
    completed = Signal(int, object)  # generation, SearchOutcome
    finished = Signal(int)  # generation


class HistorySearchTask(QRunnable):
    """
    Run one history search in the thread pool.

    Cancelling is logical: the search still runs to completion, only its
    outcome is not emitted.
    """

    def __init__(self, generation: int, query: str, executor: HistorySearchExecutor) -> None:
        super().__init__()
        self.generation = generation
        self.query = query
        self.executor = executor
        self.signals = HistorySearchSignals()
        self._cancelled = False
        # Ownership stays with Python; the controller drops it once settled
        self.setAutoDelete(False)

    def cancel(self) -> None:
        self._cancelled = True

    def is_cancelled(self) -> bool:
        return self._cancelled

    def run_task(self) -> SearchOutcome:
        return self.executor.search(self.query)

    @Slot()
    def run(self) -> None:
        try:
            outcome = self.run_task()
        except Exception:
            _worker_logger.exception("History search %d failed", self.generation)
            outcome = SearchOutcome.unavailable()

        if self._cancelled:
            _worker_logger.debug("History search %d cancelled, outcome dropped", self.generation)
        else:
            self._safe_emit_completed(outcome)
        self._safe_emit_finished()

    def _safe_emit_completed(self, outcome: SearchOutcome) -> None:
        """Emit the outcome, ignoring a deleted receiver."""
        try:
            self.signals.completed.emit(self.generation, outcome)
        except RuntimeError:
            # Receiver deleted (launcher closed while searching)
            _worker_logger.debug("Completed signal not emitted - receiver deleted")

    def _safe_emit_finished(self) -> None:
        try:
            self.signals.finished.emit(self.generation)
        except RuntimeError:
            _worker_logger.debug("Finished signal not emitted - receiver deleted")


def start_task(task: QRunnable, pool: Optional[QThreadPool] = None) -> None:
    thread_pool = pool or QThreadPool.globalInstance()
    thread_pool.start(task)

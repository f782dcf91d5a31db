"""
Live search controller for the launcher.

Each query change starts a new search task tagged with a generation number.
Only the outcome of the latest generation is ever published; outcomes of
superseded generations are dropped whatever order they complete in. The
previously settled data stays visible (flagged as loading) until the new
generation settles.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence

from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from app.config.settings import SearchSettings
from app.services.workers import HistorySearchTask, start_task
from core.logging import get_logger
from history_search import HistorySearchExecutor, SearchOutcome, SearchResult, StoreLocator

from .notice import NotInstalledNotice

logger = get_logger("app.features.history_search.controller")

ExecutorFactory = Callable[[SearchSettings], HistorySearchExecutor]
ErrorViewFactory = Callable[[SearchSettings], Any]


def _default_error_view(settings: SearchSettings) -> NotInstalledNotice:
    return NotInstalledNotice.for_browser(settings.browser)


class HistorySearchController(QObject):
    """
    Owns the search lifecycle for one launcher session.

    Signals:
        result_changed(SearchResult): emitted for every published state,
            including the loading state at the start of each generation
    """

    result_changed = Signal(object)

    def __init__(
        self,
        settings: SearchSettings,
        *,
        extra_roots: Sequence[Path] = (),
        pool: Optional[QThreadPool] = None,
        executor_factory: Optional[ExecutorFactory] = None,
        error_view_factory: Optional[ErrorViewFactory] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings
        self._extra_roots = list(extra_roots)
        self._pool = pool
        self._executor_factory = executor_factory or self._build_executor
        self._error_view_factory = error_view_factory or _default_error_view

        self._result = SearchResult()
        self._query: Optional[str] = None
        self._generation = 0
        # generation -> settings snapshot the search was started with
        self._requested: Dict[int, SearchSettings] = {}
        # generation -> task, kept alive until the task reports finished
        self._tasks: Dict[int, HistorySearchTask] = {}
        self._closed = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def result(self) -> SearchResult:
        return self._result

    @property
    def query(self) -> Optional[str]:
        return self._query

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self._result.is_loading

    @property
    def is_closed(self) -> bool:
        return self._closed

    def pending_generations(self) -> list:
        """Generations whose outcome has not arrived yet."""
        return sorted(self._requested)

    def update_settings(self, settings: SearchSettings) -> None:
        """Use new preferences from the next search on."""
        self._settings = settings

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def set_query(self, text: Optional[str]) -> None:
        """Search for text unless it is the query already searched."""
        if self._closed:
            return
        text = text or ""
        if text == self._query and self._generation:
            return
        self._query = text
        self._start_search()

    def refresh(self) -> None:
        """Run the current query again against a fresh snapshot."""
        if self._closed:
            return
        if self._query is None:
            self._query = ""
        self._start_search()

    def close(self) -> None:
        """End the session; nothing in flight is published afterwards."""
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        for task in self._tasks.values():
            task.cancel()
        self._requested.clear()
        logger.debug("History search session closed (%d tasks in flight)", len(self._tasks))

    def _start_search(self) -> None:
        self._generation += 1
        generation = self._generation
        settings = replace(self._settings)
        self._requested[generation] = settings

        task = HistorySearchTask(generation, self._query, self._executor_factory(settings))
        task.signals.completed.connect(self._on_search_completed)
        task.signals.finished.connect(self._on_task_finished)
        self._tasks[generation] = task

        logger.debug("Starting history search %d for %r", generation, self._query)
        self._publish(self._result.loading())
        start_task(task, self._pool)

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    @Slot(int, object)
    def _on_search_completed(self, generation: int, outcome: SearchOutcome) -> None:
        settings = self._requested.pop(generation, None)
        if self._closed or generation != self._generation or settings is None:
            logger.debug(
                "Discarding outcome of search %d (latest %d)", generation, self._generation
            )
            return

        error_view = self._error_view_factory(settings) if outcome.is_unavailable else None
        self._publish(SearchResult.settled(outcome, error_view))

    @Slot(int)
    def _on_task_finished(self, generation: int) -> None:
        self._tasks.pop(generation, None)

    def _publish(self, result: SearchResult) -> None:
        self._result = result
        self.result_changed.emit(result)

    def _build_executor(self, settings: SearchSettings) -> HistorySearchExecutor:
        locator = StoreLocator(
            settings.browser,
            settings.places_path or None,
            extra_roots=self._extra_roots,
        )
        return HistorySearchExecutor(locator)

"""Tests for the HistorySearchTask worker."""
from unittest.mock import MagicMock

from app.services.workers import HistorySearchTask, start_task
from core.enums import SearchStatus
from history_search import SearchOutcome


def _run(task):
    completed, finished = [], []
    task.signals.completed.connect(lambda g, o: completed.append((g, o)))
    task.signals.finished.connect(finished.append)
    task.run()
    return completed, finished


def test_emits_outcome_with_generation(qapp):
    executor = MagicMock()
    executor.search.return_value = SearchOutcome.empty()

    completed, finished = _run(HistorySearchTask(3, "foo", executor))

    executor.search.assert_called_once_with("foo")
    assert completed == [(3, SearchOutcome.empty())]
    assert finished == [3]


def test_unexpected_error_becomes_unavailable(qapp):
    executor = MagicMock()
    executor.search.side_effect = RuntimeError("boom")

    completed, finished = _run(HistorySearchTask(1, "x", executor))

    assert completed[0][1].status is SearchStatus.UNAVAILABLE
    assert finished == [1]


def test_cancelled_task_runs_but_does_not_emit_outcome(qapp):
    executor = MagicMock()
    executor.search.return_value = SearchOutcome.empty()
    task = HistorySearchTask(1, "x", executor)
    task.cancel()

    completed, finished = _run(task)

    assert task.is_cancelled()
    executor.search.assert_called_once()
    assert completed == []
    assert finished == [1]


def test_start_task_uses_given_pool(qapp):
    pool = MagicMock()
    task = HistorySearchTask(1, "x", MagicMock())

    start_task(task, pool)

    pool.start.assert_called_once_with(task)

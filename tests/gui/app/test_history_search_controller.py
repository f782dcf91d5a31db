"""
Tests for HistorySearchController.

Covers loading transitions, outcome mapping and stale-result suppression
when searches complete out of order.
"""
import threading
from datetime import datetime, timezone

import pytest

from app.config.settings import SearchSettings
from app.features.history_search import HistorySearchController, NotInstalledNotice
from history_search import HistoryEntry, SearchOutcome, SearchResult
from tests.fixtures.places import timeline

WAIT_MS = 5000


def _entry(place_id: int, title: str) -> HistoryEntry:
    return HistoryEntry(
        id=place_id,
        url=f"https://example.com/{place_id}",
        title=title,
        last_visited=datetime(2024, 1, place_id, tzinfo=timezone.utc),
    )


class GatedExecutor:
    """Executor whose searches block until the test releases them."""

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.gates = {query: threading.Event() for query in outcomes}
        self.started = []

    def search(self, query):
        self.started.append(query)
        if not self.gates[query].wait(WAIT_MS / 1000):
            raise TimeoutError(query)
        return self.outcomes[query]

    def release(self, query):
        self.gates[query].set()


class InstantExecutor:
    def __init__(self, outcome):
        self.outcome = outcome
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        return self.outcome


def _controller(pool, executor, settings=None):
    return HistorySearchController(
        settings or SearchSettings(),
        pool=pool,
        executor_factory=lambda _settings: executor,
    )


def _record(controller):
    published = []
    controller.result_changed.connect(published.append)
    return published


class TestLifecycle:
    """Loading state and settled results."""

    def test_initial_state(self, qtbot, search_pool):
        controller = _controller(search_pool, InstantExecutor(SearchOutcome.empty()))

        assert controller.result == SearchResult()
        assert controller.generation == 0
        assert controller.query is None
        assert not controller.is_loading

    def test_empty_query_loads_then_settles(self, qtbot, search_pool):
        entries = (_entry(2, "b"), _entry(1, "a"))
        executor = InstantExecutor(SearchOutcome.results(entries))
        controller = _controller(search_pool, executor)
        published = _record(controller)

        controller.set_query("")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert [r.is_loading for r in published] == [True, False]
        assert controller.result.data == entries
        assert controller.result.error_view is None
        assert executor.queries == [""]

    def test_none_query_is_empty_query(self, qtbot, search_pool):
        executor = InstantExecutor(SearchOutcome.empty())
        controller = _controller(search_pool, executor)

        controller.set_query(None)
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert controller.query == ""
        assert executor.queries == [""]

    def test_unchanged_query_does_not_search_again(self, qtbot, search_pool):
        executor = InstantExecutor(SearchOutcome.empty())
        controller = _controller(search_pool, executor)

        controller.set_query("abc")
        controller.set_query("abc")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert controller.generation == 1
        assert executor.queries == ["abc"]

    def test_refresh_runs_same_query_again(self, qtbot, search_pool):
        executor = InstantExecutor(SearchOutcome.empty())
        controller = _controller(search_pool, executor)
        controller.set_query("abc")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        controller.refresh()
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert controller.generation == 2
        assert executor.queries == ["abc", "abc"]

    def test_empty_outcome_has_no_error_view(self, qtbot, search_pool):
        controller = _controller(search_pool, InstantExecutor(SearchOutcome.empty()))

        controller.set_query("zzz")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert controller.result.data == ()
        assert controller.result.error_view is None

    def test_unavailable_outcome_attaches_notice(self, qtbot, search_pool):
        settings = SearchSettings(browser="tor")
        controller = _controller(search_pool, InstantExecutor(SearchOutcome.unavailable()), settings)

        controller.set_query("x")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        notice = controller.result.error_view
        assert isinstance(notice, NotInstalledNotice)
        assert notice.browser_name == "Tor Browser"
        assert controller.result.data == ()

    def test_custom_error_view_factory(self, qtbot, search_pool):
        executor = InstantExecutor(SearchOutcome.unavailable())
        controller = HistorySearchController(
            SearchSettings(),
            pool=search_pool,
            executor_factory=lambda _settings: executor,
            error_view_factory=lambda settings: f"missing {settings.browser}",
        )

        controller.set_query("x")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert controller.result.error_view == "missing firefox"

    def test_previous_data_retained_while_loading(self, qtbot, search_pool):
        first = (_entry(1, "first"),)
        executor = GatedExecutor({
            "a": SearchOutcome.results(first),
            "ab": SearchOutcome.empty(),
        })
        controller = _controller(search_pool, executor)
        executor.release("a")
        controller.set_query("a")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        controller.set_query("ab")

        assert controller.is_loading
        assert controller.result.data == first

        executor.release("ab")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)
        assert controller.result.data == ()

    def test_settings_snapshot_per_search(self, qtbot, search_pool):
        seen = []
        executor = InstantExecutor(SearchOutcome.empty())

        def factory(settings):
            seen.append(settings.browser)
            return executor

        controller = HistorySearchController(SearchSettings(), pool=search_pool, executor_factory=factory)
        controller.set_query("a")
        controller.update_settings(SearchSettings(browser="librewolf"))
        controller.set_query("b")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert seen == ["firefox", "librewolf"]


class TestStaleSuppression:
    """Superseded generations never overwrite newer results."""

    def test_slow_older_search_is_discarded(self, qtbot, qapp, search_pool):
        slow = (_entry(1, "slow"),)
        fast = (_entry(2, "fast"),)
        executor = GatedExecutor({
            "slow": SearchOutcome.results(slow),
            "fast": SearchOutcome.results(fast),
        })
        controller = _controller(search_pool, executor)
        published = _record(controller)

        controller.set_query("slow")
        controller.set_query("fast")
        assert controller.generation == 2

        executor.release("fast")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)
        assert controller.result.data == fast

        executor.release("slow")
        assert search_pool.waitForDone(WAIT_MS)
        qtbot.wait(50)
        qapp.processEvents()

        assert controller.result.data == fast
        assert all(r.data != slow for r in published)
        assert controller.pending_generations() == []

    def test_older_search_finishing_first_keeps_loading(self, qtbot, qapp, search_pool):
        executor = GatedExecutor({
            "one": SearchOutcome.results((_entry(1, "one"),)),
            "two": SearchOutcome.results((_entry(2, "two"),)),
        })
        controller = _controller(search_pool, executor)

        controller.set_query("one")
        controller.set_query("two")
        executor.release("one")
        qtbot.waitUntil(lambda: 1 not in controller.pending_generations(), timeout=WAIT_MS)

        assert controller.is_loading
        assert controller.result.data == ()

        executor.release("two")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)
        assert [e.title for e in controller.result.data] == ["two"]

    def test_close_discards_in_flight_results(self, qtbot, qapp, search_pool):
        executor = GatedExecutor({"x": SearchOutcome.results((_entry(1, "x"),))})
        controller = _controller(search_pool, executor)
        published = _record(controller)

        controller.set_query("x")
        controller.close()
        executor.release("x")
        assert search_pool.waitForDone(WAIT_MS)
        qtbot.wait(50)
        qapp.processEvents()

        assert controller.is_closed
        assert [r.is_loading for r in published] == [True]
        assert executor.started == ["x"]

    def test_closed_controller_ignores_new_queries(self, qtbot, search_pool):
        executor = InstantExecutor(SearchOutcome.empty())
        controller = _controller(search_pool, executor)
        controller.close()

        controller.set_query("x")
        controller.refresh()

        assert executor.queries == []


class TestWithRealStore:
    """Controller wired to the real executor and a places.sqlite file."""

    def test_searches_store(self, qtbot, search_pool, places_factory):
        path = places_factory(timeline(["foo baz", "foo bar baz", "xbar"]))
        controller = HistorySearchController(
            SearchSettings(places_path=str(path)), pool=search_pool
        )

        controller.set_query("foo bar")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert [e.title for e in controller.result.data] == ["foo bar baz"]

    def test_missing_store_shows_notice(self, qtbot, search_pool, tmp_path):
        controller = HistorySearchController(
            SearchSettings(places_path=str(tmp_path / "missing.sqlite")), pool=search_pool
        )

        controller.set_query("")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert isinstance(controller.result.error_view, NotInstalledNotice)

    def test_extra_roots_reach_locator(self, qtbot, search_pool, places_factory, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        root = tmp_path / "portable"
        places_factory(timeline(["portable page"]), root=root)
        controller = HistorySearchController(
            SearchSettings(), extra_roots=[root], pool=search_pool
        )

        controller.set_query("portable")
        qtbot.waitUntil(lambda: not controller.is_loading, timeout=WAIT_MS)

        assert [e.title for e in controller.result.data] == ["portable page"]

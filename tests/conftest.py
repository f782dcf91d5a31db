"""Global pytest configuration (non-GUI fixtures only)."""

import pytest

from history_search import HistorySearchExecutor, StoreLocator
from tests.fixtures.places import places_factory  # noqa: F401


@pytest.fixture
def executor_for():
    """Build an executor searching one explicit store path."""

    def _build(store_path):
        return HistorySearchExecutor(StoreLocator("firefox", store_path))

    return _build

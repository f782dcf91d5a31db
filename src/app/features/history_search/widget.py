"""
Launcher window: search box, result list and a status/notice line.

Rendering only. Search state comes from HistorySearchController; opening
entries goes through the action layer.
"""

from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from app.config.settings import SearchSettings
from core.timestamps import format_visit_time
from history_search import HistoryEntry, SearchResult

from . import actions
from .controller import HistorySearchController
from .notice import NotInstalledNotice


class HistorySearchWidget(QWidget):
    """
    Incremental history search UI bound to a controller.

    Args:
        controller: Search controller driving this view
        settings: Preferences used when opening entries
        open_entry: Callback opening a history URL (defaults to the browser)
        open_search: Callback opening a free-text search in a new tab
    """

    def __init__(
        self,
        controller: HistorySearchController,
        settings: SearchSettings,
        open_entry: Optional[Callable[[str, SearchSettings], bool]] = None,
        open_search: Optional[Callable[[str, SearchSettings], bool]] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.controller = controller
        self.settings = settings
        self._open_entry = open_entry or actions.open_history_entry
        self._open_search = open_search or actions.open_new_tab
        self._setup_ui()
        self.controller.result_changed.connect(self.render)

    def _setup_ui(self) -> None:
        self.setWindowTitle("Search History")
        layout = QVBoxLayout(self)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search browser history...")
        self.search_edit.setClearButtonEnabled(True)
        self.search_edit.textChanged.connect(self.controller.set_query)
        self.search_edit.returnPressed.connect(self._on_return_pressed)
        layout.addWidget(self.search_edit)

        self.result_list = QListWidget()
        self.result_list.setAlternatingRowColors(True)
        self.result_list.itemActivated.connect(self._on_item_activated)
        layout.addWidget(self.result_list, 1)

        self.notice_label = QLabel()
        self.notice_label.setWordWrap(True)
        self.notice_label.setVisible(False)
        layout.addWidget(self.notice_label)

        self.status_label = QLabel()
        layout.addWidget(self.status_label)

    def start(self) -> None:
        """Run the initial (unfiltered) search."""
        self.controller.set_query(self.search_edit.text())

    def render(self, result: SearchResult) -> None:
        if result.is_loading:
            # Keep showing the previous entries until the new search settles
            self.status_label.setText("Searching...")
            return

        self.result_list.clear()
        for entry in result.data:
            self.result_list.addItem(self._make_item(entry))

        if result.error_view is not None:
            self._show_notice(result.error_view)
            self.status_label.setText("")
        else:
            self.notice_label.setVisible(False)
            count = len(result.data)
            self.status_label.setText(
                f"{count} entries" if count else "No matching history entries"
            )

        if result.data:
            self.result_list.setCurrentRow(0)

    def _show_notice(self, notice) -> None:
        if isinstance(notice, NotInstalledNotice):
            self.notice_label.setText(f"<b>{notice.title}</b><br>{notice.message}")
        else:
            self.notice_label.setText(str(notice))
        self.notice_label.setVisible(True)

    def _make_item(self, entry: HistoryEntry) -> QListWidgetItem:
        item = QListWidgetItem(f"{entry.display_title}\n{entry.url}")
        item.setData(Qt.UserRole, entry)
        item.setToolTip(f"Last visited: {format_visit_time(entry.last_visited)}")
        return item

    def _on_item_activated(self, item: QListWidgetItem) -> None:
        entry = item.data(Qt.UserRole)
        if entry is not None:
            self._open_entry(entry.url, self.settings)

    def _on_return_pressed(self) -> None:
        item = self.result_list.currentItem()
        if item is not None:
            self._on_item_activated(item)
        else:
            self._open_search(self.search_edit.text(), self.settings)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.controller.close()
        super().closeEvent(event)

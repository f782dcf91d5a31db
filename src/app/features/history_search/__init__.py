"""History search feature - live launcher search over browser history.

Provides the search controller, the launcher widget and the browser actions.
"""

from .controller import HistorySearchController
from .notice import NotInstalledNotice
from .widget import HistorySearchWidget

__all__ = ["HistorySearchController", "HistorySearchWidget", "NotInstalledNotice"]

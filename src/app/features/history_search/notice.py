"""Error-view handle attached to a search result when history is unavailable."""

from __future__ import annotations

from dataclasses import dataclass

from history_search._patterns import get_browser_display_name


@dataclass(frozen=True)
class NotInstalledNotice:
    """Informational notice shown instead of results."""

    browser_name: str
    title: str
    message: str

    @classmethod
    def for_browser(cls, browser: str) -> "NotInstalledNotice":
        name = get_browser_display_name(browser)
        return cls(
            browser_name=name,
            title="Browser history not available",
            message=(
                f"Could not read the {name} history. Make sure {name} is installed "
                "and has been started at least once, or set the places.sqlite "
                "path in the preferences."
            ),
        )

"""
Page position model driven by gestures and the keyboard.
"""
import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

PageListener = Callable[[int, int], None]


class PageNavigator:
    """
    Current page / total pages with boundary-safe navigation.

    Pages are 1-based. Listeners receive (current_page, total_pages) after
    every change.
    """

    def __init__(self, total_pages: int = 0):
        self.total_pages = max(0, int(total_pages))
        self.current_page = 1
        self._listeners: List[PageListener] = []

    def subscribe(self, listener: PageListener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_total_pages(self, total: int) -> None:
        self.total_pages = max(0, int(total))
        self._set(min(self.current_page, max(1, self.total_pages)))

    def go_to(self, page: int) -> None:
        """Jump to a page, clamped to the document."""
        self._set(max(1, min(int(page), max(1, self.total_pages))))

    def advance(self) -> None:
        if self.current_page < self.total_pages:
            self._set(self.current_page + 1)

    def retreat(self) -> None:
        if self.current_page > 1:
            self._set(self.current_page - 1)

    def first(self) -> None:
        self.go_to(1)

    def last(self) -> None:
        self.go_to(self.total_pages)

    def reset(self) -> None:
        self.total_pages = 0
        self._set(1)

    def _set(self, page: int) -> None:
        if page == self.current_page:
            return
        self.current_page = page
        logger.debug("Page %d / %d", self.current_page, self.total_pages)
        for listener in list(self._listeners):
            listener(self.current_page, self.total_pages)

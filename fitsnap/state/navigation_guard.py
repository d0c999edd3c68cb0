"""Navigation guard: hold navigation while a page has unsaved data.

A page (e.g. the workout logger) registers a predicate telling whether it has
unsaved data and a callback that discards it. ``guarded_navigate`` then either
navigates straight away or parks the target and raises the warning until the
user picks "stay here" or "leave anyway". Nothing times out.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fitsnap.state.navigation import Navigator

logger = logging.getLogger(__name__)


class NavigationGuard:
    def __init__(self, navigator: Navigator) -> None:
        self._navigator = navigator
        self._unsaved_data_checker: Callable[[], bool] | None = None
        self._clear_data_function: Callable[[], None] | None = None
        self.show_navigation_warning = False
        self.pending_navigation: str | None = None

    # Registration: one of each at a time, the latest replaces the previous one.

    def set_unsaved_data_checker(self, checker: Callable[[], bool] | None) -> None:
        self._unsaved_data_checker = checker

    def set_clear_data_function(self, clear_fn: Callable[[], None] | None) -> None:
        self._clear_data_function = clear_fn

    def has_unsaved_data(self) -> bool:
        return bool(self._unsaved_data_checker()) if self._unsaved_data_checker else False

    def clear_unsaved_data(self) -> None:
        if self._clear_data_function:
            self._clear_data_function()

    def guarded_navigate(self, target: str) -> bool:
        """Navigate to target unless unsaved data is present. Returns True if navigation happened."""
        if self.has_unsaved_data():
            logger.debug("Holding navigation to %s: unsaved data", target)
            self.pending_navigation = target
            self.show_navigation_warning = True
            return False
        self._navigator.push(target)
        return True

    def stay_here(self) -> None:
        self.show_navigation_warning = False
        self.pending_navigation = None

    def leave_anyway(self) -> None:
        self.clear_unsaved_data()
        self.show_navigation_warning = False
        target, self.pending_navigation = self.pending_navigation, None
        if target:
            self._navigator.push(target)

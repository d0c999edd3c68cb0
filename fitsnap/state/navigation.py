"""Navigator seam between client state holders and whatever router drives the UI."""

from __future__ import annotations

from typing import Protocol


class Navigator(Protocol):
    def push(self, path: str) -> None: ...

    def refresh(self) -> None: ...


class RouterHistory:
    """In-memory router: a history stack of visited paths plus a refresh counter."""

    def __init__(self, initial_path: str = "/") -> None:
        self.history: list[str] = [initial_path]
        self.refreshes = 0

    @property
    def current(self) -> str:
        return self.history[-1]

    def push(self, path: str) -> None:
        self.history.append(path)

    def refresh(self) -> None:
        self.refreshes += 1

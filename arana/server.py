"""A server that runs each of its listeners on its own thread."""

from __future__ import annotations

import threading
from typing import Any


class Server:
    """Holds listeners and starts them."""

    def __init__(self) -> None:
        self.listeners: list[Any] = []

    def add_listener(self, listener: Any) -> None:
        """Register a listener exposing a listen() method."""
        self.listeners.append(listener)

    def start(self) -> list[threading.Thread]:
        """Start every listener's listen() on a daemon thread and return the threads."""
        threads = [
            threading.Thread(target=listener.listen, daemon=True)
            for listener in self.listeners
        ]
        for thread in threads:
            thread.start()
        return threads
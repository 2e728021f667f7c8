from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List


class ModelStatus(str, Enum):
    """
    Externally observable state of the semantic backend.
    """

    LOADING = "loading"
    ACTIVE = "active"
    FALLBACK = "fallback"


StatusListener = Callable[[ModelStatus], None]


class ModelStatusFeed:
    """
    Observable model status.

    Presentation layers subscribe here instead of being toggled
    directly by the loader. Listeners fire only on actual changes.
    """

    def __init__(self, initial: ModelStatus = ModelStatus.LOADING) -> None:
        self._current = initial
        self._listeners: List[StatusListener] = []

    @property
    def current(self) -> ModelStatus:
        return self._current

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """
        Register a listener. Returns a callable that unsubscribes it.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, status: ModelStatus) -> None:
        if status is self._current:
            return
        self._current = status
        logging.getLogger("linkograph.status").info("model status -> %s", status.value)
        for listener in list(self._listeners):
            try:
                listener(status)
            except Exception:
                # One broken subscriber must not stop the others.
                logging.getLogger("linkograph.status").exception(
                    "status listener %r failed", listener
                )

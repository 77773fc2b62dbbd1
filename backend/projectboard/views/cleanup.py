from typing import Callable

from projectboard.core.logging import logger


class PortalCleanupService:
    """Collects teardown callbacks of rendered portals; ``clear`` runs and forgets them."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[[], None]] = []

    def register(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def clear(self) -> None:
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()
        if callbacks:
            logger.debug("portals_cleared", count=len(callbacks))

    def __len__(self) -> int:
        return len(self._callbacks)

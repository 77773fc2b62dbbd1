"""
Plugin hooks.

Plugins register callbacks under a hook name; ``call`` collects every
non-None result in registration order. Render points take the last result so
the most recently registered plugin wins.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

from projectboard.core.logging import logger


class HookService:
    def __init__(self) -> None:
        self._hooks: dict[str, list[Callable[..., Any]]] = defaultdict(list)

    def register(self, name: str, callback: Callable[..., Any]) -> Callable[..., Any]:
        self._hooks[name].append(callback)
        logger.debug("hook_registered", hook=name, callback=getattr(callback, "__name__", repr(callback)))
        return callback

    def hook(self, name: str):
        """Decorator form of ``register``."""
        def deco(fn):
            return self.register(name, fn)
        return deco

    def call(self, name: str, *args: Any) -> list[Any]:
        results = []
        for callback in self._hooks.get(name, []):
            result = callback(*args)
            if result is not None:
                results.append(result)
        return results

    def clear(self, name: str | None = None) -> None:
        if name is None:
            self._hooks.clear()
        else:
            self._hooks.pop(name, None)


hooks = HookService()


def get_hook_service() -> HookService:
    return hooks

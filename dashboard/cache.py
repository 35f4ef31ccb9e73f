# dashboard/cache.py
"""In-process cache of rendered dashboard views, keyed by path."""

import logging
import threading
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)


class PageCache:
    """
    Holds the last rendered payload per path until it is invalidated.

    Implements the ``ViewInvalidator`` port used by ``dashboard.actions``.
    """

    def __init__(self) -> None:
        self._pages: Dict[str, Any] = {}
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def get_or_render(self, path: str, render: Callable[[], Any]) -> Any:
        with self._lock:
            if path in self._pages:
                return self._pages[path]
            generation = self._generations.get(path, 0)

        payload = render()

        # Only keep the payload if nothing invalidated the path mid-render.
        with self._lock:
            if self._generations.get(path, 0) == generation:
                self._pages[path] = payload
        return payload

    def invalidate(self, path: str) -> None:
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            dropped = self._pages.pop(path, None) is not None
        logger.debug("Invalidated %s (cached=%s)", path, dropped)

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._pages

    def clear(self) -> None:
        with self._lock:
            self._pages.clear()


page_cache = PageCache()


def get_page_cache() -> PageCache:
    return page_cache

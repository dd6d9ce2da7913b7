from __future__ import annotations

import threading
from typing import Any, Callable, Optional, Tuple

from deal_pipeline.config import get_settings


class Debouncer:
    """Trailing-edge debounce around ``fn``.

    Each call cancels the pending timer and schedules a new one, so only the
    last call's arguments run once ``wait_ms`` passes without another call.
    ``timer_factory`` takes ``(seconds, callback)`` and returns an object with
    ``start()`` and ``cancel()``; ``threading.Timer`` fits.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        wait_ms: Optional[int] = None,
        timer_factory: Callable[[float, Callable[[], None]], Any] = threading.Timer,
    ):
        self.fn = fn
        self.wait_ms = get_settings().debounce_ms if wait_ms is None else wait_ms
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Any = None
        self._pending: Optional[Tuple[tuple, dict]] = None
        # Bumped on every call; a timer only fires the call it was scheduled for.
        self._generation = 0

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            self._pending = (args, kwargs)
            self._timer = self._timer_factory(
                self.wait_ms / 1000.0, lambda: self._fire(generation)
            )
            self._timer.start()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def _take(self, generation: int) -> Optional[Tuple[tuple, dict]]:
        with self._lock:
            if generation != self._generation:
                return None
            pending, self._pending = self._pending, None
            self._timer = None
        return pending

    def _fire(self, generation: int) -> None:
        pending = self._take(generation)
        if pending is not None:
            args, kwargs = pending
            self.fn(*args, **kwargs)

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None
            self._generation += 1

    def flush(self) -> None:
        """Run the pending call now, if there is one."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            generation = self._generation
        self._fire(generation)

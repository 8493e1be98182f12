from __future__ import annotations
import math
import threading
import time
from collections import deque
from typing import Callable


class SubmissionLimiter:
    """Sliding-window counter of accepted submission attempts per client key."""

    def __init__(self, max_hits: int, window_s: float, clock: Callable[[], float] = time.monotonic):
        self.max_hits = max_hits
        self.window_s = window_s
        self.clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def _prune(self, q: deque[float], now: float) -> None:
        while q and now - q[0] >= self.window_s:
            q.popleft()

    def _sweep(self, now: float) -> None:
        # drop clients whose whole window has expired
        for key in [k for k, q in self._hits.items() if not q or now - q[-1] >= self.window_s]:
            del self._hits[key]
        self._last_sweep = now

    def hit(self, key: str) -> int:
        """
        Record one attempt for `key`.
        Returns 0 when allowed, otherwise the whole seconds until the oldest
        attempt in the window expires. Blocked attempts are not recorded.
        """
        now = self.clock()
        with self._lock:
            if now - self._last_sweep >= self.window_s:
                self._sweep(now)
            q = self._hits.get(key)
            if q is not None:
                self._prune(q, now)
                if len(q) >= self.max_hits:
                    return max(1, math.ceil(self.window_s - (now - q[0])))
            else:
                q = self._hits[key] = deque(maxlen=self.max_hits)
            q.append(now)
            return 0

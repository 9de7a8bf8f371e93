import threading
import time


class FixedWindowRateLimiter:
    """
    In-process fixed-window counter keyed by an arbitrary string (client ip + path).
    State lives in one worker; multi-worker deployments each count separately.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._windows: dict[str, tuple[int, float]] = {}

    def allow(self, key: str, limit: int, window_seconds: int = 60) -> tuple[bool, int]:
        """
        Record one hit for key. Returns (allowed, retry_after_seconds).
        """
        now = time.monotonic()
        with self._lock:
            hits, started = self._windows.get(key, (0, now))
            if now - started >= window_seconds:
                hits, started = 0, now
            if hits >= limit:
                return False, max(1, int(window_seconds - (now - started)))
            self._windows[key] = (hits + 1, started)
            return True, 0

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


auth_rate_limiter = FixedWindowRateLimiter()

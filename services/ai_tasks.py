"""
Background AI calls tied to the lifetime of a UI session.

Streamlit reruns the page script on every interaction, so a slow model call
must not block it. AICallScope runs each call on a worker thread and keeps
only the newest result per key. Once the scope is closed (the session is
gone or the user left the view) pending calls are cancelled and any result
that still arrives is dropped.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait

logger = logging.getLogger(__name__)

_MISSING = object()


class AICallScope:
    def __init__(self, max_workers: int = 2, executor: ThreadPoolExecutor | None = None):
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="ai-call"
        )
        self._lock = threading.Lock()
        self._pending: dict[str, Future] = {}
        self._results: dict[str, object] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, key: str, fn, *args, **kwargs) -> Future:
        """Start fn(*args, **kwargs) for key, superseding any pending call."""
        with self._lock:
            if self._closed:
                raise RuntimeError("AI call scope is closed")
            previous = self._pending.pop(key, None)
            if previous is not None:
                previous.cancel()
            future = self._executor.submit(fn, *args, **kwargs)
            self._pending[key] = future

        future.add_done_callback(lambda f, key=key: self._on_done(key, f))
        return future

    def _on_done(self, key: str, future: Future):
        with self._lock:
            if self._closed or self._pending.get(key) is not future:
                # Superseded or the scope is gone: nobody is waiting for this
                logger.debug("Dropping stale AI result for %s", key)
                return
            del self._pending[key]
            if future.cancelled():
                return
            error = future.exception()
            if error is not None:
                logger.error("AI call %s failed: %s", key, error)
                return
            self._results[key] = future.result()

    def wait(self, key: str, timeout: float | None = None) -> bool:
        """Block until the pending call for key finishes. False on timeout."""
        with self._lock:
            future = self._pending.get(key)
        if future is None:
            return True
        done, _ = wait([future], timeout=timeout)
        if not done:
            return False
        # The done-callback may not have run yet; settle the result now
        self._on_done(key, future)
        return True

    def is_pending(self, key: str) -> bool:
        with self._lock:
            return key in self._pending

    def result(self, key: str, default=None):
        with self._lock:
            value = self._results.get(key, _MISSING)
        return default if value is _MISSING else value

    def discard(self, key: str):
        """Forget the stored result and cancel any pending call for key."""
        with self._lock:
            self._results.pop(key, None)
            future = self._pending.pop(key, None)
        if future is not None:
            future.cancel()

    def close(self):
        with self._lock:
            if self._closed:
                return
            self._closed = True
            pending = list(self._pending.values())
            self._pending.clear()
            self._results.clear()
        for future in pending:
            future.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
        logger.debug("AI call scope closed, %d pending call(s) cancelled", len(pending))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

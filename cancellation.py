"""
Cooperative cancellation for parses, and a scheduler that keeps at most one
live parse per document.

The readers only poll ``token.is_set()``; any ``threading.Event`` works as a
token. ``ParseScheduler`` cancels the previous parse of a document when a
new one is submitted for the same key, so a slow stale parse can never
deliver its result after a newer one.
"""
from __future__ import annotations

import concurrent.futures
import logging
import threading
from typing import Dict, Optional

import reader

log = logging.getLogger(__name__)


class CancellationToken:
    """Polled flag. ``cancel()`` may be called from any thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class ParseScheduler:
    def __init__(self, max_workers: Optional[int] = None, reporter=None) -> None:
        self._pool = concurrent.futures.ThreadPoolExecutor(max_workers=max_workers)
        self._lock = threading.Lock()
        self._tokens: Dict[str, CancellationToken] = {}
        self._reporter = reporter

    def submit(self, key: str, text: str, fmt: str, timeout: Optional[float] = None):
        """
        Parse `text` as `fmt` for document `key` in the pool.

        Returns a future resolving to the ParseResult, or to None when the
        parse failed, was cancelled, timed out, or was superseded by a later
        submit for the same key.
        """
        token = CancellationToken()
        with self._lock:
            previous = self._tokens.get(key)
            if previous is not None:
                log.debug("Superseding parse of %s", key)
                previous.cancel()
            self._tokens[key] = token

        timer = None
        if timeout is not None:
            timer = threading.Timer(timeout, token.cancel)
            timer.daemon = True
            timer.start()

        def run():
            try:
                result = reader.read_text(text, fmt, token=token, reporter=self._reporter)
            finally:
                if timer is not None:
                    timer.cancel()
                with self._lock:
                    current = self._tokens.get(key) is token
                    if current:
                        del self._tokens[key]
            if not current or token.is_set():
                return None
            return result

        return self._pool.submit(run)

    def cancel(self, key: str) -> bool:
        """Cancel the in-flight parse of `key`; False when there is none."""
        with self._lock:
            token = self._tokens.pop(key, None)
        if token is None:
            return False
        token.cancel()
        return True

    def pending(self):
        with self._lock:
            return sorted(self._tokens)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            tokens = list(self._tokens.values())
            self._tokens.clear()
        for token in tokens:
            token.cancel()
        self._pool.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.shutdown()
        return False

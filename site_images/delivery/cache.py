"""Shared, time-bounded snapshot of the image override table.

One snapshot serves every asset lookup. Reads never block: the first read
starts a background fetch and reports ``OverridesLoading``, and an expired
snapshot keeps being served while a single refresh runs behind it.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from site_images.assets.overrides import OverrideRecord
from site_images.core.exceptions import FetchError

LOGGER = logging.getLogger("override-cache")

DEFAULT_TTL_SECONDS = 300.0
DEFAULT_ERROR_RETRY_SECONDS = 30.0


@dataclass(frozen=True)
class OverridesLoading:
    status: str = "loading"


@dataclass(frozen=True)
class OverridesReady:
    records: tuple[OverrideRecord, ...]
    fetched_at: float
    status: str = "ready"


@dataclass(frozen=True)
class OverridesFailed:
    error: FetchError
    failed_at: float
    status: str = "error"


OverrideState = Union[OverridesLoading, OverridesReady, OverridesFailed]

Fetcher = Callable[[], Sequence[OverrideRecord]]


class OverrideCache:
    def __init__(
        self,
        fetcher: Fetcher,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        error_retry_seconds: float = DEFAULT_ERROR_RETRY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetcher = fetcher
        self._ttl = ttl_seconds
        self._error_retry = error_retry_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._state: OverrideState = OverridesLoading()
        self._expired = False
        self._thread: Optional[threading.Thread] = None

    @property
    def state(self) -> OverrideState:
        return self._state

    def get_state(self) -> OverrideState:
        """Current snapshot, starting a background fetch if it is missing or stale."""
        with self._lock:
            state = self._state
            if self._needs_fetch(state):
                self._start_fetch_locked()
            return state

    def refresh(self) -> OverrideState:
        """Fetch now on the calling thread and swap in the result."""
        try:
            records = tuple(self._fetcher())
        except FetchError as exc:
            return self._store_failure(exc)
        except Exception as exc:
            LOGGER.exception("Unexpected error fetching image overrides")
            return self._store_failure(FetchError(f"Unexpected error: {exc}"))

        state = OverridesReady(records=records, fetched_at=self._clock())
        with self._lock:
            self._state = state
            self._expired = False
        return state

    def prime(self) -> None:
        with self._lock:
            if self._needs_fetch(self._state):
                self._start_fetch_locked()

    def invalidate(self) -> None:
        """Mark the snapshot stale; it is still served until a refresh lands."""
        with self._lock:
            self._expired = True

    def wait(self, timeout: Optional[float] = None) -> OverrideState:
        thread = self._thread
        if thread is not None:
            thread.join(timeout=timeout)
        return self._state

    def is_fetching(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def _needs_fetch(self, state: OverrideState) -> bool:
        if self.is_fetching():
            return False
        now = self._clock()
        if isinstance(state, OverridesLoading):
            return True
        if isinstance(state, OverridesReady):
            return self._expired or now - state.fetched_at >= self._ttl
        return now - state.failed_at >= self._error_retry

    def _start_fetch_locked(self) -> None:
        self._thread = threading.Thread(
            target=self.refresh, name="override-cache-refresh", daemon=True
        )
        self._thread.start()

    def _store_failure(self, error: FetchError) -> OverrideState:
        with self._lock:
            if isinstance(self._state, OverridesReady):
                # Keep the last good snapshot; retry after the error window.
                LOGGER.warning(
                    "Image override refresh failed; serving last snapshot: %s", error
                )
                self._state = OverridesReady(
                    records=self._state.records,
                    fetched_at=self._clock() - self._ttl + self._error_retry,
                )
                self._expired = False
                return self._state
            LOGGER.warning("Image override fetch failed: %s", error)
            self._state = OverridesFailed(error=error, failed_at=self._clock())
            return self._state

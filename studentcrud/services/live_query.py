from __future__ import annotations
import logging
import threading
from typing import Callable, List, Optional

from ..domain.models import Snapshot

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Snapshot], None]
ErrorCallback = Callable[[BaseException], None]


class Subscription:
    """
    Handle for one subscriber of a LiveQuery.
    Delivery stops after cancel() or after a terminal error.
    """

    def __init__(self, query: "LiveQuery", on_next: SnapshotCallback, on_error: Optional[ErrorCallback] = None):
        self._query = query
        self._on_next = on_next
        self._on_error = on_error
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        self._query._detach(self)

    def _deliver(self, snapshot: Snapshot) -> None:
        if self._active:
            self._on_next(snapshot)

    def _fail(self, exc: BaseException) -> None:
        if not self._active:
            return
        self._active = False
        if self._on_error is not None:
            self._on_error(exc)
        else:
            logger.error(f"Live query ended with an unhandled error: {exc}")


class LiveQuery:
    """
    Live read channel over a query.

    `subscribe()` delivers the current result right away and then again every
    time the owner calls `publish()`. Every subscriber gets its own callback;
    results are always complete snapshots, never deltas.
    """

    def __init__(self, fetch: Callable[[], Snapshot], lock: Optional[threading.RLock] = None):
        self._fetch = fetch
        # Shared with the owning store so publication order follows write order
        self._lock = lock or threading.RLock()
        self._subscriptions: List[Subscription] = []
        # Bumped on every publish; a nested publish (a write made from inside a
        # callback) supersedes the delivery loop of the one it interrupted
        self._generation = 0

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def subscribe(self, on_next: SnapshotCallback, on_error: Optional[ErrorCallback] = None) -> Subscription:
        sub = Subscription(self, on_next, on_error)
        with self._lock:
            self._subscriptions.append(sub)
            try:
                snapshot = self._fetch()
            except Exception as exc:
                self._subscriptions.remove(sub)
                sub._fail(exc)
                return sub
            sub._deliver(snapshot)
        return sub

    def publish(self) -> None:
        """Re-run the query and push the result to every active subscriber."""
        with self._lock:
            if not self._subscriptions:
                return
            self._generation += 1
            generation = self._generation
            subs = list(self._subscriptions)
            try:
                snapshot = self._fetch()
            except Exception as exc:
                logger.error(f"Live query failed, closing {len(subs)} subscription(s): {exc}")
                self._subscriptions.clear()
                for sub in subs:
                    sub._fail(exc)
                return
            for sub in subs:
                if self._generation != generation:
                    # A fresher snapshot already reached every active subscriber
                    break
                # A broken subscriber must not fail the write that triggered the publish
                try:
                    sub._deliver(snapshot)
                except Exception:
                    logger.exception("Subscriber callback raised during publish")

    def _detach(self, sub: Subscription) -> None:
        with self._lock:
            try:
                self._subscriptions.remove(sub)
            except ValueError:
                pass

import logging
import queue
import threading
from typing import Callable, Generic, Iterable, Iterator, TypeVar

from db.database import Database

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    def __init__(self, flow: "QueryFlow", on_emit: Callable):
        self._flow = flow
        self.on_emit = on_emit
        self.active = True

    def cancel(self):
        if self.active:
            self.active = False
            self._flow._unsubscribe(self)


class QueryFlow(Generic[T]):
    """
    Continuous result of a query.

    Every collector gets the current snapshot on subscribe and a fresh full
    snapshot after each committed change to ``tables``. The flow is only
    attached to the database while it has at least one collector.
    """

    def __init__(self, db: Database, tables: Iterable[str], query: Callable[[], T]):
        self._db = db
        self._tables = tuple(tables)
        self._query = query
        self._subscribers: list[Subscription] = []
        self._lock = threading.RLock()
        # Same object on add and remove
        self._listener = self._on_invalidated

    def first(self) -> T:
        return self._query()

    def subscribe(self, on_emit: Callable[[T], None]) -> Subscription:
        sub = Subscription(self, on_emit)
        with self._lock:
            if not self._subscribers:
                self._db.add_invalidation_listener(self._tables, self._listener)
            try:
                on_emit(self._query())
            except Exception:
                if not self._subscribers:
                    self._db.remove_invalidation_listener(self._listener)
                raise
            self._subscribers.append(sub)
        return sub

    def _unsubscribe(self, sub: Subscription):
        with self._lock:
            if sub in self._subscribers:
                self._subscribers.remove(sub)
            if not self._subscribers:
                self._db.remove_invalidation_listener(self._listener)

    def _on_invalidated(self):
        with self._lock:
            if not self._subscribers:
                return
            snapshot = self._query()
            for sub in list(self._subscribers):
                if not sub.active:
                    continue
                try:
                    sub.on_emit(snapshot)
                except Exception:
                    logger.exception("Error entregando snapshot a un suscriptor")

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def __iter__(self) -> Iterator[T]:
        # Blocks between emissions; closing the generator unsubscribes
        pending: queue.Queue = queue.Queue()
        sub = self.subscribe(pending.put)
        try:
            while True:
                yield pending.get()
        finally:
            sub.cancel()

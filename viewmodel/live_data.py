import logging
import threading
from typing import Callable, Generic, TypeVar

from db.flow import QueryFlow

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LiveData(Generic[T]):
    """Holds the latest value and pushes every change to its observers."""

    def __init__(self, initial: T):
        self._value = initial
        self._observers: list[Callable[[T], None]] = []
        self._lock = threading.RLock()

    @property
    def value(self) -> T:
        return self._value

    def observe(self, observer: Callable[[T], None]) -> Callable[[T], None]:
        with self._lock:
            self._observers.append(observer)
            observer(self._value)
        return observer

    def remove_observer(self, observer: Callable[[T], None]):
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    def has_observers(self) -> bool:
        return bool(self._observers)

    def _set_value(self, value: T):
        with self._lock:
            self._value = value
            for observer in list(self._observers):
                try:
                    observer(value)
                except Exception:
                    logger.exception("Error en observador de %s", type(self).__name__)


class MutableLiveData(LiveData[T]):
    def set_value(self, value: T):
        self._set_value(value)


class FlowLiveData(LiveData[T]):
    """Mirrors a QueryFlow until closed."""

    def __init__(self, flow: QueryFlow[T], initial: T):
        super().__init__(initial)
        self._subscription = flow.subscribe(self._set_value)

    def close(self):
        self._subscription.cancel()

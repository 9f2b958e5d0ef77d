import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

logger = logging.getLogger(__name__)


class ViewModel:
    """
    Presentation state holder with its own background worker.

    Jobs started with ``launch`` run on a single worker thread owned by the
    view-model and are cancelled when it is cleared. A job that is already
    running is not interrupted.
    """

    def __init__(self):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=type(self).__name__)
        self._closeables = []
        self._lock = threading.Lock()
        self._cleared = False

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def launch(self, fn, *args, **kwargs) -> Future:
        with self._lock:
            if self._cleared:
                raise RuntimeError(f"{type(self).__name__} ya fue liberado")
            future = self._executor.submit(fn, *args, **kwargs)
        future.add_done_callback(self._log_failure)
        return future

    def _log_failure(self, future: Future):
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Error en tarea de %s: %s", type(self).__name__, error)

    def add_closeable(self, closeable):
        with self._lock:
            self._closeables.append(closeable)
        return closeable

    def on_cleared(self):
        pass

    def clear(self):
        with self._lock:
            if self._cleared:
                return
            self._cleared = True
            closeables, self._closeables = self._closeables, []
        self._executor.shutdown(wait=False, cancel_futures=True)
        for closeable in closeables:
            closeable.close()
        self.on_cleared()
        logger.info("%s liberado", type(self).__name__)


class ViewModelFactory:
    def create(self, model_class: type) -> ViewModel:
        return model_class()


class ViewModelStore:
    """Keeps one view-model per class for a single owner."""

    def __init__(self):
        self._models: dict[type, ViewModel] = {}
        self._lock = threading.Lock()

    def get(self, model_class: type, factory: ViewModelFactory | None = None) -> ViewModel:
        with self._lock:
            model = self._models.get(model_class)
            if model is None:
                model = (factory or ViewModelFactory()).create(model_class)
                self._models[model_class] = model
            return model

    def clear(self):
        with self._lock:
            models, self._models = list(self._models.values()), {}
        for model in models:
            model.clear()

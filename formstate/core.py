import logging
from typing import Callable, Any, List, Optional

from formstate.exceptions import global_error_handler

logger = logging.getLogger(__name__)

# Global state for the signal layer
_batch_updates_active = False
_batch_updates_queue: List[Callable[[], None]] = []
_global_error_handler = global_error_handler


def set_global_error_handler(handler: Optional[Callable[..., None]]):
    """Sets a global error handler for exceptions raised by subscribers."""
    global _global_error_handler
    _global_error_handler = handler


def get_global_error_handler():
    return _global_error_handler


def batch_updates(fn):
    """
    Runs ``fn`` and defers subscriber notification until the outermost batch
    returns. Values are written immediately, so reads inside the batch see
    the latest state. Each subscriber is notified at most once per batch.
    """
    global _batch_updates_active
    prev_state = _batch_updates_active
    _batch_updates_active = True
    try:
        return fn()
    finally:
        _batch_updates_active = prev_state
        if not _batch_updates_active:
            _flush()


def _flush():
    while _batch_updates_queue:
        queue_to_process = list(_batch_updates_queue)
        _batch_updates_queue.clear()
        seen = set()
        for callback in queue_to_process:
            if id(callback) in seen:
                continue
            seen.add(id(callback))
            _run_callback(callback)


def _run_callback(callback):
    try:
        callback()
    except Exception as e:
        _handle_error(e, f"Error notifying subscriber: {callback!r}")


def _handle_error(error, message):
    if _global_error_handler:
        _global_error_handler(error, message)
    else:
        logger.error("%s: %s", message, error)


class Signal:
    """
    A single observable value.

    Reading is done by calling the signal, writing with ``set``. Subscribers
    are plain callables taking no arguments; they run after every change
    (or once at the end of the enclosing ``batch_updates``).
    """
    __slots__ = ('_subscribers', '_value', '__weakref__')

    def __init__(self, initial_value: Any):
        self._subscribers: List[Callable[[], None]] = []
        self._value = initial_value

    def __call__(self) -> Any:
        return self._value

    get = __call__

    def peek(self):
        return self._value

    def set(self, new_value: Any) -> None:
        if self._value == new_value:
            return
        self._value = new_value
        self._notify_change()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Registers ``callback`` and returns a function that removes it."""
        if not callable(callback):
            raise TypeError(f"subscribe: expected callable, got {type(callback).__name__}")
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify_change(self):
        subscribers_snapshot = list(self._subscribers)
        if _batch_updates_active:
            _batch_updates_queue.extend(subscribers_snapshot)
            return
        for subscriber in subscribers_snapshot:
            _run_callback(subscriber)

    def __repr__(self):
        return f"Signal({self._value!r})"


def create_signal(initial_value: Any):
    signal = Signal(initial_value)
    return signal, signal.set

from loguru import logger
from typing import Callable, List


class Signal:
    """
    A simple observer pattern implementation (Synchronous).
    Allows subscribers to connect to this signal and receive notifications.
    Equivalent to Qt's Signal or C#'s event.

    By default an error raised by one subscriber is logged and the remaining
    subscribers still run. A strict signal lets the error propagate to the
    caller of emit() instead.
    """
    def __init__(self, name: str = "Signal", strict: bool = False):
        self.name = name
        self.strict = strict
        self._subscribers: List[Callable] = []

    def connect(self, callback: Callable):
        """Connect a callback function to this signal."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def disconnect(self, callback: Callable):
        """Disconnect a callback function from this signal."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def clear(self):
        """Disconnect every subscriber."""
        self._subscribers.clear()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit(self, *args, **kwargs):
        """Broadcast arguments to all subscribers synchronously."""
        # Snapshot: subscribers may disconnect while being notified
        for sub in list(self._subscribers):
            if self.strict:
                sub(*args, **kwargs)
                continue
            try:
                sub(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' error in subscriber '{sub}': {e}")

    def __repr__(self):
        return f"Signal({self.name!r}, subscribers={len(self._subscribers)})"

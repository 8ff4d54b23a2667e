"""
Subscription Registry

In-memory observer list shared by the live stores. Listeners receive the
current state once on subscription and again after every store mutation.
"""

import itertools
from typing import Callable, Dict, Generic, TypeVar

from app.platform.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]
Unsubscribe = Callable[[], None]


class SubscriptionRegistry(Generic[T]):
    """
    Holds listeners for one store.

    `snapshot` is called once per delivery round and must not evict anything,
    so a state that was just recorded is always what listeners see.
    A failing listener is logged and skipped; it never stops delivery to the
    others and is not removed automatically.
    """

    def __init__(self, snapshot: Callable[[], T], name: str):
        self._snapshot = snapshot
        self.name = name
        # token -> listener; the same callable may be registered twice
        self._listeners: Dict[int, Listener] = {}
        self._tokens = itertools.count()

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """
        Register a listener and synchronously hand it the current state.

        Returns:
            Idempotent callable that removes the listener.
        """
        token = next(self._tokens)
        self._listeners[token] = listener

        def unsubscribe() -> None:
            if self._listeners.pop(token, None) is not None:
                logger.debug(f"{self.name}: listener {token} unsubscribed ({len(self._listeners)} left)")

        try:
            listener(self._snapshot())
        except Exception:
            unsubscribe()
            raise

        logger.debug(f"{self.name}: listener {token} subscribed ({len(self._listeners)} total)")
        return unsubscribe

    def notify(self) -> int:
        """
        Deliver one snapshot to every listener registered right now.

        Returns:
            Number of successful deliveries
        """
        if not self._listeners:
            return 0

        state = self._snapshot()
        delivered = 0
        for token, listener in list(self._listeners.items()):
            # removed by an earlier listener in this same round
            if token not in self._listeners:
                continue
            try:
                listener(state)
                delivered += 1
            except Exception as e:
                logger.warning(f"{self.name}: listener {token} failed: {e}")

        return delivered

    def clear(self) -> None:
        self._listeners.clear()

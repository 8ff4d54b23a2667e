"""
Event Store

Ephemeral, in-memory log of scan events and the installation state derived
from it. Nothing is persisted; a restart or a reset starts from an empty log.
"""
import secrets
import string
from typing import List

from app.features.events.schemas.event import InstallationState, ScanEvent, ScanEventIn
from app.features.events.services.aggregator import aggregate_events
from app.platform.clock import Clock
from app.platform.expiry import sweep_expired
from app.platform.logger import get_logger
from app.platform.pubsub import Listener, SubscriptionRegistry, Unsubscribe

logger = get_logger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_event_id(now_ms: int) -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{now_ms}-{suffix}"


class EventStore:
    """
    Append-only scan event log plus aggregate statistics.

    Two time windows apply:
    - `active_window_seconds`: an event counts towards `active_users`
    - `ttl_seconds`: an event is kept at all (languages, hour and motion
      averages are computed over every kept event)

    Expired events are swept lazily on `record()` and on non-skipping
    `snapshot()` calls, never by a timer.
    """

    def __init__(self, clock: Clock, ttl_seconds: float = 300.0, active_window_seconds: float = 120.0):
        self.clock = clock
        self.ttl_seconds = ttl_seconds
        self.active_window_seconds = active_window_seconds
        self._events: List[ScanEvent] = []
        self._state = self._aggregate(clock.now_ms())
        self.subscriptions: SubscriptionRegistry[InstallationState] = SubscriptionRegistry(
            lambda: self.snapshot(skip_expiry=True), name="events"
        )

    def __len__(self) -> int:
        return len(self._events)

    def _aggregate(self, now_ms: int) -> InstallationState:
        return aggregate_events(
            self._events,
            now_ms=now_ms,
            active_window_seconds=self.active_window_seconds,
            fallback_hour=self.clock.current_hour(),
        )

    def _sweep(self, now_ms: int) -> int:
        self._events, evicted = sweep_expired(self._events, now_ms, self.ttl_seconds, lambda e: e.timestamp)
        if evicted:
            logger.info(f"Evicted {evicted} expired events, {len(self._events)} remaining")
        return evicted

    def record(self, event_in: ScanEventIn) -> ScanEvent:
        """Append one event, recompute the aggregates and notify listeners."""
        now = self.clock.now_ms()
        self._sweep(now)

        event = ScanEvent(
            id=generate_event_id(now),
            language=event_in.language,
            hour=event_in.hour,
            device_type=event_in.device_type,
            motion=event_in.motion,
            timestamp=now,
        )
        self._events.append(event)
        self._state = self._aggregate(now)

        self.subscriptions.notify()
        return event

    def snapshot(self, skip_expiry: bool = False) -> InstallationState:
        """
        Current aggregate state.

        Args:
            skip_expiry: when True nothing is evicted, so an event recorded a
                moment ago is always part of what listeners receive

        Returns:
            Immutable InstallationState; active users are always counted
            against the current time.
        """
        now = self.clock.now_ms()
        if not skip_expiry:
            self._sweep(now)
        self._state = self._aggregate(now)
        return self._state

    def reset(self) -> InstallationState:
        """Drop every event and return to the baseline state, then notify."""
        cleared = len(self._events)
        self._events = []
        self._state = self._aggregate(self.clock.now_ms())
        logger.info(f"Event store reset ({cleared} events cleared)")

        self.subscriptions.notify()
        return self._state

    def subscribe(self, listener: Listener) -> Unsubscribe:
        return self.subscriptions.subscribe(listener)

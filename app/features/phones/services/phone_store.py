"""
Phone Store

Latest-known state per connected phone, keyed by the connection id each phone
generates for its session. In memory only.
"""
from typing import Dict, List, Optional, Tuple

from app.features.phones.schemas.phone import PhoneRecord, PhoneSnapshot, PhoneUpdate
from app.platform.clock import Clock
from app.platform.expiry import count_within, sweep_expired
from app.platform.logger import get_logger
from app.platform.pubsub import Listener, SubscriptionRegistry, Unsubscribe

logger = get_logger(__name__)


def short_id(phone_id: str) -> str:
    return phone_id[-12:]


class PhoneStore:
    """
    Mapping of phone id -> PhoneRecord, kept in insertion order.

    Records are immutable models, so `get()` and `list()` hand out values
    callers cannot use to change what the store holds. Phones that have not
    reported for `ttl_seconds` are swept lazily on upsert and on reads.
    """

    def __init__(self, clock: Clock, ttl_seconds: float = 300.0, active_window_seconds: float = 120.0):
        self.clock = clock
        self.ttl_seconds = ttl_seconds
        self.active_window_seconds = active_window_seconds
        self._phones: Dict[str, PhoneRecord] = {}
        self.subscriptions: SubscriptionRegistry[PhoneSnapshot] = SubscriptionRegistry(
            lambda: self.snapshot(skip_expiry=True), name="phones"
        )

    def __len__(self) -> int:
        return len(self._phones)

    def __contains__(self, phone_id: str) -> bool:
        return self.get(phone_id) is not None

    def _sweep(self, now_ms: int) -> int:
        survivors, evicted = sweep_expired(
            self._phones.values(), now_ms, self.ttl_seconds, lambda p: p.last_update
        )
        if evicted:
            self._phones = {phone.id: phone for phone in survivors}
            logger.info(f"Evicted {evicted} stale phones, {len(self._phones)} remaining")
        return evicted

    def upsert(self, phone_id: str, update: PhoneUpdate) -> Tuple[PhoneRecord, bool]:
        """
        Insert or shallow-merge a phone. Returns the stored record and whether
        it was inserted.

        Only fields present in `update` replace stored values. `first_seen` is
        set on insert and preserved afterwards; `last_update` always moves to now.
        A phone swept as stale is inserted again with a new `first_seen`.
        """
        now = self.clock.now_ms()
        self._sweep(now)

        changes = {name: getattr(update, name) for name in update.model_fields_set}
        existing = self._phones.get(phone_id)
        if existing is None:
            record = PhoneRecord(id=phone_id, first_seen=now, last_update=now, **changes)
        else:
            record = existing.model_copy(update={**changes, "last_update": now})
        self._phones[phone_id] = record

        self.subscriptions.notify()
        return record, existing is None

    def get(self, phone_id: str) -> Optional[PhoneRecord]:
        self._sweep(self.clock.now_ms())
        return self._phones.get(phone_id)

    def list(self) -> List[PhoneRecord]:
        self._sweep(self.clock.now_ms())
        return list(self._phones.values())

    def active_count(self) -> int:
        """Phones that reported within the active window."""
        return count_within(
            self._phones.values(), self.clock.now_ms(), self.active_window_seconds, lambda p: p.last_update
        )

    def snapshot(self, skip_expiry: bool = False) -> PhoneSnapshot:
        if not skip_expiry:
            self._sweep(self.clock.now_ms())
        phones = tuple(self._phones.values())
        return PhoneSnapshot(phones=phones, active_count=self.active_count(), total=len(phones))

    def remove(self, phone_id: str) -> bool:
        if self._phones.pop(phone_id, None) is None:
            return False
        logger.info(f"Phone {short_id(phone_id)} removed, {len(self._phones)} remaining")
        self.subscriptions.notify()
        return True

    def clear(self) -> int:
        cleared = len(self._phones)
        self._phones.clear()
        logger.info(f"Phone store cleared ({cleared} phones)")
        self.subscriptions.notify()
        return cleared

    def subscribe(self, listener: Listener) -> Unsubscribe:
        return self.subscriptions.subscribe(listener)

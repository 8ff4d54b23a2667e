from typing import Sequence

from app.features.events.schemas.event import InstallationState, ScanEvent
from app.platform.expiry import count_within


def aggregate_events(
    events: Sequence[ScanEvent],
    now_ms: int,
    active_window_seconds: float,
    fallback_hour: int,
) -> InstallationState:
    """
    Recompute every aggregate field from scratch.

    Means are taken over the full sequence each time, never adjusted
    incrementally. With no events the hour falls back to `fallback_hour`
    (the current wall-clock hour) and motion to 0.
    """
    hours = [event.hour for event in events]
    motions = [event.motion for event in events if event.motion is not None]

    return InstallationState(
        active_users=count_within(events, now_ms, active_window_seconds, lambda e: e.timestamp),
        languages=tuple(dict.fromkeys(event.language for event in events)),
        average_hour=sum(hours) / len(hours) if hours else float(fallback_hour),
        average_motion=sum(motions) / len(motions) if motions else 0.0,
        motion_count=len(motions),
        total_events=len(events),
    )
